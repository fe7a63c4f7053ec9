# src/conformance/cli.py
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError
from tqdm.auto import tqdm

from conformance.controllers.audit_controller import AuditController
from conformance.controllers.report_controller import ReportController
from conformance.dom.builder import DOMBuilder
from conformance.errors import ConformanceError
from conformance.managers.config_manager import config_manager
from conformance.model import AuditConfig, Severity
from conformance.utils.configure_logging import configure_logger

logger = logging.getLogger(__name__)

_SEVERITY_MARKS = {Severity.ERROR: "❌", Severity.WARNING: "⚠️", Severity.INFO: "ℹ️"}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="conformance",
        description="Check an HTML document against WCAG/ARIA conformance rules.",
    )
    parser.add_argument("file", type=str, help="HTML file to audit.")
    parser.add_argument("--workers", type=int, default=None, help="Run checks in parallel over N workers.")
    parser.add_argument("--executor", choices=["process", "thread"], default=None, help="Worker pool type.")
    parser.add_argument("--large-text-px", type=float, default=None, help="Font size (px) from which text counts as large.")
    parser.add_argument("--warnings-as-errors", action="store_true", help="Promote warnings to errors.")
    parser.add_argument("--disable", action="append", default=[], metavar="CHECK", help="Skip a check (repeatable).")
    parser.add_argument("--export", type=str, default=None, help="Write the report to .csv, .json or .xlsx.")
    parser.add_argument("--quiet", action="store_true", help="Only print the summary.")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (overrides settings.json).")
    return parser


def handle_audit(args: List[str]) -> int:
    """
    Handler for the audit command.

    Returns:
        0 when no errors were found, 1 when the report holds errors,
        2 when the input could not be read or the arguments were invalid.
    """
    parser = _build_parser()
    try:
        parsed = parser.parse_args(args)
    except SystemExit as e:
        return 0 if e.code == 0 else 2

    configure_logger(
        parsed.log_level or config_manager.get_nested("debug.level", "WARNING"),
        module_specific_levels=config_manager.get_nested("debug.modules", {}),
        silenced_loggers=config_manager.get_nested("debug.silenced", {}),
    )

    # Command-line options override settings.json for this run only.
    overrides = {}
    if parsed.workers is not None:
        overrides["workers"] = parsed.workers
    if parsed.executor:
        overrides["executor"] = parsed.executor
    if parsed.large_text_px is not None:
        overrides["large_text_font_px"] = parsed.large_text_px
    if parsed.warnings_as_errors:
        overrides["treat_warnings_as_errors"] = True
    if parsed.disable:
        overrides["disabled_checks"] = parsed.disable
    try:
        config = AuditConfig.model_validate({**config_manager.get_audit_config().model_dump(), **overrides})
    except ValidationError as e:
        print(f"❌ Invalid option: {e}")
        return 2

    path = Path(parsed.file)
    try:
        html = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"❌ Could not read {path}: {e}")
        return 2

    root = DOMBuilder().parse_doc(html)
    controller = AuditController(config)

    total = len(controller.check_names())
    with tqdm(total=total, desc="Checks", unit="check", disable=parsed.quiet or total == 0) as bar:
        def progress(done: int, _total: int) -> None:
            bar.update(done - bar.n)

        report = controller.run_audit(root, progress_callback=progress)

    reporter = ReportController(report)
    if not parsed.quiet:
        for v in report.violations:
            location = "/".join(str(i) for i in v.path) or "/"
            print(f"{_SEVERITY_MARKS[v.severity]} {v.rule.value:<34} <{v.tag}> @ {location}: {v.message}")

    summary = reporter.summary()
    print(
        f"\n{path.name}: {summary.error_count} error(s), "
        f"{summary.warning_count} warning(s), {summary.info_count} notice(s)"
    )

    if parsed.export:
        try:
            out = reporter.export(Path(parsed.export))
            print(f"✅ Report exported to {out}")
        except ConformanceError as e:
            print(f"❌ {e}")
            return 2

    return 1 if summary.error_count else 0


def main(argv: Optional[List[str]] = None) -> int:
    return handle_audit(list(sys.argv[1:] if argv is None else argv))


if __name__ == "__main__":
    sys.exit(main())
