import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

import pandas as pd

from conformance.errors import UnsupportedExportFormatError
from conformance.model import Report, Severity, Summary, Violation

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ["Severity", "Rule", "Category", "Tag", "Path", "Message"]


def aggregate(violation_lists: Iterable[Iterable[Violation]], treat_warnings_as_errors: bool = False) -> Report:
    """
    Merges the outputs of all checks into one Report.

    Exact duplicates (same rule id and location path) are kept once; the
    result is sorted by severity (errors first), rule id, then path, so
    the order in which checks finished does not matter.
    """
    seen = set()
    merged: List[Violation] = []

    for violations in violation_lists:
        for violation in violations:
            key = (violation.rule, violation.path)
            if key in seen:
                continue
            seen.add(key)
            if treat_warnings_as_errors and violation.severity is Severity.WARNING:
                violation = violation.model_copy(update={"severity": Severity.ERROR})
            merged.append(violation)

    merged.sort(key=Violation.sort_key)
    return Report(violations=tuple(merged))


def summarize(report: Report) -> Summary:
    counts = {severity: 0 for severity in Severity}
    for violation in report.violations:
        counts[violation.severity] += 1
    return Summary(
        error_count=counts[Severity.ERROR],
        warning_count=counts[Severity.WARNING],
        info_count=counts[Severity.INFO],
    )


class ReportController:
    """
    Presents a finished Report to the outer layer: summaries, a flat
    DataFrame and file exports.
    """

    def __init__(self, report: Report):
        self.report = report

    def summary(self) -> Summary:
        return summarize(self.report)

    def counts_by_rule(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for violation in self.report.violations:
            counts[violation.rule.value] = counts.get(violation.rule.value, 0) + 1
        return counts

    def to_rows(self) -> List[Dict[str, Any]]:
        return [
            {
                "Severity": v.severity.value,
                "Rule": v.rule.value,
                "Category": v.category.value,
                "Tag": v.tag,
                "Path": "/".join(str(i) for i in v.path) or "/",
                "Message": v.message,
            }
            for v in self.report.violations
        ]

    def to_dataframe(self) -> pd.DataFrame:
        """One row per violation, in report order."""
        return pd.DataFrame(self.to_rows(), columns=EXPORT_COLUMNS)

    def export(self, path: Path) -> Path:
        """
        Writes the report to `path`; the suffix picks the format
        (.csv, .json or .xlsx).
        """
        path = Path(path)
        suffix = path.suffix.lower()
        path.parent.mkdir(parents=True, exist_ok=True)

        if suffix == ".csv":
            self.to_dataframe().to_csv(path, index=False)
        elif suffix == ".xlsx":
            self.to_dataframe().to_excel(path, index=False, sheet_name="violations")
        elif suffix == ".json":
            payload = {
                "summary": self.summary().model_dump(),
                "violations": self.report.model_dump(mode="json")["violations"],
            }
            path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        else:
            raise UnsupportedExportFormatError(f"Cannot export report to '{suffix or path.name}'")

        logger.info("Exported %d violation(s) to %s", len(self.report.violations), path)
        return path
