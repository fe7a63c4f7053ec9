import logging
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from functools import partial
from typing import Callable, List, Optional

from conformance.controllers.report_controller import aggregate
from conformance.dom.core import Node
from conformance.dom.engine import RuleEngine
from conformance.dom.models import DocumentTree
from conformance.errors import InvalidInputError
from conformance.managers.config_manager import config_manager
from conformance.model import AuditConfig, Report, Violation

logger = logging.getLogger(__name__)


def _worker_run_check(name: str, root: Node, config: AuditConfig) -> List[Violation]:
    """
    Worker function running one check in a separate task.
    The arena is rebuilt from the immutable root so nothing is shared.
    """
    engine = RuleEngine()
    tree = DocumentTree(root)
    return engine.run_check(tree, name, config)


class AuditController:
    """
    Orchestrates an analysis run: fans the enabled checks out (serially or
    over an executor) and joins their results into a single Report.
    """

    def __init__(self, config: Optional[AuditConfig] = None):
        self.config = config or config_manager.get_audit_config()
        self.engine = RuleEngine()

    def check_names(self) -> List[str]:
        return self.engine.enabled_checks(self.config)

    def run_audit(
            self,
            root: Optional[Node],
            progress_callback: Optional[Callable[[int, int], None]] = None
    ) -> Report:
        """
        Runs all enabled checks against the tree rooted at `root`.

        Raises:
            InvalidInputError: when `root` is None.
        """
        if root is None:
            raise InvalidInputError("Cannot audit: no document root supplied.")

        names = self.check_names()
        total = len(names)
        results: List[List[Violation]] = []

        if self.config.workers <= 1 or total <= 1:
            tree = DocumentTree(root)
            for i, name in enumerate(names):
                results.append(self.engine.run_check(tree, name, self.config))
                if progress_callback:
                    progress_callback(i + 1, total)
        else:
            executor_cls = ProcessPoolExecutor if self.config.executor == "process" else ThreadPoolExecutor
            workers = min(self.config.workers, total)
            logger.debug("Dispatching %d checks over %d %s workers.", total, workers, self.config.executor)

            with executor_cls(max_workers=workers) as executor:
                func = partial(_worker_run_check, root=root, config=self.config)
                for i, violations in enumerate(executor.map(func, names)):
                    results.append(violations)
                    if progress_callback:
                        progress_callback(i + 1, total)

        report = aggregate(results, treat_warnings_as_errors=self.config.treat_warnings_as_errors)
        logger.info("Audit finished: %d check(s), %d violation(s).", total, len(report.violations))
        return report
