# src/conformance/dom/engine.py
import logging
from typing import List

from .models import DocumentTree
from .registry import CheckRegistry
from ..model import AuditConfig, Violation

logger = logging.getLogger(__name__)


class RuleEngine:
    """
    Dispatches registered checks against a DocumentTree.

    Every check is a pure function of the tree and the configuration, so
    checks can run in any order or in parallel; merging happens elsewhere.
    """

    def __init__(self):
        """Initializes the engine by discovering and loading all available checks."""
        CheckRegistry.discover()

    def enabled_checks(self, config: AuditConfig) -> List[str]:
        """Registered check names minus the ones disabled in the configuration."""
        names = CheckRegistry.get_check_names()
        for disabled in config.disabled_checks:
            if disabled not in names:
                logger.warning("Ignoring unknown check '%s' in disabled_checks.", disabled)
        return [name for name in names if name not in set(config.disabled_checks)]

    def run_check(self, tree: DocumentTree, name: str, config: AuditConfig) -> List[Violation]:
        """
        Runs a single check by name.

        Raises:
            KeyError: when no check with that name is registered.
        """
        defn = CheckRegistry.get_check(name)
        if defn is None:
            raise KeyError(f"Unknown check '{name}'")
        try:
            violations = defn.evaluate(tree, config)
        except Exception:
            logger.exception("Check '%s' failed.", name)
            raise
        logger.debug("Check '%s' produced %d violation(s).", name, len(violations))
        return violations

    def run_audit(self, tree: DocumentTree, config: AuditConfig) -> List[List[Violation]]:
        """Runs every enabled check serially; one violation list per check."""
        return [self.run_check(tree, name, config) for name in self.enabled_checks(config)]
