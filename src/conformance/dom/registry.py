# src/conformance/dom/registry.py
import importlib
import logging
import pkgutil
from typing import Dict, List, Optional

from .core import CheckDefinition

logger = logging.getLogger(__name__)


class CheckRegistry:
    """
    Central dispatch table of checks.

    Dynamically discovers CheckDefinition modules from the
    'conformance.checks' package. New checks are added by dropping a module
    with a `DEFINITION` into that package; nothing else changes.
    """

    _checks: Dict[str, CheckDefinition] = {}
    _loaded: bool = False

    @classmethod
    def discover(cls) -> None:
        """
        Discovers and registers all check definitions found in the 'conformance.checks' package.

        Modules are scanned for a `DEFINITION` attribute (instance of
        `CheckDefinition`); its name becomes the dispatch key.
        """
        if cls._loaded:
            return

        try:
            import conformance.checks as checks_pkg

            for _, name, _ in pkgutil.iter_modules(checks_pkg.__path__):
                full_name = f"conformance.checks.{name}"
                try:
                    module = importlib.import_module(full_name)
                except Exception as e:
                    logger.error(f"Error loading check module {name}: {e}")
                    continue

                defn = getattr(module, "DEFINITION", None)
                if not isinstance(defn, CheckDefinition):
                    continue
                if defn.name in cls._checks:
                    logger.warning(f"Duplicate check name '{defn.name}' in {full_name}; keeping the first.")
                    continue

                cls._checks[defn.name] = defn
                logger.debug(f"Check loaded: {defn.name} ({len(defn.rules)} rules)")

            cls._loaded = True
        except ImportError as e:
            logger.error(f"Could not find checks package: {e}")

    @classmethod
    def get_check(cls, name: str) -> Optional[CheckDefinition]:
        """Retrieves a check definition by name."""
        return cls._checks.get(name)

    @classmethod
    def get_check_names(cls) -> List[str]:
        """Returns all registered check names in a stable (sorted) order."""
        return sorted(cls._checks)
