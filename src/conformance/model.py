from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        """Higher ranks sort first in a report."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {Severity.ERROR: 2, Severity.WARNING: 1, Severity.INFO: 0}


class Category(str, Enum):
    """Failure taxonomy; every violation belongs to exactly one category."""
    MALFORMED_ATTRIBUTE = "malformed_attribute"
    UNRESOLVED_REFERENCE = "unresolved_reference"
    UNKNOWN_ROLE = "unknown_role"
    MISSING_ACCESSIBLE_NAME = "missing_accessible_name"
    STRUCTURAL = "structural"
    CONTRAST = "contrast"
    KEYBOARD = "keyboard"


class RuleId(str, Enum):
    COLOR_CONTRAST = "color-contrast"
    POSITIVE_TABINDEX = "positive-tabindex"
    CUSTOM_ROLE_WITHOUT_FOCUSABILITY = "custom-role-without-focusability"
    HEADING_MISSING_H1 = "heading-missing-h1"
    HEADING_MULTIPLE_H1 = "heading-multiple-h1"
    HEADING_SKIPPED_LEVEL = "heading-skipped-level"
    UNKNOWN_ROLE = "unknown-role"
    REDUNDANT_ROLE = "redundant-role"
    DANGLING_ARIA_REFERENCE = "dangling-aria-reference"
    DUPLICATE_ID = "duplicate-id"
    MISSING_ACCESSIBLE_NAME = "missing-accessible-name"
    INVALID_ARIA_LIVE = "invalid-aria-live"
    INVALID_ARIA_STATE = "invalid-aria-state"


# Default (severity, category) for every rule id.
RULE_CATALOG: Dict[RuleId, Tuple[Severity, Category]] = {
    RuleId.COLOR_CONTRAST: (Severity.ERROR, Category.CONTRAST),
    RuleId.POSITIVE_TABINDEX: (Severity.WARNING, Category.KEYBOARD),
    RuleId.CUSTOM_ROLE_WITHOUT_FOCUSABILITY: (Severity.ERROR, Category.KEYBOARD),
    RuleId.HEADING_MISSING_H1: (Severity.ERROR, Category.STRUCTURAL),
    RuleId.HEADING_MULTIPLE_H1: (Severity.ERROR, Category.STRUCTURAL),
    RuleId.HEADING_SKIPPED_LEVEL: (Severity.ERROR, Category.STRUCTURAL),
    RuleId.UNKNOWN_ROLE: (Severity.ERROR, Category.UNKNOWN_ROLE),
    RuleId.REDUNDANT_ROLE: (Severity.INFO, Category.UNKNOWN_ROLE),
    RuleId.DANGLING_ARIA_REFERENCE: (Severity.ERROR, Category.UNRESOLVED_REFERENCE),
    RuleId.DUPLICATE_ID: (Severity.WARNING, Category.UNRESOLVED_REFERENCE),
    RuleId.MISSING_ACCESSIBLE_NAME: (Severity.ERROR, Category.MISSING_ACCESSIBLE_NAME),
    RuleId.INVALID_ARIA_LIVE: (Severity.ERROR, Category.MALFORMED_ATTRIBUTE),
    RuleId.INVALID_ARIA_STATE: (Severity.ERROR, Category.MALFORMED_ATTRIBUTE),
}


class Violation(BaseModel):
    """
    A single finding of a check.

    `node` is the arena handle of the offending node, `path` the child
    indices leading to it from the root; `DocumentTree.resolve(path)`
    returns `node` again.
    """
    model_config = ConfigDict(frozen=True)

    rule: RuleId
    severity: Severity
    category: Category
    node: int
    tag: str
    message: str
    path: Tuple[int, ...] = ()

    @classmethod
    def at(cls, tree, handle: int, rule: RuleId, message: str,
           severity: Optional[Severity] = None) -> "Violation":
        """Builds a violation for a node of `tree`, filling catalog defaults."""
        default_severity, category = RULE_CATALOG[rule]
        return cls(
            rule=rule,
            severity=severity or default_severity,
            category=category,
            node=handle,
            tag=tree.node(handle).tag,
            message=message,
            path=tree.path(handle),
        )

    def sort_key(self) -> Tuple[int, str, Tuple[int, ...]]:
        return -self.severity.rank, self.rule.value, self.path


class Report(BaseModel):
    """Immutable, sorted outcome of one analysis run."""
    model_config = ConfigDict(frozen=True)

    violations: Tuple[Violation, ...] = ()

    @property
    def errors(self) -> List[Violation]:
        return [v for v in self.violations if v.severity is Severity.ERROR]

    @property
    def warnings(self) -> List[Violation]:
        return [v for v in self.violations if v.severity is Severity.WARNING]

    def by_rule(self, rule: RuleId) -> List[Violation]:
        return [v for v in self.violations if v.rule is rule]


class Summary(BaseModel):
    model_config = ConfigDict(frozen=True)

    error_count: int = 0
    warning_count: int = 0
    info_count: int = 0

    @property
    def total(self) -> int:
        return self.error_count + self.warning_count + self.info_count


class AuditConfig(BaseModel):
    """Settings of one audit run (the `audit` section of settings.json)."""
    large_text_font_px: float = Field(default=24.0, gt=0)
    large_bold_text_font_px: float = Field(default=18.66, gt=0)
    treat_warnings_as_errors: bool = False

    # Execution
    workers: int = Field(default=1, ge=1)
    executor: str = "process"  # 'process' or 'thread'
    disabled_checks: List[str] = Field(default_factory=list)

    @field_validator('executor', mode='before')
    @classmethod
    def validate_executor(cls, v: str) -> str:
        value = str(v).strip().lower()
        if value not in ("process", "thread"):
            raise ValueError(f"executor must be 'process' or 'thread', got '{v}'")
        return value
