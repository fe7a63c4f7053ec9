import re
from enum import Enum
from typing import Any, Callable, List, Optional, Set, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


def audit_spec(codes: List[Any]):
    """
    Decorator to declare which rule ids a specific check function can emit.
    Facilitates auto-discovery by the CheckRegistry.
    """
    def decorator(func):
        func.defined_codes = codes
        return func
    return decorator


class FontWeight(str, Enum):
    NORMAL = "normal"
    BOLD = "bold"


class RGB(BaseModel):
    """An opaque sRGB colour with 8-bit channels."""
    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)

    def as_tuple(self) -> Tuple[int, int, int]:
        return self.r, self.g, self.b

    def to_hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"


class ComputedStyle(BaseModel):
    """
    The subset of computed style the checks rely on.
    A colour of None means it could not be resolved to a flat value.
    """
    model_config = ConfigDict(frozen=True)

    font_size_px: Optional[float] = None
    font_weight: FontWeight = FontWeight.NORMAL
    foreground_color: Optional[RGB] = None
    background_color: Optional[RGB] = None


class Node(BaseModel):
    """
    Immutable element of the document tree.

    Attributes are kept as ordered (name, value) pairs; names are stored
    lower-cased and must be unique. `text` holds only the node's own direct
    text, descendants carry theirs.

    `text_runs` optionally keeps that own text split around the children:
    run i precedes child i and the last run follows the last child, so
    mixed content can be read back in document order.
    """
    model_config = ConfigDict(frozen=True)

    tag: str
    attrs: Tuple[Tuple[str, str], ...] = ()
    children: Tuple['Node', ...] = ()
    text: str = ""
    text_runs: Tuple[str, ...] = ()
    style: Optional[ComputedStyle] = None

    @field_validator('tag', mode='before')
    @classmethod
    def normalize_tag(cls, v: Any) -> str:
        return str(v).strip().lower()

    @field_validator('attrs', mode='before')
    @classmethod
    def normalize_attrs(cls, v: Any) -> Tuple[Tuple[str, str], ...]:
        """Accepts a mapping or pair sequence; bs4 list values are joined with spaces."""
        if v is None:
            return ()
        pairs = v.items() if isinstance(v, dict) else v
        seen: Set[str] = set()
        normalized = []
        for name, value in pairs:
            key = str(name).strip().lower()
            if key in seen:
                raise ValueError(f"duplicate attribute '{key}'")
            seen.add(key)
            if isinstance(value, (list, tuple)):
                value = " ".join(str(part) for part in value)
            normalized.append((key, "" if value is None else str(value)))
        return tuple(normalized)

    @field_validator('text', mode='before')
    @classmethod
    def normalize_text(cls, v: Any) -> str:
        return " ".join(str(v or "").split())

    @field_validator('text_runs', mode='before')
    @classmethod
    def normalize_text_runs(cls, v: Any, info: ValidationInfo) -> Tuple[str, ...]:
        runs = tuple(" ".join(str(run or "").split()) for run in (v or ()))
        expected = len(info.data.get('children', ())) + 1
        if runs and len(runs) != expected:
            raise ValueError(f"expected {expected} text runs, got {len(runs)}")
        return runs

    def segments(self) -> Tuple[str, ...]:
        """Own text runs around the children; without `text_runs` all text precedes them."""
        if self.text_runs:
            return self.text_runs
        return (self.text,) + ("",) * len(self.children)

    def attribute(self, name: str) -> Optional[str]:
        """Case-insensitive attribute lookup; None when the attribute is absent."""
        key = name.lower()
        for attr_name, value in self.attrs:
            if attr_name == key:
                return value
        return None

    def has_attribute(self, name: str) -> bool:
        return self.attribute(name) is not None


def children(node: Node) -> Tuple[Node, ...]:
    return node.children


def attribute(node: Node, name: str) -> Optional[str]:
    return node.attribute(name)


# --- FOCUSABILITY ---

_INTEGER_RE = re.compile(r"[+-]?\d+")
_NATIVE_CONTROL_TAGS = {"button", "input", "select", "textarea"}


def parse_integer(value: Optional[str]) -> Optional[int]:
    """Parses a signed integer attribute value; malformed values count as absent."""
    if value is None:
        return None
    text = value.strip()
    if not _INTEGER_RE.fullmatch(text):
        return None
    return int(text)


def parse_tabindex(value: Optional[str]) -> Optional[int]:
    return parse_integer(value)


def is_natively_focusable(node: Node) -> bool:
    """Interactive by virtue of the tag alone (link with href, enabled form controls)."""
    if node.tag in ("a", "area"):
        return node.has_attribute("href")
    if node.tag not in _NATIVE_CONTROL_TAGS:
        return False
    if node.has_attribute("disabled"):
        return False
    if node.tag == "input" and (node.attribute("type") or "").strip().lower() == "hidden":
        return False
    return True


def is_focusable_by_default(node: Node) -> bool:
    return is_natively_focusable(node) or parse_tabindex(node.attribute("tabindex")) is not None


# --- CHECK DEFINITION ---

class CheckDefinition:
    """
    Configuration object binding a check name to the rule functions it runs.

    Every rule function has the signature `rule(tree, config) -> List[Violation]`.
    """

    def __init__(
            self,
            name: str,
            rules: List[Callable[..., List[Any]]],
            description: str = "",
            possible_codes: Optional[List[Any]] = None
    ):
        self.name = name
        self.rules = list(rules)
        self.description = description

        # --- Auto-Discovery of Rule Ids ---
        final_codes: Set[Any] = set(possible_codes or [])

        for rule in self.rules:
            if hasattr(rule, 'defined_codes'):
                final_codes.update(rule.defined_codes)

        self.codes = sorted(final_codes, key=lambda code: getattr(code, "value", str(code)))

    def evaluate(self, tree, config) -> List[Any]:
        """Runs every rule of this check against the tree, in declaration order."""
        violations: List[Any] = []
        for rule in self.rules:
            violations.extend(rule(tree, config))
        return violations
