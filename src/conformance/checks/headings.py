# src/conformance/checks/headings.py
import re
from typing import List, Optional, Tuple

from ..dom.aria import explicit_role
from ..dom.core import CheckDefinition, Node, audit_spec, parse_integer
from ..dom.models import DocumentTree
from ..model import AuditConfig, RuleId, Violation

_HEADING_TAG_RE = re.compile(r"h([1-6])")
DEFAULT_ARIA_LEVEL = 2
MAX_HEADING_LEVEL = 6


def heading_level(node: Node) -> Optional[int]:
    """
    Level of a heading node (h1-h6 or role="heading"), None for non-headings.
    role="heading" without a usable aria-level (1-6) counts as level 2.
    """
    match = _HEADING_TAG_RE.fullmatch(node.tag)
    if match:
        return int(match.group(1))
    if explicit_role(node) == "heading":
        level = parse_integer(node.attribute("aria-level"))
        return level if level is not None and 1 <= level <= MAX_HEADING_LEVEL else DEFAULT_ARIA_LEVEL
    return None


def collect_headings(tree: DocumentTree) -> List[Tuple[int, int]]:
    """(handle, level) for every heading in document order."""
    headings = []
    for handle in tree.handles():
        level = heading_level(tree.node(handle))
        if level is not None:
            headings.append((handle, level))
    return headings


# --- AUDIT RULES ---

@audit_spec(codes=[RuleId.HEADING_MISSING_H1, RuleId.HEADING_MULTIPLE_H1])
def check_single_h1(tree: DocumentTree, config: AuditConfig) -> List[Violation]:
    """Rule: a document has exactly one level-1 heading."""
    results = []
    h1s = [handle for handle, level in collect_headings(tree) if level == 1]

    if not h1s:
        results.append(Violation.at(
            tree, 0, RuleId.HEADING_MISSING_H1, "Document has no level-1 heading"
        ))

    for handle in h1s[1:]:
        results.append(Violation.at(
            tree, handle, RuleId.HEADING_MULTIPLE_H1,
            f"Additional level-1 heading ({len(h1s)} found; exactly one expected)"
        ))
    return results


@audit_spec(codes=[RuleId.HEADING_SKIPPED_LEVEL])
def check_heading_continuity(tree: DocumentTree, config: AuditConfig) -> List[Violation]:
    """
    Rule: a heading may go at most one level deeper than the deepest
    heading seen before it.
    """
    results = []
    max_level = None

    for handle, level in collect_headings(tree):
        if max_level is not None and level > max_level + 1:
            results.append(Violation.at(
                tree, handle, RuleId.HEADING_SKIPPED_LEVEL,
                f"skipped heading level: h{level} follows a maximum of h{max_level}"
            ))
        max_level = level if max_level is None else max(max_level, level)
    return results


DEFINITION = CheckDefinition(
    name="headings",
    rules=[check_single_h1, check_heading_continuity],
    description="Single h1 and continuous heading hierarchy",
)
