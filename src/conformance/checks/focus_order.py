# src/conformance/checks/focus_order.py
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from ..dom.aria import INTERACTIVE_ROLES, explicit_role
from ..dom.core import CheckDefinition, audit_spec, is_natively_focusable, parse_tabindex
from ..dom.models import DocumentTree
from ..model import AuditConfig, RuleId, Violation


class TabEntry(BaseModel):
    """A focusable node with its resolved tabindex and DOM-order position."""
    model_config = ConfigDict(frozen=True)

    handle: int
    tabindex: int
    position: int


class TabOrder(BaseModel):
    """
    Result of the keyboard traversal analysis.

    `sequence` is the order in which Tab visits nodes; `programmatic` holds
    nodes reachable by script focus only (tabindex -1).
    """
    model_config = ConfigDict(frozen=True)

    entries: Tuple[TabEntry, ...] = ()
    sequence: Tuple[TabEntry, ...] = ()
    programmatic: Tuple[TabEntry, ...] = ()
    violations: Tuple[Violation, ...] = ()


def resolve_tabindex(tree: DocumentTree, handle: int) -> Optional[int]:
    """
    Effective tabindex of a node, or None when it cannot take focus at all.

    Explicit values win (negatives collapse to -1); malformed values are
    ignored and native focusability yields 0.
    """
    node = tree.node(handle)
    explicit = parse_tabindex(node.attribute("tabindex"))
    if explicit is not None:
        return explicit if explicit >= 0 else -1
    if is_natively_focusable(node):
        return 0
    return None


def analyze_tab_order(tree: DocumentTree) -> TabOrder:
    entries: List[TabEntry] = []
    violations: List[Violation] = []

    for handle in tree.handles():
        node = tree.node(handle)
        tabindex = resolve_tabindex(tree, handle)

        if tabindex is not None:
            entries.append(TabEntry(handle=handle, tabindex=tabindex, position=handle))
            if tabindex > 0:
                violations.append(Violation.at(
                    tree, handle, RuleId.POSITIVE_TABINDEX,
                    f"positive tabindex disrupts natural order (tabindex={tabindex})"
                ))

        role = explicit_role(node)
        if role in INTERACTIVE_ROLES and not is_natively_focusable(node) and (tabindex is None or tabindex < 0):
            violations.append(Violation.at(
                tree, handle, RuleId.CUSTOM_ROLE_WITHOUT_FOCUSABILITY,
                f"<{node.tag} role=\"{role}\"> cannot receive keyboard focus; add tabindex=\"0\" or use a native control"
            ))

    positive = sorted((e for e in entries if e.tabindex > 0), key=lambda e: (e.tabindex, e.position))
    natural = [e for e in entries if e.tabindex == 0]

    return TabOrder(
        entries=tuple(entries),
        sequence=tuple(positive + natural),
        programmatic=tuple(e for e in entries if e.tabindex < 0),
        violations=tuple(violations),
    )


# --- AUDIT RULES ---

@audit_spec(codes=[RuleId.POSITIVE_TABINDEX, RuleId.CUSTOM_ROLE_WITHOUT_FOCUSABILITY])
def check_focus_order(tree: DocumentTree, config: AuditConfig) -> List[Violation]:
    return list(analyze_tab_order(tree).violations)


DEFINITION = CheckDefinition(
    name="focus-order",
    rules=[check_focus_order],
    description="Keyboard traversal order and focusability of interactive roles",
)
