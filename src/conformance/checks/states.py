# src/conformance/checks/states.py
from typing import List

from ..dom.aria import BOOLEAN_STATE_VALUES, LIVE_REGION_VALUES
from ..dom.core import CheckDefinition, audit_spec
from ..dom.models import DocumentTree
from ..model import AuditConfig, RuleId, Violation


@audit_spec(codes=[RuleId.INVALID_ARIA_LIVE])
def check_live_regions(tree: DocumentTree, config: AuditConfig) -> List[Violation]:
    """Rule: aria-live is one of off, polite or assertive."""
    results = []
    for handle in tree.handles():
        value = tree.attribute(handle, "aria-live")
        if value is not None and value not in LIVE_REGION_VALUES:
            results.append(Violation.at(
                tree, handle, RuleId.INVALID_ARIA_LIVE,
                f"invalid aria-live value \"{value}\" (expected off, polite or assertive)"
            ))
    return results


@audit_spec(codes=[RuleId.INVALID_ARIA_STATE])
def check_boolean_states(tree: DocumentTree, config: AuditConfig) -> List[Violation]:
    """
    Rule: boolean ARIA states hold exactly "true" or "false"
    ("mixed" is also allowed for aria-checked).
    """
    results = []
    for handle in tree.handles():
        node = tree.node(handle)
        invalid = []
        for attr, allowed in BOOLEAN_STATE_VALUES.items():
            value = node.attribute(attr)
            if value is not None and value not in allowed:
                invalid.append(f"{attr}=\"{value}\"")

        if invalid:
            results.append(Violation.at(
                tree, handle, RuleId.INVALID_ARIA_STATE,
                f"invalid ARIA state value: {', '.join(invalid)}"
            ))
    return results


DEFINITION = CheckDefinition(
    name="states",
    rules=[check_live_regions, check_boolean_states],
    description="Live-region and boolean state attribute values",
)
