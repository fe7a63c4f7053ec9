# src/conformance/checks/references.py
from typing import List

from ..dom.aria import ID_REFERENCE_ATTRIBUTES
from ..dom.core import CheckDefinition, audit_spec
from ..dom.models import DocumentTree
from ..model import AuditConfig, RuleId, Violation


@audit_spec(codes=[RuleId.DANGLING_ARIA_REFERENCE])
def check_reference_integrity(tree: DocumentTree, config: AuditConfig) -> List[Violation]:
    """
    Rule: every ID token of aria-describedby, aria-labelledby, aria-controls
    (and the other ID-reference attributes) names an existing element.
    One violation per node lists all of its unresolved tokens.
    """
    results = []

    for handle in tree.handles():
        node = tree.node(handle)
        unresolved = []
        for attr in ID_REFERENCE_ATTRIBUTES:
            value = node.attribute(attr)
            if not value:
                continue
            unresolved.extend(
                f"{attr} -> '{token}'" for token in value.split() if tree.find_by_id(token) is None
            )

        if unresolved:
            results.append(Violation.at(
                tree, handle, RuleId.DANGLING_ARIA_REFERENCE,
                f"dangling ARIA reference: {', '.join(unresolved)}"
            ))

    return results


@audit_spec(codes=[RuleId.DUPLICATE_ID])
def check_duplicate_ids(tree: DocumentTree, config: AuditConfig) -> List[Violation]:
    """Rule: ids are unique, otherwise references resolve to the first match only."""
    results = []
    for node_id, handles in sorted(tree.duplicate_ids().items()):
        first = tree.path(handles[0])
        for handle in handles[1:]:
            results.append(Violation.at(
                tree, handle, RuleId.DUPLICATE_ID,
                f"Duplicate id '{node_id}' (first defined at {list(first)})"
            ))
    return results


DEFINITION = CheckDefinition(
    name="references",
    rules=[check_reference_integrity, check_duplicate_ids],
    description="ID references of ARIA relationship attributes",
)
