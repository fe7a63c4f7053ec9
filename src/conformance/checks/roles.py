# src/conformance/checks/roles.py
from typing import List

from ..dom.aria import VALID_ROLES, implicit_role, role_tokens
from ..dom.core import CheckDefinition, audit_spec
from ..dom.models import DocumentTree
from ..model import AuditConfig, RuleId, Violation


@audit_spec(codes=[RuleId.UNKNOWN_ROLE, RuleId.REDUNDANT_ROLE])
def check_role_legality(tree: DocumentTree, config: AuditConfig) -> List[Violation]:
    """
    Rule: every token of a role attribute is a known ARIA role.
    A role that repeats the element's native role is reported as a notice.
    """
    results = []

    for handle in tree.handles():
        node = tree.node(handle)
        tokens = role_tokens(node)
        if not tokens:
            continue

        unknown = [token for token in tokens if token not in VALID_ROLES]
        if unknown:
            names = ", ".join(f"'{token}'" for token in unknown)
            results.append(Violation.at(
                tree, handle, RuleId.UNKNOWN_ROLE, f"Unknown ARIA role {names}"
            ))
        elif tokens[0] == implicit_role(node):
            results.append(Violation.at(
                tree, handle, RuleId.REDUNDANT_ROLE,
                f"role=\"{tokens[0]}\" duplicates the native role of <{node.tag}>"
            ))

    return results


DEFINITION = CheckDefinition(
    name="roles",
    rules=[check_role_legality],
    description="Known ARIA role tokens and redundant native roles",
)
