# src/conformance/checks/names.py
"""
Accessible name presence (WCAG 4.1.2).

The name is taken from the first non-empty source, in order: aria-label,
the first resolvable aria-labelledby target, an associated <label>, the
element's own content (buttons and links), and finally input values, alt
text and title.
"""
from typing import Dict, List, Optional

from ..dom.aria import (
    LABELABLE_TAGS,
    NAME_FROM_CONTENT_ROLES,
    NAME_REQUIRED_ROLES,
    effective_role,
    input_type,
)
from ..dom.core import CheckDefinition, audit_spec
from ..dom.models import DocumentTree
from ..model import AuditConfig, RuleId, Violation

# Browsers label these input buttons even without a value.
_DEFAULT_INPUT_LABELS = {"submit": "Submit", "reset": "Reset"}


def _clean(value: Optional[str]) -> str:
    return " ".join((value or "").split())


def build_label_index(tree: DocumentTree) -> Dict[str, List[int]]:
    """Maps each `for` target id to the <label> handles pointing at it."""
    index: Dict[str, List[int]] = {}
    for handle in tree.handles():
        node = tree.node(handle)
        if node.tag == "label":
            target = _clean(node.attribute("for"))
            if target:
                index.setdefault(target, []).append(handle)
    return index


def _label_name(tree: DocumentTree, handle: int, label_index: Dict[str, List[int]]) -> str:
    node = tree.node(handle)
    node_id = node.attribute("id")
    if node_id:
        for label in label_index.get(node_id, []):
            text = tree.text_content(label)
            if text:
                return text
    for ancestor in tree.ancestors(handle):
        if tree.node(ancestor).tag == "label":
            return tree.text_content(ancestor, exclude=handle)
    return ""


def accessible_name(tree: DocumentTree, handle: int,
                    label_index: Optional[Dict[str, List[int]]] = None) -> str:
    """Computes the accessible name of a node; empty string when it has none."""
    node = tree.node(handle)

    name = _clean(node.attribute("aria-label"))
    if name:
        return name

    for token in (node.attribute("aria-labelledby") or "").split():
        target = tree.find_by_id(token)
        if target is not None:
            name = tree.text_content(target)
            if name:
                return name
            break

    if node.tag in LABELABLE_TAGS:
        if label_index is None:
            label_index = build_label_index(tree)
        name = _label_name(tree, handle, label_index)
        if name:
            return name

    if effective_role(node) in NAME_FROM_CONTENT_ROLES:
        name = tree.text_content(handle, alt_text=True)
        if name:
            return name

    if node.tag == "input":
        kind = input_type(node)
        if kind in ("button", "submit", "reset"):
            name = _clean(node.attribute("value")) or _DEFAULT_INPUT_LABELS.get(kind, "")
        elif kind == "image":
            name = _clean(node.attribute("alt"))
        if name:
            return name

    return _clean(node.attribute("title"))


def _is_hidden(tree: DocumentTree, handle: int) -> bool:
    """Hidden from assistive technology by aria-hidden or the hidden attribute, here or above."""
    for current in [handle, *tree.ancestors(handle)]:
        node = tree.node(current)
        if node.has_attribute("hidden") or (node.attribute("aria-hidden") or "").strip() == "true":
            return True
    return False


# --- AUDIT RULES ---

@audit_spec(codes=[RuleId.MISSING_ACCESSIBLE_NAME])
def check_label_presence(tree: DocumentTree, config: AuditConfig) -> List[Violation]:
    """Rule: buttons, checkboxes, radios, textboxes and comboboxes have a non-empty name."""
    results = []
    label_index = build_label_index(tree)

    for handle in tree.handles():
        node = tree.node(handle)
        role = effective_role(node)
        if role not in NAME_REQUIRED_ROLES or _is_hidden(tree, handle):
            continue
        if not accessible_name(tree, handle, label_index):
            results.append(Violation.at(
                tree, handle, RuleId.MISSING_ACCESSIBLE_NAME,
                f"missing accessible name for <{node.tag}> with role '{role}'"
            ))
    return results


DEFINITION = CheckDefinition(
    name="names",
    rules=[check_label_presence],
    description="Accessible names of controls",
)
