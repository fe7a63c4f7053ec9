# src/conformance/dom/aria.py
"""
Process-wide ARIA lookup tables and role helpers.

All tables are frozen at import time and only ever read.
"""
from typing import Dict, FrozenSet, List, Optional

from .core import Node

VALID_ROLES: FrozenSet[str] = frozenset({
    "alert", "alertdialog", "application", "article", "banner", "blockquote",
    "button", "caption", "cell", "checkbox", "code", "columnheader", "combobox",
    "complementary", "contentinfo", "definition", "deletion", "dialog",
    "directory", "document", "emphasis", "feed", "figure", "form", "generic",
    "grid", "gridcell", "group", "heading", "img", "insertion", "link", "list",
    "listbox", "listitem", "log", "main", "mark", "marquee", "math", "menu",
    "menubar", "menuitem", "menuitemcheckbox", "menuitemradio", "meter",
    "navigation", "none", "note", "option", "paragraph", "presentation",
    "progressbar", "radio", "radiogroup", "region", "row", "rowgroup",
    "rowheader", "scrollbar", "search", "searchbox", "separator", "slider",
    "spinbutton", "status", "strong", "subscript", "superscript", "switch",
    "tab", "table", "tablist", "tabpanel", "term", "textbox", "time", "timer",
    "toolbar", "tooltip", "tree", "treegrid", "treeitem",
})

# Widget roles that must be reachable from the keyboard.
INTERACTIVE_ROLES: FrozenSet[str] = frozenset({"button", "checkbox", "radio", "switch", "tab", "link"})

# Roles that cannot be operated without an accessible name.
NAME_REQUIRED_ROLES: FrozenSet[str] = frozenset({"button", "checkbox", "radio", "textbox", "combobox"})

# Roles whose accessible name may come from their own text content.
NAME_FROM_CONTENT_ROLES: FrozenSet[str] = frozenset({"button", "link"})

LIVE_REGION_VALUES: FrozenSet[str] = frozenset({"off", "polite", "assertive"})

_TRUE_FALSE = frozenset({"true", "false"})
BOOLEAN_STATE_VALUES: Dict[str, FrozenSet[str]] = {
    "aria-expanded": _TRUE_FALSE,
    "aria-checked": frozenset({"true", "false", "mixed"}),
    "aria-selected": _TRUE_FALSE,
    "aria-pressed": _TRUE_FALSE,
    "aria-hidden": _TRUE_FALSE,
}

# Attributes holding whitespace-separated ID references.
ID_REFERENCE_ATTRIBUTES = (
    "aria-describedby",
    "aria-labelledby",
    "aria-controls",
    "aria-owns",
    "aria-flowto",
    "aria-details",
    "aria-errormessage",
    "aria-activedescendant",
)

# Elements that can be associated with a <label>.
LABELABLE_TAGS: FrozenSet[str] = frozenset({"button", "input", "meter", "output", "progress", "select", "textarea"})

_TAG_ROLES: Dict[str, str] = {
    "article": "article",
    "aside": "complementary",
    "button": "button",
    "dialog": "dialog",
    "fieldset": "group",
    "footer": "contentinfo",
    "form": "form",
    "h1": "heading", "h2": "heading", "h3": "heading",
    "h4": "heading", "h5": "heading", "h6": "heading",
    "header": "banner",
    "hr": "separator",
    "li": "listitem",
    "main": "main",
    "menu": "list",
    "nav": "navigation",
    "ol": "list",
    "option": "option",
    "output": "status",
    "progress": "progressbar",
    "table": "table",
    "tbody": "rowgroup",
    "td": "cell",
    "textarea": "textbox",
    "tfoot": "rowgroup",
    "thead": "rowgroup",
    "tr": "row",
    "ul": "list",
}

_INPUT_ROLES: Dict[str, Optional[str]] = {
    "button": "button",
    "checkbox": "checkbox",
    "email": "textbox",
    "hidden": None,
    "image": "button",
    "number": "spinbutton",
    "radio": "radio",
    "range": "slider",
    "reset": "button",
    "search": "searchbox",
    "submit": "button",
    "tel": "textbox",
    "text": "textbox",
    "url": "textbox",
}

# Input types without a role mapping (file, date, password, color...).
_UNMAPPED_INPUT_TYPES = frozenset({
    "color", "date", "datetime-local", "file", "month", "password", "time", "week",
})

def input_type(node: Node) -> str:
    return (node.attribute("type") or "text").strip().lower()

def role_tokens(node: Node) -> List[str]:
    """Lower-cased tokens of the role attribute; empty when absent or blank."""
    value = node.attribute("role")
    return value.lower().split() if value else []

def explicit_role(node: Node) -> Optional[str]:
    tokens = role_tokens(node)
    return tokens[0] if tokens else None

def implicit_role(node: Node) -> Optional[str]:
    """The role the element carries natively, without a role attribute."""
    tag = node.tag
    if tag in ("a", "area"):
        return "link" if node.has_attribute("href") else None
    if tag == "img":
        alt = node.attribute("alt")
        return "presentation" if alt is not None and not alt.strip() else "img"
    if tag == "select":
        size = (node.attribute("size") or "").strip()
        if node.has_attribute("multiple") or (size.isdigit() and int(size) > 1):
            return "listbox"
        return "combobox"
    if tag == "input":
        kind = input_type(node)
        if kind in _UNMAPPED_INPUT_TYPES:
            return None
        if node.has_attribute("list") and kind in ("text", "search", "email", "tel", "url"):
            return "combobox"
        return _INPUT_ROLES.get(kind, "textbox")
    return _TAG_ROLES.get(tag)

def effective_role(node: Node) -> Optional[str]:
    """An explicit, known role wins over the implicit one."""
    role = explicit_role(node)
    if role and role in VALID_ROLES:
        return role
    return implicit_role(node)
