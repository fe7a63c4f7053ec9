# tests/checks/test_focus_order.py
from conformance.checks.focus_order import analyze_tab_order, check_focus_order, resolve_tabindex
from conformance.model import RuleId, Severity


def test_tab_sequence_puts_positive_tabindex_first(build):
    tree = build(
        '<div tabindex="0">a</div>'
        '<div tabindex="2">b</div>'
        '<div tabindex="-1">c</div>'
        '<div tabindex="1">d</div>'
    )
    order = analyze_tab_order(tree)

    assert [e.tabindex for e in order.sequence] == [1, 2, 0]
    assert [tree.node(e.handle).text for e in order.sequence] == ["d", "b", "a"]
    assert [tree.node(e.handle).text for e in order.programmatic] == ["c"]

    warnings = [v for v in order.violations if v.rule is RuleId.POSITIVE_TABINDEX]
    assert len(warnings) == 2
    assert all(v.severity is Severity.WARNING for v in warnings)


def test_equal_tabindex_keeps_document_order(build):
    tree = build('<a href="#1" tabindex="3">x</a><button tabindex="3">y</button><a href="#2">z</a>')
    order = analyze_tab_order(tree)
    assert [tree.node(e.handle).tag for e in order.sequence] == ["a", "button", "a"]
    assert order.sequence[-1].tabindex == 0


def test_native_controls_join_natural_order(build):
    tree = build('<input type="text"><button disabled>no</button><input type="hidden"><a>plain</a>')
    order = analyze_tab_order(tree)
    assert [tree.node(e.handle).tag for e in order.sequence] == ["input"]


def test_negative_and_malformed_tabindex(build):
    tree = build('<div tabindex="-7">a</div><div tabindex="x">b</div>')
    handles = [h for h in tree.handles() if tree.node(h).tag == "div"]
    assert resolve_tabindex(tree, handles[0]) == -1
    assert resolve_tabindex(tree, handles[1]) is None


def test_custom_role_without_focusability(build, config):
    tree = build(
        '<div role="button">bad</div>'
        '<div role="button" tabindex="0">ok</div>'
        '<span role="checkbox" tabindex="-1">script only</span>'
        '<button role="switch">native</button>'
    )
    errors = [v for v in check_focus_order(tree, config) if v.rule is RuleId.CUSTOM_ROLE_WITHOUT_FOCUSABILITY]
    assert [tree.node(v.node).text for v in errors] == ["bad", "script only"]
    assert all(v.severity is Severity.ERROR for v in errors)


def test_natural_order_has_no_violations(build, config):
    tree = build('<a href="/">Home</a><button>Go</button><input type="checkbox" aria-label="x">')
    assert check_focus_order(tree, config) == []
