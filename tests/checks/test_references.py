# tests/checks/test_references.py
from conformance.checks.references import check_duplicate_ids, check_reference_integrity
from conformance.model import Category, RuleId, Severity


def test_dangling_reference_is_reported(build, config):
    tree = build('<input type="text" aria-label="Email" aria-describedby="hint1">')
    violations = check_reference_integrity(tree, config)
    assert len(violations) == 1
    v = violations[0]
    assert v.rule is RuleId.DANGLING_ARIA_REFERENCE
    assert v.category is Category.UNRESOLVED_REFERENCE
    assert v.tag == "input"
    assert "'hint1'" in v.message


def test_resolved_reference_passes(build, config):
    tree = build(
        '<input type="text" aria-label="Email" aria-describedby="hint1">'
        '<p id="hint1">We never share it.</p>'
    )
    assert check_reference_integrity(tree, config) == []


def test_all_unresolved_tokens_are_listed_in_one_violation(build, config):
    tree = build(
        '<span id="a">A</span>'
        '<div aria-labelledby="a b" aria-controls="panel">x</div>'
    )
    violations = check_reference_integrity(tree, config)
    assert len(violations) == 1
    assert "aria-labelledby -> 'b'" in violations[0].message
    assert "aria-controls -> 'panel'" in violations[0].message
    assert "'a'" not in violations[0].message


def test_self_reference_resolves(build, config):
    tree = build('<div id="me" aria-labelledby="me">Me</div>')
    assert check_reference_integrity(tree, config) == []


def test_duplicate_ids_warn_on_later_occurrences(build, config):
    tree = build('<p id="x">1</p><p id="x">2</p><p id="x">3</p><p id="y">4</p>')
    violations = check_duplicate_ids(tree, config)
    assert [tree.node(v.node).text for v in violations] == ["2", "3"]
    assert all(v.severity is Severity.WARNING for v in violations)
