# tests/checks/test_states.py
import pytest

from conformance.checks.states import check_boolean_states, check_live_regions
from conformance.model import Category, RuleId


@pytest.mark.parametrize("value", ["off", "polite", "assertive"])
def test_valid_live_regions_pass(build, config, value):
    assert check_live_regions(build(f'<div aria-live="{value}">x</div>'), config) == []


@pytest.mark.parametrize("value", ["loud", "Polite", ""])
def test_invalid_live_regions_fail(build, config, value):
    violations = check_live_regions(build(f'<div aria-live="{value}">x</div>'), config)
    assert len(violations) == 1
    assert violations[0].rule is RuleId.INVALID_ARIA_LIVE
    assert violations[0].category is Category.MALFORMED_ATTRIBUTE


def test_boolean_states(build, config):
    tree = build(
        '<button aria-expanded="true">a</button>'
        '<div role="checkbox" aria-checked="mixed">b</div>'
        '<button aria-pressed="mixed">c</button>'
        '<div role="tab" aria-selected="yes" aria-expanded="1">d</div>'
    )
    violations = check_boolean_states(tree, config)
    assert [tree.node(v.node).text for v in violations] == ["c", "d"]
    assert all(v.rule is RuleId.INVALID_ARIA_STATE for v in violations)
    assert 'aria-selected="yes"' in violations[1].message
    assert 'aria-expanded="1"' in violations[1].message
