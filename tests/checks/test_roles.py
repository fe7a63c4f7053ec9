# tests/checks/test_roles.py
import pytest

from conformance.checks.roles import check_role_legality
from conformance.dom.aria import effective_role, implicit_role
from conformance.dom.core import Node
from conformance.model import RuleId, Severity


def test_unknown_role_is_an_error(build, config):
    violations = check_role_legality(build('<div role="buton">x</div>'), config)
    assert len(violations) == 1
    assert violations[0].rule is RuleId.UNKNOWN_ROLE
    assert violations[0].severity is Severity.ERROR
    assert "'buton'" in violations[0].message


def test_every_role_token_must_be_known(build, config):
    violations = check_role_legality(build('<div role="button foo">x</div>'), config)
    assert [v.rule for v in violations] == [RuleId.UNKNOWN_ROLE]
    assert "'foo'" in violations[0].message


@pytest.mark.parametrize("html", [
    '<div role="Navigation">x</div>',
    '<div role="button link">x</div>',
    '<div role="   ">x</div>',
    '<span>no role</span>',
])
def test_valid_or_missing_roles_pass(build, config, html):
    assert check_role_legality(build(html), config) == []


def test_redundant_role_is_a_notice(build, config):
    tree = build('<button role="button">a</button><nav role="navigation">b</nav>')
    violations = check_role_legality(tree, config)
    assert [v.rule for v in violations] == [RuleId.REDUNDANT_ROLE] * 2
    assert all(v.severity is Severity.INFO for v in violations)


@pytest.mark.parametrize("node, expected", [
    (Node(tag="a", attrs={"href": "/"}), "link"),
    (Node(tag="a"), None),
    (Node(tag="img", attrs={"alt": ""}), "presentation"),
    (Node(tag="img", attrs={"alt": "Logo"}), "img"),
    (Node(tag="input"), "textbox"),
    (Node(tag="input", attrs={"type": "checkbox"}), "checkbox"),
    (Node(tag="input", attrs={"type": "submit"}), "button"),
    (Node(tag="input", attrs={"type": "text", "list": "opts"}), "combobox"),
    (Node(tag="input", attrs={"type": "password"}), None),
    (Node(tag="select"), "combobox"),
    (Node(tag="select", attrs={"multiple": ""}), "listbox"),
    (Node(tag="textarea"), "textbox"),
    (Node(tag="div"), None),
])
def test_implicit_role(node, expected):
    assert implicit_role(node) == expected


def test_effective_role_prefers_known_explicit_role():
    assert effective_role(Node(tag="div", attrs={"role": "switch"})) == "switch"
    assert effective_role(Node(tag="button", attrs={"role": "bogus"})) == "button"
