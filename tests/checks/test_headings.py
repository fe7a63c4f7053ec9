# tests/checks/test_headings.py
from conformance.checks.headings import check_heading_continuity, check_single_h1, heading_level
from conformance.dom.core import Node
from conformance.model import RuleId


def test_heading_level():
    assert heading_level(Node(tag="h3")) == 3
    assert heading_level(Node(tag="div", attrs={"role": "heading", "aria-level": "4"})) == 4
    assert heading_level(Node(tag="div", attrs={"role": "heading"})) == 2
    assert heading_level(Node(tag="div", attrs={"role": "heading", "aria-level": "x"})) == 2
    assert heading_level(Node(tag="h7")) is None
    assert heading_level(Node(tag="p")) is None


def test_skipped_level_is_reported_once(build, config):
    tree = build("<h1>A</h1><h2>B</h2><h4>C</h4>")
    violations = check_heading_continuity(tree, config)
    assert len(violations) == 1
    assert violations[0].rule is RuleId.HEADING_SKIPPED_LEVEL
    assert violations[0].tag == "h4"


def test_returning_to_a_shallower_level_is_fine(build, config):
    tree = build("<h1>A</h1><h2>B</h2><h3>C</h3><h2>D</h2>")
    assert check_heading_continuity(tree, config) == []


def test_skip_is_measured_against_deepest_level_so_far(build, config):
    tree = build("<h1>A</h1><h2>B</h2><h3>C</h3><h2>D</h2><h4>E</h4><h6>F</h6>")
    violations = check_heading_continuity(tree, config)
    assert [v.tag for v in violations] == ["h6"]


def test_aria_headings_take_part(build, config):
    tree = build('<h1>A</h1><div role="heading" aria-level="3">B</div>')
    violations = check_heading_continuity(tree, config)
    assert [v.tag for v in violations] == ["div"]


def test_missing_h1_is_reported_at_root(build, config):
    tree = build("<h2>A</h2>")
    violations = check_single_h1(tree, config)
    assert len(violations) == 1
    assert violations[0].rule is RuleId.HEADING_MISSING_H1
    assert violations[0].path == ()


def test_every_additional_h1_is_reported(build, config):
    tree = build("<h1>A</h1><h1>B</h1><h1>C</h1>")
    violations = check_single_h1(tree, config)
    assert [v.rule for v in violations] == [RuleId.HEADING_MULTIPLE_H1] * 2
    assert [tree.node(v.node).text for v in violations] == ["B", "C"]


def test_single_h1_passes(build, config):
    assert check_single_h1(build("<h1>Only</h1><h2>Sub</h2>"), config) == []


def test_out_of_range_aria_level_falls_back_to_default():
    for level in ("0", "7", "40"):
        node = Node(tag="div", attrs={"role": "heading", "aria-level": level})
        assert heading_level(node) == 2


def test_out_of_range_aria_level_is_not_a_skip(build, config):
    tree = build('<h1>A</h1><h2>B</h2><div role="heading" aria-level="40">C</div>')
    assert check_heading_continuity(tree, config) == []
