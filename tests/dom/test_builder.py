# tests/dom/test_builder.py
import pytest

from conformance.dom.builder import DOCUMENT_TAG, DOMBuilder
from conformance.dom.core import RGB, FontWeight
from conformance.dom.style import parse_color, parse_font_size


@pytest.fixture
def builder():
    return DOMBuilder()


def test_fragment_gets_synthetic_root(builder):
    root = builder.parse_doc("<p>Hi</p><div></div>")
    assert root.tag == DOCUMENT_TAG
    assert [child.tag for child in root.children] == ["p", "div"]
    assert root.children[0].text == "Hi"


def test_html_element_is_root(builder):
    root = builder.parse_doc("<!DOCTYPE html><html lang='en'><body><h1>T</h1></body></html>")
    assert root.tag == "html"
    assert root.attribute("lang") == "en"
    assert root.children[0].children[0].tag == "h1"


def test_byte_order_mark_is_dropped(builder):
    root = builder.parse_doc("\ufeff<p>x</p>")
    assert root.children[0].tag == "p"
    assert root.text == ""


def test_script_and_comments_carry_no_text(builder):
    root = builder.parse_doc("<div>Text<script>var x = 1;</script><!-- note -->more</div>")
    div = root.children[0]
    assert div.text == "Text more"
    assert div.children[0].tag == "script"
    assert div.children[0].text == ""


def test_attributes_are_kept(builder):
    root = builder.parse_doc('<button class="a b" aria-label="Close">x</button>')
    button = root.children[0]
    assert button.attribute("aria-label") == "Close"
    assert button.attribute("class") == "a b"


def test_inline_style_is_inherited(builder):
    root = builder.parse_doc(
        '<div style="color:#000; background-color:#fff; font-size:20px">'
        '<p style="font-weight:bold">x</p></div>'
    )
    style = root.children[0].children[0].style
    assert style.foreground_color == RGB(r=0, g=0, b=0)
    assert style.background_color == RGB(r=255, g=255, b=255)
    assert style.font_size_px == 20
    assert style.font_weight is FontWeight.BOLD


def test_relative_font_size_uses_parent(builder):
    root = builder.parse_doc('<div style="font-size:20px"><span style="font-size:1.5em">x</span></div>')
    assert root.children[0].children[0].style.font_size_px == pytest.approx(30.0)


def test_image_background_is_unknown(builder):
    root = builder.parse_doc(
        '<div style="background:linear-gradient(red, blue)"><p style="color:#000">x</p></div>'
    )
    style = root.children[0].children[0].style
    assert style.foreground_color is not None
    assert style.background_color is None


def test_unstyled_nodes_have_no_style(builder):
    root = builder.parse_doc("<p>x</p>")
    assert root.children[0].style is None


@pytest.mark.parametrize("value, expected", [
    ("#fff", (255, 255, 255)),
    ("#1A2b3C", (26, 43, 60)),
    ("#000000ff", (0, 0, 0)),
    ("RED", (255, 0, 0)),
    ("rgb(0, 128, 255)", (0, 128, 255)),
    ("rgb(100%, 0%, 0%)", (255, 0, 0)),
    ("rgba(10, 20, 30, 1)", (10, 20, 30)),
])
def test_parse_color(value, expected):
    assert parse_color(value).as_tuple() == expected


@pytest.mark.parametrize("value", [
    "transparent", "inherit", "#ffffff80", "rgba(0,0,0,0.5)", "rgb(300, 0, 0)", "#12", "", None,
])
def test_parse_color_rejects_non_opaque_or_unknown(value):
    assert parse_color(value) is None


def test_parse_font_size_units():
    assert parse_font_size("18pt", None) == pytest.approx(24.0)
    assert parse_font_size("2rem", 10.0) == pytest.approx(32.0)
    assert parse_font_size("150%", 20.0) == pytest.approx(30.0)
    assert parse_font_size("large", 12.0) == 12.0


def test_deeply_nested_document_builds(builder):
    depth = 1500
    root = builder.parse_doc("<div>" * depth + "<h1>x</h1>" + "</div>" * depth)
    node, levels = root, 0
    while node.children:
        node, levels = node.children[0], levels + 1
    assert levels == depth + 1
    assert node.tag == "h1"
    assert node.text == "x"


def test_mixed_content_keeps_text_runs(builder):
    root = builder.parse_doc("<label>a <b>b</b> c</label>")
    label = root.children[0]
    assert label.text_runs == ("a", "c")
    assert label.text == "a c"
