"""
Tests for the JSX Serializer.

Verifies:
1.  Layout: self-closing tags, inline single text, indented children, fragments.
2.  Attribute emission per value type.
3.  Style object literals.
4.  Text protection with string containers.
"""

from jsx_editor.core.jsx import parse, serialize
from jsx_editor.core.jsx.serializer import escape_string, format_text, serialize_attributes, style_literal
from jsx_editor.core.tree import element, fragment, text
from jsx_editor.editor.session import DEFAULT_CODE, EXAMPLES


def test_self_closing():
  assert serialize(element("img", {"src": "a.png"})) == '<img src="a.png" />'


def test_inline_single_text_child():
  assert serialize(element("h1", {"className": "x"}, (text("Hi"),))) == '<h1 className="x">Hi</h1>'


def test_nested_layout():
  tree = element("div", {}, (element("p", {}, (text("a"),)), element("br")))
  assert serialize(tree) == "<div>\n  <p>a</p>\n  <br />\n</div>"


def test_indent_width():
  tree = element("div", {}, (element("p", {}, (text("a"),)),))
  assert serialize(tree, indent_width=4) == "<div>\n    <p>a</p>\n</div>"


def test_mixed_children_text_lines():
  tree = element("button", {}, (text("Click"), element("b", {}, (text("Me"),))))
  assert serialize(tree) == "<button>\n  Click\n  <b>Me</b>\n</button>"


def test_adjacent_text_nodes_are_separated():
  tree = element("p", {}, (text("a"), text("b")))
  assert serialize(tree) == '<p>\n  a\n  {"b"}\n</p>'


def test_fragment():
  tree = fragment((element("p", {}, (text("a"),)),))
  assert serialize(tree) == "<>\n  <p>a</p>\n</>"
  assert serialize(fragment()) == "<></>"


def test_nested_fragment_is_indented():
  tree = element("div", {}, (fragment((element("span"),)),))
  assert serialize(tree) == "<div>\n  <>\n    <span />\n  </>\n</div>"


def test_default_code_normalizes():
  expected = (
    '<div className="p-6 bg-blue-500 rounded-lg">\n'
    '  <h1 className="text-3xl font-bold text-white mb-2">Hello World</h1>\n'
    '  <p className="text-white text-lg">Click any element to edit its properties</p>\n'
    '  <button className="mt-4 px-4 py-2 bg-white text-blue-500 rounded font-medium">Click Me</button>\n'
    "</div>"
  )
  assert serialize(parse(DEFAULT_CODE)) == expected


# --- Attributes ---


def test_attribute_types():
  attrs = {
    "disabled": True,
    "hidden": False,
    "title": None,
    "maxLength": 10,
    "ratio": 0.5,
    "label": 'say "hi"',
    "data": [1, 2],
  }
  assert serialize_attributes(attrs) == ' disabled maxLength={10} ratio={0.5} label="say \\"hi\\"" data={[1,2]}'


def test_no_attributes():
  assert serialize_attributes({}) == ""


def test_style_literal():
  assert style_literal({"color": "red", "fontSize": 12, "--accent": "#fff", "empty": ""}) == (
    '{ color: "red", fontSize: 12, "--accent": "#fff" }'
  )
  assert style_literal({}) == "{}"


def test_style_attribute():
  node = element("div", {"style": {"backgroundColor": "#fff"}})
  assert serialize(node) == '<div style={{ backgroundColor: "#fff" }} />'


def test_escape_string():
  assert escape_string('a\\b"c\nd') == 'a\\\\b\\"c\\nd'


# --- Text ---


def test_plain_text_is_raw():
  assert format_text("Hello & goodbye") == "Hello & goodbye"


def test_unsafe_text_uses_container():
  assert format_text("a < b") == '{"a < b"}'
  assert format_text("{x}") == '{"{x}"}'
  assert format_text("&amp;") == '{"&amp;"}'
  assert format_text(" padded") == '{" padded"}'
  assert format_text("") == '{""}'


def test_unicode_is_kept():
  assert format_text("café < ☕") == '{"café < ☕"}'


def test_pricing_example_snapshot(snapshot):
  snapshot.assert_match(serialize(parse(EXAMPLES["pricing"])) + "\n", extension="jsx")
