"""
Tests for the JSX Lexer and Grammar Front End.

Verifies:
1.  Tag mode tokens, quoted strings and balanced expression containers.
2.  Child mode text runs and rejection of bare `>` / `}`.
3.  The generic AST shape of elements, fragments and attributes.
4.  Classification of container expressions into literals or opaque nodes.
5.  Grammar errors carry a position.
"""

import pytest

from jsx_editor.core.jsx import JsxVisitor, MarkupSyntaxError, parse_to_generic_ast, walk
from jsx_editor.core.jsx.frontend import classify_expression
from jsx_editor.core.jsx.lexer import JsxLexer, decode_entities, decode_js_string, split_template, split_top_level
from jsx_editor.core.jsx.nodes import (
  BooleanLiteral,
  EmptyExpression,
  JsxAttribute,
  JsxElement,
  JsxExpressionContainer,
  JsxFragment,
  JsxSpreadAttribute,
  JsxText,
  NullLiteral,
  NumericLiteral,
  ObjectExpression,
  OpaqueExpression,
  StringLiteral,
  TemplateLiteral,
)
from jsx_editor.core.jsx.tokens import TokenKind


# --- Lexer ---


def test_tag_tokens():
  lexer = JsxLexer('<div className="a b">')
  kinds = []
  while True:
    token = lexer.next_tag_token()
    kinds.append((token.kind, token.text))
    if token.kind == TokenKind.EOF:
      break
  assert kinds == [
    (TokenKind.LT, "<"),
    (TokenKind.IDENTIFIER, "div"),
    (TokenKind.IDENTIFIER, "className"),
    (TokenKind.EQUALS, "="),
    (TokenKind.STRING, "a b"),
    (TokenKind.GT, ">"),
    (TokenKind.EOF, ""),
  ]


def test_hyphenated_names():
  token = JsxLexer("aria-label").next_tag_token()
  assert token.kind == TokenKind.IDENTIFIER
  assert token.text == "aria-label"


def test_quoted_string_escapes():
  token = JsxLexer(r'"say \"hi\"\nnow"').next_tag_token()
  assert token.text == 'say "hi"\nnow'


def test_container_ignores_braces_in_strings_and_comments():
  token = JsxLexer('{ "}" /* } */ + `${ {a: 1} }` }').next_tag_token()
  assert token.kind == TokenKind.EXPRESSION
  assert token.text == ' "}" /* } */ + `${ {a: 1} }` '


def test_location_is_one_based():
  lexer = JsxLexer("ab\ncd")
  assert lexer.location(0) == (1, 1)
  assert lexer.location(4) == (2, 2)


def test_peek_does_not_consume():
  lexer = JsxLexer("<a>")
  assert lexer.peek_tag_token().kind == TokenKind.LT
  assert lexer.next_tag_token().kind == TokenKind.LT


def test_child_tokens_keep_whitespace():
  lexer = JsxLexer("  hello {name}<")
  text_token = lexer.next_child_token()
  assert text_token.kind == TokenKind.TEXT
  assert text_token.text == "  hello "
  assert lexer.next_child_token().kind == TokenKind.EXPRESSION
  assert lexer.next_child_token().kind == TokenKind.LT


@pytest.mark.parametrize("source", ["a > b", "a } b"])
def test_child_text_rejects_closing_delimiters(source):
  with pytest.raises(MarkupSyntaxError):
    JsxLexer(source).next_child_token()


def test_unterminated_string():
  with pytest.raises(MarkupSyntaxError, match="Unterminated string"):
    JsxLexer('"open').next_tag_token()


def test_split_template():
  quasis, expressions = split_template("`Hello ${name}, bye ${ {a: 1}.a }!`")
  assert quasis == ["Hello ", ", bye ", "!"]
  assert expressions == ["name", " {a: 1}.a "]


def test_split_top_level_ignores_nested_separators():
  parts = split_top_level('a: f(1, 2), b: "x,y", c: { d: 1, e: 2 }, g: `${h, i}`')
  assert [part.strip() for part in parts] == ["a: f(1, 2)", 'b: "x,y"', "c: { d: 1, e: 2 }", "g: `${h, i}`"]


def test_split_top_level_maxsplit():
  assert split_top_level('color: dark ? "white" : "black"', ":", maxsplit=1) == ["color", ' dark ? "white" : "black"']


@pytest.mark.parametrize(
  "body, expected",
  [
    (r"\u{1F600}", "\U0001F600"),
    (r"\uD83D\uDE00", "\U0001F600"),
    (r"\u00e9\x41", "\u00e9A"),
    (r"tab\there\nnew", "tab\there\nnew"),
    (r"\'\"\\", "'\"\\"),
    (r"\q", "q"),
    ("line\\\ncontinued", "linecontinued"),
  ],
)
def test_decode_js_string(body, expected):
  assert decode_js_string(body) == expected


@pytest.mark.parametrize("body", [r"\u{110000}", r"\x4", r"\u12", r"\1", r"\uD83D"])
def test_decode_js_string_rejects_malformed_escapes(body):
  with pytest.raises(ValueError):
    decode_js_string(body)


@pytest.mark.parametrize(
  "text, expected",
  [
    ("a &amp; b", "a & b"),
    ("&#169; &#xA9;", "© ©"),
    ("&copy b", "&copy b"),
    ("a &lt b", "a &lt b"),
    ("&bogus; stays", "&bogus; stays"),
  ],
)
def test_decode_entities_requires_semicolon(text, expected):
  assert decode_entities(text) == expected


# --- Grammar ---


def test_nested_elements():
  program = parse_to_generic_ast("<div><span /></div>")
  root = program.body[0]
  assert isinstance(root, JsxElement)
  assert root.name == "div"
  assert len(root.children) == 1
  child = root.children[0]
  assert isinstance(child, JsxElement)
  assert child.name == "span"
  assert child.self_closing


def test_fragment_root():
  program = parse_to_generic_ast("<><p>a</p></>")
  root = program.body[0]
  assert isinstance(root, JsxFragment)
  assert isinstance(root.children[0], JsxElement)


def test_member_and_namespaced_names():
  program = parse_to_generic_ast('<Layout.Header><svg:rect xlink:href="#a" /></Layout.Header>')
  root = program.body[0]
  assert root.name == "Layout.Header"
  rect = root.children[0]
  assert rect.name == "svg:rect"
  assert rect.attributes[0].name == "xlink:href"


def test_attribute_forms():
  program = parse_to_generic_ast('<input disabled value="x" size={3} {...rest} />')
  attrs = program.body[0].attributes
  assert isinstance(attrs[0], JsxAttribute) and attrs[0].value is None
  assert isinstance(attrs[1].value, StringLiteral) and attrs[1].value.value == "x"
  assert isinstance(attrs[2].value, JsxExpressionContainer)
  assert isinstance(attrs[2].value.expression, NumericLiteral)
  assert isinstance(attrs[3], JsxSpreadAttribute)
  assert attrs[3].source == "rest"


def test_text_entities_are_decoded():
  program = parse_to_generic_ast("<p>Fish &amp; Chips &#169;</p>")
  text_node = program.body[0].children[0]
  assert isinstance(text_node, JsxText)
  assert text_node.value == "Fish & Chips ©"


def test_multiple_roots_and_semicolons():
  program = parse_to_generic_ast("<a />;\n<b />;")
  assert [node.name for node in program.body] == ["a", "b"]


@pytest.mark.parametrize(
  "source",
  [
    "<div>",
    "<div></span>",
    "<div attr={} />",
    "<div /> trailing",
    "<div {notSpread} />",
    "<>text</div>",
    "<div>text</>",
  ],
)
def test_grammar_errors(source):
  with pytest.raises(MarkupSyntaxError):
    parse_to_generic_ast(source)


def test_error_reports_position():
  with pytest.raises(MarkupSyntaxError) as info:
    parse_to_generic_ast("<div>\n  <p>hi</span>\n</div>")
  assert info.value.line == 2
  assert "line 2" in str(info.value)


# --- Expressions ---


@pytest.mark.parametrize(
  "source, expected_type, value",
  [
    ('"hi"', StringLiteral, "hi"),
    ("'single'", StringLiteral, "single"),
    ("42", NumericLiteral, 42),
    ("-1.5", NumericLiteral, -1.5),
    ("true", BooleanLiteral, True),
    (" false ", BooleanLiteral, False),
  ],
)
def test_literal_classification(source, expected_type, value):
  expr = classify_expression(source)
  assert isinstance(expr, expected_type)
  assert expr.value == value


def test_null_and_undefined():
  assert isinstance(classify_expression("null"), NullLiteral)
  assert isinstance(classify_expression("undefined"), NullLiteral)


def test_keyword_literals_are_fresh_instances():
  assert classify_expression("true") is not classify_expression("true")


def test_object_literal():
  expr = classify_expression('{ color: "red", "font-size": 12, nested: { a: 1 }, ref: value }')
  assert isinstance(expr, ObjectExpression)
  props = {prop.key: prop.value for prop in expr.properties}
  assert props["color"].value == "red"
  assert props["font-size"].value == 12
  assert isinstance(props["nested"], ObjectExpression)
  assert isinstance(props["ref"], OpaqueExpression)


def test_object_literal_keeps_literal_siblings_of_dynamic_values():
  expr = classify_expression('{ color: dark ? "white" : "black", padding: "4px", label: `Hi ${name}`, ...rest, size }')
  props = {prop.key: prop.value for prop in expr.properties}
  assert list(props) == ["color", "padding", "label"]
  assert isinstance(props["color"], OpaqueExpression)
  assert props["padding"].value == "4px"
  assert isinstance(props["label"], TemplateLiteral)


def test_object_literal_string_keys_and_values_use_js_escapes():
  expr = classify_expression(r"""{ "ab": 'it\'s', content: "\u{1F600}" }""")
  props = {prop.key: prop.value.value for prop in expr.properties}
  assert props == {"ab": "it's", "content": "\U0001F600"}


@pytest.mark.parametrize(
  "source, value",
  [
    (r'"\u{1F600}"', "\U0001F600"),
    (r'"\x41B"', "AB"),
    (r"'tab\tend'", "tab\tend"),
    (r'"\d"', "d"),
  ],
)
def test_string_literals_decode_js_escapes(source, value):
  expr = classify_expression(source)
  assert isinstance(expr, StringLiteral)
  assert expr.value == value


@pytest.mark.parametrize("source", [r'"\x4"', r'"\u{110000}"', '"a" + "b"', "'a' 'b'"])
def test_malformed_or_compound_strings_are_opaque(source):
  assert isinstance(classify_expression(source), OpaqueExpression)


def test_template_literal():
  expr = classify_expression("`Hello ${name}!`")
  assert isinstance(expr, TemplateLiteral)
  assert expr.static_text == "Hello !"


@pytest.mark.parametrize("source", ["() => 1", "handleClick", "items.map(x => x)", "a ? b : c", "f'x'"])
def test_dynamic_expressions_are_opaque(source):
  assert isinstance(classify_expression(source), OpaqueExpression)


def test_comment_only_container_is_empty():
  assert isinstance(classify_expression("/* note */"), EmptyExpression)
  assert isinstance(classify_expression("  "), EmptyExpression)


# --- Traversal ---


class _Collector(JsxVisitor):
  def __init__(self):
    super().__init__()
    self.names = []

  def visit_JsxElement(self, node, parent):
    self.names.append(node.name)
    if node.name == "stop":
      self.stop()


def test_walk_visits_depth_first_and_stops():
  program = parse_to_generic_ast("<a><b><c /></b><stop /><d /></a>")
  collector = _Collector()
  walk(program, collector)
  assert collector.names == ["a", "b", "c", "stop"]


def test_walk_skips_children_when_visitor_returns_false():
  class SkipB(JsxVisitor):
    def __init__(self):
      super().__init__()
      self.names = []

    def visit_JsxElement(self, node, parent):
      self.names.append(node.name)
      return node.name != "b"

  program = parse_to_generic_ast("<a><b><c /></b><d /></a>")
  visitor = SkipB()
  walk(program, visitor)
  assert visitor.names == ["a", "b", "d"]
