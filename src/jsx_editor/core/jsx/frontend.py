"""
JSX Grammar Front End.

This module is the narrow capability interface between the editor and the
grammar engine:

- `parse_to_generic_ast(text)` turns markup text into a `JsxProgram`.
- `walk(node, visitor)` traverses the generic AST.

Markup structure (tags, attributes, text) is handled by a recursive descent
parser over the `JsxLexer`. The contents of `{...}` containers are JavaScript
expressions; the editor only understands a literal subset of them. Strings,
template literals and object literals are read with the lexer, using
JavaScript escape rules. Numbers are classified with LibCST since they share
Python's expression grammar, and `true`, `false`, `null` and `undefined` are
mapped here. Anything else is kept as an `OpaqueExpression` and later dropped
by the tree converter.
"""

import re
from typing import List, Optional, Union

import libcst as cst

from jsx_editor.core.jsx.lexer import JsxLexer, decode_entities, decode_js_string, split_template, split_top_level
from jsx_editor.core.jsx.nodes import (
  BooleanLiteral,
  EmptyExpression,
  Expression,
  JsxAttribute,
  JsxAttributeLike,
  JsxElement,
  JsxExpressionContainer,
  JsxFragment,
  JsxNode,
  JsxProgram,
  JsxSpreadAttribute,
  JsxText,
  NullLiteral,
  NumericLiteral,
  ObjectExpression,
  ObjectProperty,
  OpaqueExpression,
  StringLiteral,
  TemplateLiteral,
)
from jsx_editor.core.jsx.tokens import MarkupSyntaxError, Token, TokenKind

_COMMENT_RE = re.compile(r"//[^\n]*|/\*.*?\*/", re.DOTALL)
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][\w$]*$")
_JS_KEYWORDS = {
  "true": lambda: BooleanLiteral(True),
  "false": lambda: BooleanLiteral(False),
  "null": NullLiteral,
  "undefined": NullLiteral,
}


class JsxFrontend:
  """
  Recursive descent parser producing the generic JSX AST.

  Grammar::

      program    := root (";"? root)* ";"? EOF
      root       := element | fragment
      element    := "<" name attribute* ("/>" | ">" child* "</" name ">")
      fragment   := "<" ">" child* "<" "/" ">"
      attribute  := name ("=" (STRING | EXPRESSION))? | EXPRESSION(spread)
      child      := TEXT | EXPRESSION | element | fragment
      name       := IDENT (("." IDENT)* | ":" IDENT)
  """

  def __init__(self, text: str) -> None:
    self.lexer = JsxLexer(text)

  def parse(self) -> JsxProgram:
    """
    Parses the whole input.

    Returns:
        JsxProgram: Program whose body holds every top-level root.

    Raises:
        MarkupSyntaxError: On any grammar violation.
    """
    program = JsxProgram()
    token = self.lexer.next_tag_token()
    if token.kind != TokenKind.LT:
      raise self._unexpected(token, "'<'")
    program.body.append(self._parse_after_lt(token))

    while True:
      token = self.lexer.next_tag_token()
      if token.kind == TokenKind.SEMICOLON:
        continue
      if token.kind == TokenKind.EOF:
        return program
      if token.kind == TokenKind.LT:
        program.body.append(self._parse_after_lt(token))
        continue
      raise self._unexpected(token, "end of input")

  # --- Helpers ---

  def _unexpected(self, token: Token, expected: str) -> MarkupSyntaxError:
    found = "end of input" if token.kind == TokenKind.EOF else repr(token.text)
    return MarkupSyntaxError(f"Unexpected {found}, expected {expected}", token.line, token.col)

  def _expect(self, kind: TokenKind) -> Token:
    token = self.lexer.next_tag_token()
    if token.kind != kind:
      raise self._unexpected(token, repr(kind.value) if len(kind.value) == 1 else kind.value.lower())
    return token

  def _parse_name(self, first: Token) -> str:
    if first.kind != TokenKind.IDENTIFIER:
      raise self._unexpected(first, "a tag name")
    name = first.text
    nxt = self.lexer.peek_tag_token()
    if nxt.kind == TokenKind.COLON:
      self.lexer.next_tag_token()
      return f"{name}:{self._expect(TokenKind.IDENTIFIER).text}"
    while nxt.kind == TokenKind.DOT:
      self.lexer.next_tag_token()
      name = f"{name}.{self._expect(TokenKind.IDENTIFIER).text}"
      nxt = self.lexer.peek_tag_token()
    return name

  # --- Elements ---

  def _parse_after_lt(self, lt: Token) -> Union[JsxElement, JsxFragment]:
    token = self.lexer.next_tag_token()
    if token.kind == TokenKind.GT:
      children = self._parse_children(closing=None)
      return JsxFragment(children=children)

    name = self._parse_name(token)
    attributes = self._parse_attributes()

    token = self.lexer.next_tag_token()
    if token.kind == TokenKind.SLASH:
      self._expect(TokenKind.GT)
      return JsxElement(name=name, attributes=attributes, children=[], self_closing=True)
    if token.kind != TokenKind.GT:
      raise self._unexpected(token, "'>' or '/>'")

    children = self._parse_children(closing=name)
    return JsxElement(name=name, attributes=attributes, children=children)

  def _parse_attributes(self) -> List[JsxAttributeLike]:
    attributes: List[JsxAttributeLike] = []
    while True:
      token = self.lexer.peek_tag_token()
      if token.kind == TokenKind.EXPRESSION:
        self.lexer.next_tag_token()
        spread = token.text.strip()
        if not spread.startswith("..."):
          raise MarkupSyntaxError("Expected an attribute name or spread", token.line, token.col)
        attributes.append(JsxSpreadAttribute(source=spread[3:].strip()))
        continue
      if token.kind != TokenKind.IDENTIFIER:
        return attributes

      self.lexer.next_tag_token()
      name = token.text
      if self.lexer.peek_tag_token().kind == TokenKind.COLON:
        self.lexer.next_tag_token()
        name = f"{name}:{self._expect(TokenKind.IDENTIFIER).text}"

      if self.lexer.peek_tag_token().kind != TokenKind.EQUALS:
        attributes.append(JsxAttribute(name=name, value=None))
        continue

      self.lexer.next_tag_token()
      value_token = self.lexer.next_tag_token()
      if value_token.kind == TokenKind.STRING:
        attributes.append(JsxAttribute(name=name, value=StringLiteral(value_token.text)))
      elif value_token.kind == TokenKind.EXPRESSION:
        expression = classify_expression(value_token.text)
        if isinstance(expression, EmptyExpression):
          raise MarkupSyntaxError(
            "JSX attributes must only be assigned a non-empty expression", value_token.line, value_token.col
          )
        attributes.append(JsxAttribute(name=name, value=JsxExpressionContainer(expression)))
      else:
        raise self._unexpected(value_token, "an attribute value")

  def _parse_children(self, closing: Optional[str]) -> List[JsxNode]:
    """
    Parses children until the matching closing tag.

    Args:
        closing: Expected closing tag name, or None for a fragment.
    """
    children: List[JsxNode] = []
    while True:
      token = self.lexer.next_child_token()
      if token.kind == TokenKind.EOF:
        expected = f"</{closing}>" if closing else "</>"
        raise MarkupSyntaxError(f"Unterminated JSX contents, expected {expected}", token.line, token.col)

      if token.kind == TokenKind.TEXT:
        children.append(JsxText(value=decode_entities(token.text)))
      elif token.kind == TokenKind.EXPRESSION:
        children.append(JsxExpressionContainer(classify_expression(token.text)))
      else:
        nxt = self.lexer.next_tag_token()
        if nxt.kind != TokenKind.SLASH:
          self.lexer.reset(nxt.pos)
          children.append(self._parse_after_lt(token))
          continue

        end = self.lexer.next_tag_token()
        if end.kind == TokenKind.GT:
          if closing is not None:
            raise MarkupSyntaxError(f"Expected corresponding closing tag for <{closing}>", end.line, end.col)
          return children
        name = self._parse_name(end)
        if closing is None or name != closing:
          expected = f"</{closing}>" if closing else "</>"
          raise MarkupSyntaxError(f"Expected corresponding closing tag {expected}, got </{name}>", end.line, end.col)
        self._expect(TokenKind.GT)
        return children


# --- Expression Classification ---


def classify_expression(source: str) -> Expression:
  """
  Classifies the raw source of an expression container.

  Quoted strings, template literals and object literals are read by the
  lexer; other scalars go through LibCST. Each object property is classified
  on its own, so one dynamic value does not hide its literal siblings.

  Args:
      source: Text between the braces.

  Returns:
      Expression: A literal node, `EmptyExpression`, or `OpaqueExpression`.
  """
  stripped = source.strip()
  if not _COMMENT_RE.sub("", stripped).strip():
    return EmptyExpression()

  if stripped in _JS_KEYWORDS:
    return _JS_KEYWORDS[stripped]()

  lexer = JsxLexer(stripped)
  if stripped[0] in "\"'" and lexer.spans_whole(0):
    return _string_literal(stripped)

  if stripped.startswith("`") and lexer.spans_whole(0):
    quasis, expressions = split_template(stripped)
    return TemplateLiteral(quasis=quasis, expressions=expressions)

  if lexer.is_braced():
    return _object_literal(stripped)

  try:
    node = cst.parse_expression(stripped)
  except (cst.ParserSyntaxError, ValueError):
    return OpaqueExpression(source=stripped)
  return _from_cst(node, stripped)


def _string_literal(source: str) -> Expression:
  try:
    return StringLiteral(value=decode_js_string(source[1:-1]))
  except ValueError:
    return OpaqueExpression(source=source)


def _object_literal(source: str) -> Expression:
  try:
    entries = split_top_level(source[1:-1])
  except MarkupSyntaxError:
    return OpaqueExpression(source=source)

  properties = []
  for entry in entries:
    entry = entry.strip()
    # spreads, shorthands and methods have no static key: value pair
    if not entry or entry.startswith("..."):
      continue
    pieces = split_top_level(entry, ":", maxsplit=1)
    if len(pieces) != 2:
      continue
    key = _property_key(_COMMENT_RE.sub("", pieces[0]).strip())
    if key is None:
      continue
    properties.append(ObjectProperty(key=key, value=classify_expression(pieces[1])))
  return ObjectExpression(properties=properties)


def _property_key(source: str) -> Optional[str]:
  if _IDENTIFIER_RE.match(source):
    return source
  if source[:1] in ("'", '"') and JsxLexer(source).spans_whole(0):
    try:
      return decode_js_string(source[1:-1])
    except ValueError:
      return None
  return None


def _from_cst(node: cst.BaseExpression, source: str) -> Expression:
  """Maps the scalar subset of a LibCST expression onto generic AST nodes."""
  if isinstance(node, (cst.Integer, cst.Float)):
    return NumericLiteral(value=node.evaluated_value)

  if (
    isinstance(node, cst.UnaryOperation)
    and isinstance(node.operator, cst.Minus)
    and isinstance(node.expression, (cst.Integer, cst.Float))
  ):
    return NumericLiteral(value=-node.expression.evaluated_value)

  if isinstance(node, cst.Name) and node.value in _JS_KEYWORDS:
    return _JS_KEYWORDS[node.value]()

  return OpaqueExpression(source=source)


def parse_to_generic_ast(text: str) -> JsxProgram:
  """
  Parses markup text into the generic JSX AST.

  Args:
      text: Markup source.

  Returns:
      JsxProgram: The program node.

  Raises:
      MarkupSyntaxError: If the text is not valid dialect markup.
  """
  return JsxFrontend(text).parse()


# --- Traversal ---


class JsxVisitor:
  """
  Base visitor for `walk`.

  Define `visit_<NodeClass>(node, parent)` methods; returning False skips the
  node's children. Call `stop()` to abort the traversal.
  """

  def __init__(self) -> None:
    self._stopped = False

  def stop(self) -> None:
    self._stopped = True

  @property
  def stopped(self) -> bool:
    return self._stopped


def walk(node: JsxNode, visitor: JsxVisitor, parent: Optional[JsxNode] = None) -> None:
  """
  Depth-first traversal of the generic AST.

  Args:
      node: Node to start from.
      visitor: Receives `visit_<NodeClass>` calls.
      parent: Parent of `node` (None for the root).
  """
  method = getattr(visitor, f"visit_{type(node).__name__}", None)
  descend = True
  if method is not None and method(node, parent) is False:
    descend = False
  if visitor.stopped or not descend:
    return
  for child in node.child_nodes():
    walk(child, visitor, node)
    if visitor.stopped:
      return
