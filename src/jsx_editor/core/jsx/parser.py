"""
JSX Markup Parser.

Converts markup text into the editor `TreeNode` model:

1.  **Gate**: Input that does not start with `<` (after trimming) is not
    markup and yields `None`.
2.  **Grammar**: The generic AST is produced by the front end
    (`parse_to_generic_ast`). Grammar failures raise `MarkupSyntaxError`.
3.  **Conversion**: The first top-level element or fragment is converted into
    fresh `TreeNode` objects. Constructs outside the static dialect (identifier
    or call expressions, spreads, nested objects) are dropped silently.

`parse_markup` wraps the above into a `ParseOutcome` for callers that need the
status and a user facing message rather than exceptions.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from jsx_editor.core.jsx.frontend import JsxVisitor, parse_to_generic_ast, walk
from jsx_editor.core.jsx.nodes import (
  BooleanLiteral,
  Expression,
  JsxAttribute,
  JsxElement,
  JsxExpressionContainer,
  JsxFragment,
  JsxNode,
  JsxProgram,
  JsxText,
  NumericLiteral,
  ObjectExpression,
  StringLiteral,
  TemplateLiteral,
)
from jsx_editor.core.jsx.tokens import MarkupSyntaxError
from jsx_editor.core.tree import FRAGMENT_TAG, TreeNode, element, text
from jsx_editor.enums import ParseStatus

NOT_MARKUP_MESSAGE = "Nothing to preview. Paste static JSX only (no functions, hooks, or imports)."


def is_markup(source_text: str) -> bool:
  """True when the trimmed text starts with the open-tag delimiter."""
  return source_text.strip().startswith("<")


def parse(source_text: str) -> Optional[TreeNode]:
  """
  Parses markup text into a fresh tree.

  Args:
      source_text: The markup snippet.

  Returns:
      Optional[TreeNode]: The root node, or None when the input is not markup.

  Raises:
      MarkupSyntaxError: If the grammar front end rejects the input.
  """
  if not is_markup(source_text):
    return None

  program = parse_to_generic_ast(source_text)
  finder = _RootFinder()
  walk(program, finder)
  return finder.root


class _RootFinder(JsxVisitor):
  """Converts the first element or fragment sitting directly under the program."""

  def __init__(self) -> None:
    super().__init__()
    self.root: Optional[TreeNode] = None

  def visit_JsxElement(self, node: JsxElement, parent: Optional[JsxNode]) -> bool:
    if isinstance(parent, JsxProgram):
      self.root = convert_element(node)
      self.stop()
    return False

  def visit_JsxFragment(self, node: JsxFragment, parent: Optional[JsxNode]) -> bool:
    if isinstance(parent, JsxProgram):
      self.root = convert_fragment(node)
      self.stop()
    return False


# --- Conversion ---


def convert_element(node: JsxElement) -> TreeNode:
  """Builds an element `TreeNode` (with fresh ids) from a generic element."""
  attributes = extract_attributes(node.attributes)
  children = convert_children(node.children)
  return element(node.name, attributes, tuple(children))


def convert_fragment(node: JsxFragment) -> TreeNode:
  return element(FRAGMENT_TAG, {}, tuple(convert_children(node.children)))


def extract_attributes(attributes: List[Any]) -> Dict[str, Any]:
  """
  Extracts attribute values in priority order.

  - bare attribute -> True
  - quoted string -> str
  - container string/number/boolean -> native value
  - container object literal -> shallow dict of scalar properties
  - container template literal -> static text
  - anything else is omitted
  """
  props: Dict[str, Any] = {}
  for attr in attributes:
    if not isinstance(attr, JsxAttribute):
      continue

    if attr.value is None:
      props[attr.name] = True
    elif isinstance(attr.value, StringLiteral):
      props[attr.name] = attr.value.value
    elif isinstance(attr.value, JsxExpressionContainer):
      value = _expression_value(attr.value.expression)
      if value is not None:
        props[attr.name] = value
  return props


def _expression_value(expr: Expression) -> Any:
  scalar = _scalar_value(expr)
  if scalar is not None:
    return scalar
  if isinstance(expr, ObjectExpression):
    obj: Dict[str, Any] = {}
    for prop in expr.properties:
      value = _scalar_value(prop.value)
      if value is not None:
        obj[prop.key] = value
    return obj
  if isinstance(expr, TemplateLiteral):
    return expr.static_text
  return None


def _scalar_value(expr: Expression) -> Any:
  if isinstance(expr, (StringLiteral, NumericLiteral, BooleanLiteral)):
    return expr.value
  return None


def convert_children(children: List[JsxNode]) -> List[TreeNode]:
  """
  Converts generic children into tree nodes.

  Literal text is trimmed and dropped when empty; string and template
  containers become text nodes; other expressions are dropped.
  """
  result: List[TreeNode] = []
  for child in children:
    if isinstance(child, JsxElement):
      result.append(convert_element(child))
    elif isinstance(child, JsxFragment):
      result.append(convert_fragment(child))
    elif isinstance(child, JsxText):
      content = child.value.strip()
      if content:
        result.append(text(content))
    elif isinstance(child, JsxExpressionContainer):
      expr = child.expression
      if isinstance(expr, StringLiteral):
        result.append(text(expr.value))
      elif isinstance(expr, TemplateLiteral) and expr.static_text.strip():
        result.append(text(expr.static_text))
  return result


# --- Outcome Facade ---


@dataclass(frozen=True)
class ParseOutcome:
  """
  Result of parsing user supplied text, suitable for UI messaging.

  Attributes:
      status (ParseStatus): Category of the outcome.
      tree (Optional[TreeNode]): Root node when parsing succeeded.
      message (Optional[str]): Human readable notice or error.
  """

  status: ParseStatus
  tree: Optional[TreeNode] = None
  message: Optional[str] = None

  @property
  def ok(self) -> bool:
    return self.status == ParseStatus.OK

  @property
  def is_error(self) -> bool:
    return self.status == ParseStatus.SYNTAX_ERROR


def parse_markup(source_text: str) -> ParseOutcome:
  """
  Parses text and classifies the outcome instead of raising.

  Args:
      source_text: The markup snippet.

  Returns:
      ParseOutcome: EMPTY, NOT_MARKUP, OK (with tree) or SYNTAX_ERROR (with message).
  """
  if not source_text.strip():
    return ParseOutcome(status=ParseStatus.EMPTY)

  try:
    tree = parse(source_text)
  except MarkupSyntaxError as e:
    return ParseOutcome(status=ParseStatus.SYNTAX_ERROR, message=f"Parse error: {e}")

  if tree is None:
    return ParseOutcome(status=ParseStatus.NOT_MARKUP, message=NOT_MARKUP_MESSAGE)
  return ParseOutcome(status=ParseStatus.OK, tree=tree)
