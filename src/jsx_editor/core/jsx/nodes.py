"""
JSX Generic AST Nodes.

These dataclasses are the output of the grammar front end. They describe the
*syntax* of the snippet (elements, attributes, text, expression containers and
the small literal subset understood by the editor) and know nothing about node
ids, styles or rendering. The tree converter in `parser.py` walks them to build
the editor `TreeNode` model.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Union


@dataclass
class JsxNode:
  """Base class for all generic AST nodes."""

  def child_nodes(self) -> Iterator["JsxNode"]:
    """Yields the direct children visited by `walk`."""
    return iter(())


# --- Expressions ---


@dataclass
class Expression(JsxNode):
  """Base class for expression nodes found inside `{...}` containers."""


@dataclass
class StringLiteral(Expression):
  value: str


@dataclass
class NumericLiteral(Expression):
  value: Union[int, float]


@dataclass
class BooleanLiteral(Expression):
  value: bool


@dataclass
class NullLiteral(Expression):
  """`null` or `undefined`."""


@dataclass
class TemplateLiteral(Expression):
  """
  A backtick template.

  Attributes:
      quasis (List[str]): Raw static segments, one more than `expressions`.
      expressions (List[str]): Raw source of each embedded `${...}`.
  """

  quasis: List[str] = field(default_factory=list)
  expressions: List[str] = field(default_factory=list)

  @property
  def static_text(self) -> str:
    """Concatenation of the static segments; embedded expressions are dropped."""
    return "".join(self.quasis)


@dataclass
class ObjectProperty(JsxNode):
  key: str
  value: Expression

  def child_nodes(self) -> Iterator[JsxNode]:
    yield self.value


@dataclass
class ObjectExpression(Expression):
  properties: List[ObjectProperty] = field(default_factory=list)

  def child_nodes(self) -> Iterator[JsxNode]:
    yield from self.properties


@dataclass
class OpaqueExpression(Expression):
  """Any expression outside the supported literal subset (identifiers, calls, arrows...)."""

  source: str


@dataclass
class EmptyExpression(Expression):
  """`{}` or a container holding only comments."""


# --- JSX Structure ---


@dataclass
class JsxText(JsxNode):
  """Literal text between tags, with character references decoded."""

  value: str


@dataclass
class JsxExpressionContainer(JsxNode):
  expression: Expression

  def child_nodes(self) -> Iterator[JsxNode]:
    yield self.expression


@dataclass
class JsxAttribute(JsxNode):
  """
  A `name`, `name="value"` or `name={expr}` attribute.

  `value` is None for bare attributes.
  """

  name: str
  value: Optional[Union[StringLiteral, JsxExpressionContainer]] = None

  def child_nodes(self) -> Iterator[JsxNode]:
    if self.value is not None:
      yield self.value


@dataclass
class JsxSpreadAttribute(JsxNode):
  """`{...props}` in attribute position."""

  source: str


JsxAttributeLike = Union[JsxAttribute, JsxSpreadAttribute]


@dataclass
class JsxElement(JsxNode):
  name: str
  attributes: List[JsxAttributeLike] = field(default_factory=list)
  children: List[JsxNode] = field(default_factory=list)
  self_closing: bool = False

  def child_nodes(self) -> Iterator[JsxNode]:
    yield from self.attributes
    yield from self.children


@dataclass
class JsxFragment(JsxNode):
  children: List[JsxNode] = field(default_factory=list)

  def child_nodes(self) -> Iterator[JsxNode]:
    yield from self.children


@dataclass
class JsxProgram(JsxNode):
  """Root of a parsed snippet: one or more top-level elements or fragments."""

  body: List[Union[JsxElement, JsxFragment]] = field(default_factory=list)

  def child_nodes(self) -> Iterator[JsxNode]:
    yield from self.body
