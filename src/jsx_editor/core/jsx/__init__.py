"""
JSX Dialect Package.

Grammar front end, tree conversion and serialization for static JSX snippets.
"""

from jsx_editor.core.jsx.frontend import JsxVisitor, parse_to_generic_ast, walk
from jsx_editor.core.jsx.parser import ParseOutcome, is_markup, parse, parse_markup
from jsx_editor.core.jsx.serializer import serialize
from jsx_editor.core.jsx.tokens import MarkupSyntaxError

__all__ = [
  "JsxVisitor",
  "MarkupSyntaxError",
  "ParseOutcome",
  "is_markup",
  "parse",
  "parse_markup",
  "parse_to_generic_ast",
  "serialize",
  "walk",
]
