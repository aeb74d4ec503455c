"""
Preview Package.

Renders editor trees into interactive view trees and HTML preview pages.
"""

from jsx_editor.preview.document import render_document
from jsx_editor.preview.renderer import (
  InteractionState,
  PreviewSurface,
  dispatch,
  render,
  render_node,
  valid_tag_name,
)
from jsx_editor.preview.view import EditableText, ViewElement, ViewEvent, ViewFragment, ViewNode, ViewText

__all__ = [
  "EditableText",
  "InteractionState",
  "PreviewSurface",
  "ViewElement",
  "ViewEvent",
  "ViewFragment",
  "ViewNode",
  "ViewText",
  "dispatch",
  "render",
  "render_document",
  "render_node",
  "valid_tag_name",
]
