"""
Property Panel Model.

`PropertySnapshot` is what a property panel displays for the selected node:
the resolved styles (utility classes overridden by inline style), the editable
text and the background settings. The `*_update` helpers turn control values
into the style updates passed to `EditorSession.update_style`.
"""

import re
from typing import Dict, Optional

from pydantic import BaseModel, Field

from jsx_editor.core.styles import Gradient, class_list, gradient_from_style, has_utility_gradient, resolve
from jsx_editor.core.tree import TreeNode, direct_text_child, text_for_panel
from jsx_editor.enums import BackgroundKind

FONT_SIZE_RANGE = (10, 72)
PADDING_RANGE = (0, 64)
MARGIN_RANGE = (0, 200)

DEFAULT_FONT_SIZE = 16
DEFAULT_TEXT_COLOR = "#000000"
DEFAULT_BACKGROUND_COLOR = "#ffffff"

_LEADING_INT_RE = re.compile(r"^\s*(-?\d+)")


def _leading_int(value: Optional[str], default: int) -> int:
  match = _LEADING_INT_RE.match(str(value)) if value else None
  return int(match.group(1)) if match else default


def _clamp(value: float, bounds) -> int:
  low, high = bounds
  return int(min(max(value, low), high))


class PropertySnapshot(BaseModel):
  """
  Panel view of a selected node.
  """

  node_id: str
  tag_name: Optional[str] = Field(None, description="Element tag, None for text nodes.")
  is_text: bool = False
  has_text: bool = Field(False, description="True when the text field applies (text node or text child).")
  text: str = ""
  styles: Dict[str, str] = Field(default_factory=dict, description="Class styles overridden by inline style.")
  background_kind: BackgroundKind = BackgroundKind.SOLID
  gradient: Gradient = Field(default_factory=Gradient)
  has_utility_gradient: bool = Field(False, description="Gradient utilities the panel cannot read back.")

  @classmethod
  def from_node(cls, node: TreeNode) -> "PropertySnapshot":
    """
    Builds the snapshot of a node.

    Args:
        node: The selected node.

    Returns:
        PropertySnapshot: The populated snapshot.
    """
    if node.is_text:
      return cls(node_id=node.id, is_text=True, has_text=True, text=node.text_content)

    styles = resolve(node.attributes)
    gradient = gradient_from_style(node.style)
    return cls(
      node_id=node.id,
      tag_name=node.tag_name,
      has_text=direct_text_child(node) is not None,
      text=text_for_panel(node),
      styles=styles,
      background_kind=BackgroundKind.GRADIENT if gradient else BackgroundKind.SOLID,
      gradient=gradient or Gradient(),
      has_utility_gradient=has_utility_gradient(class_list(node.attributes)),
    )

  @property
  def font_size(self) -> int:
    return _leading_int(self.styles.get("fontSize"), DEFAULT_FONT_SIZE)

  @property
  def is_bold(self) -> bool:
    return self.styles.get("fontWeight") in ("bold", "700")

  @property
  def color(self) -> str:
    return self.styles.get("color") or DEFAULT_TEXT_COLOR

  @property
  def background_color(self) -> str:
    return self.styles.get("backgroundColor") or DEFAULT_BACKGROUND_COLOR

  @property
  def padding(self) -> int:
    return _leading_int(self.styles.get("padding"), 0)

  @property
  def margin(self) -> int:
    return _leading_int(self.styles.get("margin"), 0)


# --- Style Updates ---


def font_size_update(size: float) -> Dict[str, str]:
  """Font size in pixels, clamped to the panel range."""
  return {"fontSize": f"{_clamp(size, FONT_SIZE_RANGE)}px"}


def font_weight_update(bold: bool) -> Dict[str, str]:
  return {"fontWeight": "bold" if bold else "normal"}


def color_update(color: str) -> Dict[str, str]:
  return {"color": color}


def padding_update(size: float) -> Dict[str, str]:
  return {"padding": f"{_clamp(size, PADDING_RANGE)}px"}


def margin_update(size: float) -> Dict[str, str]:
  return {"margin": f"{_clamp(size, MARGIN_RANGE)}px"}


def solid_background_update(color: Optional[str] = None) -> Dict[str, str]:
  """
  Switches to a solid background, clearing any gradient.

  Args:
      color: Background colour. Defaults to white.
  """
  return {"backgroundImage": "none", "backgroundColor": color or DEFAULT_BACKGROUND_COLOR}


def gradient_update(gradient: Gradient) -> Dict[str, str]:
  """Switches to a gradient background over a transparent colour."""
  return {"backgroundImage": gradient.to_css(), "backgroundColor": "transparent"}
