"""
Linear Gradient Helpers.

The property panel edits two-colour linear gradients stored in the inline
`backgroundImage` property. Extraction uses a fixed three-group pattern;
anything else (more stops, nested functions, malformed text) is treated as a
solid background.
"""

import re
from typing import List, Mapping, Optional, Tuple

from pydantic import BaseModel, Field

_GRADIENT_RE = re.compile(r"linear-gradient\(([^,]+),\s*([^,]+),\s*([^)]+)\)")

GRADIENT_DIRECTIONS: List[Tuple[str, str]] = [
  ("to right", "→ Right"),
  ("to left", "← Left"),
  ("to bottom", "↓ Down"),
  ("to top", "↑ Up"),
  ("to bottom right", "↘ Diagonal"),
  ("to top right", "↗ Diagonal"),
]

DEFAULT_GRADIENT_START = "#8b5cf6"
DEFAULT_GRADIENT_END = "#3b82f6"
DEFAULT_GRADIENT_DIRECTION = "to right"


class Gradient(BaseModel):
  """
  A two-stop linear gradient.
  """

  direction: str = Field(DEFAULT_GRADIENT_DIRECTION, description="CSS direction keyword, e.g. 'to right'.")
  start: str = Field(DEFAULT_GRADIENT_START, description="First colour stop.")
  end: str = Field(DEFAULT_GRADIENT_END, description="Second colour stop.")

  def to_css(self) -> str:
    """Returns the `linear-gradient(...)` expression."""
    return f"linear-gradient({self.direction}, {self.start}, {self.end})"


def parse_gradient(value: Optional[str]) -> Optional[Gradient]:
  """
  Extracts direction and colour stops from a gradient expression.

  Args:
      value: A `backgroundImage` value.

  Returns:
      Optional[Gradient]: The gradient, or None when the value does not match.
  """
  if not value or "linear-gradient" not in value:
    return None
  match = _GRADIENT_RE.search(value)
  if not match:
    return None
  return Gradient(direction=match.group(1).strip(), start=match.group(2).strip(), end=match.group(3).strip())


def gradient_from_style(style: Mapping[str, str]) -> Optional[Gradient]:
  """Reads the gradient (if any) from a resolved StyleMap."""
  return parse_gradient(style.get("backgroundImage"))


def has_utility_gradient(classes: str) -> bool:
  """True when the class list uses gradient utilities the resolver cannot read back."""
  return any(token.startswith(("bg-gradient", "from-", "to-")) for token in classes.split())
