"""
Style Resolver.

Resolves the visual properties of an element from two independent sources:

1.  **Utility classes**: the space separated tokens of `className` are matched
    against a fixed set of patterns (font size/weight, named colours, spacing,
    radius, flex helpers).
2.  **Inline style**: the `style` mapping, taken verbatim.

Inline styles are merged last and therefore win on key collisions.
"""

import re
from typing import Any, Dict, Mapping

from jsx_editor.core.styles.palette import (
  BORDER_RADII,
  COLORS,
  FONT_SIZES,
  FONT_WEIGHTS,
  LAYOUT_CLASSES,
  SPACING_PREFIXES,
  SPACING_UNIT,
)

StyleMap = Dict[str, str]

_SPACING_RE = re.compile(r"^(p|px|py|m|mx|my)-(\d+)$")
CLASS_ATTRIBUTES = ("className", "class")


def class_list(attributes: Mapping[str, Any]) -> str:
  """Returns the class-list string of an element (empty when absent or not a string)."""
  for name in CLASS_ATTRIBUTES:
    value = attributes.get(name)
    if isinstance(value, str):
      return value
  return ""


def styles_from_class_list(classes: str) -> StyleMap:
  """
  Derives style properties from utility class tokens.

  Tokens are applied left to right, so a later token overrides an earlier one
  targeting the same property. Unknown tokens are ignored.

  Args:
      classes: Space separated class tokens.

  Returns:
      StyleMap: Derived properties.
  """
  styles: StyleMap = {}
  for token in classes.split():
    _apply_token(token, styles)
  return styles


def _apply_token(token: str, styles: StyleMap) -> None:
  if token.startswith("text-"):
    name = token[len("text-") :]
    if name in FONT_SIZES:
      styles["fontSize"] = FONT_SIZES[name]
    elif name in COLORS:
      styles["color"] = COLORS[name]
    return

  if token.startswith("font-"):
    weight = FONT_WEIGHTS.get(token[len("font-") :])
    if weight:
      styles["fontWeight"] = weight
    return

  if token.startswith("bg-"):
    color = COLORS.get(token[len("bg-") :])
    if color:
      styles["backgroundColor"] = color
    return

  match = _SPACING_RE.match(token)
  if match:
    amount = f"{int(match.group(2)) * SPACING_UNIT}px"
    for prop in SPACING_PREFIXES[match.group(1)]:
      styles[prop] = amount
    return

  if token in BORDER_RADII:
    styles["borderRadius"] = BORDER_RADII[token]
    return

  if token in LAYOUT_CLASSES:
    prop, value = LAYOUT_CLASSES[token]
    styles[prop] = value


def inline_style(attributes: Mapping[str, Any]) -> StyleMap:
  """
  Returns the explicit inline `style` mapping.

  String values are kept verbatim; booleans become `true`/`false` as written in
  markup and other scalars are converted with `str()`. Missing values are
  skipped.
  """
  style = attributes.get("style")
  if not isinstance(style, Mapping):
    return {}
  return {key: _style_value(value) for key, value in style.items() if value is not None}


def _style_value(value: Any) -> str:
  if isinstance(value, bool):
    return "true" if value else "false"
  return value if isinstance(value, str) else str(value)


def resolve(attributes: Mapping[str, Any]) -> StyleMap:
  """
  Computes the effective StyleMap of an element.

  Args:
      attributes: The element's attribute mapping.

  Returns:
      StyleMap: Class-derived properties overridden by inline ones.
  """
  merged = styles_from_class_list(class_list(attributes))
  merged.update(inline_style(attributes))
  return merged
