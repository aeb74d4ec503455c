"""
Style Resolution Package.

Maps utility classes and inline styles onto concrete style properties and
reads back the two-colour gradients edited by the property panel.
"""

from jsx_editor.core.styles.gradient import Gradient, gradient_from_style, has_utility_gradient, parse_gradient
from jsx_editor.core.styles.resolver import StyleMap, class_list, inline_style, resolve, styles_from_class_list

__all__ = [
  "Gradient",
  "StyleMap",
  "class_list",
  "gradient_from_style",
  "has_utility_gradient",
  "inline_style",
  "parse_gradient",
  "resolve",
  "styles_from_class_list",
]
