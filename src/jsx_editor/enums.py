"""
Enumerations for jsx-editor.

This module defines the standard enumerations shared by the tree model, the
parser facade and the property panel.
"""

from enum import Enum


class NodeKind(str, Enum):
  """
  Discriminator of a `TreeNode`.
  """

  ELEMENT = "element"
  TEXT = "text"


class ParseStatus(str, Enum):
  """
  Outcome categories of parsing user supplied source text.

  `NOT_MARKUP` means "nothing to preview" and is not an error, whereas
  `SYNTAX_ERROR` is reported to the user and leaves the previous tree in place.
  """

  EMPTY = "empty"
  NOT_MARKUP = "not_markup"
  OK = "ok"
  SYNTAX_ERROR = "syntax_error"


class BackgroundKind(str, Enum):
  """
  How the property panel presents the background of the selected element.
  """

  SOLID = "solid"
  GRADIENT = "gradient"
