"""
JSX Token Definitions.

Defines the token kinds produced by the `JsxLexer` and the `Token` record
consumed by the recursive descent front end.
"""

from dataclasses import dataclass
from enum import Enum


class TokenKind(str, Enum):
  """Enumeration of Lexer Token Types."""

  LT = "<"
  GT = ">"
  SLASH = "/"
  EQUALS = "="
  DOT = "."
  COLON = ":"
  SEMICOLON = ";"
  IDENTIFIER = "IDENTIFIER"
  STRING = "STRING"  # Quoted attribute value, already unescaped
  EXPRESSION = "EXPRESSION"  # Raw source between balanced braces
  TEXT = "TEXT"  # Raw JSX text between tags
  EOF = "EOF"


@dataclass
class Token:
  """A lexical unit with its source position."""

  kind: TokenKind
  text: str
  line: int
  col: int
  pos: int = 0


class MarkupSyntaxError(SyntaxError):
  """
  Raised when the grammar front end cannot parse the markup.

  Attributes:
      reason (str): Human readable description without position.
      line (int): 1-based line of the offending input.
      col (int): 1-based column of the offending input.
  """

  def __init__(self, reason: str, line: int = 0, col: int = 0) -> None:
    location = f" (line {line}, column {col})" if line else ""
    super().__init__(f"{reason}{location}")
    self.reason = reason
    self.line = line
    self.col = col
