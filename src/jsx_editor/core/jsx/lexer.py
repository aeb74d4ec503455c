"""
JSX Lexer.

JSX is context sensitive: inside a tag the input is a stream of names,
punctuation and attribute values, while between tags it is free text. The
`JsxLexer` therefore exposes two scanning modes that the front end switches
between:

- `next_tag_token()`: names, `<`, `>`, `/`, `=`, `.`, `:`, `;`, quoted strings
  and `{...}` expression containers. Whitespace is skipped.
- `next_child_token()`: raw text runs, `<` and `{...}` containers. Whitespace
  is significant and kept in the text.

Expression containers are captured as raw source with balanced braces. String
literals, template literals (including nested `${...}`) and comments inside a
container are skipped over so that braces within them do not affect nesting.

The same scanning backs the helpers used to read literal expressions:
`split_top_level` for object literal entries, `decode_js_string` for quoted
JavaScript strings and `decode_entities` for character references in text.
"""

import html
import re
from typing import List, Optional, Tuple

from jsx_editor.core.jsx.tokens import MarkupSyntaxError, Token, TokenKind

# JSX names allow hyphens (aria-label, data-id) in addition to JS identifier chars
_NAME_RE = re.compile(r"[A-Za-z_$][\w$\-]*")
_WHITESPACE_RE = re.compile(r"\s+")
_PUNCTUATION = {
  "<": TokenKind.LT,
  ">": TokenKind.GT,
  "/": TokenKind.SLASH,
  "=": TokenKind.EQUALS,
  ".": TokenKind.DOT,
  ":": TokenKind.COLON,
  ";": TokenKind.SEMICOLON,
}

# Escapes understood inside quoted attribute values (inverse of the serializer)
_ATTRIBUTE_ESCAPES = {"\\": "\\", '"': '"', "'": "'", "n": "\n"}

# Character references are only decoded when terminated by `;`
ENTITY_RE = re.compile(r"&(#\d+|#x[0-9a-fA-F]+|\w+);")

_JS_ESCAPE_RE = re.compile(r"\\(u\{([0-9a-fA-F]+)\}|u([0-9a-fA-F]{4})|x([0-9a-fA-F]{2})|\r\n|[\s\S])")
_JS_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}
_LINE_CONTINUATIONS = ("\r\n", "\n", "\r", "\u2028", "\u2029")


class JsxLexer:
  """
  Mode-switching tokenizer for the static JSX dialect.
  """

  def __init__(self, text: str) -> None:
    self.text = text
    self.pos = 0

  # --- Positioning ---

  def location(self, pos: Optional[int] = None) -> Tuple[int, int]:
    """Converts an offset into a 1-based (line, column) pair."""
    pos = self.pos if pos is None else pos
    line = self.text.count("\n", 0, pos) + 1
    col = pos - (self.text.rfind("\n", 0, pos) + 1) + 1
    return line, col

  def error(self, reason: str, pos: Optional[int] = None) -> MarkupSyntaxError:
    """Builds a `MarkupSyntaxError` located at `pos` (defaults to the cursor)."""
    line, col = self.location(pos)
    return MarkupSyntaxError(reason, line, col)

  def _token(self, kind: TokenKind, text: str, start: int) -> Token:
    line, col = self.location(start)
    return Token(kind, text, line, col, start)

  def at_end(self) -> bool:
    return self.pos >= len(self.text)

  def mark(self) -> int:
    return self.pos

  def reset(self, pos: int) -> None:
    self.pos = pos

  # --- Tag Mode ---

  def skip_whitespace(self) -> None:
    match = _WHITESPACE_RE.match(self.text, self.pos)
    if match:
      self.pos = match.end()

  def next_tag_token(self) -> Token:
    """
    Scans the next token inside a tag (or between top-level statements).

    Raises:
        MarkupSyntaxError: On characters that cannot start a tag token.
    """
    self.skip_whitespace()
    start = self.pos
    if self.at_end():
      return self._token(TokenKind.EOF, "", start)

    char = self.text[start]
    if char in _PUNCTUATION:
      self.pos += 1
      return self._token(_PUNCTUATION[char], char, start)

    if char in "\"'":
      value = self._scan_attribute_string(start)
      return self._token(TokenKind.STRING, value, start)

    if char == "{":
      source = self._scan_container(start)
      return self._token(TokenKind.EXPRESSION, source, start)

    match = _NAME_RE.match(self.text, start)
    if match:
      self.pos = match.end()
      return self._token(TokenKind.IDENTIFIER, match.group(0), start)

    raise self.error(f"Unexpected character {char!r}", start)

  def peek_tag_token(self) -> Token:
    """Returns the next tag token without consuming it."""
    saved = self.pos
    try:
      return self.next_tag_token()
    finally:
      self.pos = saved

  def _scan_attribute_string(self, start: int) -> str:
    quote = self.text[start]
    pos = start + 1
    chunks = []
    while pos < len(self.text):
      char = self.text[pos]
      if char == quote:
        self.pos = pos + 1
        return "".join(chunks)
      if char == "\\" and pos + 1 < len(self.text) and self.text[pos + 1] in _ATTRIBUTE_ESCAPES:
        chunks.append(_ATTRIBUTE_ESCAPES[self.text[pos + 1]])
        pos += 2
        continue
      chunks.append(char)
      pos += 1
    raise self.error("Unterminated string literal", start)

  # --- Child Mode ---

  def next_child_token(self) -> Token:
    """
    Scans the next token between an opening and a closing tag.

    Raises:
        MarkupSyntaxError: When text contains a bare `>` or `}`.
    """
    start = self.pos
    if self.at_end():
      return self._token(TokenKind.EOF, "", start)

    char = self.text[start]
    if char == "<":
      self.pos += 1
      return self._token(TokenKind.LT, char, start)
    if char == "{":
      source = self._scan_container(start)
      return self._token(TokenKind.EXPRESSION, source, start)

    pos = start
    while pos < len(self.text) and self.text[pos] not in "<{":
      if self.text[pos] in ">}":
        raise self.error(f"Unexpected token {self.text[pos]!r} in text, use an expression container", pos)
      pos += 1
    self.pos = pos
    return self._token(TokenKind.TEXT, self.text[start:pos], start)

  # --- Expression Containers ---

  def _scan_container(self, start: int) -> str:
    """Consumes `{...}` starting at `start`, returning the inner source."""
    end = self._skip_braced(start + 1)
    self.pos = end + 1
    return self.text[start + 1 : end]

  def _skip_braced(self, pos: int) -> int:
    """
    Skips JavaScript source until the `}` closing the current nesting level.

    Returns:
        int: Offset of the closing brace.
    """
    depth = 1
    text = self.text
    while pos < len(text):
      skipped = self._skip_non_code(pos)
      if skipped is not None:
        pos = skipped
        continue
      char = text[pos]
      if char == "{":
        depth += 1
      elif char == "}":
        depth -= 1
        if depth == 0:
          return pos
      pos += 1
    raise self.error("Unterminated expression container", pos)

  def _skip_non_code(self, pos: int) -> Optional[int]:
    """Returns the offset past a string, template or comment starting at `pos`, or None."""
    text = self.text
    char = text[pos]
    if char in "\"'":
      return self.skip_string(pos)
    if char == "`":
      return self.skip_template(pos)
    if text.startswith("//", pos):
      newline = text.find("\n", pos)
      return len(text) if newline == -1 else newline
    if text.startswith("/*", pos):
      close = text.find("*/", pos + 2)
      if close == -1:
        raise self.error("Unterminated comment", pos)
      return close + 2
    return None

  def skip_string(self, start: int) -> int:
    """
    Skips a quoted JavaScript string starting at `start`.

    Returns:
        int: Offset just past the closing quote.
    """
    quote = self.text[start]
    pos = start + 1
    while pos < len(self.text):
      char = self.text[pos]
      if char == "\\":
        pos += 2
        continue
      if char == quote:
        return pos + 1
      if char == "\n":
        break
      pos += 1
    raise self.error("Unterminated string literal", start)

  def skip_template(self, start: int) -> int:
    """
    Skips a template literal starting at the backtick at `start`.

    Returns:
        int: Offset just past the closing backtick.
    """
    pos = start + 1
    text = self.text
    while pos < len(text):
      char = text[pos]
      if char == "\\":
        pos += 2
        continue
      if char == "`":
        return pos + 1
      if text.startswith("${", pos):
        pos = self._skip_braced(pos + 2) + 1
        continue
      pos += 1
    raise self.error("Unterminated template literal", start)

  def spans_whole(self, start: int) -> bool:
    """True if the string or template literal starting at `start` ends the input."""
    try:
      return self._skip_non_code(start) == len(self.text)
    except MarkupSyntaxError:
      return False

  def is_braced(self) -> bool:
    """True if the whole input is one balanced `{...}` block."""
    if not self.text.startswith("{"):
      return False
    try:
      return self._skip_braced(1) == len(self.text) - 1
    except MarkupSyntaxError:
      return False

  def top_level_offsets(self, separator: str) -> List[int]:
    """
    Finds `separator` characters outside strings, comments and brackets.

    Raises:
        MarkupSyntaxError: On unterminated strings, templates or comments.
    """
    offsets = []
    depth = 0
    text = self.text
    pos = 0
    while pos < len(text):
      skipped = self._skip_non_code(pos)
      if skipped is not None:
        pos = skipped
        continue
      char = text[pos]
      if char in "([{":
        depth += 1
      elif char in ")]}":
        depth -= 1
      elif char == separator and depth == 0:
        offsets.append(pos)
      pos += 1
    return offsets


def split_top_level(source: str, separator: str = ",", maxsplit: int = -1) -> List[str]:
  """
  Splits JavaScript source on a separator that is not nested in brackets.

  Args:
      source: Source to split, e.g. the body of an object literal.
      separator: Single separator character.
      maxsplit: Maximum number of splits, -1 for no limit.

  Returns:
      List[str]: The raw segments, unstripped.
  """
  offsets = JsxLexer(source).top_level_offsets(separator)
  if maxsplit >= 0:
    offsets = offsets[:maxsplit]
  parts = []
  start = 0
  for offset in offsets:
    parts.append(source[start:offset])
    start = offset + 1
  parts.append(source[start:])
  return parts


def split_template(source: str) -> Tuple[list, list]:
  """
  Splits a template literal into its static parts and embedded expressions.

  Args:
      source: The literal including its surrounding backticks.

  Returns:
      Tuple[list, list]: (quasis, expressions) where quasis are the raw static
      segments in order and expressions the raw source of each `${...}`.
  """
  lexer = JsxLexer(source)
  quasis = []
  expressions = []
  pos = 1
  chunk_start = 1
  end = len(source) - 1
  while pos < end:
    if source[pos] == "\\":
      pos += 2
      continue
    if source.startswith("${", pos):
      quasis.append(source[chunk_start:pos])
      close = lexer._skip_braced(pos + 2)
      expressions.append(source[pos + 2 : close])
      pos = close + 1
      chunk_start = pos
      continue
    pos += 1
  quasis.append(source[chunk_start:end])
  return quasis, expressions


# --- Decoding ---


def decode_js_string(body: str) -> str:
  """
  Decodes the escape sequences of a quoted JavaScript string.

  Args:
      body: The literal without its surrounding quotes.

  Returns:
      str: The string value. Surrogate pairs are joined into one code point.

  Raises:
      ValueError: On malformed `\\x`/`\\u` escapes, legacy octal escapes or
      unpaired surrogates.
  """

  def replace(match) -> str:
    if match.group(2) is not None:
      code = int(match.group(2), 16)
      if code > 0x10FFFF:
        raise ValueError(f"Code point out of range: \\u{{{match.group(2)}}}")
      return chr(code)
    hex_digits = match.group(3) or match.group(4)
    if hex_digits is not None:
      return chr(int(hex_digits, 16))
    escape = match.group(1)
    if escape in _LINE_CONTINUATIONS:
      return ""
    if escape in ("u", "x") or escape in "123456789":
      raise ValueError(f"Invalid escape sequence \\{escape}")
    return _JS_ESCAPES.get(escape, escape)

  decoded = _JS_ESCAPE_RE.sub(replace, body)
  return decoded.encode("utf-16", "surrogatepass").decode("utf-16")


def decode_entities(text: str) -> str:
  """Decodes `;`-terminated character references, leaving bare `&` text as written."""
  return ENTITY_RE.sub(lambda match: html.unescape(match.group(0)), text)
