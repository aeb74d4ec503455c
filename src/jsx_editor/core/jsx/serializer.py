"""
JSX Serializer.

Converts an editor `TreeNode` back into markup text. It is the inverse of the
parser for every tree the parser can produce, not a general pretty printer:

- Fragments emit `<>` ... `</>` around their children.
- Childless elements are self-closing.
- An element whose only child is text is emitted inline: `<tag>text</tag>`.
- Other elements place one child per line, indented one level deeper; bare
  text siblings are emitted as indented plain text.

Text that would not survive re-parsing as raw JSX text (braces, angle
brackets, character references, surrounding whitespace, empty strings, or a
text node directly following another text node) is emitted as a string
expression container instead.
"""

import json
import re
from typing import Any, Mapping

from jsx_editor.core.jsx.lexer import ENTITY_RE
from jsx_editor.core.tree import TreeNode

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][\w$]*$")
_UNSAFE_TEXT_CHARS = set("{}<>")


def serialize(node: TreeNode, indent: int = 0, indent_width: int = 2) -> str:
  """
  Serializes a tree (or subtree) to markup.

  Args:
      node: Root of the subtree to emit.
      indent: Nesting level of `node`.
      indent_width: Spaces per nesting level.

  Returns:
      str: Markup text without a trailing newline.
  """
  pad = " " * (indent * indent_width)

  if node.is_text:
    return format_text(node.text_content)

  if node.is_fragment:
    if not node.children:
      return f"{pad}<></>"
    body = _serialize_children(node, indent, indent_width)
    return f"{pad}<>\n{body}\n{pad}</>"

  tag = node.tag_name
  attrs = serialize_attributes(node.attributes)

  if not node.children:
    return f"{pad}<{tag}{attrs} />"

  if len(node.children) == 1 and node.children[0].is_text:
    return f"{pad}<{tag}{attrs}>{format_text(node.children[0].text_content)}</{tag}>"

  body = _serialize_children(node, indent, indent_width)
  return f"{pad}<{tag}{attrs}>\n{body}\n{pad}</{tag}>"


def _serialize_children(node: TreeNode, indent: int, indent_width: int) -> str:
  child_pad = " " * ((indent + 1) * indent_width)
  lines = []
  previous_was_text = False
  for child in node.children:
    if child.is_text:
      lines.append(f"{child_pad}{format_text(child.text_content, force_container=previous_was_text)}")
    else:
      lines.append(serialize(child, indent + 1, indent_width))
    previous_was_text = child.is_text
  return "\n".join(lines)


def format_text(content: str, force_container: bool = False) -> str:
  """
  Emits a text node's content.

  Args:
      content: Raw text.
      force_container: Emit as `{"..."}` even when the raw form is safe.

  Returns:
      str: Raw JSX text, or a string expression container when needed.
  """
  if force_container or _needs_container(content):
    return "{" + json.dumps(content, ensure_ascii=False) + "}"
  return content


def _needs_container(content: str) -> bool:
  if not content or content != content.strip():
    return True
  if any(char in _UNSAFE_TEXT_CHARS for char in content):
    return True
  return bool(ENTITY_RE.search(content))


# --- Attributes ---


def serialize_attributes(attributes: Mapping[str, Any]) -> str:
  """
  Serializes attributes in insertion order, with a leading space when non-empty.

  - `style` mappings -> `style={{ key: "value" }}`
  - True -> bare name; False/None -> omitted
  - strings -> double quoted with backslash, quote and newline escaped
  - numbers -> `{n}`; other objects -> `{json}`
  """
  parts = []
  for key, value in attributes.items():
    if value is None or value is False:
      continue
    if key == "style" and isinstance(value, Mapping):
      parts.append(f"style={{{style_literal(value)}}}")
    elif isinstance(value, str):
      parts.append(f'{key}="{escape_string(value)}"')
    elif value is True:
      parts.append(key)
    elif isinstance(value, (int, float)):
      parts.append(f"{key}={{{_number_literal(value)}}}")
    else:
      parts.append(f"{key}={{{json.dumps(value, separators=(',', ':'), ensure_ascii=False)}}}")
  return " " + " ".join(parts) if parts else ""


def style_literal(style: Mapping[str, Any]) -> str:
  """
  Builds the object literal for a style mapping, skipping empty values.

  Returns:
      str: e.g. `{ color: "red", padding: "4px" }`, or `{}` when nothing is declared.
  """
  parts = []
  for key, value in style.items():
    if value is None or value == "":
      continue
    name = key if _IDENTIFIER_RE.match(key) else json.dumps(key, ensure_ascii=False)
    if isinstance(value, bool):
      literal = "true" if value else "false"
    elif isinstance(value, (int, float)):
      literal = _number_literal(value)
    else:
      literal = json.dumps(str(value), ensure_ascii=False)
    parts.append(f"{name}: {literal}")
  if not parts:
    return "{}"
  return "{ " + ", ".join(parts) + " }"


def escape_string(value: str) -> str:
  """Escapes backslash, double quote and newline for a quoted attribute value."""
  return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def _number_literal(value: Any) -> str:
  if isinstance(value, float):
    return repr(value)
  return str(value)
