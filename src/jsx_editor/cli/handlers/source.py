"""Shared input handling for CLI commands."""

from pathlib import Path
from typing import Optional

from rich.markup import escape

from jsx_editor.core.jsx import parse_markup
from jsx_editor.core.tree import TreeNode
from jsx_editor.enums import ParseStatus
from jsx_editor.utils.console import log_error, log_warning

MARKUP_SUFFIXES = (".jsx", ".tsx", ".html")


def read_tree(path: Path) -> Optional[TreeNode]:
  """
  Reads and parses a markup file, logging any problem.

  Args:
      path: File to read.

  Returns:
      Optional[TreeNode]: The tree, or None when the file is missing or does
      not hold a valid snippet.
  """
  if not path.is_file():
    log_error(f"Input not found: {escape(str(path))}")
    return None

  with open(path, "rt", encoding="utf-8") as f:
    outcome = parse_markup(f.read())

  if outcome.status == ParseStatus.OK:
    return outcome.tree
  if outcome.status == ParseStatus.EMPTY:
    log_warning(f"{escape(str(path))} is empty")
  else:
    log_error(f"{escape(str(path))}: {escape(outcome.message or '')}")
  return None
