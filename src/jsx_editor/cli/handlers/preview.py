"""
Preview Command Handlers.

Writes a standalone HTML page for a markup file, and prints the bundled
example snippets.
"""

from pathlib import Path
from typing import Optional

from jsx_editor.cli.handlers.source import read_tree
from jsx_editor.config import EditorConfig
from jsx_editor.editor.session import EXAMPLES
from jsx_editor.preview import render, render_document
from jsx_editor.utils.console import console, log_error, log_success


def handle_preview(
  input_path: Path,
  output_path: Optional[Path],
  title: Optional[str],
  inline_styles: bool,
  config: EditorConfig,
) -> int:
  """
  Handles the 'preview' command.

  Args:
      input_path: Markup file.
      output_path: HTML destination. Printed when None.
      title: Page title. Defaults to the configured component name.
      inline_styles: Resolve utility classes into inline styles.
      config: Resolved configuration.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  tree = read_tree(input_path)
  if tree is None:
    return 1

  surface = render(tree, highlight_color=config.highlight_color, inline_classes=inline_styles)
  page = render_document(surface, title or config.default_component_name)

  if output_path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "wt", encoding="utf-8") as f:
      f.write(page)
    log_success(f"Preview written to [path]{output_path}[/path]")
  else:
    print(page)
  return 0


def handle_example(name: Optional[str]) -> int:
  """Handles 'example' command: lists the examples, or prints one."""
  if name is None:
    for key in sorted(EXAMPLES):
      console.print(f"[code]{key}[/code]")
    return 0
  if name not in EXAMPLES:
    log_error(f"Unknown example '{name}'. Available: {', '.join(sorted(EXAMPLES))}")
    return 1
  print(EXAMPLES[name])
  return 0
