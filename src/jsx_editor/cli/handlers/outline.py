"""
Inspection Command Handlers.

- `styles`: table of the resolved style of every element.
- `tree`: outline of the parsed tree.
"""

from pathlib import Path

from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from jsx_editor.cli.handlers.source import read_tree
from jsx_editor.core.styles import class_list, resolve
from jsx_editor.core.tree import TreeNode, iter_nodes
from jsx_editor.utils.console import console

ID_PREVIEW_LENGTH = 8


def _short_id(node: TreeNode) -> str:
  return node.id[:ID_PREVIEW_LENGTH]


def handle_styles(input_path: Path) -> int:
  """Handles 'styles' command."""
  tree = read_tree(input_path)
  if tree is None:
    return 1

  table = Table(title=f"Resolved Styles: {escape(input_path.name)}")
  table.add_column("Element", style="cyan", no_wrap=True)
  table.add_column("Id", style="dim")
  table.add_column("Classes", style="magenta")
  table.add_column("Style")

  for node in iter_nodes(tree):
    if node.is_text or node.is_fragment:
      continue
    styles = resolve(node.attributes)
    declarations = "\n".join(f"{key}: {value}" for key, value in styles.items())
    table.add_row(
      escape(f"<{node.tag_name}>"),
      _short_id(node),
      escape(class_list(node.attributes)),
      escape(declarations) or "[dim]-[/dim]",
    )

  console.print(table)
  return 0


def handle_tree(input_path: Path) -> int:
  """Handles 'tree' command."""
  tree = read_tree(input_path)
  if tree is None:
    return 1

  outline = Tree(f"[bold]{escape(input_path.name)}[/bold]")
  _add_branch(outline, tree)
  console.print(outline)
  return 0


def _label(node: TreeNode) -> str:
  if node.is_text:
    return f'[text]"{escape(node.text_content)}"[/text] [id]{_short_id(node)}[/id]'
  if node.is_fragment:
    return f"[tag]<>[/tag] [id]{_short_id(node)}[/id]"
  attrs = " ".join(f"{escape(key)}" for key in node.attributes)
  suffix = f" [dim]{attrs}[/dim]" if attrs else ""
  return f"[tag]{escape(f'<{node.tag_name}>')}[/tag]{suffix} [id]{_short_id(node)}[/id]"


def _add_branch(parent: Tree, node: TreeNode) -> None:
  branch = parent.add(_label(node))
  for child in node.children:
    _add_branch(branch, child)
