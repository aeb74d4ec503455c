"""
Format Command Handler.

Normalizes markup files by parsing and re-serializing them. Unsupported
constructs (expressions, spreads) are dropped in the process, so the output
is what the visual editor would save.
"""

from pathlib import Path
from typing import Dict, List, Optional

from rich.markup import escape
from rich.table import Table

from jsx_editor.config import EditorConfig
from jsx_editor.core.jsx import parse_markup, serialize
from jsx_editor.enums import ParseStatus
from jsx_editor.cli.handlers.source import MARKUP_SUFFIXES, read_tree
from jsx_editor.utils.console import console, log_error, log_success


def handle_format(input_path: Path, output_path: Optional[Path], config: EditorConfig) -> int:
  """
  Handles the 'format' command.

  A single file is written to `output_path`, or printed when no output is
  given. A directory is formatted file by file into the `output_path`
  directory, mirroring the input layout.

  Args:
      input_path: Markup file or directory.
      output_path: Destination file or directory.
      config: Resolved configuration (indent width).

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  if input_path.is_dir():
    if output_path is None:
      log_error("Formatting a directory requires --out")
      return 1
    return _format_directory(input_path, output_path, config)

  tree = read_tree(input_path)
  if tree is None:
    return 1

  code = serialize(tree, indent_width=config.indent_width)
  if output_path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "wt", encoding="utf-8") as f:
      f.write(code + "\n")
    log_success(f"Formatted: [path]{input_path}[/path] -> [path]{output_path}[/path]")
  else:
    print(code)
  return 0


def _format_directory(input_dir: Path, output_dir: Path, config: EditorConfig) -> int:
  files: List[Path] = sorted(p for p in input_dir.rglob("*") if p.is_file() and p.suffix in MARKUP_SUFFIXES)
  failures: Dict[str, str] = {}

  for path in files:
    with open(path, "rt", encoding="utf-8") as f:
      outcome = parse_markup(f.read())
    rel = path.relative_to(input_dir)
    if outcome.status != ParseStatus.OK:
      failures[str(rel)] = outcome.message or "Empty file"
      continue
    target = output_dir / rel
    target.parent.mkdir(parents=True, exist_ok=True)
    with open(target, "wt", encoding="utf-8") as f:
      f.write(serialize(outcome.tree, indent_width=config.indent_width) + "\n")

  _print_batch_summary(len(files), failures)
  return 1 if failures else 0


def _print_batch_summary(total: int, failures: Dict[str, str]) -> None:
  if not failures:
    log_success(f"Batch Complete: {total}/{total} files formatted.")
    return

  table = Table(title="Format Report")
  table.add_column("File", style="cyan")
  table.add_column("Problem", style="red")
  for filename, problem in failures.items():
    table.add_row(escape(filename), escape(problem))

  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {total - len(failures)} formatted, {len(failures)} skipped.")
