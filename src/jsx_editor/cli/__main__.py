"""
Main Entry Point for the jsx-editor CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `jsx_editor.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from rich.markup import escape

from jsx_editor import __version__
from jsx_editor.cli import commands
from jsx_editor.config import EditorConfig, parse_cli_key_values
from jsx_editor.utils.console import log_error


def _add_config_flag(parser: argparse.ArgumentParser) -> None:
  parser.add_argument(
    "--config",
    nargs="*",
    help="Configuration overrides in key=value format (e.g. indent_width=4)",
  )


def _load_config(args: argparse.Namespace) -> Optional[EditorConfig]:
  search = args.path if args.path.is_dir() else args.path.parent
  try:
    return EditorConfig.load(search_path=search, overrides=parse_cli_key_values(args.config))
  except ValueError as e:
    log_error(escape(str(e)))
    return None


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="jsx-editor: Static JSX visual editing toolkit")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: FORMAT ---
  cmd_fmt = subparsers.add_parser("format", help="Re-serialize a markup file or directory")
  cmd_fmt.add_argument("path", type=Path, help="Input markup file or directory")
  cmd_fmt.add_argument("--out", type=Path, help="Output destination (file or dir)")
  _add_config_flag(cmd_fmt)

  # --- Command: STYLES ---
  cmd_styles = subparsers.add_parser("styles", help="Show the resolved style of every element")
  cmd_styles.add_argument("path", type=Path, help="Input markup file")

  # --- Command: TREE ---
  cmd_tree = subparsers.add_parser("tree", help="Show the parsed node tree")
  cmd_tree.add_argument("path", type=Path, help="Input markup file")

  # --- Command: PREVIEW ---
  cmd_prev = subparsers.add_parser("preview", help="Render a standalone HTML preview page")
  cmd_prev.add_argument("path", type=Path, help="Input markup file")
  cmd_prev.add_argument("--out", type=Path, help="Output HTML file (default: stdout)")
  cmd_prev.add_argument("--title", default=None, help="Page title (default: from config)")
  cmd_prev.add_argument(
    "--inline-styles",
    action="store_true",
    help="Resolve utility classes into inline styles for offline viewing",
  )
  _add_config_flag(cmd_prev)

  # --- Command: EXAMPLE ---
  cmd_ex = subparsers.add_parser("example", help="List the bundled examples or print one")
  cmd_ex.add_argument("name", nargs="?", default=None, help="Example to print")

  args = parser.parse_args(argv)

  if args.command == "format":
    config = _load_config(args)
    if config is None:
      return 1
    return commands.handle_format(args.path, args.out, config)

  elif args.command == "styles":
    return commands.handle_styles(args.path)

  elif args.command == "tree":
    return commands.handle_tree(args.path)

  elif args.command == "preview":
    config = _load_config(args)
    if config is None:
      return 1
    return commands.handle_preview(args.path, args.out, args.title, args.inline_styles, config)

  elif args.command == "example":
    return commands.handle_example(args.name)

  return 0


if __name__ == "__main__":
  sys.exit(main())
