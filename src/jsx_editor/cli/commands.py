"""
CLI Command Handlers Facade.

Re-exports the handlers from `jsx_editor.cli.handlers` so the dispatcher (and
tests patching it) have a single import point.
"""

from jsx_editor.cli.handlers.format import handle_format
from jsx_editor.cli.handlers.outline import handle_styles, handle_tree
from jsx_editor.cli.handlers.preview import handle_example, handle_preview

__all__ = [
  "handle_example",
  "handle_format",
  "handle_preview",
  "handle_styles",
  "handle_tree",
]
