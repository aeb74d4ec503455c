from .format import handle_format
from .outline import handle_styles, handle_tree
from .preview import handle_example, handle_preview

__all__ = [
  "handle_example",
  "handle_format",
  "handle_preview",
  "handle_styles",
  "handle_tree",
]
