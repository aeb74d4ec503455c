"""
Standalone Preview Page.

Wraps a rendered view in a minimal HTML document that loads the utility
stylesheet from its CDN, so class based styling displays as in the editor.
"""

import html
from typing import Union

from jsx_editor.preview.view import ViewNode

TAILWIND_CDN = "https://cdn.tailwindcss.com"

_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{title}</title>
  <script src="{cdn}"></script>
</head>
<body>
  <div id="root">{body}</div>
</body>
</html>
"""


def render_document(view: Union[ViewNode, str], title: str = "Untitled Component") -> str:
  """
  Builds the preview page.

  Args:
      view: Rendered view (or pre-rendered HTML markup) placed in `#root`.
      title: Document title, HTML escaped.

  Returns:
      str: The complete HTML document.
  """
  body = view if isinstance(view, str) else view.to_html()
  return _PAGE.format(title=html.escape(title), cdn=TAILWIND_CDN, body=body)
