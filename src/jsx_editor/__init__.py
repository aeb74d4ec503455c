"""
jsx-editor Package.

A visual editing core for static JSX snippets: parse markup into an editable
tree, render it with selection and inline text editing, edit styles and text,
and serialize the tree back into markup.

Usage
-----

Round Trip
^^^^^^^^^^

.. code-block:: python

    import jsx_editor as jsx

    tree = jsx.parse('<h1 className="text-3xl font-bold">Hello</h1>')
    print(jsx.serialize(tree))
    # <h1 className="text-3xl font-bold">Hello</h1>

Editing Session
^^^^^^^^^^^^^^^

.. code-block:: python

    from jsx_editor import EditorSession, ManualScheduler

    session = EditorSession('<div><p>Hi</p></div>', scheduler=ManualScheduler())
    paragraph = session.tree.children[0]
    session.select(paragraph.id)
    session.update_style({"color": "red"})
    print(session.code)
"""

__version__ = "0.0.1"

from jsx_editor.config import EditorConfig
from jsx_editor.core.jsx import MarkupSyntaxError, ParseOutcome, parse, parse_markup, serialize
from jsx_editor.core.styles import resolve
from jsx_editor.core.tree import TreeNode, find_node_by_id, update_node_by_id, update_node_style, update_node_text
from jsx_editor.editor import EditorSession, ManualScheduler, PropertySnapshot
from jsx_editor.preview import InteractionState, dispatch, render, render_document

__all__ = [
  "EditorConfig",
  "EditorSession",
  "InteractionState",
  "ManualScheduler",
  "MarkupSyntaxError",
  "ParseOutcome",
  "PropertySnapshot",
  "TreeNode",
  "__version__",
  "dispatch",
  "find_node_by_id",
  "parse",
  "parse_markup",
  "render",
  "render_document",
  "resolve",
  "serialize",
  "update_node_by_id",
  "update_node_style",
  "update_node_text",
]
