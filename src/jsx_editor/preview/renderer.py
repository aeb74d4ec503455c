"""
Interactive Renderer.

Turns an editor tree into a view tree with selection and inline text editing
wired in:

- Every element selects itself on click and stops the click from reaching
  its ancestors.
- Elements whose only child is text start an inline edit on double click.
- The selected element is outlined; all elements show a pointer cursor.
- A text node whose id is being edited renders as an `EditableText` field.

Custom component names (`Card`, `Layout.Header`...) and unknown tags render as
`div`. Rendering is pure: the tree is never mutated, and the affordances only
exist in the view tree.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

from jsx_editor.core.styles import resolve
from jsx_editor.core.tree import TreeNode, editable_text_child
from jsx_editor.preview.view import (
  EditableText,
  ViewElement,
  ViewEvent,
  ViewFragment,
  ViewNode,
  ViewText,
)

VALID_TAGS = frozenset(
  [
    "div",
    "span",
    "p",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "a",
    "button",
    "input",
    "textarea",
    "select",
    "option",
    "ul",
    "ol",
    "li",
    "table",
    "tr",
    "td",
    "th",
    "thead",
    "tbody",
    "form",
    "label",
    "img",
    "video",
    "audio",
    "canvas",
    "header",
    "footer",
    "nav",
    "main",
    "section",
    "article",
    "aside",
    "strong",
    "em",
    "b",
    "i",
    "u",
    "code",
    "pre",
    "blockquote",
    "br",
    "hr",
    "svg",
    "path",
    "circle",
    "rect",
    "line",
    "polygon",
  ]
)

DEFAULT_HIGHLIGHT_COLOR = "#3b82f6"


@dataclass
class InteractionState:
  """
  Selection state and callbacks threaded through a render pass.

  Attributes:
      selected_id (Optional[str]): Element currently outlined.
      editing_id (Optional[str]): Text node currently shown as an input.
      on_select: Receives an element id, or None to clear the selection.
      on_text_edit: Receives (text node id, new text) when an edit commits.
      on_start_edit: Receives the text node id on double click.
      on_stop_edit: Called after an edit commits or is cancelled.
  """

  selected_id: Optional[str] = None
  editing_id: Optional[str] = None
  on_select: Optional[Callable[[Optional[str]], None]] = None
  on_text_edit: Optional[Callable[[str, str], None]] = None
  on_start_edit: Optional[Callable[[str], None]] = None
  on_stop_edit: Optional[Callable[[], None]] = None


def valid_tag_name(tag_name: str) -> str:
  """Lower-cases whitelisted tags; everything else renders as `div`."""
  lower = (tag_name or "div").lower()
  return lower if lower in VALID_TAGS else "div"


class PreviewSurface(ViewNode):
  """
  The preview area hosting the rendered tree.

  A click aimed at the surface itself (not at a rendered element) clears the
  selection. Clicks on elements never reach it because element handlers stop
  propagation.
  """

  def __init__(self, root: Optional[ViewNode], on_select: Optional[Callable[[Optional[str]], None]] = None) -> None:
    self.root = root
    self.on_select = on_select

  def child_views(self) -> List[ViewNode]:
    return [self.root] if self.root is not None else []

  def handler_for(self, event_type: str):
    if event_type == "click":
      return self._on_click
    return None

  def _on_click(self, event: ViewEvent) -> None:
    if event.target is self and self.on_select is not None:
      self.on_select(None)

  def find(self, node_id: str) -> Optional[ViewNode]:
    """Returns the view rendering the tree node `node_id`, if any."""
    for view in self.iter_views():
      if view.node_id == node_id:
        return view
    return None

  def to_html(self) -> str:
    if self.root is None:
      return (
        '<div class="min-h-full flex items-center justify-center text-gray-400">'
        '<div class="text-center"><p class="text-lg">No component to preview</p>'
        '<p class="mt-1 text-sm">Paste JSX code in the editor</p></div></div>'
      )
    return f'<div class="min-h-full">{self.root.to_html()}</div>'


def render(
  tree: Optional[TreeNode],
  state: Optional[InteractionState] = None,
  highlight_color: str = DEFAULT_HIGHLIGHT_COLOR,
  inline_classes: bool = False,
) -> PreviewSurface:
  """
  Renders a tree into an interactive preview surface.

  Args:
      tree: Root node, or None to render the empty placeholder.
      state: Selection state and callbacks. Defaults to an inert state.
      highlight_color: Outline colour of the selected element.
      inline_classes: Resolve utility classes into the inline style, for
          previews displayed without the utility stylesheet.

  Returns:
      PreviewSurface: The surface wrapping the rendered view tree.
  """
  state = state or InteractionState()
  root = render_node(tree, state, highlight_color, inline_classes) if tree is not None else None
  return PreviewSurface(root, state.on_select)


def render_node(
  node: TreeNode,
  state: InteractionState,
  highlight_color: str = DEFAULT_HIGHLIGHT_COLOR,
  inline_classes: bool = False,
) -> ViewNode:
  """Renders a single node and its descendants."""
  if node.is_text:
    if state.editing_id == node.id and state.on_text_edit is not None:
      return _editable_text(node, state)
    return ViewText(text=node.text_content, node_id=node.id)

  children = [render_node(child, state, highlight_color, inline_classes) for child in node.children]

  if node.is_fragment:
    return ViewFragment(children=children, node_id=node.id)

  props = {key: value for key, value in node.attributes.items() if key != "style"}
  style = resolve(node.attributes) if inline_classes else node.style
  style["cursor"] = "pointer"
  if state.selected_id == node.id:
    style["outline"] = f"2px solid {highlight_color}"
    style["outlineOffset"] = "2px"

  return ViewElement(
    tag=valid_tag_name(node.tag_name),
    props=props,
    style=style,
    children=children,
    handlers=_element_handlers(node, state),
    node_id=node.id,
  )


def _element_handlers(node: TreeNode, state: InteractionState):
  def on_click(event: ViewEvent) -> None:
    event.stop_propagation()
    if state.on_select is not None:
      state.on_select(node.id)

  handlers = {"click": on_click}

  text_child = editable_text_child(node)
  if text_child is not None:

    def on_double_click(event: ViewEvent) -> None:
      event.stop_propagation()
      if state.on_start_edit is not None:
        state.on_start_edit(text_child.id)

    handlers["dblclick"] = on_double_click
  return handlers


def _editable_text(node: TreeNode, state: InteractionState) -> EditableText:
  def on_commit(value: str) -> None:
    state.on_text_edit(node.id, value)
    if state.on_stop_edit is not None:
      state.on_stop_edit()

  def on_cancel() -> None:
    if state.on_stop_edit is not None:
      state.on_stop_edit()

  return EditableText(value=node.text_content, on_commit=on_commit, on_cancel=on_cancel, node_id=node.id)


# --- Event Delivery ---


def _path_to(view: ViewNode, node_id: str) -> Optional[List[ViewNode]]:
  if view.node_id == node_id:
    return [view]
  for child in view.child_views():
    path = _path_to(child, node_id)
    if path is not None:
      return [view] + path
  return None


def dispatch(
  surface: PreviewSurface,
  event_type: str,
  target_id: Optional[str] = None,
  key: Optional[str] = None,
) -> ViewEvent:
  """
  Delivers an event to the view rendering `target_id` and bubbles it upwards.

  Handlers run from the target outwards until one stops propagation. Events
  aimed at a plain text view are handled by its enclosing element, as text
  has no handlers of its own.

  Args:
      surface: The rendered preview.
      event_type: `click`, `dblclick`, `keydown` or `blur`.
      target_id: Tree node id of the target, or None for the surface itself.
      key: Key name for `keydown` events.

  Returns:
      ViewEvent: The delivered event, for inspecting propagation flags.

  Raises:
      KeyError: If no view renders `target_id`.
  """
  if target_id is None:
    path: List[ViewNode] = [surface]
  else:
    found = _path_to(surface, target_id)
    if found is None:
      raise KeyError(f"No rendered view for node {target_id!r}")
    path = found

  event = ViewEvent(type=event_type, key=key, target=path[-1])
  for view in reversed(path):
    view.handle(event)
    if event.propagation_stopped:
      break
  return event
