"""
Preview View Nodes.

The renderer produces a tree of view nodes rather than touching a DOM. Each
view node:

- Carries the props, computed style and child views of the rendered markup.
- Owns the interaction handlers (`click`, `dblclick`, `keydown`, `blur`)
  installed by the renderer.
- Serializes itself to HTML through `to_html()`.

Events are delivered with `dispatch()` in `renderer.py`, which bubbles a
`ViewEvent` from the target up to the preview surface.
"""

import html
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional

# Elements that never have a closing tag in HTML
VOID_TAGS = frozenset(
  ["area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "track", "wbr"]
)

# React prop names that differ from their HTML attribute names
_PROP_ALIASES = {"className": "class", "htmlFor": "for", "autoFocus": "autofocus"}

# Event handlers and script URLs are not emitted into static HTML
_EVENT_PROP_RE = re.compile(r"^on[a-z]", re.IGNORECASE)
_ATTRIBUTE_NAME_RE = re.compile(r"^[A-Za-z_][\w:.\-]*$")
_URL_ATTRIBUTES = frozenset(["href", "src", "action", "formaction", "xlink:href", "poster", "cite", "background", "data"])
_SCRIPT_SCHEMES = ("javascript:", "vbscript:")
_IGNORED_URL_CHARS_RE = re.compile(r"[\x00-\x20\x7f]+")

# Numeric style values that are emitted without a `px` unit
_UNITLESS_PROPERTIES = frozenset(
  ["opacity", "zIndex", "fontWeight", "lineHeight", "flex", "flexGrow", "flexShrink", "order", "zoom"]
)

_CAMEL_RE = re.compile(r"(?<!^)([A-Z])")


@dataclass
class ViewEvent:
  """
  An interaction delivered to the view tree.

  Attributes:
      type (str): Event name, e.g. `click`, `dblclick`, `keydown`, `blur`.
      key (Optional[str]): Key name for keyboard events.
      target (Optional[ViewNode]): The innermost view the event was aimed at.
      current_target (Optional[ViewNode]): The view whose handler is running.
  """

  type: str
  key: Optional[str] = None
  target: Optional["ViewNode"] = None
  current_target: Optional["ViewNode"] = None
  propagation_stopped: bool = False
  default_prevented: bool = False

  def stop_propagation(self) -> None:
    self.propagation_stopped = True

  def prevent_default(self) -> None:
    self.default_prevented = True


Handler = Callable[[ViewEvent], None]


class ViewNode:
  """
  Base class for all view nodes.
  """

  node_id: Optional[str] = None

  def child_views(self) -> List["ViewNode"]:
    return []

  def handler_for(self, event_type: str) -> Optional[Handler]:
    return None

  def handle(self, event: ViewEvent) -> None:
    """Runs this view's handler for `event.type`, if one is installed."""
    handler = self.handler_for(event.type)
    if handler is not None:
      event.current_target = self
      handler(event)

  def iter_views(self) -> Iterator["ViewNode"]:
    yield self
    for child in self.child_views():
      yield from child.iter_views()

  def to_html(self) -> str:
    """
    Render the view and its children to an HTML string.

    Raises:
        NotImplementedError: If not implemented by subclass.
    """
    raise NotImplementedError


@dataclass
class ViewText(ViewNode):
  """Plain text output of a text node."""

  text: str
  node_id: Optional[str] = None

  def to_html(self) -> str:
    return html.escape(self.text, quote=False)


@dataclass
class ViewElement(ViewNode):
  """
  A rendered element.

  Attributes:
      tag (str): Whitelisted HTML tag.
      props (Dict[str, Any]): Attributes of the source node, without `style`.
      style (Dict[str, Any]): Computed inline style (source style plus
          interaction affordances).
      children (List[ViewNode]): Rendered child views.
      handlers (Dict[str, Handler]): Interaction handlers keyed by event type.
      node_id (Optional[str]): Id of the tree node this view renders.
  """

  tag: str
  props: Dict[str, Any] = field(default_factory=dict)
  style: Dict[str, Any] = field(default_factory=dict)
  children: List[ViewNode] = field(default_factory=list)
  handlers: Dict[str, Handler] = field(default_factory=dict)
  node_id: Optional[str] = None

  def child_views(self) -> List[ViewNode]:
    return self.children

  def handler_for(self, event_type: str) -> Optional[Handler]:
    return self.handlers.get(event_type)

  def to_html(self) -> str:
    attrs = html_attributes(self.props, self.style, self.node_id)
    if self.tag in VOID_TAGS:
      return f"<{self.tag}{attrs}>"
    inner = "".join(child.to_html() for child in self.children)
    return f"<{self.tag}{attrs}>{inner}</{self.tag}>"


@dataclass
class ViewFragment(ViewNode):
  """Children rendered without a wrapping element."""

  children: List[ViewNode] = field(default_factory=list)
  node_id: Optional[str] = None

  def child_views(self) -> List[ViewNode]:
    return self.children

  def to_html(self) -> str:
    return "".join(child.to_html() for child in self.children)


# Visual treatment of the inline text input
EDIT_FIELD_STYLE: Dict[str, Any] = {
  "font": "inherit",
  "color": "inherit",
  "background": "rgba(59, 130, 246, 0.1)",
  "border": "2px solid #3b82f6",
  "borderRadius": "4px",
  "padding": "2px 4px",
  "margin": "-4px",
  "outline": "none",
  "width": "100%",
  "minWidth": "50px",
}


@dataclass
class EditableText(ViewNode):
  """
  Inline text input shown in place of an element's sole text child.

  The field starts focused with its content selected. Enter or losing focus
  commits the current value, Escape cancels, and clicks inside the field do
  not reach the enclosing element. Only the first of commit or cancel takes
  effect; later events are ignored.

  Attributes:
      value (str): Current content of the field.
      on_commit (Callable[[str], None]): Receives the value on commit.
      on_cancel (Callable[[], None]): Called when the edit is abandoned.
      node_id (Optional[str]): Id of the text node being edited.
  """

  value: str
  on_commit: Callable[[str], None]
  on_cancel: Callable[[], None]
  node_id: Optional[str] = None
  style: Dict[str, Any] = field(default_factory=lambda: dict(EDIT_FIELD_STYLE))
  autofocus: bool = True
  select_all: bool = True
  settled: bool = False

  def input(self, value: str) -> None:
    """Replaces the field content, as typing would."""
    if not self.settled:
      self.value = value

  def commit(self) -> None:
    if self.settled:
      return
    self.settled = True
    self.on_commit(self.value)

  def cancel(self) -> None:
    if self.settled:
      return
    self.settled = True
    self.on_cancel()

  def handler_for(self, event_type: str) -> Optional[Handler]:
    return {
      "keydown": self._on_key_down,
      "blur": self._on_blur,
      "click": self._on_click,
    }.get(event_type)

  def key_down(self, key: str) -> ViewEvent:
    """Delivers a key press to the field."""
    event = ViewEvent("keydown", key=key, target=self)
    self.handle(event)
    return event

  def blur(self) -> None:
    self.handle(ViewEvent("blur", target=self))

  def _on_key_down(self, event: ViewEvent) -> None:
    if event.key == "Enter":
      event.prevent_default()
      self.commit()
    elif event.key == "Escape":
      self.cancel()

  def _on_blur(self, event: ViewEvent) -> None:
    self.commit()

  def _on_click(self, event: ViewEvent) -> None:
    event.stop_propagation()

  def to_html(self) -> str:
    props = {"type": "text", "value": self.value, "autoFocus": self.autofocus}
    return f"<input{html_attributes(props, self.style, self.node_id)}>"


# --- Attribute Serialization ---


def css_property(name: str) -> str:
  """Converts a camelCase style key into its CSS property name."""
  if name.startswith("--"):
    return name
  return _CAMEL_RE.sub(r"-\1", name).lower()


def css_text(style: Mapping[str, Any]) -> str:
  """
  Builds a CSS declaration list from a style mapping.

  Numbers gain a `px` unit unless the property is unitless; None and empty
  values are skipped.
  """
  declarations = []
  for key, value in style.items():
    if value is None or value == "" or isinstance(value, bool):
      continue
    if isinstance(value, (int, float)) and key not in _UNITLESS_PROPERTIES and value != 0:
      value = f"{value}px"
    declarations.append(f"{css_property(key)}: {value}")
  return "; ".join(declarations)


def html_attributes(props: Mapping[str, Any], style: Mapping[str, Any], node_id: Optional[str] = None) -> str:
  """
  Serializes props and style into an HTML attribute string with a leading space.

  Args:
      props: Element props. Mappings, False/None values, event handler props
        (`onClick`, `onmouseover`) and `javascript:` URLs are omitted.
      style: Inline style, emitted as the `style` attribute.
      node_id: Emitted as `data-editor-id` so selections can be mapped back.
  """
  parts = []
  if node_id is not None:
    parts.append(f'data-editor-id="{html.escape(node_id)}"')
  for key, value in props.items():
    if value is None or value is False or isinstance(value, Mapping):
      continue
    name = _PROP_ALIASES.get(key, key)
    if not is_safe_attribute(name, value):
      continue
    if value is True:
      parts.append(name)
    else:
      parts.append(f'{name}="{html.escape(str(value))}"')
  declarations = css_text(style)
  if declarations:
    parts.append(f'style="{html.escape(declarations)}"')
  return " " + " ".join(parts) if parts else ""


def is_safe_attribute(name: str, value: Any) -> bool:
  """True if the attribute can be emitted into static HTML without running script."""
  if not _ATTRIBUTE_NAME_RE.match(name) or _EVENT_PROP_RE.match(name):
    return False
  if name.lower() in _URL_ATTRIBUTES and isinstance(value, str):
    scheme = _IGNORED_URL_CHARS_RE.sub("", value).lower()
    return not scheme.startswith(_SCRIPT_SCHEMES)
  return True
