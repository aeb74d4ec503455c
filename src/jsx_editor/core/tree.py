"""
Editor Tree Model.

This module defines the canonical in-memory representation of a parsed JSX
snippet. The tree is a persistent (immutable) structure: every mutation helper
returns a *new* root, rebuilding only the path from the root to the edited node
and sharing every other subtree by reference. Readers holding an older root
therefore never observe a partial edit.

Nodes are addressed exclusively through their `id`, an opaque uuid4 string
assigned at creation time and never reused or mutated.
"""

import dataclasses
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Set, Tuple

from jsx_editor.enums import NodeKind

DEFAULT_TAG = "div"
FRAGMENT_TAG = "Fragment"


def new_node_id() -> str:
  """Returns a fresh opaque node identifier."""
  return str(uuid.uuid4())


@dataclass(frozen=True)
class TreeNode:
  """
  A single node of the editor tree: either an element or a text leaf.

  Attributes:
      id (str): Opaque identifier, unique within the tree.
      kind (NodeKind): `element` or `text`.
      tag_name (str): Markup tag for elements ("Fragment" for fragments).
      attributes (Dict[str, Any]): Ordered attribute mapping. Treated as read-only;
          mutation helpers always install a fresh dictionary.
      children (Tuple[TreeNode, ...]): Ordered child nodes (empty for text nodes).
      text_content (str): Raw text for text nodes.
  """

  id: str
  kind: NodeKind
  tag_name: str = DEFAULT_TAG
  attributes: Dict[str, Any] = field(default_factory=dict)
  children: Tuple["TreeNode", ...] = ()
  text_content: str = ""

  def __post_init__(self) -> None:
    if self.kind == NodeKind.TEXT and self.children:
      raise ValueError(f"Text node {self.id!r} cannot have children")
    if not isinstance(self.children, tuple):
      object.__setattr__(self, "children", tuple(self.children))
    if self.kind == NodeKind.ELEMENT and not self.tag_name:
      object.__setattr__(self, "tag_name", DEFAULT_TAG)

  @property
  def is_text(self) -> bool:
    return self.kind == NodeKind.TEXT

  @property
  def is_element(self) -> bool:
    return self.kind == NodeKind.ELEMENT

  @property
  def is_fragment(self) -> bool:
    return self.kind == NodeKind.ELEMENT and self.tag_name == FRAGMENT_TAG

  @property
  def style(self) -> Dict[str, Any]:
    """The inline `style` mapping, or an empty dict when absent or not a mapping."""
    value = self.attributes.get("style")
    if isinstance(value, Mapping):
      return dict(value)
    return {}


# --- Construction ---


def element(
  tag_name: Optional[str] = None,
  attributes: Optional[Mapping[str, Any]] = None,
  children: Tuple[TreeNode, ...] = (),
) -> TreeNode:
  """
  Creates an element node with a fresh id.

  Args:
      tag_name: The markup tag. Defaults to the generic container tag.
      attributes: Attribute mapping (copied).
      children: Child nodes.

  Returns:
      TreeNode: The new element.
  """
  return TreeNode(
    id=new_node_id(),
    kind=NodeKind.ELEMENT,
    tag_name=tag_name or DEFAULT_TAG,
    attributes=dict(attributes or {}),
    children=tuple(children),
  )


def text(content: str) -> TreeNode:
  """Creates a text leaf with a fresh id."""
  return TreeNode(id=new_node_id(), kind=NodeKind.TEXT, tag_name="", text_content=content)


def fragment(children: Tuple[TreeNode, ...] = ()) -> TreeNode:
  """Creates a fragment element (serialized without a wrapping tag)."""
  return element(FRAGMENT_TAG, {}, children)


# --- Queries ---


def iter_nodes(root: TreeNode) -> Iterator[TreeNode]:
  """Traverses the tree depth-first, yielding each node before its children."""
  yield root
  for child in root.children:
    yield from iter_nodes(child)


def collect_ids(root: TreeNode) -> List[str]:
  """Collects every node id in depth-first order (duplicates are kept)."""
  return [node.id for node in iter_nodes(root)]


def find_node_by_id(root: TreeNode, node_id: Optional[str]) -> Optional[TreeNode]:
  """
  Locates a node by id.

  Args:
      root: Tree root.
      node_id: Identifier to look up.

  Returns:
      Optional[TreeNode]: The node, or None when the id is not in the tree.
  """
  if node_id is None:
    return None
  for node in iter_nodes(root):
    if node.id == node_id:
      return node
  return None


def direct_text_child(node: TreeNode) -> Optional[TreeNode]:
  """Returns the first direct text child of an element, if any."""
  for child in node.children:
    if child.is_text:
      return child
  return None


def editable_text_child(node: TreeNode) -> Optional[TreeNode]:
  """
  Returns the text child eligible for inline editing.

  Only an element whose single child is a text node qualifies; mixed content
  such as `<button>Click <b>Me</b></button>` is not inline editable.
  """
  if node.is_element and len(node.children) == 1 and node.children[0].is_text:
    return node.children[0]
  return None


def text_for_panel(node: TreeNode) -> str:
  """Text shown by the property panel: own text for text nodes, else the first text child's."""
  if node.is_text:
    return node.text_content
  child = direct_text_child(node)
  return child.text_content if child else ""


def structurally_equal(left: TreeNode, right: TreeNode) -> bool:
  """
  Compares two trees ignoring node ids.

  Tags, attribute values (including order-insensitive equality of mappings),
  text content and nesting must all match.
  """
  if left.kind != right.kind:
    return False
  if left.is_text:
    return left.text_content == right.text_content
  if left.tag_name != right.tag_name or left.attributes != right.attributes:
    return False
  if len(left.children) != len(right.children):
    return False
  return all(structurally_equal(a, b) for a, b in zip(left.children, right.children))


# --- Copy-on-write mutation ---


def _rebuild(root: TreeNode, node_id: str, change) -> TreeNode:
  """
  Applies `change` to the node with `node_id`, rebuilding only the path to it.

  Returns the original `root` object when the id is absent so callers can
  detect no-ops by identity.
  """
  if root.id == node_id:
    return change(root)

  new_children = []
  touched = False
  for child in root.children:
    updated = _rebuild(child, node_id, change) if not touched else child
    if updated is not child:
      touched = True
    new_children.append(updated)

  if not touched:
    return root
  return dataclasses.replace(root, children=tuple(new_children))


def update_node_by_id(root: TreeNode, node_id: str, **changes: Any) -> TreeNode:
  """
  Replaces fields of the node with `node_id`.

  Args:
      root: Tree root.
      node_id: Target node.
      **changes: Field values accepted by `dataclasses.replace` (id excluded).

  Returns:
      TreeNode: The new root, or `root` itself when the id is not present.
  """
  changes.pop("id", None)
  return _rebuild(root, node_id, lambda node: dataclasses.replace(node, **changes))


def update_node_style(root: TreeNode, node_id: str, style_updates: Mapping[str, Any]) -> TreeNode:
  """
  Shallow-merges `style_updates` into the `style` attribute of an element.

  An empty update (or a text node target) leaves the tree unchanged.
  """
  if not style_updates:
    return root

  def apply(node: TreeNode) -> TreeNode:
    if node.is_text:
      return node
    attributes = dict(node.attributes)
    attributes["style"] = {**node.style, **dict(style_updates)}
    return dataclasses.replace(node, attributes=attributes)

  return _rebuild(root, node_id, apply)


def update_node_text(root: TreeNode, node_id: str, text_content: str) -> TreeNode:
  """Replaces the text content of the node with `node_id`."""
  return _rebuild(root, node_id, lambda node: dataclasses.replace(node, text_content=text_content))


def set_node_text(root: TreeNode, node_id: str, text_content: str) -> TreeNode:
  """
  Sets the text shown for a node from the property panel.

  - Text nodes are updated directly.
  - Elements update their first direct text child.
  - Elements without a text child receive a new leading text child.
  """
  target = find_node_by_id(root, node_id)
  if target is None:
    return root
  if target.is_text:
    return update_node_text(root, node_id, text_content)

  child = direct_text_child(target)
  if child is not None:
    return update_node_text(root, child.id, text_content)

  new_child = text(text_content)
  return _rebuild(
    root,
    node_id,
    lambda node: dataclasses.replace(node, children=(new_child,) + node.children),
  )


def has_unique_ids(root: TreeNode) -> bool:
  """True when no id occurs twice in the tree."""
  seen: Set[str] = set()
  for node_id in collect_ids(root):
    if node_id in seen:
      return False
    seen.add(node_id)
  return True
