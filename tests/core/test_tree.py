"""
Tests for the Editor Tree Model.

Verifies:
1.  Construction: fresh ids, defaults and text-node invariants.
2.  Queries: lookup by id, text children and structural equality.
3.  Copy-on-write: edits rebuild only the path to the edited node.
4.  No-ops: unknown ids and empty updates return the original root.
"""

import pytest

from jsx_editor.core.tree import (
  DEFAULT_TAG,
  TreeNode,
  collect_ids,
  direct_text_child,
  editable_text_child,
  element,
  find_node_by_id,
  fragment,
  has_unique_ids,
  set_node_text,
  structurally_equal,
  text,
  text_for_panel,
  update_node_by_id,
  update_node_style,
  update_node_text,
)
from jsx_editor.enums import NodeKind


@pytest.fixture
def sample():
  title = text("Hello")
  heading = element("h1", {"className": "text-3xl"}, (title,))
  body = text("Body")
  paragraph = element("p", {}, (body,))
  root = element("div", {"style": {"color": "red"}}, (heading, paragraph))
  return root, heading, title, paragraph, body


def test_factories_assign_fresh_ids():
  a = element("div")
  b = element("div")
  assert a.id != b.id
  assert a.kind == NodeKind.ELEMENT
  assert text("x").kind == NodeKind.TEXT


def test_element_defaults_to_div():
  assert element().tag_name == DEFAULT_TAG
  assert element("").tag_name == DEFAULT_TAG


def test_fragment_flag():
  assert fragment().is_fragment
  assert not element("div").is_fragment


def test_text_node_cannot_have_children():
  with pytest.raises(ValueError):
    TreeNode(id="t", kind=NodeKind.TEXT, children=(text("x"),))


def test_children_are_coerced_to_tuple():
  node = TreeNode(id="n", kind=NodeKind.ELEMENT, children=[text("a")])
  assert isinstance(node.children, tuple)


def test_element_copies_attributes():
  attrs = {"id": "main"}
  node = element("div", attrs)
  attrs["id"] = "changed"
  assert node.attributes["id"] == "main"


def test_find_node_by_id(sample):
  root, heading, title, _, _ = sample
  assert find_node_by_id(root, heading.id) is heading
  assert find_node_by_id(root, title.id) is title
  assert find_node_by_id(root, "missing") is None
  assert find_node_by_id(root, None) is None


def test_collect_ids_depth_first(sample):
  root, heading, title, paragraph, body = sample
  assert collect_ids(root) == [root.id, heading.id, title.id, paragraph.id, body.id]
  assert has_unique_ids(root)


def test_style_property_ignores_non_mappings():
  assert element("div", {"style": "color: red"}).style == {}
  assert element("div", {"style": {"color": "red"}}).style == {"color": "red"}


def test_text_children_helpers():
  label = text("Click")
  bold = element("b", {}, (text("Me"),))
  mixed = element("button", {}, (label, bold))
  only_element = element("button", {}, (bold,))

  assert direct_text_child(mixed) is label
  assert editable_text_child(mixed) is None
  assert editable_text_child(only_element) is None
  assert editable_text_child(bold) is bold.children[0]
  assert text_for_panel(mixed) == "Click"
  assert text_for_panel(only_element) == ""
  assert text_for_panel(label) == "Click"


def test_structural_equality_ignores_ids(sample):
  root = sample[0]
  clone = element(
    "div",
    {"style": {"color": "red"}},
    (element("h1", {"className": "text-3xl"}, (text("Hello"),)), element("p", {}, (text("Body"),))),
  )
  assert structurally_equal(root, clone)
  different = update_node_text(clone, clone.children[1].children[0].id, "Other")
  assert not structurally_equal(root, different)


def test_update_style_rebuilds_path_only(sample):
  root, heading, _, paragraph, _ = sample
  updated = update_node_style(root, heading.id, {"color": "blue"})

  assert updated is not root
  assert updated.id == root.id
  new_heading = find_node_by_id(updated, heading.id)
  assert new_heading is not heading
  assert new_heading.style == {"color": "blue"}
  # Untouched sibling is shared, original untouched
  assert find_node_by_id(updated, paragraph.id) is paragraph
  assert heading.style == {}


def test_update_style_merges_shallowly(sample):
  root = sample[0]
  updated = update_node_style(root, root.id, {"fontSize": "20px"})
  assert updated.style == {"color": "red", "fontSize": "20px"}
  assert root.style == {"color": "red"}


def test_update_unknown_id_is_noop(sample):
  root = sample[0]
  assert update_node_style(root, "missing", {"color": "blue"}) is root
  assert update_node_text(root, "missing", "x") is root
  assert update_node_by_id(root, "missing", tag_name="span") is root
  assert set_node_text(root, "missing", "x") is root


def test_empty_style_update_is_identity(sample):
  root, heading, _, _, _ = sample
  assert update_node_style(root, heading.id, {}) is root


def test_style_update_on_text_node_is_ignored(sample):
  root, _, title, _, _ = sample
  updated = update_node_style(root, title.id, {"color": "blue"})
  assert structurally_equal(updated, root)


def test_update_node_by_id_keeps_id(sample):
  root, heading, _, _, _ = sample
  updated = update_node_by_id(root, heading.id, tag_name="h2", id="hijack")
  node = find_node_by_id(updated, heading.id)
  assert node.tag_name == "h2"


def test_set_node_text_variants(sample):
  root, heading, title, _, _ = sample

  direct = set_node_text(root, title.id, "Direct")
  assert find_node_by_id(direct, title.id).text_content == "Direct"

  via_element = set_node_text(root, heading.id, "Via element")
  assert find_node_by_id(via_element, title.id).text_content == "Via element"

  empty = element("div")
  tree = element("section", {}, (empty,))
  added = set_node_text(tree, empty.id, "New")
  new_div = find_node_by_id(added, empty.id)
  assert len(new_div.children) == 1
  assert new_div.children[0].is_text
  assert new_div.children[0].text_content == "New"
  assert has_unique_ids(added)
