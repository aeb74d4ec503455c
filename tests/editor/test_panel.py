"""
Tests for the Property Panel model and its style update helpers.
"""

import pytest

from jsx_editor.core.jsx import parse
from jsx_editor.core.styles import Gradient
from jsx_editor.core.tree import text
from jsx_editor.editor.panel import (
  PropertySnapshot,
  color_update,
  font_size_update,
  font_weight_update,
  gradient_update,
  margin_update,
  padding_update,
  solid_background_update,
)
from jsx_editor.enums import BackgroundKind


def test_snapshot_of_classed_heading():
  node = parse('<h1 className="text-3xl font-bold text-white">Title</h1>')
  snapshot = PropertySnapshot.from_node(node)
  assert snapshot.tag_name == "h1"
  assert snapshot.has_text
  assert snapshot.text == "Title"
  assert snapshot.font_size == 30
  assert snapshot.is_bold
  assert snapshot.color == "#ffffff"
  assert snapshot.background_kind == BackgroundKind.SOLID


def test_inline_style_wins_in_snapshot():
  node = parse('<div className="p-6 bg-blue-500" style={{ backgroundColor: "#fff", padding: "10px" }} />')
  snapshot = PropertySnapshot.from_node(node)
  assert snapshot.background_color == "#fff"
  assert snapshot.padding == 10


def test_defaults_for_unstyled_element():
  snapshot = PropertySnapshot.from_node(parse("<div />"))
  assert snapshot.font_size == 16
  assert not snapshot.is_bold
  assert snapshot.color == "#000000"
  assert snapshot.background_color == "#ffffff"
  assert snapshot.padding == 0
  assert snapshot.margin == 0
  assert not snapshot.has_text
  assert snapshot.text == ""


def test_numeric_font_weight_counts_as_bold():
  node = parse('<p style={{ fontWeight: "700" }}>x</p>')
  assert PropertySnapshot.from_node(node).is_bold


def test_mixed_children_text():
  node = parse("<button>Click <b>Me</b></button>")
  snapshot = PropertySnapshot.from_node(node)
  assert snapshot.has_text
  assert snapshot.text == "Click"


def test_text_node_snapshot():
  snapshot = PropertySnapshot.from_node(text("raw"))
  assert snapshot.is_text
  assert snapshot.has_text
  assert snapshot.text == "raw"
  assert snapshot.tag_name is None
  assert snapshot.styles == {}


def test_gradient_background_snapshot():
  node = parse('<div style={{ backgroundImage: "linear-gradient(to top, #111111, #222222)" }} />')
  snapshot = PropertySnapshot.from_node(node)
  assert snapshot.background_kind == BackgroundKind.GRADIENT
  assert snapshot.gradient == Gradient(direction="to top", start="#111111", end="#222222")


def test_utility_gradient_is_flagged_not_read():
  node = parse('<div className="bg-gradient-to-r from-purple-600 to-blue-500" />')
  snapshot = PropertySnapshot.from_node(node)
  assert snapshot.has_utility_gradient
  assert snapshot.background_kind == BackgroundKind.SOLID
  assert snapshot.gradient == Gradient()


@pytest.mark.parametrize("size, expected", [(24, "24px"), (4, "10px"), (100, "72px"), (20.7, "20px")])
def test_font_size_update_is_clamped(size, expected):
  assert font_size_update(size) == {"fontSize": expected}


def test_spacing_updates_are_clamped():
  assert padding_update(-5) == {"padding": "0px"}
  assert padding_update(80) == {"padding": "64px"}
  assert margin_update(150) == {"margin": "150px"}
  assert margin_update(500) == {"margin": "200px"}


def test_simple_updates():
  assert font_weight_update(True) == {"fontWeight": "bold"}
  assert font_weight_update(False) == {"fontWeight": "normal"}
  assert color_update("#123456") == {"color": "#123456"}


def test_background_updates():
  assert solid_background_update() == {"backgroundImage": "none", "backgroundColor": "#ffffff"}
  assert solid_background_update("#000") == {"backgroundImage": "none", "backgroundColor": "#000"}
  assert gradient_update(Gradient(direction="to left", start="red", end="blue")) == {
    "backgroundImage": "linear-gradient(to left, red, blue)",
    "backgroundColor": "transparent",
  }
