"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Snapshot testing fixture for output verification.
- A manual clock for debounce tests and an in-memory component store.
- Console capture for asserting on logged messages.
"""

import sys
import itertools
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, Optional

import pytest
from rich.console import Console

# Add src to path so we can import 'jsx_editor' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from jsx_editor.editor.debounce import ManualScheduler
from jsx_editor.editor.store import ComponentNotFoundError, ComponentRecord, ComponentStore
from jsx_editor.utils.console import _THEME, reset_console, set_console


class SnapshotAssert:
  """
  Simple snapshot comparison logic to verify output stability.
  """

  def __init__(self, request: pytest.FixtureRequest):
    self.request = request
    self.test_name = request.node.name
    self.module_path = Path(request.node.fspath).parent
    self.snapshot_dir = self.module_path / "__snapshots__"
    self.update_mode = request.config.getoption("--update-snapshots", default=False)

  def assert_match(self, content: str, extension: str = "txt", normalizer: Optional[Callable[[str], str]] = None):
    """
    Compares content against stored file.

    Args:
        content: The actual output string.
        extension: File extension (default 'txt').
        normalizer: Optional function applied to both sides before comparison.
    """
    if not self.snapshot_dir.exists():
      self.snapshot_dir.mkdir(parents=True)

    snapshot_file = self.snapshot_dir / f"{self.test_name}.{extension}"

    content = content.replace("\r\n", "\n")

    if self.update_mode or not snapshot_file.exists():
      normalized_to_write = normalizer(content) if normalizer else content
      snapshot_file.write_text(normalized_to_write, encoding="utf-8")
      if self.update_mode:
        return

    expected = snapshot_file.read_text(encoding="utf-8").replace("\r\n", "\n")

    lhs = content
    rhs = expected

    if normalizer:
      lhs = normalizer(lhs)
      rhs = normalizer(rhs)

    assert lhs == rhs, (
      f"Snapshot mismatch for {snapshot_file.name}. Run pytest with --update-snapshots to accept changes."
    )


@pytest.fixture
def snapshot(request):
  """Fixture to assert text matches a stored snapshot."""
  return SnapshotAssert(request)


class InMemoryComponentStore(ComponentStore):
  """Dictionary backed store with sequential ids."""

  def __init__(self) -> None:
    self.records: Dict[str, ComponentRecord] = {}
    self.calls = []
    self._ids = itertools.count(1)

  def create(self, code: str, name: Optional[str] = None) -> ComponentRecord:
    self.calls.append(("create", code))
    record = ComponentRecord(id=f"component-{next(self._ids)}", name=name or "Untitled Component", code=code)
    self.records[record.id] = record
    return record

  def get(self, component_id: str) -> ComponentRecord:
    self.calls.append(("get", component_id))
    if component_id not in self.records:
      raise ComponentNotFoundError(component_id)
    return self.records[component_id]

  def update(self, component_id: str, code: str, name: Optional[str] = None) -> ComponentRecord:
    self.calls.append(("update", component_id, code))
    if component_id not in self.records:
      raise ComponentNotFoundError(component_id)
    current = self.records[component_id]
    record = current.model_copy(update={"code": code, "name": name or current.name, "updated_at": datetime.now()})
    self.records[component_id] = record
    return record


@pytest.fixture
def scheduler() -> ManualScheduler:
  """A clock driven by the test through `advance()`."""
  return ManualScheduler()


@pytest.fixture
def store() -> InMemoryComponentStore:
  return InMemoryComponentStore()


@pytest.fixture
def captured_console():
  """Routes console and logging output to a recording console for the test."""
  recorder = Console(record=True, width=200, force_terminal=False, color_system=None, theme=_THEME)
  set_console(recorder)
  yield recorder
  reset_console()


def pytest_addoption(parser):
  """Add CLI flag to update snapshots."""
  parser.addoption("--update-snapshots", action="store_true", default=False, help="Update snapshots for stored outputs")
