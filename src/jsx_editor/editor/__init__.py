"""
Editor Package.

The editing session, its auto-save debouncer, the property panel model and
the persistence contract.
"""

from jsx_editor.editor.debounce import AsyncioScheduler, Debouncer, ManualScheduler, Scheduler
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
from jsx_editor.editor.session import DEFAULT_CODE, EXAMPLES, EditorSession
from jsx_editor.editor.store import ComponentNotFoundError, ComponentRecord, ComponentStore, ComponentStoreError

__all__ = [
  "AsyncioScheduler",
  "ComponentNotFoundError",
  "ComponentRecord",
  "ComponentStore",
  "ComponentStoreError",
  "DEFAULT_CODE",
  "Debouncer",
  "EXAMPLES",
  "EditorSession",
  "ManualScheduler",
  "PropertySnapshot",
  "Scheduler",
  "color_update",
  "font_size_update",
  "font_weight_update",
  "gradient_update",
  "margin_update",
  "padding_update",
  "solid_background_update",
]
