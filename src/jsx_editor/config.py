"""
Editor Configuration Store.

Settings are read from the `[tool.jsx_editor]` table of the nearest
`pyproject.toml` and may be overridden explicitly (e.g. from CLI flags).
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator
from rich.markup import escape

from jsx_editor.utils.console import log_warning

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

CONFIG_SECTION = "jsx_editor"


class EditorConfig(BaseModel):
  """
  Configuration for an editing session and the CLI.
  """

  autosave_delay: float = Field(2.0, description="Quiet period in seconds before auto-saving. 0 disables auto-save.")
  enable_backend: bool = Field(True, description="If True, auto-save also updates the stored component.")
  default_component_name: str = Field("Untitled Component", description="Name given to newly created components.")
  indent_width: int = Field(2, description="Spaces per nesting level in generated markup.")
  highlight_color: str = Field("#3b82f6", description="Outline colour of the selected element.")

  @field_validator("autosave_delay")
  @classmethod
  def validate_delay(cls, v: float) -> float:
    """
    Rejects negative delays.

    Raises:
        ValueError: If the delay is negative.
    """
    if v < 0:
      raise ValueError(f"autosave_delay must be >= 0, got {v}")
    return v

  @field_validator("indent_width")
  @classmethod
  def validate_indent(cls, v: int) -> int:
    if v < 0:
      raise ValueError(f"indent_width must be >= 0, got {v}")
    return v

  @property
  def autosave_enabled(self) -> bool:
    return self.autosave_delay > 0

  @classmethod
  def load(
    cls,
    search_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
  ) -> "EditorConfig":
    """
    Loads configuration from pyproject.toml and applies explicit overrides.

    Args:
        search_path (Optional[Path]): Directory to start searching for TOML config.
        overrides (Optional[Dict]): Values taking precedence over the file.
            None values are ignored.

    Returns:
        EditorConfig: The fully resolved configuration object.

    Raises:
        ValueError: If the merged settings fail validation.
    """
    start_dir = search_path or Path.cwd()
    toml_config, _ = _load_toml_settings(start_dir)

    explicit = {k: v for k, v in (overrides or {}).items() if v is not None}
    merged = {k: v for k, v in toml_config.items() if k in cls.model_fields}
    merged.update(explicit)

    try:
      return cls(**merged)
    except ValidationError as e:
      raise ValueError(f"Invalid editor configuration: {e}")


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches the directory and its parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError) as e:
        log_warning(f"Ignoring unreadable config {escape(str(toml_path))}: {escape(str(e))}")
        return {}, None

      tool_section = data.get("tool", {})
      return tool_section.get(CONFIG_SECTION, {}), parent

  return {}, None


def parse_cli_key_values(items: Optional[List[str]]) -> Dict[str, Any]:
  """
  Parses a list of 'key=value' strings into a dictionary.

  Types are inferred (int, float, bool, or string).

  Args:
      items (Optional[List[str]]): List of raw CLI strings directly from argparse.

  Returns:
      Dict[str, Any]: Parsed dictionary.
  """
  if not items:
    return {}

  config = {}
  for item in items:
    if "=" not in item:
      log_warning(f"Ignoring invalid config format: '{item}'. Expected 'key=value'.")
      continue

    key, val_str = item.split("=", 1)
    key = key.strip()
    val_str = val_str.strip()

    final_val: Any = val_str

    if val_str.lower() == "true":
      final_val = True
    elif val_str.lower() == "false":
      final_val = False
    else:
      try:
        if "." in val_str or "e" in val_str:
          final_val = float(val_str)
        else:
          final_val = int(val_str)
      except ValueError:
        pass

    config[key] = final_val

  return config
