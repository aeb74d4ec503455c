"""
Component Persistence Contract.

The editor saves markup through a `ComponentStore` supplied by the host
(an HTTP client, a database, ...). Stores assign opaque ids and timestamps;
the editor only passes ids back on later calls.
"""

import abc
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ComponentStoreError(Exception):
  """Raised by stores when an operation fails."""


class ComponentNotFoundError(ComponentStoreError):
  """Raised when no component carries the requested id."""

  def __init__(self, component_id: str) -> None:
    super().__init__(f"Component not found: {component_id}")
    self.component_id = component_id


class ComponentRecord(BaseModel):
  """
  A saved component.
  """

  id: str = Field(..., description="Opaque identifier assigned by the store.")
  name: str = Field("Untitled Component", description="Display name.")
  code: str = Field(..., description="Markup text.")
  created_at: datetime = Field(default_factory=datetime.now)
  updated_at: datetime = Field(default_factory=datetime.now)


class ComponentStore(abc.ABC):
  """
  Abstract persistence collaborator.
  """

  @abc.abstractmethod
  def create(self, code: str, name: Optional[str] = None) -> ComponentRecord:
    """
    Stores a new component.

    Args:
        code: Markup text.
        name: Display name; the store applies its default when None.

    Returns:
        ComponentRecord: The stored record with its new id.
    """

  @abc.abstractmethod
  def get(self, component_id: str) -> ComponentRecord:
    """
    Fetches a component.

    Raises:
        ComponentNotFoundError: If the id is unknown.
    """

  @abc.abstractmethod
  def update(self, component_id: str, code: str, name: Optional[str] = None) -> ComponentRecord:
    """
    Replaces the code (and optionally the name) of a component.

    Raises:
        ComponentNotFoundError: If the id is unknown.
    """
