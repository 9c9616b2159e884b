"""Read-side DTOs shared by the order workflows."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class StatusOptionDTO(BaseModel):
    """A selectable status for status dropdowns."""

    model_config = ConfigDict(frozen=True)

    value: str
    label: str


class WorkflowStateDTO(BaseModel):
    """Everything the presentation layer needs to render status controls.

    ``kind`` is only set for sales orders.
    """

    model_config = ConfigDict(frozen=True)

    status: str
    kind: Optional[str] = None
    is_final: bool
    can_edit: bool
    can_delete: bool
    next_status: Optional[str]
    allowed_transitions: List[StatusOptionDTO]
