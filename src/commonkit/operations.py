"""Progress and state models reported by long-running operations.

An operation raises a status-update event (see
:class:`commonkit.events.StatusUpdateHandler`) carrying an
:class:`OperationProgressEventArgs`.

Examples
--------
>>> progress = ItemsOperationProgress(total_progress=Progress(current=5, maximum=20))
>>> args = OperationProgressEventArgs(progress=progress, state=OperationState.RUNNING)
>>> args.progress.total_progress.percentage
25.0
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

__all__ = [
    "ItemsOperationProgress",
    "OperationProgressEventArgs",
    "OperationState",
    "Progress",
]


class OperationState(StrEnum):
    """Lifecycle state of an operation."""

    NONE = "none"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    ERROR = "error"


class Progress(BaseModel):
    """A position within an inclusive ``[minimum, maximum]`` range.

    Parameters
    ----------
    current : float
        Current position.
    maximum : float
        End of the range.
    minimum : float, optional
        Start of the range. Defaults to ``0``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    current: float
    maximum: float
    minimum: float = 0

    @model_validator(mode="after")
    def _check_range(self) -> Progress:
        if self.maximum < self.minimum:
            msg = f"maximum ({self.maximum}) must not be lower than minimum ({self.minimum})"
            raise ValueError(msg)
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def percentage(self) -> float:
        """Progress as a percentage clamped to 0-100; 0 for an empty range."""
        span = self.maximum - self.minimum
        if span == 0:
            return 0.0
        value = (self.current - self.minimum) / span * 100
        return max(0.0, min(100.0, value))

    @property
    def completed(self) -> bool:
        """Whether the current position has reached the maximum."""
        return self.current >= self.maximum

    def advanced(self, step: float = 1) -> Progress:
        """Return a copy moved forward by ``step``, capped at ``maximum``."""
        return self.model_copy(update={"current": min(self.maximum, self.current + step)})


class ItemsOperationProgress(BaseModel):
    """Progress of an operation that processes a series of items.

    Parameters
    ----------
    total_progress : Progress
        Progress over all items.
    item_progress : Progress | None, optional
        Progress within the item being processed.
    current_item : Any, optional
        The item being processed.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    total_progress: Progress
    item_progress: Progress | None = None
    current_item: Any = None


class OperationProgressEventArgs(BaseModel):
    """Event arguments for progress events raised during an operation."""

    model_config = ConfigDict(frozen=True)

    progress: ItemsOperationProgress = Field(description="The current progress of the operation")
    state: OperationState = Field(description="The state of the operation")
