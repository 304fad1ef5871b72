"""Dispatch outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from webhook_callbacks.domain.exceptions import DispatchError


class DispatchOutcome(str, Enum):
    """Terminal state of one dispatch pass."""

    COMPLETED = "completed"
    COMPLETED_WITH_ISOLATED_ERRORS = "completed_with_isolated_errors"
    # Reported by the transport when a strict binding raised.
    ABORTED = "aborted"


@dataclass
class DispatchResult:
    """Result of a dispatch pass that was not aborted."""

    event_type: str
    event_id: str | None = None
    invoked: int = 0
    skipped: int = 0
    isolated_errors: list[DispatchError] = field(default_factory=list)

    @property
    def outcome(self) -> DispatchOutcome:
        if self.isolated_errors:
            return DispatchOutcome.COMPLETED_WITH_ISOLATED_ERRORS
        return DispatchOutcome.COMPLETED

    @property
    def ok(self) -> bool:
        return not self.isolated_errors
