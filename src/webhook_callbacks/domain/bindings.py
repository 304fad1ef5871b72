"""Callback bindings."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from webhook_callbacks.domain.filters import ChangeFilter


class _Wildcard(Enum):
    WILDCARD = "*"

    def __repr__(self) -> str:
        return "WILDCARD"


WILDCARD = _Wildcard.WILDCARD
"""Sentinel event type matching every dispatched event."""

EventType = Union[str, _Wildcard]
Handler = Callable[[Any, Any], Any]


@dataclass(frozen=True, eq=False)
class CallbackBinding:
    """One registered handler with its matching rules and failure policy.

    ``strict`` bindings abort the dispatch pass and propagate their error;
    non-strict ones are isolated. Identity equality: registering the same
    handler twice yields two distinct bindings.
    """

    event_type: EventType
    handler: Handler
    filter: ChangeFilter | None = None
    strict: bool = False
    owner: str | None = None

    @property
    def is_wildcard(self) -> bool:
        return self.event_type is WILDCARD

    @property
    def name(self) -> str:
        handler_name = getattr(self.handler, "__qualname__", None) or repr(self.handler)
        return f"{self.owner}:{handler_name}" if self.owner else handler_name

    @property
    def type_label(self) -> str:
        return WILDCARD.value if self.is_wildcard else str(self.event_type)
