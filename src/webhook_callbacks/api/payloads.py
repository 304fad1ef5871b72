"""Webhook body schema and conversion to :class:`Event`.

Stripe posts an envelope of the form::

    {"id": "evt_...", "type": "invoice.updated", "created": 1700000000,
     "livemode": false, "api_version": "2023-10-16",
     "data": {"object": {...}, "previous_attributes": {...}}}
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from webhook_callbacks.domain.events import Event, Resource


class EventData(BaseModel):
    """The ``data`` member of a webhook body."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    object_: dict[str, Any] = Field(..., alias="object")
    previous_attributes: dict[str, Any] | None = None


class WebhookPayload(BaseModel):
    """A raw webhook delivery as posted by the event source."""

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    type: str = Field(..., min_length=1)
    created: datetime | None = None
    livemode: bool = False
    api_version: str | None = None
    data: EventData

    def to_event(self) -> Event:
        previous = self.data.previous_attributes
        return Event(
            type=self.type,
            resource=Resource(self.data.object_),
            previous_attributes=dict(previous) if previous is not None else None,
            id=self.id,
            created=self.created,
            livemode=self.livemode,
            api_version=self.api_version,
        )
