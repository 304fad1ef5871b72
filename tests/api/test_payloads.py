"""Tests for webhook body parsing."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from webhook_callbacks.api.payloads import WebhookPayload


class TestWebhookPayload:
    def test_to_event(self, payload):
        event = WebhookPayload.model_validate(payload).to_event()

        assert event.type == "invoice.payment_succeeded"
        assert event.id == "evt_1A2b3C4d5E6f"
        assert event.resource.total == 6999
        assert event.resource.lines.data[0].amount == 6999
        assert event.object_type == "invoice"
        assert event.api_version == "2023-10-16"
        assert event.livemode is False
        assert event.created == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)

    def test_previous_attributes_absent(self, payload):
        event = WebhookPayload.model_validate(payload).to_event()
        assert event.previous_attributes is None

    def test_previous_attributes_empty(self, payload):
        payload["data"]["previous_attributes"] = {}
        event = WebhookPayload.model_validate(payload).to_event()
        assert event.previous_attributes == {}

    def test_extra_fields_allowed(self, payload):
        payload["pending_webhooks"] = 1
        payload["request"] = {"id": None}
        assert WebhookPayload.model_validate(payload).to_event().type == "invoice.payment_succeeded"

    @pytest.mark.parametrize("event_type", ["", None])
    def test_type_required(self, payload, event_type):
        payload["type"] = event_type
        with pytest.raises(ValidationError):
            WebhookPayload.model_validate(payload)
