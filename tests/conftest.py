"""Shared fixtures: a clearable registry and a Stripe invoice delivery."""

from __future__ import annotations

import copy
import sys
import textwrap

import pytest
import structlog

from webhook_callbacks.config.settings import get_settings
from webhook_callbacks.dispatcher import Dispatcher
from webhook_callbacks.domain.events import Event, Resource
from webhook_callbacks.registration import Callbacks
from webhook_callbacks.registry import Registry

INVOICE = {
    "id": "in_1A2b3C4d5E6f",
    "object": "invoice",
    "amount_due": 6999,
    "attempted": True,
    "closed": True,
    "currency": "usd",
    "customer": "cus_9sTzAbCdEf",
    "livemode": False,
    "paid": True,
    "subtotal": 6999,
    "total": 6999,
    "lines": {
        "object": "list",
        "data": [
            {"id": "sub_8xYz", "object": "line_item", "amount": 6999, "currency": "usd"},
        ],
    },
}

EVENT_ENVELOPE = {
    "id": "evt_1A2b3C4d5E6f",
    "object": "event",
    "api_version": "2023-10-16",
    "created": 1700000000,
    "livemode": False,
    "type": "invoice.payment_succeeded",
    "data": {"object": INVOICE},
}


@pytest.fixture(autouse=True)
def _reset_global_config():
    yield
    structlog.reset_defaults()
    get_settings.cache_clear()


@pytest.fixture
def registry():
    reg = Registry(allow_clear=True)
    yield reg
    reg.clear()


@pytest.fixture
def callbacks(registry):
    return Callbacks(registry, owner="tests")


@pytest.fixture
def dispatcher(registry):
    return Dispatcher(registry)


@pytest.fixture
def payload():
    """A fresh ``invoice.payment_succeeded`` webhook body."""
    return copy.deepcopy(EVENT_ENVELOPE)


@pytest.fixture
def make_event():
    """Factory for invoice events: ``make_event("invoice.updated", previous_attributes={})``."""

    def _make(
        type: str = "invoice.payment_succeeded",
        previous_attributes: dict | None = None,
        **overrides,
    ) -> Event:
        return Event(
            type=type,
            resource=Resource({**copy.deepcopy(INVOICE), **overrides}),
            previous_attributes=previous_attributes,
            id="evt_test",
        )

    return _make


@pytest.fixture
def write_registrant(tmp_path, monkeypatch):
    """Write a registrant module into an importable temp dir; unload it afterwards."""
    monkeypatch.syspath_prepend(str(tmp_path))
    written = []

    def _write(name: str, source: str) -> str:
        (tmp_path / f"{name}.py").write_text(textwrap.dedent(source), encoding="utf-8")
        written.append(name)
        return name

    yield _write
    for name in written:
        sys.modules.pop(name, None)
