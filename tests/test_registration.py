"""Tests for webhook_callbacks.registration."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from webhook_callbacks.domain.bindings import WILDCARD
from webhook_callbacks.domain.exceptions import RegistrationError
from webhook_callbacks.domain.filters import AnyOf, Predicate


def handler(resource, event):
    pass


class TestAfter:
    def test_direct_call(self, registry, callbacks):
        returned = callbacks.after("invoice.payment_succeeded", handler)

        assert returned is handler
        [binding] = registry.lookup("invoice.payment_succeeded")
        assert binding.handler is handler
        assert binding.strict is False
        assert binding.filter is None
        assert binding.owner == "tests"

    def test_decorator(self, registry, callbacks):
        @callbacks.after("invoice.updated", only="closed")
        def on_closed(invoice, event):
            pass

        [binding] = registry.lookup("invoice.updated")
        assert binding.handler is on_closed
        assert binding.filter == AnyOf(frozenset({"closed"}))
        assert binding.name.endswith("on_closed")

    def test_strict(self, registry, callbacks):
        callbacks.after_strict("invoice.payment_succeeded", handler, only=["currency"])
        [binding] = registry.lookup("invoice.payment_succeeded")
        assert binding.strict is True
        assert binding.filter == AnyOf(frozenset({"currency"}))

    def test_strict_keyword(self, registry, callbacks):
        callbacks.after("invoice.payment_succeeded", handler, strict=True)
        assert registry.lookup("invoice.payment_succeeded")[0].strict is True

    def test_predicate_filter(self, registry, callbacks):
        def predicate(resource, event):
            return True

        callbacks.after("invoice.updated", handler, only=predicate)
        assert registry.lookup("invoice.updated")[0].filter == Predicate(predicate)

    @pytest.mark.parametrize("event_type", ["", None, 3, WILDCARD])
    def test_rejects_bad_event_type(self, callbacks, event_type):
        with pytest.raises(RegistrationError):
            callbacks.after(event_type, handler)

    def test_rejects_non_callable(self, callbacks):
        with pytest.raises(RegistrationError):
            callbacks.after("invoice.updated", "not a function")

    def test_rejects_coroutine_function(self, registry, callbacks):
        async def handle(resource, event):
            pass

        with pytest.raises(RegistrationError):
            callbacks.after("invoice.updated", handle)
        assert len(registry) == 0

    def test_bad_filter_registers_nothing(self, registry, callbacks):
        with pytest.raises(RegistrationError):
            callbacks.after("invoice.updated", handler, only=[])
        assert len(registry) == 0

    def test_custom_type_is_logged(self, callbacks):
        with capture_logs() as logs:
            callbacks.after("foo.bar.baz", handler)
            callbacks.after("invoice.updated", handler)

        custom = [e for e in logs if e["event"] == "registration.custom_event_type"]
        assert [e["event_type"] for e in custom] == ["foo.bar.baz"]


class TestAfterAny:
    def test_registers_wildcard(self, registry, callbacks):
        callbacks.after_any(handler)
        [binding] = registry.lookup("anything.at.all")
        assert binding.event_type is WILDCARD
        assert binding.is_wildcard
        assert binding.type_label == "*"

    def test_decorator_and_strict(self, registry, callbacks):
        @callbacks.after_any_strict(only="closed")
        def audit(resource, event):
            pass

        [binding] = registry.lookup("invoice.updated")
        assert binding.handler is audit
        assert binding.strict is True
