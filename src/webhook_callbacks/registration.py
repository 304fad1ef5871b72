"""Declarative registration surface for registrant classes and modules.

A registrant holds a :class:`Callbacks` bound to the shared registry and
declares its handlers through it::

    def register_callbacks(callbacks: Callbacks) -> None:
        @callbacks.after("invoice.updated", only=["currency", "subtotal"])
        def sync_totals(invoice, event):
            ...

        callbacks.after_strict("invoice.payment_succeeded", mark_paid)
        callbacks.after_any(audit_log)

Every method can be used directly (``after(type, handler)``) or as a
decorator (``@after(type)``); the handler is returned unchanged.
"""

from __future__ import annotations

import inspect
from typing import Any

import structlog

from webhook_callbacks.catalog import is_known_event_type
from webhook_callbacks.domain.bindings import WILDCARD, CallbackBinding, EventType, Handler
from webhook_callbacks.domain.exceptions import RegistrationError
from webhook_callbacks.domain.filters import resolve_filter
from webhook_callbacks.registry import Registry

logger = structlog.get_logger(__name__)


class Callbacks:
    """Registration builder bound to one :class:`Registry`."""

    def __init__(self, registry: Registry, owner: str | None = None) -> None:
        self.registry = registry
        self.owner = owner

    def after(
        self,
        event_type: str,
        handler: Handler | None = None,
        *,
        only: Any = None,
        strict: bool = False,
    ) -> Any:
        """Run *handler* after every event of *event_type*.

        Args:
            event_type: Exact event type, e.g. ``"invoice.payment_succeeded"``.
            handler: Callable taking ``(resource, event)``. Omit to use as a
                decorator.
            only: Attribute name, list of names, or ``(resource, event)``
                predicate restricting when the handler fires.
            strict: Propagate handler failures out of the dispatch pass.
        """
        if not isinstance(event_type, str) or not event_type:
            raise RegistrationError(f"event type must be a non-empty string, got {event_type!r}")
        if not is_known_event_type(event_type):
            logger.debug("registration.custom_event_type", event_type=event_type, owner=self.owner)
        return self._register(event_type, handler, only=only, strict=strict)

    def after_strict(self, event_type: str, handler: Handler | None = None, *, only: Any = None) -> Any:
        """Like :meth:`after`, but a failure aborts the dispatch pass."""
        return self.after(event_type, handler, only=only, strict=True)

    def after_any(self, handler: Handler | None = None, *, only: Any = None, strict: bool = False) -> Any:
        """Run *handler* after every event, whatever its type."""
        return self._register(WILDCARD, handler, only=only, strict=strict)

    def after_any_strict(self, handler: Handler | None = None, *, only: Any = None) -> Any:
        return self.after_any(handler, only=only, strict=True)

    def _register(self, event_type: EventType, handler: Handler | None, *, only: Any, strict: bool) -> Any:
        change_filter = resolve_filter(only)

        def bind(fn: Handler) -> Handler:
            if not callable(fn):
                raise RegistrationError(f"handler must be callable, got {fn!r}")
            if inspect.iscoroutinefunction(fn):
                raise RegistrationError(
                    f"{fn.__qualname__} is a coroutine function; handlers must be synchronous",
                )
            self.registry.register(
                CallbackBinding(
                    event_type=event_type,
                    handler=fn,
                    filter=change_filter,
                    strict=strict,
                    owner=self.owner,
                )
            )
            return fn

        if handler is None:
            return bind
        return bind(handler)
