"""Callback registry — maps event types to ordered callback bindings.

Populated during boot, then frozen and only read by concurrent dispatch
calls. ``lookup`` never mutates, so readers need no lock as long as nothing
registers or clears while a dispatch is in flight.
"""

from __future__ import annotations

from collections.abc import Iterator

import structlog

from webhook_callbacks.domain.bindings import CallbackBinding
from webhook_callbacks.domain.exceptions import (
    RegistrationError,
    RegistryError,
    RegistryFrozenError,
)

logger = structlog.get_logger(__name__)


class Registry:
    """Process-wide collection of :class:`CallbackBinding` objects.

    Bindings for a concrete type live in a per-type bucket; wildcard
    bindings live in their own bucket and always run after the type-specific
    ones. Insertion order within a bucket is invocation order.
    """

    def __init__(self, *, allow_clear: bool = False) -> None:
        self._by_type: dict[str, list[CallbackBinding]] = {}
        self._wildcard: list[CallbackBinding] = []
        self._frozen = False
        self._allow_clear = allow_clear

    def register(self, binding: CallbackBinding) -> None:
        """Append *binding* to its bucket. Duplicates are kept."""
        if self._frozen:
            raise RegistryFrozenError(
                f"cannot register {binding.name}: registry is frozen",
                details={"event_type": binding.type_label},
            )
        if binding.is_wildcard:
            self._wildcard.append(binding)
        elif isinstance(binding.event_type, str) and binding.event_type:
            self._by_type.setdefault(binding.event_type, []).append(binding)
        else:
            raise RegistrationError(f"invalid event type: {binding.event_type!r}")
        logger.debug(
            "registry.registered",
            event_type=binding.type_label,
            binding=binding.name,
            strict=binding.strict,
        )

    def lookup(self, event_type: str) -> list[CallbackBinding]:
        """Return bindings for *event_type* followed by all wildcard bindings."""
        return [*self._by_type.get(event_type, ()), *self._wildcard]

    def clear(self) -> None:
        """Drop every binding. Only available to test harnesses."""
        if not self._allow_clear:
            raise RegistryError("clear() is only available when test mode is enabled")
        self._by_type = {}
        self._wildcard = []
        self._frozen = False
        logger.debug("registry.cleared")

    def freeze(self) -> None:
        """End the boot phase; further ``register`` calls raise."""
        self._frozen = True
        logger.info("registry.frozen", bindings=len(self))

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def event_types(self) -> list[str]:
        """Concrete event types with at least one binding, in first-seen order."""
        return list(self._by_type)

    def bindings(self) -> Iterator[CallbackBinding]:
        """Iterate type-specific bindings bucket by bucket, then wildcards."""
        for bucket in self._by_type.values():
            yield from bucket
        yield from self._wildcard

    def __len__(self) -> int:
        return sum(len(b) for b in self._by_type.values()) + len(self._wildcard)
