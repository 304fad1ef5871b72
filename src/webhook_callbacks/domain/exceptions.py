"""Custom exceptions for webhook-callbacks."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from webhook_callbacks.domain.bindings import CallbackBinding


class CallbacksError(Exception):
    """Base exception for all webhook-callbacks errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(CallbacksError):
    """Raised when there's a configuration problem."""

    pass


class RegistrationError(CallbacksError):
    """Raised when a callback registration is malformed."""

    pass


class RegistryError(CallbacksError):
    """Raised when a registry operation is not allowed."""

    pass


class RegistryFrozenError(RegistryError):
    """Raised when registering after the boot phase has ended."""

    pass


# ---------------------------------------------------------------------------
# Dispatch failures
# ---------------------------------------------------------------------------


class DispatchError(CallbacksError):
    """A failure raised by one binding during a dispatch pass.

    Only non-strict failures are wrapped in this type; they are collected on
    the :class:`DispatchResult` and never raised out of ``dispatch``.
    """

    phase = "dispatch"

    def __init__(self, binding: CallbackBinding, original: Exception) -> None:
        super().__init__(
            f"{binding.name} failed during {self.phase}: {original!r}",
            details={"binding": binding.name, "phase": self.phase},
        )
        self.binding = binding
        self.original = original
        self.__cause__ = original


class HandlerError(DispatchError):
    """The registered callback raised while handling an event."""

    phase = "handler"


class FilterEvaluationError(DispatchError):
    """A predicate filter raised while deciding whether to fire."""

    phase = "filter"
