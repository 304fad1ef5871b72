"""Change filters gating whether a binding fires.

A filter is resolved once, at registration time, from the ``only=`` argument
into one of two variants:

- :class:`AnyOf` — fires when any of its keys appears in the event's
  ``previous_attributes``.
- :class:`Predicate` — fires when a user function returns truthy.

Evaluation never touches the registry.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

from webhook_callbacks.domain.exceptions import RegistrationError

if TYPE_CHECKING:
    from webhook_callbacks.domain.events import Event, Resource


@dataclass(frozen=True)
class AnyOf:
    """Match when ``previous_attributes`` names at least one of ``keys``."""

    keys: frozenset[str]

    def matches(self, resource: Resource, event: Event) -> bool:
        previous = event.previous_attributes
        if not previous:
            return False
        return not self.keys.isdisjoint(previous.keys())

    def describe(self) -> str:
        return "only=" + ",".join(sorted(self.keys))


@dataclass(frozen=True)
class Predicate:
    """Match when ``fn(resource, event)`` is truthy.

    Exceptions raised by ``fn`` are not caught here; the dispatcher applies
    the owning binding's strict policy to them.
    """

    fn: Callable[[Any, Any], Any]

    def matches(self, resource: Resource, event: Event) -> bool:
        return bool(self.fn(resource, event))

    def describe(self) -> str:
        return "only=" + getattr(self.fn, "__qualname__", repr(self.fn))


ChangeFilter = Union[AnyOf, Predicate]


def resolve_filter(only: Any) -> ChangeFilter | None:
    """Turn an ``only=`` argument into a :data:`ChangeFilter`.

    Accepts ``None``, a single attribute name, an iterable of attribute
    names, a callable predicate, or an already-built filter.
    """
    if only is None:
        return None
    if isinstance(only, (AnyOf, Predicate)):
        return only
    if isinstance(only, str):
        return AnyOf(frozenset({_check_key(only)}))
    if callable(only):
        return Predicate(only)
    if isinstance(only, Iterable):
        keys = frozenset(_check_key(k) for k in only)
        if not keys:
            raise RegistrationError("only= must name at least one attribute")
        return AnyOf(keys)
    raise RegistrationError(
        f"only= expects an attribute name, a list of names or a callable, "
        f"got {type(only).__name__}",
    )


def _check_key(key: Any) -> str:
    if not isinstance(key, str) or not key:
        raise RegistrationError(f"invalid attribute name in only=: {key!r}")
    return key


def matches(filter: ChangeFilter | None, resource: Resource, event: Event) -> bool:
    """Return whether a binding guarded by *filter* should fire."""
    if filter is None:
        return True
    return filter.matches(resource, event)
