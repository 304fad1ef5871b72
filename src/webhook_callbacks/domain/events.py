"""Normalized event model.

An :class:`Event` is what the transport hands to the dispatcher once a raw
webhook body has been parsed: a type string, the affected resource, and the
map of previous attribute values for update-style events.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any


def _wrap(value: Any) -> Any:
    if isinstance(value, Resource):
        return value
    if isinstance(value, Mapping):
        return Resource(value)
    if isinstance(value, list):
        return [_wrap(v) for v in value]
    return value


def _unwrap(value: Any) -> Any:
    if isinstance(value, Resource):
        return value.to_dict()
    if isinstance(value, list):
        return [_unwrap(v) for v in value]
    return value


class Resource:
    """Attribute-access view over a resource sub-document.

    ``Resource({"total": 6999}).total == 6999``. Nested mappings are wrapped
    recursively so ``invoice.lines.data[0].amount`` works as well.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        object.__setattr__(
            self, "_values", {k: _wrap(v) for k, v in (values or {}).items()}
        )

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._values[name]
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__} has no attribute {name!r}"
            ) from None

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            self._values[name] = _wrap(value)

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._values[key] = _wrap(value)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Resource):
            return self._values == other._values
        if isinstance(other, Mapping):
            return self.to_dict() == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        kind = self._values.get("object", "resource")
        ident = self._values.get("id")
        return f"<Resource {kind} id={ident!r}>" if ident else f"<Resource {kind}>"

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def keys(self):
        return self._values.keys()

    def to_dict(self) -> dict[str, Any]:
        """Return a plain ``dict`` copy, unwrapping nested resources."""
        return {k: _unwrap(v) for k, v in self._values.items()}


@dataclass(frozen=True)
class Event:
    """One normalized webhook notification.

    ``previous_attributes`` is ``None`` when the source sent no such map and
    ``{}`` when it sent an empty one; attribute filters treat both as
    "nothing changed".
    """

    type: str
    resource: Resource
    previous_attributes: dict[str, Any] | None = None
    id: str | None = None
    created: datetime | None = None
    livemode: bool = False
    api_version: str | None = None

    @property
    def object_type(self) -> str | None:
        """The resource's ``object`` field, e.g. ``"invoice"``."""
        return self.resource.get("object")
