"""Webhook callbacks — route Stripe-style events to registered handlers."""

from webhook_callbacks.dispatcher import Dispatcher
from webhook_callbacks.domain.bindings import WILDCARD, CallbackBinding
from webhook_callbacks.domain.events import Event, Resource
from webhook_callbacks.domain.filters import AnyOf, Predicate
from webhook_callbacks.domain.results import DispatchOutcome, DispatchResult
from webhook_callbacks.registration import Callbacks
from webhook_callbacks.registry import Registry

__version__ = "1.0.0"

__all__ = [
    "AnyOf",
    "CallbackBinding",
    "Callbacks",
    "DispatchOutcome",
    "DispatchResult",
    "Dispatcher",
    "Event",
    "Predicate",
    "Registry",
    "Resource",
    "WILDCARD",
    "__version__",
]
