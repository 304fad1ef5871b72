"""Event dispatcher.

Runs every matching binding for one event, sequentially and in registration
order (type-specific bindings first, then wildcards). The failure policy is
per binding:

- strict: the original exception is re-raised and later bindings are not run.
- non-strict: the exception is wrapped, recorded on the result and logged;
  the pass continues.

Filter exceptions follow the same policy as handler exceptions.
"""

from __future__ import annotations

import structlog

from webhook_callbacks.domain.bindings import CallbackBinding
from webhook_callbacks.domain.events import Event
from webhook_callbacks.domain.exceptions import DispatchError, FilterEvaluationError, HandlerError
from webhook_callbacks.domain.filters import matches
from webhook_callbacks.domain.results import DispatchResult
from webhook_callbacks.registry import Registry

logger = structlog.get_logger(__name__)


class Dispatcher:
    """Routes events to the bindings held by a :class:`Registry`."""

    def __init__(self, registry: Registry) -> None:
        self.registry = registry

    def dispatch(self, event: Event) -> DispatchResult:
        """Run one dispatch pass for *event*.

        Returns a :class:`DispatchResult` whose outcome is ``COMPLETED`` or
        ``COMPLETED_WITH_ISOLATED_ERRORS``. A strict binding failure is
        raised unchanged instead.
        """
        log = logger.bind(event_type=event.type, event_id=event.id)
        result = DispatchResult(event_type=event.type, event_id=event.id)

        for binding in self.registry.lookup(event.type):
            try:
                fire = matches(binding.filter, event.resource, event)
            except Exception as exc:
                if binding.strict:
                    _log_abort(log, binding, "filter", exc)
                    raise
                _isolate(log, result, FilterEvaluationError(binding, exc))
                continue
            if not fire:
                result.skipped += 1
                continue

            result.invoked += 1
            try:
                binding.handler(event.resource, event)
            except Exception as exc:
                if binding.strict:
                    _log_abort(log, binding, "handler", exc)
                    raise
                _isolate(log, result, HandlerError(binding, exc))

        log.info(
            "dispatch.completed",
            outcome=result.outcome.value,
            invoked=result.invoked,
            skipped=result.skipped,
            isolated=len(result.isolated_errors),
        )
        return result


def _log_abort(log, binding: CallbackBinding, phase: str, exc: Exception) -> None:
    log.error("dispatch.aborted", binding=binding.name, phase=phase, error=repr(exc))


def _isolate(log, result: DispatchResult, error: DispatchError) -> None:
    log.warning(
        f"dispatch.{error.phase}_isolated",
        binding=error.binding.name,
        error=repr(error.original),
        exc_info=error.original,
    )
    result.isolated_errors.append(error)
