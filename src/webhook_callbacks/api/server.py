"""Webhook REST API — FastAPI server.

Endpoints:
  POST /stripe/events   (parse a delivery and dispatch it)
  GET  /stripe/ping     (liveness for the event source, no dispatch)
  GET  /health          (registry status)

A strict handler failure becomes a 500 so the event source retries the
delivery; everything else, including isolated handler failures, is a 200.
"""

from __future__ import annotations

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from webhook_callbacks import __version__
from webhook_callbacks.api.middleware.logging import LoggingMiddleware
from webhook_callbacks.api.payloads import WebhookPayload
from webhook_callbacks.config.logging import get_logger
from webhook_callbacks.container import Container
from webhook_callbacks.domain.results import DispatchOutcome, DispatchResult

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Webhook Callbacks",
    version=__version__,
    description="Dispatches Stripe-style webhook events to registered callbacks.",
)
app.add_middleware(LoggingMiddleware)


def _get_container() -> Container:
    """Dependency injection: resolve the booted container.

    Override ``app.dependency_overrides[_get_container]`` in tests.
    """
    if not hasattr(app.state, "container"):
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, "Callbacks not booted.")
    return app.state.container


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class DispatchResponse(BaseModel):
    outcome: DispatchOutcome
    event_type: str
    event_id: str | None = None
    invoked: int = 0
    skipped: int = 0
    isolated_errors: list[str] = []
    error: str | None = None

    @classmethod
    def from_result(cls, result: DispatchResult) -> DispatchResponse:
        return cls(
            outcome=result.outcome,
            event_type=result.event_type,
            event_id=result.event_id,
            invoked=result.invoked,
            skipped=result.skipped,
            isolated_errors=[e.message for e in result.isolated_errors],
        )


class HealthResponse(BaseModel):
    status: str
    bindings: int
    frozen: bool


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.post("/stripe/events", response_model=DispatchResponse)
def receive_event(
    body: WebhookPayload,
    container: Container = Depends(_get_container),
):
    """Dispatch one webhook delivery to the registered callbacks."""
    event = body.to_event()
    try:
        result = container.dispatcher.dispatch(event)
    except Exception as e:
        if container.settings.raise_strict_errors:
            raise
        logger.exception("webhook.aborted", event_type=event.type, event_id=event.id)
        response = DispatchResponse(
            outcome=DispatchOutcome.ABORTED,
            event_type=event.type,
            event_id=event.id,
            error=f"{type(e).__name__}: {e}",
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=response.model_dump(mode="json"),
        )
    return DispatchResponse.from_result(result)


@app.get("/stripe/ping")
def ping() -> dict[str, str]:
    """Event source liveness probe."""
    return {"status": "ok"}


@app.get("/health", response_model=HealthResponse)
def health(container: Container = Depends(_get_container)):
    return HealthResponse(
        status="ok",
        bindings=len(container.registry),
        frozen=container.registry.frozen,
    )
