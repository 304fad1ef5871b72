"""webhook-callbacks command line.

Commands:
  serve    Boot the registrants and run the HTTP app under uvicorn.
  routes   Boot the registrants and list every binding.
  replay   Dispatch a saved webhook body locally and print the result.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from webhook_callbacks import __version__
from webhook_callbacks.api.payloads import WebhookPayload
from webhook_callbacks.catalog import is_known_event_type
from webhook_callbacks.config.logging import configure_logging
from webhook_callbacks.config.settings import get_settings
from webhook_callbacks.container import Container, create_container
from webhook_callbacks.domain.exceptions import CallbacksError

registrant_option = click.option(
    "--registrant",
    "-r",
    "registrants",
    multiple=True,
    help="Registrant module (module or module:Attr). Repeatable; overrides settings.",
)


def _boot(registrants: tuple[str, ...]) -> Container:
    try:
        return create_container(registrants=list(registrants) or None)
    except CallbacksError as e:
        raise click.ClickException(e.message) from e


@click.group()
@click.version_option(__version__, prog_name="webhook-callbacks")
def cli() -> None:
    """Route Stripe-style webhook events to registered callbacks."""
    settings = get_settings()
    configure_logging(settings.log_level, json_logs=settings.log_json)


@cli.command()
@click.option("--host", default=None, help="Bind address (default: settings.api_host).")
@click.option("--port", default=None, type=int, help="Port (default: settings.api_port).")
@registrant_option
def serve(host: str | None, port: int | None, registrants: tuple[str, ...]) -> None:
    """Run the webhook endpoint."""
    import uvicorn

    from webhook_callbacks.api.server import app

    container = _boot(registrants)
    app.state.container = container
    settings = container.settings
    click.echo(
        f"Booted {container.boot_report.bindings} bindings from "
        f"{len(container.boot_report.registrants)} registrants"
    )
    uvicorn.run(app, host=host or settings.api_host, port=port or settings.api_port, log_config=None)


@cli.command()
@registrant_option
def routes(registrants: tuple[str, ...]) -> None:
    """List registered bindings in invocation order."""
    container = _boot(registrants)
    registry = container.registry
    if not len(registry):
        click.echo("No callbacks registered.")
        return

    for binding in registry.bindings():
        label = binding.type_label
        flags = ["strict" if binding.strict else "isolated"]
        if binding.filter is not None:
            flags.append(binding.filter.describe())
        if not binding.is_wildcard and not is_known_event_type(label):
            flags.append("custom")
        click.echo(f"{label:<40} {binding.name}  [{', '.join(flags)}]")
    click.echo(f"Total: {len(registry)}")


@cli.command()
@click.argument("payload_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@registrant_option
def replay(payload_file: Path, registrants: tuple[str, ...]) -> None:
    """Dispatch the webhook body stored in PAYLOAD_FILE."""
    try:
        payload = WebhookPayload.model_validate_json(payload_file.read_text(encoding="utf-8"))
    except ValidationError as e:
        raise click.ClickException(f"Invalid webhook body: {e}") from e

    container = _boot(registrants)
    event = payload.to_event()
    try:
        result = container.dispatcher.dispatch(event)
    except Exception as e:
        click.echo(json.dumps({
            "outcome": "aborted",
            "event_type": event.type,
            "error": f"{type(e).__name__}: {e}",
        }, indent=2))
        sys.exit(1)

    click.echo(json.dumps({
        "outcome": result.outcome.value,
        "event_type": result.event_type,
        "event_id": result.event_id,
        "invoked": result.invoked,
        "skipped": result.skipped,
        "isolated_errors": [e.message for e in result.isolated_errors],
    }, indent=2))


if __name__ == "__main__":
    cli()
