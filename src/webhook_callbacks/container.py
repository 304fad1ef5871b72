"""Wiring: settings, registry, dispatcher.

``create_container`` is the single place where the shared registry is
created and booted; the HTTP app and the CLI both go through it.
"""

from __future__ import annotations

from dataclasses import dataclass

from webhook_callbacks.boot import BootReport, boot
from webhook_callbacks.config.settings import Settings, get_settings
from webhook_callbacks.dispatcher import Dispatcher
from webhook_callbacks.registry import Registry


@dataclass
class Container:
    """Holds the booted services for one process."""

    settings: Settings
    registry: Registry
    dispatcher: Dispatcher
    boot_report: BootReport


def create_container(
    settings: Settings | None = None,
    *,
    registrants: list[str] | None = None,
) -> Container:
    """Build the registry, run the boot phase and return a :class:`Container`.

    Args:
        settings: Settings to use; defaults to :func:`get_settings`.
        registrants: Override ``settings.registrants``.
    """
    settings = settings or get_settings()
    registry = Registry(allow_clear=settings.test_mode)
    report = boot(
        registry,
        settings.registrants if registrants is None else registrants,
        freeze=settings.freeze_after_boot,
    )
    return Container(
        settings=settings,
        registry=registry,
        dispatcher=Dispatcher(registry),
        boot_report=report,
    )
