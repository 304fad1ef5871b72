"""Boot phase: load registrant modules, then freeze the registry.

Registrants are loaded in the order given (normally ``Settings.registrants``)
so invocation order across registrants is deterministic. Each registrant is
``"package.module"`` or ``"package.module:Attribute"``; the resolved object
must expose ``register_callbacks(callbacks)``.
"""

from __future__ import annotations

import importlib
from collections.abc import Iterable
from dataclasses import dataclass, field

import structlog

from webhook_callbacks.domain.exceptions import ConfigurationError
from webhook_callbacks.registration import Callbacks
from webhook_callbacks.registry import Registry

logger = structlog.get_logger(__name__)

REGISTRATION_HOOK = "register_callbacks"


@dataclass
class BootReport:
    """Result of a boot run."""

    registrants: list[str] = field(default_factory=list)
    bindings: int = 0
    frozen: bool = False


def resolve_registrant(path: str) -> object:
    """Import ``module`` or ``module:attr`` and return the target object."""
    module_path, _, attr = path.partition(":")
    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        raise ConfigurationError(
            f"cannot import registrant {path!r}: {e}",
            details={"registrant": path},
        ) from e
    if not attr:
        return module
    try:
        return getattr(module, attr)
    except AttributeError as e:
        raise ConfigurationError(
            f"registrant {path!r}: module has no attribute {attr!r}",
            details={"registrant": path},
        ) from e


def boot(registry: Registry, registrants: Iterable[str], *, freeze: bool = True) -> BootReport:
    """Run every registrant's ``register_callbacks`` against *registry*."""
    report = BootReport()
    before = len(registry)

    for path in registrants:
        target = resolve_registrant(path)
        hook = getattr(target, REGISTRATION_HOOK, None)
        if not callable(hook):
            raise ConfigurationError(
                f"registrant {path!r} does not define {REGISTRATION_HOOK}()",
                details={"registrant": path},
            )
        added = len(registry)
        hook(Callbacks(registry, owner=path))
        logger.info("boot.registrant_loaded", registrant=path, bindings=len(registry) - added)
        report.registrants.append(path)

    report.bindings = len(registry) - before
    if freeze:
        registry.freeze()
    report.frozen = registry.frozen
    return report
