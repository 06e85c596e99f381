"""Capability registry: resolves injectable services per invocation."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, Callable

from proccore.errors import DependencyResolutionError, ProcedureError

if TYPE_CHECKING:
    from proccore.context import InvocationContext

logger = logging.getLogger(__name__)

__all__ = ["CapabilityRegistry", "Provider"]

Provider = Callable[["InvocationContext"], Any]


class CapabilityRegistry:
    """Process-wide table mapping capability markers to providers.

    A provider is a callable ``context -> instance``. Registration is expected
    to complete before resolution starts; re-registering a marker replaces the
    previous provider, which lets tests substitute services.
    """

    def __init__(self) -> None:
        self._providers: dict[Any, Provider] = {}
        self._write_lock = threading.RLock()

    def register(self, marker: Any, provider: Provider) -> None:
        """Associate a capability marker with a provider (last write wins)."""
        if not callable(provider):
            raise TypeError(f"Provider for {marker!r} must be callable")
        with self._write_lock:
            replaced = marker in self._providers
            self._providers[marker] = provider
        if replaced:
            logger.debug("Replaced provider for capability %r", marker)

    def unregister(self, marker: Any) -> bool:
        """Remove a provider. Returns False if the marker was not registered."""
        with self._write_lock:
            return self._providers.pop(marker, None) is not None

    def has(self, marker: Any) -> bool:
        with self._write_lock:
            return marker in self._providers

    @property
    def markers(self) -> list[Any]:
        """Snapshot of registered capability markers."""
        with self._write_lock:
            return list(self._providers)

    def resolve(self, marker: Any, context: InvocationContext) -> Any:
        """Produce the capability instance for ``marker`` in ``context``.

        Raises:
            DependencyResolutionError: If the marker was never registered or
                its provider failed.
        """
        with self._write_lock:
            provider = self._providers.get(marker)
        if provider is None:
            raise DependencyResolutionError(marker, "no provider has been registered")

        try:
            return provider(context)
        except ProcedureError:
            raise
        except Exception as e:
            raise DependencyResolutionError(marker, f"provider failed: {e}", cause=e) from e
