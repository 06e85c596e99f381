"""Procedure catalog: name lookup for compiled procedure handles."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Iterator, Sequence

from proccore.compiler import ProcedureCompiler
from proccore.context import InvocationContext
from proccore.errors import ProcedureAlreadyExistsError, ProcedureNotFoundError
from proccore.handle import ProcedureHandle
from proccore.rows import LazyRowSequence

logger = logging.getLogger(__name__)

__all__ = ["ProcedureCatalog", "CATALOG_EVENTS"]

CATALOG_EVENTS = ("register", "unregister")


class ProcedureCatalog:
    """Thread-safe table of compiled procedures keyed by qualified name.

    The qualified name (namespace plus name) is unique within a catalog.
    """

    def __init__(self, compiler: ProcedureCompiler | None = None) -> None:
        self._compiler = compiler if compiler is not None else ProcedureCompiler()
        self._handles: dict[str, ProcedureHandle] = {}
        self._callbacks: dict[str, list[Callable[[str, ProcedureHandle], Any]]] = {
            event: [] for event in CATALOG_EVENTS
        }
        self._write_lock = threading.RLock()

    @property
    def compiler(self) -> ProcedureCompiler:
        return self._compiler

    # ----- Registration -----

    def register(self, handle: ProcedureHandle) -> None:
        """Register a compiled procedure.

        Raises:
            ProcedureAlreadyExistsError: If the qualified name is taken.
        """
        self._register_all([handle])

    def register_group(self, group: type) -> list[ProcedureHandle]:
        """Compile a declaration group and register all of its procedures.

        Either every compiled procedure is registered or none is.

        Raises:
            CompilationError: If the group cannot be compiled.
            ProcedureAlreadyExistsError: If any procedure name is taken.
        """
        handles = self._compiler.compile(group)
        self._register_all(handles)
        return handles

    def _register_all(self, handles: Sequence[ProcedureHandle]) -> None:
        with self._write_lock:
            seen: set[str] = set()
            for handle in handles:
                if handle.name in self._handles or handle.name in seen:
                    raise ProcedureAlreadyExistsError(handle.name)
                seen.add(handle.name)
            for handle in handles:
                self._handles[handle.name] = handle

        for handle in handles:
            logger.debug("Registered procedure %s", handle.signature)
            self._trigger_event("register", handle.name, handle)

    def unregister(self, name: str) -> bool:
        """Remove a procedure. Returns False if it was not registered."""
        with self._write_lock:
            handle = self._handles.pop(name, None)
        if handle is None:
            return False
        self._trigger_event("unregister", name, handle)
        return True

    # ----- Query Methods -----

    def get(self, name: str) -> ProcedureHandle:
        """Look up a procedure by qualified name.

        Raises:
            ProcedureNotFoundError: If no procedure has that name.
        """
        with self._write_lock:
            handle = self._handles.get(name)
        if handle is None:
            raise ProcedureNotFoundError(name)
        return handle

    def has(self, name: str) -> bool:
        with self._write_lock:
            return name in self._handles

    def list(self, prefix: str | None = None) -> list[str]:
        """Return sorted qualified names, optionally filtered by prefix."""
        with self._write_lock:
            names = list(self._handles)
        if prefix is not None:
            names = [name for name in names if name.startswith(prefix)]
        return sorted(names)

    def iter(self) -> Iterator[tuple[str, ProcedureHandle]]:
        """Return an iterator of (name, handle) tuples (snapshot-based)."""
        with self._write_lock:
            items = list(self._handles.items())
        return iter(items)

    @property
    def count(self) -> int:
        with self._write_lock:
            return len(self._handles)

    def call(
        self,
        name: str,
        context: InvocationContext | None = None,
        args: Sequence[Any] = (),
    ) -> LazyRowSequence:
        """Invoke a registered procedure by name.

        A fresh context is created when none is given.

        Raises:
            ProcedureNotFoundError: If no procedure has that name.
        """
        handle = self.get(name)
        return handle.invoke(context if context is not None else InvocationContext.create(), args)

    # ----- Event System -----

    def on(self, event: str, callback: Callable[[str, ProcedureHandle], Any]) -> None:
        """Register an event callback for ``"register"`` or ``"unregister"``.

        Raises:
            ValueError: If the event name is unknown.
        """
        with self._write_lock:
            if event not in self._callbacks:
                raise ValueError(f"Invalid event: {event}. Must be one of {', '.join(CATALOG_EVENTS)}")
            self._callbacks[event].append(callback)

    def _trigger_event(self, event: str, name: str, handle: ProcedureHandle) -> None:
        """Trigger all callbacks for an event. Errors are logged and swallowed."""
        with self._write_lock:
            callbacks = list(self._callbacks.get(event, []))
        for cb in callbacks:
            try:
                cb(name, handle)
            except Exception as e:
                logger.error("Callback error for event '%s' on procedure '%s': %s", event, name, e)
