"""Lazy, single-pass row sequences returned by procedure invocations."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Iterator

from proccore.errors import InvocationError, NoMoreRowsError

logger = logging.getLogger(__name__)

__all__ = ["LazyRowSequence", "Row"]

Row = tuple[Any, ...]

_NOTHING = object()


class LazyRowSequence:
    """Pull-based sequence of rows adapted from a stream of output records.

    At most one record is produced ahead of what the consumer has pulled.
    Failures while producing or reading a record surface as InvocationError
    on the pull that needed that record, after which the sequence is closed.
    Once exhausted it stays exhausted.
    """

    def __init__(
        self,
        records: Iterable[Any],
        to_row: Callable[[Any], Row],
        procedure: str = "<anonymous>",
    ) -> None:
        self._records = records
        self._to_row = to_row
        self._procedure = procedure
        self._iterator: Iterator[Any] | None = None
        self._pending: Any = _NOTHING
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def has_more(self) -> bool:
        """Return whether another row is available, producing it if needed.

        Raises:
            InvocationError: If producing or reading the next record fails.
        """
        if self._pending is not _NOTHING:
            return True
        if self._closed:
            return False
        self._pending = self._advance()
        return self._pending is not _NOTHING

    def next(self) -> Row:
        """Return the next row.

        Raises:
            NoMoreRowsError: If the sequence is exhausted.
            InvocationError: If producing or reading the record fails.
        """
        if not self.has_more():
            raise NoMoreRowsError()
        row, self._pending = self._pending, _NOTHING
        return row

    def close(self) -> None:
        """Release the underlying producer. Safe to call repeatedly."""
        if self._closed:
            return
        self._closed = True
        self._pending = _NOTHING
        source = self._iterator if self._iterator is not None else self._records
        self._iterator = None
        self._records = ()
        close = getattr(source, "close", None)
        if callable(close):
            try:
                close()
            except Exception as e:
                raise InvocationError(self._procedure, f"failed to release row producer: {e}", cause=e) from e

    def __iter__(self) -> LazyRowSequence:
        return self

    def __next__(self) -> Row:
        if not self.has_more():
            raise StopIteration
        row, self._pending = self._pending, _NOTHING
        return row

    def __enter__(self) -> LazyRowSequence:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _advance(self) -> Any:
        try:
            if self._iterator is None:
                self._iterator = iter(self._records)
            record = next(self._iterator)
            return self._to_row(record)
        except StopIteration:
            self.close()
            return _NOTHING
        except InvocationError:
            self._abandon()
            raise
        except Exception as e:
            self._abandon()
            raise InvocationError(self._procedure, str(e) or type(e).__name__, cause=e) from e

    def _abandon(self) -> None:
        # A failed producer is released without masking the original error.
        try:
            self.close()
        except InvocationError as close_error:
            logger.warning("Ignoring failure while releasing %s after an error: %s", self._procedure, close_error)
