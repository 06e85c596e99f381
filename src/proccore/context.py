"""Invocation context passed to every procedure call."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

__all__ = ["InvocationContext"]


@dataclass
class InvocationContext:
    """Ambient per-call value supplied by the query engine.

    Capability providers receive it to build per-call service instances.
    """

    trace_id: str
    caller_id: str | None = None
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(cls, caller_id: str | None = None, data: dict[str, Any] | None = None) -> InvocationContext:
        """Create a new InvocationContext with a generated UUID v4 trace_id."""
        return cls(
            trace_id=str(uuid.uuid4()),
            caller_id=caller_id,
            data=data if data is not None else {},
        )
