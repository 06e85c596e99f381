"""Tests for InvocationContext."""

from __future__ import annotations

from proccore.context import InvocationContext


class TestInvocationContext:
    def test_create_generates_unique_trace_ids(self) -> None:
        first, second = InvocationContext.create(), InvocationContext.create()
        assert first.trace_id != second.trace_id
        assert len(first.trace_id) == 36

    def test_create_with_caller_and_data(self) -> None:
        ctx = InvocationContext.create(caller_id="shell", data={"db": "neo"})
        assert ctx.caller_id == "shell"
        assert ctx.data == {"db": "neo"}

    def test_data_is_not_shared(self) -> None:
        first, second = InvocationContext.create(), InvocationContext.create()
        first.data["x"] = 1
        assert second.data == {}
