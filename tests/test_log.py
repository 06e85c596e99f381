"""Tests for the Log capability."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

import pytest

from proccore.capabilities import CapabilityRegistry
from proccore.compiler import ProcedureCompiler
from proccore.context import InvocationContext
from proccore.decorator import procedure, resource
from proccore.log import Log, LoggerLog, register_logging


@dataclass
class Message:
    text: str


class Chatty:
    log: Log = resource()

    @procedure
    def chat(self) -> Iterator[Message]:
        self.log.info("said %s", "hello")
        yield Message("hello")


class TestLoggerLog:
    """LoggerLog levels and trace tagging."""

    def test_levels(self, caplog: pytest.LogCaptureFixture) -> None:
        log = LoggerLog(logging.getLogger("proccore.test"), trace_id="t-1")

        with caplog.at_level(logging.DEBUG, logger="proccore.test"):
            log.debug("d")
            log.info("i")
            log.warn("w")
            log.error("e %d", 5)

        assert [r.levelno for r in caplog.records] == [logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR]
        assert caplog.records[-1].getMessage() == "[t-1] e 5"
        assert all(r.trace_id == "t-1" for r in caplog.records)

    def test_disabled_level_is_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        log = LoggerLog(logging.getLogger("proccore.quiet"))
        with caplog.at_level(logging.WARNING, logger="proccore.quiet"):
            log.debug("hidden")
        assert caplog.records == []

    def test_from_context(self) -> None:
        context = InvocationContext.create()
        log = LoggerLog.from_context(context)
        assert isinstance(log, Log)

    def test_log_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            Log()  # type: ignore[abstract]


class TestRegisterLogging:
    def test_procedures_log_with_the_callers_trace(self, caplog: pytest.LogCaptureFixture) -> None:
        capabilities = CapabilityRegistry()
        register_logging(capabilities)
        (chat,) = ProcedureCompiler(capabilities=capabilities).compile(Chatty)
        context = InvocationContext.create()

        with caplog.at_level(logging.INFO, logger="proccore.procedures"):
            assert list(chat.invoke(context)) == [("hello",)]

        assert caplog.records[0].getMessage() == f"[{context.trace_id}] said hello"

    def test_custom_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        capabilities = CapabilityRegistry()
        register_logging(capabilities, logging.getLogger("app.procs"))
        (chat,) = ProcedureCompiler(capabilities=capabilities).compile(Chatty)

        with caplog.at_level(logging.INFO, logger="app.procs"):
            list(chat.invoke(InvocationContext.create()))

        assert caplog.records[0].name == "app.procs"
