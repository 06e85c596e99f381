"""Tests for the bundled example declaration group."""

from __future__ import annotations

import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType

import pytest

from proccore import CapabilityRegistry, InvocationContext, ProcedureCatalog, ProcedureCompiler, register_logging
from proccore.types import INTEGER, STRING

EXAMPLE = Path(__file__).resolve().parent.parent / "examples" / "procedures" / "people.py"
MODULE_NAME = "examples.procedures.people"


@pytest.fixture
def people() -> ModuleType:
    spec = importlib.util.spec_from_file_location(MODULE_NAME, EXAMPLE)
    module = importlib.util.module_from_spec(spec)
    sys.modules[MODULE_NAME] = module
    try:
        spec.loader.exec_module(module)
        yield module
    finally:
        sys.modules.pop(MODULE_NAME, None)


@pytest.fixture
def people_catalog(people: ModuleType) -> ProcedureCatalog:
    capabilities = CapabilityRegistry()
    register_logging(capabilities)
    catalog = ProcedureCatalog(ProcedureCompiler(capabilities=capabilities))
    catalog.register_group(people.PeopleProcedures)
    return catalog


class TestPeopleProcedures:
    def test_registered_names(self, people_catalog: ProcedureCatalog) -> None:
        assert people_catalog.list() == [
            "examples.procedures.people.list_banana_owners",
            "examples.procedures.people.list_cool_people",
        ]

    def test_signatures(self, people_catalog: ProcedureCatalog) -> None:
        owners = people_catalog.get("examples.procedures.people.list_banana_owners").signature
        assert [(f.name, f.type) for f in owners.inputs] == [("minimum", INTEGER)]
        assert [(f.name, f.type) for f in owners.outputs] == [("name", STRING), ("bananas", INTEGER)]
        assert owners.description == "People who own at least `minimum` bananas"

        cool = people_catalog.get("examples.procedures.people.list_cool_people").signature
        assert cool.description == "List the coolest people we know."

    def test_cool_people(self, people_catalog: ProcedureCatalog, caplog: pytest.LogCaptureFixture) -> None:
        context = InvocationContext.create()
        with caplog.at_level(logging.INFO, logger="proccore.procedures"):
            rows = list(people_catalog.call("examples.procedures.people.list_cool_people", context))

        assert rows == [("Bonnie",), ("Clyde",)]
        assert f"[{context.trace_id}] listing cool people" in caplog.text

    def test_banana_owners(self, people_catalog: ProcedureCatalog) -> None:
        rows = list(people_catalog.call("examples.procedures.people.list_banana_owners", args=[10]))
        assert rows == [("Jake", 18)]
