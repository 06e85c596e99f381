"""Shared test fixtures for the proccore test suite."""

from __future__ import annotations

import pytest

from proccore.capabilities import CapabilityRegistry
from proccore.catalog import ProcedureCatalog
from proccore.compiler import ProcedureCompiler
from proccore.context import InvocationContext
from proccore.type_mapper import TypeMapper


@pytest.fixture
def type_mapper() -> TypeMapper:
    """A TypeMapper with only the default mappings."""
    return TypeMapper()


@pytest.fixture
def capabilities() -> CapabilityRegistry:
    """An empty capability registry."""
    return CapabilityRegistry()


@pytest.fixture
def compiler(type_mapper: TypeMapper, capabilities: CapabilityRegistry) -> ProcedureCompiler:
    """A lenient compiler wired to the shared mapper and capability registry."""
    return ProcedureCompiler(type_mapper=type_mapper, capabilities=capabilities)


@pytest.fixture
def strict_compiler(type_mapper: TypeMapper, capabilities: CapabilityRegistry) -> ProcedureCompiler:
    """A compiler that raises per-procedure errors instead of skipping them."""
    return ProcedureCompiler(type_mapper=type_mapper, capabilities=capabilities, strict=True)


@pytest.fixture
def catalog(compiler: ProcedureCompiler) -> ProcedureCatalog:
    """An empty catalog backed by the shared compiler."""
    return ProcedureCatalog(compiler=compiler)


@pytest.fixture
def context() -> InvocationContext:
    """A fresh invocation context."""
    return InvocationContext.create()
