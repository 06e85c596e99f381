"""Tests for the proccore public API surface.

Verifies that all expected names are importable from the top-level
``proccore`` package and that ``__all__`` is comprehensive.
"""

import proccore


class TestPublicAPIImports:
    """Every public component must be importable from ``import proccore``."""

    def test_core_importable(self):
        from proccore import (
            CapabilityRegistry,
            InvocationContext,
            LazyRowSequence,
            ProcedureCatalog,
            ProcedureCompiler,
            ProcedureHandle,
            TypeMapper,
        )

        assert all([CapabilityRegistry, InvocationContext, LazyRowSequence, ProcedureCatalog])
        assert all([ProcedureCompiler, ProcedureHandle, TypeMapper])

    def test_markers_importable(self):
        from proccore import private_constructor, procedure, resource

        assert callable(procedure)
        assert callable(resource)
        assert callable(private_constructor)

    def test_errors_share_a_base(self):
        for name in (
            "CompilationError",
            "TypeMappingError",
            "DependencyResolutionError",
            "InvocationError",
            "InvalidArgumentsError",
            "NoMoreRowsError",
            "ProcedureNotFoundError",
            "ProcedureAlreadyExistsError",
            "ConfigError",
            "ConfigNotFoundError",
        ):
            assert issubclass(getattr(proccore, name), proccore.ProcedureError)


class TestAllList:
    """``__all__`` lists exactly the exported names."""

    def test_every_name_resolves(self):
        for name in proccore.__all__:
            assert hasattr(proccore, name), name

    def test_no_duplicates(self):
        assert len(proccore.__all__) == len(set(proccore.__all__))

    def test_version(self):
        assert proccore.__version__ == "0.1.0"
