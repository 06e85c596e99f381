"""proccore - Procedure compilation and invocation runtime."""

from __future__ import annotations

# Core
from proccore.capabilities import CapabilityRegistry
from proccore.catalog import ProcedureCatalog
from proccore.compiler import CompilationResult, ProcedureCompiler
from proccore.context import InvocationContext
from proccore.handle import ProcedureHandle
from proccore.rows import LazyRowSequence
from proccore.signature import (
    FieldSignature,
    ProcedureName,
    ProcedureSignature,
    SignatureBuilder,
    procedure_signature,
)
from proccore.type_mapper import TypeMapper

# Types
from proccore.graph import Node, Path, Relationship
from proccore.types import ListType, ProcType, list_of

# Config
from proccore.config import Config

# Markers
from proccore.decorator import private_constructor, procedure, resource

# Capabilities
from proccore.log import Log, LoggerLog, register_logging

# Errors
from proccore.errors import (
    CompilationError,
    ConfigError,
    ConfigNotFoundError,
    DependencyResolutionError,
    ErrorCodes,
    InvalidArgumentsError,
    InvocationError,
    NoMoreRowsError,
    ProcedureAlreadyExistsError,
    ProcedureError,
    ProcedureNotFoundError,
    TypeMappingError,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "CapabilityRegistry",
    "CompilationResult",
    "InvocationContext",
    "LazyRowSequence",
    "ProcedureCatalog",
    "ProcedureCompiler",
    "ProcedureHandle",
    "TypeMapper",
    # Signatures
    "FieldSignature",
    "ProcedureName",
    "ProcedureSignature",
    "SignatureBuilder",
    "procedure_signature",
    # Types
    "ProcType",
    "ListType",
    "list_of",
    "Node",
    "Relationship",
    "Path",
    # Config
    "Config",
    # Markers
    "procedure",
    "resource",
    "private_constructor",
    # Capabilities
    "Log",
    "LoggerLog",
    "register_logging",
    # Errors
    "ErrorCodes",
    "ProcedureError",
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
]
