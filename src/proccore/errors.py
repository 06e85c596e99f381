"""Error hierarchy for the proccore runtime."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

__all__ = [
    "ProcedureError",
    "ConfigNotFoundError",
    "ConfigError",
    "CompilationError",
    "TypeMappingError",
    "DependencyResolutionError",
    "InvocationError",
    "InvalidArgumentsError",
    "NoMoreRowsError",
    "ProcedureNotFoundError",
    "ProcedureAlreadyExistsError",
    "ErrorCodes",
]


class ProcedureError(Exception):
    """Base error for all proccore errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigNotFoundError(ProcedureError):
    """Raised when a configuration file cannot be found."""

    def __init__(self, config_path: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_NOT_FOUND",
            message=f"Configuration file not found: {config_path}",
            details={"config_path": config_path},
            **kwargs,
        )


class ConfigError(ProcedureError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="CONFIG_INVALID", message=message, **kwargs)


class CompilationError(ProcedureError):
    """Raised when a declaration group cannot be compiled as a whole."""

    def __init__(self, group_name: str, message: str, **kwargs: Any) -> None:
        super().__init__(
            code="PROCEDURE_COMPILATION_FAILED",
            message=message,
            details={"group": group_name},
            **kwargs,
        )

    @classmethod
    def no_usable_constructor(cls, group_name: str) -> CompilationError:
        return cls(
            group_name,
            f"Unable to find a usable public no-argument constructor in the class `{group_name}`. "
            "Please add a valid, public constructor, recompile the class and try again.",
        )

    @property
    def group_name(self) -> str:
        """Simple name of the declaration group that failed to compile."""
        return self.details["group"]


class TypeMappingError(ProcedureError):
    """Raised when a procedure parameter or output field has no procedure type.

    Fails compilation of the offending procedure only.
    """

    def __init__(
        self,
        message: str,
        *,
        procedure: str | None = None,
        field: str | None = None,
        host_type: Any = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            code="TYPE_MAPPING_FAILED",
            message=message,
            details={"procedure": procedure, "field": field, "host_type": host_type},
            **kwargs,
        )

    @property
    def procedure(self) -> str | None:
        return self.details["procedure"]

    @property
    def field(self) -> str | None:
        return self.details["field"]


class DependencyResolutionError(ProcedureError):
    """Raised when an injectable field's capability cannot be resolved."""

    def __init__(self, marker: Any, reason: str | None = None, **kwargs: Any) -> None:
        if isinstance(marker, str):
            marker_name = marker
        else:
            marker_name = getattr(marker, "__qualname__", None) or repr(marker)
        message = f"Unable to resolve capability `{marker_name}`"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            code="DEPENDENCY_UNRESOLVED",
            message=message,
            details={"marker": marker_name},
            **kwargs,
        )


class InvocationError(ProcedureError):
    """Raised when a procedure body fails while producing its rows."""

    def __init__(self, procedure: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="PROCEDURE_INVOCATION_FAILED",
            message=f"Failed to invoke procedure `{procedure}`: {reason}",
            details={"procedure": procedure},
            **kwargs,
        )

    @property
    def procedure(self) -> str:
        return self.details["procedure"]


class InvalidArgumentsError(ProcedureError):
    """Raised when call arguments do not match a procedure's declared inputs."""

    def __init__(self, procedure: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="PROCEDURE_INVALID_ARGUMENTS",
            message=f"Invalid arguments for procedure `{procedure}`: {reason}",
            details={"procedure": procedure},
            **kwargs,
        )


class NoMoreRowsError(ProcedureError):
    """Raised when next() is called on an exhausted row sequence."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(code="NO_MORE_ROWS", message="Row sequence is exhausted", **kwargs)


class ProcedureNotFoundError(ProcedureError):
    """Raised when a procedure name is not registered."""

    def __init__(self, name: str, **kwargs: Any) -> None:
        super().__init__(
            code="PROCEDURE_NOT_FOUND",
            message=f"There is no procedure with the name `{name}` registered",
            details={"name": name},
            **kwargs,
        )


class ProcedureAlreadyExistsError(ProcedureError):
    """Raised when a procedure identity is registered twice."""

    def __init__(self, name: str, **kwargs: Any) -> None:
        super().__init__(
            code="PROCEDURE_ALREADY_EXISTS",
            message=f"Unable to register procedure, because the name `{name}` is already in use.",
            details={"name": name},
            **kwargs,
        )


class ErrorCodes:
    """All proccore error codes as constants.

    Example:
        if error.code == ErrorCodes.PROCEDURE_NOT_FOUND:
            handle_not_found()
    """

    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_INVALID = "CONFIG_INVALID"
    PROCEDURE_COMPILATION_FAILED = "PROCEDURE_COMPILATION_FAILED"
    TYPE_MAPPING_FAILED = "TYPE_MAPPING_FAILED"
    DEPENDENCY_UNRESOLVED = "DEPENDENCY_UNRESOLVED"
    PROCEDURE_INVOCATION_FAILED = "PROCEDURE_INVOCATION_FAILED"
    PROCEDURE_INVALID_ARGUMENTS = "PROCEDURE_INVALID_ARGUMENTS"
    NO_MORE_ROWS = "NO_MORE_ROWS"
    PROCEDURE_NOT_FOUND = "PROCEDURE_NOT_FOUND"
    PROCEDURE_ALREADY_EXISTS = "PROCEDURE_ALREADY_EXISTS"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ErrorCodes is immutable")
