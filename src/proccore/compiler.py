"""Procedure compiler: turns declaration groups into invokable handles."""

from __future__ import annotations

import collections.abc
import dataclasses
import inspect
import logging
import sys
import typing
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, ClassVar, get_args, get_origin

from pydantic import BaseModel

from proccore.capabilities import CapabilityRegistry
from proccore.context import InvocationContext
from proccore.decorator import PRIVATE_CONSTRUCTOR_ATTR, PROCEDURE_ATTR, ProcedureSpec, Resource
from proccore.errors import CompilationError, DependencyResolutionError, TypeMappingError
from proccore.handle import ProcedureHandle
from proccore.rows import Row
from proccore.signature import FieldSignature, ProcedureSignature, SignatureBuilder
from proccore.type_mapper import TypeMapper

if TYPE_CHECKING:
    from proccore.config import Config

logger = logging.getLogger(__name__)

__all__ = ["ProcedureCompiler", "CompilationResult"]

_RECORD_STREAM_ORIGINS = (
    collections.abc.Iterator,
    collections.abc.Iterable,
    collections.abc.Generator,
    collections.abc.Sequence,
    list,
    tuple,
)


@dataclass
class CompilationResult:
    """Outcome of compiling one declaration group.

    ``handles`` are in declaration order; ``errors`` holds one entry per
    procedure that could not be compiled.
    """

    handles: list[ProcedureHandle] = field(default_factory=list)
    errors: list[TypeMappingError] = field(default_factory=list)


@dataclass(frozen=True)
class _Injection:
    field_name: str
    marker: Any


class ProcedureCompiler:
    """Compiles declaration groups into ProcedureHandle lists."""

    def __init__(
        self,
        type_mapper: TypeMapper | None = None,
        capabilities: CapabilityRegistry | None = None,
        config: Config | None = None,
        strict: bool | None = None,
    ) -> None:
        """Initialize the compiler.

        Args:
            type_mapper: Maps type hints to procedure types. A default mapper is created if None.
            capabilities: Registry used to resolve injected fields at invocation time.
            config: Optional configuration; ``compiler.strict`` sets the default for ``strict``.
            strict: Raise the first per-procedure error instead of logging and skipping it.
        """
        self._type_mapper = type_mapper if type_mapper is not None else TypeMapper()
        self._capabilities = capabilities if capabilities is not None else CapabilityRegistry()
        if strict is None:
            strict = bool(config.get("compiler.strict", False)) if config is not None else False
        self._strict = strict

    @property
    def type_mapper(self) -> TypeMapper:
        return self._type_mapper

    @property
    def capabilities(self) -> CapabilityRegistry:
        return self._capabilities

    def compile(self, group: type) -> list[ProcedureHandle]:
        """Compile every procedure in ``group``, in declaration order.

        Procedures whose types cannot be mapped are logged and left out, or
        raised when the compiler is strict.

        Raises:
            CompilationError: If the group has procedures but no usable public
                no-argument constructor.
            TypeMappingError: In strict mode, for the first procedure that fails.
        """
        result = self.compile_group(group)
        for error in result.errors:
            if self._strict:
                raise error
            logger.warning("Procedure skipped in %s: %s", group.__name__, error)
        return result.handles

    def compile_group(self, group: type) -> CompilationResult:
        """Compile ``group`` and report per-procedure failures alongside the handles.

        Raises:
            CompilationError: If the group has procedures but no usable public
                no-argument constructor. No handles are produced in that case.
        """
        if not inspect.isclass(group):
            raise CompilationError(
                getattr(group, "__name__", repr(group)),
                f"Declaration group must be a class, got {type(group).__name__}",
            )

        members = _procedure_members(group)
        if not members:
            return CompilationResult()

        if not _has_usable_constructor(group):
            raise CompilationError.no_usable_constructor(group.__name__)

        injections = _injectable_fields(group)
        namespace = tuple(group.__module__.split("."))
        result = CompilationResult()

        for member_name, func, spec in members:
            try:
                signature, to_row = self._build_signature(namespace, func, spec)
            except TypeMappingError as e:
                result.errors.append(e)
                continue
            invoker = self._make_invoker(group, member_name, injections)
            result.handles.append(ProcedureHandle(signature, invoker, to_row))

        logger.debug(
            "Compiled %d procedure(s) from %s (%d failed)",
            len(result.handles),
            group.__qualname__,
            len(result.errors),
        )
        return result

    # ----- Signatures -----

    def _build_signature(
        self, namespace: tuple[str, ...], func: Callable, spec: ProcedureSpec
    ) -> tuple[ProcedureSignature, Callable[[Any], Row]]:
        name = spec.member_name
        try:
            hints = typing.get_type_hints(func)
        except NameError as exc:
            missing = str(exc).split("'")[1] if "'" in str(exc) else "<forward_ref>"
            raise TypeMappingError(
                f"Procedure `{name}` refers to `{missing}`, which cannot be resolved.",
                procedure=name,
                field=missing,
            ) from exc
        except (AttributeError, TypeError) as exc:
            raise TypeMappingError(
                f"Procedure `{name}` has annotations that cannot be evaluated: {exc}",
                procedure=name,
            ) from exc

        builder = SignatureBuilder(namespace, name).description(spec.description)

        for param in list(inspect.signature(func).parameters.values())[1:]:
            if param.kind not in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
                raise TypeMappingError(
                    f"Procedure `{name}` parameter `{param.name}` must be positional.",
                    procedure=name,
                    field=param.name,
                )
            if param.name not in hints:
                raise TypeMappingError(
                    f"Procedure `{name}` parameter `{param.name}` has no type annotation.",
                    procedure=name,
                    field=param.name,
                )
            builder.input(param.name, self._map(hints[param.name], name, param.name))

        if "return" not in hints:
            raise TypeMappingError(
                f"Procedure `{name}` has no return type annotation. "
                "Declare it as `-> Iterator[OutputRecord]`.",
                procedure=name,
            )
        record_type = _record_type(hints["return"], name)

        for field_name, hint in _record_fields(record_type, name):
            builder.out(field_name, self._map(hint, name, field_name))

        signature = builder.build()
        return signature, _make_row_reader(record_type, signature.outputs)

    def _map(self, hint: Any, procedure: str, field_name: str) -> Any:
        try:
            return self._type_mapper.map(hint)
        except TypeMappingError as e:
            raise TypeMappingError(
                f"Procedure `{procedure}` field `{field_name}`: {e.message}",
                procedure=procedure,
                field=field_name,
                host_type=e.details.get("host_type"),
                cause=e,
            ) from e

    # ----- Invocation -----

    def _make_invoker(
        self, group: type, member_name: str, injections: list[_Injection]
    ) -> Callable[[InvocationContext, tuple[Any, ...]], Any]:
        capabilities = self._capabilities

        def invoke(context: InvocationContext, args: tuple[Any, ...]) -> Any:
            instance = group()
            for injection in injections:
                if injection.marker is None:
                    raise DependencyResolutionError(
                        f"{group.__name__}.{injection.field_name}",
                        "the field declares no capability type",
                    )
                setattr(instance, injection.field_name, capabilities.resolve(injection.marker, context))
            return getattr(instance, member_name)(*args)

        return invoke


# ----- Group inspection -----


def _procedure_members(group: type) -> list[tuple[str, Callable, ProcedureSpec]]:
    """Collect @procedure members, base classes first, overrides keeping their slot."""
    found: dict[str, tuple[str, Callable, ProcedureSpec]] = {}
    for klass in reversed(group.__mro__):
        for attr_name, attr in vars(klass).items():
            spec = getattr(attr, PROCEDURE_ATTR, None) if inspect.isfunction(attr) else None
            if isinstance(spec, ProcedureSpec):
                found[attr_name] = (attr_name, attr, spec)
            elif attr_name in found:
                del found[attr_name]
    return list(found.values())


def _has_usable_constructor(group: type) -> bool:
    if inspect.isabstract(group):
        return False
    if getattr(group.__init__, PRIVATE_CONSTRUCTOR_ATTR, False):
        return False
    try:
        signature = inspect.signature(group)
    except (TypeError, ValueError):
        return False
    try:
        signature.bind()
    except TypeError:
        return False
    return True


def _injectable_fields(group: type) -> list[_Injection]:
    found: dict[str, _Injection] = {}
    for klass in reversed(group.__mro__):
        for attr_name, attr in vars(klass).items():
            if isinstance(attr, Resource):
                marker = attr.marker if attr.marker is not None else _field_hint(klass, attr_name)
                found[attr_name] = _Injection(attr_name, marker)
            elif attr_name in found:
                del found[attr_name]
    return list(found.values())


def _field_hint(klass: type, name: str) -> Any:
    """Evaluate one class-level annotation; None if it is missing or unresolvable."""
    try:
        hint = inspect.get_annotations(klass).get(name)
        if isinstance(hint, str):
            module = sys.modules.get(klass.__module__)
            hint = eval(hint, vars(module) if module is not None else {}, dict(vars(klass)))
    except Exception as e:
        logger.warning("Cannot resolve the annotation of %s.%s: %s", klass.__qualname__, name, e)
        return None
    return hint


# ----- Output records -----


def _record_type(return_hint: Any, procedure: str) -> type:
    origin = get_origin(return_hint)
    args = get_args(return_hint)
    if origin in _RECORD_STREAM_ORIGINS and args and isinstance(args[0], type) and get_origin(args[0]) is None:
        return args[0]
    raise TypeMappingError(
        f"Procedure `{procedure}` must return an iterable of output records, "
        f"e.g. `-> Iterator[OutputRecord]`, not `{return_hint}`.",
        procedure=procedure,
    )


def _record_fields(record_type: type, procedure: str) -> list[tuple[str, Any]]:
    """Public fields of an output record type, in declaration order."""
    if issubclass(record_type, BaseModel):
        return [
            (name, info.annotation)
            for name, info in record_type.model_fields.items()
            if not name.startswith("_")
        ]

    try:
        hints = typing.get_type_hints(record_type)
    except (NameError, AttributeError, TypeError) as exc:
        raise TypeMappingError(
            f"Procedure `{procedure}` output record `{record_type.__name__}` has unresolvable annotations: {exc}",
            procedure=procedure,
        ) from exc

    if dataclasses.is_dataclass(record_type):
        names = [f.name for f in dataclasses.fields(record_type)]
    elif issubclass(record_type, tuple) and hasattr(record_type, "_fields"):
        names = list(record_type._fields)
    elif hints:
        names = [name for name, hint in hints.items() if get_origin(hint) is not ClassVar and hint is not ClassVar]
    else:
        raise TypeMappingError(
            f"Procedure `{procedure}` output record `{record_type.__name__}` declares no fields. "
            "Use a dataclass, NamedTuple, pydantic model or annotated class.",
            procedure=procedure,
        )

    return [(name, hints.get(name, Any)) for name in names if not name.startswith("_")]


def _make_row_reader(record_type: type, outputs: tuple[FieldSignature, ...]) -> Callable[[Any], Row]:
    def to_row(record: Any) -> Row:
        if not isinstance(record, record_type):
            raise TypeError(f"expected a `{record_type.__name__}` record, got `{type(record).__name__}`")
        row = []
        for output in outputs:
            value = getattr(record, output.name)
            if not output.type.accepts(value):
                raise TypeError(
                    f"field `{output.name}` is declared {output.type} but the value is `{type(value).__name__}`"
                )
            row.append(value)
        return tuple(row)

    return to_row
