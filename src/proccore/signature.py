"""Procedure signatures and their builder."""

from __future__ import annotations

from dataclasses import dataclass, field

from proccore.types import ProcType

__all__ = ["FieldSignature", "ProcedureName", "ProcedureSignature", "SignatureBuilder", "procedure_signature"]


@dataclass(frozen=True)
class FieldSignature:
    """A named, typed procedure input or output column."""

    name: str
    type: ProcType

    def __str__(self) -> str:
        return f"{self.name} :: {self.type}"


@dataclass(frozen=True)
class ProcedureName:
    """Globally unique procedure identity: namespace plus name."""

    namespace: tuple[str, ...]
    name: str

    @classmethod
    def parse(cls, qualified: str) -> ProcedureName:
        """Parse a dotted name such as ``"db.labels"``."""
        parts = qualified.split(".")
        return cls(namespace=tuple(parts[:-1]), name=parts[-1])

    def __str__(self) -> str:
        return ".".join((*self.namespace, self.name))


@dataclass(frozen=True)
class ProcedureSignature:
    """Immutable description of a procedure's identity, inputs and outputs."""

    name: ProcedureName
    inputs: tuple[FieldSignature, ...] = ()
    outputs: tuple[FieldSignature, ...] = ()
    description: str | None = field(default=None, compare=False)

    @property
    def namespace(self) -> tuple[str, ...]:
        return self.name.namespace

    @property
    def qualified_name(self) -> str:
        return str(self.name)

    def __str__(self) -> str:
        ins = ", ".join(str(f) for f in self.inputs)
        outs = ", ".join(str(f) for f in self.outputs)
        return f"{self.name}({ins}) :: ({outs})"


class SignatureBuilder:
    """Fluent builder for ProcedureSignature.

    Example::

        sig = (
            procedure_signature("db", "people", "list")
            .input("limit", INTEGER)
            .out("name", STRING)
            .build()
        )
    """

    def __init__(self, namespace: tuple[str, ...], name: str) -> None:
        self._name = ProcedureName(namespace=tuple(namespace), name=name)
        self._inputs: list[FieldSignature] = []
        self._outputs: list[FieldSignature] = []
        self._description: str | None = None

    def input(self, name: str, proc_type: ProcType) -> SignatureBuilder:
        self._inputs.append(FieldSignature(name, proc_type))
        return self

    def out(self, name: str, proc_type: ProcType) -> SignatureBuilder:
        self._outputs.append(FieldSignature(name, proc_type))
        return self

    def description(self, text: str | None) -> SignatureBuilder:
        self._description = text
        return self

    def build(self) -> ProcedureSignature:
        return ProcedureSignature(
            name=self._name,
            inputs=tuple(self._inputs),
            outputs=tuple(self._outputs),
            description=self._description,
        )


def procedure_signature(*namespace_and_name: str) -> SignatureBuilder:
    """Start a signature; the last argument is the name, the rest the namespace."""
    if not namespace_and_name:
        raise ValueError("A procedure signature needs at least a name")
    return SignatureBuilder(tuple(namespace_and_name[:-1]), namespace_and_name[-1])
