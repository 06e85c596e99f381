"""Tests for procedure type tags and graph values."""

from __future__ import annotations

from decimal import Decimal

import pytest

from proccore.graph import Node, Path, Relationship
from proccore.types import (
    ANY,
    BOOLEAN,
    FLOAT,
    INTEGER,
    MAP,
    NODE,
    NUMBER,
    PATH,
    RELATIONSHIP,
    STRING,
    ListType,
    ProcType,
    list_of,
)


class TestAccepts:
    """Runtime conformance checks."""

    @pytest.mark.parametrize(
        "proc_type",
        [ANY, STRING, INTEGER, FLOAT, NUMBER, BOOLEAN, MAP, NODE, RELATIONSHIP, PATH, list_of(STRING)],
    )
    def test_every_type_is_nullable(self, proc_type: ProcType) -> None:
        assert proc_type.accepts(None) is True

    def test_integer_rejects_bool_and_float(self) -> None:
        assert INTEGER.accepts(3) is True
        assert INTEGER.accepts(True) is False
        assert INTEGER.accepts(3.0) is False

    def test_float_is_not_widened_from_int(self) -> None:
        assert FLOAT.accepts(1.5) is True
        assert FLOAT.accepts(1) is False

    def test_number_accepts_any_numeric_but_bool(self) -> None:
        assert NUMBER.accepts(1) is True
        assert NUMBER.accepts(1.5) is True
        assert NUMBER.accepts(Decimal("2.5")) is True
        assert NUMBER.accepts(False) is False

    def test_string_and_map(self) -> None:
        assert STRING.accepts("x") is True
        assert STRING.accepts(b"x") is False
        assert MAP.accepts({"a": 1}) is True
        assert MAP.accepts([("a", 1)]) is False

    def test_graph_types(self) -> None:
        node = Node(1)
        assert NODE.accepts(node) is True
        assert RELATIONSHIP.accepts(node) is False
        assert PATH.accepts(Path((node,))) is True

    def test_any_accepts_everything(self) -> None:
        assert ANY.accepts(object()) is True

    def test_host_registered_tag_has_no_runtime_check(self) -> None:
        assert ProcType("POINT").accepts(object()) is True


class TestListTypes:
    """LIST OF <T>."""

    def test_name_nests(self) -> None:
        assert str(list_of(STRING)) == "LIST OF STRING"
        assert str(list_of(list_of(INTEGER))) == "LIST OF LIST OF INTEGER"

    def test_structural_equality(self) -> None:
        assert list_of(STRING) == list_of(STRING)
        assert list_of(STRING) != list_of(INTEGER)
        assert isinstance(list_of(ANY), ListType)

    def test_elements_are_checked(self) -> None:
        ints = list_of(INTEGER)
        assert ints.accepts([1, 2, None]) is True
        assert ints.accepts((1, 2)) is True
        assert ints.accepts([1, "2"]) is False
        assert ints.accepts("12") is False


class TestGraphValues:
    """Node, Relationship and Path."""

    def test_path_shape(self) -> None:
        a, b = Node(1, ("Person",)), Node(2, ("Person",))
        knows = Relationship(10, "KNOWS", 1, 2)
        path = Path((a, b), (knows,))

        assert path.start is a
        assert path.end is b
        assert len(path) == 1

    def test_single_node_path(self) -> None:
        path = Path((Node(1),))
        assert len(path) == 0
        assert path.start == path.end

    def test_empty_path_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            Path(())

    def test_mismatched_path_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            Path((Node(1), Node(2)), ())

    def test_identity_ignores_properties(self) -> None:
        assert Node(1, ("A",), {"x": 1}) == Node(1, ("A",), {"x": 2})
