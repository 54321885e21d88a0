"""Tests for IN-list expansion and dialect rebind."""

from __future__ import annotations

import pytest

from webutil_query import (
    BindType,
    ErrorKind,
    QueryBuilderError,
    expand_in,
    in_query_rebind,
    rebind,
)


class TestExpandIn:
    def test_scalars_untouched(self) -> None:
        assert expand_in("a = ? and b = ?", ["x", 1]) == ("a = ? and b = ?", ["x", 1])

    def test_list_is_expanded_in_place(self) -> None:
        query, args = expand_in("a = ? and b in (?) and c = ?", [1, [2, 3, 4], 5])
        assert query == "a = ? and b in (?, ?, ?) and c = ?"
        assert args == [1, 2, 3, 4, 5]

    def test_tuple_is_expanded(self) -> None:
        assert expand_in("b in (?)", [("x",)]) == ("b in (?)", ["x"])

    def test_strings_are_not_lists(self) -> None:
        assert expand_in("a = ?", ["abc"]) == ("a = ?", ["abc"])

    def test_placeholders_in_literals_are_skipped(self) -> None:
        query, args = expand_in("a = '?' and b in (?)", [[1, 2]])
        assert query == "a = '?' and b in (?, ?)"
        assert args == [1, 2]

    def test_empty_list(self) -> None:
        with pytest.raises(QueryBuilderError) as info:
            expand_in("b in (?)", [[]])
        assert info.value.kind is ErrorKind.REBIND
        assert "empty list" in info.value.message

    def test_too_few_arguments(self) -> None:
        with pytest.raises(QueryBuilderError) as info:
            expand_in("a = ? and b = ?", [1])
        assert info.value.kind is ErrorKind.REBIND
        assert "exceeds" in info.value.message

    def test_too_many_arguments(self) -> None:
        with pytest.raises(QueryBuilderError) as info:
            expand_in("a = ?", [1, 2])
        assert info.value.kind is ErrorKind.REBIND
        assert "less than" in info.value.message


class TestRebind:
    @pytest.mark.parametrize(
        ("bind_type", "expected"),
        [
            (BindType.QUESTION, "a = ? and b = ?"),
            (BindType.UNKNOWN, "a = ? and b = ?"),
            (BindType.DOLLAR, "a = $1 and b = $2"),
            (BindType.NAMED, "a = :arg1 and b = :arg2"),
            (BindType.AT, "a = @p1 and b = @p2"),
        ],
    )
    def test_styles(self, bind_type: BindType, expected: str) -> None:
        assert rebind(bind_type, "a = ? and b = ?") == expected

    def test_literal_question_mark_survives(self) -> None:
        assert rebind(BindType.DOLLAR, "a = 'why?' and b = ?") == (
            "a = 'why?' and b = $1"
        )

    def test_numbering_exceeds_nine(self) -> None:
        query = " ".join(["?"] * 11)
        assert rebind(BindType.AT, query).endswith("@p10 @p11")


def test_in_query_rebind_expands_then_numbers() -> None:
    query, args = in_query_rebind(
        BindType.DOLLAR, "a = ? and b in (?) limit ? offset ?", "x", [7, 8], 10, 0
    )
    assert query == "a = $1 and b in ($2, $3) limit $4 offset $5"
    assert args == ["x", 7, 8, 10, 0]
