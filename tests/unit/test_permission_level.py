"""Unit tests for the permission level lattice."""

import pytest

from mylibrary.domain.exceptions import InvalidPermissionLevel, ValidationError
from mylibrary.domain.value_objects import PermissionLevel

ORDERED = [
    PermissionLevel.VIEW,
    PermissionLevel.ADD_BOOKS,
    PermissionLevel.EDIT,
    PermissionLevel.ADMIN,
]


def test_ranks_follow_hierarchy() -> None:
    assert [level.rank for level in ORDERED] == [0, 1, 2, 3]


@pytest.mark.parametrize("held", ORDERED)
@pytest.mark.parametrize("required", ORDERED)
def test_satisfies_matches_rank(held: PermissionLevel, required: PermissionLevel) -> None:
    assert held.satisfies(required) is (held.rank >= required.rank)


def test_comparisons_use_rank_not_string_order() -> None:
    # "admin" < "view" as strings; as levels ADMIN is the highest.
    assert PermissionLevel.ADMIN > PermissionLevel.VIEW
    assert PermissionLevel.ADD_BOOKS < PermissionLevel.EDIT
    assert max(ORDERED) is PermissionLevel.ADMIN
    assert sorted(reversed(ORDERED)) == ORDERED


def test_string_round_trip() -> None:
    for level in ORDERED:
        assert PermissionLevel.parse(str(level)) is level


def test_persisted_vocabulary() -> None:
    assert [level.value for level in ORDERED] == ["view", "add_books", "edit", "admin"]


def test_parse_tolerates_case_and_whitespace() -> None:
    assert PermissionLevel.parse("  ADMIN ") is PermissionLevel.ADMIN
    assert PermissionLevel.parse("Add_Books") is PermissionLevel.ADD_BOOKS


@pytest.mark.parametrize("value", ["", "owner", "read", "add-books", "viewer", "ADMINS"])
def test_parse_unknown_string_raises(value: str) -> None:
    with pytest.raises(InvalidPermissionLevel):
        PermissionLevel.parse(value)


def test_parse_non_string_raises() -> None:
    with pytest.raises(InvalidPermissionLevel):
        PermissionLevel.parse(None)  # type: ignore[arg-type]


def test_invalid_permission_level_is_validation_error() -> None:
    assert issubclass(InvalidPermissionLevel, ValidationError)
