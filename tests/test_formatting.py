"""Tests for payload classification and tokens."""

import array
from decimal import Decimal
from enum import Enum
from fractions import Fraction

from graph_dump import dump
from graph_dump.formatting import (
    array_items,
    error_marker,
    format_backref,
    is_array,
    is_scalar,
    is_text,
    type_name,
)


class Mode(str, Enum):
    FAST = "fast"


class Impostor:
    """Claims to be a str through __class__."""

    @property
    def __class__(self):
        return str


def test_numbers_are_scalars():
    for value in (1, 1.5, 2j, Decimal("1.0"), Fraction(1, 3), True):
        assert is_scalar(value)


def test_enum_checked_before_text():
    assert is_scalar(Mode.FAST)
    assert dump(Mode.FAST) == str(Mode.FAST)


def test_classification_uses_runtime_type():
    impostor = Impostor()
    assert isinstance(impostor, str)
    assert not is_text(impostor)


def test_array_types():
    assert is_array(bytearray(b"a"))
    assert is_array(array.array("i", [1]))
    assert not is_array("abc")
    assert not is_array({})
    assert array_items(array.array("i", [3, 4])) == [3, 4]


def test_type_name():
    assert type_name([]) == "list"
    assert type_name(Mode.FAST) == f"{__name__}.Mode"
    assert type_name(array.array("i")) == "array.array"


def test_error_marker():
    assert error_marker(KeyError("k")) == "!KeyError:'k'"
    assert error_marker(ValueError("bad value")) == "!ValueError:bad value"


def test_backref_token():
    assert format_backref(7) == "(sysId#7)"
