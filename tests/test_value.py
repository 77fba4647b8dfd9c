import pytest

from loxvm.value import (
    Interner,
    LoxString,
    format_value,
    hash_string,
    is_falsey,
    values_equal,
)


def test_hash_of_empty_string_is_offset_basis():
    assert hash_string("") == 2166136261


@pytest.mark.parametrize("text", ["a", "hello", "ünïcode", "x" * 100])
def test_hash_is_stable_and_32_bit(text):
    assert hash_string(text) == hash_string(text)
    assert 0 <= hash_string(text) <= 0xFFFFFFFF


def test_interner_returns_same_instance():
    interner = Interner()
    first = interner.intern("abc")
    second = interner.intern("abc")
    assert first is second
    assert len(interner) == 1


def test_interner_distinct_strings():
    interner = Interner()
    a = interner.intern("a")
    b = interner.intern("b")
    assert a is not b
    assert a.chars == "a"
    assert b.hash == hash_string("b")
    assert len(interner) == 2


def test_interner_many_strings_round_trip():
    interner = Interner()
    made = {text: interner.intern(text) for text in (f"s{i}" for i in range(100))}
    for text, string in made.items():
        assert interner.intern(text) is string
        assert str(string) == text
    assert len(interner) == len(made)


def test_values_equal_numbers_bools_nil():
    assert values_equal(1.0, 1.0) is True
    assert values_equal(1.0, 2.0) is False
    assert values_equal(None, None) is True
    assert values_equal(True, True) is True
    assert values_equal(True, False) is False


def test_values_equal_requires_same_type():
    assert values_equal(True, 1.0) is False
    assert values_equal(False, 0.0) is False
    assert values_equal(None, False) is False


def test_values_equal_strings_by_identity():
    interner = Interner()
    assert values_equal(interner.intern("x"), interner.intern("x")) is True
    assert values_equal(LoxString("x", 1), LoxString("x", 1)) is False


def test_is_falsey():
    assert is_falsey(None) is True
    assert is_falsey(False) is True
    assert is_falsey(True) is False
    assert is_falsey(0.0) is False
    assert is_falsey(LoxString("", hash_string(""))) is False


def test_format_value():
    assert format_value(True) == "true"
    assert format_value(False) == "false"
    assert format_value(None) == "nil"
    assert format_value(2.5) == "2.5"
    assert format_value(3.0) == "3"
    assert format_value(Interner().intern("hi there")) == "hi there"


def test_format_rejects_foreign_values():
    with pytest.raises(TypeError):
        format_value([1])