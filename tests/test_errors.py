import io

import pytest

from rustdrill.drills.errors import (
    CreationError,
    ParseIntError,
    PositiveNonzeroInteger,
    generate_nametag_text,
    purchase,
    read_and_validate,
    total_cost,
)


def test_generates_nametag_text_for_a_nonempty_name():
    assert generate_nametag_text("Beyoncé") == "Hi! My name is Beyoncé"


def test_explains_why_generating_nametag_text_fails():
    with pytest.raises(ValueError) as info:
        generate_nametag_text("")
    assert str(info.value) == "`name` was empty; it must be nonempty."


def test_item_quantity_is_a_valid_number():
    assert total_cost("34") == 171


def test_item_quantity_is_an_invalid_number():
    with pytest.raises(ParseIntError) as info:
        total_cost("beep boop")
    assert str(info.value) == "invalid digit found in string"


def test_item_quantity_empty():
    with pytest.raises(ParseIntError, match="cannot parse integer from empty string"):
        total_cost("")


def test_item_quantity_too_large():
    with pytest.raises(ParseIntError, match="number too large to fit in target type"):
        total_cost("3000000000")


def test_purchase_leaves_remaining_tokens():
    assert purchase(100, "8") == 59


def test_purchase_too_expensive():
    with pytest.raises(ValueError, match="You can't afford that many!"):
        purchase(100, "20")


def test_purchase_bad_quantity():
    with pytest.raises(ParseIntError):
        purchase(100, "eight")


def test_read_success():
    assert read_and_validate(io.StringIO("42\n")) == PositiveNonzeroInteger(42)


def test_read_bytes_stream():
    assert read_and_validate(io.BytesIO(b"7\n")).value == 7


def test_read_not_num():
    with pytest.raises(ParseIntError):
        read_and_validate(io.StringIO("eleven billion\n"))


def test_read_non_positive():
    with pytest.raises(CreationError) as info:
        read_and_validate(io.StringIO("-40\n"))
    assert info.value.reason == CreationError.NEGATIVE


class _Broken:
    def readline(self):
        raise OSError("uh-oh!")


def test_read_ioerror():
    with pytest.raises(OSError) as info:
        read_and_validate(_Broken())
    assert str(info.value) == "uh-oh!"


def test_positive_nonzero_integer_creation():
    assert PositiveNonzeroInteger.new(10).value == 10


def test_creation_negative():
    with pytest.raises(CreationError) as info:
        PositiveNonzeroInteger.new(-10)
    assert info.value.reason == CreationError.NEGATIVE
    assert str(info.value) == "Number is negative"


def test_creation_zero():
    with pytest.raises(CreationError) as info:
        PositiveNonzeroInteger.new(0)
    assert info.value.reason == CreationError.ZERO
    assert str(info.value) == "Number is zero"