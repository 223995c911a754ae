import pytest

from rustdrill.drills.basics import (
    bigger,
    calculate_apple_price,
    current_favorite_color,
    fill_vec,
    fizz_if_foo,
    is_a_color_word,
    is_even,
    my_macro,
    sale_price,
    square,
    times_two,
)


def test_apple_price():
    assert calculate_apple_price(35) == 70
    assert calculate_apple_price(40) == 80
    assert calculate_apple_price(65) == 65


def test_times_two_positive():
    assert times_two(4) == 8


def test_times_two_negative():
    assert times_two(-4) == -8


def test_my_macro_world():
    assert my_macro("world!") == "Hello world!"


def test_my_macro_goodbye():
    assert my_macro("goodbye!") == "Hello goodbye!"


def test_ten_is_bigger_than_eight():
    assert bigger(10, 8) == 10


def test_fortytwo_is_bigger_than_thirtytwo():
    assert bigger(32, 42) == 42


def test_bigger_equal_values():
    assert bigger(7, 7) == 7


@pytest.mark.parametrize(
    "given, expected",
    [("fizz", "foo"), ("fuzz", "bar"), ("literally anything", "baz")],
)
def test_fizz_if_foo(given, expected):
    assert fizz_if_foo(given) == expected


def test_is_true_when_even():
    assert is_even(4) is True


def test_is_false_when_odd():
    assert is_even(5) is False


def test_sale_price_odd_and_even():
    assert sale_price(51) == 48
    assert sale_price(50) == 40


def test_square():
    assert square(3) == 9
    assert square(-3) == 9


def test_current_favorite_color():
    assert current_favorite_color() == "blue"


@pytest.mark.parametrize(
    "word, expected",
    [("green", True), ("blue", True), ("red", True), ("purple", False), ("", False)],
)
def test_is_a_color_word(word, expected):
    assert is_a_color_word(word) is expected


def test_fill_vec_from_nothing():
    assert fill_vec() == [22, 44, 66]


def test_fill_vec_keeps_input_untouched():
    original = [1, 2]
    filled = fill_vec(original)
    assert filled == [1, 2, 22, 44, 66]
    assert original == [1, 2]


def test_fill_vec_can_be_extended():
    filled = fill_vec([])
    filled.append(88)
    assert filled == [22, 44, 66, 88]