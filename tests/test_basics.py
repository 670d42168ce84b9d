import pytest

from rustdrill.solutions.basics import (
    animal_habitat,
    bigger,
    compose_me,
    foo_if_fizz,
    is_a_color_word,
    is_even,
    replace_me,
    sale_price,
    square,
    trim_me,
)


def test_ten_is_bigger_than_eight():
    assert bigger(10, 8) == 10


def test_fortytwo_is_bigger_than_thirtytwo():
    assert bigger(32, 42) == 42


def test_equal_numbers():
    assert bigger(42, 42) == 42


@pytest.mark.parametrize(
    ("word", "expected"),
    [("fizz", "foo"), ("fuzz", "bar"), ("literally anything", "baz")],
)
def test_foo_if_fizz(word, expected):
    assert foo_if_fizz(word) == expected


@pytest.mark.parametrize(
    ("animal", "habitat"),
    [("gopher", "Burrow"), ("snake", "Desert"), ("crab", "Beach"), ("dinosaur", "Unknown")],
)
def test_animal_habitat(animal, habitat):
    assert animal_habitat(animal) == habitat


def test_sale_price_odd_and_even():
    assert sale_price(51) == 48
    assert sale_price(50) == 40


def test_is_even():
    assert is_even(8)
    assert not is_even(7)
    assert is_even(-4)


def test_square():
    assert square(3) == 9
    assert square(-5) == 25


def test_is_a_color_word():
    assert is_a_color_word("green")
    assert is_a_color_word("red")
    assert not is_a_color_word("purple")


def test_trim_a_string():
    assert trim_me("Hello!     ") == "Hello!"
    assert trim_me("  What's up!") == "What's up!"
    assert trim_me("   Hola!  ") == "Hola!"


def test_compose_a_string():
    assert compose_me("Hello") == "Hello world!"
    assert compose_me("Goodbye") == "Goodbye world!"


def test_replace_a_string():
    assert replace_me("I think cars are cool") == "I think balloons are cool"
    assert replace_me("I love to look at cars") == "I love to look at balloons"