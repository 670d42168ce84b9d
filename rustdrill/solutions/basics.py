"""Reference solutions of the functions, if and strings exercises."""

from __future__ import annotations


def bigger(a: int, b: int) -> int:
    """Return the bigger of two numbers."""
    return a if a > b else b


def foo_if_fizz(fizzish: str) -> str:
    """Map "fizz" to "foo", "fuzz" to "bar" and anything else to "baz"."""
    if fizzish == "fizz":
        return "foo"
    if fizzish == "fuzz":
        return "bar"
    return "baz"


_HABITATS = {"crab": "Beach", "gopher": "Burrow", "snake": "Desert"}


def animal_habitat(animal: str) -> str:
    """Return where the animal lives, or "Unknown"."""
    return _HABITATS.get(animal, "Unknown")


def is_even(num: int) -> bool:
    """True when the number is even."""
    return num % 2 == 0


def sale_price(price: int) -> int:
    """Take 10 off an even price and 3 off an odd one."""
    return price - 10 if is_even(price) else price - 3


def square(num: int) -> int:
    """Return the number squared."""
    return num * num


def is_a_color_word(attempt: str) -> bool:
    """True for "green", "blue" or "red"."""
    return attempt in ("green", "blue", "red")


def trim_me(text: str) -> str:
    """Remove whitespace from both ends."""
    return text.strip()


def compose_me(text: str) -> str:
    """Append " world!"."""
    return f"{text} world!"


def replace_me(text: str) -> str:
    """Replace every "cars" with "balloons"."""
    return text.replace("cars", "balloons")