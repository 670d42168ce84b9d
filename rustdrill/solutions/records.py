"""Reference solutions of the structs, enums, generics and box exercises."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, NamedTuple, TypeVar, Union

T = TypeVar("T")

_MINIMUM_WEIGHT = 10
_DOMESTIC_COUNTRY = "Canada"


@dataclass
class ColorClassicStruct:
    """A colour with named channels."""

    red: int
    green: int
    blue: int


class ColorTupleStruct(NamedTuple):
    """A colour whose channels are reached by position."""

    red: int
    green: int
    blue: int


class UnitLikeStruct:
    """A type with no fields."""

    def __repr__(self) -> str:
        return "UnitLikeStruct"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, UnitLikeStruct)

    def __hash__(self) -> int:
        return hash(UnitLikeStruct)


@dataclass
class Order:
    """A customer order."""

    name: str
    year: int
    made_by_phone: bool
    made_by_mobile: bool
    made_by_email: bool
    item_number: int
    count: int


def create_order_template() -> Order:
    """Return the order that new orders are based on."""
    return Order(
        name="Bob",
        year=2019,
        made_by_phone=False,
        made_by_mobile=False,
        made_by_email=True,
        item_number=123,
        count=0,
    )


@dataclass(frozen=True)
class Package:
    """A package to ship; it must weigh at least 10 grams."""

    sender_country: str
    recipient_country: str
    weight_in_grams: int

    def __post_init__(self) -> None:
        if self.weight_in_grams < _MINIMUM_WEIGHT:
            raise ValueError("Can not ship a package with weight below 10 grams.")

    def is_international(self) -> bool:
        """True unless the package is sent from Canada."""
        return self.sender_country != _DOMESTIC_COUNTRY

    def get_fees(self, cents_per_gram: int) -> int:
        """Return the shipping fee in cents."""
        return cents_per_gram * self.weight_in_grams


@dataclass(frozen=True)
class Point:
    """A position on the grid."""

    x: int
    y: int


@dataclass(frozen=True)
class ChangeColor:
    """Message: change the colour."""

    red: int
    green: int
    blue: int


@dataclass(frozen=True)
class Move:
    """Message: move to a point."""

    point: Point


@dataclass(frozen=True)
class Echo:
    """Message: store a text."""

    text: str


@dataclass(frozen=True)
class Quit:
    """Message: quit."""


Message = Union[ChangeColor, Move, Echo, Quit]


@dataclass
class State:
    """The state that messages act on."""

    color: tuple[int, int, int] = (0, 0, 0)
    position: Point = field(default_factory=lambda: Point(0, 0))
    quit: bool = False
    message: str = ""

    def process(self, message: Message) -> None:
        """Apply one message to the state."""
        match message:
            case ChangeColor(red, green, blue):
                self.color = (red, green, blue)
            case Echo(text):
                self.message = text
            case Move(point):
                self.position = point
            case Quit():
                self.quit = True
            case _:
                raise TypeError(f"unknown message: {message!r}")


@dataclass(frozen=True)
class Wrapper(Generic[T]):
    """Holds a value of any type."""

    value: T


@dataclass(frozen=True)
class Nil:
    """The end of a cons list."""


@dataclass(frozen=True)
class Cons:
    """A cons list cell: a value and the rest of the list."""

    value: int
    rest: Union[Cons, Nil]


def create_empty_list() -> Nil:
    """Return the empty cons list."""
    return Nil()


def create_non_empty_list() -> Cons:
    """Return a cons list holding the single value 1."""
    return Cons(1, create_empty_list())