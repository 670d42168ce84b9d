import pytest

from rustdrill.solutions.quizzes import (
    Command,
    CommandKind,
    ReportCard,
    calculate_price_of_apples,
    transformer,
)


@pytest.mark.parametrize(
    ("quantity", "price"),
    [(35, 70), (40, 80), (41, 41), (65, 65)],
)
def test_calculate_price_of_apples(quantity, price):
    assert calculate_price_of_apples(quantity) == price


def test_transformer_it_works():
    output = transformer(
        [
            ("hello", Command(CommandKind.UPPERCASE)),
            (" all roads lead to rome! ", Command(CommandKind.TRIM)),
            ("foo", Command(CommandKind.APPEND, 1)),
            ("bar", Command(CommandKind.APPEND, 5)),
        ]
    )
    assert output == [
        "HELLO",
        "all roads lead to rome!",
        "foobar",
        "barbarbarbarbarbar",
    ]


def test_transformer_uppercase_is_ascii_only():
    assert transformer([("straße", Command(CommandKind.UPPERCASE))]) == ["STRAßE"]


def test_transformer_append_zero_times():
    assert transformer([("foo", Command(CommandKind.APPEND))]) == ["foo"]


def test_command_rejects_negative_times():
    with pytest.raises(ValueError):
        Command(CommandKind.APPEND, -1)


def test_generate_numeric_report_card():
    card = ReportCard(grade=2.1, student_name="Tom Wriggle", student_age=12)
    assert card.print() == "Tom Wriggle (12) - achieved a grade of 2.1"


def test_generate_alphabetic_report_card():
    card = ReportCard(grade="A+", student_name="Gary Plotter", student_age=11)
    assert card.print() == "Gary Plotter (11) - achieved a grade of A+"