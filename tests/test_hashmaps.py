import pytest

from rustdrill.solutions.hashmaps import (
    Fruit,
    Team,
    build_scores_table,
    fill_basket,
    fruit_basket,
)


def get_fruit_basket():
    return {Fruit.APPLE: 4, Fruit.MANGO: 2, Fruit.LYCHEE: 5}


RESULTS = (
    "England,France,4,2\n"
    "France,Italy,3,1\n"
    "Poland,Spain,2,0\n"
    "Germany,England,2,1\n"
)


def test_at_least_three_types_of_fruits():
    assert len(fruit_basket()) >= 3


def test_at_least_five_fruits():
    assert sum(fruit_basket().values()) >= 5


def test_given_fruits_are_not_modified():
    basket = get_fruit_basket()
    fill_basket(basket)
    assert basket[Fruit.APPLE] == 4
    assert basket[Fruit.MANGO] == 2
    assert basket[Fruit.LYCHEE] == 5


def test_at_least_five_types_of_fruits():
    basket = get_fruit_basket()
    fill_basket(basket)
    assert len(basket) >= 5


def test_greater_than_eleven_fruits():
    basket = get_fruit_basket()
    fill_basket(basket)
    assert sum(basket.values()) > 11


def test_all_fruit_types_in_basket():
    basket = get_fruit_basket()
    fill_basket(basket)
    assert all(amount != 0 for amount in basket.values())
    assert set(basket) == set(Fruit)


def test_build_scores():
    scores = build_scores_table(RESULTS)
    assert sorted(scores) == ["England", "France", "Germany", "Italy", "Poland", "Spain"]


def test_validate_team_score_1():
    scores = build_scores_table(RESULTS)
    assert scores["England"] == Team(goals_scored=5, goals_conceded=4)


def test_validate_team_score_2():
    scores = build_scores_table(RESULTS)
    assert scores["Spain"].goals_scored == 0
    assert scores["Spain"].goals_conceded == 2


def test_empty_results_give_empty_table():
    assert build_scores_table("") == {}


def test_crlf_lines_are_accepted():
    scores = build_scores_table("A,B,1,2\r\n")
    assert scores["A"] == Team(1, 2)
    assert scores["B"] == Team(2, 1)


@pytest.mark.parametrize("line", ["A,B,x,1", "A,B,1,256", "A,B,1", "A,B,,1"])
def test_bad_lines_raise(line):
    with pytest.raises(ValueError):
        build_scores_table(line)


def test_goal_overflow_raises():
    with pytest.raises(OverflowError):
        build_scores_table("A,B,200,0\nA,C,100,0\n")