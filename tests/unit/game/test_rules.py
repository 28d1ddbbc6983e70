"""
Tests for the pure rule functions: dice, movement, rent, tax and debits.
"""

import random
from itertools import product

import pytest

from grandline.core.game.board import BOARD
from grandline.core.game.config import GameConfig
from grandline.core.game.rules import calculate_rent, debit, move, roll_dice, tax_due


def test_dice_are_in_range():
    rng = random.Random(7)
    for _ in range(200):
        dice = roll_dice(rng)
        assert 1 <= dice.first <= 6
        assert 1 <= dice.second <= 6
        assert dice.total == dice.first + dice.second


def test_doubles_detection():
    rng = random.Random(0)
    rolls = [roll_dice(rng) for _ in range(100)]
    assert all(r.is_doubles == (r.first == r.second) for r in rolls)


def test_move_without_passing_go():
    movement = move(5, 7)
    assert movement.end == 12
    assert movement.passed_go is False
    assert movement.salary == 0


def test_passing_go_pays_salary():
    """Moving 35 -> 5 wraps around and collects GO salary."""
    movement = move(35, 10)
    assert movement.end == 5
    assert movement.passed_go is True
    assert movement.salary == 200


def test_landing_exactly_on_go_pays_salary():
    movement = move(36, 4)
    assert movement.end == 0
    assert movement.passed_go is True
    assert movement.salary == 200


def test_leaving_go_does_not_pay():
    movement = move(0, 8)
    assert movement.end == 8
    assert movement.passed_go is False


def test_custom_go_salary():
    movement = move(39, 2, GameConfig(go_salary=300))
    assert movement.salary == 300


@pytest.mark.parametrize("start", [0, 5, 28, 33, 38, 39])
@pytest.mark.parametrize("first,second", list(product(range(1, 7), repeat=2)))
def test_move_for_every_dice_pair(start, first, second):
    steps = first + second
    movement = move(start, steps)

    assert movement.end == (start + steps) % 40
    assert 0 <= movement.end < 40
    assert movement.passed_go is (start + steps >= 40)
    assert movement.salary == (200 if start + steps >= 40 else 0)


@pytest.mark.parametrize(
    "houses,has_hotel,expected",
    [(0, False, 2), (1, False, 10), (4, False, 160), (0, True, 250)],
)
def test_property_rent_follows_improvements(houses, has_hotel, expected):
    foosha_village = BOARD.get_space(1)
    assert calculate_rent(foosha_village, houses, has_hotel) == expected


def test_railroad_rent_is_base_rent():
    going_merry = BOARD.get_space(5)
    assert calculate_rent(going_merry) == 25


def test_utility_rent_is_flat():
    assert calculate_rent(BOARD.get_space(12)) == 50
    assert calculate_rent(BOARD.get_space(28), config=GameConfig(utility_rent=75)) == 75


def test_non_ownable_spaces_have_no_rent():
    assert calculate_rent(BOARD.get_space(0)) == 0
    assert calculate_rent(BOARD.get_space(4)) == 0


def test_tax_amounts():
    assert tax_due(BOARD.get_space(4)) == 200
    assert tax_due(BOARD.get_space(38)) == 100
    assert tax_due(BOARD.get_space(1)) == 0


def test_debit_with_enough_money():
    result = debit(500, 200)
    assert result.balance == 300
    assert result.paid == 200
    assert result.shortfall == 0


def test_debit_clamps_at_zero():
    result = debit(150, 200)
    assert result.balance == 0
    assert result.paid == 150
    assert result.shortfall == 50
