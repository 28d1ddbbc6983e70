"""
Tests for the turn-order pointer.
"""

import pytest

from grandline.core.game.state import Seat, TurnOrder


def _order(*seats):
    return TurnOrder(seats)


def test_next_after_advances_by_order():
    order = _order(Seat(10, 0), Seat(11, 1, is_ai=True), Seat(12, 2, is_ai=True))
    index, seat, wrapped = order.next_after(10)
    assert (index, seat.player_id, wrapped) == (1, 11, False)


def test_next_after_wraps_to_lowest_seat():
    order = _order(Seat(10, 0), Seat(11, 1, is_ai=True))
    index, seat, wrapped = order.next_after(11)
    assert (index, seat.player_id, wrapped) == (0, 10, True)


def test_bankrupt_seats_are_skipped():
    order = _order(Seat(10, 0), Seat(11, 1, is_bankrupt=True), Seat(12, 2))
    index, seat, wrapped = order.next_after(10)
    assert seat.player_id == 12
    assert index == 1
    assert wrapped is False


def test_next_after_a_player_who_just_went_bankrupt():
    order = _order(Seat(10, 0), Seat(11, 1, is_bankrupt=True), Seat(12, 2))
    index, seat, wrapped = order.next_after(11)
    assert (index, seat.player_id, wrapped) == (1, 12, False)


def test_seats_are_sorted_by_order():
    order = _order(Seat(12, 2), Seat(10, 0), Seat(11, 1))
    assert [s.player_id for s in order.seats] == [10, 11, 12]
    assert order.index_of(12) == 2


def test_index_of_bankrupt_player_is_none():
    order = _order(Seat(10, 0), Seat(11, 1, is_bankrupt=True))
    assert order.index_of(11) is None


def test_no_active_seats():
    order = _order(Seat(10, 0, is_bankrupt=True))
    with pytest.raises(ValueError):
        order.next_after(10)


def test_last_seat_going_bankrupt_wraps_to_first_seat():
    order = _order(Seat(10, 0), Seat(11, 1, is_ai=True), Seat(12, 2, is_ai=True, is_bankrupt=True))
    index, seat, wrapped = order.next_after(12)
    assert (index, seat.player_id, wrapped) == (0, 10, True)
