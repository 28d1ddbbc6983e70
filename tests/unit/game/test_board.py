"""
Tests for the static board definition.
"""

import pytest

from grandline.core.game.board import BOARD, Board
from grandline.core.game.cards import CHANCE_CARDS, COMMUNITY_CHEST_CARDS
from grandline.core.game.spaces import ChanceSpace, CommunityChestSpace, GoSpace, SpaceType


def test_board_has_forty_spaces_in_position_order():
    assert len(BOARD) == 40
    assert [s.position for s in BOARD.spaces] == list(range(40))


def test_ownable_space_counts():
    ownable = BOARD.ownable_spaces()
    assert len(ownable) == 28
    kinds = [s.space_type for s in ownable]
    assert kinds.count(SpaceType.PROPERTY) == 22
    assert kinds.count(SpaceType.RAILROAD) == 4
    assert kinds.count(SpaceType.UTILITY) == 2


def test_landmark_positions():
    assert BOARD.get_space(0).space_type == SpaceType.GO
    assert BOARD.get_space(10).space_type == SpaceType.JAIL
    assert BOARD.get_space(30).space_type == SpaceType.GO_TO_JAIL
    assert BOARD.get_space(4).space_type == SpaceType.TAX
    assert BOARD.get_space(38).space_type == SpaceType.TAX


def test_card_spaces_sit_where_the_board_puts_them():
    chance = [s.position for s in BOARD.spaces if s.space_type == SpaceType.CHANCE]
    chest = [s.position for s in BOARD.spaces if s.space_type == SpaceType.COMMUNITY_CHEST]
    assert chance == [7, 22, 36]
    assert chest == [2, 17, 33]


def test_card_spaces_need_an_explicit_position():
    with pytest.raises(TypeError):
        ChanceSpace("Log Pose")
    with pytest.raises(TypeError):
        CommunityChestSpace("Treasure Chest")


def test_first_property():
    space = BOARD.get_space(1)
    assert space.is_ownable
    assert space.price == 60
    assert space.color == "brown"
    assert len(space.rent) == 6


def test_non_property_spaces_have_no_price_or_color():
    chance = BOARD.get_space(7)
    assert chance.price == 0
    assert chance.color is None
    assert not chance.is_ownable


def test_get_space_wraps():
    assert BOARD.get_space(41) is BOARD.get_space(1)


def test_color_group():
    assert BOARD.get_color_group("darkblue") == [37, 39]


def test_board_rejects_wrong_size():
    with pytest.raises(ValueError):
        Board([GoSpace()])


def test_to_dict_includes_spaces_and_decks():
    data = BOARD.to_dict()
    assert len(data["spaces"]) == 40
    assert data["spaces"][1] == {
        "id": 1,
        "name": "Foosha Village",
        "type": "property",
        "price": 60,
        "rent": [2, 10, 30, 90, 160, 250],
        "color": "brown",
    }
    assert len(data["decks"]["chance"]) == len(CHANCE_CARDS)
    assert len(data["decks"]["community_chest"]) == len(COMMUNITY_CHEST_CARDS)
