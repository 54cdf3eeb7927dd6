import pytest

from app.services.bank.banking import bank_player, can_bank, update_streak
from app.services.bank.errors import AlreadyBankedError, InvalidAmountError
from conftest import make_player


def test_bank_moves_pot_into_score():
    player = make_player(total_score=40, banks_count=2, biggest_bank=30)
    banked = bank_player(player, 25)
    assert banked.total_score == 65
    assert banked.banked_this_round
    assert banked.banks_count == 3
    assert banked.biggest_bank == 30
    # input record untouched
    assert player.total_score == 40
    assert not player.banked_this_round


def test_bank_tracks_biggest_bank():
    assert bank_player(make_player(biggest_bank=10), 90).biggest_bank == 90


def test_bank_twice_in_a_round_fails():
    banked = bank_player(make_player(), 10)
    with pytest.raises(AlreadyBankedError):
        bank_player(banked, 10)


@pytest.mark.parametrize('pot', [0, -5])
def test_bank_requires_positive_pot(pot):
    with pytest.raises(InvalidAmountError):
        bank_player(make_player(), pot)


def test_can_bank():
    assert can_bank(make_player(), 5)
    assert can_bank(make_player())
    assert not can_bank(make_player(), 0)
    assert not can_bank(make_player(banked_this_round=True), 5)


def test_update_streak():
    player = make_player(streak_count=3)
    assert update_streak(player, True).streak_count == 4
    assert update_streak(player, False).streak_count == 0
