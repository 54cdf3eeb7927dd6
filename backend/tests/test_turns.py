from app.services.bank.turns import next_player_index, next_round_starter
from conftest import make_player


def _seats(*banked):
    return [make_player(id=f'player-{i + 1}', banked_this_round=b) for i, b in enumerate(banked)]


def test_next_player_moves_forward_and_wraps():
    seats = _seats(False, False, False)
    assert next_player_index(seats, 0) == 1
    assert next_player_index(seats, 2) == 0


def test_next_player_skips_banked_players():
    seats = _seats(False, True, True, False)
    assert next_player_index(seats, 0) == 3
    assert next_player_index(seats, 3) == 0


def test_next_player_can_return_to_same_player():
    seats = _seats(True, False, True)
    assert next_player_index(seats, 1) == 1


def test_next_player_terminates_when_everyone_banked():
    seats = _seats(True, True, True)
    assert next_player_index(seats, 0) in range(3)


def test_next_round_starter():
    assert next_round_starter(3, 1, 0) == 2
    assert next_round_starter(3, 2, 0) == 0
    assert next_round_starter(3, None, 1) == 1
