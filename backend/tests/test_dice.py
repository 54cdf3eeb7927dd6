import pytest

from app.services.bank.dice import classify, dice_from_sum
from app.services.bank.errors import InvalidDiceError


def test_classify_sums_and_flags_doubles():
    assert classify(3, 2) == (5, False)
    assert classify(4, 4) == (8, True)
    assert classify(1, 6).sum == 7


@pytest.mark.parametrize('die1,die2', [(0, 3), (3, 7), (-1, 1), (6, 0)])
def test_classify_rejects_out_of_range(die1, die2):
    with pytest.raises(InvalidDiceError):
        classify(die1, die2)


def test_classify_rejects_non_integers():
    with pytest.raises(InvalidDiceError):
        classify(None, 3)
    with pytest.raises(InvalidDiceError):
        classify(True, 3)


def test_dice_from_sum_uses_fixed_pairs():
    assert dice_from_sum(7) == (3, 4)
    assert dice_from_sum(5) == (2, 3)
    assert dice_from_sum(8, is_doubles=True) == (4, 4)
    # every non-doubles pair adds back up to the requested sum
    for total in range(2, 13):
        die1, die2 = dice_from_sum(total)
        assert die1 + die2 == total


def test_dice_from_sum_validation():
    with pytest.raises(InvalidDiceError):
        dice_from_sum(1)
    with pytest.raises(InvalidDiceError):
        dice_from_sum(13)
    with pytest.raises(InvalidDiceError):
        dice_from_sum(7, is_doubles=True)
