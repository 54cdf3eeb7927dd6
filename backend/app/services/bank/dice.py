from typing import NamedTuple, Tuple

from .errors import InvalidDiceError

# Pip pair used when only the sum is known. Exact pips never matter to the
# rules, only the sum and whether the pair is doubles.
_PAIR_FOR_SUM = {
    2: (1, 1),
    3: (1, 2),
    4: (1, 3),
    5: (2, 3),
    6: (2, 4),
    7: (3, 4),
    8: (3, 5),
    9: (4, 5),
    10: (4, 6),
    11: (5, 6),
    12: (6, 6),
}


class DiceRoll(NamedTuple):
    sum: int
    is_doubles: bool


def _valid_die(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 6


def classify(die1: int, die2: int) -> DiceRoll:
    """Sum and doubles flag for a two-die roll."""
    if not (_valid_die(die1) and _valid_die(die2)):
        raise InvalidDiceError(f'Invalid dice values: {die1}, {die2}. Must be between 1 and 6.')
    return DiceRoll(die1 + die2, die1 == die2)


def dice_from_sum(total: int, is_doubles: bool = False) -> Tuple[int, int]:
    """Pick a die pair for a "sum + doubles?" entry."""
    if not isinstance(total, int) or isinstance(total, bool) or not 2 <= total <= 12:
        raise InvalidDiceError('Dice sum must be between 2 and 12')
    if is_doubles:
        if total % 2 != 0:
            raise InvalidDiceError('Doubles must have an even sum')
        return total // 2, total // 2
    return _PAIR_FOR_SUM[total]
