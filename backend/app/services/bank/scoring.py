"""Pot rules for a single roll.

Pure functions only; the orchestrator feeds in the pot and roll index and
stores whatever comes back.
"""

from typing import NamedTuple

# Rolls 1..3 of every round are protected: sevens may pay 70 and doubles
# only add their pips.
PROTECTED_ROLLS = 3
SEVEN_BONUS = 70


class PotResult(NamedTuple):
    new_pot: int
    round_ended: bool
    seven_rolled: bool


def seven_rule_applies(roll_index: int, rule_enabled: bool) -> bool:
    return bool(rule_enabled) and roll_index <= PROTECTED_ROLLS


def apply_roll(current_pot: int, dice_sum: int, is_doubles: bool, roll_index: int,
               first_three_rolls_seven_rule: bool) -> PotResult:
    """New pot after a roll.

    `roll_index` is 1-indexed and already counts this roll.

    - 7 inside the protected window with the rule on: +70, round goes on
    - any other 7: pot unchanged, round over
    - doubles after the window: pot doubles, pips ignored
    - anything else: pot + sum
    """
    if dice_sum == 7:
        if seven_rule_applies(roll_index, first_three_rolls_seven_rule):
            return PotResult(current_pot + SEVEN_BONUS, False, False)
        return PotResult(current_pot, True, True)

    if is_doubles and roll_index > PROTECTED_ROLLS:
        return PotResult(current_pot * 2, False, False)

    return PotResult(current_pot + dice_sum, False, False)
