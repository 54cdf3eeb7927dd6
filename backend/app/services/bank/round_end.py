"""Round completion: detecting the end, settling streaks, clearing flags."""

from dataclasses import replace
from typing import Iterable, NamedTuple, Optional, Tuple

from .banking import update_streak
from .state import ALL_BANKED, SEVEN_ROLLED, Player


class RoundEndCheck(NamedTuple):
    should_end: bool
    reason: Optional[str]


def should_end_round(seven_rolled: bool, players: Iterable[Player]) -> RoundEndCheck:
    if seven_rolled:
        return RoundEndCheck(True, SEVEN_ROLLED)
    if all(p.banked_this_round for p in players):
        return RoundEndCheck(True, ALL_BANKED)
    return RoundEndCheck(False, None)


def finalize_round(players: Iterable[Player], reason: Optional[str]) -> Tuple[Player, ...]:
    """Settle streaks for the round that just ended.

    Scores are already final: banking moved the pot into `total_score` at the
    time, and whoever did not bank keeps what they had. `reason` does not
    change the outcome; banked players extend their streak either way.
    """
    return tuple(update_streak(p, p.banked_this_round) for p in players)


def reset_round_state(players: Iterable[Player]) -> Tuple[Player, ...]:
    return tuple(replace(p, banked_this_round=False) for p in players)


def is_game_complete(current_round: int, total_rounds: int) -> bool:
    return current_round >= total_rounds
