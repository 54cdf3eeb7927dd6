"""Turn order within and across rounds."""

from typing import Optional, Sequence

from .state import Player


def next_player_index(players: Sequence[Player], from_index: int) -> int:
    """Next player after `from_index` who has not banked this round.

    The scan is bounded to one lap. When every player has banked there is no
    one left to roll, and the index it stops on is meaningless; the round is
    over by then and callers must not hand that player the dice.
    """
    count = len(players)
    idx = (from_index + 1) % count
    steps = 0
    while players[idx].banked_this_round and steps < count:
        idx = (idx + 1) % count
        steps += 1
    return idx


def next_round_starter(player_count: int, round_end_player_index: Optional[int],
                       current_player_index: int) -> int:
    """Whoever sits after the player who ended the round opens the next one."""
    if round_end_player_index is None:
        return current_player_index
    return (round_end_player_index + 1) % player_count
