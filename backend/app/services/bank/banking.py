"""Per-player ledger: banking the pot and streak bookkeeping."""

from dataclasses import replace

from .errors import AlreadyBankedError, InvalidAmountError
from .state import Player


def can_bank(player: Player, pot: int = 1) -> bool:
    return not player.banked_this_round and pot > 0


def bank_player(player: Player, pot: int) -> Player:
    """Move `pot` into the player's score and mark them banked for the round."""
    if player.banked_this_round:
        raise AlreadyBankedError(f'Player {player.id} has already banked this round')
    if pot <= 0:
        raise InvalidAmountError('Cannot bank: bank total is 0')

    return replace(
        player,
        total_score=player.total_score + pot,
        banked_this_round=True,
        banks_count=player.banks_count + 1,
        biggest_bank=max(player.biggest_bank, pot),
    )


def update_streak(player: Player, banked_successfully: bool) -> Player:
    if banked_successfully:
        return replace(player, streak_count=player.streak_count + 1)
    return replace(player, streak_count=0)
