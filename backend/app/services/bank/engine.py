"""Whole-game transitions for Bank.

Each transition takes a `Game` snapshot and returns a new one. Failures
raise a `BankGameError` subclass before anything is built, so the caller's
snapshot is always still valid.

    game = initialize_game(players, total_rounds=10, settings=Settings())
    game = apply_roll(game, 3, 4)
    game = apply_bank(game, 'player-2')
    if game.round_ended:
        game = advance_round(game)
"""

import random
import string
import time
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from .banking import bank_player, can_bank
from .dice import classify
from .errors import (
    AlreadyBankedError,
    GameEndedError,
    InvalidAmountError,
    InvalidSetupError,
    PlayerNotFoundError,
    RoundEndedError,
    RoundNotEndedError,
)
from .round_end import finalize_round, is_game_complete, reset_round_state, should_end_round
from .scoring import apply_roll as score_roll
from .state import ENDED, Game, Player, Settings
from .turns import next_player_index, next_round_starter


def generate_game_id(rng: Optional[random.Random] = None) -> str:
    rng = rng or random
    suffix = ''.join(rng.choices(string.ascii_lowercase + string.digits, k=9))
    return f'game-{int(time.time() * 1000)}-{suffix}'


def initialize_game(players: Iterable[Mapping[str, Any]], total_rounds: int,
                    settings: Optional[Settings] = None, rng: Optional[random.Random] = None) -> Game:
    """Start a game: round 1, empty pot, random first roller.

    `players` is the validated roster as `{'id', 'name'}` mappings, in seat
    order. Pass `rng` to make the starting player and id reproducible.
    """
    roster = tuple(Player(id=str(p['id']), name=p['name']) for p in players)
    if len(roster) < 2:
        raise InvalidSetupError('A game needs at least 2 players')
    if len({p.id for p in roster}) != len(roster):
        raise InvalidSetupError('Player ids must be unique')
    if total_rounds < 1:
        raise InvalidSetupError('A game needs at least 1 round')

    rng = rng or random.Random()
    return Game(
        id=generate_game_id(rng),
        created_at=time.time(),
        players=roster,
        total_rounds=total_rounds,
        current_player_index=rng.randrange(len(roster)),
        settings=settings or Settings(),
    )


def _require_live_round(game: Game) -> None:
    if game.status == ENDED:
        raise GameEndedError('The game is over')
    if game.round_ended:
        raise RoundEndedError('The round has ended; start the next round first')


def apply_roll(game: Game, die1: int, die2: int) -> Game:
    roll = classify(die1, die2)
    _require_live_round(game)

    roll_index = game.roll_count_in_round + 1
    result = score_roll(
        game.bank_total,
        roll.sum,
        roll.is_doubles,
        roll_index,
        game.settings.first_three_rolls_seven_rule,
    )

    updated = replace(
        game,
        bank_total=result.new_pot,
        roll_count_in_round=roll_index,
        current_player_index=next_player_index(game.players, game.current_player_index),
    )

    if result.round_ended:
        check = should_end_round(result.seven_rolled, game.players)
        updated = replace(
            updated,
            round_ended=check.should_end,
            round_end_reason=check.reason,
            round_end_player_index=game.current_player_index,
        )
    return updated


def apply_bank(game: Game, player_id: str) -> Game:
    """Bank the pot for `player_id`; anyone may bank, not only the roller."""
    _require_live_round(game)

    idx = game.find_player(player_id)
    if idx == -1:
        raise PlayerNotFoundError(f'Player {player_id} not found')

    player = game.players[idx]
    if not can_bank(player, game.bank_total):
        if player.banked_this_round:
            raise AlreadyBankedError(f'Player {player_id} has already banked this round')
        raise InvalidAmountError('Cannot bank: bank total is 0')

    updated = game.with_player(idx, bank_player(player, game.bank_total))

    # Out-of-turn banks leave the dice where they are.
    if idx == game.current_player_index:
        updated = replace(
            updated,
            current_player_index=next_player_index(updated.players, game.current_player_index),
        )

    check = should_end_round(False, updated.players)
    if check.should_end:
        updated = replace(
            updated,
            round_ended=True,
            round_end_reason=check.reason,
            round_end_player_index=idx,
        )
    return updated


def advance_round(game: Game) -> Game:
    if not game.round_ended:
        raise RoundNotEndedError('Cannot advance: round has not ended')

    players = reset_round_state(finalize_round(game.players, game.round_end_reason))

    if is_game_complete(game.current_round, game.total_rounds):
        return replace(
            game,
            players=players,
            status=ENDED,
            round_ended=False,
            round_end_reason=None,
            round_end_player_index=None,
        )

    return replace(
        game,
        players=players,
        current_round=game.current_round + 1,
        bank_total=0,
        roll_count_in_round=0,
        round_ended=False,
        round_end_reason=None,
        round_end_player_index=None,
        current_player_index=next_round_starter(
            len(game.players), game.round_end_player_index, game.current_player_index
        ),
    )


@dataclass(frozen=True)
class GameStatus:
    status: str
    current_round: int
    total_rounds: int
    is_game_complete: bool
    leaderboard: Tuple[Player, ...]
    winner: Optional[Player]
    winners: Tuple[Player, ...]
    is_tie: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'status': self.status,
            'current_round': self.current_round,
            'total_rounds': self.total_rounds,
            'is_game_complete': self.is_game_complete,
            'leaderboard': [p.to_dict() for p in self.leaderboard],
            'winner': self.winner.to_dict() if self.winner else None,
            'winners': [p.to_dict() for p in self.winners],
            'is_tie': self.is_tie,
        }


def get_status(game: Game) -> GameStatus:
    # sorted() is stable, so equal scores keep seat order
    leaderboard = tuple(sorted(game.players, key=lambda p: p.total_score, reverse=True))
    top = leaderboard[0].total_score if leaderboard else 0
    winners = tuple(p for p in leaderboard if p.total_score == top)
    return GameStatus(
        status=game.status,
        current_round=game.current_round,
        total_rounds=game.total_rounds,
        is_game_complete=game.status == ENDED,
        leaderboard=leaderboard,
        winner=winners[0] if winners else None,
        winners=winners,
        is_tie=len(winners) > 1,
    )
