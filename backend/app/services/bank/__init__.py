"""Bank dice game core.

Pure functions over immutable snapshots: the host layers (HTTP routes,
socket handlers, the snapshot store) call into these and persist whatever
comes back. Nothing in this package touches the database or the app context.
"""

from .engine import (
    GameStatus,
    advance_round,
    apply_bank,
    apply_roll,
    get_status,
    initialize_game,
)
from .errors import (
    AlreadyBankedError,
    BankGameError,
    GameEndedError,
    InvalidAmountError,
    InvalidDiceError,
    InvalidSetupError,
    PlayerNotFoundError,
    RoundEndedError,
    RoundNotEndedError,
)
from .state import Game, Player, Settings

__all__ = [
    'AlreadyBankedError',
    'BankGameError',
    'Game',
    'GameEndedError',
    'GameStatus',
    'InvalidAmountError',
    'InvalidDiceError',
    'InvalidSetupError',
    'Player',
    'PlayerNotFoundError',
    'RoundEndedError',
    'RoundNotEndedError',
    'Settings',
    'advance_round',
    'apply_bank',
    'apply_roll',
    'get_status',
    'initialize_game',
]
