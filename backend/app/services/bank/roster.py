from typing import Dict, Iterable, List, Optional, Sequence

from .errors import InvalidSetupError

DEFAULT_ROUND_COUNTS = (10, 15, 20)


def build_roster(names: Optional[Sequence], total_rounds: int, allowed_rounds: Iterable[int] = DEFAULT_ROUND_COUNTS,
                 min_players: int = 2, max_players: int = 50) -> List[Dict[str, str]]:
    """Turn the setup form into player configs for `initialize_game`.

    Blank names are dropped and the rest are numbered in seat order
    (`player-1`, `player-2`, ...). `names` must be a list or tuple; a bare
    string is rejected rather than split into letters.
    """
    if names is None:
        names = []
    if not isinstance(names, (list, tuple)):
        raise InvalidSetupError('names must be a list of player names')
    cleaned = [str(n).strip() for n in names if n is not None and str(n).strip()]
    if len(cleaned) < min_players:
        raise InvalidSetupError(f'Please enter at least {min_players} player names')
    if len(cleaned) > max_players:
        raise InvalidSetupError(f'At most {max_players} players can join a game')

    allowed = tuple(allowed_rounds)
    if total_rounds not in allowed:
        choices = ', '.join(str(r) for r in allowed)
        raise InvalidSetupError(f'Number of rounds must be one of: {choices}')

    return [{'id': f'player-{i + 1}', 'name': name} for i, name in enumerate(cleaned)]
