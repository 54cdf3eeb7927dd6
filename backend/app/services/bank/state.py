"""Immutable game records.

A `Game` is a complete snapshot of one table. Transitions build a new
snapshot with `dataclasses.replace`; nothing is ever assigned in place, so
holding on to an older snapshot is all undo needs.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

ACTIVE = 'active'
ENDED = 'ended'

SEVEN_ROLLED = 'seven_rolled'
ALL_BANKED = 'all_banked'


@dataclass(frozen=True)
class Settings:
    first_three_rolls_seven_rule: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {'first_three_rolls_seven_rule': self.first_three_rolls_seven_rule}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'Settings':
        data = data or {}
        return cls(first_three_rolls_seven_rule=bool(data.get('first_three_rolls_seven_rule', True)))


@dataclass(frozen=True)
class Player:
    id: str
    name: str
    total_score: int = 0
    banked_this_round: bool = False
    banks_count: int = 0
    biggest_bank: int = 0
    streak_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'total_score': self.total_score,
            'banked_this_round': self.banked_this_round,
            'banks_count': self.banks_count,
            'biggest_bank': self.biggest_bank,
            'streak_count': self.streak_count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Player':
        return cls(
            id=str(data['id']),
            name=data['name'],
            total_score=int(data.get('total_score', 0)),
            banked_this_round=bool(data.get('banked_this_round', False)),
            banks_count=int(data.get('banks_count', 0)),
            biggest_bank=int(data.get('biggest_bank', 0)),
            streak_count=int(data.get('streak_count', 0)),
        )


@dataclass(frozen=True)
class Game:
    id: str
    created_at: float
    players: Tuple[Player, ...]
    total_rounds: int
    current_player_index: int
    settings: Settings = field(default_factory=Settings)
    current_round: int = 1
    bank_total: int = 0
    roll_count_in_round: int = 0
    status: str = ACTIVE
    round_ended: bool = False
    round_end_reason: Optional[str] = None
    round_end_player_index: Optional[int] = None

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    def find_player(self, player_id: str) -> int:
        """Index of the player with `player_id`, or -1."""
        for idx, p in enumerate(self.players):
            if p.id == player_id:
                return idx
        return -1

    def with_player(self, index: int, player: Player) -> 'Game':
        players = tuple(player if i == index else p for i, p in enumerate(self.players))
        return replace(self, players=players)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'created_at': self.created_at,
            'players': [p.to_dict() for p in self.players],
            'total_rounds': self.total_rounds,
            'current_round': self.current_round,
            'bank_total': self.bank_total,
            'roll_count_in_round': self.roll_count_in_round,
            'status': self.status,
            'settings': self.settings.to_dict(),
            'round_ended': self.round_ended,
            'round_end_reason': self.round_end_reason,
            'round_end_player_index': self.round_end_player_index,
            'current_player_index': self.current_player_index,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Game':
        end_idx = data.get('round_end_player_index')
        return cls(
            id=data['id'],
            created_at=data['created_at'],
            players=tuple(Player.from_dict(p) for p in data['players']),
            total_rounds=int(data['total_rounds']),
            current_player_index=int(data['current_player_index']),
            settings=Settings.from_dict(data.get('settings')),
            current_round=int(data.get('current_round', 1)),
            bank_total=int(data.get('bank_total', 0)),
            roll_count_in_round=int(data.get('roll_count_in_round', 0)),
            status=data.get('status', ACTIVE),
            round_ended=bool(data.get('round_ended', False)),
            round_end_reason=data.get('round_end_reason'),
            round_end_player_index=int(end_idx) if end_idx is not None else None,
        )
