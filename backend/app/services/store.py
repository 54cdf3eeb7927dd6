"""Snapshot store for scored tables.

The core hands back a new immutable `Game` after every transition; this
module keeps the latest one on the `BankGame` row and pushes the one it
replaces onto the table's undo history.
"""

import json
from typing import Any, Dict, List, Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError

from app import db
from app.models import BankGame, GameSnapshot
from app.services.bank import Game, get_status


class UndoUnavailableError(Exception):
    pass


class ConcurrentUpdateError(Exception):
    """Another request changed the table between our read and our write."""


def _encode(game: Game) -> str:
    return json.dumps(game.to_dict())


def load_game(record: BankGame) -> Game:
    return Game.from_dict(record.snapshot)


def create_table(game: Game) -> BankGame:
    record = BankGame(engine_id=game.id, status=game.status, state=_encode(game))
    db.session.add(record)
    db.session.commit()
    return record


def find_table(game_code: str, for_update: bool = False) -> Optional[BankGame]:
    """Look up a table by code.

    Mutating callers pass `for_update=True` so the row stays locked until
    their commit. SQLite ignores the lock; the unique (game_id, seq) history
    key still rejects the second of two overlapping writes there.
    """
    query = BankGame.query.filter_by(game_code=(game_code or '').upper())
    if for_update:
        query = query.with_for_update()
    return query.first()


def _latest_snapshot(record: BankGame) -> Optional[GameSnapshot]:
    return GameSnapshot.query.filter_by(game_id=record.id).order_by(GameSnapshot.seq.desc()).first()


def commit_transition(record: BankGame, game: Game) -> Game:
    """Make `game` the table's current state; the old state becomes undoable."""
    last = _latest_snapshot(record)
    seq = last.seq + 1 if last else 1
    db.session.add(GameSnapshot(game_id=record.id, seq=seq, state=record.state))
    record.state = _encode(game)
    record.status = game.status
    db.session.add(record)
    try:
        _trim_history(record, seq)
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise ConcurrentUpdateError('The game changed while this action was applied; reload and try again') from exc
    return game


def _trim_history(record: BankGame, newest_seq: int) -> None:
    limit = int(current_app.config.get('UNDO_HISTORY_LIMIT', 50))
    if limit <= 0:
        return
    GameSnapshot.query.filter(
        GameSnapshot.game_id == record.id,
        GameSnapshot.seq <= newest_seq - limit,
    ).delete(synchronize_session=False)


def can_undo(record: BankGame) -> bool:
    return record.snapshots.count() > 0


def undo(record: BankGame) -> Game:
    """Restore the snapshot taken before the last transition."""
    last = _latest_snapshot(record)
    if not last:
        raise UndoUnavailableError('Nothing to undo')
    game = Game.from_dict(json.loads(last.state))
    record.state = last.state
    record.status = game.status
    db.session.delete(last)
    db.session.add(record)
    db.session.commit()
    return game


def discard_table(record: BankGame) -> None:
    db.session.delete(record)
    db.session.commit()


def saved_roster() -> List[str]:
    """Player names from the most recently created table."""
    record = BankGame.query.order_by(BankGame.id.desc()).first()
    if not record:
        return []
    return [p['name'] for p in record.snapshot.get('players', [])]


def state_payload(record: BankGame, game: Game) -> Dict[str, Any]:
    payload = record.to_dict()
    payload['can_undo'] = can_undo(record)
    payload['game'] = game.to_dict()
    payload['status'] = get_status(game).to_dict()
    return payload
