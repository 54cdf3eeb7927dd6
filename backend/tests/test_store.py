import pytest
from sqlalchemy.exc import IntegrityError

from app import db
from app.models import GameSnapshot
from app.services import store
from app.services.bank import apply_roll
from conftest import make_game


def test_history_rejects_duplicate_seq(flask_app):
    record = store.create_table(make_game())
    db.session.add(GameSnapshot(game_id=record.id, seq=1, state=record.state))
    db.session.commit()
    db.session.add(GameSnapshot(game_id=record.id, seq=1, state=record.state))
    with pytest.raises(IntegrityError):
        db.session.commit()
    db.session.rollback()


def test_stale_writer_is_rejected(flask_app, monkeypatch):
    game = make_game()
    record = store.create_table(game)
    first = store.commit_transition(record, apply_roll(game, 3, 2))

    # a second writer that read the table before the first commit landed
    monkeypatch.setattr(store, '_latest_snapshot', lambda _record: None)
    with pytest.raises(store.ConcurrentUpdateError):
        store.commit_transition(record, apply_roll(game, 6, 6))

    assert store.load_game(record) == first
    assert record.snapshots.count() == 1


def test_commit_and_undo_keep_history_in_order(flask_app):
    game = make_game()
    record = store.create_table(game)
    one = store.commit_transition(record, apply_roll(game, 1, 2))
    store.commit_transition(record, apply_roll(one, 2, 2))
    assert [s.seq for s in GameSnapshot.query.filter_by(game_id=record.id).order_by(GameSnapshot.seq)] == [1, 2]
    assert store.undo(record) == one
    assert store.undo(record) == game
    with pytest.raises(store.UndoUnavailableError):
        store.undo(record)
