from app import db
from datetime import datetime, timezone
import json
import string
import random


def _utcnow():
    return datetime.now(timezone.utc)


def generate_game_code(length=4):
    """Generate a unique, short table code."""
    while True:
        code = ''.join(random.choices(string.ascii_uppercase + string.digits, k=length))
        if not BankGame.query.filter_by(game_code=code).first():
            return code


class BankGame(db.Model):
    """One scored table: the latest snapshot plus its undo history."""
    __tablename__ = 'bank_game'
    id = db.Column(db.Integer, primary_key=True)
    game_code = db.Column(db.String(4), unique=True, index=True)
    engine_id = db.Column(db.String(64), nullable=False)
    status = db.Column(db.String(16), default='active', nullable=False)  # active, ended
    state = db.Column(db.Text, nullable=False)  # JSON-encoded Game snapshot
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
    snapshots = db.relationship(
        'GameSnapshot',
        back_populates='game',
        lazy='dynamic',
        cascade='all, delete-orphan',
    )

    def __init__(self, **kwargs):
        super(BankGame, self).__init__(**kwargs)
        if not self.game_code:
            self.game_code = generate_game_code()

    @property
    def snapshot(self):
        return json.loads(self.state)

    def to_dict(self):
        return {
            'id': self.id,
            'game_code': self.game_code,
            'engine_id': self.engine_id,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'undo_depth': self.snapshots.count(),
        }


class GameSnapshot(db.Model):
    """An earlier state of a table, newest has the highest seq."""
    __tablename__ = 'game_snapshot'
    id = db.Column(db.Integer, primary_key=True)
    game_id = db.Column(db.Integer, db.ForeignKey('bank_game.id'), nullable=False, index=True)
    seq = db.Column(db.Integer, nullable=False)
    state = db.Column(db.Text, nullable=False)
    game = db.relationship('BankGame', back_populates='snapshots')

    # seq doubles as the table's version; two writers on the same version collide here
    __table_args__ = (db.UniqueConstraint('game_id', 'seq', name='uq_game_snapshot_game_seq'),)
