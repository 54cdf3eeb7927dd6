import os
import random
import sys
import pytest

# Ensure the backend root (containing the `app` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from app import create_app, db, socketio
from app.services.bank import Game, Player, Settings


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    MIN_PLAYERS = 2
    MAX_PLAYERS = 50
    ALLOWED_ROUND_COUNTS = (10, 15, 20)
    DEFAULT_TOTAL_ROUNDS = 10
    FIRST_THREE_ROLLS_SEVEN_RULE = True
    UNDO_HISTORY_LIMIT = 50


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import app.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass


def make_player(**overrides):
    fields = dict(id='player-1', name='Alice')
    fields.update(overrides)
    return Player(**fields)


def make_game(players=None, **overrides):
    """A fixed two-player game with Alice to roll, round 1 of 10."""
    if players is None:
        players = (make_player(id='player-1', name='Alice'), make_player(id='player-2', name='Bob'))
    fields = dict(
        id='game-1',
        created_at=0.0,
        players=tuple(players),
        total_rounds=10,
        current_player_index=0,
        settings=Settings(first_three_rolls_seven_rule=False),
    )
    fields.update(overrides)
    return Game(**fields)


@pytest.fixture()
def rng():
    return random.Random(1234)
