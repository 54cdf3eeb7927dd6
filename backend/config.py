import os


def _flag(name, default):
    return os.environ.get(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///bank.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Table setup limits
    MIN_PLAYERS = int(os.environ.get('MIN_PLAYERS', '2'))
    MAX_PLAYERS = int(os.environ.get('MAX_PLAYERS', '50'))
    ALLOWED_ROUND_COUNTS = tuple(int(r) for r in os.environ.get('ALLOWED_ROUND_COUNTS', '10,15,20').split(','))
    DEFAULT_TOTAL_ROUNDS = int(os.environ.get('DEFAULT_TOTAL_ROUNDS', '10'))
    # A 7 in rolls 1-3 adds 70 instead of ending the round
    FIRST_THREE_ROLLS_SEVEN_RULE = _flag('FIRST_THREE_ROLLS_SEVEN_RULE', 'true')
    # Snapshots kept per game for undo. 0 keeps every snapshot.
    UNDO_HISTORY_LIMIT = int(os.environ.get('UNDO_HISTORY_LIMIT', '50'))
