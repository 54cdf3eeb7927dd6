"""Errors raised by the Bank game core.

Every transition either returns a new snapshot or raises one of these; the
snapshot passed in is never touched, so callers can report the message and
keep playing from the state they already hold.
"""


class BankGameError(Exception):
    """Base class for rule violations surfaced to players."""


class InvalidDiceError(BankGameError):
    pass


class InvalidAmountError(BankGameError):
    pass


class AlreadyBankedError(BankGameError):
    pass


class PlayerNotFoundError(BankGameError):
    pass


class RoundNotEndedError(BankGameError):
    pass


class RoundEndedError(BankGameError):
    """Roll or bank attempted after the round is over but before advancing."""


class GameEndedError(BankGameError):
    pass


class InvalidSetupError(BankGameError):
    """Bad roster or round count at game creation."""
