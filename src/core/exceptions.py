"""
Custom exceptions.

NOTE an illegal move is NOT an exception: the domain layer answers it with a plain `False`.
These are only raised at the boundaries (requests, persistence, session lookup).
"""


class GameError(Exception):
    """Top-level exception for anything going wrong while serving a game."""


class InvalidRequestError(GameError):
    """Request data could not be interpreted (ex. a square name like 'z9')."""


class RepositoryError(GameError):
    """Persistence layer could not find / store the requested record."""


class SessionNotFoundError(GameError):
    """No live game session is registered for the given player."""
