"""Game domain services: rules, stores and read models.

This package contains the game state machine that HTTP routes and socket
handlers call into, keeping transport concerns separated from core game
mechanics. ``SqlStorage`` lives in ``.sql`` and is imported on demand since
it needs the Flask-SQLAlchemy models.
"""

from flask import current_app

from .errors import GameAlreadyStarted, GameError, GameFinished, GameFull, GameNotFound
from .memory import MemStorage
from .state import GameState, PlayerView, SubmitResult
from .storage import Storage

STORAGE_EXTENSION = 'wordchain.storage'


def current_storage() -> Storage:
    """The store owned by the running application."""
    return current_app.extensions[STORAGE_EXTENSION]
