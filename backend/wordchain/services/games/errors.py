class GameError(Exception):
    """Base class for join/start failures that reach the client as an error."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class GameNotFound(GameError):
    status_code = 404

    def __init__(self, message: str = 'Game not found'):
        super().__init__(message)


class GameAlreadyStarted(GameError):
    def __init__(self, message: str = 'Game already started'):
        super().__init__(message)


class GameFull(GameError):
    def __init__(self, message: str = 'Game full'):
        super().__init__(message)


class GameFinished(GameError):
    def __init__(self, message: str = 'Game already finished'):
        super().__init__(message)
