import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Which store backs the game: 'memory' (default) or 'sql'
    STORAGE_BACKEND = os.environ.get('STORAGE_BACKEND', 'memory')
    # Round timing (seconds) and game shape
    ROUND_DURATION_SEC = float(os.environ.get('ROUND_DURATION_SEC', '5'))
    TOTAL_ROUNDS = int(os.environ.get('TOTAL_ROUNDS', '5'))
    MAX_PLAYERS = int(os.environ.get('MAX_PLAYERS', '4'))
    GAME_CODE_LENGTH = int(os.environ.get('GAME_CODE_LENGTH', '6'))
    # Bot answers only while the remaining round time is inside this window
    BOT_WINDOW_MIN_SEC = float(os.environ.get('BOT_WINDOW_MIN_SEC', '1'))
    BOT_WINDOW_MAX_SEC = float(os.environ.get('BOT_WINDOW_MAX_SEC', '3'))
    BOT_ACCURACY = float(os.environ.get('BOT_ACCURACY', '0.7'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
