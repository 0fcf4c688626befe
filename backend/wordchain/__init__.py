from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
allowed_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:5174",
    "http://127.0.0.1:5174",
]
socketio = SocketIO(cors_allowed_origins=allowed_origins, async_mode=None)


def build_storage(flask_app):
    """Construct the game store selected by STORAGE_BACKEND.

    State changes are pushed to the game's Socket.IO room so clients can
    refresh without waiting for their next poll.
    """
    from wordchain.services.games import MemStorage

    def broadcast(game_id, event):
        socketio.emit('state_update', {'game_id': game_id, 'event': event}, to=f"game:{game_id}", namespace='/ws')

    backend = (flask_app.config.get('STORAGE_BACKEND') or 'memory').lower()
    if backend == 'memory':
        return MemStorage.from_config(flask_app.config, on_change=broadcast)
    if backend == 'sql':
        from wordchain.services.games.sql import SqlStorage
        with flask_app.app_context():
            db.create_all()
        return SqlStorage.from_config(flask_app.config, db=db, on_change=broadcast)
    raise ValueError(f"Unknown STORAGE_BACKEND: {backend}")


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    db.init_app(flask_app)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Import models so their tables are known to SQLAlchemy
    import wordchain.models  # noqa: F401
    from wordchain.services.games import STORAGE_EXTENSION
    flask_app.extensions[STORAGE_EXTENSION] = build_storage(flask_app)
    flask_app.logger.info(f"[storage] backend={flask_app.config.get('STORAGE_BACKEND', 'memory')}")

    from wordchain.main import main
    flask_app.register_blueprint(main)

    from wordchain.api.users import users
    flask_app.register_blueprint(users, url_prefix='/api/users')

    from wordchain.api.games import games
    # Mount game routes under /api to match frontend API client
    flask_app.register_blueprint(games, url_prefix='/api/games')

    # Register Socket.IO event handlers
    from wordchain.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the SQL tables."""
        from wordchain.models import User
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            # Seed users
            for name in ['testuser1', 'testuser2', 'testuser3']:
                db.session.add(User(username=name))

            db.session.commit()
            print('Database has been reset and seeded!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app
