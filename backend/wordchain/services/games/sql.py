from wordchain.models import Game, Player, User

from . import rules
from .storage import Storage


class SqlStorage(Storage):
    """Store backed by the Flask-SQLAlchemy models.

    Must be used inside an application context.
    """

    def __init__(self, db, **kwargs):
        super().__init__(**kwargs)
        self.db = db

    def _insert_user(self, username):
        user = User(username=username)
        self._save(user)
        return user

    def _lookup_user(self, user_id):
        if user_id is None:
            return None
        return self.db.session.get(User, user_id)

    def _insert_game(self, game_id, host_id, is_bot_game):
        game = Game(
            id=game_id,
            host_id=host_id,
            status=rules.WAITING,
            round=0,
            current_word='',
            is_bot_game=is_bot_game,
        )
        self._save(game)
        return game

    def _lookup_game(self, game_id):
        return self.db.session.get(Game, game_id)

    def _insert_player(self, game_id, kind, user_id):
        player = Player(game_id=game_id, kind=kind, user_id=user_id, score=0, has_submitted=False)
        self._save(player)
        return player

    def _players_in(self, game_id):
        return Player.query.filter_by(game_id=game_id).order_by(Player.id).all()

    def _save(self, *records):
        try:
            for record in records:
                self.db.session.add(record)
            self.db.session.commit()
        except Exception:
            self.db.session.rollback()
            raise
