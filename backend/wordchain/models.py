from wordchain import db
from wordchain.services.games import rules


class User(db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), nullable=False, index=True)

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
        }


class Player(db.Model):
    __tablename__ = 'player'
    id = db.Column(db.Integer, primary_key=True)
    game_id = db.Column(db.String(16), db.ForeignKey('game.id'), nullable=False, index=True)
    kind = db.Column(db.String(8), default=rules.HUMAN, nullable=False)  # human, bot
    # Null for the bot player. Not a foreign key: hosts are not checked against users
    user_id = db.Column(db.Integer, nullable=True, index=True)
    score = db.Column(db.Integer, default=0, nullable=False)
    has_submitted = db.Column(db.Boolean, default=False, nullable=False)
    game = db.relationship('Game', back_populates='players')

    def to_dict(self):
        return {
            'id': self.id,
            'game_id': self.game_id,
            'kind': self.kind,
            'user_id': self.user_id,
            'score': self.score,
            'has_submitted': self.has_submitted,
        }


class Game(db.Model):
    __tablename__ = 'game'
    id = db.Column(db.String(16), primary_key=True)  # short join code
    host_id = db.Column(db.Integer, nullable=False)
    status = db.Column(db.String(16), default=rules.WAITING, nullable=False)  # waiting, playing, finished
    round = db.Column(db.Integer, default=0, nullable=False)
    current_word = db.Column(db.String(64), default='', nullable=False)
    round_ends_at = db.Column(db.Float, nullable=True)  # epoch seconds
    is_bot_game = db.Column(db.Boolean, default=False, nullable=False)
    bot_acted_round = db.Column(db.Integer, nullable=True)
    players = db.relationship('Player', back_populates='game', order_by='Player.id')

    def to_dict(self):
        return {
            'id': self.id,
            'host_id': self.host_id,
            'status': self.status,
            'round': self.round,
            'current_word': self.current_word,
            'round_ends_at': self.round_ends_at,
            'is_bot_game': self.is_bot_game,
            'bot_acted_round': self.bot_acted_round,
        }
