from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

from . import rules
from .storage import Storage


@dataclass
class User:
    id: int
    username: str

    def to_dict(self):
        return asdict(self)


@dataclass
class Game:
    id: str
    host_id: int
    status: str = rules.WAITING
    round: int = 0
    current_word: str = ''
    round_ends_at: Optional[float] = None
    is_bot_game: bool = False
    bot_acted_round: Optional[int] = None

    def to_dict(self):
        return asdict(self)


@dataclass
class Player:
    id: int
    game_id: str
    kind: str
    user_id: Optional[int]
    score: int = 0
    has_submitted: bool = False

    def to_dict(self):
        return asdict(self)


class MemStorage(Storage):
    """Dict-backed store; everything lives as long as the instance does."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.users: Dict[int, User] = {}
        self.games: Dict[str, Game] = {}
        self.players: Dict[int, Player] = {}
        self.game_players: Dict[str, List[int]] = {}
        self._user_ids = 1
        self._player_ids = 1

    def _insert_user(self, username):
        user = User(id=self._user_ids, username=username)
        self._user_ids += 1
        self.users[user.id] = user
        return user

    def _lookup_user(self, user_id):
        return self.users.get(user_id)

    def _insert_game(self, game_id, host_id, is_bot_game):
        game = Game(id=game_id, host_id=host_id, is_bot_game=is_bot_game)
        self.games[game_id] = game
        self.game_players[game_id] = []
        return game

    def _lookup_game(self, game_id):
        return self.games.get(game_id)

    def _insert_player(self, game_id, kind, user_id):
        player = Player(id=self._player_ids, game_id=game_id, kind=kind, user_id=user_id)
        self._player_ids += 1
        self.players[player.id] = player
        self.game_players.setdefault(game_id, []).append(player.id)
        return player

    def _players_in(self, game_id):
        return [self.players[pid] for pid in self.game_players.get(game_id, []) if pid in self.players]

    def _save(self, *records):
        # Records are mutated in place
        pass
