import logging
import random
import string
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

from . import rules
from .errors import GameAlreadyStarted, GameFinished, GameFull, GameNotFound
from .state import GameState, PlayerView, SubmitResult


logger = logging.getLogger(__name__)

GAME_CODE_ALPHABET = string.ascii_uppercase + string.digits

ChangeListener = Callable[[str, str], None]


class Storage(ABC):
    """Game lifecycle, word validation and bot simulation over an entity store.

    Subclasses provide the entity primitives (``_insert_*``, ``_lookup_*``,
    ``_players_in`` and ``_save``); every rule of the game lives here.

    There is no background timer. Expired rounds are resolved by
    ``_reconcile`` at the start of each read and write, and the bot only
    moves when its game is read.
    """

    def __init__(
        self,
        round_duration: float = 5.0,
        total_rounds: int = 5,
        max_players: int = 4,
        code_length: int = 6,
        bot_window: tuple = (1.0, 3.0),
        bot_accuracy: float = 0.7,
        clock: Optional[Callable[[], float]] = None,
        rng: Optional[random.Random] = None,
        on_change: Optional[ChangeListener] = None,
    ):
        self.round_duration = round_duration
        self.total_rounds = total_rounds
        self.max_players = max_players
        self.code_length = code_length
        self.bot_window = bot_window
        self.bot_accuracy = bot_accuracy
        self.clock = clock or time.time
        self.rng = rng or random.Random()
        self.on_change = on_change

    @classmethod
    def from_config(cls, config, **kwargs):
        options = dict(
            round_duration=float(config.get('ROUND_DURATION_SEC', 5)),
            total_rounds=int(config.get('TOTAL_ROUNDS', 5)),
            max_players=int(config.get('MAX_PLAYERS', 4)),
            code_length=int(config.get('GAME_CODE_LENGTH', 6)),
            bot_window=(
                float(config.get('BOT_WINDOW_MIN_SEC', 1)),
                float(config.get('BOT_WINDOW_MAX_SEC', 3)),
            ),
            bot_accuracy=float(config.get('BOT_ACCURACY', 0.7)),
        )
        options.update(kwargs)
        return cls(**options)

    # ---- entity primitives ----

    @abstractmethod
    def _insert_user(self, username: str): ...

    @abstractmethod
    def _lookup_user(self, user_id: int): ...

    @abstractmethod
    def _insert_game(self, game_id: str, host_id: int, is_bot_game: bool): ...

    @abstractmethod
    def _lookup_game(self, game_id: str): ...

    @abstractmethod
    def _insert_player(self, game_id: str, kind: str, user_id: Optional[int]): ...

    @abstractmethod
    def _players_in(self, game_id: str) -> list:
        """Players of a game in enrollment order."""

    @abstractmethod
    def _save(self, *records) -> None: ...

    # ---- users ----

    def create_user(self, username: str):
        user = self._insert_user(username)
        logger.info(f"[user-create] user={user.id} username={user.username}")
        return user

    def get_user(self, user_id: int):
        return self._lookup_user(user_id)

    # ---- games ----

    def create_game(self, host_id: int, is_bot_game: bool = False):
        game = self._insert_game(self._new_game_code(), host_id, bool(is_bot_game))
        # A fresh game is waiting and empty, so the host is seated directly
        self._insert_player(game.id, rules.HUMAN, host_id)
        if game.is_bot_game:
            self._insert_player(game.id, rules.BOT, None)
        logger.info(f"[game-create] game={game.id} host={host_id} bot={game.is_bot_game}")
        self._notify(game.id, 'created')
        return game

    def get_game(self, game_id: str) -> Optional[GameState]:
        game = self._lookup_game(game_id)
        if not game:
            return None
        self._reconcile(game)
        if game.status == rules.PLAYING and game.is_bot_game:
            self.process_bot_move(game.id)
        return self._compose(game)

    def join_game(self, game_id: str, user_id: int):
        game = self._lookup_game(game_id)
        if not game:
            raise GameNotFound()
        self._reconcile(game)
        if game.status != rules.WAITING:
            raise GameAlreadyStarted()

        players = self._players_in(game_id)
        if len(players) >= self.max_players:
            raise GameFull()
        existing = next(
            (p for p in players if p.kind == rules.HUMAN and p.user_id == user_id), None
        )
        if existing:
            return existing

        player = self._insert_player(game_id, rules.HUMAN, user_id)
        logger.info(f"[join] game={game_id} user={user_id} player={player.id}")
        self._notify(game_id, 'joined')
        return player

    def start_game(self, game_id: str) -> None:
        game = self._lookup_game(game_id)
        if not game:
            raise GameNotFound()
        self._reconcile(game)
        if game.status == rules.PLAYING:
            # Already running: starting again is a no-op
            return
        if game.status == rules.FINISHED:
            raise GameFinished()

        game.status = rules.PLAYING
        game.round = 1
        game.current_word = self.rng.choice(rules.START_WORDS)
        game.round_ends_at = self.clock() + self.round_duration
        game.bot_acted_round = None
        self._save(game, *self._clear_submissions(game.id))
        logger.info(f"[start] game={game.id} word={game.current_word} ends_at={game.round_ends_at}")
        self._notify(game.id, 'started')

    # ---- words ----

    def submit_word(self, game_id: str, user_id: int, word: str) -> SubmitResult:
        game = self._lookup_game(game_id)
        if not game:
            return SubmitResult(False, 'Game not found')
        self._reconcile(game)
        if game.status != rules.PLAYING:
            return SubmitResult(False, 'Round not active')

        player = next(
            (p for p in self._players_in(game_id) if p.kind == rules.HUMAN and p.user_id == user_id),
            None,
        )
        return self._accept_word(game, player, word)

    def process_bot_move(self, game_id: str) -> None:
        game = self._lookup_game(game_id)
        if not game or game.status != rules.PLAYING or not game.is_bot_game:
            return
        if game.bot_acted_round == game.round:
            return

        time_left = (game.round_ends_at or 0) - self.clock()
        low, high = self.bot_window
        if not low < time_left < high:
            return

        game.bot_acted_round = game.round
        self._save(game)
        if self.rng.random() >= self.bot_accuracy:
            logger.info(f"[bot-miss] game={game.id} round={game.round}")
            return

        bot = next((p for p in self._players_in(game.id) if p.kind == rules.BOT), None)
        word = rules.bot_word(game.current_word)
        logger.info(f"[bot-move] game={game.id} round={game.round} word={word}")
        self._accept_word(game, bot, word)

    # ---- internals ----

    def _accept_word(self, game, player, word: str) -> SubmitResult:
        if not rules.chains(game.current_word, word):
            letter = rules.required_letter(game.current_word)
            return SubmitResult(False, f"Word must start with '{letter}'")

        if player is not None:
            player.score += 1
            player.has_submitted = True
            self._save(player)
        else:
            logger.warning(f"[submit-unenrolled] game={game.id} word={word!r}")
        self._end_round(game, winning_word=rules.normalize(word), winner=player)
        return SubmitResult(True)

    def _end_round(self, game, winning_word: Optional[str] = None, winner=None) -> None:
        prev_round = game.round
        if game.round >= self.total_rounds:
            game.status = rules.FINISHED
            game.round_ends_at = None
            self._save(game)
            logger.info(f"[finish] game={game.id} finished at round={prev_round}")
            self._notify(game.id, 'finished')
            return

        game.round += 1
        game.current_word = winning_word or self.rng.choice(rules.BACKUP_WORDS)
        game.round_ends_at = self.clock() + self.round_duration
        game.bot_acted_round = None
        self._save(game, *self._clear_submissions(game.id, keep=winner))
        reason = 'win' if winning_word else 'timeout'
        logger.info(
            f"[round-end] game={game.id} round {prev_round} -> {game.round} reason={reason} word={game.current_word}"
        )
        self._notify(game.id, 'round_advanced')

    def _reconcile(self, game) -> None:
        if game.status != rules.PLAYING or game.round_ends_at is None:
            return
        if self.clock() > game.round_ends_at:
            logger.info(f"[timeout] game={game.id} round={game.round}")
            self._end_round(game)

    def _clear_submissions(self, game_id: str, keep=None) -> list:
        """Reset has_submitted for a new round; ``keep`` is the player whose word opened it."""
        keep_id = keep.id if keep is not None else None
        changed = [p for p in self._players_in(game_id) if p.has_submitted and p.id != keep_id]
        for p in changed:
            p.has_submitted = False
        return changed

    def _new_game_code(self) -> str:
        while True:
            code = ''.join(self.rng.choices(GAME_CODE_ALPHABET, k=self.code_length))
            if not self._lookup_game(code):
                return code
            logger.info(f"[code-collision] code={code}")

    def _display_name(self, player) -> str:
        if player.kind == rules.BOT:
            return rules.BOT_NAME
        user = self._lookup_user(player.user_id)
        return user.username if user else rules.UNKNOWN_NAME

    def _compose(self, game) -> GameState:
        players = tuple(
            PlayerView(
                id=p.id,
                game_id=p.game_id,
                kind=p.kind,
                user_id=p.user_id,
                score=p.score,
                has_submitted=p.has_submitted,
                username=self._display_name(p),
            )
            for p in self._players_in(game.id)
        )
        return GameState(
            id=game.id,
            host_id=game.host_id,
            status=game.status,
            round=game.round,
            total_rounds=self.total_rounds,
            current_word=game.current_word,
            round_ends_at=game.round_ends_at,
            round_duration=self.round_duration,
            is_bot_game=game.is_bot_game,
            players=players,
        )

    def _notify(self, game_id: str, event: str) -> None:
        if self.on_change is None:
            return
        try:
            self.on_change(game_id, event)
        except Exception:
            logger.exception(f"[notify-failed] game={game_id} event={event}")
