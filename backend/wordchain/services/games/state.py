"""Read-only projections handed out by the game stores."""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .rules import required_letter


@dataclass(frozen=True)
class SubmitResult:
    valid: bool
    message: Optional[str] = None

    def to_dict(self):
        payload = {'valid': self.valid}
        if self.message is not None:
            payload['message'] = self.message
        return payload


@dataclass(frozen=True)
class PlayerView:
    id: int
    game_id: str
    kind: str
    user_id: Optional[int]
    score: int
    has_submitted: bool
    username: str

    def to_dict(self):
        return {
            'id': self.id,
            'game_id': self.game_id,
            'kind': self.kind,
            'user_id': self.user_id,
            'score': self.score,
            'has_submitted': self.has_submitted,
            'username': self.username,
        }


@dataclass(frozen=True)
class GameState:
    """A game together with its players, recomputed on every read."""

    id: str
    host_id: int
    status: str
    round: int
    total_rounds: int
    current_word: str
    round_ends_at: Optional[float]
    round_duration: float
    is_bot_game: bool
    players: Tuple[PlayerView, ...] = field(default_factory=tuple)

    @property
    def required_letter(self) -> Optional[str]:
        return required_letter(self.current_word)

    def player_for_user(self, user_id: int) -> Optional[PlayerView]:
        return next((p for p in self.players if p.user_id == user_id), None)

    def to_dict(self):
        return {
            'id': self.id,
            'host_id': self.host_id,
            'status': self.status,
            'round': self.round,
            'total_rounds': self.total_rounds,
            'current_word': self.current_word,
            'required_letter': self.required_letter,
            'round_ends_at': self.round_ends_at,
            'round_duration': self.round_duration,
            'is_bot_game': self.is_bot_game,
            'players': [p.to_dict() for p in self.players],
        }
