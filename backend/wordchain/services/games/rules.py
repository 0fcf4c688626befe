from typing import Optional

# Game status lifecycle: waiting -> playing -> finished
WAITING = 'waiting'
PLAYING = 'playing'
FINISHED = 'finished'

HUMAN = 'human'
BOT = 'bot'

BOT_NAME = 'Alice (Bot)'
UNKNOWN_NAME = 'Unknown'
BOT_WORD_SUFFIX = 'BOTWORD'

START_WORDS = ('APPLE', 'TIGER', 'RIVER', 'CLOUD', 'MUSIC', 'GHOST', 'LEMON', 'PIZZA')
BACKUP_WORDS = ('STORM', 'BREAD', 'NIGHT', 'DREAM', 'FLAME')


def required_letter(current_word: Optional[str]) -> Optional[str]:
    """Letter the next word has to start with, or None before the first round."""
    if not current_word:
        return None
    return current_word[-1].upper()


def chains(current_word: str, word: str) -> bool:
    """True when ``word`` starts with the last letter of ``current_word``.

    Both sides compare case-insensitively and the submission is trimmed
    first. An empty submission never chains.
    """
    letter = required_letter(current_word)
    candidate = (word or '').strip()
    if not letter or not candidate:
        return False
    return candidate[0].upper() == letter


def normalize(word: str) -> str:
    return word.strip().upper()


def bot_word(current_word: str) -> str:
    return f"{required_letter(current_word)}{BOT_WORD_SUFFIX}"
