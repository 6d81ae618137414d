"""Domain models for wordlearner application."""

import logging

from .config import (
    DEFAULT_EASE_FACTOR, MIN_EASE_FACTOR, LEVEL_NEW, GRADE_GOOD, VALID_GRADES
)
from .utils import parse_iso, round_half_up, to_iso

logger = logging.getLogger(__name__)


class LearningState:
    """SM-2 learning state of one word in one learning context."""

    _FIELDS = [
        'level', 'ease_factor', 'interval', 'last_reviewed_at',
        'next_review_at', 'review_count', 'correct_count'
    ]

    def __init__(self, level: int = LEVEL_NEW, ease_factor: float = DEFAULT_EASE_FACTOR,
                 interval: int = 0, last_reviewed_at=None, next_review_at=None,
                 review_count: int = 0, correct_count: int = 0):
        self.level = level
        self.ease_factor = ease_factor
        self.interval = interval
        self.last_reviewed_at = last_reviewed_at
        self.next_review_at = next_review_at
        self.review_count = review_count
        self.correct_count = correct_count

    def __eq__(self, other) -> bool:
        if not isinstance(other, LearningState):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (f"LearningState(level={self.level}, ease_factor={self.ease_factor}, "
                f"interval={self.interval}, next_review_at={to_iso(self.next_review_at)}, "
                f"review_count={self.review_count}, correct_count={self.correct_count})")

    @property
    def is_new(self) -> bool:
        return self.level == LEVEL_NEW

    def is_due(self, now) -> bool:
        """A reviewed word is due once its next review time has passed."""
        if self.level == LEVEL_NEW or self.next_review_at is None:
            return False
        return self.next_review_at <= now

    def to_dict(self) -> dict:
        return {
            'level': self.level,
            'ease_factor': self.ease_factor,
            'interval': self.interval,
            'last_reviewed_at': to_iso(self.last_reviewed_at),
            'next_review_at': to_iso(self.next_review_at),
            'review_count': self.review_count,
            'correct_count': self.correct_count
        }

    @classmethod
    def from_dict(cls, data) -> 'LearningState':
        """Build a state from stored data, falling back to defaults if malformed."""
        if not isinstance(data, dict):
            if data is not None:
                logger.warning(f"Ignoring malformed learning state: {data!r}")
            return cls()

        missing = [f for f in cls._FIELDS if f not in data]
        if missing:
            logger.warning(f"Learning state missing fields {missing}, using defaults")
            return cls()

        try:
            interval = int(data['interval'])
            review_count = int(data['review_count'])
            correct_count = int(data['correct_count'])
            ease_factor = float(data['ease_factor'])
            level = int(data['level'])
            last_reviewed_at = parse_iso(data['last_reviewed_at'])
            next_review_at = parse_iso(data['next_review_at'])
        except (TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Learning state has invalid values ({e}), using defaults")
            return cls()

        if interval < 0 or review_count < 0 or not 0 <= correct_count <= review_count:
            logger.warning(f"Learning state counters are inconsistent: {data!r}, using defaults")
            return cls()

        if review_count > 0:
            # Level always follows interval once a word has been graded
            from .scheduler import calculate_level
            level = calculate_level(interval)
        elif level != LEVEL_NEW:
            level = LEVEL_NEW

        return cls(
            level=level,
            ease_factor=max(MIN_EASE_FACTOR, ease_factor),
            interval=interval,
            last_reviewed_at=last_reviewed_at,
            next_review_at=next_review_at,
            review_count=review_count,
            correct_count=correct_count
        )


class WordRecord:
    """A word with its display data and exactly one learning state."""

    # Keys passed through untouched for display and persistence
    _EXTRA_FIELDS = ['source', 'added_at', 'tags', 'collins', 'oxford', 'audio_url', 'sources']

    def __init__(self, word: str, pronunciation: str = '', definitions: list = None,
                 learning: LearningState = None, **extra):
        self.word = word
        self.pronunciation = pronunciation or ''
        self.definitions = definitions or []
        self.learning = learning or LearningState()
        self.extra = {k: v for k, v in extra.items() if v is not None}

    @property
    def key(self) -> str:
        return self.word.lower()

    def __repr__(self) -> str:
        return f"WordRecord({self.word!r}, level={self.learning.level})"

    def get_examples(self) -> list:
        """All example sentences across definitions, in definition order."""
        examples = []
        for definition in self.definitions:
            examples.extend(definition.get('examples') or [])
        return examples

    def to_dict(self, include_learning: bool = True) -> dict:
        data = {
            'word': self.word,
            'pronunciation': self.pronunciation,
            'definitions': self.definitions,
        }
        data.update(self.extra)
        if include_learning:
            data['learning'] = self.learning.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict, learning: LearningState = None) -> 'WordRecord':
        if learning is None:
            learning = LearningState.from_dict(data.get('learning'))
        extra = {k: data[k] for k in cls._EXTRA_FIELDS if k in data}
        return cls(
            data['word'],
            pronunciation=data.get('pronunciation', ''),
            definitions=data.get('definitions', []),
            learning=learning,
            **extra
        )


class LearningSession:
    """One flashcard drill over a fixed queue of words."""

    def __init__(self, words):
        self.words = tuple(words)
        self.current_index = 0
        self.revealed = False
        self.results = []

    @property
    def total_words(self) -> int:
        return len(self.words)

    @property
    def current_word(self) -> WordRecord | None:
        if self.is_complete:
            return None
        return self.words[self.current_index]

    @property
    def is_complete(self) -> bool:
        return self.current_index >= len(self.words)

    @property
    def progress(self) -> dict:
        return {
            'current': self.current_index + 1,
            'total': len(self.words),
            'reviewed': len(self.results),
            'correct': sum(1 for r in self.results if r['grade'] >= GRADE_GOOD)
        }

    def reveal(self) -> None:
        self.revealed = True

    def record_grade(self, grade: int) -> None:
        """Log the grade for the current word and move to the next one."""
        if grade not in VALID_GRADES:
            raise ValueError(f"Invalid grade: {grade}")
        if self.is_complete:
            raise RuntimeError("Learning session is already complete")
        self.results.append({
            'word': self.current_word.word,
            'grade': grade,
            'was_revealed': self.revealed
        })
        self.current_index += 1
        self.revealed = False

    def get_stats(self) -> dict:
        reviewed = len(self.results)
        correct = sum(1 for r in self.results if r['grade'] >= GRADE_GOOD)
        percentage = round_half_up(correct / reviewed * 100) if reviewed else 0
        return {
            'reviewed': reviewed,
            'correct': correct,
            'need_practice': reviewed - correct,
            'percentage': percentage
        }
