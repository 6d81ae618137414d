"""Flashcard drill state machine."""

import logging
import time

from .config import (
    DEFAULT_MAX_NEW_WORDS, REVIEW_PAUSE_SECONDS, GRADE_FORGOT, GRADE_EASY
)
from .interfaces import WordSource, FlashcardDisplay
from .models import LearningSession
from .scheduler import calculate_next_review, get_grade_feedback
from .selection import select_words_for_learning
from .utils import utcnow

logger = logging.getLogger(__name__)

# Drill states
FLASHCARD_FRONT = 'flashcard_front'
FLASHCARD_BACK = 'flashcard_back'
SESSION_COMPLETE = 'session_complete'
FINISHED = 'finished'

REVEAL_INPUT = ''
EXAMPLES_INPUT = 'e'


class FlashcardDrill:
    """Runs one learning session over a word source.

    The drill is driven one input line at a time through handle_input(). Every
    grade is written straight back to the source, so abandoning the drill never
    loses progress on cards that were already graded.
    """

    def __init__(self, source: WordSource, display: FlashcardDisplay,
                 max_new_words: int = DEFAULT_MAX_NEW_WORDS,
                 pause_seconds: float = REVIEW_PAUSE_SECONDS,
                 clock=utcnow, sleep=time.sleep):
        self.source = source
        self.display = display
        self.max_new_words = max_new_words
        self.pause_seconds = pause_seconds
        self.clock = clock
        self.sleep = sleep
        self.session = None
        self.state = None
        self.persist_failures = []

    @property
    def is_active(self) -> bool:
        return self.session is not None and self.state != FINISHED

    def start(self) -> bool:
        """Select the queue and show the first card. Returns False if nothing is due."""
        words = select_words_for_learning(
            self.source.list_words(), self.clock(), self.max_new_words
        )
        if not words:
            logger.info(f"No words due in {self.source.display_name}")
            self.display.show_all_caught_up()
            return False

        logger.info(f"Starting {self.source.display_name} session with {len(words)} words")
        self.session = LearningSession(words)
        self.persist_failures = []
        self._show_current_card()
        return True

    def handle_input(self, text: str) -> str:
        """Apply one line of (trimmed, lower-cased) input. Returns the new state."""
        if self.state == FLASHCARD_FRONT:
            self._handle_front(text)
        elif self.state == FLASHCARD_BACK:
            self._handle_back(text)
        elif self.state == SESSION_COMPLETE:
            self._finish()
        return self.state

    def abandon(self) -> None:
        """Drop the unfinished remainder of the session."""
        if self.session is not None and not self.session.is_complete:
            logger.info(f"Session abandoned after {len(self.session.results)} of "
                        f"{self.session.total_words} words")
        self._finish()

    def _finish(self) -> None:
        self.session = None
        self.state = FINISHED

    def _show_current_card(self) -> None:
        if self.session.is_complete:
            self.state = SESSION_COMPLETE
            self.display.show_session_complete(self.session.get_stats())
            return

        progress = self.session.progress
        self.display.show_front(self.session.current_word, progress['current'], progress['total'])
        self.state = FLASHCARD_FRONT

    def _handle_front(self, text: str) -> None:
        if text != REVEAL_INPUT:
            self.display.show_input_hint(FLASHCARD_FRONT)
            return

        self.session.reveal()
        progress = self.session.progress
        self.display.show_back(self.session.current_word, progress['current'], progress['total'])
        self.state = FLASHCARD_BACK

    def _handle_back(self, text: str) -> None:
        if text == EXAMPLES_INPUT:
            self.display.show_examples(self.session.current_word)
            self.display.show_grade_prompt()
            return

        grade = parse_grade(text)
        if grade is None:
            self.display.show_input_hint(FLASHCARD_BACK)
            return

        self._apply_grade(grade)

    def _apply_grade(self, grade: int) -> None:
        word = self.session.current_word
        new_state = calculate_next_review(word.learning, grade, self.clock())

        saved = self._persist(word, new_state)
        word.learning = new_state
        self.session.record_grade(grade)

        self.display.show_grade_feedback(get_grade_feedback(grade, new_state.interval), grade)
        if not saved:
            self.persist_failures.append(word.key)
            self.display.show_error(f'Could not save progress for "{word.word}"')

        if self.pause_seconds > 0:
            self.sleep(self.pause_seconds)
        self._show_current_card()

    def _persist(self, word, new_state) -> bool:
        try:
            saved = self.source.update_learning_state(word.key, new_state)
        except Exception as e:
            logger.error(f"Failed to save learning state for {word.key}: {type(e).__name__}: {e}")
            return False
        if not saved:
            logger.warning(f"{self.source.display_name} did not save learning state for {word.key}")
        return bool(saved)


def parse_grade(text: str) -> int | None:
    """Return the grade for inputs '1'-'4', otherwise None."""
    if not text.isdigit():
        return None
    grade = int(text)
    if GRADE_FORGOT <= grade <= GRADE_EASY:
        return grade
    return None
