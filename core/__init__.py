from .models import LearningState, WordRecord, LearningSession
from .interfaces import WordSource, FlashcardDisplay, DictionaryProvider, ExampleProvider, Translator
from .scheduler import calculate_level, calculate_next_review, format_interval, get_grade_feedback
from .selection import select_words_for_learning, compute_learning_stats
from .session import FlashcardDrill
from .config import (
    GRADE_FORGOT, GRADE_HARD, GRADE_GOOD, GRADE_EASY,
    LEVEL_NAMES, DEFAULT_MAX_NEW_WORDS, CATEGORIES
)

__all__ = [
    'LearningState', 'WordRecord', 'LearningSession',
    'WordSource', 'FlashcardDisplay', 'DictionaryProvider', 'ExampleProvider', 'Translator',
    'calculate_level', 'calculate_next_review', 'format_interval', 'get_grade_feedback',
    'select_words_for_learning', 'compute_learning_stats',
    'FlashcardDrill',
    'GRADE_FORGOT', 'GRADE_HARD', 'GRADE_GOOD', 'GRADE_EASY',
    'LEVEL_NAMES', 'DEFAULT_MAX_NEW_WORDS', 'CATEGORIES'
]
