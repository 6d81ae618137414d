"""File-based vocabulary category word lists and learning progress."""

import json
import logging
import os

from backends.json_files import write_json_atomic
from core.config import DEFAULT_MAX_NEW_WORDS
from core.interfaces import WordSource
from core.models import LearningState, WordRecord
from core.selection import compute_learning_stats, empty_learning_stats, select_words_for_learning
from core.utils import utcnow
from core.vocabulary import (
    build_category_word, get_category_name, get_estimated_count, has_tag, validate_category
)

logger = logging.getLogger(__name__)

PROGRESS_REPORT_EVERY = 10000


class CategoryStore(WordSource):
    """A fixed vocabulary list (e.g. CET-4) with per-word progress in its own file."""

    def __init__(self, category: str, data_dir: str):
        self.category = validate_category(category)
        self.data_dir = data_dir
        self.word_list_path = os.path.join(data_dir, f'{category}.json')
        self.progress_path = os.path.join(data_dir, f'{category}-progress.json')

    @property
    def display_name(self) -> str:
        return get_category_name(self.category)

    def is_extracted(self) -> bool:
        return os.path.exists(self.word_list_path)

    def get_estimated_count(self) -> int:
        return get_estimated_count(self.category)

    def extract(self, ecdict, on_progress=None) -> int:
        """Build the word list from ECDICT entries tagged with this category.

        `ecdict` is anything with an entries() method yielding raw ECDICT rows.
        on_progress(processed, total) is called every 10000 entries.
        """
        entries = ecdict.entries()
        total = len(entries)
        words = []
        for processed, entry in enumerate(entries, start=1):
            if entry.get('word') and has_tag(entry, self.category):
                words.append(build_category_word(entry))
            if on_progress and processed % PROGRESS_REPORT_EVERY == 0:
                on_progress(processed, total)

        words.sort(key=lambda w: w['word'].lower())
        write_json_atomic(self.word_list_path, words)
        logger.info(f"Extracted {len(words)} {self.display_name} words to {self.word_list_path}")
        return len(words)

    def get_word_list(self) -> list[dict] | None:
        """Load the extracted word list, or None if it is missing or unreadable."""
        if not self.is_extracted():
            return None
        try:
            with open(self.word_list_path, 'r', encoding='utf-8') as f:
                words = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Could not read {self.display_name} word list {self.word_list_path}: {e}")
            return None
        if not isinstance(words, list):
            logger.error(f"{self.display_name} word list is not a JSON array, ignoring it")
            return None
        return words

    def get_word_count(self) -> int:
        words = self.get_word_list()
        return len(words) if words else 0

    def _load_progress(self) -> dict | None:
        """Stored progress, or None if the file exists but cannot be read."""
        if not os.path.exists(self.progress_path):
            return {'words': {}, 'last_updated': None}
        try:
            with open(self.progress_path, 'r', encoding='utf-8') as f:
                progress = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Could not read {self.display_name} progress: {e}")
            return None
        if not isinstance(progress, dict) or not isinstance(progress.get('words', {}), dict):
            logger.error(f"{self.display_name} progress file is malformed, ignoring it")
            return None
        progress.setdefault('words', {})
        return progress

    def get_progress(self) -> dict:
        progress = self._load_progress()
        if progress is None:
            return {'words': {}, 'last_updated': None}
        return progress

    def save_progress(self, progress: dict) -> None:
        progress['last_updated'] = utcnow().isoformat()
        write_json_atomic(self.progress_path, progress)

    def get_word_learning_state(self, word: str) -> LearningState:
        return LearningState.from_dict(self.get_progress()['words'].get(word.lower()))

    def list_words(self) -> list[WordRecord]:
        words = self.get_word_list()
        if not words:
            return []
        states = self.get_progress()['words']
        records = []
        for item in words:
            if not isinstance(item, dict) or not item.get('word'):
                logger.warning(f"Skipping malformed {self.display_name} entry: {item!r}")
                continue
            learning = LearningState.from_dict(states.get(item['word'].lower()))
            records.append(WordRecord.from_dict(item, learning=learning))
        return records

    def update_learning_state(self, word_key: str, state: LearningState) -> bool:
        progress = self._load_progress()
        if progress is None:
            # Writing now would replace every other word's progress
            logger.error(f"Not saving {word_key}: {self.progress_path} is unreadable")
            return False
        progress['words'][word_key.lower()] = state.to_dict()
        try:
            self.save_progress(progress)
            return True
        except OSError as e:
            logger.error(f"Failed to save {self.display_name} progress for {word_key}: {e}")
            return False

    def get_words_for_learning(self, max_new_words: int = DEFAULT_MAX_NEW_WORDS, now=None) -> list[WordRecord]:
        return select_words_for_learning(self.list_words(), now or utcnow(), max_new_words)

    def get_learning_stats(self, now=None) -> dict:
        if not self.is_extracted():
            return empty_learning_stats()
        return compute_learning_stats(self.list_words(), now or utcnow())
