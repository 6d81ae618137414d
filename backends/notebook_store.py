"""File-based notebook of saved words."""

import json
import logging
import os

from backends.json_files import write_json_atomic
from core.config import DEFAULT_MAX_NEW_WORDS
from core.interfaces import WordSource
from core.models import LearningState, WordRecord
from core.selection import compute_learning_stats, select_words_for_learning
from core.utils import utcnow

logger = logging.getLogger(__name__)


class NotebookStore(WordSource):
    """The user's saved words, kept in a single JSON file."""

    def __init__(self, data_dir: str, file_name: str = 'notebook.json'):
        self.file_path = os.path.join(data_dir, file_name)
        self.words = []
        self.load()

    @property
    def display_name(self) -> str:
        return 'Notebook'

    def load(self) -> None:
        """Read the notebook, attaching default learning state where it is missing."""
        self.words = []
        if not os.path.exists(self.file_path):
            return
        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Could not read notebook {self.file_path}: {e}")
            return
        if not isinstance(data, dict):
            logger.error(f"Notebook {self.file_path} is not a JSON object, ignoring it")
            return

        needs_save = False
        for item in data.get('words', []):
            if not isinstance(item, dict) or not item.get('word'):
                logger.warning(f"Skipping malformed notebook entry: {item!r}")
                continue
            if 'learning' not in item:
                needs_save = True
            self.words.append(WordRecord.from_dict(item))

        if needs_save:
            logger.info("Added learning state to existing notebook entries")
            self.save()

    def save(self) -> bool:
        try:
            write_json_atomic(self.file_path, {'words': [w.to_dict() for w in self.words]})
            return True
        except OSError as e:
            logger.error(f"Failed to save notebook: {e}")
            return False

    def _find(self, word: str) -> WordRecord | None:
        key = word.lower()
        for record in self.words:
            if record.key == key:
                return record
        return None

    def add_word(self, entry: dict, source: str = None) -> bool:
        """Save a looked-up word entry, replacing any existing entry for the same word."""
        sources = entry.get('sources') or []
        record = WordRecord(
            entry['word'],
            pronunciation=entry.get('pronunciation', ''),
            definitions=entry.get('definitions', []),
            learning=LearningState(),
            source=source or (sources[0] if sources else 'Unknown'),
            added_at=utcnow().isoformat()
        )

        existing = self._find(record.word)
        if existing is not None:
            self.words[self.words.index(existing)] = record
        else:
            self.words.append(record)
        return self.save()

    def remove_word(self, word: str) -> bool:
        key = word.lower()
        remaining = [w for w in self.words if w.key != key]
        if len(remaining) == len(self.words):
            return False
        self.words = remaining
        return self.save()

    def get_words(self) -> list[WordRecord]:
        return self.words

    def has_word(self, word: str) -> bool:
        return self._find(word) is not None

    def list_words(self) -> list[WordRecord]:
        return list(self.words)

    def update_learning_state(self, word_key: str, state: LearningState) -> bool:
        record = self._find(word_key)
        if record is None:
            logger.warning(f"Cannot update learning state, '{word_key}' is not in the notebook")
            return False
        previous = record.learning
        record.learning = state
        if not self.save():
            record.learning = previous
            return False
        return True

    def get_words_for_learning(self, max_new_words: int = DEFAULT_MAX_NEW_WORDS, now=None) -> list[WordRecord]:
        return select_words_for_learning(self.words, now or utcnow(), max_new_words)

    def get_learning_stats(self, now=None) -> dict:
        return compute_learning_stats(self.words, now or utcnow())
