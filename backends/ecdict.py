"""Local ECDICT English-Chinese dictionary."""

import csv
import logging
import os

from core.interfaces import DictionaryProvider
from core.vocabulary import build_dictionary_entry

logger = logging.getLogger(__name__)


class EcdictDictionary(DictionaryProvider):
    """Case-insensitive lookups against the ECDICT CSV dump.

    The CSV (word, phonetic, definition, translation, pos, collins, oxford,
    tag, ...) is read on first use and kept in memory.
    """

    def __init__(self, csv_path: str):
        self.csv_path = csv_path
        self._entries = None
        self._index = None

    @property
    def available(self) -> bool:
        return os.path.exists(self.csv_path)

    def _load(self) -> None:
        if self._entries is not None:
            return
        self._entries = []
        self._index = {}
        if not self.available:
            logger.warning(f"ECDICT not found at {self.csv_path}, local lookups disabled")
            return
        with open(self.csv_path, 'r', encoding='utf-8', newline='') as f:
            for row in csv.DictReader(f):
                word = (row.get('word') or '').strip()
                if not word:
                    continue
                self._entries.append(row)
                self._index.setdefault(word.lower(), row)
        logger.info(f"Loaded {len(self._entries)} ECDICT entries")

    def entries(self) -> list[dict]:
        self._load()
        return self._entries

    def find(self, word: str) -> dict | None:
        """Raw ECDICT row for a word, or None."""
        self._load()
        return self._index.get(word.strip().lower())

    def lookup(self, word: str) -> dict | None:
        row = self.find(word)
        if row is None:
            return None
        entry = build_dictionary_entry(row)
        if entry is not None and not entry['word']:
            entry['word'] = word
        return entry
