"""Word lookup: local ECDICT first, enriched with online examples, online fallback."""

import logging

from core.config import (
    SEARCH_HISTORY_SIZE, MIN_EXAMPLES_BEFORE_FALLBACK, MAX_EXAMPLES_PER_DEFINITION
)
from core.interfaces import DictionaryProvider, ExampleProvider, Translator

logger = logging.getLogger(__name__)

GENERAL_EXAMPLES = 'general'
GENERAL_EXAMPLES_LIMIT = 3


class Dictionary:
    """Combines the local dictionary with the online services and keeps search history."""

    def __init__(self, local: DictionaryProvider, online=None,
                 fallback_examples: ExampleProvider = None, translator: Translator = None):
        self.local = local
        self.online = online
        self.fallback_examples = fallback_examples
        self.translator = translator
        self.search_history = []

    def lookup(self, word: str) -> dict | None:
        normalized = word.strip().lower()
        if not normalized:
            return None

        entry = self.local.lookup(normalized) if self.local else None
        if entry:
            self._enrich(entry, existing_count=0)
        elif self.online is not None:
            logger.info(f"'{normalized}' not in local dictionary, trying online")
            entry = self.online.lookup(normalized)

        if entry:
            self.add_to_history(word.strip())
        return entry

    def enrich_with_examples(self, entry) -> None:
        """Fetch examples for an entry (dict or WordRecord) that has fewer than three."""
        definitions = entry['definitions'] if isinstance(entry, dict) else entry.definitions
        existing = sum(len(d.get('examples') or []) for d in definitions)
        if existing >= MIN_EXAMPLES_BEFORE_FALLBACK:
            return
        word = entry['word'] if isinstance(entry, dict) else entry.word
        self._enrich({'word': word, 'definitions': definitions}, existing_count=existing)

    def _enrich(self, entry: dict, existing_count: int) -> None:
        groups = self.online.fetch_examples_by_pos(entry['word']) if self.online else []
        found = existing_count + sum(len(g['examples']) for g in groups)

        if found < MIN_EXAMPLES_BEFORE_FALLBACK and self.fallback_examples is not None:
            extra = self.fallback_examples.fetch_examples(entry['word'])
            if extra:
                groups.append({'part_of_speech': GENERAL_EXAMPLES, 'examples': extra})

        if not groups:
            return

        if self.translator is not None:
            flat = [ex for g in groups for ex in g['examples']]
            for example, zh in zip(flat, self.translator.translate([ex['en'] for ex in flat])):
                example['zh'] = zh

        merge_examples(entry['definitions'], groups)

    def add_to_history(self, word: str) -> None:
        """Move the word to the front of the history, keeping the last ten."""
        key = word.lower()
        self.search_history = [w for w in self.search_history if w.lower() != key]
        self.search_history.insert(0, word)
        del self.search_history[SEARCH_HISTORY_SIZE:]

    def get_history(self) -> list[str]:
        return self.search_history


def merge_examples(definitions: list[dict], groups: list[dict]) -> None:
    """Attach example groups to definitions that have no examples yet.

    A group matches a definition when its part of speech starts with the
    definition's. General examples go to the first definition still empty.
    """
    for definition in definitions:
        definition.setdefault('examples', [])
        if definition['examples']:
            continue
        pos = (definition.get('part_of_speech') or '').lower()
        match = next(
            (g for g in groups
             if g['part_of_speech'] != GENERAL_EXAMPLES
             and g['part_of_speech'].lower().startswith(pos)),
            None
        )
        if match:
            definition['examples'] = match['examples'][:MAX_EXAMPLES_PER_DEFINITION]

    general = next((g for g in groups if g['part_of_speech'] == GENERAL_EXAMPLES), None)
    if general:
        empty = next((d for d in definitions if not d['examples']), None)
        if empty is not None:
            empty['examples'] = general['examples'][:GENERAL_EXAMPLES_LIMIT]
