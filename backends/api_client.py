"""REST API clients for online dictionary, example and translation services."""

import logging
from urllib.parse import quote

import requests

from core.interfaces import DictionaryProvider, ExampleProvider, Translator

logger = logging.getLogger(__name__)

FREE_DICT_API = 'https://api.dictionaryapi.dev/api/v2/entries/en'
WORDNIK_API = 'https://api.wordnik.com/v4/word.json'
DEFAULT_TIMEOUT = 10
DEFINITIONS_PER_PART_OF_SPEECH = 2


class APIClient:
    """Shared requests.Session handling for the online services."""

    def __init__(self, base_url: str, session: requests.Session = None, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout

    def _get(self, endpoint: str, params: dict = None):
        """Make a GET request. Returns parsed JSON, or None on 404."""
        response = self.session.get(f"{self.base_url}{endpoint}", params=params, timeout=self.timeout)
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return response.json()

    def _post(self, endpoint: str, data, params: dict = None, headers: dict = None):
        """Make a POST request with a JSON body."""
        response = self.session.post(f"{self.base_url}{endpoint}", json=data, params=params,
                                     headers=headers, timeout=self.timeout)
        response.raise_for_status()
        return response.json()


class FreeDictionaryClient(APIClient, DictionaryProvider, ExampleProvider):
    """Client for the Free Dictionary API (English only)."""

    def __init__(self, session: requests.Session = None, timeout: float = DEFAULT_TIMEOUT):
        super().__init__(FREE_DICT_API, session=session, timeout=timeout)

    def _fetch(self, word: str):
        try:
            return self._get(f"/{quote(word)}")
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"Free Dictionary request for '{word}' failed: {e}")
            return None

    def lookup(self, word: str) -> dict | None:
        return transform_free_dictionary_entry(word, self._fetch(word))

    def fetch_examples(self, word: str) -> list[dict]:
        """Examples flattened across parts of speech."""
        examples = []
        for group in self.fetch_examples_by_pos(word):
            examples.extend(group['examples'])
        return examples

    def fetch_examples_by_pos(self, word: str) -> list[dict]:
        """Examples grouped as [{part_of_speech, examples: [{en, zh}]}]."""
        return extract_examples(self._fetch(word))


class WordnikClient(APIClient, ExampleProvider):
    """Wordnik example sentences; does nothing without an API key."""

    def __init__(self, api_key: str | None, session: requests.Session = None,
                 timeout: float = DEFAULT_TIMEOUT, limit: int = 3):
        super().__init__(WORDNIK_API, session=session, timeout=timeout)
        self.api_key = api_key
        self.limit = limit

    def fetch_examples(self, word: str) -> list[dict]:
        if not self.api_key:
            return []
        try:
            data = self._get(f"/{quote(word)}/examples",
                             {'limit': self.limit, 'api_key': self.api_key})
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"Wordnik request for '{word}' failed: {e}")
            return []
        if not data:
            return []
        return [{'en': ex['text'], 'zh': ''} for ex in data.get('examples', []) if ex.get('text')]


class AzureTranslator(APIClient, Translator):
    """Azure Translator, English to Simplified Chinese."""

    def __init__(self, api_key: str | None, region: str = 'eastus',
                 endpoint: str = 'https://api.cognitive.microsofttranslator.com',
                 session: requests.Session = None, timeout: float = DEFAULT_TIMEOUT):
        super().__init__(endpoint, session=session, timeout=timeout)
        self.api_key = api_key
        self.region = region

    def translate(self, texts: list[str]) -> list[str]:
        if not self.api_key or not texts:
            return ['' for _ in texts]
        headers = {
            'Ocp-Apim-Subscription-Key': self.api_key,
            'Ocp-Apim-Subscription-Region': self.region,
            'Content-Type': 'application/json'
        }
        try:
            data = self._post("/translate", [{'Text': t} for t in texts],
                              params={'api-version': '3.0', 'to': 'zh-Hans'}, headers=headers)
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"Azure translation of {len(texts)} texts failed: {e}")
            return ['' for _ in texts]

        translations = []
        for i in range(len(texts)):
            item = data[i] if i < len(data) else {}
            items = item.get('translations') or [{}]
            translations.append(items[0].get('text', ''))
        return translations


def extract_examples(api_data) -> list[dict]:
    """Pull example sentences out of a Free Dictionary response, grouped by part of speech."""
    if not api_data:
        return []
    result = []
    for meaning in api_data[0].get('meanings', []):
        examples = [
            {'en': d['example'], 'zh': ''}
            for d in meaning.get('definitions', []) if d.get('example')
        ]
        if examples:
            result.append({'part_of_speech': meaning.get('partOfSpeech', ''), 'examples': examples})
    return result


def transform_free_dictionary_entry(word: str, api_data) -> dict | None:
    """Convert a Free Dictionary response to a word entry."""
    if not api_data:
        return None
    entry = api_data[0]
    phonetics = entry.get('phonetics') or []

    us = next((p for p in phonetics if '-us' in (p.get('audio') or '')), None)
    with_text = next((p for p in phonetics if p.get('text')), None)
    pronunciation = (us or {}).get('text') or (with_text or {}).get('text') or entry.get('phonetic', '')
    with_audio = next((p for p in phonetics if p.get('audio')), None)

    definitions = []
    for meaning in entry.get('meanings', []):
        for d in meaning.get('definitions', [])[:DEFINITIONS_PER_PART_OF_SPEECH]:
            definitions.append({
                'part_of_speech': meaning.get('partOfSpeech') or 'unknown',
                'meaning': d.get('definition', ''),
                'meaning_zh': '',
                'examples': [{'en': d['example'], 'zh': ''}] if d.get('example') else []
            })

    return {
        'word': entry.get('word') or word,
        'pronunciation': pronunciation or '',
        'audio_url': (with_audio or {}).get('audio', ''),
        'definitions': definitions,
        'sources': ['Online Dictionary']
    }
