"""Tests for the file stores, local dictionary, settings and online clients."""

import csv
import json
import os
import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, call, patch

import requests

from backends.api_client import (
    AzureTranslator, FreeDictionaryClient, WordnikClient, extract_examples
)
from backends.category_store import CategoryStore
from backends.dictionary import Dictionary, merge_examples
from backends.ecdict import EcdictDictionary
from backends.notebook_store import NotebookStore
from backends.settings import load_config, DEFAULTS
from core.models import LearningState, WordRecord
from core.scheduler import calculate_next_review

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)

ECDICT_FIELDS = ['word', 'phonetic', 'definition', 'translation', 'pos', 'collins', 'oxford', 'tag']


def lookup_entry(word: str, pos: str = 'v') -> dict:
    return {
        'word': word,
        'pronunciation': '/x/',
        'definitions': [{'part_of_speech': pos, 'meaning': 'm', 'meaning_zh': '义', 'examples': []}],
        'sources': ['ECDICT']
    }


def json_response(data, status_code: int = 200) -> MagicMock:
    response = MagicMock(status_code=status_code)
    response.json.return_value = data
    return response


class TempDirTestCase(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.data_dir = self._tmp.name

    def tearDown(self):
        self._tmp.cleanup()

    def write_json(self, name: str, data) -> str:
        path = os.path.join(self.data_dir, name)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f)
        return path

    def read_json(self, name: str):
        with open(os.path.join(self.data_dir, name), 'r', encoding='utf-8') as f:
            return json.load(f)


# ============================================================================
# NotebookStore
# ============================================================================

class TestNotebookStore(TempDirTestCase):

    def test_missing_file_is_empty(self):
        store = NotebookStore(self.data_dir)
        self.assertEqual(store.get_words(), [])
        self.assertEqual(store.display_name, 'Notebook')

    def test_add_word_persists(self):
        store = NotebookStore(self.data_dir)
        self.assertTrue(store.add_word(lookup_entry('Serendipity')))

        saved = self.read_json('notebook.json')['words']
        self.assertEqual(len(saved), 1)
        self.assertEqual(saved[0]['word'], 'Serendipity')
        self.assertEqual(saved[0]['source'], 'ECDICT')
        self.assertEqual(saved[0]['learning'], LearningState().to_dict())

        reloaded = NotebookStore(self.data_dir)
        self.assertTrue(reloaded.has_word('serendipity'))
        self.assertEqual(reloaded.get_words()[0].learning, LearningState())

    def test_add_existing_word_replaces_entry(self):
        store = NotebookStore(self.data_dir)
        store.add_word(lookup_entry('apple', pos='n'))
        store.add_word(lookup_entry('pear'))
        store.add_word(lookup_entry('Apple', pos='v'), source='Online Dictionary')

        self.assertEqual([w.word for w in store.get_words()], ['Apple', 'pear'])
        self.assertEqual(store.get_words()[0].extra['source'], 'Online Dictionary')

    def test_remove_word(self):
        store = NotebookStore(self.data_dir)
        store.add_word(lookup_entry('apple'))
        self.assertFalse(store.remove_word('banana'))
        self.assertTrue(store.remove_word('APPLE'))
        self.assertEqual(NotebookStore(self.data_dir).get_words(), [])

    def test_old_entries_get_learning_state(self):
        self.write_json('notebook.json', {'words': [
            {'word': 'old', 'pronunciation': '', 'definitions': [], 'source': 'ECDICT'}
        ]})
        store = NotebookStore(self.data_dir)

        self.assertTrue(store.get_words()[0].learning.is_new)
        saved = self.read_json('notebook.json')['words'][0]
        self.assertEqual(saved['learning']['level'], 0)
        self.assertEqual(saved['source'], 'ECDICT')

    def test_corrupt_file_is_ignored(self):
        with open(os.path.join(self.data_dir, 'notebook.json'), 'w') as f:
            f.write('{not json')
        with self.assertLogs('backends.notebook_store', level='ERROR'):
            store = NotebookStore(self.data_dir)
        self.assertEqual(store.get_words(), [])

    def test_update_learning_state(self):
        store = NotebookStore(self.data_dir)
        store.add_word(lookup_entry('apple'))
        state = calculate_next_review(LearningState(), 3, NOW)

        self.assertTrue(store.update_learning_state('apple', state))
        self.assertEqual(NotebookStore(self.data_dir).get_words()[0].learning, state)

    def test_update_unknown_word(self):
        store = NotebookStore(self.data_dir)
        with self.assertLogs('backends.notebook_store', level='WARNING'):
            self.assertFalse(store.update_learning_state('ghost', LearningState()))

    def test_failed_save_keeps_previous_state(self):
        store = NotebookStore(self.data_dir)
        store.add_word(lookup_entry('apple'))
        with patch.object(store, 'save', return_value=False):
            self.assertFalse(store.update_learning_state('apple', calculate_next_review(LearningState(), 4, NOW)))
        self.assertEqual(store.get_words()[0].learning, LearningState())
        self.assertEqual(NotebookStore(self.data_dir).get_words()[0].learning, LearningState())

    def test_words_for_learning_and_stats(self):
        store = NotebookStore(self.data_dir)
        for word in ('a', 'b', 'c'):
            store.add_word(lookup_entry(word))
        due = calculate_next_review(LearningState(), 3, NOW - timedelta(days=2))
        store.update_learning_state('c', due)

        queue = store.get_words_for_learning(max_new_words=1, now=NOW)
        self.assertEqual([w.word for w in queue], ['c', 'a'])

        stats = store.get_learning_stats(now=NOW)
        self.assertEqual(stats['total'], 3)
        self.assertEqual(stats['new_available'], 2)
        self.assertEqual(stats['due_today'], 1)
        self.assertEqual(stats['by_level'], [2, 0, 1, 0, 0, 0])


# ============================================================================
# CategoryStore
# ============================================================================

class FakeEcdict:

    def __init__(self, rows):
        self.rows = rows

    def entries(self):
        return self.rows


CATEGORY_ROWS = [
    {'word': 'zebra', 'phonetic': 'ˈziːbrə', 'translation': 'n. 斑马', 'collins': '2', 'oxford': '1', 'tag': 'zk gk cet4'},
    {'word': 'Abandon', 'phonetic': '', 'translation': 'vt. 放弃\\nn. 放任', 'collins': '', 'oxford': '', 'tag': 'cet4 cet6'},
    {'word': 'quixotic', 'phonetic': '', 'translation': 'a. 不切实际的', 'collins': '', 'oxford': '', 'tag': 'gre'},
    {'word': '', 'phonetic': '', 'translation': '', 'collins': '', 'oxford': '', 'tag': 'cet4'},
]


class TestCategoryStore(TempDirTestCase):

    def test_invalid_category(self):
        with self.assertRaises(ValueError):
            CategoryStore('toefl', self.data_dir)

    def test_not_extracted(self):
        store = CategoryStore('cet4', self.data_dir)
        self.assertEqual(store.display_name, 'CET-4')
        self.assertFalse(store.is_extracted())
        self.assertIsNone(store.get_word_list())
        self.assertEqual(store.get_word_count(), 0)
        self.assertEqual(store.list_words(), [])
        self.assertEqual(store.get_estimated_count(), 3849)
        self.assertEqual(store.get_learning_stats()['total'], 0)

    def test_extract(self):
        store = CategoryStore('cet4', self.data_dir)
        self.assertEqual(store.extract(FakeEcdict(CATEGORY_ROWS)), 2)

        words = store.get_word_list()
        self.assertEqual([w['word'] for w in words], ['Abandon', 'zebra'])
        self.assertEqual(words[0]['definitions'], [
            {'part_of_speech': 'vt', 'meaning_zh': '放弃'},
            {'part_of_speech': 'n', 'meaning_zh': '放任'}
        ])
        self.assertEqual(words[1]['pronunciation'], '/ˈziːbrə/')
        self.assertEqual(words[1]['collins'], 2)
        self.assertTrue(words[1]['oxford'])
        self.assertEqual(CategoryStore('cet6', self.data_dir).extract(FakeEcdict(CATEGORY_ROWS)), 1)

    def test_extract_reports_progress(self):
        store = CategoryStore('cet4', self.data_dir)
        on_progress = MagicMock()
        with patch('backends.category_store.PROGRESS_REPORT_EVERY', 2):
            store.extract(FakeEcdict(CATEGORY_ROWS), on_progress)
        self.assertEqual(on_progress.call_args_list, [call(2, 4), call(4, 4)])

    def test_progress_round_trip(self):
        store = CategoryStore('cet4', self.data_dir)
        store.extract(FakeEcdict(CATEGORY_ROWS))
        state = calculate_next_review(LearningState(), 4, NOW)

        self.assertTrue(store.update_learning_state('Abandon', state))
        progress = self.read_json('cet4-progress.json')
        self.assertIn('abandon', progress['words'])
        self.assertIsNotNone(progress['last_updated'])

        words = store.list_words()
        self.assertEqual(words[0].learning, state)
        self.assertTrue(words[1].learning.is_new)
        self.assertEqual(store.get_word_learning_state('ABANDON'), state)

    def test_words_for_learning(self):
        store = CategoryStore('cet4', self.data_dir)
        store.extract(FakeEcdict(CATEGORY_ROWS))
        store.update_learning_state('abandon', calculate_next_review(LearningState(), 3, NOW))

        queue = store.get_words_for_learning(now=NOW)
        self.assertEqual([w.word for w in queue], ['zebra'])
        stats = store.get_learning_stats(now=NOW + timedelta(days=1))
        self.assertEqual(stats['due_today'], 1)
        self.assertEqual(stats['new_available'], 1)

    def test_corrupt_progress_file(self):
        store = CategoryStore('cet4', self.data_dir)
        with open(store.progress_path, 'w') as f:
            f.write('[1, 2')
        with self.assertLogs('backends.category_store', level='ERROR'):
            self.assertEqual(store.get_progress(), {'words': {}, 'last_updated': None})

    def test_update_failure_returns_false(self):
        store = CategoryStore('cet4', self.data_dir)
        with patch.object(store, 'save_progress', side_effect=OSError('read-only')):
            with self.assertLogs('backends.category_store', level='ERROR'):
                self.assertFalse(store.update_learning_state('zebra', LearningState()))

    def test_unreadable_progress_is_not_overwritten(self):
        store = CategoryStore('cet4', self.data_dir)
        store.extract(FakeEcdict(CATEGORY_ROWS))
        store.update_learning_state('abandon', calculate_next_review(LearningState(), 3, NOW))
        with open(store.progress_path, 'r', encoding='utf-8') as f:
            text = f.read()
        truncated = text[:len(text) // 2]
        with open(store.progress_path, 'w', encoding='utf-8') as f:
            f.write(truncated)

        with self.assertLogs('backends.category_store', level='ERROR'):
            saved = store.update_learning_state('zebra', calculate_next_review(LearningState(), 4, NOW))
        self.assertFalse(saved)
        with open(store.progress_path, 'r', encoding='utf-8') as f:
            self.assertEqual(f.read(), truncated)

    def test_malformed_progress_is_not_overwritten(self):
        store = CategoryStore('cet4', self.data_dir)
        self.write_json('cet4-progress.json', {'words': ['abandon']})
        with self.assertLogs('backends.category_store', level='ERROR'):
            self.assertFalse(store.update_learning_state('zebra', LearningState()))
        self.assertEqual(self.read_json('cet4-progress.json'), {'words': ['abandon']})

    def test_failed_write_keeps_previous_progress(self):
        store = CategoryStore('cet4', self.data_dir)
        store.extract(FakeEcdict(CATEGORY_ROWS))
        first = calculate_next_review(LearningState(), 3, NOW)
        store.update_learning_state('abandon', first)

        with patch('backends.json_files.os.replace', side_effect=OSError('disk full')):
            with self.assertLogs('backends.category_store', level='ERROR'):
                self.assertFalse(store.update_learning_state('zebra', LearningState()))

        self.assertEqual(list(self.read_json('cet4-progress.json')['words']), ['abandon'])
        self.assertEqual(store.get_word_learning_state('abandon'), first)
        self.assertEqual([n for n in os.listdir(self.data_dir) if n.endswith('.tmp')], [])

    def test_corrupt_word_list(self):
        with open(os.path.join(self.data_dir, 'cet4.json'), 'w', encoding='utf-8') as f:
            f.write('[{"word": "aban')
        store = CategoryStore('cet4', self.data_dir)
        with self.assertLogs('backends.category_store', level='ERROR'):
            stats = store.get_learning_stats(now=NOW)
        self.assertEqual(stats['total'], 0)
        with self.assertLogs('backends.category_store', level='ERROR'):
            self.assertIsNone(store.get_word_list())

    def test_malformed_word_list_entries_are_skipped(self):
        self.write_json('cet4.json', [{'word': 'able', 'definitions': []}, 'junk', {'pronunciation': '/x/'}])
        store = CategoryStore('cet4', self.data_dir)
        with self.assertLogs('backends.category_store', level='WARNING'):
            words = store.list_words()
        self.assertEqual([w.word for w in words], ['able'])


# ============================================================================
# EcdictDictionary
# ============================================================================

class TestEcdictDictionary(TempDirTestCase):

    def setUp(self):
        super().setUp()
        self.csv_path = os.path.join(self.data_dir, 'ecdict.csv')
        with open(self.csv_path, 'w', encoding='utf-8', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=ECDICT_FIELDS)
            writer.writeheader()
            writer.writerow({
                'word': 'Abandon', 'phonetic': "ə'bændən",
                'definition': 'v. leave behind\\nn. freedom from constraint',
                'translation': 'vt. 放弃\\nn. 放任', 'pos': '', 'collins': '4', 'oxford': '1',
                'tag': 'cet4 ky'
            })
            writer.writerow({
                'word': 'hello', 'phonetic': '', 'definition': 'n. a greeting',
                'translation': '', 'pos': '', 'collins': '', 'oxford': '', 'tag': ''
            })

    def test_lookup(self):
        entry = EcdictDictionary(self.csv_path).lookup('ABANDON')
        self.assertEqual(entry['word'], 'Abandon')
        self.assertEqual(entry['pronunciation'], "/ə'bændən/")
        self.assertEqual(entry['definitions'], [
            {'part_of_speech': 'v', 'meaning': 'leave behind', 'meaning_zh': '放弃', 'examples': []},
            {'part_of_speech': 'n', 'meaning': 'freedom from constraint', 'meaning_zh': '放任', 'examples': []}
        ])
        self.assertEqual(entry['tags'], ['CET-4', '考研'])
        self.assertEqual(entry['collins'], 4)
        self.assertTrue(entry['oxford'])
        self.assertEqual(entry['sources'], ['ECDICT'])

    def test_definitions_without_chinese_are_dropped(self):
        entry = EcdictDictionary(self.csv_path).lookup('hello')
        self.assertEqual(entry['definitions'], [])

    def test_unknown_word(self):
        self.assertIsNone(EcdictDictionary(self.csv_path).lookup('xyzzy'))

    def test_entries(self):
        self.assertEqual([row['word'] for row in EcdictDictionary(self.csv_path).entries()],
                         ['Abandon', 'hello'])

    def test_missing_file(self):
        ecdict = EcdictDictionary(os.path.join(self.data_dir, 'missing.csv'))
        self.assertFalse(ecdict.available)
        with self.assertLogs('backends.ecdict', level='WARNING'):
            self.assertIsNone(ecdict.lookup('abandon'))
        self.assertEqual(ecdict.entries(), [])


# ============================================================================
# Settings
# ============================================================================

class TestLoadConfig(TempDirTestCase):

    def test_defaults(self):
        config = load_config(os.path.join(self.data_dir, 'none.json'), environ={})
        self.assertEqual(config['max_new_words'], DEFAULTS['max_new_words'])
        self.assertIsNone(config['ecdict_path'])
        self.assertIsNone(config['wordnik_api_key'])
        self.assertFalse(config['data_dir'].startswith('~'))

    def test_file_then_environment(self):
        path = self.write_json('config.json', {
            'max_new_words': '5',
            'wordnik_api_key': 'from-file',
            'ecdict_path': '~/ecdict.csv',
            'unrelated': True
        })
        config = load_config(path, environ={'WORDNIK_API_KEY': 'from-env', 'WORDLEARNER_DATA_DIR': '/srv/words'})

        self.assertEqual(config['max_new_words'], 5)
        self.assertEqual(config['wordnik_api_key'], 'from-env')
        self.assertEqual(config['data_dir'], '/srv/words')
        self.assertEqual(config['ecdict_path'], os.path.expanduser('~/ecdict.csv'))
        self.assertNotIn('unrelated', config)

    def test_unreadable_file(self):
        path = os.path.join(self.data_dir, 'config.json')
        with open(path, 'w') as f:
            f.write('max_new_words = 5')
        with self.assertLogs('backends.settings', level='WARNING'):
            config = load_config(path, environ={})
        self.assertEqual(config['max_new_words'], DEFAULTS['max_new_words'])

    def test_non_numeric_values_fall_back_to_defaults(self):
        path = self.write_json('config.json', {'max_new_words': 'lots', 'review_pause_seconds': None})
        with self.assertLogs('backends.settings', level='WARNING') as logs:
            config = load_config(path, environ={})
        self.assertEqual(config['max_new_words'], DEFAULTS['max_new_words'])
        self.assertEqual(config['review_pause_seconds'], DEFAULTS['review_pause_seconds'])
        self.assertEqual(len(logs.records), 2)


# ============================================================================
# Online clients
# ============================================================================

FREE_DICT_RESPONSE = [{
    'word': 'hello',
    'phonetic': '/həˈləʊ/',
    'phonetics': [
        {'text': '/həˈləʊ/', 'audio': 'https://example.org/hello-uk.mp3'},
        {'text': '/həˈloʊ/', 'audio': 'https://example.org/hello-us.mp3'}
    ],
    'meanings': [
        {'partOfSpeech': 'noun', 'definitions': [
            {'definition': 'A greeting.', 'example': 'She said hello.'},
            {'definition': 'An utterance of hello.'},
            {'definition': 'A third sense.', 'example': 'Never shown.'}
        ]},
        {'partOfSpeech': 'verb', 'definitions': [
            {'definition': 'To greet.', 'example': 'Hello them for me.'}
        ]}
    ]
}]


class TestFreeDictionaryClient(unittest.TestCase):

    def setUp(self):
        self.session = MagicMock()
        self.client = FreeDictionaryClient(session=self.session)

    def test_lookup(self):
        self.session.get.return_value = json_response(FREE_DICT_RESPONSE)
        entry = self.client.lookup('hello')

        self.assertEqual(self.session.get.call_args[0][0], 'https://api.dictionaryapi.dev/api/v2/entries/en/hello')
        self.assertEqual(entry['pronunciation'], '/həˈloʊ/')
        self.assertEqual(entry['audio_url'], 'https://example.org/hello-uk.mp3')
        self.assertEqual(entry['sources'], ['Online Dictionary'])
        self.assertEqual([d['part_of_speech'] for d in entry['definitions']], ['noun', 'noun', 'verb'])
        self.assertEqual(entry['definitions'][0]['examples'], [{'en': 'She said hello.', 'zh': ''}])
        self.assertEqual(entry['definitions'][1]['examples'], [])

    def test_not_found(self):
        self.session.get.return_value = json_response({'title': 'No Definitions Found'}, status_code=404)
        self.assertIsNone(self.client.lookup('xyzzy'))

    def test_network_error(self):
        self.session.get.side_effect = requests.ConnectionError('offline')
        with self.assertLogs('backends.api_client', level='WARNING'):
            self.assertIsNone(self.client.lookup('hello'))
        self.assertEqual(self.client.fetch_examples('hello'), [])

    def test_examples_by_part_of_speech(self):
        self.session.get.return_value = json_response(FREE_DICT_RESPONSE)
        groups = self.client.fetch_examples_by_pos('hello')
        self.assertEqual([g['part_of_speech'] for g in groups], ['noun', 'verb'])
        self.assertEqual(len(groups[0]['examples']), 2)
        self.assertEqual(len(self.client.fetch_examples('hello')), 3)

    def test_extract_examples_empty(self):
        self.assertEqual(extract_examples(None), [])
        self.assertEqual(extract_examples([{'meanings': []}]), [])


class TestWordnikClient(unittest.TestCase):

    def test_no_api_key(self):
        session = MagicMock()
        self.assertEqual(WordnikClient(None, session=session).fetch_examples('hello'), [])
        session.get.assert_not_called()

    def test_examples(self):
        session = MagicMock()
        session.get.return_value = json_response({'examples': [{'text': 'Hello there.'}, {'title': 'x'}]})
        examples = WordnikClient('key', session=session).fetch_examples('hello')

        self.assertEqual(examples, [{'en': 'Hello there.', 'zh': ''}])
        self.assertEqual(session.get.call_args[1]['params'], {'limit': 3, 'api_key': 'key'})


class TestAzureTranslator(unittest.TestCase):

    def test_no_api_key(self):
        self.assertEqual(AzureTranslator(None).translate(['a', 'b']), ['', ''])

    def test_translate(self):
        session = MagicMock()
        session.post.return_value = json_response([{'translations': [{'text': '你好', 'to': 'zh-Hans'}]}, {}])
        translator = AzureTranslator('key', region='westeurope', session=session)

        self.assertEqual(translator.translate(['hello', 'world']), ['你好', ''])
        _, kwargs = session.post.call_args
        self.assertEqual(kwargs['json'], [{'Text': 'hello'}, {'Text': 'world'}])
        self.assertEqual(kwargs['headers']['Ocp-Apim-Subscription-Region'], 'westeurope')
        self.assertEqual(kwargs['params']['to'], 'zh-Hans')

    def test_failure_gives_empty_strings(self):
        session = MagicMock()
        session.post.side_effect = requests.Timeout('slow')
        with self.assertLogs('backends.api_client', level='WARNING'):
            self.assertEqual(AzureTranslator('key', session=session).translate(['a']), [''])


# ============================================================================
# Dictionary
# ============================================================================

class TestDictionary(unittest.TestCase):

    def setUp(self):
        self.local = MagicMock()
        self.online = MagicMock()
        self.online.fetch_examples_by_pos.return_value = []
        self.fallback = MagicMock()
        self.fallback.fetch_examples.return_value = []
        self.translator = MagicMock()
        self.translator.translate.side_effect = lambda texts: [f'zh:{t}' for t in texts]
        self.dictionary = Dictionary(self.local, self.online, self.fallback, self.translator)

    def test_local_hit_is_enriched(self):
        entry = lookup_entry('run')
        entry['definitions'].append({'part_of_speech': 'n', 'meaning': 'm', 'meaning_zh': '跑', 'examples': []})
        self.local.lookup.return_value = entry
        self.online.fetch_examples_by_pos.return_value = [
            {'part_of_speech': 'verb', 'examples': [{'en': 'Run fast.', 'zh': ''}]}
        ]
        self.fallback.fetch_examples.return_value = [{'en': 'A run.', 'zh': ''}]

        result = self.dictionary.lookup('  Run ')
        self.local.lookup.assert_called_once_with('run')
        self.online.lookup.assert_not_called()
        self.assertEqual(result['definitions'][0]['examples'], [{'en': 'Run fast.', 'zh': 'zh:Run fast.'}])
        self.assertEqual(result['definitions'][1]['examples'], [{'en': 'A run.', 'zh': 'zh:A run.'}])
        self.assertEqual(self.dictionary.get_history(), ['Run'])

    def test_enough_online_examples_skip_fallback(self):
        self.local.lookup.return_value = lookup_entry('run')
        self.online.fetch_examples_by_pos.return_value = [
            {'part_of_speech': 'verb', 'examples': [{'en': str(i), 'zh': ''} for i in range(3)]}
        ]
        self.dictionary.lookup('run')
        self.fallback.fetch_examples.assert_not_called()

    def test_online_fallback(self):
        self.local.lookup.return_value = None
        self.online.lookup.return_value = lookup_entry('selfie')
        self.assertEqual(self.dictionary.lookup('selfie')['word'], 'selfie')
        self.assertEqual(self.dictionary.get_history(), ['selfie'])

    def test_not_found(self):
        self.local.lookup.return_value = None
        self.online.lookup.return_value = None
        self.assertIsNone(self.dictionary.lookup('xyzzy'))
        self.assertIsNone(self.dictionary.lookup('   '))
        self.assertEqual(self.dictionary.get_history(), [])

    def test_history(self):
        for i in range(12):
            self.dictionary.add_to_history(f'w{i}')
        self.dictionary.add_to_history('W5')

        history = self.dictionary.get_history()
        self.assertEqual(len(history), 10)
        self.assertEqual(history[0], 'W5')
        self.assertEqual(sum(1 for w in history if w.lower() == 'w5'), 1)

    def test_enrich_word_record(self):
        record = WordRecord('run', definitions=[{'part_of_speech': 'v', 'meaning_zh': '跑'}])
        self.online.fetch_examples_by_pos.return_value = [
            {'part_of_speech': 'verb', 'examples': [{'en': 'Run.', 'zh': ''}]}
        ]
        self.dictionary.enrich_with_examples(record)
        self.assertEqual(record.get_examples(), [{'en': 'Run.', 'zh': 'zh:Run.'}])

    def test_enrich_skips_words_with_examples(self):
        examples = [{'en': str(i), 'zh': ''} for i in range(3)]
        record = WordRecord('run', definitions=[{'part_of_speech': 'v', 'examples': examples}])
        self.dictionary.enrich_with_examples(record)
        self.online.fetch_examples_by_pos.assert_not_called()


class TestMergeExamples(unittest.TestCase):

    def test_existing_examples_kept(self):
        definitions = [{'part_of_speech': 'n', 'examples': [{'en': 'keep', 'zh': ''}]}]
        merge_examples(definitions, [{'part_of_speech': 'noun', 'examples': [{'en': 'new', 'zh': ''}]}])
        self.assertEqual(definitions[0]['examples'], [{'en': 'keep', 'zh': ''}])

    def test_limits(self):
        many = [{'en': str(i), 'zh': ''} for i in range(8)]
        definitions = [{'part_of_speech': 'adj'}, {'part_of_speech': 'adv'}]
        merge_examples(definitions, [
            {'part_of_speech': 'adjective', 'examples': many},
            {'part_of_speech': 'general', 'examples': many}
        ])
        self.assertEqual(len(definitions[0]['examples']), 5)
        self.assertEqual(len(definitions[1]['examples']), 3)


if __name__ == '__main__':
    unittest.main()
