"""Entry point for wordlearner CLI."""

import argparse
import logging
import os
import sys

from backends.api_client import AzureTranslator, FreeDictionaryClient, WordnikClient
from backends.category_store import CategoryStore
from backends.dictionary import Dictionary
from backends.ecdict import EcdictDictionary
from backends.notebook_store import NotebookStore
from backends.settings import load_config
from core.config import CATEGORIES
from cli.console import ConsoleUI
from cli.repl import WordLearnerREPL


def build_repl(config: dict) -> WordLearnerREPL:
    """Wire the stores, dictionary services and console together."""
    data_dir = config['data_dir']
    ecdict = EcdictDictionary(config['ecdict_path'] or os.path.join(data_dir, 'ecdict.csv'))
    dictionary = Dictionary(
        local=ecdict,
        online=FreeDictionaryClient(),
        fallback_examples=WordnikClient(config['wordnik_api_key']),
        translator=AzureTranslator(
            config['azure_translator_key'],
            region=config['azure_translator_region'],
            endpoint=config['azure_translator_endpoint']
        )
    )
    ui = ConsoleUI(example_enricher=dictionary.enrich_with_examples)
    return WordLearnerREPL(
        ui,
        NotebookStore(data_dir),
        dictionary,
        {category: CategoryStore(category, data_dir) for category in CATEGORIES},
        ecdict=ecdict,
        max_new_words=config['max_new_words'],
        pause_seconds=config['review_pause_seconds']
    )


def main(argv=None):
    parser = argparse.ArgumentParser(description='Word Learner - English vocabulary tool')
    parser.add_argument('--config', default=None, help='Config file (default: ~/.config/wordlearner/config.json)')
    parser.add_argument('--data-dir', default=None, help='Directory for notebook and progress files')
    parser.add_argument('--ecdict', default=None, help='Path to the ECDICT CSV file')
    parser.add_argument('--max-new', type=int, default=None, help='Maximum new words per session')
    parser.add_argument('--no-pause', action='store_true', help='Do not pause between flashcards')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    config = load_config(args.config)
    if args.data_dir:
        config['data_dir'] = args.data_dir
    if args.ecdict:
        config['ecdict_path'] = args.ecdict
    if args.max_new is not None:
        config['max_new_words'] = args.max_new
    if args.no_pause:
        config['review_pause_seconds'] = 0

    repl = build_repl(config)
    try:
        repl.run()
    except KeyboardInterrupt:
        print('\nGoodbye!')
        sys.exit(0)


if __name__ == '__main__':
    main()
