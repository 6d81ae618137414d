#!/usr/bin/env python3
"""Extract the CET word lists from ECDICT ahead of time."""

import argparse
import os
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from backends.category_store import CategoryStore
from backends.ecdict import EcdictDictionary
from backends.settings import load_config
from core.config import CATEGORIES


def main():
    parser = argparse.ArgumentParser(description='Extract CET word lists from ECDICT')
    parser.add_argument('categories', nargs='*', default=CATEGORIES, help='Categories to extract')
    parser.add_argument('--force', action='store_true', help='Re-extract lists that already exist')
    args = parser.parse_args()

    config = load_config()
    ecdict = EcdictDictionary(config['ecdict_path'] or os.path.join(config['data_dir'], 'ecdict.csv'))
    if not ecdict.available:
        print(f"Error: ECDICT not found at {ecdict.csv_path}")
        return 1

    for category in args.categories:
        store = CategoryStore(category, config['data_dir'])
        if store.is_extracted() and not args.force:
            print(f"{store.display_name}: already extracted ({store.get_word_count()} words)")
            continue
        count = store.extract(ecdict)
        print(f"{store.display_name}: extracted {count} words")

    return 0


if __name__ == '__main__':
    sys.exit(main())
