"""Vocabulary categories and ECDICT entry parsing."""

import re

from .config import CATEGORIES
from .utils import split_multiline, parse_definition_line

CATEGORY_DISPLAY_NAMES = {
    'cet4': 'CET-4',
    'cet6': 'CET-6'
}

# Rough sizes shown before a category has been extracted
ESTIMATED_WORD_COUNTS = {
    'cet4': 3849,
    'cet6': 5407
}

# ECDICT exam tag abbreviations
TAG_NAMES = {
    'zk': '中考',
    'gk': '高考',
    'cet4': 'CET-4',
    'cet6': 'CET-6',
    'ky': '考研',
    'toefl': 'TOEFL',
    'ielts': 'IELTS',
    'gre': 'GRE'
}


def validate_category(category: str) -> str:
    if category not in CATEGORIES:
        raise ValueError(f"Invalid category: {category}. Must be one of {', '.join(CATEGORIES)}")
    return category


def get_category_name(category: str) -> str:
    """Get display name for a category."""
    return CATEGORY_DISPLAY_NAMES.get(category, category.upper())


def get_estimated_count(category: str) -> int:
    return ESTIMATED_WORD_COUNTS.get(category, 0)


def parse_tags(tag_string: str | None) -> list[str]:
    """Turn 'gk cet4 ky' into readable exam names, dropping unknown tags."""
    if not tag_string:
        return []
    return [TAG_NAMES[tag] for tag in tag_string.split() if tag in TAG_NAMES]


def has_tag(entry: dict, category: str) -> bool:
    return category in (entry.get('tag') or '').split()


def normalize_part_of_speech(pos: str) -> str:
    """Group part-of-speech variants: vt/vi -> v, a/adj -> adj, etc."""
    normalized = pos.lower().replace('.', '')
    if normalized.startswith('v'):
        return 'v'
    if normalized.startswith('n'):
        return 'n'
    if normalized.startswith('adj') or normalized == 'a':
        return 'adj'
    if normalized.startswith('adv'):
        return 'adv'
    return normalized or 'other'


def parse_category_definitions(translation: str | None) -> list[dict]:
    """Parse an ECDICT translation field ("vt. xxx\\nn. yyy") for a category word list."""
    definitions = []
    for line in split_multiline(translation):
        pos, meaning = parse_definition_line(line)
        definitions.append({
            'part_of_speech': pos.replace('.', '') if pos else '?',
            'meaning_zh': meaning
        })
    return definitions


def build_category_word(entry: dict) -> dict:
    """Convert a raw ECDICT entry into a category word list item."""
    phonetic = entry.get('phonetic')
    return {
        'word': entry['word'],
        'pronunciation': f'/{phonetic}/' if phonetic else '',
        'definitions': parse_category_definitions(entry.get('translation')),
        'collins': _to_int(entry.get('collins')),
        'oxford': str(entry.get('oxford')) == '1'
    }


def build_dictionary_entry(entry: dict) -> dict | None:
    """Convert a raw ECDICT entry into a looked-up word entry.

    English and Chinese definition lines are grouped by normalized part of
    speech; groups without any Chinese meaning are dropped.
    """
    if not entry.get('definition') and not entry.get('translation'):
        return None

    grouped = {}
    for field, target in (('definition', 'meanings'), ('translation', 'meanings_zh')):
        for line in split_multiline(entry.get(field)):
            pos, meaning = parse_definition_line(line)
            key = normalize_part_of_speech(pos)
            group = grouped.setdefault(key, {'meanings': [], 'meanings_zh': []})
            group[target].append(meaning)

    definitions = []
    for pos, group in grouped.items():
        if not group['meanings_zh']:
            continue
        definitions.append({
            'part_of_speech': pos or 'unknown',
            'meaning': '; '.join(group['meanings']),
            'meaning_zh': '; '.join(group['meanings_zh']),
            'examples': []
        })

    phonetic = entry.get('phonetic')
    collins = _to_int(entry.get('collins'))
    return {
        'word': entry.get('word'),
        'pronunciation': f'/{phonetic}/' if phonetic else '',
        'definitions': definitions,
        'tags': parse_tags(entry.get('tag')),
        'collins': collins or None,
        'oxford': str(entry.get('oxford')) == '1',
        'sources': ['ECDICT']
    }


def _to_int(value) -> int:
    if value is None:
        return 0
    match = re.match(r'^\s*(\d+)', str(value))
    return int(match.group(1)) if match else 0
