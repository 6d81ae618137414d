"""Due/new word selection and learning statistics."""

from .config import DEFAULT_MAX_NEW_WORDS, LEVEL_NAMES, LEVEL_MASTERED


def select_words_for_learning(words, now, max_new_words: int = DEFAULT_MAX_NEW_WORDS) -> list:
    """Pick the queue for a drill: every due word, then up to max_new_words new ones.

    Both groups keep the order of `words`. Reviewed words that are not yet due
    are left out.
    """
    due_words = []
    new_words = []
    for word in words:
        if word.learning.is_new:
            new_words.append(word)
        elif word.learning.is_due(now):
            due_words.append(word)
    return due_words + new_words[:max(0, max_new_words)]


def empty_learning_stats() -> dict:
    return {
        'total': 0,
        'by_level': [0] * len(LEVEL_NAMES),
        'due_today': 0,
        'new_available': 0,
        'mastered': 0
    }


def compute_learning_stats(words, now) -> dict:
    """Summarize a word set: level histogram, due, new and mastered counts."""
    stats = empty_learning_stats()
    for word in words:
        learning = word.learning
        stats['total'] += 1
        stats['by_level'][learning.level] += 1
        if learning.is_new:
            stats['new_available'] += 1
        elif learning.level == LEVEL_MASTERED:
            stats['mastered'] += 1
        if learning.is_due(now):
            stats['due_today'] += 1
    return stats
