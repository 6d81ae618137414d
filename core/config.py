"""Configuration constants for wordlearner application."""

import os

# Recall grades
GRADE_FORGOT = 1
GRADE_HARD = 2
GRADE_GOOD = 3
GRADE_EASY = 4
VALID_GRADES = (GRADE_FORGOT, GRADE_HARD, GRADE_GOOD, GRADE_EASY)

# SM-2 ease factor
DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
FORGOT_EASE_PENALTY = 0.2
HARD_EASE_PENALTY = 0.15
EASY_EASE_BONUS = 0.15

# Fixed intervals for the first two successful recalls (days)
FIRST_SUCCESS_INTERVAL = 1
SECOND_SUCCESS_INTERVAL = 6

# Level thresholds, highest first: (min_interval_days, level)
LEVEL_THRESHOLDS = [
    (21, 5),  # Mastered
    (14, 4),  # Confident
    (7, 3),   # Familiar
    (1, 2),   # Reviewing
    (0, 1),   # Learning
]
LEVEL_NEW = 0
LEVEL_MASTERED = 5
LEVEL_NAMES = ['New', 'Learning', 'Reviewing', 'Familiar', 'Confident', 'Mastered']

# Session selection
DEFAULT_MAX_NEW_WORDS = 10
REVIEW_PAUSE_SECONDS = 0.8    # Pause between grade feedback and next card

# Vocabulary categories
CATEGORIES = ['cet4', 'cet6']

# Search history
SEARCH_HISTORY_SIZE = 10

# Example enrichment
MIN_EXAMPLES_BEFORE_FALLBACK = 3
MAX_EXAMPLES_PER_DEFINITION = 5

# Paths
CONFIG_FILE = os.path.expanduser('~/.config/wordlearner/config.json')
DATA_DIR = os.path.expanduser('~/.local/share/wordlearner')
