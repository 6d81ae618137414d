"""Console UI for wordlearner application."""

import os
import sys

from core.config import (
    LEVEL_NAMES, GRADE_FORGOT, GRADE_HARD, GRADE_GOOD, GRADE_EASY
)
from core.interfaces import FlashcardDisplay
from core.session import FLASHCARD_FRONT, FLASHCARD_BACK
from cli.commands import COMMANDS

RESET = '\033[0m'
BOLD = '\033[1m'
DIM = '\033[2m'
RED = '\033[91m'
GREEN = '\033[92m'
YELLOW = '\033[93m'
BLUE = '\033[94m'
CYAN = '\033[96m'
WHITE = '\033[97m'
GRAY = '\033[90m'

LINE = '━' * 50
LEVEL_COLORS = [GRAY, RED, YELLOW, BLUE, CYAN, GREEN]
GRADE_COLORS = {GRADE_FORGOT: RED, GRADE_HARD: YELLOW, GRADE_GOOD: GREEN, GRADE_EASY: CYAN}
MAX_BAR_LENGTH = 20


def colors_enabled() -> bool:
    return sys.stdout.isatty() and os.environ.get('NO_COLOR') is None


class ConsoleUI(FlashcardDisplay):
    """Renders everything the REPL and flashcard drills show."""

    def __init__(self, use_colors: bool = None, example_enricher=None):
        self.use_colors = colors_enabled() if use_colors is None else use_colors
        # Called with a WordRecord before its examples are shown
        self.example_enricher = example_enricher

    def color(self, text: str, *codes: str) -> str:
        if not self.use_colors or not codes:
            return text
        return ''.join(codes) + text + RESET

    # ---- Word lookup ----

    def print_welcome(self):
        print()
        print(self.color('Word Learner - English Vocabulary Tool', BOLD, CYAN))
        print(self.color('A tool for Chinese speakers to learn English', DIM))
        print()

    def print_word_details(self, entry: dict):
        print()
        print(self.color(LINE, CYAN))
        print(self.color(f"{entry['word']}  ", BOLD, WHITE) + self.color(entry.get('pronunciation') or '', YELLOW))
        if entry.get('tags'):
            print(' '.join(self.color(f'[{t}]', BLUE) for t in entry['tags']))
        print(self.color(LINE, CYAN))
        print()

        for definition in entry.get('definitions', []):
            self._print_definition(definition)
            examples = definition.get('examples') or []
            if examples:
                print(self.color('Examples:', DIM))
                self._print_examples(examples)
            print()

        if entry.get('sources'):
            print(self.color(f"Source: {', '.join(entry['sources'])}", DIM))
        print()

    def _print_definition(self, definition: dict):
        meaning = definition.get('meaning_zh') or definition.get('meaning') or ''
        print(self.color(f"[{definition.get('part_of_speech', '?')}] ", GREEN) + self.color(meaning, WHITE))
        english = definition.get('meaning')
        if definition.get('meaning_zh') and english and english != definition['meaning_zh']:
            print(self.color(f'  {english}', GRAY))

    def _print_examples(self, examples: list):
        for example in examples:
            if isinstance(example, str):
                print(self.color(f'  • {example}', WHITE))
                continue
            print(self.color(f"  • {example.get('en', '')}", WHITE))
            if example.get('zh'):
                print(self.color(f"    {example['zh']}", GRAY))

    def print_word_actions(self, in_notebook: bool):
        if in_notebook:
            print(self.color('[R]emove from notebook', CYAN))
        else:
            print(self.color('[S]ave to notebook', CYAN))

    def print_not_found(self, word: str):
        print(self.color(f'\n"{word}" not found.\n', YELLOW))

    def print_history(self, history: list):
        if not history:
            print(self.color('No searches yet.', DIM))
            return
        print()
        print(self.color('Recent searches:', DIM))
        for i, word in enumerate(history[:5], start=1):
            print(self.color(f'  {i}. {word}', GRAY))
        print()

    # ---- Notebook ----

    def print_saved(self, word: str):
        print(self.color(f'✓ Saved "{word}" to notebook', GREEN))

    def print_removed(self, word: str):
        print(self.color(f'Removed "{word}" from notebook', GREEN))

    def print_notebook_list(self, words: list) -> bool:
        """List saved words. Returns False if the notebook is empty."""
        if not words:
            print(self.color('\nYour notebook is empty. Search and save some words!\n', YELLOW))
            return False
        print(self.color(f'\n━━━ Notebook ({len(words)} words) ━━━', CYAN))
        for i, record in enumerate(words, start=1):
            first = record.definitions[0] if record.definitions else {}
            preview = (first.get('meaning_zh') or first.get('meaning') or '')[:40]
            print(self.color(f'  {i}. {record.word}', WHITE) + self.color(f' - {preview}...', DIM))
        print()
        return True

    def print_selection_prompt(self, count: int):
        print(self.color(f'Select [1-{count}]', CYAN))

    # ---- Progress ----

    def print_learning_stats(self, stats: dict, title: str = 'Learning Statistics'):
        print()
        print(self.color(f'━━━ {title} ━━━', CYAN))
        print(self.color(f"Total words: {stats['total']}", WHITE))
        print()
        max_count = max(max(stats['by_level']), 1)
        for level, count in enumerate(stats['by_level']):
            bar = '█' * int(count / max_count * MAX_BAR_LENGTH + 0.5)
            print(self.color(f'  {LEVEL_NAMES[level]:<10} {bar} {count}', LEVEL_COLORS[level]))
        print()

    def print_learn_prompt(self, stats: dict, words_for_session: int):
        print(self.color(f"Due for review today: {stats['due_today']}", WHITE))
        print()
        if words_for_session == 0:
            print(self.color('All caught up! No words due for review.', GREEN))
        else:
            print(self.color('Ready to learn:', WHITE))
            if stats['due_today'] > 0:
                print(self.color(f"  {stats['due_today']} words due for review", DIM))
            if stats['new_available'] > 0:
                print(self.color(f"  {stats['new_available']} new words available", DIM))
        print()
        print(self.color('[S]tart session  [B]ack', CYAN))

    def print_no_words_to_learn(self):
        print()
        print(self.color('No words to learn yet!', YELLOW))
        print(self.color('Search for words and save them to your notebook first.', DIM))
        print()

    def print_progress_summary(self, notebook_stats: dict, category_stats: dict):
        """One line per word source: notebook first, then extracted categories."""
        print(self.color('━━━ Progress ━━━', CYAN))
        rows = [('Notebook', notebook_stats)] + list(category_stats.items())
        for name, stats in rows:
            if stats['total'] == 0:
                print(self.color(f'  {name:<10} no words yet', DIM))
                continue
            print(self.color(f'  {name:<10}', WHITE)
                  + self.color(f" {stats['total']} words", WHITE)
                  + self.color(f" | {stats['due_today']} due", YELLOW)
                  + self.color(f" | {stats['new_available']} new", GRAY)
                  + self.color(f" | {stats['mastered']} mastered", GREEN))
        print()

    # ---- Categories ----

    def print_extract_prompt(self, name: str, estimated_count: int):
        print()
        print(self.color(f'{name} word list has not been extracted yet.', YELLOW))
        print(self.color(f'About {estimated_count} words will be extracted from ECDICT.', DIM))
        print(self.color('[Y]es to extract  [N]o to cancel', CYAN))

    def print_extract_progress(self, processed: int, total: int):
        percent = int(processed / total * 100) if total else 100
        print(self.color(f'  {processed}/{total} entries scanned ({percent}%)', DIM))

    def print_extract_complete(self, name: str, count: int):
        print(self.color(f'✓ Extracted {count} {name} words', GREEN))

    def print_category_menu(self, name: str, stats: dict):
        self.print_learning_stats(stats, title=f'{name} Progress')
        print(self.color(f"Due for review: {stats['due_today']}  New available: {stats['new_available']}", WHITE))
        print()
        print(self.color('[S]tart session  [B]ack', CYAN))

    # ---- General ----

    def print_help(self):
        print()
        print(self.color('━━━ Commands ━━━', CYAN))
        for name, config in COMMANDS.items():
            print(self.color(f"  {config['usage']:<30}", WHITE) + self.color(f"- {config['description']}", DIM))
        print()
        print(self.color('Tip: Type any word directly to search (no command needed)', DIM))
        print()

    def print_info(self, message: str):
        print(self.color(message, DIM))

    def print_goodbye(self):
        print(self.color('\nGoodbye! Happy learning!\n', DIM))

    # ---- FlashcardDisplay ----

    def show_front(self, word, current: int, total: int) -> None:
        print()
        print(self.color(f'━━━ Word {current} of {total} ━━━', CYAN))
        print()
        print(self.color(f'  {word.word}', BOLD, WHITE))
        print(self.color(f'  {word.pronunciation}', YELLOW))
        print()
        print(self.color('Press [Enter] to reveal answer', DIM))

    def show_back(self, word, current: int, total: int) -> None:
        print()
        print(self.color(f'━━━ Word {current} of {total} ━━━', CYAN))
        print(self.color(f'{word.word}  ', BOLD, WHITE) + self.color(word.pronunciation, YELLOW))
        print(self.color('─' * 40, CYAN))
        for definition in word.definitions:
            self._print_definition(definition)
        print()
        self.show_grade_prompt()

    def show_examples(self, word) -> None:
        if self.example_enricher is not None:
            self.example_enricher(word)
        examples = word.get_examples()
        print()
        if not examples:
            print(self.color('No examples available for this word.', DIM))
            return
        print(self.color('Examples:', DIM))
        self._print_examples(examples)

    def show_grade_prompt(self) -> None:
        print(self.color('How well did you remember?', WHITE))
        print(self.color('[1] Forgot', RED) + '  ' + self.color('[2] Hard', YELLOW) + '  '
              + self.color('[3] Good', GREEN) + '  ' + self.color('[4] Easy', CYAN)
              + '  ' + self.color('[E]xamples', DIM))

    def show_grade_feedback(self, feedback: str, grade: int) -> None:
        print()
        print(self.color(feedback, GRADE_COLORS.get(grade, WHITE)))

    def show_session_complete(self, stats: dict) -> None:
        print()
        print(self.color('━━━ Session Complete ━━━', CYAN))
        print(self.color(f"Reviewed: {stats['reviewed']} words", WHITE))
        print(self.color(f"Correct: {stats['correct']} ({stats['percentage']}%)", GREEN))
        if stats['need_practice'] > 0:
            print(self.color(f"Need practice: {stats['need_practice']}", YELLOW))
        print()
        print(self.color('Press Enter to continue', DIM))

    def show_all_caught_up(self) -> None:
        print(self.color('\nAll caught up! Come back later.\n', GREEN))

    def show_input_hint(self, state: str) -> None:
        if state == FLASHCARD_FRONT:
            print(self.color('Press [Enter] to reveal', DIM))
        elif state == FLASHCARD_BACK:
            print(self.color('Press [E] for examples, or 1-4 to grade your recall', DIM))

    def show_error(self, message: str) -> None:
        print(self.color(f'Error: {message}', RED))
