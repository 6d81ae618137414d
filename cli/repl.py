"""Interactive REPL for wordlearner."""

import logging
import os

from core.config import CATEGORIES
from core.session import FlashcardDrill, FINISHED
from cli.commands import parse_input

logger = logging.getLogger(__name__)

# Pending selection states
NONE = None
WORD_ACTIONS = 'word_actions'
NOTEBOOK_LIST = 'notebook_list'
LEARN_MENU = 'learn_menu'
CATEGORY_EXTRACT_CONFIRM = 'category_extract_confirm'
CATEGORY_MENU = 'category_menu'
DRILL = 'drill'


class WordLearnerREPL:
    """Reads one line at a time and routes it to a command or the pending selection."""

    def __init__(self, ui, notebook, dictionary, category_stores: dict, ecdict=None,
                 max_new_words: int = 10, pause_seconds: float = 0.8):
        self.ui = ui
        self.notebook = notebook
        self.dictionary = dictionary
        self.category_stores = category_stores
        self.ecdict = ecdict
        self.max_new_words = max_new_words
        self.pause_seconds = pause_seconds
        self.pending_selection = NONE
        self.selection_data = None
        self.drill = None
        self.running = True

    def run(self) -> None:
        """Run the main input loop until /quit or end of input."""
        self.ui.print_welcome()
        self.handle_progress()

        while self.running:
            try:
                line = input('> ')
            except EOFError:
                break
            except KeyboardInterrupt:
                if self.pending_selection:
                    self.clear_selection()
                    print()
                    continue
                break
            self.handle_input(line)

        self.clear_selection()
        self.ui.print_goodbye()

    def handle_input(self, line: str) -> bool:
        """Process one line. Returns False once the user has asked to quit."""
        if self.pending_selection:
            self.handle_selection(line)
            return self.running

        parsed = parse_input(line)
        if parsed['type'] == 'command':
            self.execute_command(parsed['command'], parsed['args'])
        elif parsed['type'] == 'search':
            self.handle_search(parsed['word'])
        elif parsed['type'] == 'unknown_command':
            self.ui.show_error(f"Unknown command: /{parsed['input']}. Type /help for available commands.")
        return self.running

    def execute_command(self, command: str, args: list) -> None:
        if command == 'search':
            if not args:
                self.ui.show_error('Usage: /search <word>')
            else:
                self.handle_search(' '.join(args))
        elif command == 'notebook':
            self.handle_notebook()
        elif command == 'learn':
            self.handle_learn()
        elif command in CATEGORIES:
            self.handle_category(command)
        elif command == 'progress':
            self.handle_progress()
        elif command == 'history':
            self.ui.print_history(self.dictionary.get_history())
        elif command == 'clear':
            os.system('cls' if os.name == 'nt' else 'clear')
        elif command == 'help':
            self.ui.print_help()
        elif command == 'quit':
            self.running = False

    def handle_selection(self, line: str) -> None:
        trimmed = line.strip().lower()

        # A slash command always breaks out of the current selection
        if trimmed.startswith('/'):
            self.clear_selection()
            self.handle_input(line)
            return

        handlers = {
            WORD_ACTIONS: self.handle_word_action_selection,
            NOTEBOOK_LIST: self.handle_notebook_list_selection,
            LEARN_MENU: self.handle_learn_menu_selection,
            CATEGORY_EXTRACT_CONFIRM: self.handle_extract_confirm,
            CATEGORY_MENU: self.handle_category_menu_selection,
            DRILL: self.handle_drill_input,
        }
        handlers[self.pending_selection](trimmed)

    def clear_selection(self) -> None:
        if self.drill is not None:
            self.drill.abandon()
            self.drill = None
        self.pending_selection = NONE
        self.selection_data = None

    # ---- Search and notebook ----

    def handle_search(self, word: str) -> None:
        self.ui.print_info(f'\nSearching for "{word}"...')
        try:
            entry = self.dictionary.lookup(word)
        except Exception as e:
            logger.error(f"Lookup of '{word}' failed: {type(e).__name__}: {e}")
            self.ui.show_error(f'Search failed: {e}')
            return
        if entry:
            self.show_word_with_actions(entry)
        else:
            self.ui.print_not_found(word)

    def show_word_with_actions(self, entry: dict) -> None:
        self.ui.print_word_details(entry)
        self.ui.print_word_actions(self.notebook.has_word(entry['word']))
        self.pending_selection = WORD_ACTIONS
        self.selection_data = {'word': entry}

    def handle_word_action_selection(self, text: str) -> None:
        entry = self.selection_data['word']
        word = entry['word']

        if text == 's':
            if self.notebook.has_word(word):
                self.ui.print_info(f'"{word}" is already in notebook')
            elif self.notebook.add_word(entry):
                self.ui.print_saved(word)
            else:
                self.ui.show_error('Failed to save word')
            self.clear_selection()
        elif text == 'r':
            if not self.notebook.has_word(word):
                self.ui.print_info(f'"{word}" is not in notebook')
            elif self.notebook.remove_word(word):
                self.ui.print_removed(word)
            else:
                self.ui.show_error('Failed to remove word')
            self.clear_selection()
        else:
            # Anything else is treated as a new search
            self.clear_selection()
            if text:
                self.handle_search(text)

    def handle_notebook(self) -> None:
        words = self.notebook.get_words()
        if not self.ui.print_notebook_list(words):
            return
        self.ui.print_selection_prompt(len(words))
        self.pending_selection = NOTEBOOK_LIST
        self.selection_data = {'words': list(words)}

    def handle_notebook_list_selection(self, text: str) -> None:
        words = self.selection_data['words']
        index = int(text) - 1 if text.isdigit() else -1
        if 0 <= index < len(words):
            self.clear_selection()
            self.show_word_with_actions(words[index].to_dict(include_learning=False))
        else:
            self.ui.show_error(f'Enter 1-{len(words)}')

    # ---- Learning ----

    def handle_learn(self) -> None:
        if not self.notebook.get_words():
            self.ui.print_no_words_to_learn()
            return
        stats = self.notebook.get_learning_stats()
        ready = self.notebook.get_words_for_learning(self.max_new_words)
        self.ui.print_learning_stats(stats)
        self.ui.print_learn_prompt(stats, len(ready))
        self.pending_selection = LEARN_MENU
        self.selection_data = {'source': self.notebook}

    def handle_learn_menu_selection(self, text: str) -> None:
        self._handle_start_menu(text)

    def handle_category(self, category: str) -> None:
        store = self.category_stores[category]
        if store.get_word_list() is not None:
            self.show_category_menu(category)
            return
        self.ui.print_extract_prompt(store.display_name, store.get_estimated_count())
        self.pending_selection = CATEGORY_EXTRACT_CONFIRM
        self.selection_data = {'category': category}

    def handle_extract_confirm(self, text: str) -> None:
        category = self.selection_data['category']
        store = self.category_stores[category]

        if text in ('y', 'yes'):
            if self.ecdict is None or not self.ecdict.available:
                self.ui.show_error('ECDICT data not found. Set ecdict_path in the config file.')
                self.clear_selection()
                return
            self.ui.print_info('\nExtracting words from ECDICT...')
            try:
                count = store.extract(self.ecdict, self.ui.print_extract_progress)
            except OSError as e:
                logger.error(f"Extraction of {category} failed: {e}")
                self.ui.show_error(f'Extraction failed: {e}')
                self.clear_selection()
                return
            self.ui.print_extract_complete(store.display_name, count)
            self.show_category_menu(category)
        elif text in ('n', 'no'):
            self.clear_selection()
        else:
            self.ui.print_info('Press [Y] to extract or [N] to cancel')

    def show_category_menu(self, category: str) -> None:
        store = self.category_stores[category]
        self.ui.print_category_menu(store.display_name, store.get_learning_stats())
        self.pending_selection = CATEGORY_MENU
        self.selection_data = {'source': store}

    def handle_category_menu_selection(self, text: str) -> None:
        self._handle_start_menu(text)

    def _handle_start_menu(self, text: str) -> None:
        if text == 's':
            self.start_drill(self.selection_data['source'])
        elif text == 'b':
            self.clear_selection()
        else:
            self.ui.print_info('Press [S] to start or [B] to go back')

    def start_drill(self, source) -> None:
        drill = FlashcardDrill(source, self.ui, max_new_words=self.max_new_words,
                               pause_seconds=self.pause_seconds)
        self.clear_selection()
        if drill.start():
            self.drill = drill
            self.pending_selection = DRILL

    def handle_drill_input(self, text: str) -> None:
        if self.drill.handle_input(text) == FINISHED:
            self.drill = None
            self.clear_selection()

    def handle_progress(self) -> None:
        category_stats = {
            store.display_name: store.get_learning_stats()
            for store in self.category_stores.values() if store.is_extracted()
        }
        self.ui.print_progress_summary(self.notebook.get_learning_stats(), category_stats)
