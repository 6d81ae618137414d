"""Abstract base classes for dependency injection."""

from abc import ABC, abstractmethod


class WordSource(ABC):
    """Supplies words for a drill and receives their updated learning state."""

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Human-readable name of the source (e.g. 'Notebook', 'CET-4')."""
        pass

    @abstractmethod
    def list_words(self) -> list:
        """List all WordRecords, each with a learning state attached."""
        pass

    @abstractmethod
    def update_learning_state(self, word_key: str, state) -> bool:
        """Persist a new learning state for a word. Returns True on success."""
        pass


class FlashcardDisplay(ABC):
    """Output surface for a flashcard drill."""

    @abstractmethod
    def show_front(self, word, current: int, total: int) -> None:
        pass

    @abstractmethod
    def show_back(self, word, current: int, total: int) -> None:
        pass

    @abstractmethod
    def show_examples(self, word) -> None:
        pass

    @abstractmethod
    def show_grade_prompt(self) -> None:
        pass

    @abstractmethod
    def show_grade_feedback(self, feedback: str, grade: int) -> None:
        pass

    @abstractmethod
    def show_session_complete(self, stats: dict) -> None:
        pass

    @abstractmethod
    def show_all_caught_up(self) -> None:
        pass

    @abstractmethod
    def show_input_hint(self, state: str) -> None:
        """Remind the user which keys are valid in the given drill state."""
        pass

    @abstractmethod
    def show_error(self, message: str) -> None:
        pass


class DictionaryProvider(ABC):
    """Abstract base class for word lookup."""

    @abstractmethod
    def lookup(self, word: str) -> dict | None:
        """Look up a word. Returns a word entry dict or None if not found."""
        pass


class ExampleProvider(ABC):
    """Abstract base class for example sentence sources."""

    @abstractmethod
    def fetch_examples(self, word: str) -> list[dict]:
        """Fetch example sentences. Returns list of {en, zh} dicts."""
        pass


class Translator(ABC):
    """Abstract base class for sentence translation."""

    @abstractmethod
    def translate(self, texts: list[str]) -> list[str]:
        """Translate texts. Returns one string per input ('' on failure)."""
        pass
