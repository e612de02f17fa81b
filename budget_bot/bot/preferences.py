"""
Per-user language preferences.

Kept in process memory only: a restart forgets every choice and
everyone falls back to the default language.
"""

from abc import ABC, abstractmethod

from budget_bot.models.locale import Language


class LanguagePreferences(ABC):
    """Key-value store of user id -> language."""

    @abstractmethod
    def get(self, user_id: int) -> Language:
        """Language of `user_id`, or the default if they never chose one."""
        pass

    @abstractmethod
    def set(self, user_id: int, language: Language) -> None:
        """Remember `language` for `user_id`, replacing any earlier choice."""
        pass


class InMemoryLanguagePreferences(LanguagePreferences):
    """
    Dictionary-backed preferences.

    Accessed from the event loop thread only; each user is a separate
    key, so writers for different users never touch the same entry.
    """

    def __init__(self, default: Language = Language.RU):
        self.default = default
        self._languages: dict[int, Language] = {}

    def get(self, user_id: int) -> Language:
        return self._languages.get(user_id, self.default)

    def set(self, user_id: int, language: Language) -> None:
        self._languages[user_id] = language
