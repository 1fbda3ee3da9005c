"""Interactive prompts used by the commit workflow."""

from abc import ABC, abstractmethod
from typing import Optional

import questionary


class Prompter(ABC):
    """Asks the user questions. A None answer means the prompt was cancelled."""

    @abstractmethod
    def confirm(self, message: str) -> Optional[bool]:
        pass

    @abstractmethod
    def multiselect(self, message: str, options: list[tuple[str, str]]) -> Optional[list[str]]:
        """Pick any number of (value, label) options; returns the chosen values."""
        pass


class QuestionaryPrompter(Prompter):
    """Terminal prompts backed by questionary. Ctrl-C cancels."""

    def confirm(self, message: str) -> Optional[bool]:
        return questionary.confirm(message, default=True).ask()

    def multiselect(self, message: str, options: list[tuple[str, str]]) -> Optional[list[str]]:
        choices = [questionary.Choice(title=label, value=value) for value, label in options]
        return questionary.checkbox(message, choices=choices).ask()
