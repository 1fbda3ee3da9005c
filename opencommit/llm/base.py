"""LLM Base Classes and Shared Code"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass

from opencommit import COMMIT_TYPE_NAMES


SYSTEM_PROMPT = """You are a senior software engineer who writes precise, informative git commit messages.

You:
- Follow the conventional commit format (type, scope, subject, body)
- Identify the PRIMARY purpose of a change from its diff
- Explain WHY in the body; the diff already shows WHAT
- Prefer specific verbs ("Add", "Remove", "Extract") over "update" or "change\""""

RETRY_SUFFIX = "\n\nIMPORTANT: Your previous response was invalid ({error}). Start directly with the commit type, e.g., 'feat(scope):'"


def validate_commit_message(content: str) -> tuple[bool, str]:
    """Check that a reply looks like a conventional commit message."""
    if not content or len(content.strip()) < 10:
        return False, "Response too short"

    types_pattern = '|'.join(COMMIT_TYPE_NAMES)
    pattern = rf'^({types_pattern})(\(.+\))?!?:'
    first_line = content.strip().split('\n')[0]

    if not re.match(pattern, first_line):
        return False, f"Missing conventional commit format. Got: {first_line[:50]}"

    return True, ""


@dataclass
class LLMResponse:
    """Structured response from any LLM provider."""
    content: str
    model: str = ""
    tokens_used: int = 0


class LLMError(Exception):
    """Raised when LLM operations fail."""
    pass


class LLMClient(ABC):
    """Abstract base for LLM clients.

    Subclasses implement a single request; generate() re-asks up to
    MAX_RETRIES times when the reply is not a conventional commit and
    returns the last reply either way.
    """

    MAX_RETRIES = 2

    @abstractmethod
    def _request(self, prompt: str) -> LLMResponse:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    def generate(self, prompt: str) -> LLMResponse:
        response = self._request(prompt)
        for _ in range(self.MAX_RETRIES):
            is_valid, error = validate_commit_message(response.content)
            if is_valid:
                break
            response = self._request(prompt + RETRY_SUFFIX.format(error=error))
        return response
