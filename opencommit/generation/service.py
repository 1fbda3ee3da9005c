"""Generation Service - Turn a staged diff into a commit message."""

import re
from dataclasses import dataclass
from typing import Callable, Optional

from opencommit import COMMIT_TYPE_NAMES
from opencommit.config import Config
from opencommit.generation.errors import GenerationErrorKind
from opencommit.llm import LLMClient, LLMError, get_client
from opencommit.output import debug
from opencommit.prompts import PromptBuilder, PromptConfig

TYPES_PATTERN = '|'.join(COMMIT_TYPE_NAMES)
JUNK_PATTERNS = re.compile(r'^(diff --git |@@\s|[+-]{3}\s[ab]/|index [0-9a-f]|```)')


def clean_commit_message(text: str) -> str:
    """Clean up LLM response to extract just the commit message."""
    lines = text.strip().split('\n')
    start_idx = 0
    for i, line in enumerate(lines):
        if re.match(rf'^[`\s]*({TYPES_PATTERN})[\(!:]', line):
            start_idx = i
            break

    # Cut off diff output, code blocks, etc. after the message
    end_idx = len(lines)
    for i in range(start_idx + 1, len(lines)):
        if JUNK_PATTERNS.match(lines[i]):
            end_idx = i
            break

    lines = '\n'.join(lines[start_idx:end_idx]).rstrip().split('\n')
    lines[0] = lines[0].strip('`').strip()

    return '\n'.join(lines).strip()


def estimate_tokens(text: str) -> int:
    """Rough token estimate (~4 chars per token)."""
    return len(text) // 4


@dataclass
class GenerationResult:
    """Either a commit message or the kind of failure that prevented one."""
    message: Optional[str] = None
    error: Optional[GenerationErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CommitMessageGenerator:
    """Builds the prompt for a diff and asks the configured LLM for a message.

    The client is created on first use so that git checks run before any
    provider detection.
    """

    def __init__(self, config: Config, provider: str = "auto", model: str | None = None,
                 client_factory: Callable[..., LLMClient] = get_client):
        self.config = config
        self.provider = provider
        self.model = model
        self._client_factory = client_factory
        self._client: LLMClient | None = None

    @property
    def client(self) -> LLMClient:
        if self._client is None:
            self._client = self._client_factory(provider=self.provider, model=self.model)
            debug(f"using {self._client.name}")
        return self._client

    def build_prompt(self, diff: str) -> str:
        prompt_config = PromptConfig(
            file_count=diff.count('diff --git '),
            include_body=self.config.include_body,
            max_subject_length=self.config.max_subject_length,
        )
        return PromptBuilder().build(diff, prompt_config)

    def generate(self, diff: str) -> GenerationResult:
        prompt = self.build_prompt(diff)
        tokens = estimate_tokens(prompt)
        debug(f"prompt: ~{tokens} tokens ({len(prompt)} chars), limit {self.config.max_tokens}")

        if tokens > self.config.max_tokens:
            return GenerationResult(error=GenerationErrorKind.TOO_MUCH_TOKENS)

        client = self.client
        try:
            response = client.generate(prompt)
        except LLMError as e:
            debug(f"generation failed: {e}")
            return GenerationResult(error=GenerationErrorKind.INTERNAL_ERROR)

        debug(f"response: {response.tokens_used} tokens")
        message = clean_commit_message(response.content)
        if not message:
            return GenerationResult(error=GenerationErrorKind.EMPTY_MESSAGE)
        return GenerationResult(message=message)
