"""Generation failure kinds and their user-facing text."""

from enum import Enum


class GenerationErrorKind(Enum):
    EMPTY_MESSAGE = "empty_message"
    INTERNAL_ERROR = "internal_error"
    TOO_MUCH_TOKENS = "too_much_tokens"


ERROR_MESSAGES = {
    GenerationErrorKind.EMPTY_MESSAGE: "empty response from generation service, weird, try again",
    GenerationErrorKind.INTERNAL_ERROR: "internal error, try again",
    GenerationErrorKind.TOO_MUCH_TOKENS: "too much content in the diff; stage and commit files in parts",
}


def classify(kind: GenerationErrorKind) -> str:
    """Map a generation failure kind to the message shown to the user."""
    if not isinstance(kind, GenerationErrorKind):
        raise ValueError(f"Unknown generation error kind: {kind!r}")
    return ERROR_MESSAGES[kind]
