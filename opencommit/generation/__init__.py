"""Commit Message Generation Package"""

from opencommit.generation.errors import GenerationErrorKind, ERROR_MESSAGES, classify
from opencommit.generation.service import (
    CommitMessageGenerator,
    GenerationResult,
    clean_commit_message,
    estimate_tokens,
)

__all__ = [
    "GenerationErrorKind",
    "ERROR_MESSAGES",
    "classify",
    "CommitMessageGenerator",
    "GenerationResult",
    "clean_commit_message",
    "estimate_tokens",
]
