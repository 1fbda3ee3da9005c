"""Workflow outcomes and captured fetch results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Union

from opencommit.git import GitError


class FailureReason(Enum):
    NO_CHANGES = "no_changes"
    FETCH_ERROR = "fetch_error"
    NOT_A_REPO = "not_a_repo"
    GENERATION_ERROR = "generation_error"
    USER_CANCELLED = "user_cancelled"
    UNEXPECTED_ERROR = "unexpected_error"


@dataclass(frozen=True)
class Success:
    message: str


@dataclass(frozen=True)
class Failure:
    reason: FailureReason
    message: str


WorkflowResult = Union[Success, Failure]


def exit_code(result: WorkflowResult) -> int:
    return 0 if isinstance(result, Success) else 1


@dataclass
class FetchResult:
    """A file list fetch whose git failure is kept as a value."""
    files: list[str] = field(default_factory=list)
    error: Optional[GitError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def fetch_files(fetch: Callable[[], list[str]]) -> FetchResult:
    try:
        return FetchResult(files=fetch())
    except GitError as e:
        return FetchResult(error=e)
