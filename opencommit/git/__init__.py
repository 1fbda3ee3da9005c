"""Git Operations Package"""

from opencommit.git.repo import GitRepo, GitError, NotARepoError, LOCK_FILE_PATTERNS

__all__ = [
    "GitRepo",
    "GitError",
    "NotARepoError",
    "LOCK_FILE_PATTERNS",
]
