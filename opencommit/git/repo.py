"""Git Repo - Query and stage working tree changes."""

import re
import subprocess

from opencommit.output import debug, dim

# yarn.lock, poetry.lock, Cargo.lock, Gemfile.lock, ... all match '\.lock$'
LOCK_FILE_PATTERNS = [
    r'\.lock$', r'package-lock\.json$', r'pnpm-lock\.yaml$', r'go\.sum$',
]


class GitError(Exception):
    """Raised when git operations fail."""
    pass


class NotARepoError(GitError):
    """Raised when running outside a git repository."""
    pass


class GitRepo:
    """Thin adapter over the git CLI for the current working directory."""

    def __init__(self, cwd: str | None = None):
        self.cwd = cwd
        self._lock_re = [re.compile(p) for p in LOCK_FILE_PATTERNS]

    def _run_git(self, *args: str) -> str:
        """Run a git command and return stdout."""
        try:
            result = subprocess.run(
                ['git', *args],
                cwd=self.cwd,
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr.strip()}")
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")

    @staticmethod
    def _split_lines(output: str) -> list[str]:
        return [line for line in output.split('\n') if line]

    def assert_repo(self) -> None:
        """Fail fast if we're not in a git repository."""
        try:
            self._run_git('rev-parse', '--git-dir')
        except GitError:
            raise NotARepoError("Not inside a git repository")

    def changed_files(self) -> list[str]:
        """Modified and untracked files that are not in the index, sorted."""
        modified = self._split_lines(self._run_git('ls-files', '--modified'))
        others = self._split_lines(self._run_git('ls-files', '--others', '--exclude-standard'))
        return sorted(set(modified + others))

    def staged_files(self) -> list[str]:
        """Staged paths, relative to the working directory like the other queries."""
        return self._split_lines(self._run_git('diff', '--name-only', '--cached', '--relative'))

    def is_lock_file(self, path: str) -> bool:
        return any(p.search(path) for p in self._lock_re)

    def diff(self, files: list[str]) -> str:
        """Staged diff for the given files, leaving lock files out.

        Lock files are only diffed when nothing else is staged.
        """
        lock_files = [f for f in files if self.is_lock_file(f)]
        other_files = [f for f in files if not self.is_lock_file(f)]

        if lock_files and other_files:
            print(dim("Some files are '.lock' files which are excluded by default from 'git diff':"))
            for path in lock_files:
                print(dim(f"  {path}"))
            debug(f"diffing {len(other_files)} of {len(files)} staged files")
            files = other_files

        return self._run_git('diff', '--staged', '--', *files)

    def add(self, files: list[str]) -> None:
        if not files:
            return
        self._run_git('add', '--', *files)
        debug(f"staged {len(files)} files")
