"""
Tests for the commit and copy workflows.

Run with:
    pytest tests/test_workflow.py -v
"""

import re

import pytest

from opencommit.generation import GenerationErrorKind, GenerationResult
from opencommit.git import GitError, NotARepoError
from opencommit.output import SEPARATOR
from opencommit.workflow import (
    CommitWorkflow,
    CopyWorkflow,
    Failure,
    FailureReason,
    MessageDelivery,
    Success,
    exit_code,
    generate_message,
)
from opencommit.workflow.controller import NO_CHANGES_TO_STAGE, SELECT_FILES_PROMPT, STAGE_ALL_PROMPT

ANSI_RE = re.compile(r'\033\[[0-9;]*m')


def strip_ansi(text: str) -> str:
    return ANSI_RE.sub('', text)


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

class FakeRepo:
    """In-memory working tree: add() moves files from changed to staged."""

    def __init__(self, changed=(), staged=(), changed_error=None, staged_error=None,
                 not_repo=False, diff_text="diff --git a/x.ts b/x.ts\n+added"):
        self.changed = list(changed)
        self.staged = list(staged)
        self.changed_error = changed_error
        self.staged_error = staged_error
        self.not_repo = not_repo
        self.diff_text = diff_text
        self.calls = []

    @property
    def added(self):
        return [files for name, files in self.calls if name == 'add']

    def assert_repo(self):
        if self.not_repo:
            raise NotARepoError("Not inside a git repository")

    def changed_files(self):
        self.calls.append(('changed_files', None))
        if self.changed_error:
            raise GitError(self.changed_error)
        return list(self.changed)

    def staged_files(self):
        self.calls.append(('staged_files', None))
        if self.staged_error:
            raise GitError(self.staged_error)
        return list(self.staged)

    def diff(self, files):
        self.calls.append(('diff', list(files)))
        return self.diff_text

    def add(self, files):
        self.calls.append(('add', list(files)))
        for path in files:
            if path in self.changed:
                self.changed.remove(path)
            if path not in self.staged:
                self.staged.append(path)


class FakeGenerator:

    def __init__(self, result=None, raises=None):
        self.result = result or GenerationResult(message="feat(app): add thing")
        self.raises = raises
        self.diffs = []

    def generate(self, diff):
        self.diffs.append(diff)
        if self.raises:
            raise self.raises
        return self.result


class FakePrompter:
    """Replays scripted answers; None means the prompt was cancelled."""

    def __init__(self, confirms=(), selections=()):
        self.confirms = list(confirms)
        self.selections = list(selections)
        self.asked = []

    def confirm(self, message):
        self.asked.append(('confirm', message))
        return self.confirms.pop(0) if self.confirms else False

    def multiselect(self, message, options):
        self.asked.append(('multiselect', message, options))
        return self.selections.pop(0) if self.selections else None


class FakeClipboard:

    def __init__(self, ok=True):
        self.ok = ok
        self.copied = []

    def __call__(self, text):
        self.copied.append(text)
        return (True, "") if self.ok else (False, "No clipboard tool found")


@pytest.fixture
def clipboard():
    return FakeClipboard()


@pytest.fixture
def make_workflow(clipboard):
    def _make(repo, generator=None, prompter=None):
        generator = generator or FakeGenerator()
        prompter = prompter or FakePrompter()
        return CommitWorkflow(repo, generator, prompter, MessageDelivery(clipboard))
    return _make


# ---------------------------------------------------------------------------
# CommitWorkflow: nothing to do
# ---------------------------------------------------------------------------

class TestNoChanges:

    def test_both_sets_empty(self, capsys, make_workflow):
        repo = FakeRepo()
        result = make_workflow(repo).run()

        assert result == Failure(FailureReason.NO_CHANGES, "No changes detected")
        assert exit_code(result) == 1
        assert "No changes detected" in capsys.readouterr().err

    def test_never_stages_when_both_empty(self, make_workflow):
        repo = FakeRepo()
        make_workflow(repo).run()
        assert repo.added == []

    def test_stage_all_with_nothing_changed(self, capsys, make_workflow):
        repo = FakeRepo()
        result = make_workflow(repo).run(stage_all=True)

        assert result.reason == FailureReason.NO_CHANGES
        assert result.message == NO_CHANGES_TO_STAGE
        assert repo.added == []
        assert NO_CHANGES_TO_STAGE in capsys.readouterr().err

    def test_not_a_repo(self, make_workflow):
        repo = FakeRepo(staged=["a.txt"], not_repo=True)
        result = make_workflow(repo).run()

        assert result.reason == FailureReason.NOT_A_REPO
        assert repo.calls == []


# ---------------------------------------------------------------------------
# CommitWorkflow: fetch errors
# ---------------------------------------------------------------------------

class TestFetchErrors:

    def test_changed_files_error_surfaces(self, capsys, make_workflow):
        repo = FakeRepo(staged=["a.txt"], changed_error="ls-files exploded")
        generator = FakeGenerator()
        result = make_workflow(repo, generator).run()

        assert result == Failure(FailureReason.FETCH_ERROR, "ls-files exploded")
        assert "ls-files exploded" in capsys.readouterr().err
        assert generator.diffs == []

    def test_staged_files_error_surfaces(self, make_workflow):
        repo = FakeRepo(changed=["a.txt"], staged_error="diff exploded")
        result = make_workflow(repo).run()

        assert result == Failure(FailureReason.FETCH_ERROR, "diff exploded")

    def test_both_fetches_attempted_before_reporting(self, make_workflow):
        repo = FakeRepo(changed=["a.txt"], staged_error="diff exploded")
        make_workflow(repo).run()

        names = [name for name, _ in repo.calls]
        assert names == ['staged_files', 'changed_files']

    def test_both_fetches_failing_reads_as_no_changes(self, make_workflow):
        """Tie-break kept on purpose: with both fetches failed there is no
        file to show, so the empty check fires before either error does."""
        repo = FakeRepo(changed_error="changed failed", staged_error="staged failed")
        result = make_workflow(repo).run()

        assert result.reason == FailureReason.NO_CHANGES


# ---------------------------------------------------------------------------
# CommitWorkflow: staged files present
# ---------------------------------------------------------------------------

class TestGenerateAndDeliver:

    def test_message_printed_between_separators_and_copied(self, capsys, make_workflow, clipboard):
        message = "fix(ui): keep focus after submit\n\n- restore focus in form handler"
        repo = FakeRepo(staged=["x.ts"], diff_text="D")
        generator = FakeGenerator(GenerationResult(message=message))

        result = make_workflow(repo, generator).run()

        assert result == Success(message)
        assert exit_code(result) == 0
        assert generator.diffs == ["D"]
        assert clipboard.copied == [message]

        out = strip_ansi(capsys.readouterr().out)
        lines = out.split('\n')
        first = lines.index(SEPARATOR)
        second = lines.index(SEPARATOR, first + 1)
        assert '\n'.join(lines[first + 1:second]) == message

    def test_diff_restricted_to_staged_files(self, make_workflow):
        repo = FakeRepo(staged=["x.ts", "y.ts"], changed=["z.ts"])
        make_workflow(repo).run()

        assert ('diff', ["x.ts", "y.ts"]) in repo.calls

    def test_staged_listing_shown(self, capsys, make_workflow):
        repo = FakeRepo(staged=["x.ts", "y.ts"])
        make_workflow(repo).run()

        out = strip_ansi(capsys.readouterr().out)
        assert "2 staged files:\n  x.ts\n  y.ts" in out

    def test_intro_shown_once(self, capsys, make_workflow):
        repo = FakeRepo(changed=["a.txt"])
        prompter = FakePrompter(confirms=[True])
        make_workflow(repo, prompter=prompter).run()

        out = strip_ansi(capsys.readouterr().out)
        assert out.count("open-commit") == 1

    def test_too_much_tokens(self, capsys, make_workflow, clipboard):
        repo = FakeRepo(staged=["x.ts"])
        generator = FakeGenerator(GenerationResult(error=GenerationErrorKind.TOO_MUCH_TOKENS))

        result = make_workflow(repo, generator).run()

        expected = "too much content in the diff; stage and commit files in parts"
        assert result == Failure(FailureReason.GENERATION_ERROR, expected)
        assert exit_code(result) == 1
        assert expected in strip_ansi(capsys.readouterr().err)
        assert clipboard.copied == []

    def test_unexpected_error_is_caught(self, capsys, make_workflow):
        repo = FakeRepo(staged=["x.ts"])
        generator = FakeGenerator(raises=RuntimeError("socket closed"))

        result = make_workflow(repo, generator).run()

        assert result == Failure(FailureReason.UNEXPECTED_ERROR, "socket closed")
        assert "socket closed" in capsys.readouterr().err

    def test_extra_args_do_not_change_outcome(self, make_workflow):
        repo = FakeRepo(staged=["x.ts"])
        result = make_workflow(repo).run(["--no-verify"])
        assert isinstance(result, Success)


# ---------------------------------------------------------------------------
# CommitWorkflow: nothing staged yet
# ---------------------------------------------------------------------------

class TestNothingStaged:

    def test_stage_all_flag_stages_before_generation(self, make_workflow):
        repo = FakeRepo(changed=["a.txt", "b.txt"])
        result = make_workflow(repo).run(stage_all=True)

        assert isinstance(result, Success)
        add_idx = repo.calls.index(('add', ["a.txt", "b.txt"]))
        diff_idx = next(i for i, (name, _) in enumerate(repo.calls) if name == 'diff')
        assert add_idx < diff_idx

    def test_confirm_stage_all_continues_to_generation(self, make_workflow):
        repo = FakeRepo(changed=["a.txt", "b.txt"])
        prompter = FakePrompter(confirms=[True])
        result = make_workflow(repo, prompter=prompter).run()

        assert isinstance(result, Success)
        assert repo.added == [["a.txt", "b.txt"]]
        assert prompter.asked == [('confirm', STAGE_ALL_PROMPT)]
        assert ('diff', ["a.txt", "b.txt"]) in repo.calls

    def test_declined_stage_all_offers_selection(self, make_workflow):
        repo = FakeRepo(changed=["a.txt", "b.txt"])
        prompter = FakePrompter(confirms=[False], selections=[["b.txt"]])
        result = make_workflow(repo, prompter=prompter).run()

        assert isinstance(result, Success)
        assert repo.added == [["b.txt"]]
        assert ('diff', ["b.txt"]) in repo.calls
        kind, message, options = prompter.asked[1]
        assert kind == 'multiselect'
        assert message == SELECT_FILES_PROMPT
        assert options == [("a.txt", "a.txt"), ("b.txt", "b.txt")]

    def test_cancelled_confirm_falls_through_to_selection(self, make_workflow):
        repo = FakeRepo(changed=["a.txt"])
        prompter = FakePrompter(confirms=[None], selections=[["a.txt"]])
        result = make_workflow(repo, prompter=prompter).run()

        assert isinstance(result, Success)
        assert repo.added == [["a.txt"]]

    def test_cancelled_selection_stages_nothing(self, make_workflow):
        repo = FakeRepo(changed=["a.txt"])
        generator = FakeGenerator()
        prompter = FakePrompter(confirms=[False], selections=[None])
        result = make_workflow(repo, generator, prompter).run()

        assert result.reason == FailureReason.USER_CANCELLED
        assert exit_code(result) == 1
        assert repo.added == []
        assert generator.diffs == []

    def test_empty_selection_asks_again(self, make_workflow):
        repo = FakeRepo(changed=["a.txt"])
        prompter = FakePrompter(confirms=[False, False], selections=[[], ["a.txt"]])
        result = make_workflow(repo, prompter=prompter).run()

        assert isinstance(result, Success)
        kinds = [asked[0] for asked in prompter.asked]
        assert kinds == ['confirm', 'multiselect', 'confirm', 'multiselect']

    def test_no_files_are_staged_reported(self, capsys, make_workflow):
        repo = FakeRepo(changed=["a.txt"])
        prompter = FakePrompter(confirms=[False], selections=[None])
        make_workflow(repo, prompter=prompter).run()

        assert "No files are staged" in strip_ansi(capsys.readouterr().out)

    def test_add_failure_reported(self, make_workflow):
        class BrokenAddRepo(FakeRepo):
            def add(self, files):
                raise GitError("index.lock exists")

        repo = BrokenAddRepo(changed=["a.txt"])
        prompter = FakePrompter(confirms=[False], selections=[["a.txt"]])
        result = make_workflow(repo, prompter=prompter).run()

        assert result == Failure(FailureReason.FETCH_ERROR, "index.lock exists")


# ---------------------------------------------------------------------------
# CopyWorkflow
# ---------------------------------------------------------------------------

class TestCopyWorkflow:

    @pytest.fixture
    def make_copy(self, clipboard):
        def _make(repo, generator=None):
            return CopyWorkflow(repo, generator or FakeGenerator(), MessageDelivery(clipboard))
        return _make

    def test_stages_everything_and_delivers(self, make_copy, clipboard):
        repo = FakeRepo(changed=["a.txt", "b.txt"])
        result = make_copy(repo).run()

        assert result == Success("feat(app): add thing")
        assert repo.added == [["a.txt", "b.txt"]]
        assert clipboard.copied == ["feat(app): add thing"]

    def test_second_run_does_not_stage_again(self, make_copy, clipboard):
        repo = FakeRepo(changed=["a.txt"])
        workflow = make_copy(repo)

        first = workflow.run()
        second = workflow.run()

        assert first == second
        assert repo.added == [["a.txt"]]
        assert clipboard.copied == ["feat(app): add thing", "feat(app): add thing"]

    def test_staged_fetch_error(self, capsys, make_copy):
        repo = FakeRepo(changed=["a.txt"], staged_error="diff exploded")
        result = make_copy(repo).run()

        assert result == Failure(FailureReason.FETCH_ERROR, "diff exploded")
        assert "diff exploded" in capsys.readouterr().err

    def test_nothing_to_copy(self, make_copy):
        result = make_copy(FakeRepo()).run()
        assert result.reason == FailureReason.NO_CHANGES

    def test_generation_failure_classified(self, capsys, make_copy, clipboard):
        repo = FakeRepo(staged=["x.ts"])
        generator = FakeGenerator(GenerationResult(error=GenerationErrorKind.EMPTY_MESSAGE))
        result = make_copy(repo, generator).run()

        assert result.message == "empty response from generation service, weird, try again"
        assert clipboard.copied == []
        assert result.message in strip_ansi(capsys.readouterr().err)

    def test_never_prompts(self, make_copy):
        repo = FakeRepo(changed=["a.txt"])
        # CopyWorkflow takes no prompter at all
        assert isinstance(make_copy(repo).run(), Success)


# ---------------------------------------------------------------------------
# generate_message
# ---------------------------------------------------------------------------

class TestGenerateMessage:

    def test_internal_error(self):
        repo = FakeRepo(staged=["x.ts"])
        generator = FakeGenerator(GenerationResult(error=GenerationErrorKind.INTERNAL_ERROR))
        result = generate_message(repo, generator, ["x.ts"])
        assert result == Failure(FailureReason.GENERATION_ERROR, "internal error, try again")

    def test_diff_failure_is_unexpected(self):
        class BrokenDiffRepo(FakeRepo):
            def diff(self, files):
                raise GitError("bad revision")

        result = generate_message(BrokenDiffRepo(), FakeGenerator(), ["x.ts"])
        assert result == Failure(FailureReason.UNEXPECTED_ERROR, "bad revision")
