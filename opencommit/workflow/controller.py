"""Commit Workflow - decide what to stage, then generate and deliver a message.

The workflow is a small state machine. Branches that change the index
(staging everything, or staging a selection) loop back and re-evaluate the
working tree instead of starting a second run, so a run has exactly one
result.

    START -> CHECK_STAGED -> GENERATE -> DELIVER -> DONE
                  |    ^
                  v    |
     PROMPT_STAGE_ALL -> PROMPT_SELECT

Any state may move to FAIL.
"""

from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Callable, Optional

from opencommit.cli.prompter import Prompter
from opencommit.generation import CommitMessageGenerator
from opencommit.git import GitError, GitRepo, NotARepoError
from opencommit.output import Spinner, debug, intro, print_error
from opencommit.workflow.delivery import MessageDelivery, generate_message
from opencommit.workflow.result import (
    Failure,
    FailureReason,
    FetchResult,
    Success,
    WorkflowResult,
    fetch_files,
)

STAGE_ALL_PROMPT = "Do you want to stage all files and generate commit message?"
SELECT_FILES_PROMPT = "Select the files you want to add to the commit:"
NO_CHANGES = "No changes detected"
NO_CHANGES_TO_STAGE = "No changes detected, write some code and run `oc` again"


class State(Enum):
    START = auto()
    CHECK_STAGED = auto()
    PROMPT_STAGE_ALL = auto()
    PROMPT_SELECT = auto()
    GENERATE = auto()
    DELIVER = auto()
    FAIL = auto()
    DONE = auto()


@dataclass(frozen=True)
class WorkflowInvocation:
    """Arguments of one evaluation of the working tree."""
    extra_args: tuple[str, ...] = ()
    stage_all: bool = False


@dataclass
class _Run:
    invocation: WorkflowInvocation
    staged: FetchResult = field(default_factory=FetchResult)
    changed: FetchResult = field(default_factory=FetchResult)
    message: Optional[str] = None
    failure: Optional[Failure] = None
    announced: bool = False

    def fail(self, reason: FailureReason, message: str) -> State:
        self.failure = Failure(reason, message)
        return State.FAIL


class CommitWorkflow:
    """Interactive commit message workflow."""

    def __init__(self, repo: GitRepo, generator: CommitMessageGenerator, prompter: Prompter,
                 delivery: MessageDelivery, spinner_factory: Callable[[], Spinner] = Spinner):
        self.repo = repo
        self.generator = generator
        self.prompter = prompter
        self.delivery = delivery
        self.spinner_factory = spinner_factory
        self._handlers = {
            State.START: self._start,
            State.CHECK_STAGED: self._check_staged,
            State.PROMPT_STAGE_ALL: self._prompt_stage_all,
            State.PROMPT_SELECT: self._prompt_select,
            State.GENERATE: self._generate,
            State.DELIVER: self._deliver,
        }

    def run(self, extra_args: tuple[str, ...] | list[str] = (), stage_all: bool = False) -> WorkflowResult:
        run = _Run(WorkflowInvocation(tuple(extra_args), stage_all))
        if run.invocation.extra_args:
            debug(f"extra args: {' '.join(run.invocation.extra_args)}")

        state = State.START
        while state not in (State.FAIL, State.DONE):
            debug(f"state: {state.name}")
            state = self._handlers[state](run)

        if state is State.FAIL:
            print_error(run.failure.message)
            return run.failure
        return Success(run.message)

    def _start(self, run: _Run) -> State:
        try:
            self.repo.assert_repo()
        except NotARepoError as e:
            return run.fail(FailureReason.NOT_A_REPO, str(e))

        if run.invocation.stage_all:
            try:
                changed = self.repo.changed_files()
                if not changed:
                    return run.fail(FailureReason.NO_CHANGES, NO_CHANGES_TO_STAGE)
                self.repo.add(changed)
            except GitError as e:
                return run.fail(FailureReason.FETCH_ERROR, str(e))
            run.invocation = replace(run.invocation, stage_all=False)

        return State.CHECK_STAGED

    def _check_staged(self, run: _Run) -> State:
        run.staged = fetch_files(self.repo.staged_files)
        run.changed = fetch_files(self.repo.changed_files)

        # A failed fetch counts as empty here, so two failed fetches read as "no changes"
        if not run.staged.files and not run.changed.files:
            return run.fail(FailureReason.NO_CHANGES, NO_CHANGES)

        if not run.announced:
            intro("open-commit")
            run.announced = True

        error = run.changed.error or run.staged.error
        if error is not None:
            return run.fail(FailureReason.FETCH_ERROR, str(error))

        spinner = self.spinner_factory()
        spinner.start("Counting staged files")

        if not run.staged.files:
            spinner.stop("No files are staged")
            return State.PROMPT_STAGE_ALL

        listing = "\n".join(f"  {path}" for path in run.staged.files)
        spinner.stop(f"{len(run.staged.files)} staged files:\n{listing}")
        return State.GENERATE

    def _prompt_stage_all(self, run: _Run) -> State:
        if self.prompter.confirm(STAGE_ALL_PROMPT):
            run.invocation = replace(run.invocation, stage_all=True)
            return State.START
        return State.PROMPT_SELECT

    def _prompt_select(self, run: _Run) -> State:
        if run.changed.files:
            options = [(path, path) for path in run.changed.files]
            selected = self.prompter.multiselect(SELECT_FILES_PROMPT, options)
            if selected is None:
                return run.fail(FailureReason.USER_CANCELLED, "Cancelled, nothing was staged")
            try:
                self.repo.add(selected)
            except GitError as e:
                return run.fail(FailureReason.FETCH_ERROR, str(e))

        return State.CHECK_STAGED

    def _generate(self, run: _Run) -> State:
        result = generate_message(self.repo, self.generator, run.staged.files, self.spinner_factory)
        if isinstance(result, Failure):
            run.failure = result
            return State.FAIL
        run.message = result.message
        return State.DELIVER

    def _deliver(self, run: _Run) -> State:
        self.delivery.deliver(run.message)
        return State.DONE
