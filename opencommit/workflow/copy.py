"""Copy Workflow - stage everything and copy a message, no questions asked."""

from typing import Callable

from opencommit.generation import CommitMessageGenerator
from opencommit.git import GitError, GitRepo, NotARepoError
from opencommit.output import Spinner, print_error
from opencommit.workflow.delivery import MessageDelivery, generate_message
from opencommit.workflow.result import Failure, FailureReason, WorkflowResult, fetch_files


class CopyWorkflow:
    """Non-interactive variant of the commit workflow.

    Running it again without new changes stages nothing new, since every
    change is already in the index.
    """

    def __init__(self, repo: GitRepo, generator: CommitMessageGenerator, delivery: MessageDelivery,
                 spinner_factory: Callable[[], Spinner] = Spinner):
        self.repo = repo
        self.generator = generator
        self.delivery = delivery
        self.spinner_factory = spinner_factory

    def run(self) -> WorkflowResult:
        result = self._run()
        if isinstance(result, Failure):
            print_error(result.message)
        return result

    def _run(self) -> WorkflowResult:
        try:
            self.repo.assert_repo()
        except NotARepoError as e:
            return Failure(FailureReason.NOT_A_REPO, str(e))

        try:
            changed = self.repo.changed_files()
            if changed:
                self.repo.add(changed)
        except GitError as e:
            return Failure(FailureReason.FETCH_ERROR, str(e))

        staged = fetch_files(self.repo.staged_files)
        if not staged.ok:
            return Failure(FailureReason.FETCH_ERROR, str(staged.error))
        if not staged.files:
            return Failure(FailureReason.NO_CHANGES, "No changes detected")

        result = generate_message(self.repo, self.generator, staged.files, self.spinner_factory)
        if isinstance(result, Failure):
            return result

        self.delivery.deliver(result.message)
        return result
