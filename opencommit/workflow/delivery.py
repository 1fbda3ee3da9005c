"""Message delivery and the generate step shared by both workflows."""

from typing import Callable

from opencommit.cli.utils import copy_to_clipboard
from opencommit.generation import CommitMessageGenerator, classify
from opencommit.git import GitRepo
from opencommit.output import SEPARATOR, Spinner, colorize_commit_type, grey, outro, print_success, print_warning
from opencommit.workflow.result import Failure, FailureReason, Success, WorkflowResult


class MessageDelivery:
    """Show the final message and put the exact text on the clipboard."""

    def __init__(self, clipboard: Callable[[str], tuple[bool, str]] = copy_to_clipboard):
        self.clipboard = clipboard

    def deliver(self, message: str) -> None:
        outro(f"Commit message:\n{grey(SEPARATOR)}\n{colorize_commit_type(message)}\n{grey(SEPARATOR)}")

        copied, reason = self.clipboard(message)
        if copied:
            print_success("Copied to clipboard!")
        else:
            print_warning(f"Could not copy to clipboard{': ' + reason if reason else ''}")


def generate_message(repo: GitRepo, generator: CommitMessageGenerator, files: list[str],
                     spinner_factory: Callable[[], Spinner] = Spinner) -> WorkflowResult:
    """Diff the staged files and generate a message for them.

    Generation failures come back classified; anything raised along the way
    becomes an UNEXPECTED_ERROR failure instead of propagating.
    """
    spinner = spinner_factory()
    spinner.start("Generating the commit message")
    try:
        result = generator.generate(repo.diff(files))
    except Exception as e:
        spinner.stop()
        return Failure(FailureReason.UNEXPECTED_ERROR, str(e) or type(e).__name__)

    if not result.ok:
        spinner.stop()
        return Failure(FailureReason.GENERATION_ERROR, classify(result.error))

    spinner.stop("Commit message generated")
    return Success(result.message)
