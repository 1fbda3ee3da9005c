"""Commit Workflows Package"""

from opencommit.workflow.controller import CommitWorkflow, State, WorkflowInvocation
from opencommit.workflow.copy import CopyWorkflow
from opencommit.workflow.delivery import MessageDelivery, generate_message
from opencommit.workflow.result import (
    Failure,
    FailureReason,
    FetchResult,
    Success,
    WorkflowResult,
    exit_code,
    fetch_files,
)

__all__ = [
    "CommitWorkflow",
    "CopyWorkflow",
    "State",
    "WorkflowInvocation",
    "MessageDelivery",
    "generate_message",
    "Failure",
    "FailureReason",
    "FetchResult",
    "Success",
    "WorkflowResult",
    "exit_code",
    "fetch_files",
]
