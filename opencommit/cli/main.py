"""CLI Main Entry Point"""

import sys

from opencommit.cli.args import parse_args
from opencommit.cli.commands import display_config
from opencommit.cli.prompter import QuestionaryPrompter
from opencommit.config import get_config_path, load_config, resolve_provider_and_model
from opencommit.generation import CommitMessageGenerator
from opencommit.git import GitRepo
from opencommit.output import debug, set_verbose
from opencommit.workflow import CommitWorkflow, CopyWorkflow, MessageDelivery, exit_code


def _build_generator(args) -> CommitMessageGenerator:
    config = load_config()
    debug(f"config: {get_config_path() or 'defaults'}")
    provider, model = resolve_provider_and_model(config, args.provider, args.model)
    debug(f"provider: {provider}, model: {model or 'default'}")
    return CommitMessageGenerator(config, provider=provider, model=model)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI. Returns the process exit code."""
    args = parse_args(argv)

    if args.display_config:
        return display_config()

    set_verbose(args.verbose)
    repo = GitRepo()
    generator = _build_generator(args)
    delivery = MessageDelivery()

    if args.command == 'copy':
        result = CopyWorkflow(repo, generator, delivery).run()
    else:
        workflow = CommitWorkflow(repo, generator, QuestionaryPrompter(), delivery)
        result = workflow.run(args.extra_args, stage_all=args.stage_all)

    return exit_code(result)


def run() -> None:
    sys.exit(main())
