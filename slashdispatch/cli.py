"""Command-line entrypoint that dispatches one parsed slash command.

The command definition and client payload are read from JSON files produced
by the slash command parser. GitHub settings come from the environment (see
:meth:`slashdispatch.github.GitHubRestConfig.from_env`).
"""

from __future__ import annotations

import argparse
import asyncio
import typing as typ
from pathlib import Path

import msgspec

from slashdispatch.commands.models import (
    ReactionKind,
    decode_client_payload,
    decode_command,
)
from slashdispatch.dispatch import CommandDispatcher, CommandRun, DispatchRequest
from slashdispatch.errors import CommandDispatchError
from slashdispatch.github import GitHubConfigError, GitHubRestClient, GitHubRestConfig
from slashdispatch.logging import configure_logging_from_env, get_logger, log_warning

if typ.TYPE_CHECKING:
    from slashdispatch.dispatch import RunOutcome

logger = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="slashdispatch", description=__doc__)
    parser.add_argument(
        "--command", type=Path, required=True, help="JSON command definition"
    )
    parser.add_argument(
        "--payload", type=Path, required=True, help="JSON client payload"
    )
    parser.add_argument(
        "--actor", required=True, help="Login of the user who posted the command"
    )
    parser.add_argument(
        "--source-repository",
        required=True,
        help="owner/name of the repository the command was posted in",
    )
    parser.add_argument(
        "--comment-id",
        type=int,
        default=None,
        help="Triggering comment to acknowledge with a reaction",
    )
    parser.add_argument(
        "--pull-number",
        type=int,
        default=None,
        help="Pull request whose metadata is added to the payload",
    )
    parser.add_argument(
        "--reaction",
        choices=[kind.value for kind in ReactionKind],
        default=ReactionKind.ROCKET.value,
        help="Reaction added after a successful dispatch",
    )
    return parser


def build_client(config: GitHubRestConfig) -> GitHubRestClient:
    """Return the GitHub client used by the CLI."""
    return GitHubRestClient(config)


def _load_request(args: argparse.Namespace) -> DispatchRequest:
    command = decode_command(args.command.read_bytes())
    payload = decode_client_payload(args.payload.read_bytes())
    return DispatchRequest(
        command=command,
        payload=payload,
        actor=args.actor,
        source_repository=args.source_repository,
        comment_id=args.comment_id,
        pull_number=args.pull_number,
        reaction=ReactionKind(args.reaction),
    )


async def _dispatch(request: DispatchRequest, config: GitHubRestConfig) -> RunOutcome:
    client = build_client(config)
    try:
        return await CommandRun(CommandDispatcher(client), request).execute()
    finally:
        await client.aclose()


def _summarize(outcome: RunOutcome) -> str:
    dispatch = outcome.dispatch
    if dispatch is None:
        return f"command not dispatched (state={outcome.state})"
    target = dispatch.event_type or dispatch.workflow
    return (
        f"command '{dispatch.command}' dispatched to '{dispatch.repository}' "
        f"as {dispatch.dispatch_type} '{target}' (state={outcome.state})"
    )


def main(argv: list[str] | None = None) -> int:
    """Dispatch a slash command and report the outcome.

    Parameters
    ----------
    argv : list[str] | None, optional
        Command-line arguments. ``None`` defaults to ``sys.argv``.

    Returns
    -------
    int
        Exit code: 0 when the run completed or was rejected, 1 when inputs
        are invalid or the dispatch failed.

    """
    args = _build_parser().parse_args(argv)
    _, invalid_level = configure_logging_from_env()
    if invalid_level:
        log_warning(logger, "Invalid SLASHDISPATCH_LOG_LEVEL; defaulting to INFO")

    try:
        request = _load_request(args)
        config = GitHubRestConfig.from_env()
    except (OSError, msgspec.DecodeError, GitHubConfigError) as exc:
        print(f"Invalid dispatch input: {exc}")
        return 1

    try:
        outcome = asyncio.run(_dispatch(request, config))
    except CommandDispatchError as exc:
        print(f"Command dispatch failed: {exc}")
        return 1

    print(_summarize(outcome))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
