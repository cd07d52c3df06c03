# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Main entry point for the label-driven release action.

Pull request events only validate the release label. Any other event is
treated as a merge: the pull request of the commit is resolved and the next
tag is published at that commit.

References:
    - GitHub Actions Environment Variables:
      https://docs.github.com/en/actions/writing-workflows/choosing-what-your-workflow-does/store-information-in-variables#default-environment-variables
    - GitHub Actions Outputs:
      https://docs.github.com/en/actions/writing-workflows/choosing-what-your-workflow-does/passing-information-between-jobs#setting-an-output-parameter
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import dataclass

from label_release.errors import ReleaseError
from label_release.github_api import GitHubAPI
from label_release.release import decide, publish, validate_pull_request_event
from label_release.versions import is_valid

logger = logging.getLogger(__name__)

DEFAULT_INITIAL_TAG = "0.1.0"


@dataclass
class ActionInputs:
    """Parsed action inputs from environment variables."""

    token: str
    debug: bool
    dry_run: bool
    initial_tag: str = DEFAULT_INITIAL_TAG


@dataclass
class GitHubContext:
    """GitHub event context from environment variables."""

    event_name: str
    sha: str
    repository: str
    pull_request_number: int | None = None


@dataclass
class ActionOutputs:
    """Action outputs to be written to GITHUB_OUTPUT."""

    tag: str = ""


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "false").lower() == "true"


def parse_inputs(args: list[str] | None = None) -> ActionInputs:
    """Parse action inputs from CLI arguments or environment variables.

    CLI arguments take precedence over environment variables.

    Args:
        args: Optional list of CLI arguments. If None, uses environment
              variables only (GitHub Actions mode).

    Returns:
        ActionInputs with parsed values.
    """
    parser = argparse.ArgumentParser(
        description="Label-driven release action - tag merged pull requests with the next SemVer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables (used as defaults when CLI args not provided):
  INPUT_GITHUB_TOKEN, INPUT_TOKEN, GITHUB_TOKEN   GitHub token for authentication
  INPUT_INITIAL_TAG                               Tag used when no release exists yet
  INPUT_DEBUG                                     Enable debug logging (true/false)
  INPUT_DRY_RUN                                   Dry-run mode, don't create tags (true/false)

Examples:
  # Run with environment variables (GitHub Actions mode)
  python -m label_release.main

  # Run with CLI arguments (local testing)
  python -m label_release.main --token ghp_xxx --dry-run --debug
        """,
    )

    parser.add_argument(
        "--token",
        default=os.environ.get("INPUT_GITHUB_TOKEN")
        or os.environ.get("INPUT_TOKEN")
        or os.environ.get("GITHUB_TOKEN", ""),
        help="GitHub token for authentication (default: from INPUT_GITHUB_TOKEN, INPUT_TOKEN or GITHUB_TOKEN env)",
    )
    parser.add_argument(
        "--initial-tag",
        default=os.environ.get("INPUT_INITIAL_TAG") or DEFAULT_INITIAL_TAG,
        help=f"Tag to create when the repository has no SemVer tag (default: {DEFAULT_INITIAL_TAG})",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=_env_flag("INPUT_DEBUG"),
        help="Enable debug logging",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=_env_flag("INPUT_DRY_RUN"),
        help="Dry-run mode - don't actually create tags",
    )

    parsed = parser.parse_args(args if args is not None else [])

    initial_tag = parsed.initial_tag.strip()
    if not initial_tag:
        logger.error("Invalid initial-tag: must be non-empty")
        sys.exit(1)
    if not is_valid(initial_tag):
        logger.warning("initial-tag '%s' is not a semantic version, it will be used as is", initial_tag)

    return ActionInputs(
        token=parsed.token,
        debug=parsed.debug,
        dry_run=parsed.dry_run,
        initial_tag=initial_tag,
    )


def _read_pull_request_number(event_path: str) -> int | None:
    """Return the pull request number from the event payload, if any."""
    if not event_path or not os.path.isfile(event_path):
        return None

    with open(event_path) as f:
        payload = json.load(f)

    pull_request = payload.get("pull_request")
    if not pull_request:
        return None
    return int(pull_request["number"])


def parse_context() -> GitHubContext:
    """Parse GitHub context from environment variables and the event payload.

    References:
        - https://docs.github.com/en/actions/writing-workflows/choosing-what-your-workflow-does/store-information-in-variables#default-environment-variables
        - https://docs.github.com/en/webhooks/webhook-events-and-payloads#pull_request
    """
    return GitHubContext(
        event_name=os.environ.get("GITHUB_EVENT_NAME", ""),
        sha=os.environ.get("GITHUB_SHA", ""),
        repository=os.environ.get("GITHUB_REPOSITORY", ""),
        pull_request_number=_read_pull_request_number(os.environ.get("GITHUB_EVENT_PATH", "")),
    )


def set_outputs(outputs: ActionOutputs) -> None:
    """Write action outputs to GITHUB_OUTPUT file.

    References:
        - https://docs.github.com/en/actions/writing-workflows/choosing-what-your-workflow-does/passing-information-between-jobs#setting-an-output-parameter
    """
    output_file = os.environ.get("GITHUB_OUTPUT", "")
    if not output_file:
        logger.warning("GITHUB_OUTPUT not set, outputs will not be written")
        return

    with open(output_file, "a") as f:
        f.write(f"tag={outputs.tag}\n")

    logger.info("Set outputs: tag=%s", outputs.tag)


def configure_logging(debug: bool) -> None:
    """Configure logging based on debug flag."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def handle_pull_request(api: GitHubAPI, number: int) -> None:
    """Validate the release label of the triggering pull request."""
    label = validate_pull_request_event(api, number)
    logger.info("Pull request #%d is valid for release (%s)", number, label)


def handle_merge(api: GitHubAPI, context: GitHubContext, inputs: ActionInputs) -> ActionOutputs:
    """Decide and publish the release for a merged commit.

    Returns:
        ActionOutputs with the published tag, empty when the release is skipped.
    """
    decision = decide(api, context.sha, inputs.initial_tag)
    return ActionOutputs(tag=publish(api, decision, context.sha, dry_run=inputs.dry_run))


def run(inputs: ActionInputs, context: GitHubContext) -> None:
    """Run the action for one event.

    Raises:
        ReleaseError: If validation, decision or publication fails.
    """
    try:
        api = GitHubAPI(token=inputs.token, repository=context.repository)
    except ValueError as e:
        logger.error("Failed to initialize GitHub API: %s", e)
        sys.exit(1)

    if context.pull_request_number is not None:
        handle_pull_request(api, context.pull_request_number)
        return

    if not context.sha:
        logger.error("GITHUB_SHA is required to publish a release")
        sys.exit(1)

    set_outputs(handle_merge(api, context, inputs))


def main() -> None:
    """Main entry point for the action."""
    inputs = parse_inputs()
    configure_logging(inputs.debug)

    context = parse_context()
    logger.debug(
        "Event: %s, SHA: %s, pull request: %s", context.event_name, context.sha[:7], context.pull_request_number
    )

    if not inputs.token:
        logger.error("GitHub token is required. Set INPUT_GITHUB_TOKEN or GITHUB_TOKEN.")
        sys.exit(1)

    try:
        run(inputs, context)
    except ReleaseError as e:
        logger.error("%s", e)
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    main()
