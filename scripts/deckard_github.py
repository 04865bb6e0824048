#!/usr/bin/env python3
"""CLI entry point for the Deckard GitHub commands."""

import argparse
import logging
import os
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import requests
from dotenv import load_dotenv
from github import GithubException

from deckard_github import DeckardGitHubError, GitHubClient
from deckard_github.constants import API_URL_ENV_VAR, DEFAULT_API_URL, TOKEN_ENV_VAR


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run Deckard's GitHub commands against the REST API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print a file from the default branch
  python deckard_github.py file handwritingio deckard-bot README.md

  # Save a file instead of printing it
  python deckard_github.py file handwritingio deckard-bot logo.png -o logo.png

  # Tarball link and commit SHA for a branch
  python deckard_github.py archive handwritingio deckard-bot master

  # Open an issue
  python deckard_github.py issue handwritingio deckard-bot "Fix the build"

  # Everyone in the organization
  python deckard_github.py users handwritingio
        """
    )

    # Authentication
    auth_group = parser.add_argument_group("Authentication")
    auth_group.add_argument(
        "--token",
        type=str,
        help=f"GitHub Personal Access Token (or set {TOKEN_ENV_VAR} env var)"
    )
    auth_group.add_argument(
        "--base-url",
        type=str,
        help=f"GitHub API base URL (or set {API_URL_ENV_VAR}, default: {DEFAULT_API_URL})"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    file_cmd = commands.add_parser("file", help="Fetch a file's contents")
    file_cmd.add_argument("org")
    file_cmd.add_argument("repo")
    file_cmd.add_argument("path")
    file_cmd.add_argument(
        "--output", "-o",
        type=str,
        help="Write the contents to this file instead of stdout"
    )

    commands.add_parser("rate-limit", help="Show the API rate limit")

    archive_cmd = commands.add_parser(
        "archive", help="Get a tarball link and commit SHA for a branch"
    )
    archive_cmd.add_argument("org")
    archive_cmd.add_argument("repo")
    archive_cmd.add_argument("branch")

    users_cmd = commands.add_parser("users", help="List organization members")
    users_cmd.add_argument("org")

    issue_cmd = commands.add_parser("issue", help="Create an issue")
    issue_cmd.add_argument("org")
    issue_cmd.add_argument("repo")
    issue_cmd.add_argument("title")

    octocat_cmd = commands.add_parser("octocat", help="Draw the octocat")
    octocat_cmd.add_argument("message", nargs="?", default="")

    return parser


def run_command(client: GitHubClient, args: argparse.Namespace) -> None:
    """Dispatch a parsed command to the client and print the result."""
    if args.command == "file":
        result = client.get_file(args.org, args.repo, args.path)
        if args.output:
            Path(args.output).write_bytes(result.content)
            print(f"Saved {len(result.content)} bytes to {args.output}")
        else:
            print(result.content.decode("utf-8", errors="replace"))
        print(f"Download URL: {result.download_url}")

    elif args.command == "rate-limit":
        print(client.check_rate_limit())

    elif args.command == "archive":
        archive = client.get_archive(args.org, args.repo, args.branch)
        print(f"Archive: {archive.url}")
        print(f"Commit: {archive.sha}")

    elif args.command == "users":
        print(client.get_users(args.org))

    elif args.command == "issue":
        print(client.create_issue(args.org, args.repo, args.title))

    elif args.command == "octocat":
        print(client.octocat(args.message))


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Load environment variables
    load_dotenv()

    token = args.token or os.environ.get(TOKEN_ENV_VAR)
    base_url = args.base_url or os.environ.get(API_URL_ENV_VAR) or DEFAULT_API_URL
    if not token:
        print(f"No {TOKEN_ENV_VAR} set, only public resources are reachable.", file=sys.stderr)

    client = GitHubClient(token=token, base_url=base_url)

    try:
        run_command(client, args)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user.")
        sys.exit(130)
    except (DeckardGitHubError, GithubException, requests.exceptions.RequestException) as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
