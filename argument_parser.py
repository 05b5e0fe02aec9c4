#!/usr/bin/env python3
"""Command line argument parsing and configuration building."""

from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional

from config import (CloneMethod, Config, GitHubConfig, GitOperationConfig,
                    NamingConfig, TransferConfig)
from logging_utils import Logger
from security import SecurityValidator

# Exit codes
EXIT_EXECUTION_ERROR = 1

TOKEN_ENV_VAR = "GITHUB_TOKEN"

DEFAULT_SOURCE_ORG = "source-org"
DEFAULT_DESTINATION_ORG = "destination-org"
DEFAULT_WORKSPACE = os.path.join("~", "Documents", "workspace")
DEFAULT_REPOSITORIES = [
    "repo-name-1",
    "repo-name-2",
    "repo-name-3",
]


def _create_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Clone repositories from one GitHub organization, recreate them as "
            "private repositories in another and push all branches and tags"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
The GitHub token is read from the {TOKEN_ENV_VAR} environment variable.

Examples:
  {TOKEN_ENV_VAR}=... %(prog)s voxpupuli puppetlabs
  {TOKEN_ENV_VAR}=... %(prog)s voxpupuli puppetlabs --repo puppet-foo --dry-run
  {TOKEN_ENV_VAR}=... %(prog)s voxpupuli puppetlabs --repos-file repos.txt --no-prefix
        """,
    )
    parser.add_argument(
        "source_org",
        nargs="?",
        default=DEFAULT_SOURCE_ORG,
        help=f"Organization to copy repositories from (default: {DEFAULT_SOURCE_ORG})",
    )
    parser.add_argument(
        "destination_org",
        nargs="?",
        default=DEFAULT_DESTINATION_ORG,
        help=f"Organization to create repositories in (default: {DEFAULT_DESTINATION_ORG})",
    )
    return parser


def _add_behavior_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--repo",
        dest="repos",
        action="append",
        metavar="NAME",
        help="Repository to transfer; repeat for several (default: built-in list)",
    )
    parser.add_argument(
        "--repos-file",
        dest="repos_file",
        metavar="PATH",
        help="File with one repository name per line ('#' starts a comment)",
    )
    parser.add_argument(
        "--workspace",
        dest="workspace",
        default=DEFAULT_WORKSPACE,
        help=f"Directory repositories are cloned into (default: {DEFAULT_WORKSPACE})",
    )
    parser.add_argument(
        "--no-prefix",
        action="store_false",
        dest="prepend_prefix",
        help="Keep source repository names instead of '<destination_org>-<suffix>'",
    )
    parser.add_argument(
        "--gh-api",
        dest="gh_api_url",
        default="https://api.github.com",
        help="Base URL of the GitHub API",
    )
    parser.add_argument(
        "--clone-method",
        dest="clone_method",
        choices=[method.value for method in CloneMethod],
        default=CloneMethod.HTTPS.value,
        help="Clone method for the source organization (default: https)",
    )
    parser.add_argument(
        "--push-method",
        dest="push_method",
        choices=[method.value for method in CloneMethod],
        default=CloneMethod.SSH.value,
        help="Push method for the destination organization (default: ssh)",
    )
    parser.add_argument(
        "-d",
        "--dry-run",
        action="store_true",
        dest="dry_run",
        help="Report what would be transferred without doing it",
    )


def read_repos_file(path: str) -> List[str]:
    """Read repository names, skipping blank lines and '#' comments."""
    repos: List[str] = []
    with open(path, encoding="utf-8") as handle:
        for line in handle:
            name = line.split("#", 1)[0].strip()
            if name:
                repos.append(name)
    return repos


def _collect_repos(args) -> List[str]:
    """Return the repositories to move; the built-in list only applies when
    neither --repo nor --repos-file was given."""
    if not args.repos_file and not args.repos:
        return list(DEFAULT_REPOSITORIES)

    repos: List[str] = []
    if args.repos_file:
        repos.extend(read_repos_file(args.repos_file))
    if args.repos:
        repos.extend(args.repos)
    if not repos:
        raise ValueError(f"no repository names found in {args.repos_file}")
    # Drop duplicates, keep order
    return list(dict.fromkeys(repos))


def get_token(environ: Optional[dict] = None) -> str:
    """Return the GitHub token or exit when it is missing or blank."""
    environ = os.environ if environ is None else environ
    token = (environ.get(TOKEN_ENV_VAR) or "").strip()
    if not token:
        Logger.error(
            f"{TOKEN_ENV_VAR} is not set; export your "
            "GitHub personal access token"
        )
        sys.exit(EXIT_EXECUTION_ERROR)
    return token


def _validate_parsed_arguments(args) -> Config:
    try:
        source_org = SecurityValidator.validate_org_name(args.source_org)
        destination_org = SecurityValidator.validate_org_name(args.destination_org)
        api_url = SecurityValidator.validate_url(args.gh_api_url, ["https"])
        workspace = SecurityValidator.validate_file_path(args.workspace)
        repos = [
            SecurityValidator.validate_repo_name(name) for name in _collect_repos(args)
        ]
    except (ValueError, OSError) as e:
        Logger.security_event(
            "CONFIG_VALIDATION_FAILED", f"configuration validation failed: {e}"
        )
        Logger.error(f"configuration validation error: {e}")
        sys.exit(EXIT_EXECUTION_ERROR)

    return Config(
        github=GitHubConfig(api_url=api_url, token=""),
        transfer=TransferConfig(
            source_org=source_org,
            destination_org=destination_org,
            repos=repos,
            dry_run=args.dry_run,
        ),
        naming=NamingConfig(prepend_prefix=args.prepend_prefix),
        git=GitOperationConfig(
            workspace=workspace,
            clone_method=CloneMethod(args.clone_method),
            push_method=CloneMethod(args.push_method),
        ),
    )


def parse_arguments(argv: Optional[List[str]] = None) -> Config:
    """Parse command line arguments and return configuration object."""
    parser = _create_argument_parser()
    _add_behavior_arguments(parser)
    args = parser.parse_args(argv)

    # Checked before anything touches the workspace or the network
    token = get_token()

    cfg = _validate_parsed_arguments(args)
    cfg.github.token = token
    return cfg
