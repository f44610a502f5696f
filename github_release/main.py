"""Command-line entry point for github-release.

Reads settings from the environment, validates the arguments, expands
the asset globs and hands everything to the ReleasePublisher.
"""

import argparse
import glob
import logging
import re
import sys
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from github_release import __version__
from github_release.api.client import GitHubClient
from github_release.api.release import Release
from github_release.config.credentials import CredentialManager
from github_release.config.settings import ConfigError, PublishOptions, Settings
from github_release.publisher.publisher import PublishError, PublishResult, ReleasePublisher
from github_release.utils.logging import setup_logging, get_logger
from github_release.utils.validators import parse_bool, validate_file_path, validate_tag


USAGE = "github-release [options] <user/repo> <tag> <branch>"

DESCRIPTION = """\
GitHub command line release tool.

Parameters:
  <user/repo>: GitHub user and repository
  <tag>: Tag the release is created for; also used as the release's name
  <branch>: Reference the <tag> is created from if it does not exist yet
"""

EPILOG = """\
Environment variables:
  DEBUG: Dump every HTTP request and response. Avoid it when uploading big files.
  GITHUB_TOKEN: Must be set in order to interact with GitHub's API
    (falls back to the token saved in the system keyring)
  GITHUB_USER: Default user when <user/repo> is given as /repo
  GITHUB_REPO: Default repository when <user/repo> is given as user/
  GITHUB_API: GitHub API endpoint. Set to https://api.github.com by default
  GITHUB_RELEASE_TIMEOUT: Optional request timeout in seconds
  GITHUB_RELEASE_LOG_FILE: Optional file receiving a copy of the log

Make sure GITHUB_TOKEN holds a token allowed to create releases in the
repository.
"""

# Boolean flags that may be written as -flag=value
BOOL_FLAGS = ("version", "prerelease", "draft", "recreateDraft", "latest")
BOOL_FLAG_PATTERN = re.compile(r"^--?(%s)=(.*)$" % "|".join(BOOL_FLAGS))


class UsageError(Exception):
    """Raised for malformed command-line arguments."""
    pass


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="github-release",
        usage=USAGE,
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    p.add_argument("positionals", nargs="*", metavar="<user/repo> <tag> <branch>")

    p.add_argument("-version", "--version", dest="version", action="store_true", help="Displays version")
    p.add_argument("-prerelease", "--prerelease", dest="prerelease", action="store_true",
                   help="Identify the release as a prerelease")
    p.add_argument("-draft", "--draft", dest="draft", action="store_true", help="Save as draft, don't publish")
    p.add_argument(
        "-recreateDraft", "--recreateDraft",
        dest="recreate_draft",
        action="store_true",
        help="Delete previous release drafts matching the tag of the release, if they exist",
    )
    p.add_argument(
        "-latest", "--latest",
        dest="latest",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Mark this release as latest (default: true, use -latest=false to disable)",
    )
    p.add_argument("-description", "--description", dest="description", default="",
                   help="Path to a file containing the release description")
    p.add_argument(
        "-assets", "--assets",
        dest="assets",
        default="",
        help="Glob patterns of the files to upload, delimited by whitespace. "
             "Quote them to keep the shell from expanding the patterns.",
    )
    return p


def normalize_bool_flags(argv: Sequence[str]) -> List[str]:
    """
    Rewrite -flag=value booleans into plain flags argparse understands.

    Args:
        argv: Raw arguments

    Returns:
        Arguments with -flag=true turned into --flag and -flag=false
        dropped (or turned into --no-latest)

    Raises:
        UsageError: If a boolean value cannot be parsed
    """
    normalized = []
    for arg in argv:
        match = BOOL_FLAG_PATTERN.match(arg)
        if not match:
            normalized.append(arg)
            continue
        flag, raw = match.groups()
        value, error = parse_bool(raw)
        if error:
            raise UsageError(f"-{flag}: {error}")
        if value:
            normalized.append(f"--{flag}")
        elif flag == "latest":
            normalized.append("--no-latest")
    return normalized


def expand_assets(patterns: str) -> List[str]:
    """
    Expand whitespace-delimited glob patterns into file paths.

    Args:
        patterns: e.g. "dist/*.tar.gz dist/*.zip"

    Returns:
        Matching paths, each pattern's matches sorted, in pattern order
    """
    paths: List[str] = []
    for pattern in patterns.split():
        paths.extend(sorted(glob.glob(pattern)))
    return paths


def read_description(path: str) -> str:
    """
    Read the release description file.

    Raises:
        ConfigError: If the file is missing or unreadable
    """
    is_valid, error = validate_file_path(path, must_exist=True)
    if not is_valid:
        raise ConfigError(f"Failed to read description file '{path}': {error}")
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to read description file '{path}': {e}")


def resolve_token(settings: Settings, credentials: Optional[CredentialManager] = None) -> Settings:
    """
    Make sure settings carry a token, using the keyring when the env has none.

    Raises:
        ConfigError: If no token can be found
    """
    if not settings.token:
        token = (credentials or CredentialManager()).get_token(settings.user)
        if token:
            settings = settings.with_token(token)
    settings.require_token()
    return settings


def publish(settings: Settings, options: PublishOptions, release: Release, filepaths: List[str]) -> PublishResult:
    """Run the publisher against the configured repository."""
    with GitHubClient(
        settings.token,
        settings.repo_endpoint,
        debug=settings.debug,
        timeout=settings.timeout,
    ) as client:
        return ReleasePublisher(client, options).publish(release, filepaths)


def main(
    argv: Optional[Sequence[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
    credentials: Optional[CredentialManager] = None,
) -> int:
    """
    Run the command line tool.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])
        environ: Environment mapping (defaults to os.environ)
        credentials: Keyring access used when GITHUB_TOKEN is unset

    Returns:
        Process exit code
    """
    parser = _build_parser()
    raw_args = list(sys.argv[1:] if argv is None else argv)
    try:
        args = parser.parse_args(normalize_bool_flags(raw_args))
    except UsageError as e:
        parser.error(str(e))

    if args.version:
        print(__version__)
        return 0

    try:
        settings = Settings.from_env(environ)
    except ConfigError as e:
        setup_logging()
        get_logger().error(f"Error: {e}")
        return 1

    logger = setup_logging(
        level=logging.DEBUG if settings.debug else logging.INFO,
        log_file=settings.log_file,
    )

    try:
        if len(args.positionals) != 3:
            raise UsageError(
                f"Invalid number of arguments (got {len(args.positionals)}, expected 3)"
            )
        if not args.description:
            raise ConfigError("No -description file supplied.")

        user_repo, tag, branch = args.positionals
        is_valid, error = validate_tag(tag)
        if not is_valid:
            raise UsageError(error)

        settings = resolve_token(settings.with_repository(user_repo), credentials)
        filepaths = expand_assets(args.assets)
        body = read_description(args.description)
    except UsageError as e:
        logger.error(f"Error: {e}\n")
        logger.error(parser.format_usage())
        return 1
    except ConfigError as e:
        logger.error(f"Error: {e}")
        return 1

    if settings.debug:
        logger.debug(f"Glob patterns received: {args.assets}")
        logger.debug(f"Expanded glob patterns: {filepaths}")
        logger.debug(f"description: {body}")

    release = Release.for_tag(
        tag,
        branch,
        body=body,
        draft=args.draft,
        prerelease=args.prerelease,
        latest=args.latest,
    )
    options = PublishOptions(recreate_draft=args.recreate_draft)

    try:
        result = publish(settings, options, release, filepaths)
    except PublishError as e:
        logger.error(f"Error: {e}")
        return 1

    if not result.ok:
        summary = result.summary()
        logger.warning(
            f"{summary['failed']} of {summary['total']} asset uploads failed"
        )

    logger.info("Done")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
