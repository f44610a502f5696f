"""Input validators for github-release.

Provides validation functions for command-line inputs like the
repository slug, the release tag and the description file.
"""

import re
from pathlib import Path
from typing import Optional, Tuple, Union


# GitHub owner / repository name pattern
NAME_PATTERN = re.compile(r'^[A-Za-z0-9_.-]+$')

# Values accepted for boolean environment variables and flags
TRUE_VALUES = {"1", "t", "true", "y", "yes", "on"}
FALSE_VALUES = {"0", "f", "false", "n", "no", "off", ""}


def split_user_repo(
    value: str,
    default_user: str = "",
    default_repo: str = ""
) -> Tuple[Optional[Tuple[str, str]], Optional[str]]:
    """
    Split a "user/repo" argument.

    An empty component is filled from the matching default.

    Args:
        value: Argument as typed on the command line
        default_user: Fallback owner
        default_repo: Fallback repository

    Returns:
        Tuple of ((user, repo), error_message)
    """
    parts = (value or "").split("/")
    if len(parts) != 2:
        return None, f"Invalid format used for username and repository: {value}"

    user = parts[0].strip() or default_user
    repo = parts[1].strip() or default_repo

    if not user or not repo:
        return None, f"Invalid format used for username and repository: {value}"

    for label, name in (("username", user), ("repository", repo)):
        if not NAME_PATTERN.match(name):
            return None, f"Invalid {label}: {name}"

    return (user, repo), None


def validate_tag(tag: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a release tag.

    Args:
        tag: Tag name

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not tag or not tag.strip():
        return False, "Tag is required"

    if any(c.isspace() for c in tag):
        return False, f"Tag cannot contain whitespace: {tag!r}"

    return True, None


def validate_file_path(path: Union[str, Path], must_exist: bool = True) -> Tuple[bool, Optional[str]]:
    """
    Validate a file path.

    Args:
        path: Path to validate
        must_exist: If True, file must exist

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not path:
        return False, "File path is required"

    if isinstance(path, str):
        path = Path(path)

    if must_exist:
        if not path.exists():
            return False, f"File does not exist: {path}"
        if not path.is_file():
            return False, f"Path is not a file: {path}"

    return True, None


def parse_bool(value: Optional[str]) -> Tuple[Optional[bool], Optional[str]]:
    """
    Parse a boolean flag or environment value.

    Args:
        value: Raw string (None counts as false)

    Returns:
        Tuple of (parsed_value, error_message)
    """
    normalized = (value or "").strip().lower()
    if normalized in TRUE_VALUES:
        return True, None
    if normalized in FALSE_VALUES:
        return False, None
    return None, f"Invalid boolean value: {value!r}"


def parse_timeout(value: Optional[str]) -> Tuple[Optional[float], Optional[str]]:
    """
    Parse an optional request timeout in seconds.

    Args:
        value: Raw string; empty means no timeout

    Returns:
        Tuple of (timeout_or_None, error_message)
    """
    if value is None or not value.strip():
        return None, None

    try:
        timeout = float(value)
    except (ValueError, TypeError):
        return None, "Timeout must be a number"

    if timeout <= 0:
        return None, f"Timeout must be positive, got {value}"

    return timeout, None
