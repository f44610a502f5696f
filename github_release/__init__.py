"""github-release: publish GitHub releases from the command line.

This package creates (or reuses) the release for a tag and uploads
local files to it as release assets:
- api: GitHub REST client and the Release entity
- publisher: release publishing, draft cleanup and asset uploads
- config: settings from the environment and keyring credentials
- utils: logging, validation and threading helpers
- main: command-line entry point
"""

__all__ = ["__version__"]

__version__ = "1.0.0"
