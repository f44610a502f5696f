"""Allow running as ``python -m github_release``."""

from github_release.main import main

raise SystemExit(main())
