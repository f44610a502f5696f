"""Utility module for github-release.

This module provides cross-cutting utilities:
- Logging: Configured logging with credential redaction
- Validators: Input validation for repository slug, tag, paths and env values
- Threading: Background task helpers for the concurrent upload fan-out
"""
