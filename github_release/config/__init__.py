"""Configuration module for github-release.

This module handles run settings and credentials:
- Settings: explicit configuration value read from the environment
- PublishOptions: per-run publishing behaviour
- CredentialManager: keyring fallback for the GitHub token
"""
