"""Integration adapter implementations."""

from .github_adapter import GitHubAdapter

__all__ = ["GitHubAdapter"]
