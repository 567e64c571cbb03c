"""Remote store adapters."""

from pinsync.remote.github import GitHubContentStore

__all__ = ["GitHubContentStore"]
