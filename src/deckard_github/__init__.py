"""Thin wrapper around the GitHub REST API for chat bot commands."""

from .client import ArchiveLink, FileContents, GitHubClient
from .errors import (
    BadResponseError,
    BranchNotFoundError,
    DeckardGitHubError,
    RepositoryNotFoundError,
)

__version__ = "1.0.0"
__all__ = [
    "GitHubClient",
    "FileContents",
    "ArchiveLink",
    "DeckardGitHubError",
    "BadResponseError",
    "RepositoryNotFoundError",
    "BranchNotFoundError",
]
