"""Exceptions raised by the GitHub wrapper."""


class DeckardGitHubError(Exception):
    """Base class for wrapper errors."""


class BadResponseError(DeckardGitHubError):
    """GitHub answered, but not with the content we asked for."""


class RepositoryNotFoundError(DeckardGitHubError):
    pass


class BranchNotFoundError(DeckardGitHubError):
    pass
