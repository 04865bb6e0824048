"""Shared fixtures for the GitHub wrapper tests."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from deckard_github import GitHubClient


def named(*names):
    """Objects exposing .name, like PyGithub repositories and branches."""
    return [SimpleNamespace(name=n) for n in names]


@pytest.fixture
def gh():
    return MagicMock()


@pytest.fixture
def client(gh):
    return GitHubClient(token="test-token", gh_instance=gh)
