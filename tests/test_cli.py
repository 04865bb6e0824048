"""Tests for the deckard_github command line script."""

import importlib.util
from pathlib import Path
from unittest.mock import patch

import pytest

from deckard_github import ArchiveLink, FileContents, RepositoryNotFoundError

SCRIPT = Path(__file__).parent.parent / "scripts" / "deckard_github.py"


@pytest.fixture
def cli(monkeypatch):
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.delenv("GITHUB_API_URL", raising=False)
    spec = importlib.util.spec_from_file_location("deckard_github_cli", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    monkeypatch.setattr(module, "load_dotenv", lambda: None)
    return module


@pytest.fixture
def mock_client(cli):
    with patch.object(cli, "GitHubClient") as cls:
        yield cls


def test_token_flag_wins_over_env(cli, mock_client, monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "from-env")
    mock_client.return_value.check_rate_limit.return_value = "Rate limit: 1/2 (resets at ?)"

    cli.main(["--token", "from-flag", "rate-limit"])

    mock_client.assert_called_once_with(token="from-flag", base_url="https://api.github.com")


def test_users(cli, mock_client, capsys):
    mock_client.return_value.get_users.return_value = "*Here's a list*\nalice"

    cli.main(["users", "org"])

    mock_client.return_value.get_users.assert_called_once_with("org")
    assert "alice" in capsys.readouterr().out


def test_archive(cli, mock_client, capsys):
    mock_client.return_value.get_archive.return_value = ArchiveLink("https://x/tar", "abc123")

    cli.main(["archive", "org", "repo", "main"])

    out = capsys.readouterr().out
    assert "Archive: https://x/tar" in out
    assert "Commit: abc123" in out


def test_file_to_output(cli, mock_client, tmp_path, capsys):
    mock_client.return_value.get_file.return_value = FileContents(b"\x89PNG", "https://raw/x.png")
    target = tmp_path / "x.png"

    cli.main(["file", "org", "repo", "x.png", "-o", str(target)])

    assert target.read_bytes() == b"\x89PNG"
    assert "Download URL: https://raw/x.png" in capsys.readouterr().out


def test_issue(cli, mock_client):
    mock_client.return_value.create_issue.return_value = "*Issue # 1 has been created successfully*"

    cli.main(["issue", "org", "repo", "Broken build"])

    mock_client.return_value.create_issue.assert_called_once_with("org", "repo", "Broken build")


def test_octocat_default_message(cli, mock_client):
    mock_client.return_value.octocat.return_value = "art"

    cli.main(["octocat"])

    mock_client.return_value.octocat.assert_called_once_with("")


def test_error_exits_nonzero(cli, mock_client, capsys):
    mock_client.return_value.get_archive.side_effect = RepositoryNotFoundError(
        "Github repo not found: repo"
    )

    with pytest.raises(SystemExit) as exc:
        cli.main(["archive", "org", "repo", "main"])

    assert exc.value.code == 1
    assert "Error: Github repo not found: repo" in capsys.readouterr().out
