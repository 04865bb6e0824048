"""GitHub REST API client wrapping PyGithub with chat-friendly results."""

import logging
import os
from typing import List, NamedTuple, Optional

import requests
from github import Auth, Github, GithubException

from .constants import (
    API_URL_ENV_VAR,
    ARCHIVE_FORMAT,
    DEFAULT_API_URL,
    DEFAULT_ISSUE_BODY,
    PER_PAGE,
    REQUEST_TIMEOUT,
    TOKEN_ENV_VAR,
)
from .errors import (
    BadResponseError,
    BranchNotFoundError,
    DeckardGitHubError,
    RepositoryNotFoundError,
)
from .utils import (
    format_issue_created,
    format_rate_limit_info,
    format_status,
    format_user_list,
    seconds_until_reset,
)

logger = logging.getLogger(__name__)


class FileContents(NamedTuple):
    content: bytes
    download_url: str


class ArchiveLink(NamedTuple):
    url: str
    sha: str


class GitHubClient:
    """Client for the GitHub REST API, authenticated or anonymous."""

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = DEFAULT_API_URL,
        gh_instance: Optional[Github] = None,
    ):
        """
        Initialize the GitHub client.

        Args:
            token: GitHub Personal Access Token. Without one the client is
                anonymous and can still read public resources.
            base_url: GitHub API base URL (GitHub Enterprise hosts differ)
            gh_instance: Optional Github instance for testing
        """
        self.token = token or None
        self.base_url = base_url.rstrip('/')

        if gh_instance is not None:
            self.gh = gh_instance
        elif self.token:
            self.gh = Github(
                auth=Auth.Token(self.token),
                base_url=self.base_url,
                per_page=PER_PAGE,
                timeout=REQUEST_TIMEOUT,
            )
        else:
            self.gh = Github(
                base_url=self.base_url,
                per_page=PER_PAGE,
                timeout=REQUEST_TIMEOUT,
            )

        # Used for endpoints PyGithub does not model
        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/vnd.github+json"})
        if self.token:
            self.session.headers["Authorization"] = f"Bearer {self.token}"

    @classmethod
    def from_env(cls) -> "GitHubClient":
        """Build a client from GITHUB_TOKEN and GITHUB_API_URL."""
        return cls(
            token=os.environ.get(TOKEN_ENV_VAR),
            base_url=os.environ.get(API_URL_ENV_VAR) or DEFAULT_API_URL,
        )

    def get_file(self, org: str, repo: str, path: str) -> FileContents:
        """
        Fetch a file from a repository's default branch.

        Args:
            org: Repository owner
            repo: Repository name
            path: Path of the file inside the repository

        Returns:
            The decoded file contents and the file's download URL

        Raises:
            BadResponseError: On a non-200 answer or when path is a directory
        """
        try:
            contents = self.gh.get_repo(f"{org}/{repo}").get_contents(path)
        except GithubException as e:
            raise BadResponseError(
                f"Bad response from Github: {format_status(e.status)}"
            ) from e

        if isinstance(contents, list):
            raise BadResponseError(f"Path is a directory: {path}")

        # Large files, symlinks and submodules come back without base64 content
        if contents.encoding != "base64":
            raise BadResponseError(
                f"Unsupported content encoding {contents.encoding!r} for {path}"
            )

        return FileContents(contents.decoded_content, contents.download_url or "")

    def check_rate_limit(self) -> str:
        """
        Query the API rate limit and write it to the debug log.

        Returns:
            Formatted rate limit line, or "Rate limit: unavailable" on error
        """
        try:
            core = self.gh.get_rate_limit().resources.core
        except (GithubException, requests.exceptions.RequestException) as e:
            logger.debug("Error fetching Github rate limit: %r", e)
            return "Rate limit: unavailable"

        info = format_rate_limit_info(
            {'remaining': core.remaining, 'limit': core.limit, 'reset': core.reset}
        )
        logger.debug(
            "Github API %s, %.0fs until reset", info, seconds_until_reset(core.reset)
        )
        return info

    def _check_repo(self, org: str, repo: str) -> bool:
        """Return True if repo is one of org's repositories visible to us."""
        names: List[str] = []
        # Iterating the paginated list fetches PER_PAGE repos per request
        try:
            for r in self.gh.get_organization(org).get_repos():
                names.append(r.name)
        except (GithubException, requests.exceptions.RequestException) as e:
            logger.error("Could not list repositories for %s: %s", org, e)

        for name in names:
            logger.info("r.Name: %s", name)
            if name == repo:
                return True
        return False

    def check_repo_and_branch(self, org: str, repo: str, branch: str) -> None:
        """
        Confirm the repository exists and has the given branch.

        Raises:
            RepositoryNotFoundError: If org has no such repository
            BranchNotFoundError: If the repository has no such branch
            DeckardGitHubError: If the branches could not be listed
        """
        if not self._check_repo(org, repo):
            raise RepositoryNotFoundError(f"Github repo not found: {repo}")

        try:
            branch_names = [
                b.name for b in self.gh.get_repo(f"{org}/{repo}").get_branches()
            ]
        except (GithubException, requests.exceptions.RequestException) as e:
            raise DeckardGitHubError(
                f"Could not fetch branches for {repo}: {e}"
            ) from e

        if branch not in branch_names:
            raise BranchNotFoundError(
                f"No branch named {branch} found in repo {repo}"
            )

    def get_archive(self, org: str, repo: str, branch: str) -> ArchiveLink:
        """
        Get a tarball link for a branch along with the branch's commit SHA.

        Args:
            org: Repository owner
            repo: Repository name
            branch: Branch to archive

        Returns:
            ArchiveLink with the download URL and head commit SHA
        """
        self.check_repo_and_branch(org, repo, branch)

        repository = self.gh.get_repo(f"{org}/{repo}")
        try:
            archive_url = repository.get_archive_link(ARCHIVE_FORMAT, ref=branch)
        except GithubException as e:
            logger.error("Could not get archive URL: %s", e)
            raise

        sha = repository.get_branch(branch).commit.sha
        return ArchiveLink(archive_url, sha)

    def get_users(self, org: str) -> str:
        """
        List the usernames of every member of an organization.

        Handy for picking an assignee when the GitHub username of a person
        is not known. Errors are returned as the message text.
        """
        logins: List[str] = []
        try:
            for user in self.gh.get_organization(org).get_members():
                logger.debug("Github Username: %s", user.login)
                logins.append(user.login)
        except (GithubException, requests.exceptions.RequestException) as e:
            return f"Could not fetch users for {org}: {e}"

        return format_user_list(org, logins)

    def create_issue(
        self,
        org: str,
        repo: str,
        title: str,
        body: str = DEFAULT_ISSUE_BODY,
    ) -> str:
        """
        Create an issue in a repository and describe the outcome.

        Returns:
            Success message with issue number and URL, or a failure message
        """
        if not self._check_repo(org, repo):
            return f"PANIC: `{repo}` Repository Does Not Exist"

        try:
            issue = self.gh.get_repo(f"{org}/{repo}").create_issue(
                title=title, body=body
            )
        except (GithubException, requests.exceptions.RequestException) as e:
            return f"Error occurred when creating issue: {e}"

        logger.debug("Issue URL: %s", issue.html_url)
        logger.debug("Issue number: %d", issue.number)

        return format_issue_created(issue.number, issue.html_url)

    def octocat(self, message: str = "") -> str:
        """
        Fetch the octocat ASCII art, optionally saying the given message.

        Raises:
            requests.HTTPError: On a non-2xx response
        """
        params = {"s": message} if message else None
        response = self.session.get(
            f"{self.base_url}/octocat", params=params, timeout=REQUEST_TIMEOUT
        )
        response.raise_for_status()
        return response.text
