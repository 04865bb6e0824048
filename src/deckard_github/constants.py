"""Constants shared by the GitHub wrapper."""

DEFAULT_API_URL = "https://api.github.com"

# Page size for every paginated list call (repos, branches, members)
PER_PAGE = 10

# Archive links are always requested as tarballs
ARCHIVE_FORMAT = "tarball"

DEFAULT_ISSUE_BODY = "Issue created by the Deckard Chatbot Plugin"

# Seconds before an HTTP request is abandoned
REQUEST_TIMEOUT = 30

TOKEN_ENV_VAR = "GITHUB_TOKEN"
API_URL_ENV_VAR = "GITHUB_API_URL"
