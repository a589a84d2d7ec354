"""Central configuration constants for the organization repository listing."""

from __future__ import annotations

import os

USER_AGENT = "org-repo-stats/1.0"
GRAPHQL_URL = os.getenv("GITHUB_GRAPHQL_URL", "https://api.github.com/graphql")
TOKEN_ENV_VAR = "GITHUB_OAUTH_TOKEN"
PER_PAGE = int(os.getenv("REPO_STATS_PER_PAGE", "100"))  # GitHub caps `first` at 100
REQUEST_TIMEOUT = float(os.getenv("REPO_STATS_REQUEST_TIMEOUT", "10"))
RETRY_DELAY_MS = int(os.getenv("REPO_STATS_RETRY_DELAY_MS", "2000"))
MAX_CONSECUTIVE_FAILURES = int(os.getenv("REPO_STATS_MAX_CONSEC_FAILURES", "3"))
AUTH_FAILURE_STATUSES = (401, 403)
ERROR_BODY_PREVIEW_CHARS = 300

__all__ = [
    "USER_AGENT",
    "GRAPHQL_URL",
    "TOKEN_ENV_VAR",
    "PER_PAGE",
    "REQUEST_TIMEOUT",
    "RETRY_DELAY_MS",
    "MAX_CONSECUTIVE_FAILURES",
    "AUTH_FAILURE_STATUSES",
    "ERROR_BODY_PREVIEW_CHARS",
]
