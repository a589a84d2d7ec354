"""HTTP and GraphQL helpers with retry/backoff logic for listing repositories."""

from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, Optional

import requests

from src.secrets import local_github_token

from .config import (
    AUTH_FAILURE_STATUSES,
    ERROR_BODY_PREVIEW_CHARS,
    GRAPHQL_URL,
    MAX_CONSECUTIVE_FAILURES,
    REQUEST_TIMEOUT,
    RETRY_DELAY_MS,
    TOKEN_ENV_VAR,
    USER_AGENT,
)
from .errors import ConfigurationError, ExhaustedRetriesError, TransientAPIError
from .models import PageResult, repo_from_node
from .queries import build_repos_query

logger = logging.getLogger(__name__)

SESSION = requests.Session()
SESSION.headers.update(
    {
        "Accept": "application/json",
        "Content-Type": "application/json",
        "User-Agent": USER_AGENT,
    }
)


def resolve_token() -> str:
    """Return the API token from the environment or local secrets, else fail."""
    token = (os.getenv(TOKEN_ENV_VAR) or "").strip() or local_github_token()
    if not token:
        raise ConfigurationError(f"Must define {TOKEN_ENV_VAR} to access the GitHub GraphQL API")
    return token


def graphql_headers(token: str) -> Dict[str, str]:
    """Per-request headers; the shared SESSION carries everything else."""
    return {"Authorization": f"bearer {token}"}


def sleep_before_retry(delay_ms: int = RETRY_DELAY_MS) -> None:
    """Fixed pause between attempts at the same page."""
    time.sleep(max(0, delay_ms) / 1000.0)


def _preview(text: Optional[str]) -> str:
    return (text or "")[:ERROR_BODY_PREVIEW_CHARS]


def log_http_error(resp: requests.Response, url: str) -> None:
    """Log a short, human-readable message when GitHub returns an error."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    msg = body.get("message") if isinstance(body, dict) else None
    logger.warning("HTTP %s for %s -> %s", resp.status_code, url, msg or _preview(resp.text))


def _graphql_error_messages(body: Dict[str, Any]) -> str:
    errors = body.get("errors") or []
    if not isinstance(errors, list):
        return str(errors)
    return ", ".join(str(err.get("message")) for err in errors if isinstance(err, dict))


def parse_repositories_page(body: Any) -> PageResult:
    """Turn a decoded response body into a PageResult.

    Missing page-level structure raises TransientAPIError; a malformed
    repository node raises DataShapeError from repo_from_node.
    """
    if not isinstance(body, dict):
        raise TransientAPIError("Unexpected JSON structure: body is not an object", 200, _preview(str(body)))

    data = body.get("data")
    organization = data.get("organization") if isinstance(data, dict) else None
    repositories = organization.get("repositories") if isinstance(organization, dict) else None
    if not isinstance(repositories, dict):
        detail = _graphql_error_messages(body)
        msg = "Unexpected JSON sub-structure: missing data.organization.repositories"
        if detail:
            msg = f"{msg} (GraphQL errors: {detail})"
        raise TransientAPIError(msg, 200, _preview(str(body)))

    nodes = repositories.get("nodes")
    if not isinstance(nodes, list):
        raise TransientAPIError("Could not parse out nodes array from response body", 200, _preview(str(body)))

    page_info = repositories.get("pageInfo")
    if not isinstance(page_info, dict) or not isinstance(page_info.get("hasNextPage"), bool):
        raise TransientAPIError("Could not parse out pageInfo from response body", 200, _preview(str(body)))

    has_next_page = page_info["hasNextPage"]
    end_cursor = page_info.get("endCursor")
    if end_cursor is not None and not isinstance(end_cursor, str):
        raise TransientAPIError(f"endCursor is not a string: {end_cursor!r}", 200, _preview(str(body)))
    if has_next_page and not end_cursor:
        raise TransientAPIError("hasNextPage is set but endCursor is missing", 200, _preview(str(body)))

    total_count = repositories.get("totalCount")
    if not isinstance(total_count, int) or isinstance(total_count, bool):
        total_count = None

    logger.debug("Nodes retrieved: %s", nodes)
    return PageResult(
        repos=[repo_from_node(node) for node in nodes],
        has_next_page=has_next_page,
        end_cursor=end_cursor,
        total_count=total_count,
    )


def request_page(org: str, cursor: str, token: str) -> PageResult:
    """Make exactly one attempt at a page and classify the outcome."""
    payload = build_repos_query(org, cursor)
    try:
        resp = SESSION.post(
            GRAPHQL_URL, json=payload, headers=graphql_headers(token), timeout=REQUEST_TIMEOUT
        )
    except requests.RequestException as exc:
        raise TransientAPIError(f"request failed: {exc}") from exc

    if resp.status_code in AUTH_FAILURE_STATUSES:
        log_http_error(resp, GRAPHQL_URL)
        raise ConfigurationError(
            f"GitHub rejected the credentials (HTTP {resp.status_code}). "
            f"Is {TOKEN_ENV_VAR} set to a valid token in your environment?"
        )
    if resp.status_code != 200:
        log_http_error(resp, GRAPHQL_URL)
        raise TransientAPIError(f"status code = {resp.status_code}", resp.status_code, _preview(resp.text))

    try:
        body = resp.json()
    except ValueError as exc:
        raise TransientAPIError("response body is not valid JSON", 200, _preview(resp.text)) from exc
    return parse_repositories_page(body)


def fetch_page(org: str, cursor: str = "", token: Optional[str] = None) -> PageResult:
    """Fetch one page, retrying the same cursor on transient failures.

    Gives up with ExhaustedRetriesError once consecutive failures exceed
    MAX_CONSECUTIVE_FAILURES. Configuration and data-shape errors are raised
    on the first occurrence.
    """
    token = token or resolve_token()
    consecutive_failures = 0
    while True:
        try:
            return request_page(org, cursor, token)
        except TransientAPIError as exc:
            consecutive_failures += 1
            logger.warning("%s", exc)
            if exc.body:
                logger.debug("Failed response body: %s", exc.body)
            logger.warning("Failed %d times in a row...", consecutive_failures)
            if consecutive_failures > MAX_CONSECUTIVE_FAILURES:
                raise ExhaustedRetriesError(
                    f"Giving up after {consecutive_failures} consecutive API failures",
                    consecutive_failures,
                ) from exc
            sleep_before_retry()


__all__ = [
    "SESSION",
    "resolve_token",
    "graphql_headers",
    "sleep_before_retry",
    "log_http_error",
    "parse_repositories_page",
    "request_page",
    "fetch_page",
]
