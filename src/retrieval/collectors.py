"""Collect every repository of an organization by walking the GraphQL cursor."""

from __future__ import annotations

import logging
from typing import List

from .config import PER_PAGE
from .http_client import fetch_page, resolve_token
from .models import Repo

logger = logging.getLogger(__name__)


def list_repositories(org: str) -> List[Repo]:
    """Return all repositories of `org` in API order, or raise on any terminal error."""
    token = resolve_token()
    repos: List[Repo] = []
    cursor = ""
    page_number = 1
    while True:
        logger.info("Requesting page %d of %d items.", page_number, PER_PAGE)
        page = fetch_page(org, cursor, token=token)
        if page_number == 1 and page.total_count is not None:
            logger.info("Organization %s reports %d repositories", org, page.total_count)
        repos.extend(page.repos)
        if not page.has_next_page:
            break
        cursor = page.end_cursor or ""
        page_number += 1
    logger.info("Collected %d repositories for %s in %d page(s)", len(repos), org, page_number)
    return repos


__all__ = ["list_repositories"]
