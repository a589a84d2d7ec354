"""GraphQL query construction for listing an organization's repositories."""

from __future__ import annotations

import json
import logging
from typing import Dict, Optional

from .config import PER_PAGE

logger = logging.getLogger(__name__)

# %(...)s slots receive already-escaped GraphQL literals.
ORG_REPOS_QUERY = """
query {
  organization(login: %(org)s) {
    repositories(first: %(first)d, after: %(after)s) {
      pageInfo { endCursor hasNextPage }
      totalCount
      nodes {
        name
        forkCount
        stargazers { totalCount }
        pullRequests { totalCount }
      }
    }
  }
}
"""


def graphql_string(value: str) -> str:
    """Render `value` as a GraphQL string literal.

    GraphQL string escapes are a subset-compatible match for JSON's, so quotes,
    backslashes and control characters cannot break out of the literal.
    """
    return json.dumps(value, ensure_ascii=False)


def build_repos_query(org: str, cursor: Optional[str] = "", per_page: int = PER_PAGE) -> Dict[str, str]:
    """Return the POST body requesting one page of `org` repositories after `cursor`.

    An empty or missing cursor requests the first page.
    """
    document = " ".join(ORG_REPOS_QUERY.split()) % {
        "org": graphql_string(org),
        "first": per_page,
        "after": graphql_string(cursor) if cursor else "null",
    }
    logger.debug("Created query string: %s", document)
    return {"query": document}


__all__ = ["ORG_REPOS_QUERY", "graphql_string", "build_repos_query"]
