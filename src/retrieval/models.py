"""Value types for repository statistics and the pages they arrive in."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .errors import DataShapeError, UnsetFieldError


@dataclass(frozen=True)
class Repo:
    """One repository's name plus fork, star, and pull request counters.

    A counter of None means the value was never loaded; zero is a real count.
    """

    name: str
    forks: Optional[int] = None
    stars: Optional[int] = None
    prs: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("repository name must be non-empty")

    def contribution_percentage(self) -> float:
        """Pull requests as a percentage of forks; 0.0 when there are no forks."""
        if self.prs is None:
            raise UnsetFieldError(
                f"cannot calculate contribution percentage for {self.name}: pr count is unset"
            )
        if self.forks is None:
            raise UnsetFieldError(
                f"cannot calculate contribution percentage for {self.name}: fork count is unset"
            )
        if self.forks == 0:
            return 0.0
        return 100.0 * self.prs / self.forks

    def __str__(self) -> str:
        return f"Repo(name={self.name}, forks={self.forks}, stars={self.stars}, prs={self.prs})"


@dataclass(frozen=True)
class PageResult:
    """Repositories from one API response plus where the next page starts."""

    repos: List[Repo] = field(default_factory=list)
    has_next_page: bool = False
    end_cursor: Optional[str] = None
    total_count: Optional[int] = None


def _count(node: Dict[str, Any], *path: str) -> int:
    value: Any = node
    for key in path:
        if not isinstance(value, dict) or key not in value:
            raise DataShapeError(f"repository node is missing '{'.'.join(path)}'")
        value = value[key]
    # bool is an int subclass but never a valid count
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise DataShapeError(f"repository node has invalid '{'.'.join(path)}': {value!r}")
    return value


def repo_from_node(node: Any) -> Repo:
    """Build a fully populated Repo from one `nodes[]` entry, or raise DataShapeError."""
    if not isinstance(node, dict):
        raise DataShapeError(f"repository node is not an object: {node!r}")
    name = node.get("name")
    if not isinstance(name, str) or not name:
        raise DataShapeError("repository node is missing 'name'")
    return Repo(
        name=name,
        forks=_count(node, "forkCount"),
        stars=_count(node, "stargazers", "totalCount"),
        prs=_count(node, "pullRequests", "totalCount"),
    )


__all__ = ["Repo", "PageResult", "repo_from_node"]
