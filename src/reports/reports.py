"""Report selection: pick a metric, rank repositories by it, and tabulate the top N."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Union

from src.retrieval.collectors import list_repositories
from src.retrieval.errors import UnsetFieldError
from src.retrieval.models import Repo

from .table import ColSpec, Table

logger = logging.getLogger(__name__)

Metric = Callable[[Repo], Union[int, float]]

NAME_COLUMN = ColSpec("repo", "%-40s", "%-40s")


class ReportType(Enum):
    FORKS = "forks"
    STARS = "stars"
    PRS = "prs"
    CONTRIB_PCT = "contrib-pct"


@dataclass(frozen=True)
class ReportSpec:
    """The value column shown next to the repo name and the metric it ranks by."""

    column: ColSpec
    metric: Metric


def _counter(field_name: str) -> Metric:
    def metric(repo: Repo) -> int:
        value = getattr(repo, field_name)
        if value is None:
            raise UnsetFieldError(f"{field_name} count is unset for {repo.name}")
        return value

    return metric


def _contribution_percentage(repo: Repo) -> float:
    return repo.contribution_percentage()


REPORT_SPECS = {
    ReportType.FORKS: ReportSpec(ColSpec("forks", "%10s", "%10d"), _counter("forks")),
    ReportType.STARS: ReportSpec(ColSpec("stars", "%10s", "%10d"), _counter("stars")),
    ReportType.PRS: ReportSpec(ColSpec("prs", "%10s", "%10d"), _counter("prs")),
    ReportType.CONTRIB_PCT: ReportSpec(ColSpec("contribPct", "%15s", "%15.2f"), _contribution_percentage),
}


def top_n(repos: Iterable[Repo], metric: Metric, n: int) -> List[Repo]:
    """Sort descending by `metric`, ties keep input order, and keep at most `n`.

    n <= 0 yields an empty list; n past the end yields everything.
    """
    if n <= 0:
        return []
    return sorted(repos, key=metric, reverse=True)[:n]


def create_table(report_type: ReportType, repos: List[Repo], n: int) -> Table:
    spec = REPORT_SPECS[report_type]
    table = Table([NAME_COLUMN, spec.column])
    for repo in top_n(repos, spec.metric, n):
        table.add_record({NAME_COLUMN.name: repo.name, spec.column.name: spec.metric(repo)})
    return table


def generate(report_type: ReportType, org: str, n: int) -> str:
    """List `org` repositories and render the top `n` for `report_type` as text."""
    logger.info("Listing repositories for organization %s", org)
    repos = list_repositories(org)
    return create_table(report_type, repos, n).format_table()


__all__ = [
    "NAME_COLUMN",
    "ReportType",
    "ReportSpec",
    "REPORT_SPECS",
    "top_n",
    "create_table",
    "generate",
]
