"""Exception hierarchy for listing and ranking organization repositories."""

from __future__ import annotations

from typing import Optional


class RepoStatsError(Exception):
    """Base class for every failure surfaced to the report layer."""


class ConfigurationError(RepoStatsError):
    """The environment is wrong, e.g. the API token is missing or rejected."""


class TransientAPIError(RepoStatsError):
    """A single page attempt failed in a way worth retrying."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DataShapeError(RepoStatsError):
    """A repository node in an otherwise valid page is missing required fields."""


class ExhaustedRetriesError(RepoStatsError):
    """Too many consecutive transient failures while fetching one page."""

    def __init__(self, message: str, attempts: int) -> None:
        super().__init__(message)
        self.attempts = attempts


class UnsetFieldError(RepoStatsError):
    """A derived metric was requested before the counters it needs were set."""


__all__ = [
    "RepoStatsError",
    "ConfigurationError",
    "TransientAPIError",
    "DataShapeError",
    "ExhaustedRetriesError",
    "UnsetFieldError",
]
