"""Tests for src.retrieval.collectors covering cursor pagination end to end.

Run with coverage to exercise the pagination driver:
    pytest tests/test_collectors.py --maxfail=1 -v --cov=src.retrieval.collectors --cov-report=term-missing
"""

import math
from unittest.mock import MagicMock, patch

import pytest

from src.retrieval import collectors
from src.retrieval import config
from src.retrieval import http_client
from src.retrieval.errors import ConfigurationError, ExhaustedRetriesError
from src.retrieval.models import PageResult, Repo


def _repos(start: int, stop: int):
    return [Repo(f"repo-{i}", forks=i, stars=i, prs=i) for i in range(start, stop)]


def _fake_api(total: int, per_page: int):
    """fetch_page stand-in serving `total` repos, cursors being str(offset)."""

    def fetch(org, cursor, token=None):
        offset = int(cursor) if cursor else 0
        stop = min(offset + per_page, total)
        has_next = stop < total
        return PageResult(_repos(offset, stop), has_next, str(stop) if has_next else None, total)

    return MagicMock(side_effect=fetch)


@pytest.mark.parametrize("total", [0, 1, 99, 100, 101, 150, 250])
@patch("src.retrieval.collectors.resolve_token", return_value="tok")
def test_list_repositories_requests_one_call_per_page(mock_token, total, monkeypatch):
    fake = _fake_api(total, 100)
    monkeypatch.setattr(collectors, "fetch_page", fake)

    repos = collectors.list_repositories("acme")

    assert [repo.name for repo in repos] == [f"repo-{i}" for i in range(total)]
    assert fake.call_count == max(1, math.ceil(total / 100))
    mock_token.assert_called_once()


@patch("src.retrieval.collectors.resolve_token", return_value="tok")
def test_list_repositories_follows_end_cursor(mock_token, monkeypatch):
    fake = _fake_api(150, 100)
    monkeypatch.setattr(collectors, "fetch_page", fake)

    repos = collectors.list_repositories("acme")

    assert len(repos) == 150
    cursors = [call.args[1] for call in fake.call_args_list]
    assert cursors == ["", "100"]
    assert all(call.kwargs["token"] == "tok" for call in fake.call_args_list)


@patch("src.retrieval.collectors.resolve_token", return_value="tok")
def test_list_repositories_propagates_terminal_error(mock_token, monkeypatch):
    fake = MagicMock(side_effect=[
        PageResult(_repos(0, 100), True, "c1", 150),
        ExhaustedRetriesError("Giving up after 4 consecutive API failures", 4),
    ])
    monkeypatch.setattr(collectors, "fetch_page", fake)

    with pytest.raises(ExhaustedRetriesError):
        collectors.list_repositories("acme")


@patch("src.retrieval.collectors.resolve_token", side_effect=ConfigurationError("no token"))
def test_list_repositories_requires_token(mock_token, monkeypatch):
    fake = MagicMock()
    monkeypatch.setattr(collectors, "fetch_page", fake)
    with pytest.raises(ConfigurationError):
        collectors.list_repositories("acme")
    fake.assert_not_called()


def _http_resp(status, names=(), has_next=False, cursor=None):
    resp = MagicMock()
    resp.status_code = status
    resp.headers = {}
    resp.json.return_value = {
        "data": {
            "organization": {
                "repositories": {
                    "pageInfo": {"endCursor": cursor, "hasNextPage": has_next},
                    "totalCount": 150,
                    "nodes": [
                        {
                            "name": name,
                            "forkCount": 1,
                            "stargazers": {"totalCount": 1},
                            "pullRequests": {"totalCount": 1},
                        }
                        for name in names
                    ],
                }
            }
        }
    }
    resp.text = "body"
    return resp


@patch("src.retrieval.http_client.sleep_before_retry")
@patch("src.retrieval.http_client.SESSION")
def test_failure_count_resets_between_pages(mock_session, mock_sleep, monkeypatch):
    monkeypatch.setenv(config.TOKEN_ENV_VAR, "tok")
    monkeypatch.setattr(http_client, "MAX_CONSECUTIVE_FAILURES", 3)
    first = [f"a{i}" for i in range(100)]
    second = [f"b{i}" for i in range(50)]
    mock_session.post.side_effect = (
        [_http_resp(500)] * 3
        + [_http_resp(200, first, has_next=True, cursor="c1")]
        + [_http_resp(502)] * 3
        + [_http_resp(200, second)]
    )

    repos = collectors.list_repositories("acme")

    assert [repo.name for repo in repos] == first + second
    assert mock_sleep.call_count == 6
    assert mock_session.post.call_count == 8


@patch("src.retrieval.http_client.sleep_before_retry")
@patch("src.retrieval.http_client.SESSION")
def test_exhausted_second_page_returns_nothing(mock_session, mock_sleep, monkeypatch):
    monkeypatch.setenv(config.TOKEN_ENV_VAR, "tok")
    monkeypatch.setattr(http_client, "MAX_CONSECUTIVE_FAILURES", 3)
    mock_session.post.side_effect = [_http_resp(200, ["a"], has_next=True, cursor="c1")] + [_http_resp(500)] * 4

    with pytest.raises(ExhaustedRetriesError):
        collectors.list_repositories("acme")
    assert mock_sleep.call_count == 3


@patch("src.retrieval.http_client.sleep_before_retry")
@patch("src.retrieval.http_client.SESSION")
def test_auth_failure_on_first_request_never_sleeps(mock_session, mock_sleep, monkeypatch):
    monkeypatch.setenv(config.TOKEN_ENV_VAR, "tok")
    mock_session.post.return_value = _http_resp(401)

    with pytest.raises(ConfigurationError):
        collectors.list_repositories("acme")
    mock_sleep.assert_not_called()
    assert mock_session.post.call_count == 1
