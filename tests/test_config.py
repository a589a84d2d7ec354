"""Tests for the retrieval constants and the report CLI configuration.

Run with coverage to validate configuration handling:
    pytest tests/test_config.py --maxfail=1 -v --cov=src.retrieval.config --cov=src.reports.config --cov-report=term-missing
"""

from importlib import reload

import pytest

import src.retrieval.config as retrieval_config
from src.reports import config
from src.reports.reports import ReportType


def test_retrieval_defaults_are_present():
    assert retrieval_config.PER_PAGE > 0
    assert retrieval_config.MAX_CONSECUTIVE_FAILURES >= 1
    assert retrieval_config.TOKEN_ENV_VAR == "GITHUB_OAUTH_TOKEN"
    assert retrieval_config.AUTH_FAILURE_STATUSES == (401, 403)


def test_retrieval_env_overrides(monkeypatch):
    monkeypatch.delenv("REPO_STATS_RETRY_DELAY_MS", raising=False)
    monkeypatch.delenv("REPO_STATS_REQUEST_TIMEOUT", raising=False)
    monkeypatch.setenv("REPO_STATS_MAX_CONSEC_FAILURES", "5")
    reloaded = reload(retrieval_config)
    try:
        assert reloaded.MAX_CONSECUTIVE_FAILURES == 5
        assert reloaded.RETRY_DELAY_MS == 2000
        assert reloaded.REQUEST_TIMEOUT == 10
    finally:
        monkeypatch.delenv("REPO_STATS_MAX_CONSEC_FAILURES", raising=False)
        reload(retrieval_config)


def test_resolve_settings_from_cli():
    args = config.parse_args(["--org", "google", "--N", "5", "--contrib-pct", "--verbose"])
    settings = config.resolve_settings(args)
    assert settings == config.ReportSettings(
        org="google", top_n=5, report_type=ReportType.CONTRIB_PCT, verbose=True
    )


@pytest.mark.parametrize(
    "flag, report_type",
    [
        ("--forks", ReportType.FORKS),
        ("--stars", ReportType.STARS),
        ("--prs", ReportType.PRS),
        ("--contrib-pct", ReportType.CONTRIB_PCT),
    ],
)
def test_each_report_flag(flag, report_type):
    settings = config.resolve_settings(config.parse_args(["--org", "acme", flag]))
    assert settings.report_type is report_type
    assert settings.top_n == config.DEFAULT_TOP_N
    assert settings.verbose is False


@pytest.mark.parametrize(
    "argv",
    [
        ["--org", "acme"],
        ["--org", "acme", "--forks", "--stars"],
        ["--forks"],
        ["--org", 'acme") {', "--forks"],
        ["--org", "-acme", "--forks"],
        ["--org", "acme", "--forks", "--N", "many"],
    ],
)
def test_invalid_arguments_exit(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        config.parse_args(argv)
    assert excinfo.value.code == 2


def test_org_login_accepts_github_names():
    assert config.org_login(" my-org2 ") == "my-org2"
    assert config.org_login("a" * 39) == "a" * 39
