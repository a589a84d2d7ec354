"""Command-line configuration for the repository ranking reports."""

from __future__ import annotations

import argparse
import re
from dataclasses import dataclass
from typing import List, Optional

from src.retrieval.config import TOKEN_ENV_VAR

from .reports import ReportType

DEFAULT_TOP_N = 10

# GitHub logins: alphanumerics and single inner hyphens, at most 39 characters.
ORG_LOGIN_PATTERN = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9]|-(?=[A-Za-z0-9])){0,38}$")

PROLOGUE = (
    "Show top github.com repos by fork count, star count, pull request count, "
    "and contribution rate"
)
EPILOGUE = f"""In order to access github.com's API, you must obtain an OAuth token:

    {TOKEN_ENV_VAR}=<token> python run_report.py --forks --org google

https://docs.github.com/en/graphql/guides/forming-calls-with-graphql#authenticating-with-graphql
"""


@dataclass(frozen=True)
class ReportSettings:
    """Resolved runtime settings for one report run."""

    org: str
    top_n: int
    report_type: ReportType
    verbose: bool


def org_login(value: str) -> str:
    value = value.strip()
    if not ORG_LOGIN_PATTERN.match(value):
        raise argparse.ArgumentTypeError(f"not a valid GitHub organization name: {value!r}")
    return value


def build_arg_parser() -> argparse.ArgumentParser:
    """Return the CLI parser used by the report entry point."""

    parser = argparse.ArgumentParser(
        description=PROLOGUE,
        epilog=EPILOGUE,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--org", required=True, type=org_login, help="GitHub organization name")
    parser.add_argument(
        "--N", "-n", dest="top_n", type=int, default=DEFAULT_TOP_N, help="Show top N results"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log progress to stderr")

    kinds = parser.add_mutually_exclusive_group(required=True)
    kinds.add_argument("--forks", dest="report_type", action="store_const", const=ReportType.FORKS,
                       help="Rank by fork count")
    kinds.add_argument("--stars", dest="report_type", action="store_const", const=ReportType.STARS,
                       help="Rank by star count")
    kinds.add_argument("--prs", dest="report_type", action="store_const", const=ReportType.PRS,
                       help="Rank by pull request count")
    kinds.add_argument("--contrib-pct", dest="report_type", action="store_const",
                       const=ReportType.CONTRIB_PCT,
                       help="Rank by pull requests as a percentage of forks")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments; accepts argv overrides for testing."""

    return build_arg_parser().parse_args(argv)


def resolve_settings(args: argparse.Namespace) -> ReportSettings:
    return ReportSettings(
        org=args.org,
        top_n=int(args.top_n),
        report_type=args.report_type,
        verbose=bool(args.verbose),
    )


__all__ = [
    "DEFAULT_TOP_N",
    "ORG_LOGIN_PATTERN",
    "ReportSettings",
    "org_login",
    "build_arg_parser",
    "parse_args",
    "resolve_settings",
]
