"""Entry point wiring CLI settings, repository listing, and report rendering."""

from __future__ import annotations

import logging
import sys
from typing import List, Optional

from src.retrieval.errors import ConfigurationError, RepoStatsError

from .config import parse_args, resolve_settings
from .reports import generate

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point; prints the report table or exits non-zero with a reason."""

    settings = resolve_settings(parse_args(argv))
    configure_logging(settings.verbose)
    try:
        report = generate(settings.report_type, settings.org, settings.top_n)
    except ConfigurationError as exc:
        print(f"[error] {exc}")
        sys.exit(2)
    except RepoStatsError as exc:
        logger.debug("Report for %s failed", settings.org, exc_info=True)
        print(f"[error] {settings.org}: {exc}")
        sys.exit(1)
    print(report, end="")


if __name__ == "__main__":
    main()
