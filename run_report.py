"""Convenience shim to rank an organization's repositories from the repo root."""

from __future__ import annotations

import sys

from src.reports.runner import main


if __name__ == "__main__":
    main(sys.argv[1:])
