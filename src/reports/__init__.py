"""Ranked repository reports for a GitHub organization."""

from .reports import ReportType, generate
from .runner import main

__all__ = ["ReportType", "generate", "main"]
