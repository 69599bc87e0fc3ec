"""Application Layer: Use cases and service orchestration.

This layer contains:
- services/: Business logic orchestration
  - analytics.py: Account analytics views from one trade snapshot
  - export.py: Report and trade export
"""

from journal_analytics.application.services import (
    AnalyticsService,
    AccountAnalyticsReport,
    ReportExporter,
    EXPORT_FORMATS,
)

__all__ = [
    "AnalyticsService",
    "AccountAnalyticsReport",
    "ReportExporter",
    "EXPORT_FORMATS",
]
