"""Application Services for Journal Analytics.

Services orchestrate repository access to implement use cases.

Available services:
- AnalyticsService: Per-account analytics views and full reports
- ReportExporter: CSV / Parquet / Excel report export
"""

from journal_analytics.application.services.analytics import (
    AnalyticsService,
    AccountAnalyticsReport,
)
from journal_analytics.application.services.export import (
    ReportExporter,
    EXPORT_FORMATS,
    report_tables,
)

__all__ = [
    "AnalyticsService",
    "AccountAnalyticsReport",
    "ReportExporter",
    "EXPORT_FORMATS",
    "report_tables",
]
