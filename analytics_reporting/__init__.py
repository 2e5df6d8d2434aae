"""
Report data retrieval over a MongoDB analytics store.

Main Components:
- MongoReportDataSource: translates a ReportQuery, runs it and returns a ResultTable
- QueryParser: turns report query text into a NativeQuery
- FilterRegistry: resolves report filters by kind
- reconcile: fills in ChannelId values from legacy TrafficType codes
"""

from analytics_reporting.query.schemas import FilterSpec, NativeQuery, ReportQuery
from analytics_reporting.reporting.data_source import MongoReportDataSource, ReportDataSource
from analytics_reporting.reporting.schemas import ResultTable

__all__ = [
    "FilterSpec",
    "MongoReportDataSource",
    "NativeQuery",
    "ReportDataSource",
    "ReportQuery",
    "ResultTable",
]
