"""
Query module for the report data source.

Main Components:
- QueryParser: report query text to NativeQuery
- FilterRegistry / DataSourceFilter: filters injected into the native filter document
- Schemas: ReportQuery, FilterSpec, NativeQuery
"""

from .filters import DataSourceFilter, FilterRegistry, ValueListFilter, inject_filters
from .parser import QueryParser
from .schemas import (
    FilterSpec,
    NativeQuery,
    ReportQuery,
    SortDirection,
    UNBOUNDED_LIMIT,
    VALUE_LIST_FILTER,
)

__all__ = [
    "DataSourceFilter",
    "FilterRegistry",
    "ValueListFilter",
    "inject_filters",
    "QueryParser",
    "FilterSpec",
    "NativeQuery",
    "ReportQuery",
    "SortDirection",
    "UNBOUNDED_LIMIT",
    "VALUE_LIST_FILTER",
]
