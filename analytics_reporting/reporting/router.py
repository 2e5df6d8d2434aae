"""API router for report data retrieval."""

from typing import Any, Dict
from fastapi import APIRouter

from analytics_reporting.core.dependencies import DataSourceDep
from analytics_reporting.query.schemas import ReportQuery
from analytics_reporting.reporting.schemas import ResultTableRead

router = APIRouter(prefix="/reporting", tags=["reporting"])


@router.post("/data", response_model=ResultTableRead)
def get_report_data(request: ReportQuery, data_source: DataSourceDep) -> ResultTableRead:
    """Run a report query and return the resulting table."""
    table = data_source.get_data(request)
    return ResultTableRead.from_table(table)


@router.get("/health")
def get_health(data_source: DataSourceDep) -> Dict[str, Any]:
    """Report which connection and filter kinds the data source is set up with."""
    return {
        "status": "ok",
        "connection": getattr(data_source, "connection_string_name", None),
        "filter_kinds": data_source.filters.kinds(),
    }
