# analytics_reporting/core/dependencies.py
"""Dependencies for the report data routes"""

from functools import lru_cache
from typing import Annotated
from fastapi import Depends

from analytics_reporting.core.config import REPORTING_CONNECTION_NAME
from analytics_reporting.reporting.data_source import MongoReportDataSource, ReportDataSource


@lru_cache(maxsize=1)
def get_report_data_source() -> ReportDataSource:
    """Data source for the configured connection; the Mongo client is shared across requests"""
    return MongoReportDataSource(REPORTING_CONNECTION_NAME)


DataSourceDep = Annotated[ReportDataSource, Depends(get_report_data_source)]
