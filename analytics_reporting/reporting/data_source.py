# analytics_reporting/reporting/data_source.py
"""Report data sources: turn a report query into a result table."""

import logging
from abc import ABC, abstractmethod
from contextlib import closing
from typing import Optional

from analytics_reporting.core.config import get_connection_string
from analytics_reporting.core.exceptions import InvalidRequest
from analytics_reporting.query.filters import DataSourceFilter, FilterRegistry, inject_filters
from analytics_reporting.query.parser import QueryParser
from analytics_reporting.query.schemas import FilterSpec, ReportQuery
from analytics_reporting.reporting.fields import (
    FIELD_NAME_CHANNEL_ID,
    FIELD_NAME_TRAFFIC_TYPE,
    augment_fields,
    includes_interaction_field,
)
from analytics_reporting.reporting.reconciler import reconcile
from analytics_reporting.reporting.schemas import ResultTable
from analytics_reporting.store.driver import MongoStoreDriver, StoreDriver
from analytics_reporting.store.executor import execute_query
from analytics_reporting.store.loader import DocumentLoader

logger = logging.getLogger(__name__)


class ReportDataSource(ABC):
    """Base class for data sources that answer report queries."""

    def __init__(self, filters: Optional[FilterRegistry] = None):
        self.filters = filters or FilterRegistry.default()

    @abstractmethod
    def get_data(self, request: ReportQuery) -> ResultTable:
        """Retrieve the data described by the request."""

    def get_filter(self, spec: FilterSpec) -> DataSourceFilter:
        """Resolve a filter spec to the implementation registered for its kind."""
        return self.filters.resolve(spec)


class MongoReportDataSource(ReportDataSource):
    """Report data source reading from MongoDB."""

    def __init__(
        self,
        connection_string_name: Optional[str] = None,
        driver: Optional[StoreDriver] = None,
        filters: Optional[FilterRegistry] = None,
        loader: Optional[DocumentLoader] = None,
    ):
        super().__init__(filters)
        if driver is None:
            if not connection_string_name:
                raise ValueError("Either a connection string name or a driver is required")
            driver = MongoStoreDriver(get_connection_string(connection_string_name))

        self.connection_string_name = connection_string_name
        self.driver = driver
        self.loader = loader or DocumentLoader()

    def get_query_parser(self, request: ReportQuery) -> QueryParser:
        """Hook for subclasses that understand a different query text format."""
        return QueryParser(request.query, request.get_parameter_map())

    def get_data(self, request: ReportQuery) -> ResultTable:
        """
        Read report data from the store.

        When ChannelId is read from Interactions, TrafficType is read along
        with it so missing channel identifiers can be inferred; it is removed
        again unless the caller asked for it.
        """
        if request is None:
            raise InvalidRequest("Report query is required")

        native_query = self.get_query_parser(request).parse()
        collection = native_query.collection_name

        # Resolve every filter before touching the filter document
        data_source_filters = [self.get_filter(spec) for spec in request.filters]
        inject_filters(data_source_filters, native_query.filter_document)

        requested_fields = native_query.fields
        includes_channel_id = includes_interaction_field(collection, requested_fields, FIELD_NAME_CHANNEL_ID)
        includes_traffic_type = includes_interaction_field(collection, requested_fields, FIELD_NAME_TRAFFIC_TYPE)

        fields, did_augment = augment_fields(collection, requested_fields)
        if did_augment:
            logger.debug("Added %s to the fields read from %s", FIELD_NAME_TRAFFIC_TYPE, collection)
        native_query.fields = fields

        cursor = execute_query(
            self.driver,
            collection,
            native_query.filter_document,
            native_query.fields,
            native_query.sort_spec,
            native_query.skip,
            native_query.limit,
        )
        with closing(cursor):
            table = self.loader.get_data_table(native_query.fields, cursor, name=f"{collection}Data")

        table = reconcile(table, includes_channel_id, includes_traffic_type)

        logger.info("Read %d rows from %s", len(table), collection)
        return table
