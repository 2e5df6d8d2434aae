"""
Test configuration and shared fixtures for the report data source test suite.
Provides an in-memory document store, data source factories and an API client.
"""

import json
import pytest
from typing import Any, Dict, Iterator, List, Optional, Tuple
from uuid import UUID
from fastapi.testclient import TestClient

from analytics_reporting.app import create_app
from analytics_reporting.core.dependencies import get_report_data_source
from analytics_reporting.reporting.data_source import MongoReportDataSource
from analytics_reporting.reporting.traffic_types import EMPTY_CHANNEL_ID


# ===== IN-MEMORY STORE =====


class FakeCursor:
    """Cursor double that records every call made on it."""

    def __init__(self, driver: "FakeStoreDriver", documents: List[Dict[str, Any]], fail_on_iteration: Optional[Exception] = None):
        self.driver = driver
        self.documents = documents
        self.fail_on_iteration = fail_on_iteration
        self.fields: Optional[List[str]] = None
        self.sort_spec: Optional[List[Tuple[str, int]]] = None
        self.skip: Optional[int] = None
        self.limit: Optional[int] = None
        self.closed = False
        self.iterated = False

    def set_fields(self, fields: List[str]) -> None:
        self.driver.calls.append(("set_fields", list(fields)))
        self.fields = list(fields)

    def set_sort_order(self, sort_spec: List[Tuple[str, int]]) -> None:
        self.driver.calls.append(("set_sort_order", list(sort_spec)))
        self.sort_spec = list(sort_spec)

    def set_skip(self, skip: int) -> None:
        self.driver.calls.append(("set_skip", skip))
        self.skip = skip

    def set_limit(self, limit: int) -> None:
        self.driver.calls.append(("set_limit", limit))
        self.limit = limit

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        if self.iterated:
            raise RuntimeError("Cursor cannot be restarted")
        self.iterated = True
        self.driver.calls.append(("iterate", None))
        if self.fail_on_iteration is not None:
            raise self.fail_on_iteration

        documents = self.documents
        if self.skip:
            documents = documents[self.skip:]
        if self.limit is not None:
            documents = documents[: self.limit]
        for document in documents:
            # projection: only requested fields come back
            yield {key: value for key, value in document.items() if self._is_projected(key)}

    def _is_projected(self, key: str) -> bool:
        if self.fields is None:
            return True
        return key == "_id" or key in {field.split(".")[0] for field in self.fields}

    def close(self) -> None:
        self.driver.calls.append(("close", None))
        self.closed = True


class FakeStoreDriver:
    """StoreDriver double holding documents per collection."""

    def __init__(self, collections: Optional[Dict[str, List[Dict[str, Any]]]] = None, fail_on_iteration: Optional[Exception] = None):
        self.collections = collections or {}
        self.fail_on_iteration = fail_on_iteration
        self.calls: List[Tuple[str, Any]] = []
        self.cursors: List[FakeCursor] = []

    def find(self, collection_name: str, filter_document: Dict[str, Any]) -> FakeCursor:
        self.calls.append(("find", (collection_name, dict(filter_document))))
        cursor = FakeCursor(self, list(self.collections.get(collection_name, [])), self.fail_on_iteration)
        self.cursors.append(cursor)
        return cursor

    def call_names(self) -> List[str]:
        return [name for name, _ in self.calls]


def build_query_text(collection: str, fields: List[str], **options: Any) -> str:
    document: Dict[str, Any] = {"collection": collection, "fields": fields}
    document.update(options)
    return json.dumps(document)


@pytest.fixture
def make_query():
    """Factory for report query text"""
    return build_query_text


# ===== SAMPLE DATA FIXTURES =====

VISIT_CHANNEL_ID = UUID("0f1e2d3c-4b5a-4968-8776-655443322110")


@pytest.fixture
def interaction_documents() -> List[Dict[str, Any]]:
    """Interactions recorded before and after channels were introduced"""
    return [
        {"_id": 1, "ChannelId": EMPTY_CHANNEL_ID, "TrafficType": 3, "SiteName": "website"},
        {"_id": 2, "ChannelId": VISIT_CHANNEL_ID, "TrafficType": 1, "SiteName": "website"},
        {"_id": 3, "ChannelId": None, "TrafficType": 9, "SiteName": "shop"},
        {"_id": 4, "TrafficType": 5, "SiteName": "shop"},
        {"_id": 5, "ChannelId": None, "TrafficType": None, "SiteName": "website"},
    ]


@pytest.fixture
def store_driver_factory():
    """Factory for in-memory store drivers"""
    return FakeStoreDriver


@pytest.fixture
def fake_driver(interaction_documents) -> FakeStoreDriver:
    return FakeStoreDriver(
        {
            "Interactions": interaction_documents,
            "Contacts": [
                {"_id": 10, "ChannelId": None, "TrafficType": 3, "Identifiers": {"Identifier": "jane"}},
            ],
        }
    )


@pytest.fixture
def data_source(fake_driver) -> MongoReportDataSource:
    return MongoReportDataSource(driver=fake_driver)


@pytest.fixture
def visit_channel_id() -> UUID:
    return VISIT_CHANNEL_ID


# ===== API CLIENT =====


@pytest.fixture
def client(data_source) -> Iterator[TestClient]:
    """FastAPI test client with the data source overridden"""
    app = create_app()
    app.dependency_overrides[get_report_data_source] = lambda: data_source

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
