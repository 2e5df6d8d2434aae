# analytics_reporting/store/driver.py
"""Document store driver: protocol and the MongoDB implementation."""

from typing import Any, Dict, Iterator, List, Optional, Protocol, Tuple

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.cursor import Cursor

from analytics_reporting.core.config import get_database_name, get_uuid_representation


class StoreCursor(Protocol):
    """Lazy, forward-only cursor over the documents matching a filter."""

    def set_fields(self, fields: List[str]) -> None: ...

    def set_sort_order(self, sort_spec: List[Tuple[str, int]]) -> None: ...

    def set_skip(self, skip: int) -> None: ...

    def set_limit(self, limit: int) -> None: ...

    def __iter__(self) -> Iterator[Dict[str, Any]]: ...

    def close(self) -> None: ...


class StoreDriver(Protocol):
    """Opens cursors over named collections."""

    def find(self, collection_name: str, filter_document: Dict[str, Any]) -> StoreCursor: ...


class MongoCursor:
    """
    Settable cursor over a pymongo collection.

    Settings are collected first and the server-side cursor is opened on the
    first iteration. Once iteration has started the cursor can no longer be
    reconfigured or restarted.
    """

    def __init__(self, collection: Collection, filter_document: Dict[str, Any]):
        self.collection = collection
        self.filter_document = filter_document
        self.fields: Optional[List[str]] = None
        self.sort_spec: Optional[List[Tuple[str, int]]] = None
        self.skip = 0
        self.limit: Optional[int] = None
        self._cursor: Optional[Cursor] = None
        self._closed = False

    def set_fields(self, fields: List[str]) -> None:
        self._check_configurable()
        self.fields = list(fields)

    def set_sort_order(self, sort_spec: List[Tuple[str, int]]) -> None:
        self._check_configurable()
        self.sort_spec = list(sort_spec)

    def set_skip(self, skip: int) -> None:
        self._check_configurable()
        self.skip = skip

    def set_limit(self, limit: int) -> None:
        self._check_configurable()
        self.limit = limit

    def _check_configurable(self) -> None:
        if self._cursor is not None or self._closed:
            raise RuntimeError("Cursor has already been iterated or closed")

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        if self._closed:
            raise RuntimeError("Cursor is closed")
        if self._cursor is not None:
            raise RuntimeError("Cursor cannot be restarted")

        kwargs: Dict[str, Any] = {"skip": self.skip}
        if self.fields is not None:
            kwargs["projection"] = self.fields
        if self.sort_spec:
            kwargs["sort"] = self.sort_spec
        if self.limit is not None:
            kwargs["limit"] = self.limit

        self._cursor = self.collection.find(self.filter_document, **kwargs)
        return iter(self._cursor)

    def close(self) -> None:
        self._closed = True
        if self._cursor is not None:
            self._cursor.close()


class MongoStoreDriver:
    """StoreDriver backed by a pymongo client."""

    def __init__(self, connection_string: str, database_name: Optional[str] = None, client: Optional[MongoClient] = None):
        self.connection_string = connection_string
        self.client = client or MongoClient(connection_string, uuidRepresentation=get_uuid_representation())
        self.database = self.client[database_name or get_database_name(connection_string)]

    def __getitem__(self, collection_name: str) -> Collection:
        return self.database[collection_name]

    def find(self, collection_name: str, filter_document: Dict[str, Any]) -> MongoCursor:
        return MongoCursor(self[collection_name], filter_document)

    def close(self) -> None:
        self.client.close()
