# analytics_reporting/query/parser.py
"""Translate report query text into a store-native query."""

import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from analytics_reporting.core.exceptions import InvalidRequest
from analytics_reporting.query.schemas import NativeQuery, SortDirection, UNBOUNDED_LIMIT

logger = logging.getLogger(__name__)

PARAMETER_PREFIX = "@"


class QueryParser:
    """
    Parses report query text of the form

        {"collection": "Interactions",
         "fields": ["ChannelId", "StartDateTime"],
         "query": {"StartDateTime": {"$gte": "@StartDate"}},
         "sort": {"StartDateTime": -1},
         "skip": 0,
         "limit": 100}

    String values in ``query`` written as ``@Name`` are replaced by the
    parameter of that name. Every call to ``parse`` returns a fresh
    NativeQuery, so the result can be mutated freely by the caller.
    """

    def __init__(self, query_text: str, parameters: Optional[Mapping[str, Any]] = None):
        self.query_text = query_text
        self.parameters = dict(parameters or {})

    def parse(self) -> NativeQuery:
        document = self._load_document()

        native_query = NativeQuery(
            collection_name=self._get_collection(document),
            fields=self._get_fields(document),
            filter_document=self._get_query(document),
            sort_spec=self._get_sort_by(document),
            skip=self._get_skip(document),
            limit=self._get_limit(document),
        )
        logger.debug(
            "Parsed report query for collection %s with fields %s",
            native_query.collection_name,
            native_query.fields,
        )
        return native_query

    def _load_document(self) -> Dict[str, Any]:
        if not self.query_text or not self.query_text.strip():
            raise InvalidRequest("Report query text is empty")
        try:
            document = json.loads(self.query_text)
        except json.JSONDecodeError as e:
            raise InvalidRequest(f"Report query is not valid JSON: {e}") from e
        if not isinstance(document, dict):
            raise InvalidRequest("Report query must be a JSON object")
        return document

    def _get_collection(self, document: Dict[str, Any]) -> str:
        collection = document.get("collection")
        if not isinstance(collection, str) or not collection:
            raise InvalidRequest("Report query must name a collection")
        return collection

    def _get_fields(self, document: Dict[str, Any]) -> List[str]:
        fields = document.get("fields")
        if not isinstance(fields, list) or not fields:
            raise InvalidRequest("Report query must list at least one field")
        if not all(isinstance(f, str) and f for f in fields):
            raise InvalidRequest("Report query fields must be non-empty strings")
        if len(set(fields)) != len(fields):
            raise InvalidRequest(f"Report query fields must be distinct: {fields}")
        return list(fields)

    def _get_query(self, document: Dict[str, Any]) -> Dict[str, Any]:
        query = document.get("query", {})
        if not isinstance(query, dict):
            raise InvalidRequest("Report query 'query' must be a JSON object")
        return self._bind_parameters(query)

    def _bind_parameters(self, value: Any) -> Any:
        """Replace '@Name' placeholders with parameter values, recursively."""
        if isinstance(value, dict):
            return {key: self._bind_parameters(item) for key, item in value.items()}
        if isinstance(value, list):
            return [self._bind_parameters(item) for item in value]
        if isinstance(value, str) and value.startswith(PARAMETER_PREFIX):
            name = value[len(PARAMETER_PREFIX):]
            if name not in self.parameters:
                raise InvalidRequest(f"Report query references unknown parameter '{value}'")
            return self.parameters[name]
        return value

    def _get_sort_by(self, document: Dict[str, Any]) -> Optional[List[Tuple[str, int]]]:
        sort = document.get("sort")
        if sort is None:
            return None

        if isinstance(sort, dict):
            pairs = list(sort.items())
        elif isinstance(sort, list) and all(isinstance(p, list) and len(p) == 2 for p in sort):
            pairs = [(p[0], p[1]) for p in sort]
        else:
            raise InvalidRequest("Report query 'sort' must be an object or a list of [field, direction] pairs")

        sort_spec = []
        for sort_field, direction in pairs:
            try:
                sort_spec.append((sort_field, int(SortDirection(direction))))
            except (ValueError, TypeError) as e:
                raise InvalidRequest(f"Invalid sort direction {direction!r} for field '{sort_field}'") from e
        return sort_spec or None

    def _get_skip(self, document: Dict[str, Any]) -> int:
        skip = document.get("skip", 0)
        if not isinstance(skip, int) or isinstance(skip, bool) or skip < 0:
            raise InvalidRequest(f"Report query 'skip' must be a non-negative integer, got {skip!r}")
        return skip

    def _get_limit(self, document: Dict[str, Any]) -> int:
        limit = document.get("limit", UNBOUNDED_LIMIT)
        if not isinstance(limit, int) or isinstance(limit, bool) or limit < UNBOUNDED_LIMIT:
            raise InvalidRequest(f"Report query 'limit' must be an integer >= -1, got {limit!r}")
        return limit
