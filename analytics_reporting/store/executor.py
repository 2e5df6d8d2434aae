# analytics_reporting/store/executor.py
"""Issue a report read against the document store."""

import logging
from typing import Any, Dict, List, Optional, Tuple

from analytics_reporting.query.schemas import UNBOUNDED_LIMIT
from analytics_reporting.store.driver import StoreCursor, StoreDriver

logger = logging.getLogger(__name__)


def execute_query(
    driver: StoreDriver,
    collection_name: str,
    filter_document: Dict[str, Any],
    fields: List[str],
    sort_spec: Optional[List[Tuple[str, int]]],
    skip: int,
    limit: int,
) -> StoreCursor:
    """
    Open a cursor and apply projection, sort, skip and limit in that order.

    Skip is always set, including zero. The -1 limit means "no limit" and is
    never forwarded to the store. The caller owns the returned cursor and must
    close it.
    """
    cursor = driver.find(collection_name, filter_document)
    try:
        cursor.set_fields(fields)

        if sort_spec:
            cursor.set_sort_order(sort_spec)

        cursor.set_skip(skip)

        if limit != UNBOUNDED_LIMIT:
            cursor.set_limit(limit)
    except Exception:
        cursor.close()
        raise

    logger.debug(
        "Executing query on %s: filter=%s fields=%s sort=%s skip=%d limit=%d",
        collection_name,
        filter_document,
        fields,
        sort_spec,
        skip,
        limit,
    )
    return cursor
