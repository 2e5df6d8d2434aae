# analytics_reporting/reporting/reconciler.py
"""Fill in channel identifiers from legacy traffic types."""

import logging
from typing import Any, List
from uuid import UUID

import pandas as pd
from bson.binary import OLD_UUID_SUBTYPE, UUID_SUBTYPE, Binary, UuidRepresentation

from analytics_reporting.reporting.fields import FIELD_NAME_CHANNEL_ID, FIELD_NAME_TRAFFIC_TYPE
from analytics_reporting.reporting.schemas import ResultTable
from analytics_reporting.reporting.traffic_types import EMPTY_CHANNEL_ID, convert_to_channel_id

logger = logging.getLogger(__name__)


def _is_null(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        # containers are never null
        return False


def _to_channel_id(value: Any) -> UUID:
    """Normalize a stored identifier; null and blank strings are the empty identifier."""
    if _is_null(value):
        return EMPTY_CHANNEL_ID
    if isinstance(value, UUID):
        return value
    if isinstance(value, Binary):
        # subtype 3 GUIDs are written in .NET byte order
        if value.subtype == OLD_UUID_SUBTYPE:
            return value.as_uuid(UuidRepresentation.CSHARP_LEGACY)
        if value.subtype == UUID_SUBTYPE:
            return value.as_uuid(UuidRepresentation.STANDARD)
    if isinstance(value, str):
        return UUID(value) if value.strip() else EMPTY_CHANNEL_ID
    raise TypeError(f"Unsupported {FIELD_NAME_CHANNEL_ID} value: {value!r}")


def _infer_channel_id(traffic_type: Any) -> UUID:
    try:
        code = int(traffic_type)
    except (TypeError, ValueError, OverflowError):
        logger.warning("Cannot convert %s value %r to a traffic type code", FIELD_NAME_TRAFFIC_TYPE, traffic_type)
        return EMPTY_CHANNEL_ID

    channel_id = convert_to_channel_id(code)
    return channel_id if channel_id is not None else EMPTY_CHANNEL_ID


def reconcile(table: ResultTable, did_request_channel_id: bool, did_request_traffic_type: bool) -> ResultTable:
    """
    Resolve empty ChannelId values and hide the TrafficType column if it was
    only read to support the resolution.

    Identifiers that are already set are left alone. Empty ones become the
    channel mapped from TrafficType, or the explicit empty identifier when
    there is no traffic type or no mapping. All rows are resolved before the
    column is written back, so the table is either fully reconciled or
    untouched.
    """
    if not did_request_channel_id:
        return table

    frame = table.frame
    has_traffic_type = FIELD_NAME_TRAFFIC_TYPE in frame.columns

    resolved: List[UUID] = []
    inferred = 0
    for position in range(len(frame)):
        channel_id = _to_channel_id(frame[FIELD_NAME_CHANNEL_ID].iat[position])

        if channel_id == EMPTY_CHANNEL_ID and has_traffic_type:
            traffic_type = frame[FIELD_NAME_TRAFFIC_TYPE].iat[position]
            if not _is_null(traffic_type):
                channel_id = _infer_channel_id(traffic_type)
                inferred += 1

        resolved.append(channel_id)

    frame[FIELD_NAME_CHANNEL_ID] = pd.Series(resolved, index=frame.index, dtype=object)

    if not did_request_traffic_type and has_traffic_type:
        frame = frame.drop(columns=[FIELD_NAME_TRAFFIC_TYPE])

    logger.debug("Reconciled %d rows of %s, %d inferred from traffic type", len(resolved), table.name, inferred)
    table.frame = frame
    return table
