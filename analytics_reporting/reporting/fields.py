# analytics_reporting/reporting/fields.py
"""Interaction fields involved in channel reconciliation."""

from typing import List, Sequence, Tuple

COLLECTION_NAME_INTERACTIONS = "Interactions"
FIELD_NAME_CHANNEL_ID = "ChannelId"
FIELD_NAME_TRAFFIC_TYPE = "TrafficType"


def includes_interaction_field(collection_name: str, fields: Sequence[str], field: str) -> bool:
    """Check if the query reads the given field from the Interactions collection."""
    return collection_name == COLLECTION_NAME_INTERACTIONS and field in fields


def augment_fields(collection_name: str, fields: List[str]) -> Tuple[List[str], bool]:
    """
    Add TrafficType to the projection when ChannelId is read without it.

    Returns the field list to project and whether it was extended. The input
    list is never modified; the extended list has TrafficType last.
    """
    includes_channel_id = includes_interaction_field(collection_name, fields, FIELD_NAME_CHANNEL_ID)
    includes_traffic_type = includes_interaction_field(collection_name, fields, FIELD_NAME_TRAFFIC_TYPE)

    if includes_channel_id and not includes_traffic_type:
        return list(fields) + [FIELD_NAME_TRAFFIC_TYPE], True
    return fields, False
