# analytics_reporting/reporting/traffic_types.py
"""Legacy traffic type codes and their channel identifiers."""

from enum import IntEnum
from typing import Dict, Optional
from uuid import UUID

EMPTY_CHANNEL_ID = UUID(int=0)


class TrafficType(IntEnum):
    """Traffic classifier recorded on interactions before channels existed."""

    UNKNOWN = 0
    DIRECT = 1
    REFERRED = 2
    ORGANIC_SEARCH = 3
    PAID_SEARCH = 4
    EMAIL = 5
    RSS = 6
    SOCIAL = 7
    CAMPAIGN = 8


class Channel:
    """Channel identifiers that replaced the traffic types."""

    DIRECT = UUID("b418e4f2-1013-4b42-a053-b6d4dca988bf")
    REFERRAL = UUID("9b6d2a4f-1c0e-4b7a-9d13-37c1f0a5e8d2")
    ORGANIC_SEARCH = UUID("1b6c4c1e-8f1a-4a2d-b0f5-5a3e9d7c6b21")
    PAID_SEARCH = UUID("2e9f7a3d-5b4c-4d8e-a1f6-7c2b0e9d4a35")
    EMAIL = UUID("3c8a1f5e-9d2b-4e7c-b6a0-1f4d8e2c7b49")
    RSS = UUID("4d7b2e6f-0a3c-4f8d-a5b1-2e5c9f3d8c5a")
    SOCIAL = UUID("5e6c3f7a-1b4d-4a9e-b4c2-3f6d0a4e9d6b")
    CAMPAIGN = UUID("6f5d4a8b-2c5e-4b0f-a3d3-4a7e1b5f0e7c")


_CHANNEL_BY_TRAFFIC_TYPE: Dict[TrafficType, UUID] = {
    TrafficType.DIRECT: Channel.DIRECT,
    TrafficType.REFERRED: Channel.REFERRAL,
    TrafficType.ORGANIC_SEARCH: Channel.ORGANIC_SEARCH,
    TrafficType.PAID_SEARCH: Channel.PAID_SEARCH,
    TrafficType.EMAIL: Channel.EMAIL,
    TrafficType.RSS: Channel.RSS,
    TrafficType.SOCIAL: Channel.SOCIAL,
    TrafficType.CAMPAIGN: Channel.CAMPAIGN,
}


def convert_to_channel_id(traffic_type: int) -> Optional[UUID]:
    """Channel identifier inferred from a legacy traffic type code, or None if unmapped."""
    try:
        return _CHANNEL_BY_TRAFFIC_TYPE.get(TrafficType(traffic_type))
    except ValueError:
        return None
