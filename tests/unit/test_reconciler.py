"""
Unit tests for channel identifier reconciliation.
"""

import copy
import logging
import pytest
from uuid import UUID
from bson.binary import Binary, UuidRepresentation

from analytics_reporting.reporting.reconciler import reconcile
from analytics_reporting.reporting.traffic_types import Channel, EMPTY_CHANNEL_ID
from analytics_reporting.store.loader import DocumentLoader

EXISTING_CHANNEL_ID = UUID("0f1e2d3c-4b5a-4968-8776-655443322110")


def build_table(rows, fields=("ChannelId", "TrafficType")):
    return DocumentLoader().get_data_table(list(fields), rows, name="InteractionsData")


class TestReconcile:
    def test_empty_channel_inferred_and_existing_kept(self):
        table = build_table(
            [
                {"ChannelId": EMPTY_CHANNEL_ID, "TrafficType": 3},
                {"ChannelId": EXISTING_CHANNEL_ID, "TrafficType": 1},
            ]
        )

        result = reconcile(table, did_request_channel_id=True, did_request_traffic_type=False)

        assert result.columns == ["ChannelId"]
        assert [row["ChannelId"] for row in result.rows] == [Channel.ORGANIC_SEARCH, EXISTING_CHANNEL_ID]

    def test_unmapped_code_gives_explicit_empty_identifier(self):
        table = build_table([{"ChannelId": None, "TrafficType": 9}])

        result = reconcile(table, True, True)

        channel_id = result.rows[0]["ChannelId"]
        assert channel_id == EMPTY_CHANNEL_ID
        assert channel_id is not None
        assert result.rows[0]["TrafficType"] == 9

    def test_missing_channel_and_traffic_type_is_normalized(self):
        table = build_table([{"ChannelId": None, "TrafficType": None}, {}])

        result = reconcile(table, True, False)

        assert [row["ChannelId"] for row in result.rows] == [EMPTY_CHANNEL_ID, EMPTY_CHANNEL_ID]

    def test_string_identifiers_are_parsed(self):
        table = build_table(
            [
                {"ChannelId": str(EXISTING_CHANNEL_ID), "TrafficType": 3},
                {"ChannelId": "", "TrafficType": 5},
            ]
        )

        result = reconcile(table, True, False)

        assert [row["ChannelId"] for row in result.rows] == [EXISTING_CHANNEL_ID, Channel.EMAIL]

    def test_float_traffic_type_is_converted(self):
        table = build_table([{"ChannelId": None, "TrafficType": 4.0}])

        result = reconcile(table, True, False)

        assert result.rows[0]["ChannelId"] == Channel.PAID_SEARCH

    def test_unconvertible_traffic_type_degrades_to_empty(self, caplog):
        table = build_table([{"ChannelId": None, "TrafficType": "organic"}])

        with caplog.at_level(logging.WARNING):
            result = reconcile(table, True, False)

        assert result.rows[0]["ChannelId"] == EMPTY_CHANNEL_ID
        assert "organic" in caplog.text

    @pytest.mark.parametrize("traffic_type", [float("inf"), float("-inf")])
    def test_infinite_traffic_type_degrades_to_empty(self, traffic_type, caplog):
        table = build_table([{"ChannelId": None, "TrafficType": traffic_type}])

        with caplog.at_level(logging.WARNING):
            result = reconcile(table, True, False)

        assert result.rows[0]["ChannelId"] == EMPTY_CHANNEL_ID
        assert "inf" in caplog.text

    def test_binary_identifiers_are_decoded(self):
        table = build_table(
            [
                {"ChannelId": Binary.from_uuid(EXISTING_CHANNEL_ID, UuidRepresentation.CSHARP_LEGACY), "TrafficType": 3},
                {"ChannelId": Binary.from_uuid(EXISTING_CHANNEL_ID, UuidRepresentation.STANDARD), "TrafficType": 3},
                {"ChannelId": Binary.from_uuid(EMPTY_CHANNEL_ID, UuidRepresentation.CSHARP_LEGACY), "TrafficType": 5},
            ]
        )

        result = reconcile(table, True, False)

        assert [row["ChannelId"] for row in result.rows] == [EXISTING_CHANNEL_ID, EXISTING_CHANNEL_ID, Channel.EMAIL]

    def test_non_uuid_binary_is_rejected(self):
        table = build_table([{"ChannelId": Binary(b"\x01\x02", 0), "TrafficType": 3}])

        with pytest.raises(TypeError):
            reconcile(table, True, False)

    def test_traffic_type_kept_when_requested(self):
        table = build_table([{"ChannelId": None, "TrafficType": 1}])

        result = reconcile(table, True, True)

        assert result.columns == ["ChannelId", "TrafficType"]
        assert result.rows == [{"ChannelId": Channel.DIRECT, "TrafficType": 1}]

    def test_noop_when_channel_id_not_requested(self):
        table = build_table([{"TrafficType": 3, "SiteName": "website"}], fields=("SiteName", "TrafficType"))
        before = copy.deepcopy(table.rows)

        result = reconcile(table, False, False)

        assert result.rows == before
        assert result.columns == ["SiteName", "TrafficType"]

    def test_reconcile_is_idempotent(self):
        rows = [
            {"ChannelId": None, "TrafficType": 3},
            {"ChannelId": EXISTING_CHANNEL_ID, "TrafficType": 1},
            {"ChannelId": None, "TrafficType": 9},
            {"ChannelId": None, "TrafficType": None},
        ]
        for keep_traffic_type in (True, False):
            once = reconcile(build_table(copy.deepcopy(rows)), True, keep_traffic_type)
            first_rows = copy.deepcopy(once.rows)
            twice = reconcile(once, True, keep_traffic_type)

            assert twice.rows == first_rows

    def test_invalid_identifier_fails_without_partial_update(self):
        table = build_table(
            [
                {"ChannelId": None, "TrafficType": 3},
                {"ChannelId": "not-a-guid", "TrafficType": 1},
            ]
        )

        with pytest.raises(ValueError):
            reconcile(table, True, False)

        assert table.rows[0]["ChannelId"] is None
        assert table.columns == ["ChannelId", "TrafficType"]

    def test_empty_table(self):
        result = reconcile(build_table([]), True, False)

        assert result.columns == ["ChannelId"]
        assert result.rows == []
