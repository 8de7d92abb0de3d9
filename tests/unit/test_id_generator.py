"""Tests for rw_common.id_generator and rw_common.datetime_utils."""

from datetime import UTC, datetime

import pytest

from src.rw_common.datetime_utils import iso_or_empty, utc_now
from src.rw_common.id_generator import SnowflakeIdGenerator, generate_id


class TestSnowflakeIdGenerator:
    def test_unique_ids(self) -> None:
        gen = SnowflakeIdGenerator(node_id=1)
        ids = {gen.next_int() for _ in range(1000)}
        assert len(ids) == 1000

    def test_monotonically_increasing(self) -> None:
        gen = SnowflakeIdGenerator(node_id=1)
        prev = gen.next_int()
        for _ in range(100):
            current = gen.next_int()
            assert current > prev
            prev = current

    def test_invalid_node_id(self) -> None:
        with pytest.raises(ValueError):
            SnowflakeIdGenerator(node_id=1024)

    def test_generate_id_prefix(self) -> None:
        assert generate_id("itm_").startswith("itm_")


class TestDatetimeUtils:
    def test_utc_now_is_aware(self) -> None:
        assert utc_now().tzinfo == UTC

    def test_iso_or_empty(self) -> None:
        assert iso_or_empty(None) == ""
        dt = datetime(2025, 1, 2, 3, 4, 5, tzinfo=UTC)
        assert iso_or_empty(dt) == dt.isoformat()
