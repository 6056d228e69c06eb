"""Unit tests for utility modules."""

import io
import json

import pytest
from core.errors import BaseIdError, DecodeError, InvariantError, SeedError
from internal.logging import LogLevel, StructuredLogger, get_logger
from utils.timestamp import format_timestamp, from_epoch_seconds, now_micros


class TestTimestamp:
    """Tests for timestamp utilities."""

    def test_format_timestamp_iso_format(self):
        """Timestamp is ISO 8601 format."""
        ts = format_timestamp()
        assert "T" in ts
        assert "Z" in ts or "+" in ts

    def test_format_timestamp_has_microseconds(self):
        """Timestamp includes microseconds."""
        ts = format_timestamp()
        # Should have 6 digits after decimal point
        assert "." in ts
        decimal_part = ts.split(".")[1].split("Z")[0].split("+")[0]
        assert len(decimal_part) == 6

    def test_format_timestamp_explicit(self):
        """Explicit microsecond timestamps are formatted in UTC."""
        assert format_timestamp(1_400_000_000_500_000) == "2014-05-13T16:53:20.500000Z"

    def test_now_micros_returns_int(self):
        """now_micros returns integer."""
        assert isinstance(now_micros(), int)

    def test_now_micros_reasonable_value(self):
        """now_micros returns reasonable timestamp."""
        # Should be after year 2020 in microseconds
        assert now_micros() > 1577836808000000  # 2020-01-01

    def test_from_epoch_seconds(self):
        """Seconds become an aware UTC datetime."""
        dt = from_epoch_seconds(1_400_000_000)
        assert dt.isoformat() == "2014-05-13T16:53:20+00:00"


class TestStructuredLogger:
    """Tests for the JSON logger."""

    def test_emits_json_line(self):
        """Records are single JSON lines with extra fields."""
        stream = io.StringIO()
        StructuredLogger(LogLevel.DEBUG, stream).info("seeded", pool_blocks=4)
        record = json.loads(stream.getvalue())
        assert record["level"] == "INFO"
        assert record["msg"] == "seeded"
        assert record["pool_blocks"] == 4
        assert record["timestamp"].endswith("Z")

    def test_filters_below_level(self):
        """Records under the minimum level are dropped."""
        stream = io.StringIO()
        logger = StructuredLogger(LogLevel.WARN, stream)
        logger.debug("hidden")
        logger.info("hidden")
        logger.warn("shown")
        assert len(stream.getvalue().splitlines()) == 1

    def test_error_field(self):
        """Attached errors are stringified under err."""
        stream = io.StringIO()
        StructuredLogger(stream=stream).error("failed", error=OSError("boom"))
        assert json.loads(stream.getvalue())["err"] == "boom"

    def test_closed_stream_does_not_raise(self):
        """Logging to a closed stream is silently skipped."""
        stream = io.StringIO()
        stream.close()
        StructuredLogger(stream=stream).info("lost")

    def test_configure_updates_shared_logger(self):
        """configure() changes the level of the process-wide logger in place."""
        logger = get_logger()
        original = logger.level, logger.stream
        try:
            StructuredLogger.configure(min_level=LogLevel.ERROR)
            assert get_logger() is logger
            assert logger.level == LogLevel.ERROR
        finally:
            StructuredLogger.configure(*original)

    @pytest.mark.parametrize("name,level", [("debug", LogLevel.DEBUG), ("WARNING", LogLevel.WARN), ("Error", LogLevel.ERROR)])
    def test_parse_level(self, name, level):
        """Level names parse case-insensitively."""
        assert LogLevel.parse(name) == level

    def test_parse_unknown_level(self):
        """Unknown names raise unless a default is given."""
        with pytest.raises(ValueError):
            LogLevel.parse("verbose")
        assert LogLevel.parse("verbose", LogLevel.INFO) == LogLevel.INFO


class TestErrors:
    """Tests for the error hierarchy."""

    def test_base_error_tracking_fields(self):
        """Errors carry a timestamp and context."""
        err = InvariantError("bad cursor", context={"offset": 8})
        assert isinstance(err, BaseIdError)
        assert err.context == {"offset": 8}
        assert err.timestamp.endswith("Z")
        assert str(err) == "bad cursor"

    def test_seed_error_context(self):
        """SeedError records the expected key size and cause."""
        cause = OSError("no entropy")
        err = SeedError("failed", expected=32, cause=cause)
        assert err.context["expected"] == 32
        assert err.cause is cause

    def test_decode_error_position(self):
        """DecodeError is a ValueError with value and position."""
        err = DecodeError("bad", value="a-b", position=1)
        assert isinstance(err, ValueError)
        assert err.value == "a-b"
        assert err.context["position"] == 1
