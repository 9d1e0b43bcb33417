"""Tests for ingestion field parsing."""

import pytest

from app.services.readings import Reading, ReadingValidationError, parse_reading


class TestParseReading:
    def test_valid_fields(self):
        r = parse_reading("23.5", "48", "101325", "1700000000000")
        assert r == Reading(time=1700000000000, temperature=23.5, humidity=48.0, pressure=101325.0)

    def test_time_defaults_to_arrival(self):
        r = parse_reading("20", "50", "100000")
        assert r.time > 1_600_000_000_000

    def test_whitespace_is_tolerated(self):
        assert parse_reading(" 20 ", "50", "100000").temperature == 20.0

    @pytest.mark.parametrize("bad", ["abc", "", "12a", "nan", "inf", "-Infinity", None])
    def test_rejects_non_numeric_temperature(self, bad):
        with pytest.raises(ReadingValidationError) as exc:
            parse_reading(bad, "50", "100000")
        assert exc.value.field == "temperature"

    def test_reports_first_bad_field(self):
        with pytest.raises(ReadingValidationError) as exc:
            parse_reading("20", "50", "x")
        assert exc.value.field == "pressure"

    @pytest.mark.parametrize("bad", [
        "yesterday", "1e300", "1700000000000.5", "1700000000000000", "-1", "253402300800000",
    ])
    def test_rejects_bad_time(self, bad):
        with pytest.raises(ReadingValidationError) as exc:
            parse_reading("20", "50", "100000", bad)
        assert exc.value.field == "time"

    def test_time_bounds_inclusive(self):
        assert parse_reading("20", "50", "100000", "0").time == 0
        assert parse_reading("20", "50", "100000", "253402300799999").time == 253402300799999

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_reading("20", None, "100000")


class TestReading:
    def test_immutable(self):
        r = Reading(time=1, temperature=1.0, humidity=2.0, pressure=3.0)
        with pytest.raises(AttributeError):
            r.temperature = 5.0

    def test_to_dict(self):
        r = Reading(time=1, temperature=1.0, humidity=2.0, pressure=3.0)
        assert r.to_dict() == {"time": 1, "temperature": 1.0, "humidity": 2.0, "pressure": 3.0}
