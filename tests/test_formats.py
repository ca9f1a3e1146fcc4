"""Tests for the built-in string formats."""

import pytest

from propcheck.formats import is_date, is_date_time, register_builtin_formats
from propcheck.registry import FormatRegistry


@pytest.fixture
def formats():
    registry = FormatRegistry()
    register_builtin_formats(registry)
    return registry


# =============================================================================
# date-time
# =============================================================================


class TestDateTime:
    @pytest.mark.parametrize(
        "value",
        [
            "2024-01-15",
            "2024-01-15T10:30:00",
            "2024-01-15T10:30:00Z",
            "2024-01-15T10:30:00.123+02:00",
            "2024-01-15 10:30",
        ],
    )
    def test_valid(self, value):
        assert is_date_time(value)

    @pytest.mark.parametrize(
        "value",
        ["", "yesterday", "2024-02-30", "2024-13-01", "15/01/2024", "2024-01-15T25:00:00"],
    )
    def test_invalid(self, value):
        assert not is_date_time(value)


# =============================================================================
# date
# =============================================================================


class TestDate:
    def test_bare_date(self, caplog):
        assert is_date("2024-01-15")
        assert caplog.records == []

    def test_impossible_date(self, caplog):
        assert not is_date("2024-02-30")
        assert caplog.records == []

    def test_unparseable(self, caplog):
        assert not is_date("not a date")
        assert caplog.records == []

    def test_date_time_is_rejected_with_warning(self, caplog):
        assert not is_date("2024-01-15T00:00:00Z")
        assert len(caplog.records) == 1
        record = caplog.records[0]
        assert record.levelname == "WARNING"
        assert record.name == "propcheck.formats"
        assert "did you mean to use `date-time`?" in record.getMessage()
        assert '"2024-01-15T00:00:00Z"' in record.getMessage()


# =============================================================================
# Registered formats
# =============================================================================


class TestRegisterBuiltinFormats:
    def test_registered_names(self, formats):
        assert formats.list_registered() == ["date", "date-time", "email", "uri", "uuid"]

    def test_date_formats(self, formats):
        assert formats.resolve("date")("2024-01-15")
        assert formats.resolve("date-time")("2024-01-15T00:00:00Z")

    @pytest.mark.parametrize(
        "value,valid",
        [
            ("ann@example.com", True),
            ("first.last+tag@sub.example.org", True),
            ("ann@", False),
            ("ann.example.com", False),
        ],
    )
    def test_email(self, formats, value, valid):
        assert formats.resolve("email")(value) is valid

    @pytest.mark.parametrize(
        "value,valid",
        [
            ("123e4567-e89b-12d3-a456-426614174000", True),
            ("123E4567-E89B-12D3-A456-426614174000", True),
            ("123e4567e89b12d3a456426614174000", False),
        ],
    )
    def test_uuid(self, formats, value, valid):
        assert formats.resolve("uuid")(value) is valid

    @pytest.mark.parametrize(
        "value,valid",
        [
            ("https://example.com/path?q=1", True),
            ("http://localhost:8000", True),
            ("ftp://example.com", False),
            ("example.com", False),
        ],
    )
    def test_uri(self, formats, value, valid):
        assert formats.resolve("uri")(value) is valid
