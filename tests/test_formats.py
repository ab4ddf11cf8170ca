"""Tests for timestamp and URL format predicates."""

import pytest

from pluginlist.formats import is_valid_timestamp, is_valid_url


class TestIsValidTimestamp:
    """Tests for the YYYY-MM-DD HH:mm:ss check."""

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param("2025-01-19 10:00:00", id="typical"),
            pytest.param("2024-02-29 00:00:00", id="leap-day"),
            pytest.param("1999-12-31 23:59:59", id="end-of-day"),
        ],
    )
    def test_accepts_real_date_times(self, value: str) -> None:
        """Verify well-formed calendar date-times pass."""
        assert is_valid_timestamp(value) is True

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param("2025-13-01 00:00:00", id="month-13"),
            pytest.param("2025-01-32 00:00:00", id="day-32"),
            pytest.param("2025-02-30 12:00:00", id="feb-30"),
            pytest.param("2023-02-29 12:00:00", id="non-leap-feb-29"),
            pytest.param("2025-01-19 24:00:00", id="hour-24"),
            pytest.param("2025-01-19 10:60:00", id="minute-60"),
        ],
    )
    def test_rejects_impossible_values_matching_pattern(self, value: str) -> None:
        """Verify lexically valid but impossible date-times fail."""
        assert is_valid_timestamp(value) is False

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param("2025/01/19 10:00:00", id="slashes"),
            pytest.param("2025-01-19T10:00:00", id="iso-separator"),
            pytest.param("2025-1-19 10:00:00", id="single-digit-month"),
            pytest.param("2025-01-19 10:00", id="no-seconds"),
            pytest.param("2025-01-19 10:00:00 ", id="trailing-space"),
            pytest.param("", id="empty"),
        ],
    )
    def test_rejects_wrong_pattern(self, value: str) -> None:
        """Verify values not matching the literal pattern fail."""
        assert is_valid_timestamp(value) is False

    @pytest.mark.parametrize("value", [None, 20250119, ["2025-01-19 10:00:00"]])
    def test_non_string_is_rejected_without_raising(self, value: object) -> None:
        """Verify non-string input is a negative result."""
        assert is_valid_timestamp(value) is False


class TestIsValidUrl:
    """Tests for the absolute URL check."""

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param("https://github.com/org/repo", id="github"),
            pytest.param("http://example.com", id="bare-host"),
            pytest.param("https://registry.npmjs.org/@scope%2Fpkg", id="encoded-path"),
            pytest.param("https://example.com:8080/a?b=c#d", id="port-query-fragment"),
        ],
    )
    def test_accepts_absolute_urls(self, value: str) -> None:
        """Verify URLs with scheme and authority pass."""
        assert is_valid_url(value) is True

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param("not a url", id="plain-text"),
            pytest.param("github.com/org/repo", id="no-scheme"),
            pytest.param("https://", id="no-authority"),
            pytest.param("http://@/", id="empty-host-with-userinfo"),
            pytest.param("http://:80", id="port-without-host"),
            pytest.param("mailto:someone@example.com", id="no-authority-mailto"),
            pytest.param("https://example.com:99999", id="port-out-of-range"),
            pytest.param("https://[::1", id="broken-ipv6"),
            pytest.param("", id="empty"),
        ],
    )
    def test_rejects_malformed_urls(self, value: str) -> None:
        """Verify malformed input is a negative result, not an error."""
        assert is_valid_url(value) is False

    @pytest.mark.parametrize("value", [None, 42, {"url": "https://example.com"}])
    def test_non_string_is_rejected_without_raising(self, value: object) -> None:
        """Verify non-string input is a negative result."""
        assert is_valid_url(value) is False
