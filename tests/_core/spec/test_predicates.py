"""
Tests for the individual precondition predicates.

Tests verify compliance with RFC 7232 Section 3: Precondition Header Fields
https://www.rfc-editor.org/rfc/rfc7232#section-3

Test Categories:
---------------
1. if_match - RFC 7232 Section 3.1
2. if_none_match - RFC 7232 Section 3.2
3. if_modified_since - RFC 7232 Section 3.3
4. if_unmodified_since - RFC 7232 Section 3.4
5. if_range - RFC 7233 Section 3.2
"""

import logging
from datetime import datetime, timezone

import pytest
from time_machine import travel

from precondition import NoResource
from precondition._core._spec import (
    if_match,
    if_modified_since,
    if_none_match,
    if_range,
    if_unmodified_since,
)

LAST_MODIFIED = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)

BEFORE = "Mon, 01 Jan 2024 11:59:59 GMT"
SAME = "Mon, 01 Jan 2024 12:00:00 GMT"
AFTER = "Mon, 01 Jan 2024 12:00:01 GMT"

# =============================================================================
# Test Helpers
# =============================================================================


def etag_of(value: str):
    return lambda: value


def no_resource() -> str:
    raise NoResource()


def broken() -> str:
    raise OSError("storage is unavailable")


def modified_at(value=LAST_MODIFIED):
    return lambda: value


# =============================================================================
# 1. If-Match
# =============================================================================


class TestIfMatch:
    def test_matching_etag(self):
        assert if_match(etag_of('"abc"'), '"abc"') is True

    def test_different_etag(self):
        assert if_match(etag_of('"abc"'), '"other"') is False

    def test_any_listed_etag_matches(self):
        assert if_match(etag_of('"abc"'), '"x", "abc", "y"') is True

    def test_wildcard_with_existing_resource(self):
        assert if_match(etag_of('"abc"'), "*") is True

    def test_wildcard_without_resource(self):
        # "*" asserts that some representation currently exists
        assert if_match(no_resource, "*") is False

    def test_asterisk_in_a_list_is_a_plain_member(self):
        assert if_match(etag_of('"abc"'), '"x", *') is False
        assert if_match(etag_of('"abc"'), '*, "abc"') is True

    def test_etag_without_resource(self):
        assert if_match(no_resource, '"abc"') is False

    def test_etags_are_opaque(self):
        assert if_match(etag_of('W/"abc"'), '"abc"') is False
        assert if_match(etag_of('W/"abc"'), 'W/"abc"') is True

    def test_lookup_failure(self, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.WARNING, logger="precondition.core.spec"):
            assert if_match(broken, "*") is False

        assert "If-Match does not hold" in caplog.text


# =============================================================================
# 2. If-None-Match
# =============================================================================


class TestIfNoneMatch:
    def test_matching_etag(self):
        assert if_none_match(etag_of('"abc"'), '"abc"') is False

    def test_different_etag(self):
        assert if_none_match(etag_of('"abc"'), '"other"') is True

    def test_any_listed_etag_matches(self):
        assert if_none_match(etag_of('"abc"'), '"x", "abc"') is False

    def test_wildcard_with_existing_resource(self):
        assert if_none_match(etag_of('"abc"'), "*") is False

    def test_wildcard_without_resource(self):
        # Nothing to match against, e.g. "create only if absent"
        assert if_none_match(no_resource, "*") is True

    def test_asterisk_in_a_list_is_a_plain_member(self):
        assert if_none_match(etag_of('"abc"'), '"x", *') is True
        assert if_none_match(etag_of('"abc"'), '*, "abc"') is False

    def test_etag_without_resource(self):
        assert if_none_match(no_resource, '"abc"') is True

    def test_lookup_failure(self):
        assert if_none_match(broken, '"abc"') is False


# =============================================================================
# 3. If-Modified-Since
# =============================================================================


class TestIfModifiedSince:
    def test_modified_after_date(self):
        assert if_modified_since(modified_at(), BEFORE, now=NOW) is True

    def test_modified_at_date(self):
        assert if_modified_since(modified_at(), SAME, now=NOW) is False

    def test_modified_before_date(self):
        assert if_modified_since(modified_at(), AFTER, now=NOW) is False

    def test_malformed_date_is_ignored(self):
        assert if_modified_since(modified_at(), "yesterday", now=NOW) is True

    def test_future_date_is_ignored(self):
        assert if_modified_since(modified_at(), "Tue, 01 Jan 2030 00:00:00 GMT", now=NOW) is True

    @travel(datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc), tick=False)
    def test_future_date_uses_current_time(self):
        assert if_modified_since(modified_at(), AFTER) is True
        assert if_modified_since(modified_at(), SAME) is False

    def test_sub_second_modification_is_truncated(self):
        precise = datetime(2024, 1, 1, 12, 0, 0, 500000, tzinfo=timezone.utc)

        assert if_modified_since(modified_at(precise), SAME, now=NOW) is False

    def test_timestamp_modification_date(self):
        assert if_modified_since(modified_at(LAST_MODIFIED.timestamp()), BEFORE, now=NOW) is True

    def test_lookup_failure(self):
        assert if_modified_since(broken, BEFORE, now=NOW) is False


# =============================================================================
# 4. If-Unmodified-Since
# =============================================================================


class TestIfUnmodifiedSince:
    def test_modified_after_date(self):
        assert if_unmodified_since(modified_at(), BEFORE) is False

    def test_modified_at_date(self):
        assert if_unmodified_since(modified_at(), SAME) is True

    def test_modified_before_date(self):
        assert if_unmodified_since(modified_at(), AFTER) is True

    def test_malformed_date_is_ignored(self):
        assert if_unmodified_since(modified_at(), "Mon, 01 Jan 2024") is True

    def test_naive_modification_date_is_utc(self):
        assert if_unmodified_since(modified_at(datetime(2024, 1, 1, 12, 0, 0)), SAME) is True

    def test_lookup_failure(self):
        assert if_unmodified_since(broken, AFTER) is False


# =============================================================================
# 5. If-Range
# =============================================================================


class TestIfRange:
    def test_matching_etag(self):
        assert if_range(etag_of('"abc"'), '"abc"') is True

    def test_matching_etag_with_whitespace(self):
        assert if_range(etag_of('"abc"'), ' "abc" ') is True

    def test_different_etag(self):
        assert if_range(etag_of('"abc"'), '"other"') is False

    def test_wildcard_is_not_a_validator(self):
        assert if_range(etag_of('"abc"'), "*") is False

    def test_without_resource(self):
        assert if_range(no_resource, '"abc"') is False

    def test_without_etag_capability(self):
        assert if_range(None, '"abc"') is False

    def test_lookup_failure(self):
        assert if_range(broken, '"abc"') is False

    def test_matching_date(self):
        assert if_range(etag_of('"abc"'), SAME, last_modified=modified_at()) is True

    def test_different_date(self):
        assert if_range(etag_of('"abc"'), AFTER, last_modified=modified_at()) is False

    def test_date_without_last_modified_capability(self):
        assert if_range(etag_of('"abc"'), SAME) is False

    def test_date_lookup_failure(self):
        assert if_range(None, SAME, last_modified=broken) is False
