"""Tests for error types and their descriptions."""

import pytest

from repodiffmatch.core.errors import (
    ConfigError,
    InvalidRepositoryError,
    ListingError,
    ListingFailure,
    RepoDiffError,
    describe_error,
)


class TestListingError:
    """Test listing failure details."""

    def test_details(self):
        error = ListingError("o/r", ListingFailure.FORBIDDEN, status=403, cause="denied")

        assert isinstance(error, RepoDiffError)
        assert error.details == {
            "repository": "o/r",
            "kind": "forbidden",
            "status": 403,
            "cause": "denied",
        }
        assert "o/r" in str(error)
        assert "denied" in str(error)

    @pytest.mark.parametrize("kind, title", [
        (ListingFailure.NOT_FOUND, "Repository Not Found"),
        (ListingFailure.FORBIDDEN, "Access Forbidden"),
        (ListingFailure.RATE_LIMITED, "Rate Limit Exceeded"),
        (ListingFailure.AUTH_REQUIRED, "Authentication Required"),
        (ListingFailure.NETWORK, "Network/API Error"),
    ])
    def test_every_kind_is_described(self, kind, title):
        description = describe_error(ListingError("o/r", kind))

        assert description["title"] == title
        assert description["subject"] == "Repository: o/r"
        assert description["solutions"]

    def test_status_prefixes_title(self):
        description = describe_error(ListingError("o/r", ListingFailure.NOT_FOUND, status=404))
        assert description["title"] == "ERROR 404 - Repository Not Found"

    def test_network_reason_uses_cause(self):
        description = describe_error(ListingError("o/r", ListingFailure.NETWORK, cause="timed out"))
        assert description["reason"] == "timed out"


def test_invalid_repository_description():
    description = describe_error(InvalidRepositoryError("nonsense"))

    assert description["title"] == "ERROR INPUT - Invalid Repository Format"
    assert description["subject"] == "Input: nonsense"
    assert "Use format: owner/repository" in description["solutions"]


def test_generic_description():
    description = describe_error(ConfigError("bad batch size", key="comparison.batch_size"))

    assert description["reason"] == "bad batch size"
    assert description["solutions"] == []
