"""Tests for fetch request and outcome models."""

import pytest
from pydantic import ValidationError

from resilient_fetch.core.exceptions import InvalidConfigurationError, TransportError
from resilient_fetch.models.fetch import (
    BatchResult,
    FetchFailure,
    FetchRequest,
    FetchSuccess,
    describe_request,
)


class TestFetchRequest:
    def test_request_is_immutable(self):
        request = FetchRequest(url="https://api.example.com/users")

        with pytest.raises(ValidationError):
            request.url = "https://elsewhere.example"

    def test_requests_are_hashable_and_comparable(self):
        a = FetchRequest(url="https://api.example.com/users")
        b = FetchRequest(url="https://api.example.com/users")

        assert a == b
        assert len({a, b}) == 1

    @pytest.mark.parametrize("url", ["", "   "])
    def test_empty_url_rejected(self, url):
        with pytest.raises(ValidationError, match="url must not be empty"):
            FetchRequest(url=url)

    def test_url_is_stripped(self):
        assert FetchRequest(url="  https://api.example.com  ").url == "https://api.example.com"

    def test_target_prefers_label(self):
        assert FetchRequest(url="https://a.example", label="users").target == "users"
        assert FetchRequest(url="https://a.example").target == "https://a.example"

    def test_for_resource_builds_url(self):
        request = FetchRequest.for_resource("https://jsonplaceholder.example/", "/users/", 5)

        assert request.url == "https://jsonplaceholder.example/users/5"

    @pytest.mark.parametrize("resource_id", ["invalid", "5", 1.5, None, True])
    def test_for_resource_requires_numeric_id(self, resource_id):
        with pytest.raises(InvalidConfigurationError, match="must be a number") as exc_info:
            FetchRequest.for_resource("https://api.example.com", "users", resource_id)

        assert exc_info.value.details == {"resource_id": repr(resource_id)}

    def test_describe_request(self):
        assert describe_request(FetchRequest(url="https://a.example", label="a")) == "a"
        assert describe_request("https://b.example") == "https://b.example"


class TestBatchResult:
    def test_from_outcomes_partitions_in_order(self):
        r1, r2, r3, r4 = (FetchRequest(url=f"https://api.example.com/{i}") for i in range(4))
        e2, e4 = TransportError("two"), TransportError("four")
        outcomes = [
            FetchSuccess(request=r1, payload="one"),
            FetchFailure(request=r2, error=e2),
            FetchSuccess(request=r3, payload="three"),
            FetchFailure(request=r4, error=e4),
        ]

        result = BatchResult.from_outcomes(outcomes)

        assert result.successful == ["one", "three"]
        assert [(f.request, f.error) for f in result.failed] == [(r2, e2), (r4, e4)]
        assert result.outcomes == outcomes
        assert result.total == 4
        assert result.summary() == {"total": 4, "successful": 2, "failed": 2}

    def test_empty_result(self):
        result = BatchResult()

        assert result.total == 0
        assert result.all_succeeded
        assert result.summary() == {"total": 0, "successful": 0, "failed": 0}
