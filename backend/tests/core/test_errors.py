"""Error Hierarchy — codes, statuses and response envelopes.

Tests:
    - Each domain error maps to its HTTP status and code
    - to_response() carries context ids but no internal detail
    - InternalFaultError hides its message from the response body
"""

import pytest

from burnerlink.core.errors import (
    BurnerLinkError, CapacityExceededError, ErrorCategory, InternalFaultError,
    InvalidInputError, PayloadTooLargeError, QuotaExceededError, SessionNotFoundError,
)


@pytest.mark.parametrize("exc,status,code", [
    (InvalidInputError("bad", field="code"), 400, "INVALID_INPUT"),
    (SessionNotFoundError("s1"), 404, "SESSION_NOT_FOUND"),
    (CapacityExceededError("s1", "d3"), 403, "CAPACITY_EXCEEDED"),
    (QuotaExceededError("d1", 5), 403, "QUOTA_EXCEEDED"),
    (PayloadTooLargeError(10), 413, "PAYLOAD_TOO_LARGE"),
    (InternalFaultError("boom"), 500, "INTERNAL_ERROR"),
])
def test_status_and_code(exc, status, code):
    assert isinstance(exc, BurnerLinkError)
    assert exc.http_status == status
    assert exc.code == code


def test_not_found_response_envelope():
    body = SessionNotFoundError("s1").to_response()["error"]
    assert body["code"] == "SESSION_NOT_FOUND"
    assert body["category"] == ErrorCategory.RESOURCE_NOT_FOUND.value
    assert body["context"]["session_id"] == "s1"
    assert "timestamp" in body


def test_capacity_context_names_device():
    body = CapacityExceededError("s1", "d3").to_response()["error"]
    assert body["context"]["device_id"] == "d3"


def test_invalid_input_records_field():
    exc = InvalidInputError("Missing encrypted payload", field="payload")
    assert exc.to_response()["error"]["context"]["field"] == "payload"


def test_internal_fault_hides_message():
    body = InternalFaultError("participants=3 in s1").to_response()["error"]
    assert body["message"] == "An unexpected error occurred"
    assert "context" not in body
