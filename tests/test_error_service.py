"""Tests for error standardization."""

import json

import pytest

from relay_gateway.models.response import ErrorCode
from relay_gateway.services.error_service import REDACTED, ErrorService


def test_create_error_response_omits_unset_fields():
    body = ErrorService.create_error_response("Bad things").to_body()

    assert body == {"success": False, "error": "Bad things"}


@pytest.mark.parametrize(
    "raw,expected",
    [
        (
            json.dumps({"error": {"code": 400, "message": "API key not valid.", "status": "INVALID_ARGUMENT"}}),
            "API key not valid.",
        ),
        (json.dumps({"error": {"code": 503, "status": "UNAVAILABLE"}}), "UNAVAILABLE"),
        (json.dumps({"error": "rate limited"}), "rate limited"),
        (json.dumps({"message": "slow down"}), "slow down"),
        ("upstream exploded", "Upstream provider returned HTTP 502"),
        ("", "Upstream provider returned HTTP 502"),
    ],
)
def test_summarize_upstream_error(raw, expected):
    assert ErrorService.summarize_upstream_error(502, raw) == expected


@pytest.mark.parametrize(
    "upstream,client",
    [(400, 400), (403, 403), (429, 429), (503, 503), (302, 500), (200, 500), (None, 500)],
)
def test_upstream_status_for_client(upstream, client):
    assert ErrorService.upstream_status_for_client(upstream) == client


def test_redact_removes_secret():
    text = "bad request for key=abc123&alt=json (abc123)"

    redacted = ErrorService.redact(text, "abc123")

    assert "abc123" not in redacted
    assert redacted.count(REDACTED) == 2


def test_redact_without_secret_is_noop():
    assert ErrorService.redact("text", None) == "text"
    assert ErrorService.redact(None, "secret") is None


def test_map_http_status_to_error_code():
    assert ErrorService.map_http_status_to_error_code(405) == ErrorCode.METHOD_NOT_ALLOWED
    assert ErrorService.map_http_status_to_error_code(400) == ErrorCode.BAD_REQUEST
    assert ErrorService.map_http_status_to_error_code(418) == ErrorCode.INTERNAL_ERROR
