"""Tests for inbound payload translation."""

import copy

import pytest

from relay_gateway.config import InputShape
from relay_gateway.services.payload_translator import (
    BadRequest,
    Parsed,
    build_device_prompt,
    translate,
)

ALL_SHAPES = frozenset(InputShape)
PROXY_SHAPES = frozenset({InputShape.FLAT_PROMPT, InputShape.STRUCTURED_CONTENT})


def test_flat_prompt_normalized_to_single_user_turn():
    result = translate({"prompt": "Hello there"}, PROXY_SHAPES)

    assert isinstance(result, Parsed)
    assert result.shape == InputShape.FLAT_PROMPT
    assert result.payload.to_upstream_body() == {
        "contents": [{"role": "user", "parts": [{"text": "Hello there"}]}]
    }


def test_structured_content_forwarded():
    body = {
        "contents": [
            {"role": "user", "parts": [{"text": "Hi"}]},
            {"role": "model", "parts": [{"text": "Hello"}]},
            {"parts": [{"text": "Tell me more"}, {"text": "please"}]},
        ]
    }
    result = translate(body, PROXY_SHAPES)

    assert isinstance(result, Parsed)
    assert result.shape == InputShape.STRUCTURED_CONTENT
    contents = result.payload.to_upstream_body()["contents"]
    assert [c["role"] for c in contents] == ["user", "model", "user"]
    assert contents[2]["parts"] == [{"text": "Tell me more"}, {"text": "please"}]


def test_structured_content_takes_precedence_over_prompt():
    body = {"prompt": "ignored", "contents": [{"parts": [{"text": "used"}]}]}
    result = translate(body, PROXY_SHAPES)

    assert isinstance(result, Parsed)
    assert result.payload.prompt_text == "used"


def test_device_compare_prompt_contains_both_devices():
    result = translate(
        {"device1": "USB-C charger", "device2": "Lightning cable"},
        frozenset({InputShape.DEVICE_COMPARE}),
    )

    assert isinstance(result, Parsed)
    assert result.shape == InputShape.DEVICE_COMPARE
    text = result.payload.prompt_text
    assert "USB-C charger" in text
    assert "Lightning cable" in text
    assert text == build_device_prompt("USB-C charger", "Lightning cable")


def test_input_is_not_mutated():
    body = {"contents": [{"parts": [{"text": "Hi"}]}], "extra": {"keep": True}}
    original = copy.deepcopy(body)

    translate(body, ALL_SHAPES)

    assert body == original


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"message": "hello"},
        {"prompt": None},
    ],
)
def test_missing_fields_rejected(body):
    result = translate(body, PROXY_SHAPES)

    assert isinstance(result, BadRequest)
    assert "'prompt'" in result.message
    assert "'contents'" in result.message


def test_shape_not_accepted_is_treated_as_missing():
    result = translate({"prompt": "hello"}, frozenset({InputShape.DEVICE_COMPARE}))

    assert isinstance(result, BadRequest)
    assert "'device1'+'device2'" in result.message


@pytest.mark.parametrize("prompt", ["", "   "])
def test_blank_prompt_rejected(prompt):
    result = translate({"prompt": prompt}, PROXY_SHAPES)

    assert isinstance(result, BadRequest)
    assert "'prompt'" in result.message


def test_non_string_prompt_rejected():
    result = translate({"prompt": 42}, PROXY_SHAPES)

    assert isinstance(result, BadRequest)
    assert "'prompt'" in result.message


def test_empty_contents_rejected():
    result = translate({"contents": []}, PROXY_SHAPES)

    assert isinstance(result, BadRequest)
    assert "'contents'" in result.message


def test_content_without_parts_rejected():
    result = translate({"contents": [{"role": "user", "parts": []}]}, PROXY_SHAPES)

    assert isinstance(result, BadRequest)
    assert "contents.0.parts" in result.message


def test_part_with_empty_text_rejected():
    body = {"contents": [{"parts": [{"text": "ok"}, {"text": ""}]}]}
    result = translate(body, PROXY_SHAPES)

    assert isinstance(result, BadRequest)
    assert "contents.0.parts.1.text" in result.message


def test_contents_must_be_list():
    result = translate({"contents": "hello"}, PROXY_SHAPES)

    assert isinstance(result, BadRequest)
    assert "contents" in result.message


@pytest.mark.parametrize(
    "body,missing",
    [
        ({"device1": "USB-C charger"}, "'device2'"),
        ({"device2": "Lightning cable"}, "'device1'"),
        ({"device1": "", "device2": "Lightning cable"}, "'device1'"),
    ],
)
def test_device_compare_requires_both_devices(body, missing):
    result = translate(body, frozenset({InputShape.DEVICE_COMPARE}))

    assert isinstance(result, BadRequest)
    assert result.message.startswith("Missing device information")
    assert missing in result.message
