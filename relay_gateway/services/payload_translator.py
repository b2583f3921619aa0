"""Translation of inbound request bodies into the provider's generation payload."""

import logging
from dataclasses import dataclass
from typing import AbstractSet, Any, Dict, Union

from pydantic import ValidationError

from relay_gateway.config import InputShape
from relay_gateway.models.request import Content, GenerationPayload, InboundBody, Part

logger = logging.getLogger(__name__)

DEVICE_COMPARE_TEMPLATE = (
    "Compare the compatibility of {device1} with {device2}. Provide a detailed "
    "analysis, including potential issues, required adapters, and a final verdict "
    "on compatibility. Format the output as a clean, easy-to-read text response."
)

# Fields that signal each input shape, in the order shapes are tried
SHAPE_FIELDS = {
    InputShape.STRUCTURED_CONTENT: ("contents",),
    InputShape.FLAT_PROMPT: ("prompt",),
    InputShape.DEVICE_COMPARE: ("device1", "device2"),
}


@dataclass(frozen=True)
class Parsed:
    payload: GenerationPayload
    shape: InputShape


@dataclass(frozen=True)
class BadRequest:
    message: str


TranslationResult = Union[Parsed, BadRequest]


def build_device_prompt(device1: str, device2: str) -> str:
    """Build the compatibility prompt for two device names."""
    return DEVICE_COMPARE_TEMPLATE.format(device1=device1, device2=device2)


def single_turn(text: str) -> GenerationPayload:
    return GenerationPayload(contents=[Content(role="user", parts=[Part(text=text)])])


def _describe_validation_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(item) for item in error["loc"])
    return f"Invalid field '{location}': {error['msg']}"


def _accepted_fields(accepted: AbstractSet[InputShape]) -> str:
    names = []
    for shape, fields in SHAPE_FIELDS.items():
        if shape in accepted:
            names.append("+".join(f"'{name}'" for name in fields))
    return ", ".join(names)


def translate(body: Dict[str, Any], accepted: AbstractSet[InputShape]) -> TranslationResult:
    """Normalize an inbound JSON object into a GenerationPayload.

    Only the shapes in ``accepted`` are considered; a body carrying fields of
    another shape is treated as if those fields were absent. The inbound
    mapping is never modified.

    Args:
        body: Parsed JSON object from the request
        accepted: Input shapes the endpoint accepts

    Returns:
        Parsed with the normalized payload, or BadRequest naming the problem
    """
    relevant = {
        name: body[name]
        for shape, fields in SHAPE_FIELDS.items()
        if shape in accepted
        for name in fields
        if body.get(name) is not None
    }

    try:
        inbound = InboundBody.model_validate(relevant)
    except ValidationError as exc:
        return BadRequest(_describe_validation_error(exc))

    if InputShape.STRUCTURED_CONTENT in accepted and inbound.contents is not None:
        if not inbound.contents:
            return BadRequest("Field 'contents' must contain at least one entry")
        payload = GenerationPayload(
            contents=[content.model_copy(deep=True) for content in inbound.contents]
        )
        return Parsed(payload, InputShape.STRUCTURED_CONTENT)

    if InputShape.FLAT_PROMPT in accepted and inbound.prompt is not None:
        if not inbound.prompt.strip():
            return BadRequest("Field 'prompt' must be a non-empty string")
        return Parsed(single_turn(inbound.prompt), InputShape.FLAT_PROMPT)

    if InputShape.DEVICE_COMPARE in accepted and (
        inbound.device1 is not None or inbound.device2 is not None
    ):
        missing = [
            name
            for name, value in (("device1", inbound.device1), ("device2", inbound.device2))
            if value is None or not value.strip()
        ]
        if missing:
            fields = ", ".join(f"'{name}'" for name in missing)
            return BadRequest(f"Missing device information in request body: {fields}")
        prompt = build_device_prompt(inbound.device1, inbound.device2)
        return Parsed(single_turn(prompt), InputShape.DEVICE_COMPARE)

    return BadRequest(
        f"Missing required field in request body: expected {_accepted_fields(accepted)}"
    )
