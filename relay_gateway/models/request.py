"""Request models for the relay gateway."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator


class Part(BaseModel):
    """One text part of a conversation turn."""

    text: StrictStr

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must be a non-empty string")
        return value


class Content(BaseModel):
    """One conversation turn in the provider's structured shape."""

    role: StrictStr = "user"
    parts: List[Part] = Field(min_length=1)


class GenerationPayload(BaseModel):
    """Normalized payload forwarded to the upstream provider."""

    contents: List[Content] = Field(min_length=1)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "contents": [
                    {"role": "user", "parts": [{"text": "Explain HTTP/2 in one sentence."}]}
                ]
            }
        }
    )

    @property
    def prompt_text(self) -> str:
        """All text parts joined, mainly for logging and tests."""
        return "\n".join(part.text for content in self.contents for part in content.parts)

    def to_upstream_body(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class InboundBody(BaseModel):
    """Fields the gateway understands in an inbound JSON body.

    Unknown fields are ignored. Which fields are required depends on the
    input shapes accepted by the endpoint.
    """

    prompt: Optional[StrictStr] = None
    device1: Optional[StrictStr] = None
    device2: Optional[StrictStr] = None
    contents: Optional[List[Content]] = None

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "examples": [
                {"prompt": "Write a haiku about relays."},
                {"device1": "USB-C charger", "device2": "Lightning cable"},
                {"contents": [{"role": "user", "parts": [{"text": "Hello"}]}]},
            ]
        },
    )
