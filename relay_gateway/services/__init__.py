"""Core services for the relay gateway."""

from relay_gateway.services.error_service import ErrorService
from relay_gateway.services.payload_translator import BadRequest, Parsed, translate
from relay_gateway.services.result_classifier import (
    Classification,
    Outcome,
    classify_response,
    classify_unreachable,
)

__all__ = [
    "ErrorService",
    "Parsed",
    "BadRequest",
    "translate",
    "Classification",
    "Outcome",
    "classify_response",
    "classify_unreachable",
]
