"""Classification of upstream outcomes."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

import httpx

from relay_gateway.errors import UpstreamUnreachableError

logger = logging.getLogger(__name__)


class Outcome(str, Enum):
    """Possible results of one upstream call."""

    SUCCESS = "success"
    UPSTREAM_ERROR = "upstream_error"
    UPSTREAM_UNREACHABLE = "upstream_unreachable"
    MALFORMED_UPSTREAM_RESPONSE = "malformed_upstream_response"


@dataclass(frozen=True)
class Classification:
    outcome: Outcome
    text: Optional[str] = None
    body: Optional[Dict[str, Any]] = None
    upstream_status: Optional[int] = None
    raw_error: Optional[str] = None


def extract_candidate_text(body: Any) -> Optional[str]:
    """Return the first candidate's first text part, or None if it is absent."""
    try:
        text = body["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(text, str) or not text.strip():
        return None
    return text


def classify_response(response: httpx.Response) -> Classification:
    """Classify a response the provider actually returned."""
    if not response.is_success:
        logger.warning(f"Upstream provider returned status {response.status_code}")
        return Classification(
            outcome=Outcome.UPSTREAM_ERROR,
            upstream_status=response.status_code,
            raw_error=response.text,
        )

    try:
        body = response.json()
    except ValueError:
        logger.error("Upstream provider returned a non-JSON success body")
        return Classification(outcome=Outcome.MALFORMED_UPSTREAM_RESPONSE)

    text = extract_candidate_text(body)
    if text is None:
        logger.error("Upstream success body has no candidate text")
        return Classification(outcome=Outcome.MALFORMED_UPSTREAM_RESPONSE)

    return Classification(outcome=Outcome.SUCCESS, text=text, body=body)


def classify_unreachable(error: UpstreamUnreachableError) -> Classification:
    return Classification(outcome=Outcome.UPSTREAM_UNREACHABLE, raw_error=error.message)
