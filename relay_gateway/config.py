"""Relay gateway settings and the immutable runtime configuration derived from them."""

from enum import Enum
from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"


class InputShape(str, Enum):
    """Inbound body shapes a gateway endpoint can accept."""

    FLAT_PROMPT = "flat_prompt"  # {"prompt": "..."}
    DEVICE_COMPARE = "device_compare"  # {"device1": "...", "device2": "..."}
    STRUCTURED_CONTENT = "structured_content"  # {"contents": [...]}


class ProjectionMode(str, Enum):
    """How a successful upstream result is written back to the caller."""

    CONTENT = "content"
    ANALYSIS = "analysis"
    RAW = "raw"


class Settings(BaseSettings):
    """Relay gateway settings loaded from environment variables and an optional .env file."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Service Configuration
    SERVICE_NAME: str = "relay-gateway"
    SERVICE_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # Upstream Provider Configuration
    GEMINI_API_KEY: Optional[SecretStr] = None
    GEMINI_MODEL: str = DEFAULT_GEMINI_MODEL
    GEMINI_BASE_URL: str = DEFAULT_GEMINI_BASE_URL
    REQUEST_TIMEOUT: float = 30.0

    # Gateway Behaviour
    CORS_ENABLED: bool = True
    CORS_ALLOW_ORIGIN: str = "*"
    EXPOSE_UPSTREAM_ERROR_DETAILS: bool = True
    PROXY_RESPONSE_MODE: ProjectionMode = ProjectionMode.CONTENT

    # Logging Configuration
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"

    # OpenAPI Configuration
    OPENAPI_TITLE: str = "Generative Text Relay Gateway"
    OPENAPI_DESCRIPTION: str = (
        "Relays prompts to a generative-text provider while keeping the provider credential server-side"
    )

    @field_validator("PROXY_RESPONSE_MODE")
    @classmethod
    def proxy_mode_supported(cls, value: ProjectionMode) -> ProjectionMode:
        if value == ProjectionMode.ANALYSIS:
            raise ValueError("must be one of: content, raw")
        return value


class GatewayConfig(BaseModel):
    """Immutable upstream configuration shared read-only by every invocation."""

    model_config = ConfigDict(frozen=True)

    credential: Optional[SecretStr] = None
    model_identifier: str = DEFAULT_GEMINI_MODEL
    provider_base_url: str = DEFAULT_GEMINI_BASE_URL
    request_timeout: float = 30.0

    @property
    def has_credential(self) -> bool:
        return bool(self.credential and self.credential.get_secret_value().strip())

    @property
    def endpoint_url(self) -> str:
        """Upstream generateContent URL without the credential."""
        return f"{self.provider_base_url.rstrip('/')}/{self.model_identifier}:generateContent"

    @classmethod
    def from_settings(cls, settings: Settings) -> "GatewayConfig":
        credential = settings.GEMINI_API_KEY
        if credential is not None:
            # Keys mounted from secret files often end with a newline
            credential = SecretStr(credential.get_secret_value().strip())
        return cls(
            credential=credential,
            model_identifier=settings.GEMINI_MODEL,
            provider_base_url=settings.GEMINI_BASE_URL,
            request_timeout=settings.REQUEST_TIMEOUT,
        )


class GatewayProfile(BaseModel):
    """Per-endpoint behaviour of the gateway handler."""

    model_config = ConfigDict(frozen=True)

    accepted_input_shapes: FrozenSet[InputShape]
    expose_upstream_error_details: bool = True
    allow_cross_origin: bool = True
    allow_origin: str = "*"
    projection: ProjectionMode = ProjectionMode.CONTENT


def get_settings() -> Settings:
    return Settings()


settings = get_settings()

# Endpoint profiles served by the single gateway handler
PROXY_PROFILE = GatewayProfile(
    accepted_input_shapes=frozenset({InputShape.FLAT_PROMPT, InputShape.STRUCTURED_CONTENT}),
    expose_upstream_error_details=settings.EXPOSE_UPSTREAM_ERROR_DETAILS,
    allow_cross_origin=settings.CORS_ENABLED,
    allow_origin=settings.CORS_ALLOW_ORIGIN,
    projection=settings.PROXY_RESPONSE_MODE,
)

COMPATIBILITY_PROFILE = GatewayProfile(
    accepted_input_shapes=frozenset({InputShape.DEVICE_COMPARE}),
    expose_upstream_error_details=settings.EXPOSE_UPSTREAM_ERROR_DETAILS,
    allow_cross_origin=settings.CORS_ENABLED,
    allow_origin=settings.CORS_ALLOW_ORIGIN,
    projection=ProjectionMode.ANALYSIS,
)
