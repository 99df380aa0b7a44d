"""
Error models and exception classes.

This module defines custom exception classes and error models
for the ASCII Studio service. Every error carries the HTTP status
and the user-facing message it is surfaced with.
"""

from datetime import datetime
from typing import Optional, Dict, Any
from pydantic import BaseModel, Field


class AsciiStudioError(Exception):
    """Base exception for ASCII Studio."""

    status_code: int = 500
    default_message: str = "Failed to generate ASCII art"

    def __init__(self, message: str = None, error_code: str = None, details: Dict[str, Any] = None):
        self.message = message or self.default_message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    @property
    def kind(self) -> str:
        """Error kind reported to callers (the class name)."""
        return self.__class__.__name__


class ValidationError(AsciiStudioError):
    """Request payload is missing or has the wrong shape."""

    status_code = 400
    default_message = "A prompt is required"

    def __init__(self, message: str = None, field: str = None, value: Any = None):
        self.field = field
        self.value = value
        super().__init__(message, "VALIDATION_ERROR", {"field": field})


class ConfigurationError(AsciiStudioError):
    """No usable provider configuration."""

    status_code = 503
    default_message = (
        "No LLM provider is configured. Set ARK_API_KEY, GEMINI_API_KEY "
        "or OPENAI_API_KEY in the environment or .env file."
    )

    def __init__(self, message: str = None, config_key: str = None):
        self.config_key = config_key
        super().__init__(message, "CONFIGURATION_ERROR", {"config_key": config_key})


class LLMError(AsciiStudioError):
    """Provider-level failure raised while talking to an LLM backend."""

    error_code_name = "LLM_ERROR"

    def __init__(
        self,
        message: str = None,
        provider: str = None,
        model: str = None,
        retryable: bool = False,
        raw_message: str = None
    ):
        self.provider = provider
        self.model = model
        self.retryable = retryable
        self.raw_message = raw_message
        super().__init__(
            message,
            self.error_code_name,
            {"provider": provider, "model": model, "retryable": retryable}
        )


class AuthenticationError(LLMError):
    """Credential rejected by the provider."""

    status_code = 401
    error_code_name = "AUTHENTICATION_ERROR"

    def __init__(self, message: str = None, provider: str = None, model: str = None, **kwargs):
        if message is None:
            key_name = f"{provider.upper()}_API_KEY" if provider else "API key"
            message = f"Invalid API key. Check your {key_name}."
        super().__init__(message, provider, model, **kwargs)


class RateLimitError(LLMError):
    """Provider reports quota exhaustion or throttling."""

    status_code = 429
    error_code_name = "RATE_LIMIT_ERROR"
    default_message = "Rate limit reached. Wait a moment and try again."


class ProviderTimeoutError(LLMError):
    """Provider call exceeded its deadline."""

    status_code = 504
    error_code_name = "TIMEOUT_ERROR"
    default_message = "Generation took too long. Try a simpler prompt."

    @property
    def kind(self) -> str:
        return "TimeoutError"


class EmptyResponseError(LLMError):
    """Provider answered without any usable text."""

    status_code = 500
    error_code_name = "EMPTY_RESPONSE_ERROR"
    default_message = "Model returned an empty response. Try again."


class UnknownProviderError(LLMError):
    """Any other provider-reported failure; the raw message is passed through."""

    status_code = 500
    error_code_name = "UNKNOWN_PROVIDER_ERROR"


class ErrorResponse(BaseModel):
    """Error response body."""

    error: str = Field(..., description="Human-readable error message")
    error_code: str = Field(default="INTERNAL_SERVER_ERROR", description="Error code")
    kind: Optional[str] = Field(None, description="Classified error kind")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Error timestamp")

    @classmethod
    def from_exception(cls, exc: AsciiStudioError) -> 'ErrorResponse':
        """Create error response from exception."""
        return cls(
            error=exc.message,
            error_code=exc.error_code or "UNKNOWN_ERROR",
            kind=exc.kind
        )

    def to_json(self) -> Dict[str, Any]:
        """JSON-serializable body."""
        return self.model_dump(mode="json", exclude_none=True)
