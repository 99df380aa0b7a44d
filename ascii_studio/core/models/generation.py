"""
Generation request and result models.

This module defines the per-request data structures that flow
through the generation pipeline.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Any, Dict
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import AsciiStudioError, ValidationError


MAX_SUBJECT_LENGTH = 500


class DensityLevel(str, Enum):
    """ASCII-art fill density."""
    SPARSE = "sparse"
    MEDIUM = "medium"
    DENSE = "dense"

    @classmethod
    def parse(cls, value: Any) -> 'DensityLevel':
        """Resolve a raw value, falling back to MEDIUM when absent or invalid."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.MEDIUM


class GenerationRequest(BaseModel):
    """A single ASCII-art generation request."""

    model_config = ConfigDict(frozen=True)

    subject_text: str = Field(..., min_length=1, description="What to draw")
    density: DensityLevel = Field(default=DensityLevel.MEDIUM, description="Fill density")

    @field_validator("subject_text")
    @classmethod
    def truncate_subject(cls, value: str) -> str:
        return value[:MAX_SUBJECT_LENGTH]

    @field_validator("density", mode="before")
    @classmethod
    def coerce_density(cls, value: Any) -> DensityLevel:
        return DensityLevel.parse(value)

    @classmethod
    def from_payload(cls, payload: Any) -> 'GenerationRequest':
        """
        Build a request from a decoded JSON body.

        Args:
            payload: Decoded request body

        Returns:
            Validated GenerationRequest

        Raises:
            ValidationError: If the prompt is missing, empty or not a string
        """
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object", field="body")

        prompt = payload.get("prompt")
        if not isinstance(prompt, str) or not prompt:
            raise ValidationError(field="prompt", value=prompt)

        return cls(subject_text=prompt, density=payload.get("density"))


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one generation request: normalized art or a classified error."""

    ascii: Optional[str] = None
    error: Optional[AsciiStudioError] = None
    provider: Optional[str] = None
    model: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, ascii_text: str, provider: str = None, model: str = None) -> 'GenerationResult':
        return cls(ascii=ascii_text, provider=provider, model=model)

    @classmethod
    def failure(cls, error: AsciiStudioError) -> 'GenerationResult':
        return cls(
            error=error,
            provider=getattr(error, "provider", None),
            model=getattr(error, "model", None)
        )

    def to_json(self) -> Dict[str, Any]:
        """Response body for the HTTP layer."""
        if self.ok:
            return {"ascii": self.ascii}
        return {"error": self.error.message}
