"""
LLM-related data models and schemas.

This module defines the data structures for provider configuration,
completion requests, responses and the attempt plan used by the
provider orchestrator.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

from .errors import AsciiStudioError


class LLMProvider(str, Enum):
    """Supported LLM providers, in priority order."""
    ARK = "ark"
    GEMINI = "gemini"
    OPENAI = "openai"


class ProviderSpec(BaseModel):
    """Process-wide configuration of one provider."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Provider name")
    model_candidates: Tuple[str, ...] = Field(..., min_length=1, description="Model ids in priority order")
    api_key: Optional[str] = Field(None, description="API key", repr=False)
    base_url: Optional[str] = Field(None, description="Alternate base endpoint")
    timeout: Optional[float] = Field(None, gt=0, description="Request timeout in seconds")
    litellm_prefix: str = Field(..., description="LiteLLM provider route, e.g. 'gemini'")

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def litellm_model(self, model: str) -> str:
        """Model string understood by LiteLLM."""
        return f"{self.litellm_prefix}/{model}"


class CompletionRequest(BaseModel):
    """Provider-agnostic chat completion request."""

    model_config = ConfigDict(frozen=True)

    system_prompt: str = Field(..., description="System prompt")
    user_prompt: str = Field(..., description="User prompt")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="Temperature")
    max_tokens: int = Field(default=2048, ge=1, le=100000, description="Maximum tokens")


class LLMResponse(BaseModel):
    """LLM response model."""

    content: str = Field(..., description="Generated content")
    finish_reason: Optional[str] = Field(None, description="Reason for completion")

    prompt_tokens: int = Field(default=0, ge=0, description="Prompt tokens used")
    completion_tokens: int = Field(default=0, ge=0, description="Completion tokens used")
    total_tokens: int = Field(default=0, ge=0, description="Total tokens used")

    model: str = Field(..., description="Model used")
    provider: str = Field(..., description="Provider used")

    response_time: float = Field(default=0.0, ge=0.0, description="Response time in seconds")
    created_at: datetime = Field(default_factory=datetime.utcnow, description="Response timestamp")


@dataclass(frozen=True)
class AttemptDescriptor:
    """One step of the retry/fallback plan."""

    provider: ProviderSpec
    model: str
    candidate_index: int
    has_next_candidate: bool

    @property
    def label(self) -> str:
        return f"{self.provider.name}/{self.model}"


@dataclass(frozen=True)
class ProviderOutcome:
    """Result-or-error value produced by an attempt and by the orchestrator."""

    text: Optional[str] = None
    error: Optional[AsciiStudioError] = None
    provider: Optional[str] = None
    model: Optional[str] = None
    attempts: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.text)
