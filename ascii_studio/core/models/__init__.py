"""
Data models and schemas for ASCII Studio.

This module contains the data models, validation schemas and
error types used throughout the service.
"""

from .generation import (
    DensityLevel,
    GenerationRequest,
    GenerationResult,
    MAX_SUBJECT_LENGTH
)

from .llm import (
    LLMProvider,
    ProviderSpec,
    CompletionRequest,
    LLMResponse,
    AttemptDescriptor,
    ProviderOutcome
)

from .errors import (
    AsciiStudioError,
    ValidationError,
    ConfigurationError,
    LLMError,
    AuthenticationError,
    RateLimitError,
    ProviderTimeoutError,
    EmptyResponseError,
    UnknownProviderError,
    ErrorResponse
)

__all__ = [
    # Generation models
    'DensityLevel',
    'GenerationRequest',
    'GenerationResult',
    'MAX_SUBJECT_LENGTH',

    # LLM models
    'LLMProvider',
    'ProviderSpec',
    'CompletionRequest',
    'LLMResponse',
    'AttemptDescriptor',
    'ProviderOutcome',

    # Error models
    'AsciiStudioError',
    'ValidationError',
    'ConfigurationError',
    'LLMError',
    'AuthenticationError',
    'RateLimitError',
    'ProviderTimeoutError',
    'EmptyResponseError',
    'UnknownProviderError',
    'ErrorResponse'
]
