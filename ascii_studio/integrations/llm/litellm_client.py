"""
LiteLLM client implementation.

This module provides the LiteLLM integration used to reach every
configured provider through one chat-completion interface, and the
classification of provider failures into the service's error kinds.
"""

import logging
import time
from typing import Optional, Dict, Any, Callable, Awaitable

from litellm import acompletion
from litellm.exceptions import (
    AuthenticationError as LiteLLMAuthenticationError,
    PermissionDeniedError,
    RateLimitError as LiteLLMRateLimitError,
    Timeout,
    NotFoundError,
    ServiceUnavailableError
)

from ...core.models.errors import (
    LLMError,
    AuthenticationError,
    RateLimitError,
    ProviderTimeoutError,
    UnknownProviderError
)
from ...core.models.llm import CompletionRequest, LLMResponse, ProviderSpec


logger = logging.getLogger(__name__)

CompletionFunc = Callable[..., Awaitable[Any]]

REGION = "region"
TIMEOUT = "timeout"
RATE_LIMIT = "rate_limit"
AUTHENTICATION = "authentication"
MODEL_UNAVAILABLE = "model_unavailable"
SERVICE_UNAVAILABLE = "service_unavailable"

MESSAGE_PATTERNS = [
    (REGION, (
        "location is not supported",
        "unsupported location",
        "unsupported_country",
        "not available in your region",
        "country, region, or territory not supported"
    )),
    (TIMEOUT, ("timed out", "timeout", "etimedout")),
    (RATE_LIMIT, ("429", "rate limit", "ratelimit", "quota", "resource_exhausted", "too many requests")),
    (AUTHENTICATION, (
        "401",
        "unauthorized",
        "invalid api key",
        "incorrect api key",
        "api key not valid",
        "authentication"
    )),
    (MODEL_UNAVAILABLE, ("model not found", "not found", "does not exist", "not supported", "unsupported model")),
    (SERVICE_UNAVAILABLE, ("503", "service unavailable", "temporarily unavailable", "overloaded")),
]

EXCEPTION_CATEGORIES = [
    (Timeout, TIMEOUT),
    (LiteLLMRateLimitError, RATE_LIMIT),
    (LiteLLMAuthenticationError, AUTHENTICATION),
    (PermissionDeniedError, AUTHENTICATION),
    (NotFoundError, MODEL_UNAVAILABLE),
    (ServiceUnavailableError, SERVICE_UNAVAILABLE),
]


def _category_from_message(message: str) -> Optional[str]:
    lowered = message.lower()
    for category, patterns in MESSAGE_PATTERNS:
        if any(pattern in lowered for pattern in patterns):
            return category
    return None


def classify_error(error: Exception, provider: str = None, model: str = None) -> LLMError:
    """
    Map a provider exception onto a classified LLMError.

    Regional unavailability is detected from the message first because
    providers report it under several exception types. Otherwise the
    exception type wins and the message is only used as a fallback.

    Args:
        error: Exception raised by the provider call
        provider: Provider name
        model: Model identifier

    Returns:
        Classified LLMError with its retryable flag set
    """
    if isinstance(error, LLMError):
        error.provider = error.provider or provider
        error.model = error.model or model
        return error

    raw = str(error) or type(error).__name__
    context = {"provider": provider, "model": model, "raw_message": raw}

    category = _category_from_message(raw)
    if category != REGION:
        category = next(
            (name for exc_type, name in EXCEPTION_CATEGORIES if isinstance(error, exc_type)),
            category
        )

    if category == REGION:
        return UnknownProviderError(f"{provider} is not available in this region: {raw}", retryable=True, **context)
    if category == TIMEOUT:
        return ProviderTimeoutError(**context)
    if category == RATE_LIMIT:
        return RateLimitError(retryable=True, **context)
    if category == AUTHENTICATION:
        return AuthenticationError(**context)
    if category in (MODEL_UNAVAILABLE, SERVICE_UNAVAILABLE):
        return UnknownProviderError(raw, retryable=True, **context)
    return UnknownProviderError(raw, retryable=False, **context)


def _extract_content(response: Any) -> Dict[str, Any]:
    choices = getattr(response, "choices", None) or []
    if not choices:
        return {"content": "", "finish_reason": None}

    choice = choices[0]
    message = getattr(choice, "message", None)
    return {
        "content": getattr(message, "content", None) or "",
        "finish_reason": getattr(choice, "finish_reason", None)
    }


class LiteLLMClient:
    """
    LiteLLM client for unified LLM provider access.

    This client performs exactly one chat completion per call; retries
    and fallbacks are the orchestrator's job.
    """

    def __init__(self, completion_func: Optional[CompletionFunc] = None):
        """
        Initialize LiteLLM client.

        Args:
            completion_func: Async completion callable, defaults to litellm.acompletion
        """
        self.completion_func = completion_func or acompletion

    def build_params(self, spec: ProviderSpec, model: str, request: CompletionRequest) -> Dict[str, Any]:
        """Keyword arguments for the completion call."""
        params = {
            "model": spec.litellm_model(model),
            "messages": [
                {"role": "system", "content": request.system_prompt},
                {"role": "user", "content": request.user_prompt}
            ],
            "temperature": request.temperature,
            "max_tokens": request.max_tokens,
            "api_key": spec.api_key
        }

        if spec.base_url:
            params["api_base"] = spec.base_url
        if spec.timeout:
            params["timeout"] = spec.timeout

        return params

    async def generate(self, spec: ProviderSpec, model: str, request: CompletionRequest) -> LLMResponse:
        """
        Generate text with one provider/model.

        Args:
            spec: Provider configuration
            model: Model identifier
            request: Prompts and sampling parameters

        Returns:
            LLMResponse, possibly with empty content

        Raises:
            LLMError: Classified provider failure
        """
        params = self.build_params(spec, model, request)
        start_time = time.time()

        logger.debug(f"Calling {params['model']} (max_tokens={request.max_tokens})")

        try:
            response = await self.completion_func(**params)
        except LLMError:
            raise
        except Exception as e:
            raise classify_error(e, provider=spec.name, model=model) from e

        extracted = _extract_content(response)
        usage = getattr(response, "usage", None)

        return LLMResponse(
            content=extracted["content"],
            finish_reason=extracted["finish_reason"],
            prompt_tokens=getattr(usage, "prompt_tokens", 0) or 0,
            completion_tokens=getattr(usage, "completion_tokens", 0) or 0,
            total_tokens=getattr(usage, "total_tokens", 0) or 0,
            model=model,
            provider=spec.name,
            response_time=time.time() - start_time
        )
