"""
Provider orchestrator.

Tries the configured providers and their candidate models in a fixed
priority order until one returns text. The retry/fallback order is an
explicit attempt plan; each attempt returns a ProviderOutcome value and a
first-success reducer walks the plan.
"""

import time
from typing import Iterable, List, Optional, Sequence

from ...core.models.errors import ConfigurationError, EmptyResponseError
from ...core.models.llm import AttemptDescriptor, CompletionRequest, ProviderOutcome, ProviderSpec
from ...utils.logging import get_logger
from .litellm_client import LiteLLMClient, classify_error
from .providers import configured_providers
from .retry_handler import RetryHandler


logger = get_logger(__name__)


def build_attempt_plan(providers: Iterable[ProviderSpec]) -> List[AttemptDescriptor]:
    """
    Expand configured providers into the ordered attempt plan.

    Args:
        providers: Provider specs in priority order

    Returns:
        One AttemptDescriptor per (provider, candidate model)
    """
    plan = []
    for spec in configured_providers(providers):
        last_index = len(spec.model_candidates) - 1
        for index, model in enumerate(spec.model_candidates):
            plan.append(AttemptDescriptor(
                provider=spec,
                model=model,
                candidate_index=index,
                has_next_candidate=index < last_index
            ))
    return plan


class ProviderOrchestrator:
    """
    Multi-provider generation with retry and fallback.

    This orchestrator handles:
    - Fixed provider priority, never reordered at runtime
    - Retrying the next model of the same provider after a transient failure
    - Falling through to the next provider on any other failure
    - Returning the most recent classified failure when everything fails
    """

    def __init__(
        self,
        providers: Sequence[ProviderSpec],
        client: Optional[LiteLLMClient] = None,
        retry_handler: Optional[RetryHandler] = None
    ):
        """
        Initialize the orchestrator.

        Args:
            providers: Provider specs in priority order, built once at startup
            client: Completion client
            retry_handler: Retry policy and backoff
        """
        self.providers = tuple(providers)
        self.client = client or LiteLLMClient()
        self.retry_handler = retry_handler or RetryHandler()
        self.plan = build_attempt_plan(self.providers)

        logger.info(
            f"ProviderOrchestrator initialized with plan: "
            f"{', '.join(attempt.label for attempt in self.plan) or 'empty'}"
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.plan)

    async def attempt(self, descriptor: AttemptDescriptor, request: CompletionRequest) -> ProviderOutcome:
        """
        Run one attempt and return its outcome instead of raising.

        Args:
            descriptor: Provider and model to call
            request: Prompts and sampling parameters

        Returns:
            ProviderOutcome with text or a classified error
        """
        provider = descriptor.provider.name
        model = descriptor.model
        start_time = time.time()

        try:
            response = await self.client.generate(descriptor.provider, model, request)
        except Exception as e:
            error = classify_error(e, provider=provider, model=model)
            logger.warning(
                f"Attempt {descriptor.label} failed: {error.kind}",
                provider=provider,
                model=model,
                outcome=error.kind,
                retryable=error.retryable,
                duration=time.time() - start_time
            )
            return ProviderOutcome(error=error, provider=provider, model=model, attempts=1)

        if not response.content.strip():
            logger.warning(
                f"Attempt {descriptor.label} returned an empty response",
                provider=provider,
                model=model,
                outcome=EmptyResponseError.__name__,
                duration=time.time() - start_time
            )
            return ProviderOutcome(
                error=EmptyResponseError(provider=provider, model=model),
                provider=provider,
                model=model,
                attempts=1
            )

        logger.info(
            f"Attempt {descriptor.label} succeeded",
            provider=provider,
            model=model,
            outcome="success",
            duration=time.time() - start_time
        )
        return ProviderOutcome(text=response.content, provider=provider, model=model, attempts=1)

    async def generate(self, request: CompletionRequest) -> ProviderOutcome:
        """
        Generate raw text, walking the attempt plan until the first success.

        Args:
            request: Prompts and sampling parameters

        Returns:
            ProviderOutcome with the first non-empty text, or the most
            recent classified failure
        """
        if not self.plan:
            return ProviderOutcome(error=ConfigurationError())

        last_outcome = None
        abandoned = set()
        attempts = 0

        for descriptor in self.plan:
            provider = descriptor.provider.name
            if provider in abandoned:
                continue

            outcome = await self.attempt(descriptor, request)
            attempts += 1

            if outcome.ok:
                return ProviderOutcome(
                    text=outcome.text,
                    provider=outcome.provider,
                    model=outcome.model,
                    attempts=attempts
                )

            last_outcome = outcome
            if isinstance(outcome.error, EmptyResponseError) or not self.retry_handler.is_retryable_error(outcome.error):
                abandoned.add(provider)
            elif descriptor.has_next_candidate:
                await self.retry_handler.wait(f"{provider} with its next model")

        logger.error(
            f"All providers failed after {attempts} attempts",
            outcome=last_outcome.error.kind,
            attempts=attempts
        )
        return ProviderOutcome(
            error=last_outcome.error,
            provider=last_outcome.provider,
            model=last_outcome.model,
            attempts=attempts
        )
