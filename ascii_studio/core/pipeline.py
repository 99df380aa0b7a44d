"""
Generation pipeline.

Prompt builder -> provider orchestrator -> output normalizer. Produces
exactly one GenerationResult per request and never raises for
expected failures.
"""

import asyncio
import logging
from typing import Any, Optional

from .models.errors import ConfigurationError, ValidationError
from .models.generation import GenerationRequest, GenerationResult
from .models.llm import CompletionRequest
from .normalizer import normalize_art
from .prompts import build_prompts, max_tokens_for
from ..integrations.llm import (
    LiteLLMClient,
    ProviderOrchestrator,
    RetryHandler,
    build_provider_specs
)
from ..utils.config import Config


logger = logging.getLogger(__name__)


class AsciiArtGenerator:
    """Stateless per request; holds only the startup provider configuration."""

    def __init__(self, orchestrator: ProviderOrchestrator, temperature: float = 0.7):
        self.orchestrator = orchestrator
        self.temperature = temperature

    @classmethod
    def from_config(cls, config: Config, completion_func=None, sleep=None) -> 'AsciiArtGenerator':
        """
        Build a generator from application configuration.

        Args:
            config: Application configuration
            completion_func: Optional async completion callable (tests)
            sleep: Optional async sleep used for the retry backoff (tests)

        Returns:
            AsciiArtGenerator
        """
        orchestrator = ProviderOrchestrator(
            build_provider_specs(config),
            client=LiteLLMClient(completion_func=completion_func),
            retry_handler=RetryHandler(backoff_seconds=config.RETRY_BACKOFF_SECONDS, sleep=sleep)
        )
        return cls(orchestrator, temperature=config.generation_temperature)

    @property
    def is_configured(self) -> bool:
        return self.orchestrator.is_configured

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """
        Generate normalized ASCII art for a validated request.

        Args:
            request: Validated generation request

        Returns:
            GenerationResult with the art or a classified error
        """
        system_prompt, user_prompt = build_prompts(request.density, request.subject_text)
        completion = CompletionRequest(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            temperature=self.temperature,
            max_tokens=max_tokens_for(request.density)
        )

        outcome = await self.orchestrator.generate(completion)
        if not outcome.ok:
            return GenerationResult.failure(outcome.error)

        ascii_text = normalize_art(outcome.text)
        logger.info(
            f"Generated {request.density.value} art with {outcome.provider}/{outcome.model} "
            f"after {outcome.attempts} attempt(s)"
        )
        return GenerationResult.success(ascii_text, provider=outcome.provider, model=outcome.model)

    async def generate_from_payload(self, payload: Any) -> GenerationResult:
        """
        Validate a raw JSON payload and generate.

        Configuration is checked before the payload, and both before any
        network call.
        """
        if not self.is_configured:
            return GenerationResult.failure(ConfigurationError())

        try:
            request = GenerationRequest.from_payload(payload)
        except ValidationError as e:
            logger.info(f"Rejected generation request: {e.message}")
            return GenerationResult.failure(e)

        return await self.generate(request)

    def run(self, payload: Any, timeout: Optional[float] = None) -> GenerationResult:
        """Synchronous entry point for callers without an event loop."""
        coroutine = self.generate_from_payload(payload)
        if timeout:
            coroutine = asyncio.wait_for(coroutine, timeout)
        return asyncio.run(coroutine)
