"""
Provider catalog.

Builds the immutable, priority-ordered provider configuration from
the application config. Ark is reachable without regional network
restrictions, so it is tried first when several providers have keys.
"""

import logging
from typing import Tuple

from ...core.models.llm import LLMProvider, ProviderSpec
from ...utils.config import Config


logger = logging.getLogger(__name__)

ARK_DEFAULT_BASE_URL = "https://ark.cn-beijing.volces.com/api/v3"
ARK_DEFAULT_MODEL = "deepseek-v3-2-251201"

GEMINI_DEFAULT_MODEL = "gemini-2.5-flash"
GEMINI_DEFAULT_FALLBACK_MODEL = "gemini-2.0-flash-lite"

OPENAI_DEFAULT_MODEL = "gpt-4o-mini"


def _candidates(*models) -> Tuple[str, ...]:
    seen = []
    for model in models:
        if model and model not in seen:
            seen.append(model)
    return tuple(seen)


def build_provider_specs(config: Config) -> Tuple[ProviderSpec, ...]:
    """
    Build provider specs in priority order.

    Args:
        config: Application configuration

    Returns:
        Tuple of ProviderSpec, configured or not
    """
    specs = (
        ProviderSpec(
            name=LLMProvider.ARK.value,
            model_candidates=_candidates(
                config.ARK_MODEL or ARK_DEFAULT_MODEL,
                config.ARK_FALLBACK_MODEL
            ),
            api_key=config.ARK_API_KEY,
            base_url=config.ARK_BASE_URL or ARK_DEFAULT_BASE_URL,
            timeout=config.ARK_TIMEOUT,
            litellm_prefix="openai"
        ),
        ProviderSpec(
            name=LLMProvider.GEMINI.value,
            model_candidates=_candidates(
                config.GEMINI_MODEL or GEMINI_DEFAULT_MODEL,
                config.GEMINI_FALLBACK_MODEL or GEMINI_DEFAULT_FALLBACK_MODEL
            ),
            api_key=config.GEMINI_API_KEY,
            base_url=config.GEMINI_BASE_URL,
            litellm_prefix="gemini"
        ),
        ProviderSpec(
            name=LLMProvider.OPENAI.value,
            model_candidates=_candidates(
                config.OPENAI_MODEL or OPENAI_DEFAULT_MODEL,
                config.OPENAI_FALLBACK_MODEL
            ),
            api_key=config.OPENAI_API_KEY,
            base_url=config.OPENAI_BASE_URL,
            litellm_prefix="openai"
        ),
    )

    configured = [spec.name for spec in specs if spec.is_configured]
    logger.info(f"Configured LLM providers: {', '.join(configured) or 'none'}")

    return specs


def configured_providers(specs) -> Tuple[ProviderSpec, ...]:
    """Keep only providers with a credential, preserving order."""
    return tuple(spec for spec in specs if spec.is_configured)
