"""
LLM integration module.

This module provides multi-provider chat completion with a fixed
retry/fallback order on top of LiteLLM.
"""

from .litellm_client import LiteLLMClient, classify_error
from .orchestrator import ProviderOrchestrator, build_attempt_plan
from .providers import build_provider_specs, configured_providers
from .retry_handler import RetryHandler

__all__ = [
    'LiteLLMClient',
    'classify_error',
    'ProviderOrchestrator',
    'build_attempt_plan',
    'build_provider_specs',
    'configured_providers',
    'RetryHandler'
]
