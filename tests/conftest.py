"""
Shared fixtures for ASCII Studio tests.

Provider calls are replaced by an in-process async completion function;
no test touches the network.
"""

from types import SimpleNamespace

import pytest

from ascii_studio.core.models.llm import ProviderSpec
from ascii_studio.core.pipeline import AsciiArtGenerator
from ascii_studio.integrations.llm import LiteLLMClient, ProviderOrchestrator, RetryHandler


ART = "\n".join([
    "   /\\_/\\   ",
    "  ( o.o )  ",
    "   > ^ <   ",
])


def completion_response(content):
    """Object shaped like a LiteLLM ModelResponse."""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content), finish_reason="stop")],
        usage=SimpleNamespace(prompt_tokens=10, completion_tokens=20, total_tokens=30)
    )


class FakeCompletion:
    """
    Async stand-in for litellm.acompletion.

    `behaviour` maps a LiteLLM model string (e.g. "gemini/gemini-2.5-flash")
    to either a text to return or an exception to raise. Unknown models
    return `default`.
    """

    def __init__(self, behaviour=None, default=ART):
        self.behaviour = behaviour or {}
        self.default = default
        self.calls = []

    async def __call__(self, **params):
        self.calls.append(params)
        outcome = self.behaviour.get(params["model"], self.default)
        if isinstance(outcome, Exception):
            raise outcome
        return completion_response(outcome)

    @property
    def models(self):
        return [call["model"] for call in self.calls]


class FakeSleep:
    """Records backoff waits instead of sleeping."""

    def __init__(self):
        self.waits = []

    async def __call__(self, seconds):
        self.waits.append(seconds)


def make_spec(name, *models, api_key="test-key", prefix=None, **kwargs):
    return ProviderSpec(
        name=name,
        model_candidates=tuple(models),
        api_key=api_key,
        litellm_prefix=prefix or name,
        **kwargs
    )


def make_orchestrator(specs, completion, sleep=None, backoff=3.0):
    return ProviderOrchestrator(
        specs,
        client=LiteLLMClient(completion_func=completion),
        retry_handler=RetryHandler(backoff_seconds=backoff, sleep=sleep or FakeSleep())
    )


@pytest.fixture
def completion():
    return FakeCompletion()


@pytest.fixture
def sleep():
    return FakeSleep()


@pytest.fixture
def specs():
    return (
        make_spec("ark", "deepseek-v3-2-251201", prefix="openai",
                  base_url="https://ark.cn-beijing.volces.com/api/v3", timeout=30),
        make_spec("gemini", "gemini-2.5-flash", "gemini-2.0-flash-lite"),
        make_spec("openai", "gpt-4o-mini"),
    )


@pytest.fixture
def generator(specs, completion, sleep):
    return AsciiArtGenerator(make_orchestrator(specs, completion, sleep), temperature=0.7)
