"""
Tests for the provider orchestrator: attempt plan, retry and fallback.
"""

import asyncio

import litellm

from ascii_studio.core.models.errors import (
    AuthenticationError,
    ConfigurationError,
    EmptyResponseError,
    ProviderTimeoutError,
    RateLimitError
)
from ascii_studio.core.models.llm import CompletionRequest
from ascii_studio.integrations.llm import build_attempt_plan

from conftest import ART, FakeCompletion, FakeSleep, make_orchestrator, make_spec


REQUEST = CompletionRequest(system_prompt="system", user_prompt="user", max_tokens=3072)

ARK = "openai/deepseek-v3-2-251201"
GEMINI = "gemini/gemini-2.5-flash"
GEMINI_LITE = "gemini/gemini-2.0-flash-lite"
OPENAI = "openai/gpt-4o-mini"


def rate_limited():
    return Exception("429 Too Many Requests: quota exceeded")


def unauthorized():
    return Exception("401 Unauthorized: invalid api key")


def test_attempt_plan_order(specs):
    plan = build_attempt_plan(specs)

    assert [attempt.label for attempt in plan] == [
        "ark/deepseek-v3-2-251201",
        "gemini/gemini-2.5-flash",
        "gemini/gemini-2.0-flash-lite",
        "openai/gpt-4o-mini",
    ]
    assert [attempt.has_next_candidate for attempt in plan] == [False, True, False, False]
    assert plan[2].candidate_index == 1


def test_attempt_plan_skips_unconfigured_providers():
    specs = (make_spec("ark", "a", api_key=None), make_spec("openai", "b"))
    assert [attempt.label for attempt in build_attempt_plan(specs)] == ["openai/b"]


def test_first_provider_success(specs, completion, sleep):
    orchestrator = make_orchestrator(specs, completion, sleep)

    outcome = asyncio.run(orchestrator.generate(REQUEST))

    assert outcome.ok
    assert outcome.text == ART
    assert outcome.provider == "ark"
    assert outcome.attempts == 1
    assert completion.models == [ARK]


def test_rate_limited_provider_falls_back_to_next(specs, sleep):
    completion = FakeCompletion({ARK: rate_limited()})
    orchestrator = make_orchestrator(specs, completion, sleep)

    outcome = asyncio.run(orchestrator.generate(REQUEST))

    assert outcome.ok
    assert outcome.provider == "gemini"
    assert completion.models == [ARK, GEMINI]
    # No further ark candidate, so no backoff before switching providers
    assert sleep.waits == []


def test_retryable_failure_waits_before_next_candidate(specs, sleep):
    completion = FakeCompletion({ARK: unauthorized(), GEMINI: rate_limited()})
    orchestrator = make_orchestrator(specs, completion, sleep)

    outcome = asyncio.run(orchestrator.generate(REQUEST))

    assert outcome.ok
    assert outcome.model == "gemini-2.0-flash-lite"
    assert outcome.attempts == 3
    assert completion.models == [ARK, GEMINI, GEMINI_LITE]
    assert sleep.waits == [3.0]


def test_non_retryable_failure_abandons_provider(specs, sleep):
    completion = FakeCompletion({GEMINI: unauthorized()})
    specs = specs[1:]
    orchestrator = make_orchestrator(specs, completion, sleep)

    outcome = asyncio.run(orchestrator.generate(REQUEST))

    assert outcome.ok
    assert outcome.provider == "openai"
    assert completion.models == [GEMINI, OPENAI]
    assert sleep.waits == []


def test_exhaustion_returns_last_failure(specs, sleep):
    completion = FakeCompletion({
        ARK: unauthorized(),
        GEMINI: unauthorized(),
        OPENAI: Exception("Request timed out after 600 seconds"),
    })
    orchestrator = make_orchestrator(specs, completion, sleep)

    outcome = asyncio.run(orchestrator.generate(REQUEST))

    assert not outcome.ok
    assert isinstance(outcome.error, ProviderTimeoutError)
    assert outcome.error.kind == "TimeoutError"
    assert outcome.error.status_code == 504
    assert outcome.provider == "openai"
    assert outcome.attempts == 3
    assert completion.models == [ARK, GEMINI, OPENAI]


def test_all_rate_limited_reports_rate_limit(specs, sleep):
    completion = FakeCompletion({model: rate_limited() for model in (ARK, GEMINI, GEMINI_LITE, OPENAI)})
    orchestrator = make_orchestrator(specs, completion, sleep)

    outcome = asyncio.run(orchestrator.generate(REQUEST))

    assert isinstance(outcome.error, RateLimitError)
    assert outcome.attempts == 4
    assert sleep.waits == [3.0]


def test_empty_response_moves_to_next_provider(specs, sleep):
    completion = FakeCompletion({ARK: "   \n  ", GEMINI: ""})
    orchestrator = make_orchestrator(specs, completion, sleep)

    outcome = asyncio.run(orchestrator.generate(REQUEST))

    assert outcome.ok
    assert outcome.provider == "openai"
    # The gemini fallback model is skipped after an empty response
    assert completion.models == [ARK, GEMINI, OPENAI]


def test_empty_response_everywhere(sleep):
    completion = FakeCompletion(default=None)
    orchestrator = make_orchestrator([make_spec("openai", "gpt-4o-mini")], completion, sleep)

    outcome = asyncio.run(orchestrator.generate(REQUEST))

    assert isinstance(outcome.error, EmptyResponseError)
    assert outcome.error.message == "Model returned an empty response. Try again."


def test_region_failure_is_retried_with_next_model(sleep):
    completion = FakeCompletion({GEMINI: Exception("User location is not supported for the API use.")})
    specs = [make_spec("gemini", "gemini-2.5-flash", "gemini-2.0-flash-lite")]
    orchestrator = make_orchestrator(specs, completion, sleep)

    outcome = asyncio.run(orchestrator.generate(REQUEST))

    assert outcome.ok
    assert completion.models == [GEMINI, GEMINI_LITE]
    assert sleep.waits == [3.0]


def test_unconfigured_fails_without_network_call(sleep):
    completion = FakeCompletion()
    specs = [make_spec("gemini", "gemini-2.5-flash", api_key=None)]
    orchestrator = make_orchestrator(specs, completion, sleep)

    outcome = asyncio.run(orchestrator.generate(REQUEST))

    assert not orchestrator.is_configured
    assert isinstance(outcome.error, ConfigurationError)
    assert outcome.error.status_code == 503
    assert completion.calls == []


def test_authentication_message_names_provider_key(sleep):
    completion = FakeCompletion({OPENAI: unauthorized()})
    orchestrator = make_orchestrator([make_spec("openai", "gpt-4o-mini")], completion, sleep)

    outcome = asyncio.run(orchestrator.generate(REQUEST))

    assert isinstance(outcome.error, AuthenticationError)
    assert outcome.error.message == "Invalid API key. Check your OPENAI_API_KEY."


def test_zero_backoff_never_sleeps(specs):
    sleep = FakeSleep()
    completion = FakeCompletion({GEMINI: rate_limited()})
    orchestrator = make_orchestrator(specs[1:], completion, sleep, backoff=0)

    outcome = asyncio.run(orchestrator.generate(REQUEST))

    assert outcome.ok
    assert sleep.waits == []


def test_litellm_not_found_moves_to_next_gemini_model(sleep):
    completion = FakeCompletion({
        GEMINI: litellm.NotFoundError(message="no such model", model="gemini-2.5-flash", llm_provider="gemini")
    })
    specs = [make_spec("gemini", "gemini-2.5-flash", "gemini-2.0-flash-lite")]
    orchestrator = make_orchestrator(specs, completion, sleep)

    outcome = asyncio.run(orchestrator.generate(REQUEST))

    assert outcome.ok
    assert outcome.model == "gemini-2.0-flash-lite"
    assert completion.models == [GEMINI, GEMINI_LITE]
    assert sleep.waits == [3.0]
