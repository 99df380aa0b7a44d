"""
Tests for structured logging.
"""

import logging

from ascii_studio.utils.logging import get_logger


def test_structured_fields_appear_in_message(caplog):
    caplog.set_level(logging.INFO, logger="ascii_studio.attempts")
    logger = get_logger("ascii_studio.attempts")

    logger.info("Attempt gemini/gemini-2.5-flash succeeded", provider="gemini", outcome="success", duration=1.23456)

    record = caplog.records[-1]
    assert record.getMessage() == (
        "Attempt gemini/gemini-2.5-flash succeeded | provider=gemini outcome=success duration=1.235"
    )
    assert record.provider == "gemini"
    assert record.duration == 1.23456


def test_plain_message_without_fields(caplog):
    caplog.set_level(logging.WARNING, logger="ascii_studio.attempts")

    get_logger("ascii_studio.attempts").warning("All providers failed")

    assert caplog.records[-1].getMessage() == "All providers failed"
