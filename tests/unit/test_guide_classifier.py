"""Unit tests for guide classification."""

import pytest

from shine_agent.core.services import needs_guide

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "message",
    [
        "how to build a startup",
        "Can you give me a framework for pricing?",
        "I want to LEARN Flutter",
        "what's the plan for next quarter",
        "teach me prompt engineering",
    ],
)
def test_guide_requests(message):
    assert needs_guide(message) is True


@pytest.mark.parametrize(
    "message",
    [
        "hi",
        "Hello there, how to build a startup?",
        "hey, help me",
        "good morning!",
        "ok",
        "  Thank you  ",
        "bye",
        "",
        "what do you think about Lagos traffic",
    ],
)
def test_no_guide(message):
    assert needs_guide(message) is False


def test_greeting_substring_suppresses_guide():
    # "which" and "this" both contain "hi"
    assert needs_guide("which strategy works for this market") is False
    assert needs_guide("they need a growth plan") is False


def test_acknowledgement_must_match_exactly():
    assert needs_guide("ok so what is the process") is True
