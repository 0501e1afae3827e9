"""Pure message classification: does a message deserve a step-by-step guide?"""

from __future__ import annotations

SIMPLE_GREETINGS = (
    "hello",
    "hi",
    "hey",
    "what's up",
    "how are you",
    "good morning",
    "good afternoon",
    "good evening",
)

SIMPLE_REPLIES = frozenset(
    {"yes", "no", "ok", "okay", "thanks", "thank you", "bye", "goodbye"}
)

GUIDE_KEYWORDS = (
    "how to",
    "guide",
    "framework",
    "strategy",
    "plan",
    "method",
    "approach",
    "process",
    "system",
    "learn",
    "teach me",
    "help me",
    "create",
    "build",
    "develop",
    "implement",
    "achieve",
    "goal",
    "objective",
)


def needs_guide(message: str) -> bool:
    """Decide whether a message should also get a structured guide.

    Greetings and short acknowledgements never do; messages asking for a
    plan, method or how-to do; everything else gets a plain reply.
    """
    text = message.lower().strip()
    if not text:
        return False

    # Substring match: a greeting anywhere in the message counts
    if any(greeting in text for greeting in SIMPLE_GREETINGS):
        return False

    if text in SIMPLE_REPLIES:
        return False

    return any(keyword in text for keyword in GUIDE_KEYWORDS)
