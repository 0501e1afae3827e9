"""Text helpers shared by the domain services.

Incoming documents and user messages are cleaned once at the boundary:
BOM markers and replacement characters are removed, line endings are unified
to ``\\n`` and the text is NFKC-normalized. Internal layers assume clean text.
"""

import unicodedata


def normalize_text(text: str | None) -> str:
    """Strip BOM markers, unify newlines and NFKC-normalize.

    Surrounding whitespace is preserved so that structural markers such as
    blank lines between paragraphs survive; callers trim where needed.
    """
    if not text:
        return ""

    cleaned = text.replace("\ufeff", "").replace("\ufffd", "")
    cleaned = cleaned.replace("\r\n", "\n").replace("\r", "\n")
    return unicodedata.normalize("NFKC", cleaned)


def normalize_cache_key(message: str) -> str:
    """Cache key for a user message: lower-cased and trimmed."""
    return normalize_text(message).strip().lower()
