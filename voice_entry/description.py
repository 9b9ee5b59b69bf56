"""Free-text note extraction.

The note is what remains of the transcript once the recognized amount and
date spans, filler verbs ("add", "spent", "paid", ...) and currency
symbols/words are removed. The amount and date spans are cut by position in
the original transcript, so they are removed exactly even when a filler or
currency word inside them is stripped as well.
"""

from __future__ import annotations

import re
from functools import lru_cache

from .config import DEFAULT_PLACEHOLDER
from .keywords import DEFAULT_KEYWORDS, KeywordTables, word_pattern
from .models import AmountMatch, DateMatch

_WS_RE = re.compile(r"\s+")


@lru_cache(maxsize=32)
def _compiled(words: tuple[str, ...]) -> re.Pattern[str] | None:
    return word_pattern(words)


def _cut_spans(text: str, spans: list[tuple[int, int]]) -> str:
    keep = [True] * len(text)
    for start, end in spans:
        for i in range(max(0, start), min(len(text), end)):
            keep[i] = False
    # Removed characters become a space so neighbours never fuse into one word.
    return "".join(ch if k else " " for ch, k in zip(text, keep, strict=True))


def collapse_whitespace(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()


def extract_description(
    transcript: str,
    *,
    amount_match: AmountMatch | None = None,
    date_match: DateMatch | None = None,
    keywords: KeywordTables = DEFAULT_KEYWORDS,
    placeholder: str = DEFAULT_PLACEHOLDER,
) -> str:
    """Return a human-readable note for ``transcript``.

    Match spans must index ``transcript`` itself. An empty result is replaced
    by ``placeholder``.
    """

    spans = [(m.start, m.end) for m in (amount_match, date_match) if m is not None]
    text = _cut_spans(transcript, spans) if spans else transcript

    for words in (keywords.fillers, keywords.currency_words):
        pattern = _compiled(tuple(words))
        if pattern is not None:
            text = pattern.sub(" ", text)

    return collapse_whitespace(text) or placeholder


__all__ = ["collapse_whitespace", "extract_description"]
