"""Keyword classifiers for transaction type and category.

Both are plain case-insensitive substring scans over the tables in
:mod:`voice_entry.keywords`; nothing here knows about any particular language.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .keywords import DEFAULT_KEYWORDS, KeywordTables
from .logging_setup import get_logger
from .models import EXPENSE, INCOME, TransactionType

_logger = get_logger("voice_entry.classify")


def first_matching_label(
    text: str, table: Mapping[str, Iterable[str]]
) -> tuple[str, str] | None:
    """Return ``(label, keyword)`` for the first table entry with a hit.

    Entries are scanned in mapping order, keywords in list order; the first
    keyword found as a substring of ``text`` (case-insensitive) decides.
    """

    lowered = text.lower()
    for label, keywords in table.items():
        for kw in keywords:
            if kw and kw.lower() in lowered:
                return label, kw
    return None


def classify_type(transcript: str, keywords: KeywordTables = DEFAULT_KEYWORDS) -> TransactionType:
    """``"INCOME"`` if any income keyword occurs in ``transcript``, else ``"EXPENSE"``."""

    lowered = transcript.lower()
    for kw in keywords.income:
        if kw in lowered:
            _logger.debug("income keyword %r found", kw)
            return INCOME
    return EXPENSE


def classify_category(transcript: str, keywords: KeywordTables = DEFAULT_KEYWORDS) -> str | None:
    """First category (in table order) whose keywords occur in ``transcript``.

    ``None`` means uncategorized.
    """

    hit = first_matching_label(transcript, keywords.categories)
    if hit is None:
        return None
    label, kw = hit
    _logger.debug("category %r via keyword %r", label, kw)
    return label


__all__ = ["classify_category", "classify_type", "first_matching_label"]
