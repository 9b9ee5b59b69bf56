"""Natural-language date extraction backed by ``dateparser``.

``dateparser.search.search_dates`` does the heavy lifting. It is eager, so the
results are gated: the transcript must carry a date signal (a day word, a
weekday or month name, a relative word such as "last" or "ago", a numeric
date like ``12/03`` or an ordinal like ``5th``) and the accepted fragment must
carry one too. Otherwise an amount such as ``300`` could be read as a year.

Short names that double as common words ("may", "sat", "sun", "wed", "mar")
only count beside a day number (``5 may``, ``may 5th``) or after
on/last/next/this (``on sat``).

Ambiguous relative phrases resolve forward: "monday" is the upcoming Monday.
"""

from __future__ import annotations

import re
from datetime import datetime

from dateparser.search import search_dates

from .logging_setup import get_logger
from .models import DateMatch

_logger = get_logger("voice_entry.dates")

_DAY_WORDS = frozenset({"today", "yesterday", "tomorrow", "tonight", "yday"})
_WEEKDAYS = frozenset(
    {"monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
     "mon", "tue", "tues", "wed", "thu", "thur", "thurs", "fri", "sat", "sun"}
)
_MONTHS = frozenset(
    {"january", "february", "march", "april", "may", "june", "july", "august",
     "september", "october", "november", "december",
     "jan", "feb", "mar", "apr", "jun", "jul", "aug", "sep", "sept", "oct", "nov", "dec"}
)
_RELATIVE_WORDS = frozenset(
    {"last", "next", "ago", "week", "weeks", "month", "months", "year", "years",
     "days", "fortnight", "morning", "evening", "night", "noon", "midnight"}
)
# Abbreviations that are also everyday English words ("I may", "sat in a cab").
# They only count next to a day number or after on/last/next/this.
_AMBIGUOUS_WORDS = frozenset({"may", "mar", "sat", "sun", "wed"})
_SIGNAL_WORDS = (_DAY_WORDS | _WEEKDAYS | _MONTHS | _RELATIVE_WORDS) - _AMBIGUOUS_WORDS

_NUMERIC_DATE_RE = re.compile(r"\b\d{1,4}[/-]\d{1,2}(?:[/-]\d{2,4})?\b")
_ORDINAL_RE = re.compile(r"\b\d{1,2}(?:st|nd|rd|th)\b", re.IGNORECASE)
_CLOCK_RE = re.compile(r"\b\d{1,2}(?::\d{2})?\s*(?:am|pm)\b", re.IGNORECASE)
_AMB = "|".join(sorted(_AMBIGUOUS_WORDS))
_DAY_NUM = r"\d{1,2}(?:st|nd|rd|th)?"
_AMBIGUOUS_DATE_RE = re.compile(
    rf"\b(?:on|last|next|this)\s+(?:{_AMB})\b"
    rf"|\b{_DAY_NUM}\s+(?:of\s+)?(?:{_AMB})\b"
    rf"|\b(?:{_AMB})\s+{_DAY_NUM}\b",
    re.IGNORECASE,
)
_WORD_RE = re.compile(r"[a-z]+")
_PRECEDING_WORD_RE = re.compile(r"(\w+)\s*$")
_FOLLOWING_WORD_RE = re.compile(r"\s*\w+")

_SETTINGS_BASE: dict[str, object] = {
    "PREFER_DATES_FROM": "future",
    "RETURN_AS_TIMEZONE_AWARE": False,
    "DATE_ORDER": "DMY",
}


def has_date_signal(text: str) -> bool:
    """Whether ``text`` contains anything that looks like a date or time."""

    lowered = text.lower()
    if set(_WORD_RE.findall(lowered)) & _SIGNAL_WORDS:
        return True
    return bool(
        _NUMERIC_DATE_RE.search(lowered)
        or _ORDINAL_RE.search(lowered)
        or _CLOCK_RE.search(lowered)
        or _AMBIGUOUS_DATE_RE.search(lowered)
    )


def _fragment_has_signal(transcript: str, start: int, end: int) -> bool:
    # dateparser may return a bare "sat" out of "on sat", so an ambiguous word
    # is judged together with its neighbouring words.
    fragment = transcript[start:end]
    if has_date_signal(fragment):
        return True
    if not set(_WORD_RE.findall(fragment.lower())) & _AMBIGUOUS_WORDS:
        return False
    before = _PRECEDING_WORD_RE.search(transcript[:start])
    after = _FOLLOWING_WORD_RE.match(transcript, end)
    window = transcript[before.start(1) if before else start : after.end() if after else end]
    return bool(_AMBIGUOUS_DATE_RE.search(window))


def _locate(transcript: str, fragment: str, start_at: int) -> tuple[int, int] | None:
    idx = transcript.find(fragment, start_at)
    if idx < 0:
        idx = transcript.lower().find(fragment.lower(), start_at)
    if idx < 0:
        return None
    return idx, idx + len(fragment)


def extract_date(transcript: str, *, now: datetime) -> DateMatch | None:
    """Return the first date/time phrase in ``transcript`` resolved against ``now``.

    ``now`` may be naive or aware; an aware ``now`` yields an aware result in
    the same timezone.
    """

    if not transcript or not has_date_signal(transcript):
        return None

    base = now.replace(tzinfo=None)
    settings = dict(_SETTINGS_BASE, RELATIVE_BASE=base)
    try:
        found = search_dates(transcript, languages=["en"], settings=settings)
    except (ValueError, OverflowError) as exc:
        _logger.debug("date search failed for %r: %s", transcript, exc)
        return None
    if not found:
        return None

    cursor = 0
    for fragment, value in found:
        span = _locate(transcript, fragment, cursor)
        if span is None:
            continue
        cursor = span[1]
        if not _fragment_has_signal(transcript, *span):
            _logger.debug("ignoring date fragment without a date signal: %r", fragment)
            continue
        if now.tzinfo is not None and value.tzinfo is None:
            value = value.replace(tzinfo=now.tzinfo)
        _logger.debug("date %s from %r", value.isoformat(), fragment)
        start, end = span
        return DateMatch(value=value, text=transcript[start:end], start=start, end=end)
    return None


__all__ = ["extract_date", "has_date_signal"]
