"""Monetary amount extraction.

Two ordered pattern lists are evaluated in sequence and the first pattern that
both matches and yields a usable number wins:

1. digit patterns (``₹300``, ``Rs 1,200.50``, ``300 rupees``, ``$12``,
   ``euros 5``, then any free-standing number);
2. word patterns: the same currency cues around a run of number words
   (``paanch sau rupees``, ``rupees two thousand``), then any run of number
   words.

Within each list currency-tagged patterns precede the untagged catch-all,
which takes the configured default currency. A digit amount may carry a
spoken scale suffix (``2k``, ``1.5 lakh``, ``5 hundred``).
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from decimal import Decimal, InvalidOperation
from typing import NamedTuple

from .logging_setup import get_logger
from .models import AmountMatch, Currency
from .numbers import NUMBER_WORDS, SCALE_WORDS, words_to_number

_logger = get_logger("voice_entry.amounts")

# Longest first so "lakhs" is preferred over "lakh" inside the alternation.
_SCALES = "|".join(sorted(SCALE_WORDS, key=lambda w: (-len(w), w)))
_DIGITS = rf"(?P<amount>[\d.,]+)(?:\s*(?P<scale>{_SCALES})\b)?"

_WORD_TOKEN = (
    r"\b(?:\d+(?:\.\d+)?k?|"
    + "|".join(re.escape(w) for w in sorted(NUMBER_WORDS, key=lambda w: (-len(w), w)))
    + r")\b"
)
_WORDS = rf"(?P<amount>{_WORD_TOKEN}(?:[\s-]+{_WORD_TOKEN})*)"

# Upper bound on the spoken-number run fed to the normalizer; longer runs are
# cut back to their leading whole tokens.
MAX_WORD_RUN_CHARS = 50
_TOKEN_RE = re.compile(_WORD_TOKEN, re.IGNORECASE)

_INR_AFTER = r"(?:rupees?|rupay|rs)\b"
_USD_AFTER = r"(?:dollars?|usd)\b"
_EUR_AFTER = r"(?:euros?|eur)\b"


class AmountPattern(NamedTuple):
    name: str
    regex: re.Pattern[str]
    # ``None`` means "use the default currency".
    currency: Currency | None


def _patterns(n: str, plain: str) -> list[AmountPattern]:
    flags = re.IGNORECASE
    return [
        AmountPattern("inr_symbol", re.compile(rf"₹\s*{n}", flags), "INR"),
        AmountPattern("inr_rs_prefix", re.compile(rf"\brs\.?\s*{n}", flags), "INR"),
        AmountPattern("inr_word_prefix", re.compile(rf"\b(?:rupees?|rupay)\s*{n}", flags), "INR"),
        AmountPattern("inr_suffix", re.compile(rf"{n}\s*{_INR_AFTER}", flags), "INR"),
        AmountPattern("usd_symbol", re.compile(rf"\$\s*{n}", flags), "USD"),
        AmountPattern("usd_word_prefix", re.compile(rf"\bdollars?\s*{n}", flags), "USD"),
        AmountPattern("usd_suffix", re.compile(rf"{n}\s*{_USD_AFTER}", flags), "USD"),
        AmountPattern("eur_symbol", re.compile(rf"€\s*{n}", flags), "EUR"),
        AmountPattern("eur_word_prefix", re.compile(rf"\beuros?\s*{n}", flags), "EUR"),
        AmountPattern("eur_suffix", re.compile(rf"{n}\s*{_EUR_AFTER}", flags), "EUR"),
        AmountPattern("plain", re.compile(plain, flags), None),
    ]


# A free-standing number: whitespace before it, whitespace or light
# punctuation after it, so "12/03" or "2km" are not read as amounts.
_PLAIN_DIGITS = rf"(?:^|(?<=\s)){_DIGITS}(?=$|[\s!?;:)])"

DIGIT_PATTERNS: tuple[AmountPattern, ...] = tuple(_patterns(_DIGITS, _PLAIN_DIGITS))
WORD_PATTERNS: tuple[AmountPattern, ...] = tuple(_patterns(_WORDS, _WORDS))


def normalize_digits(raw: str, scale: str | None = None) -> Decimal | None:
    """Parse a digit string such as ``"1,200.50"``.

    Everything except digits, commas and periods is dropped, commas are
    treated as thousands separators, and stray edge punctuation (a sentence
    period) is ignored. ``scale`` is an optional spoken multiplier
    (``"k"``, ``"lakh"``...). Returns ``None`` unless the result is a finite
    number.
    """

    cleaned = re.sub(r"[^\d.,]", "", raw).strip(".,").replace(",", "")
    if not cleaned:
        return None
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    if scale:
        value *= SCALE_WORDS[scale.lower()]
    return value


# Readers return the parsed value and where the consumed text ends.
_Reading = tuple[Decimal, int]


def _read_digits(m: re.Match[str]) -> _Reading | None:
    value = normalize_digits(m.group("amount"), m.group("scale"))
    return None if value is None else (value, m.end())


def _leading_run(run: str) -> str:
    end = 0
    for tok in _TOKEN_RE.finditer(run):
        if tok.end() > MAX_WORD_RUN_CHARS:
            break
        end = tok.end()
    return run[:end]


def _read_words(m: re.Match[str]) -> _Reading | None:
    run = m.group("amount")
    end = m.end()
    if len(run) > MAX_WORD_RUN_CHARS:
        run = _leading_run(run)
        end = m.start("amount") + len(run)
    value = words_to_number(run)
    if value is None or not value.is_finite():
        return None
    return value, end


def _first_success(
    text: str,
    patterns: Sequence[AmountPattern],
    reader: Callable[[re.Match[str]], _Reading | None],
    default_currency: Currency,
) -> AmountMatch | None:
    for pat in patterns:
        for m in pat.regex.finditer(text):
            reading = reader(m)
            if reading is None:
                continue
            value, end = reading
            matched = text[m.start() : end]
            currency = pat.currency or default_currency
            _logger.debug("amount %s (%s) via %s from %r", value, currency, pat.name, matched)
            return AmountMatch(
                amount=value,
                currency=currency,
                text=matched,
                start=m.start(),
                end=end,
            )
    return None


def extract_amount(transcript: str, *, default_currency: Currency = "INR") -> AmountMatch | None:
    """Find the most likely monetary amount in ``transcript``.

    Digit patterns are tried before word patterns. Returns ``None`` when
    nothing usable is found.
    """

    if not transcript or not transcript.strip():
        return None
    return _first_success(
        transcript, DIGIT_PATTERNS, _read_digits, default_currency
    ) or _first_success(transcript, WORD_PATTERNS, _read_words, default_currency)


__all__ = [
    "DIGIT_PATTERNS",
    "MAX_WORD_RUN_CHARS",
    "WORD_PATTERNS",
    "AmountPattern",
    "extract_amount",
    "normalize_digits",
]
