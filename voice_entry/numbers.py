"""Spelled-out quantities → numbers (English and Hindi/Hinglish).

The vocabulary is closed: units, teens and tens in both languages plus the
scale words ``hundred``/``sau`` (100), ``thousand``/``hazaar``/``k`` (1000),
``lakh`` (100000) and ``million``. Values are grouped the way they are spoken:

- a unit/tens word adds into a running ``current`` sub-total;
- a scale word multiplies ``current`` (an empty ``current`` counts as 1),
  folds the product into ``total`` and resets ``current``;
- whatever is left in ``current`` is added at the end.

So ``"five hundred"`` is 5×100, ``"barah sau"`` is 12×100 and a lone
``"hundred"`` is 100. A purely numeric token (``"300"``, ``"2.5k"``) wins
outright over any words around it.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from decimal import Decimal

_ENGLISH_WORDS: dict[str, int] = {
    "zero": 0,
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
    "eleven": 11,
    "twelve": 12,
    "thirteen": 13,
    "fourteen": 14,
    "fifteen": 15,
    "sixteen": 16,
    "seventeen": 17,
    "eighteen": 18,
    "nineteen": 19,
    "twenty": 20,
    "thirty": 30,
    "forty": 40,
    "fifty": 50,
    "sixty": 60,
    "seventy": 70,
    "eighty": 80,
    "ninety": 90,
}

# Roman-script Hindi as it comes out of speech recognition / translation.
_HINDI_WORDS: dict[str, int] = {
    "shunya": 0,
    "ek": 1,
    "do": 2,
    "teen": 3,
    "char": 4,
    "chaar": 4,
    "paanch": 5,
    "panch": 5,
    "chhe": 6,
    "chhah": 6,
    "saat": 7,
    "aath": 8,
    "nau": 9,
    "das": 10,
    "gyarah": 11,
    "barah": 12,
    "terah": 13,
    "treh": 13,
    "chaudah": 14,
    "pandrah": 15,
    "solah": 16,
    "satrah": 17,
    "atharah": 18,
    "unnis": 19,
    "bees": 20,
    "tees": 30,
    "chaalis": 40,
    "chalis": 40,
    "pachaas": 50,
    "pachas": 50,
    "saath": 60,
    "sattar": 70,
    "assi": 80,
    "nabbe": 90,
}

SCALE_WORDS: dict[str, int] = {
    "hundred": 100,
    "sau": 100,
    "thousand": 1000,
    "hazaar": 1000,
    "hazar": 1000,
    "k": 1000,
    "lakh": 100000,
    "lakhs": 100000,
    "million": 1000000,
}

NUMBER_WORDS: dict[str, int] = {**_ENGLISH_WORDS, **_HINDI_WORDS, **SCALE_WORDS}

_CURRENCY_TOKENS = frozenset(
    {"rs", "rs.", "rupee", "rupees", "rupay", "inr", "dollar", "dollars", "usd",
     "euro", "euros", "eur"}
)

_DIGIT_TOKEN_RE = re.compile(r"^(\d+(?:\.\d+)?)(k)?$")
_SEPARATORS_RE = re.compile(r"[₹$€,\-]")
_EDGE_PUNCT = ".!?;:\"'()"


def tokenize_number_words(text: str) -> list[str]:
    """Lowercase ``text`` and split it into candidate number tokens.

    Currency symbols and words are dropped; commas and hyphens separate tokens
    (``"twenty-five"`` → ``["twenty", "five"]``).
    """

    tokens: list[str] = []
    for raw in _SEPARATORS_RE.sub(" ", text.lower()).split():
        if raw in _CURRENCY_TOKENS:
            continue
        t = raw.strip(_EDGE_PUNCT)
        if t and t not in _CURRENCY_TOKENS:
            tokens.append(t)
    return tokens


def is_number_word(token: str) -> bool:
    return token.lower() in NUMBER_WORDS


def _digit_value(token: str) -> Decimal | None:
    m = _DIGIT_TOKEN_RE.match(token)
    if not m:
        return None
    value = Decimal(m.group(1))
    if m.group(2):
        value *= 1000
    return value


def tokens_to_number(tokens: Iterable[str]) -> Decimal | None:
    """Apply the additive/multiplicative grouping rule to ``tokens``.

    Returns ``None`` when no token is recognized; ``Decimal(0)`` only for an
    explicit zero word.
    """

    toks = list(tokens)
    for t in toks:
        value = _digit_value(t)
        if value is not None:
            return value

    total = 0
    current = 0
    seen = False
    for t in toks:
        val = NUMBER_WORDS.get(t)
        if val is None:
            continue
        seen = True
        if val >= 100:
            total += max(1, current) * val
            current = 0
        else:
            current += val
    if not seen:
        return None
    return Decimal(total + current)


def words_to_number(text: str) -> Decimal | None:
    """Convert a spelled-out (or digit) quantity in ``text`` to a number.

    >>> words_to_number("paanch sau")
    Decimal('500')
    >>> words_to_number("two thousand five hundred")
    Decimal('2500')
    >>> words_to_number("dinner") is None
    True
    """

    if not text:
        return None
    return tokens_to_number(tokenize_number_words(text))


__all__ = [
    "NUMBER_WORDS",
    "SCALE_WORDS",
    "is_number_word",
    "tokenize_number_words",
    "tokens_to_number",
    "words_to_number",
]
