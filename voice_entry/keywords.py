"""Keyword tables driving classification and description cleanup.

The tables are plain data so the matching routines in :mod:`voice_entry.classify`
and :mod:`voice_entry.description` stay generic. ``categories`` is an ordered
mapping: classification scans it top to bottom and the first label with a
matching keyword wins, so order is part of the contract.

Tables can be replaced from a JSON file with the same shape as
:class:`KeywordTables`; sections omitted from the file keep their defaults::

    {
      "categories": {"groceries": ["grocery", "kirana"], "dining": ["dinner"]},
      "income": ["received", "salary"]
    }
"""

from __future__ import annotations

import json
import re
from os import PathLike
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

DEFAULT_CATEGORY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "groceries": ("grocery", "groceries", "kirana", "vegetable", "supermarket"),
    "transport": ("uber", "ola", "taxi", "cab", "bus", "train", "petrol", "fuel", "travel"),
    "dining": ("dinner", "lunch", "restaurant", "cafe", "coffee", "food"),
    "rent": ("rent", "apartment", "house rent"),
    "salary": ("salary", "pay", "income"),
    "shopping": ("amazon", "flipkart", "shopping", "clothes", "shirt", "shoe"),
    "utilities": ("electricity", "water", "internet", "wifi", "bill"),
    "other": (),
}

DEFAULT_INCOME_KEYWORDS: tuple[str, ...] = ("received", "got", "salary", "income", "credited")

DEFAULT_FILLER_WORDS: tuple[str, ...] = (
    "add",
    "spent",
    "spend",
    "log",
    "pay",
    "paid",
    "purchase",
    "bought",
)

DEFAULT_CURRENCY_WORDS: tuple[str, ...] = (
    "₹",
    "rs.",
    "rs",
    "rupees",
    "rupee",
    "rupay",
    "inr",
    "$",
    "dollars",
    "dollar",
    "usd",
    "€",
    "euros",
    "euro",
    "eur",
)


def _clean_keywords(values: tuple[str, ...] | list[str]) -> tuple[str, ...]:
    # Lowercase, trim, drop blanks and duplicates while keeping first-seen order.
    seen: dict[str, None] = {}
    for v in values:
        k = " ".join(str(v).strip().lower().split())
        if k:
            seen.setdefault(k, None)
    return tuple(seen)


class KeywordTables(BaseModel):
    """Validated keyword configuration."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    categories: dict[str, tuple[str, ...]] = Field(
        default_factory=lambda: dict(DEFAULT_CATEGORY_KEYWORDS)
    )
    income: tuple[str, ...] = DEFAULT_INCOME_KEYWORDS
    fillers: tuple[str, ...] = DEFAULT_FILLER_WORDS
    currency_words: tuple[str, ...] = DEFAULT_CURRENCY_WORDS

    @field_validator("categories")
    @classmethod
    def _normalize_categories(
        cls, v: dict[str, tuple[str, ...]]
    ) -> dict[str, tuple[str, ...]]:
        out: dict[str, tuple[str, ...]] = {}
        for label, words in v.items():
            name = label.strip()
            if not name:
                raise ValueError("category labels must be non-empty")
            out[name] = _clean_keywords(words)
        return out

    @field_validator("income", "fillers", "currency_words")
    @classmethod
    def _normalize_words(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return _clean_keywords(v)


DEFAULT_KEYWORDS = KeywordTables()


def load_keyword_tables(path: str | PathLike[str]) -> KeywordTables:
    """Read keyword tables from a JSON file.

    Raises ``ValueError`` when the file is missing, is not valid JSON, or does
    not match the :class:`KeywordTables` shape.
    """

    p = Path(path)
    try:
        raw = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise ValueError(f"cannot read keyword file {str(p)!r}: {exc}") from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"keyword file {str(p)!r} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"keyword file {str(p)!r} must contain a JSON object")
    try:
        return KeywordTables.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"invalid keyword file {str(p)!r}: {exc}") from exc


def word_pattern(words: tuple[str, ...] | list[str]) -> re.Pattern[str] | None:
    """Compile an alternation matching any of ``words`` case-insensitively.

    Word-like edges get ``\\b`` anchors so ``"rs"`` does not fire inside
    ``"hours"``; symbol edges (``₹``, ``$``, ``€``, a trailing ``.``) match
    as-is. Longer words are tried first. Returns ``None`` for an empty list.
    """

    parts: list[str] = []
    for w in sorted({w for w in words if w}, key=lambda s: (-len(s), s)):
        body = re.escape(w)
        if re.match(r"\w", w):
            body = r"\b" + body
        if re.search(r"\w$", w):
            body = body + r"\b"
        parts.append(body)
    if not parts:
        return None
    return re.compile("(?:" + "|".join(parts) + ")", re.IGNORECASE)


__all__ = [
    "DEFAULT_CATEGORY_KEYWORDS",
    "DEFAULT_CURRENCY_WORDS",
    "DEFAULT_FILLER_WORDS",
    "DEFAULT_INCOME_KEYWORDS",
    "DEFAULT_KEYWORDS",
    "KeywordTables",
    "load_keyword_tables",
    "word_pattern",
]
