"""Parser settings resolved from the environment.

Recognized variables:

- ``VOICE_ENTRY_DEFAULT_CURRENCY``: currency used when a transcript carries no
  currency cue (default ``INR``).
- ``VOICE_ENTRY_KEYWORDS_FILE``: optional JSON file replacing the built-in
  keyword tables (see :mod:`voice_entry.keywords`).
- ``VOICE_ENTRY_PLACEHOLDER``: description used when nothing is left after
  cleanup (default ``Voice entry``).

The CLI loads a local ``.env`` before calling :func:`load_config`; library
callers either do the same or build a :class:`ParserConfig` directly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from .keywords import DEFAULT_KEYWORDS, KeywordTables, load_keyword_tables
from .logging_setup import get_logger
from .models import Currency, coerce_currency

DEFAULT_CURRENCY: Currency = "INR"
DEFAULT_PLACEHOLDER = "Voice entry"

_logger = get_logger("voice_entry.config")


@dataclass(frozen=True, slots=True)
class ParserConfig:
    default_currency: Currency = DEFAULT_CURRENCY
    keywords: KeywordTables = field(default_factory=lambda: DEFAULT_KEYWORDS)
    placeholder: str = DEFAULT_PLACEHOLDER

    def __post_init__(self) -> None:
        # Frozen: normalize "usd" to "USD" in place.
        object.__setattr__(self, "default_currency", coerce_currency(self.default_currency))
        if not self.placeholder.strip():
            raise ValueError("placeholder must be non-empty")


def load_config() -> ParserConfig:
    """Build a :class:`ParserConfig` from ``VOICE_ENTRY_*`` variables.

    Raises ``ValueError`` for an unsupported currency code or an invalid
    keyword file.
    """

    currency_raw = os.getenv("VOICE_ENTRY_DEFAULT_CURRENCY")
    currency = DEFAULT_CURRENCY
    if currency_raw and currency_raw.strip():
        currency = coerce_currency(currency_raw)

    keywords = DEFAULT_KEYWORDS
    kw_path = os.getenv("VOICE_ENTRY_KEYWORDS_FILE")
    if kw_path and kw_path.strip():
        keywords = load_keyword_tables(kw_path.strip())
        _logger.debug(
            "Loaded keyword tables from %s (%d categories)", kw_path, len(keywords.categories)
        )

    placeholder = (os.getenv("VOICE_ENTRY_PLACEHOLDER") or "").strip() or DEFAULT_PLACEHOLDER

    return ParserConfig(default_currency=currency, keywords=keywords, placeholder=placeholder)


__all__ = ["DEFAULT_CURRENCY", "DEFAULT_PLACEHOLDER", "ParserConfig", "load_config"]
