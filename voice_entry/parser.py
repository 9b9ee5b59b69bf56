"""Voice-command parsing pipeline.

``parse(transcript)`` runs every extraction stage over one finalized
transcript and assembles a :class:`~voice_entry.models.ParsedVoiceCommand`:

1. amount + currency (:mod:`voice_entry.amounts`)
2. date phrase (:mod:`voice_entry.dates`)
3. income/expense (:mod:`voice_entry.classify`)
4. category (:mod:`voice_entry.classify`)
5. description (:mod:`voice_entry.description`)

Stages degrade to ``None``/defaults instead of raising; the result is a
best-effort draft that a person reviews before it is saved. The only
time-dependent input is ``now``, which is injectable.
"""

from __future__ import annotations

from datetime import datetime

from .amounts import extract_amount
from .classify import classify_category, classify_type
from .config import ParserConfig
from .dates import extract_date
from .description import extract_description
from .logging_setup import get_logger
from .models import ParsedVoiceCommand

_logger = get_logger("voice_entry.parser")


class VoiceCommandParser:
    """Parser bound to one :class:`ParserConfig`.

    Holds no mutable state, so a single instance can serve concurrent callers.
    """

    __slots__ = ("_config",)

    def __init__(self, config: ParserConfig | None = None) -> None:
        self._config = config or ParserConfig()

    @property
    def config(self) -> ParserConfig:
        return self._config

    def parse(self, transcript: str, *, now: datetime | None = None) -> ParsedVoiceCommand:
        cfg = self._config
        raw = transcript if isinstance(transcript, str) else ""
        text = raw.strip()
        ref = now if now is not None else datetime.now()

        amount_match = extract_amount(text, default_currency=cfg.default_currency)
        date_match = extract_date(text, now=ref)
        transaction_type = classify_type(text, cfg.keywords)
        category = classify_category(text, cfg.keywords)
        description = extract_description(
            text,
            amount_match=amount_match,
            date_match=date_match,
            keywords=cfg.keywords,
            placeholder=cfg.placeholder,
        )

        result = ParsedVoiceCommand(
            raw_transcript=raw,
            amount=amount_match.amount if amount_match is not None else None,
            transaction_type=transaction_type,
            category=category,
            occurred_at=date_match.value if date_match is not None else None,
            description=description,
            currency=amount_match.currency if amount_match is not None else cfg.default_currency,
        )
        _logger.debug(
            "parsed %r -> amount=%s currency=%s type=%s category=%s",
            raw,
            result.amount,
            result.currency,
            result.transaction_type,
            result.category,
        )
        return result


_DEFAULT_PARSER = VoiceCommandParser()


def parse(
    transcript: str,
    *,
    now: datetime | None = None,
    config: ParserConfig | None = None,
) -> ParsedVoiceCommand:
    """Parse one transcript into a :class:`ParsedVoiceCommand`.

    Parameters
    ----------
    transcript:
        Finalized transcript, already translated to English where the speech
        was in another language. Untranslated text is still matched
        best-effort.
    now:
        Reference time for relative dates ("yesterday", "monday"). Defaults
        to the wall clock.
    config:
        Parser settings; the built-in defaults when omitted.
    """

    parser = _DEFAULT_PARSER if config is None else VoiceCommandParser(config)
    return parser.parse(transcript, now=now)


__all__ = ["VoiceCommandParser", "parse"]
