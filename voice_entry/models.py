"""Data models for ``voice_entry``.

The parser produces a single immutable record per transcript,
:class:`ParsedVoiceCommand`. The intermediate match records
(:class:`AmountMatch`, :class:`DateMatch`) carry the exact spans that were
recognized so later stages can excise them from the description.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Literal, get_args

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

TransactionType = Literal["INCOME", "EXPENSE"]
Currency = Literal["INR", "USD", "EUR"]

INCOME: TransactionType = "INCOME"
EXPENSE: TransactionType = "EXPENSE"

SUPPORTED_CURRENCIES: tuple[str, ...] = get_args(Currency)


def coerce_currency(value: str) -> Currency:
    """Return ``value`` as a supported currency code (case-insensitive)."""

    code = value.strip().upper()
    if code not in SUPPORTED_CURRENCIES:
        raise ValueError(
            f"unsupported currency: {value!r} (expected one of {', '.join(SUPPORTED_CURRENCIES)})"
        )
    return code  # type: ignore[return-value]


# ---------------------------------------------------------------------------
# Match records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AmountMatch:
    """A monetary amount recognized in a transcript.

    ``text`` is the full pattern match, currency cue included, and
    ``start``/``end`` index it within the transcript that was searched.
    """

    amount: Decimal
    currency: Currency
    text: str
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class DateMatch:
    """A date/time phrase resolved to an absolute instant."""

    value: datetime
    text: str
    start: int
    end: int


# ---------------------------------------------------------------------------
# Parser output
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ParsedVoiceCommand:
    """Structured best-effort reading of one voice transcript.

    Attributes
    ----------
    raw_transcript:
        The input string exactly as received.
    amount:
        Non-negative finite amount, or ``None`` when nothing was detected.
        The sign of a transaction is carried by ``transaction_type``.
    transaction_type:
        ``"INCOME"`` or ``"EXPENSE"`` (the default).
    category:
        Label from the category keyword table, or ``None`` when unmatched.
    occurred_at:
        Resolved date phrase, or ``None``; callers default to "now".
    description:
        Cleaned note. Never empty; a placeholder is substituted.
    currency:
        Currency cue found in the transcript, else the configured default.
    """

    raw_transcript: str
    amount: Decimal | None
    transaction_type: TransactionType
    category: str | None
    occurred_at: datetime | None
    description: str
    currency: Currency

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly mapping (amount as string, timestamp as ISO-8601)."""

        return {
            "raw_transcript": self.raw_transcript,
            "amount": None if self.amount is None else str(self.amount),
            "currency": self.currency,
            "transaction_type": self.transaction_type,
            "category": self.category,
            "occurred_at": None if self.occurred_at is None else self.occurred_at.isoformat(),
            "description": self.description,
        }


__all__ = [
    "AmountMatch",
    "Currency",
    "DateMatch",
    "EXPENSE",
    "INCOME",
    "ParsedVoiceCommand",
    "SUPPORTED_CURRENCIES",
    "TransactionType",
    "coerce_currency",
]
