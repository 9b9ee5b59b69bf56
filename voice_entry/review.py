"""Review of parsed voice commands before they become transactions.

A parsed command is only a draft: the person who spoke it confirms or edits
the amount, category and note. This module holds the save rule, the mapping
of the free-text category onto the host's known categories, and small
prompt_toolkit prompts for a terminal review.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal, InvalidOperation

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.validation import ValidationError, Validator

from .models import Currency, ParsedVoiceCommand, TransactionType

# ----------------------------------------------------------------------------
# Save rule and category mapping
# ----------------------------------------------------------------------------


def is_valid_amount(amount: Decimal | None) -> bool:
    return amount is not None and amount.is_finite() and amount > 0


def can_save(cmd: ParsedVoiceCommand) -> bool:
    """Whether ``cmd`` carries a usable amount (present, finite and positive)."""

    return is_valid_amount(cmd.amount)


def resolve_category(name: str | None, known: Iterable[str]) -> str | None:
    """Map a free-text category onto one of ``known``.

    Case-insensitive exact match first, then a substring match in either
    direction (``"dining"`` ↔ ``"Dining Out"``). ``None`` when
    nothing fits.
    """

    if not name or not name.strip():
        return None
    needle = name.strip().lower()
    candidates = [k for k in known if k and k.strip()]
    for k in candidates:
        if k.strip().lower() == needle:
            return k
    for k in candidates:
        kl = k.strip().lower()
        if needle in kl or kl in needle:
            return k
    return None


# ----------------------------------------------------------------------------
# Reviewed entry
# ----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ReviewedEntry:
    """A confirmed draft, ready to be mapped onto a stored transaction."""

    amount: Decimal
    currency: Currency
    transaction_type: TransactionType
    category: str | None
    note: str
    occurred_at: datetime
    raw_transcript: str
    english_transcript: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "amount": str(self.amount),
            "currency": self.currency,
            "transaction_type": self.transaction_type,
            "category": self.category,
            "note": self.note,
            "occurred_at": self.occurred_at.isoformat(),
            "raw_transcript": self.raw_transcript,
            "english_transcript": self.english_transcript,
        }


def to_entry(
    cmd: ParsedVoiceCommand,
    *,
    now: datetime | None = None,
    english_transcript: str | None = None,
    amount: Decimal | None = None,
    category: str | None = None,
    note: str | None = None,
) -> ReviewedEntry:
    """Build a :class:`ReviewedEntry` from ``cmd`` and optional edits.

    ``occurred_at`` falls back to ``now`` when no date was spoken. Raises
    ``ValueError`` when the resulting amount is not positive.
    """

    final_amount = amount if amount is not None else cmd.amount
    if final_amount is None or not is_valid_amount(final_amount):
        raise ValueError("Please provide a valid amount.")
    return ReviewedEntry(
        amount=final_amount,
        currency=cmd.currency,
        transaction_type=cmd.transaction_type,
        category=category if category is not None else cmd.category,
        note=note.strip() if note and note.strip() else cmd.description,
        occurred_at=cmd.occurred_at or now or datetime.now(),
        raw_transcript=cmd.raw_transcript,
        english_transcript=english_transcript,
    )


# ----------------------------------------------------------------------------
# Terminal prompts
# ----------------------------------------------------------------------------


def parse_amount_input(text: str) -> Decimal | None:
    s = text.strip().replace(",", "")
    if not s:
        return None
    try:
        value = Decimal(s)
    except InvalidOperation:
        return None
    return value if is_valid_amount(value) else None


class AmountValidator(Validator):
    def validate(self, document) -> None:
        if parse_amount_input(document.text) is None:
            raise ValidationError(message="Enter a positive amount (e.g. 250 or 1,200.50)")


class CategoryValidator(Validator):
    def __init__(self, categories: Sequence[str]) -> None:
        self._allowed = {c.lower() for c in categories}

    def validate(self, document) -> None:
        text = document.text.strip()
        if text and text.lower() not in self._allowed:
            raise ValidationError(message=f"Unknown category: {text}")


def prompt_amount(
    default: Decimal | None,
    *,
    session: PromptSession | None = None,
    message: str = "Amount: ",
) -> Decimal:
    sess = session if session is not None else PromptSession()
    text = sess.prompt(
        message,
        default="" if default is None else str(default),
        validator=AmountValidator(),
        validate_while_typing=False,
    )
    value = parse_amount_input(text)
    if value is None:  # validator guarantees this for interactive sessions
        raise ValueError(f"invalid amount: {text!r}")
    return value


def prompt_category(
    categories: Sequence[str],
    *,
    default: str | None,
    session: PromptSession | None = None,
    message: str = "Category (Tab to complete): ",
) -> str | None:
    """Pick one of ``categories``; an empty answer means uncategorized."""

    sess = session if session is not None else PromptSession()
    text = sess.prompt(
        message,
        default=default or "",
        completer=WordCompleter(list(categories), ignore_case=True, match_middle=True),
        complete_while_typing=False,
        validator=CategoryValidator(categories),
        validate_while_typing=False,
    )
    text = text.strip()
    if not text:
        return None
    lookup = {c.lower(): c for c in categories}
    return lookup.get(text.lower(), text)


def prompt_note(
    default: str,
    *,
    session: PromptSession | None = None,
    message: str = "Note: ",
) -> str:
    sess = session if session is not None else PromptSession()
    return sess.prompt(message, default=default).strip()


def review_command(
    cmd: ParsedVoiceCommand,
    *,
    categories: Sequence[str],
    session: PromptSession | None = None,
    now: datetime | None = None,
    english_transcript: str | None = None,
) -> ReviewedEntry:
    """Walk through amount, category and note, each pre-filled from ``cmd``."""

    sess = session if session is not None else PromptSession()
    amount = prompt_amount(cmd.amount, session=sess)
    default_category = resolve_category(cmd.category, categories)
    category = prompt_category(categories, default=default_category, session=sess)
    note = prompt_note(cmd.description, session=sess)
    entry = to_entry(
        cmd, now=now, english_transcript=english_transcript, amount=amount, note=note
    )
    # An emptied category prompt means uncategorized, not "keep the parsed one".
    return replace(entry, category=category)


__all__ = [
    "AmountValidator",
    "CategoryValidator",
    "ReviewedEntry",
    "can_save",
    "is_valid_amount",
    "parse_amount_input",
    "prompt_amount",
    "prompt_category",
    "prompt_note",
    "resolve_category",
    "review_command",
    "to_entry",
]
