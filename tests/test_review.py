import contextlib
from datetime import datetime
from decimal import Decimal

import pytest
from prompt_toolkit import PromptSession
from prompt_toolkit.document import Document
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.output import DummyOutput
from prompt_toolkit.validation import ValidationError

from voice_entry import parse
from voice_entry.review import (
    AmountValidator,
    CategoryValidator,
    can_save,
    parse_amount_input,
    prompt_amount,
    prompt_category,
    prompt_note,
    resolve_category,
    review_command,
    to_entry,
)

NOW = datetime(2026, 10, 14, 12, 0)
CATEGORIES = ["Groceries", "Dining", "Transport"]


@contextlib.contextmanager
def pipe_session():
    with create_pipe_input() as pipe:
        sess = PromptSession(input=pipe, output=DummyOutput())
        yield pipe, sess


class ScriptedSession:
    """Stands in for a PromptSession; ``None`` answers accept the default."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.calls = []

    def prompt(self, message, default="", **kwargs):
        self.calls.append((message, default))
        answer = self.answers.pop(0)
        return default if answer is None else answer


# ---- save rule / category mapping --------------------------------------------


def test_can_save_requires_a_positive_amount():
    assert can_save(parse("add dinner ₹300", now=NOW))
    assert not can_save(parse("hello there", now=NOW))
    assert not can_save(parse("zero rupees", now=NOW))


def test_resolve_category_exact_then_substring():
    assert resolve_category("groceries", CATEGORIES) == "Groceries"
    assert resolve_category("dining", ["Food", "Dining Out"]) == "Dining Out"
    assert resolve_category("Transport & Travel", ["transport"]) == "transport"
    assert resolve_category("rent", CATEGORIES) is None
    assert resolve_category(None, CATEGORIES) is None
    assert resolve_category("  ", CATEGORIES) is None


# ---- to_entry -----------------------------------------------------------------


def test_to_entry_defaults_to_now_when_no_date_was_spoken():
    entry = to_entry(parse("add dinner ₹300", now=NOW), now=NOW)
    assert entry.amount == Decimal(300)
    assert entry.occurred_at == NOW
    assert entry.note == "dinner"
    assert entry.category == "dining"
    assert entry.transaction_type == "EXPENSE"


def test_to_entry_applies_edits():
    cmd = parse("spent 200 on travel", now=NOW)
    entry = to_entry(
        cmd,
        now=NOW,
        amount=Decimal("250.50"),
        category="Transport",
        note="  airport cab ",
        english_transcript="spent 200 on travel",
    )
    assert entry.amount == Decimal("250.50")
    assert entry.category == "Transport"
    assert entry.note == "airport cab"
    assert entry.to_dict()["english_transcript"] == "spent 200 on travel"
    assert entry.to_dict()["amount"] == "250.50"


def test_to_entry_rejects_missing_amount():
    with pytest.raises(ValueError, match="valid amount"):
        to_entry(parse("hello there", now=NOW), now=NOW)


# ---- validators ---------------------------------------------------------------


@pytest.mark.parametrize(
    "text, expected",
    [
        ("250", Decimal(250)),
        ("1,200.50", Decimal("1200.50")),
        ("0", None),
        ("abc", None),
        ("", None),
    ],
)
def test_parse_amount_input(text, expected):
    assert parse_amount_input(text) == expected


def test_amount_validator():
    AmountValidator().validate(Document("1,200.50"))
    with pytest.raises(ValidationError):
        AmountValidator().validate(Document("abc"))


def test_category_validator_allows_known_or_empty():
    v = CategoryValidator(CATEGORIES)
    v.validate(Document("dining"))
    v.validate(Document(""))
    with pytest.raises(ValidationError):
        v.validate(Document("Casino"))


# ---- prompts ------------------------------------------------------------------


def test_prompt_amount_accepts_default_with_enter():
    with pipe_session() as (pipe, sess):
        pipe.send_text("\r")
        assert prompt_amount(Decimal(300), session=sess) == Decimal(300)


def test_prompt_amount_replaces_default():
    with pipe_session() as (pipe, sess):
        # Ctrl-A (home), Ctrl-K (kill to end), type the new value, Enter
        pipe.send_text("\x01\x0b450\r")
        assert prompt_amount(Decimal(300), session=sess) == Decimal(450)


def test_prompt_category_returns_canonical_casing():
    with pipe_session() as (pipe, sess):
        pipe.send_text("\x01\x0bTRANSPORT\r")
        assert prompt_category(CATEGORIES, default="Dining", session=sess) == "Transport"


def test_prompt_category_empty_means_uncategorized():
    with pipe_session() as (pipe, sess):
        pipe.send_text("\x01\x0b\r")
        assert prompt_category(CATEGORIES, default="Dining", session=sess) is None


def test_prompt_note_accepts_default():
    with pipe_session() as (pipe, sess):
        pipe.send_text("\r")
        assert prompt_note("dinner", session=sess) == "dinner"


# ---- review_command -----------------------------------------------------------


def test_review_command_prefills_from_parsed_draft():
    sess = ScriptedSession([None, None, "team dinner"])
    entry = review_command(
        parse("add dinner ₹300", now=NOW), categories=CATEGORIES, session=sess, now=NOW
    )
    assert [default for _, default in sess.calls] == ["300", "Dining", "dinner"]
    assert entry.amount == Decimal(300)
    assert entry.category == "Dining"
    assert entry.note == "team dinner"
    assert entry.occurred_at == NOW


def test_review_command_supplies_missing_amount_and_clears_category():
    sess = ScriptedSession(["75", "", None])
    entry = review_command(parse("hello there", now=NOW), categories=CATEGORIES, session=sess)
    assert sess.calls[0][1] == ""
    assert entry.amount == Decimal(75)
    assert entry.category is None
    assert entry.note == "hello there"
