from decimal import Decimal

import pytest

from voice_entry.amounts import MAX_WORD_RUN_CHARS, extract_amount, normalize_digits


@pytest.mark.parametrize(
    "transcript, amount, currency, text",
    [
        ("₹300", Decimal(300), "INR", "₹300"),
        ("₹ 45 for chai", Decimal(45), "INR", "₹ 45"),
        ("Rs 1,200.50 at the pharmacy", Decimal("1200.50"), "INR", "Rs 1,200.50"),
        ("rs.99 recharge", Decimal(99), "INR", "rs.99"),
        ("300 rupees lunch", Decimal(300), "INR", "300 rupees"),
        ("rupees 80 auto", Decimal(80), "INR", "rupees 80"),
        ("$12.50 coffee", Decimal("12.50"), "USD", "$12.50"),
        ("20 dollars for the cab", Decimal(20), "USD", "20 dollars"),
        ("15 USD subscription", Decimal(15), "USD", "15 USD"),
        ("€7 pastry", Decimal(7), "EUR", "€7"),
        ("euros 15 museum", Decimal(15), "EUR", "euros 15"),
        ("1.5 lakh rupees bonus", Decimal(150000), "INR", "1.5 lakh rupees"),
    ],
)
def test_currency_cues_set_amount_and_currency(transcript, amount, currency, text):
    m = extract_amount(transcript)
    assert m is not None
    assert m.amount == amount
    assert m.currency == currency
    assert m.text == text
    assert transcript[m.start : m.end] == text


def test_plain_number_uses_default_currency():
    m = extract_amount("paid 450 for lunch")
    assert m is not None
    assert (m.amount, m.currency, m.text) == (Decimal(450), "INR", "450")

    m = extract_amount("paid 450 for lunch", default_currency="USD")
    assert m is not None
    assert m.currency == "USD"


def test_digit_scale_suffix():
    m = extract_amount("2k for shopping")
    assert m is not None
    assert m.amount == Decimal(2000)
    assert m.text == "2k"


def test_spoken_amount_with_currency_word():
    m = extract_amount("paanch sau rupees groceries")
    assert m is not None
    assert m.amount == Decimal(500)
    assert m.currency == "INR"
    assert m.text == "paanch sau rupees"


def test_spoken_amount_after_currency_word():
    m = extract_amount("rupees two thousand for rent")
    assert m is not None
    assert m.amount == Decimal(2000)
    assert m.text == "rupees two thousand"


def test_spoken_amount_without_currency_leaves_note_words_alone():
    m = extract_amount("two thousand for shopping")
    assert m is not None
    assert m.amount == Decimal(2000)
    assert m.text == "two thousand"


def test_spoken_zero_is_an_amount():
    m = extract_amount("zero rupees")
    assert m is not None
    assert m.amount == Decimal(0)


def test_digits_are_preferred_over_words():
    m = extract_amount("five coffees for 300")
    assert m is not None
    assert m.amount == Decimal(300)


def test_rs_inside_a_word_is_not_a_currency_cue():
    m = extract_amount("hours 50")
    assert m is not None
    assert m.text == "50"


def test_unparseable_match_falls_through_to_next_candidate():
    m = extract_amount(". rupees and 40")
    assert m is not None
    assert m.amount == Decimal(40)
    assert m.text == "40"


def test_number_glued_to_a_unit_is_not_an_amount():
    assert extract_amount("walked 2km") is None


@pytest.mark.parametrize("transcript", ["", "   ", "spent some money", "dinner with friends"])
def test_no_amount_returns_none(transcript):
    assert extract_amount(transcript) is None


def test_overlong_word_run_is_cut_to_its_leading_tokens():
    run = " ".join(["one"] * 20)
    assert len(run) > MAX_WORD_RUN_CHARS
    m = extract_amount(run + " for tea")
    assert m is not None
    # Twelve "one" tokens end at offset 47; a thirteenth would pass 50.
    assert m.amount == Decimal(12)
    assert m.text == " ".join(["one"] * 12)
    assert (m.start, m.end) == (0, 47)


def test_capped_run_keeps_the_currency_prefix():
    m = extract_amount("rupees " + " ".join(["two"] * 20))
    assert m is not None
    assert m.currency == "INR"
    assert m.text == "rupees " + " ".join(["two"] * 12)
    assert m.amount == Decimal(24)


@pytest.mark.parametrize(
    "raw, scale, expected",
    [
        ("1,200.50", None, Decimal("1200.50")),
        ("300.", None, Decimal(300)),
        ("2.5", "k", Decimal(2500)),
        ("3", "Lakh", Decimal(300000)),
        ("", None, None),
        (".,", None, None),
        ("1.2.3", None, None),
    ],
)
def test_normalize_digits(raw, scale, expected):
    assert normalize_digits(raw, scale) == expected
