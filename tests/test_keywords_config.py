import json
from decimal import Decimal

import pytest
from pydantic import ValidationError

from voice_entry import parse
from voice_entry.config import DEFAULT_PLACEHOLDER, ParserConfig, load_config
from voice_entry.keywords import (
    DEFAULT_INCOME_KEYWORDS,
    DEFAULT_KEYWORDS,
    KeywordTables,
    load_keyword_tables,
    word_pattern,
)


def _write(tmp_path, data) -> str:
    p = tmp_path / "keywords.json"
    p.write_text(json.dumps(data), encoding="utf-8")
    return str(p)


def test_default_tables_keep_their_order():
    labels = list(DEFAULT_KEYWORDS.categories)
    assert labels[:3] == ["groceries", "transport", "dining"]
    assert labels[-1] == "other"
    assert DEFAULT_KEYWORDS.categories["other"] == ()


def test_keywords_are_normalized():
    tables = KeywordTables(categories={" Fuel ": ["Petrol", " diesel ", "PETROL", ""]})
    assert tables.categories == {"Fuel": ("petrol", "diesel")}


def test_blank_category_label_is_rejected():
    with pytest.raises(ValidationError):
        KeywordTables(categories={"  ": ["x"]})


def test_unknown_fields_are_rejected():
    with pytest.raises(ValidationError):
        KeywordTables(colours=["red"])


def test_load_keyword_tables_from_json(tmp_path):
    path = _write(tmp_path, {"categories": {"fuel": ["Petrol"], "food": ["dinner"]}})
    tables = load_keyword_tables(path)
    assert list(tables.categories) == ["fuel", "food"]
    assert tables.categories["fuel"] == ("petrol",)
    # Omitted tables keep their defaults.
    assert tables.income == DEFAULT_INCOME_KEYWORDS


@pytest.mark.parametrize(
    "content",
    ["{not json", "[1, 2, 3]", json.dumps({"categories": {"": ["x"]}}), json.dumps({"x": 1})],
)
def test_load_keyword_tables_rejects_bad_files(tmp_path, content):
    p = tmp_path / "bad.json"
    p.write_text(content, encoding="utf-8")
    with pytest.raises(ValueError):
        load_keyword_tables(p)


def test_load_keyword_tables_missing_file(tmp_path):
    with pytest.raises(ValueError, match="cannot read"):
        load_keyword_tables(tmp_path / "missing.json")


def test_word_pattern_respects_word_edges():
    pat = word_pattern(["rs", "₹", "rs."])
    assert pat is not None
    assert pat.search("worked 3 hours") is None
    assert pat.search("paid ₹5") is not None
    assert pat.search("Rs. 40").group(0) == "Rs."
    assert word_pattern([]) is None


def test_load_config_defaults():
    cfg = load_config()
    assert cfg == ParserConfig()
    assert cfg.default_currency == "INR"
    assert cfg.placeholder == DEFAULT_PLACEHOLDER


def test_load_config_from_env(tmp_path, monkeypatch):
    path = _write(tmp_path, {"categories": {"chai": ["chai"]}})
    monkeypatch.setenv("VOICE_ENTRY_DEFAULT_CURRENCY", "usd")
    monkeypatch.setenv("VOICE_ENTRY_KEYWORDS_FILE", path)
    monkeypatch.setenv("VOICE_ENTRY_PLACEHOLDER", "Quick add")

    cfg = load_config()
    assert cfg.default_currency == "USD"
    assert cfg.placeholder == "Quick add"

    cmd = parse("chai 20", config=cfg)
    assert cmd.category == "chai"
    assert cmd.currency == "USD"
    assert cmd.amount == Decimal(20)


def test_load_config_rejects_unknown_currency(monkeypatch):
    monkeypatch.setenv("VOICE_ENTRY_DEFAULT_CURRENCY", "GBP")
    with pytest.raises(ValueError, match="unsupported currency"):
        load_config()


def test_load_config_rejects_bad_keyword_file(tmp_path, monkeypatch):
    monkeypatch.setenv("VOICE_ENTRY_KEYWORDS_FILE", str(tmp_path / "nope.json"))
    with pytest.raises(ValueError):
        load_config()


def test_parser_config_validates_directly():
    with pytest.raises(ValueError):
        ParserConfig(default_currency="GBP")  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        ParserConfig(placeholder="   ")


def test_parser_config_normalizes_currency_case():
    cfg = ParserConfig(default_currency="usd")  # type: ignore[arg-type]
    assert cfg.default_currency == "USD"
    assert parse("paid 40", config=cfg).currency == "USD"
    padded = ParserConfig(default_currency=" eur ")  # type: ignore[arg-type]
    assert parse("hello", config=padded).currency == "EUR"
