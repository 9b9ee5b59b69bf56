"""Public interface for the ``voice_entry`` package.

Re-exports the parser entry points and public models as the stable import
surface. There is no runtime logic here.
"""

from .amounts import extract_amount
from .classify import classify_category, classify_type
from .config import ParserConfig, load_config
from .dates import extract_date
from .description import extract_description
from .keywords import DEFAULT_KEYWORDS, KeywordTables, load_keyword_tables
from .models import (
    AmountMatch,
    Currency,
    DateMatch,
    ParsedVoiceCommand,
    TransactionType,
)
from .numbers import words_to_number
from .parser import VoiceCommandParser, parse

__all__ = [
    # Parser
    "parse",
    "VoiceCommandParser",
    # Stages
    "extract_amount",
    "extract_date",
    "extract_description",
    "classify_type",
    "classify_category",
    "words_to_number",
    # Configuration
    "ParserConfig",
    "load_config",
    "KeywordTables",
    "DEFAULT_KEYWORDS",
    "load_keyword_tables",
    # Models / types
    "ParsedVoiceCommand",
    "AmountMatch",
    "DateMatch",
    "TransactionType",
    "Currency",
]
