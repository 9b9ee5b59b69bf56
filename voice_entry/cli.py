"""CLI for the ``voice_entry`` package.

A Typer console app around :func:`voice_entry.parser.parse`. Environment
variables (``VOICE_ENTRY_*``) are loaded from a local ``.env`` using
``python-dotenv`` before any command runs. Business logic lives in the parser
and review modules; this module only handles arguments and output.

Examples::

    voice-entry parse "add dinner ₹300"
    voice-entry parse "paanch sau rupees groceries" --json
    voice-entry parse "kal 200 ka petrol" --translate --source hi
    voice-entry review "spent 200 on travel" --categories groceries,transport,dining
    voice-entry -v parse "spent 450 on groceries yesterday"
"""

from __future__ import annotations

import json
import sys
from dataclasses import replace
from datetime import datetime
from pathlib import Path

import typer
from dotenv import load_dotenv

from .config import ParserConfig, load_config
from .logging_setup import configure_logging, get_logger
from .models import ParsedVoiceCommand

_logger = get_logger("voice_entry.cli")


# ---- Small module-level helpers used by CLI commands -------------------------


def _parse_now(value: str | None) -> datetime | None:
    if value is None or not value.strip():
        return None
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError as exc:
        raise typer.BadParameter(f"--now must be an ISO-8601 timestamp: {value!r}") from exc


def _load_config_or_exit() -> ParserConfig:
    try:
        return load_config()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise typer.Exit(1) from e


def _maybe_translate(transcript: str, *, translate: bool, source: str) -> str | None:
    """Return the English transcript when ``translate`` is set, else ``None``."""

    if not translate:
        return None
    from .translate import translate_text  # deferred: only needed with --translate

    english = translate_text(transcript, source=source, target="en")
    if english == transcript:
        _logger.info("translation unavailable or unchanged; parsing original text")
    return english


def _parse_transcript(
    transcript: str,
    *,
    translate: bool,
    source: str,
    now: datetime | None,
    config: ParserConfig,
) -> tuple[ParsedVoiceCommand, str | None]:
    from .parser import parse

    english = _maybe_translate(transcript, translate=translate, source=source)
    if english is None:
        return parse(transcript, now=now, config=config), None
    cmd = parse(english, now=now, config=config)
    # Keep what was actually spoken on the record.
    return replace(cmd, raw_transcript=transcript), english


def _format_human(cmd: ParsedVoiceCommand, english: str | None) -> str:
    lines = [f"Transcript:  {cmd.raw_transcript}"]
    if english is not None:
        lines.append(f"English:     {english}")
    amount = "-" if cmd.amount is None else f"{cmd.amount} {cmd.currency}"
    lines.extend(
        [
            f"Amount:      {amount}",
            f"Type:        {cmd.transaction_type}",
            f"Category:    {cmd.category or 'other'}",
            f"Date:        {cmd.occurred_at.isoformat() if cmd.occurred_at else '-'}",
            f"Description: {cmd.description}",
        ]
    )
    return "\n".join(lines)


def _split_categories(value: str | None, config: ParserConfig) -> list[str]:
    if value and value.strip():
        return [c.strip() for c in value.split(",") if c.strip()]
    return list(config.keywords.categories)


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Parse voice transcripts into transaction drafts (amount, type, category, "
        "date, note). Loads VOICE_ENTRY_* settings from a local .env before running."
    ),
)


@app.command("parse")
def parse_cmd(
    transcript: str = typer.Argument(..., help="Finalized speech transcript."),
    translate: bool = typer.Option(
        False, "--translate", help="Translate to English (LibreTranslate) before parsing."
    ),
    source: str = typer.Option("auto", help="Source language for --translate."),
    now: str | None = typer.Option(
        None, help="Reference time for relative dates (ISO-8601). Defaults to now."
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit the parsed record as JSON."),
) -> None:
    """Parse one transcript and print the structured draft."""

    config = _load_config_or_exit()
    cmd, english = _parse_transcript(
        transcript, translate=translate, source=source, now=_parse_now(now), config=config
    )

    if as_json:
        payload = cmd.to_dict()
        if english is not None:
            payload["english_transcript"] = english
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        typer.echo(_format_human(cmd, english))


@app.command("review")
def review_cmd(
    transcript: str = typer.Argument(..., help="Finalized speech transcript."),
    translate: bool = typer.Option(
        False, "--translate", help="Translate to English (LibreTranslate) before parsing."
    ),
    source: str = typer.Option("auto", help="Source language for --translate."),
    categories: str | None = typer.Option(
        None,
        help="Comma-separated known categories (defaults to the keyword table labels).",
    ),
    now: str | None = typer.Option(
        None, help="Reference time for relative dates (ISO-8601). Defaults to now."
    ),
) -> None:
    """Parse a transcript, confirm/edit it interactively, print the entry as JSON."""

    from .review import can_save, review_command

    config = _load_config_or_exit()
    ref = _parse_now(now)
    cmd, english = _parse_transcript(
        transcript, translate=translate, source=source, now=ref, config=config
    )

    typer.echo(_format_human(cmd, english))
    if not can_save(cmd):
        typer.echo("No amount detected; enter one below.", err=True)

    try:
        entry = review_command(
            cmd,
            categories=_split_categories(categories, config),
            now=ref,
            english_transcript=english,
        )
    except (EOFError, KeyboardInterrupt) as e:
        print("Error: review cancelled.", file=sys.stderr)
        raise typer.Exit(1) from e
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise typer.Exit(1) from e

    typer.echo(json.dumps(entry.to_dict(), ensure_ascii=False, indent=2))


@app.callback()
def _root(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log each extraction step (DEBUG) to stderr."
    ),
) -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding
    already-set variables) and configures package logging. ``--verbose``
    wins over ``VOICE_ENTRY_LOG_LEVEL``.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging("DEBUG" if verbose else None)


def main() -> None:  # pragma: no cover - console script entry
    app()


if __name__ == "__main__":  # pragma: no cover
    app()
