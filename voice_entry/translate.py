"""Thin client for a LibreTranslate ``/translate`` endpoint.

Non-streaming POST of ``{"q", "source", "target", "format": "text"}``; the
response's ``translatedText`` is returned. Translation is a convenience in
front of the parser, so every failure (HTTP error, network error, timeout,
malformed body) is logged and the original text is returned unchanged.

The endpoint defaults to the public instance and can be overridden with
``VOICE_ENTRY_TRANSLATE_URL``; ``VOICE_ENTRY_TRANSLATE_API_KEY`` is sent as
``api_key`` when set.
"""

from __future__ import annotations

import json
import os
import urllib.error
import urllib.request

from .logging_setup import get_logger

LIBRE_TRANSLATE_URL = "https://libretranslate.com/translate"
DEFAULT_TIMEOUT_SECONDS = 10.0

_logger = get_logger("voice_entry.translate")


def _endpoint(url: str | None) -> str:
    if url and url.strip():
        return url.strip()
    env_url = os.getenv("VOICE_ENTRY_TRANSLATE_URL")
    if env_url and env_url.strip():
        return env_url.strip()
    return LIBRE_TRANSLATE_URL


def translate_text(
    text: str,
    *,
    source: str = "auto",
    target: str = "en",
    url: str | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> str:
    """Translate ``text`` from ``source`` to ``target``; return ``text`` on failure."""

    if not text or not text.strip():
        return text

    payload: dict[str, str] = {"q": text, "source": source, "target": target, "format": "text"}
    api_key = os.getenv("VOICE_ENTRY_TRANSLATE_API_KEY")
    if api_key:
        payload["api_key"] = api_key

    endpoint = _endpoint(url)
    req = urllib.request.Request(
        endpoint, data=json.dumps(payload).encode("utf-8"), method="POST"
    )
    req.add_header("Content-Type", "application/json")
    req.add_header("Accept", "application/json")

    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            body = resp.read()
    except urllib.error.HTTPError as e:
        try:
            err_body = e.read().decode("utf-8", errors="replace")
        except Exception:  # noqa: BLE001 - error body is best-effort context only
            err_body = ""
        _logger.warning("translate failed: %s %s: %s", e.code, e.reason, err_body)
        return text
    except (urllib.error.URLError, TimeoutError, OSError) as e:
        _logger.warning("translate error calling %s: %s", endpoint, e)
        return text

    try:
        data = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        _logger.warning("translate returned a non-JSON body: %s", e)
        return text

    translated = data.get("translatedText") if isinstance(data, dict) else None
    if isinstance(translated, str) and translated.strip():
        return translated
    _logger.warning("translate response missing translatedText")
    return text


__all__ = ["LIBRE_TRANSLATE_URL", "translate_text"]
