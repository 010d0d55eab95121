"""
Client for the MyMemory translation API.

The tool sends one GET request per translation:

    https://api.mymemory.translated.net/get?q=<text>&langpair=<src>|<dst>

and reads ``responseStatus``, ``responseData.translatedText`` and, for
auto-detected sources, ``responseData.detectedLanguage`` from the JSON body.
"""

from __future__ import annotations

import logging
import urllib.parse
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests


logger = logging.getLogger(__name__)

MYMEMORY_URL = "https://api.mymemory.translated.net/get"

# Selector value for "let the service work out the source language".
AUTO_DETECT = "auto"
# What MyMemory expects in the source half of the language pair instead.
AUTODETECT_PARAM = "autodetect"

LANG_MAP = {
    "af": "Afrikaans",
    "ar": "Arabic",
    "bg": "Bulgarian",
    "bn": "Bengali",
    "cs": "Czech",
    "da": "Danish",
    "de": "German",
    "el": "Greek",
    "en": "English",
    "es": "Spanish",
    "et": "Estonian",
    "fa": "Persian",
    "fi": "Finnish",
    "fr": "French",
    "gu": "Gujarati",
    "he": "Hebrew",
    "hi": "Hindi",
    "hr": "Croatian",
    "hu": "Hungarian",
    "id": "Indonesian",
    "it": "Italian",
    "ja": "Japanese",
    "jv": "Javanese",
    "km": "Khmer",
    "kn": "Kannada",
    "ko": "Korean",
    "la": "Latin",
    "lo": "Lao",
    "lt": "Lithuanian",
    "lv": "Latvian",
    "ml": "Malayalam",
    "mr": "Marathi",
    "ms": "Malay",
    "mt": "Maltese",
    "ne": "Nepali",
    "nl": "Dutch",
    "no": "Norwegian",
    "pl": "Polish",
    "pt": "Portuguese",
    "ro": "Romanian",
    "ru": "Russian",
    "si": "Sinhala",
    "sk": "Slovak",
    "sl": "Slovenian",
    "so": "Somali",
    "sq": "Albanian",
    "sv": "Swedish",
    "sw": "Swahili",
    "ta": "Tamil",
    "te": "Telugu",
    "th": "Thai",
    "tl": "Tagalog",
    "tr": "Turkish",
    "uk": "Ukrainian",
    "ur": "Urdu",
    "vi": "Vietnamese",
    "zh-CN": "Chinese (Simplified)",
    "zh-TW": "Chinese (Traditional)",
    "zu": "Zulu",
}

headers = {
    "User-Agent": "TextTranslationTool/1.0",
    "Accept": "application/json",
}

# Characters encodeURIComponent leaves alone on top of quote()'s own safe set.
_URI_COMPONENT_SAFE = "!~*'()"


class TranslationError(Exception):
    """A translation request failed; ``str(exc)`` is the user-facing detail."""


@dataclass(frozen=True)
class TranslationResult:
    text: str = ""
    detected_language: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, message: str) -> "TranslationResult":
        return cls(error=message or "Translation failed.")


def is_auto(lang: str) -> bool:
    return lang == AUTO_DETECT


def build_langpair(src: str, dst: str) -> str:
    """Encodes the language pair, substituting the wire sentinel for auto-detect."""
    source = AUTODETECT_PARAM if is_auto(src) else src
    return f"{source}|{dst}"


def build_url(text: str, src: str, dst: str, endpoint: str = MYMEMORY_URL) -> str:
    q = urllib.parse.quote(text, safe=_URI_COMPONENT_SAFE)
    return f"{endpoint}?q={q}&langpair={build_langpair(src, dst)}"


def _parse_body(data: Any) -> TranslationResult:
    """
    Interprets the MyMemory JSON body.
    MyMemory reports its own failures (quota, bad pair) inside a 200 response,
    so the body's ``responseStatus`` has to be checked separately from HTTP.
    """
    if not isinstance(data, dict):
        raise TranslationError("Translation failed.")

    if data.get("responseStatus") != 200:
        raise TranslationError(data.get("responseDetails") or "Translation failed.")

    response_data = data.get("responseData")
    if not isinstance(response_data, dict):
        raise TranslationError("Translation failed.")

    translated = response_data.get("translatedText")
    if not isinstance(translated, str):
        raise TranslationError("Translation failed.")

    detected = response_data.get("detectedLanguage")
    return TranslationResult(
        text=translated,
        detected_language=detected if isinstance(detected, str) and detected else None,
    )


def mymemory_translate(
    text: str,
    src: str = AUTO_DETECT,
    dst: str = "en",
    endpoint: str = MYMEMORY_URL,
    timeout: Optional[float] = None,
    contact_email: Optional[str] = None,
) -> TranslationResult:
    """
    Sends a single translation request and parses the reply.
    Raises TranslationError for a non-success HTTP status or a failure
    reported in the body; transport errors propagate as requests exceptions.
    """
    url = build_url(text, src, dst, endpoint)
    if contact_email:
        # MyMemory grants a larger free quota to requests carrying a contact address.
        url += "&" + urllib.parse.urlencode({"de": contact_email})

    logger.info("Translating %d chars (%s)", len(text), build_langpair(src, dst))
    r = requests.get(url, headers=headers, timeout=timeout)
    if not 200 <= r.status_code < 300:
        raise TranslationError(f"Network error: {r.status_code}")

    return _parse_body(r.json())


def translate_text(
    src_lang: str,
    dst_lang: str,
    text: str,
    **kwargs: Any,
) -> TranslationResult:
    """
    Wrapper around mymemory_translate() that never raises for expected failures.
    Every outcome comes back as a TranslationResult so callers on the UI side
    only have one shape to deal with.
    """
    try:
        return mymemory_translate(text, src_lang, dst_lang, **kwargs)
    except TranslationError as e:
        logger.warning("Translation rejected: %s", e)
        return TranslationResult.failure(str(e))
    except requests.RequestException as e:
        logger.warning("Translation request failed: %s", e)
        return TranslationResult.failure(str(e))
    except ValueError as e:
        # r.json() on a non-JSON body
        logger.warning("Unreadable translation response: %s", e)
        return TranslationResult.failure(str(e))


def language_name(code: str) -> str:
    if is_auto(code):
        return "Auto Detect"
    return LANG_MAP.get(code, code)


def request_params(settings: Any) -> Dict[str, Any]:
    """Keyword arguments for translate_text() taken from a Settings object."""
    return {
        "endpoint": settings.endpoint,
        "timeout": settings.timeout,
        "contact_email": settings.contact_email,
    }
