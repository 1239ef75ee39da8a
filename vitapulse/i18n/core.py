# -*- coding: utf-8 -*-
"""
Translation lookup and locale formatting

Translations live in ``locales/<lang>.json`` as nested dictionaries and are addressed
with dotted keys (``common.save``). Missing keys fall back to English, then to the key.
"""

from __future__ import annotations

import json
import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import settings

LOCALES_DIR = Path(__file__).resolve().parent / "locales"

LANGUAGES: Dict[str, Dict[str, Any]] = {
    "en": {"name": "English", "native_name": "English", "rtl": False, "locale": "en-US"},
    "es": {"name": "Spanish", "native_name": "Español", "rtl": False, "locale": "es-ES"},
    "fr": {"name": "French", "native_name": "Français", "rtl": False, "locale": "fr-FR"},
    "de": {"name": "German", "native_name": "Deutsch", "rtl": False, "locale": "de-DE"},
    "ar": {"name": "Arabic", "native_name": "العربية", "rtl": True, "locale": "ar-SA"},
    "ja": {"name": "Japanese", "native_name": "日本語", "rtl": False, "locale": "ja-JP"},
    "zh": {"name": "Chinese", "native_name": "中文", "rtl": False, "locale": "zh-CN"},
    "hi": {"name": "Hindi", "native_name": "हिन्दी", "rtl": False, "locale": "hi-IN"},
}

FALLBACK_LANGUAGE = "en"

# (group separator, decimal separator)
_SEPARATORS = {
    "en": (",", "."),
    "es": (".", ","),
    "fr": ("\u202f", ","),
    "de": (".", ","),
    "ar": ("٬", "٫"),
    "ja": (",", "."),
    "zh": (",", "."),
    "hi": (",", "."),
}
_ARABIC_DIGITS = str.maketrans("0123456789", "٠١٢٣٤٥٦٧٨٩")

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}|\{(\w+)\}")


def is_supported(language: Optional[str]) -> bool:
    return bool(language) and language in LANGUAGES


def normalize_language(language: Optional[str]) -> str:
    """Primary subtag of a language tag if supported (``pt-BR`` -> ``pt``), else the fallback."""
    primary = (language or "").strip().lower().replace("_", "-").split("-")[0]
    return primary if primary in LANGUAGES else FALLBACK_LANGUAGE


@lru_cache(maxsize=None)
def load_translations(language: str) -> Dict[str, Any]:
    fp = LOCALES_DIR / f"{language}.json"
    if not fp.exists():
        return {}
    return json.loads(fp.read_text(encoding="utf-8"))


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


def merged_translations(language: str) -> Dict[str, Any]:
    """The language's dictionary laid over the English one."""
    base = load_translations(FALLBACK_LANGUAGE)
    if language == FALLBACK_LANGUAGE:
        return base
    return _merge(base, load_translations(language))


def _lookup(tree: Dict[str, Any], key: str) -> Optional[str]:
    node: Any = tree
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node if isinstance(node, str) else None


def interpolate(text: str, params: Dict[str, Any]) -> str:
    def repl(m: "re.Match[str]") -> str:
        name = m.group(1) or m.group(2)
        return str(params[name]) if name in params else m.group(0)

    return _PLACEHOLDER.sub(repl, text)


def translate(language: str, key: str, **params: Any) -> str:
    text = _lookup(load_translations(language), key) if is_supported(language) else None
    if text is None:
        text = _lookup(load_translations(FALLBACK_LANGUAGE), key)
    if text is None:
        return key
    return interpolate(text, params) if params else text


def detect_language(accept_language: Optional[str], stored: Optional[str] = None) -> str:
    """Stored preference, then the best supported Accept-Language entry, then the default."""
    if is_supported(stored):
        return stored  # type: ignore[return-value]

    candidates = []
    for idx, part in enumerate((accept_language or "").split(",")):
        pieces = [p.strip() for p in part.split(";")]
        tag = pieces[0].lower()
        if not tag or tag == "*":
            continue
        q = 1.0
        for param in pieces[1:]:
            if param.startswith("q="):
                try:
                    q = float(param[2:])
                except ValueError:
                    q = 0.0
        if q > 0:
            candidates.append((-q, idx, tag.split("-")[0]))
    for _, _, primary in sorted(candidates):
        if primary in LANGUAGES:
            return primary

    default = settings.default_language
    return default if is_supported(default) else FALLBACK_LANGUAGE


def text_direction(language: str) -> str:
    return "rtl" if LANGUAGES.get(language, {}).get("rtl") else "ltr"


def _group(digits: str, sep: str, indian: bool) -> str:
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    size = 2 if indian else 3
    groups = []
    while head:
        groups.insert(0, head[-size:])
        head = head[:-size]
    return sep.join(groups + [tail])


def format_number(value: float, language: str, decimals: Optional[int] = None) -> str:
    """Locale-style number: at most 3 fraction digits unless ``decimals`` is given."""
    lang = language if is_supported(language) else FALLBACK_LANGUAGE
    group_sep, dec_sep = _SEPARATORS[lang]
    places = 3 if decimals is None else max(int(decimals), 0)
    text = f"{abs(value):.{places}f}"
    int_part, _, frac = text.partition(".")
    if decimals is None:
        frac = frac.rstrip("0")
    out = _group(int_part, group_sep, indian=lang == "hi")
    if frac:
        out += dec_sep + frac
    if value < 0 and any(ch != "0" for ch in int_part + frac):
        out = "-" + out
    if lang == "ar":
        out = out.translate(_ARABIC_DIGITS)
    return out


def pluralize(count: float, singular: str, plural: Optional[str] = None) -> str:
    return singular if count == 1 else (plural or f"{singular}s")


def list_languages() -> list:
    return [{"code": code, **meta, "direction": text_direction(code)} for code, meta in LANGUAGES.items()]
