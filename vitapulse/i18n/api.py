# -*- coding: utf-8 -*-
"""i18n endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from ..auth.security import get_optional_user
from ..profile.storage import get_preferences
from .core import LANGUAGES, detect_language, is_supported, list_languages, merged_translations, text_direction, translate

router = APIRouter(prefix="/api/i18n", tags=["i18n"])

_RESERVED = {"key", "lang"}


@router.get("/languages", summary="Supported languages")
def languages(request: Request, user: Optional[dict] = Depends(get_optional_user)):
    stored = get_preferences(user["id"]).language if user else None
    return {"languages": list_languages(), "detected": detect_language(request.headers.get("accept-language"), stored)}


@router.get("/translations/{lang}", summary="All translations for a language (English fallback merged)")
def translations(lang: str):
    if not is_supported(lang):
        raise HTTPException(status_code=404, detail="Unsupported language")
    return {
        "language": lang,
        "direction": text_direction(lang),
        "locale": LANGUAGES[lang]["locale"],
        "translations": merged_translations(lang),
    }


@router.get("/translate", summary="Translate one key; extra query params fill placeholders")
def translate_key(
    request: Request,
    key: str = Query(..., min_length=1, max_length=200),
    lang: Optional[str] = Query(None),
    user: Optional[dict] = Depends(get_optional_user),
):
    if lang is None:
        stored = get_preferences(user["id"]).language if user else None
        lang = detect_language(request.headers.get("accept-language"), stored)
    elif not is_supported(lang):
        raise HTTPException(status_code=404, detail="Unsupported language")
    params = {k: v for k, v in request.query_params.items() if k not in _RESERVED}
    return {"language": lang, "key": key, "text": translate(lang, key, **params)}
