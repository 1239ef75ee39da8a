# -*- coding: utf-8 -*-
"""Profile storage: preferences and water logs (SQLite)."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List
from uuid import uuid4

from pydantic import ValidationError

from ..app_db import db_conn
from ..config import settings
from ..food.storage import to_utc_iso
from ..i18n.core import normalize_language
from .models import Preferences

logger = logging.getLogger(__name__)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def default_preferences() -> Preferences:
    return Preferences(language=normalize_language(settings.default_language))


def get_preferences(user_id: str) -> Preferences:
    with db_conn(settings.db_path) as conn:
        row = conn.execute("SELECT payload_json FROM user_preferences WHERE user_id = ?", (user_id,)).fetchone()
    if not row:
        return default_preferences()
    try:
        stored = json.loads(row["payload_json"])
        return Preferences.model_validate({**default_preferences().model_dump(), **stored})
    except (ValueError, ValidationError) as exc:
        logger.warning("ignoring unreadable preferences for user %s: %s", user_id, exc)
        return default_preferences()


def save_preferences(user_id: str, updates: Dict[str, Any]) -> Preferences:
    current = get_preferences(user_id).model_dump()
    current.update({k: v for k, v in updates.items() if v is not None})
    prefs = Preferences.model_validate(current)
    with db_conn(settings.db_path) as conn:
        conn.execute(
            """
            INSERT INTO user_preferences (user_id, payload_json, updated_at) VALUES (?, ?, ?)
            ON CONFLICT(user_id) DO UPDATE SET payload_json = excluded.payload_json, updated_at = excluded.updated_at
            """,
            (user_id, prefs.model_dump_json(), _utc_now()),
        )
    return prefs


def add_water(user_id: str, amount_ml: float, logged_at: datetime | None = None) -> Dict[str, Any]:
    stamp = to_utc_iso(logged_at) if logged_at else _utc_now()
    row = {"id": str(uuid4()), "user_id": user_id, "amount_ml": float(amount_ml), "logged_at": stamp}
    with db_conn(settings.db_path) as conn:
        conn.execute(
            "INSERT INTO water_logs (id, user_id, amount_ml, logged_at) VALUES (:id, :user_id, :amount_ml, :logged_at)",
            row,
        )
    return row


def water_logs_for_day(user_id: str, day: str) -> List[Dict[str, Any]]:
    with db_conn(settings.db_path) as conn:
        rows = conn.execute(
            "SELECT id, amount_ml, logged_at FROM water_logs "
            "WHERE user_id = ? AND substr(logged_at, 1, 10) = ? ORDER BY logged_at ASC",
            (user_id, day),
        ).fetchall()
    return [dict(r) for r in rows]
