# -*- coding: utf-8 -*-
"""Fitness progress storage helpers (SQLite)."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from ..app_db import db_conn
from ..config import settings

logger = logging.getLogger(__name__)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _row_to_entry(row: Dict[str, Any]) -> Dict[str, Any]:
    try:
        metrics = json.loads(row.get("metrics_json") or "{}")
    except ValueError:
        logger.warning("progress entry %s has unreadable metrics", row.get("id"))
        metrics = {}
    return {
        **metrics,
        "entry_id": row["id"],
        "entry_date": row["entry_date"],
        "created_at": row["created_at"],
        "notes": row.get("notes"),
    }


def save_entry(*, user_id: str, metrics: Dict[str, Any], entry_date: Optional[str] = None, notes: Optional[str] = None) -> Dict[str, Any]:
    now = _utc_now()
    row = {
        "id": str(uuid4()),
        "user_id": user_id,
        "entry_date": entry_date or now[:10],
        "metrics_json": json.dumps({k: v for k, v in metrics.items() if v is not None}),
        "notes": notes,
        "created_at": now,
    }
    with db_conn(settings.db_path) as conn:
        conn.execute(
            "INSERT INTO progress_entries (id, user_id, entry_date, metrics_json, notes, created_at) "
            "VALUES (:id, :user_id, :entry_date, :metrics_json, :notes, :created_at)",
            row,
        )
    return _row_to_entry(row)


def list_entries(user_id: str, *, start: Optional[str] = None, end: Optional[str] = None) -> List[Dict[str, Any]]:
    with db_conn(settings.db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM progress_entries WHERE user_id = ? AND entry_date >= ? AND entry_date <= ? "
            "ORDER BY entry_date ASC, created_at ASC",
            (user_id, start or "0000-01-01", end or "9999-12-31"),
        ).fetchall()
    return [_row_to_entry(dict(r)) for r in rows]


def delete_entry(user_id: str, entry_id: str) -> bool:
    with db_conn(settings.db_path) as conn:
        cur = conn.execute("DELETE FROM progress_entries WHERE id = ? AND user_id = ?", (entry_id, user_id))
        return cur.rowcount > 0
