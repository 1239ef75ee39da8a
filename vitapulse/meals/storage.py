# -*- coding: utf-8 -*-
"""Meal plan storage helpers (SQLite)."""

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


def _row_to_plan(row: Dict[str, Any]) -> Dict[str, Any]:
    try:
        payload = json.loads(row.get("payload_json") or "{}")
    except ValueError:
        logger.warning("meal plan %s has an unreadable payload", row.get("id"))
        payload = {}
    return {
        "plan_id": row["id"],
        "title": row.get("title"),
        "plan_date": row["plan_date"],
        "created_at": row["created_at"],
        "plan": payload,
    }


def save_plan(*, user_id: str, plan: Dict[str, Any], title: Optional[str] = None, plan_date: Optional[str] = None) -> Dict[str, Any]:
    now = _utc_now()
    row = {
        "id": str(uuid4()),
        "user_id": user_id,
        "plan_date": plan_date or now[:10],
        "title": title,
        "payload_json": json.dumps(plan, ensure_ascii=False),
        "created_at": now,
    }
    with db_conn(settings.db_path) as conn:
        conn.execute(
            "INSERT INTO meal_plans (id, user_id, plan_date, title, payload_json, created_at) "
            "VALUES (:id, :user_id, :plan_date, :title, :payload_json, :created_at)",
            row,
        )
    return _row_to_plan(row)


def list_plans(user_id: str) -> List[Dict[str, Any]]:
    with db_conn(settings.db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM meal_plans WHERE user_id = ? ORDER BY plan_date DESC, created_at DESC",
            (user_id,),
        ).fetchall()
    return [_row_to_plan(dict(r)) for r in rows]


def get_plan(user_id: str, plan_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.db_path) as conn:
        row = conn.execute(
            "SELECT * FROM meal_plans WHERE id = ? AND user_id = ?",
            (plan_id, user_id),
        ).fetchone()
    return _row_to_plan(dict(row)) if row else None


def delete_plan(user_id: str, plan_id: str) -> bool:
    with db_conn(settings.db_path) as conn:
        cur = conn.execute("DELETE FROM meal_plans WHERE id = ? AND user_id = ?", (plan_id, user_id))
        return cur.rowcount > 0
