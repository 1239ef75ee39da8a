# -*- coding: utf-8 -*-
"""Gamification: activity event ledger (SQLite)."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from ..app_db import db_conn
from ..config import settings


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def record_event(
    user_id: Optional[str],
    event_type: str,
    *,
    subject: Optional[str] = None,
    points: int = 0,
    description: Optional[str] = None,
    severity: str = "info",
    created_at: Optional[str] = None,
) -> Dict[str, Any]:
    event = {
        "id": str(uuid4()),
        "user_id": user_id,
        "event_type": event_type,
        "subject": subject,
        "points": int(points),
        "description": description,
        "severity": severity,
        "created_at": created_at or _utc_now(),
    }
    with db_conn(settings.db_path) as conn:
        conn.execute(
            "INSERT INTO activity_events (id, user_id, event_type, subject, points, description, severity, created_at) "
            "VALUES (:id, :user_id, :event_type, :subject, :points, :description, :severity, :created_at)",
            event,
        )
    return event


def record_achievement(user_id: str, achievement_id: str, *, points: int, description: str) -> bool:
    """Insert an ``achievement_unlocked`` event; returns False when it already exists."""
    with db_conn(settings.db_path) as conn:
        cur = conn.execute(
            "INSERT OR IGNORE INTO activity_events "
            "(id, user_id, event_type, subject, points, description, severity, created_at) "
            "VALUES (?, ?, 'achievement_unlocked', ?, ?, ?, 'success', ?)",
            (str(uuid4()), user_id, achievement_id, int(points), description, _utc_now()),
        )
        return cur.rowcount > 0


def list_user_events(user_id: str, *, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    sql = "SELECT * FROM activity_events WHERE user_id = ? ORDER BY created_at DESC"
    params: List[Any] = [user_id]
    if limit is not None:
        sql += " LIMIT ?"
        params.append(int(limit))
    with db_conn(settings.db_path) as conn:
        rows = conn.execute(sql, params).fetchall()
        return [dict(r) for r in rows]


def list_recent_events(*, limit: int = 50) -> List[Dict[str, Any]]:
    with db_conn(settings.db_path) as conn:
        rows = conn.execute(
            """
            SELECT e.*, u.email AS user_email, u.full_name AS user_name
            FROM activity_events e
            LEFT JOIN users u ON u.id = e.user_id
            ORDER BY e.created_at DESC
            LIMIT ?
            """,
            (int(limit),),
        ).fetchall()
        return [dict(r) for r in rows]


def count_events(event_type: str, *, user_id: Optional[str] = None) -> int:
    sql = "SELECT COUNT(*) AS n FROM activity_events WHERE event_type = ?"
    params: List[Any] = [event_type]
    if user_id is not None:
        sql += " AND user_id = ?"
        params.append(user_id)
    with db_conn(settings.db_path) as conn:
        return int(conn.execute(sql, params).fetchone()["n"])


def total_points(user_id: str) -> int:
    with db_conn(settings.db_path) as conn:
        row = conn.execute(
            "SELECT COALESCE(SUM(points), 0) AS total FROM activity_events WHERE user_id = ?",
            (user_id,),
        ).fetchone()
        return int(row["total"])
