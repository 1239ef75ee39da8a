# -*- coding: utf-8 -*-
"""Admin: aggregate queries over users and the activity ledger."""

from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..app_db import db_conn
from ..config import settings
from ..gamification.engine import compute_streak
from ..gamification.storage import count_events


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _iso(dt: datetime) -> str:
    return dt.isoformat().replace("+00:00", "Z")


def directory_size(root: Path) -> int:
    if not root.exists():
        return 0
    return sum(fp.stat().st_size for fp in root.rglob("*") if fp.is_file())


def system_stats() -> Dict[str, Any]:
    now = _utc_now()
    today = now.date().isoformat()
    week_ago = _iso(now - timedelta(days=7))
    with db_conn(settings.db_path) as conn:
        total_users = conn.execute("SELECT COUNT(*) AS n FROM users").fetchone()["n"]
        new_today = conn.execute(
            "SELECT COUNT(*) AS n FROM users WHERE substr(created_at, 1, 10) = ?", (today,)
        ).fetchone()["n"]
        active = conn.execute(
            "SELECT COUNT(DISTINCT user_id) AS n FROM activity_events WHERE user_id IS NOT NULL AND created_at >= ?",
            (week_ago,),
        ).fetchone()["n"]
        posts = conn.execute("SELECT COUNT(*) AS n FROM forum_posts").fetchone()["n"]
        banned = conn.execute("SELECT COUNT(*) AS n FROM users WHERE status = 'banned'").fetchone()["n"]
    return {
        "total_users": int(total_users),
        "active_users": int(active),
        "new_users_today": int(new_today),
        "banned_users": int(banned),
        "total_meals": count_events("meal_logged"),
        "total_calculations": count_events("calculation_used"),
        "total_posts": int(posts),
        "storage_used_bytes": directory_size(settings.data_root),
    }


# Stays below SQLite's default limit on bound variables.
_ID_CHUNK = 500


def current_streaks(user_ids: List[str]) -> Dict[str, int]:
    days: Dict[str, List[date]] = defaultdict(list)
    with db_conn(settings.db_path) as conn:
        for start in range(0, len(user_ids), _ID_CHUNK):
            chunk = user_ids[start : start + _ID_CHUNK]
            marks = ",".join("?" for _ in chunk)
            rows = conn.execute(
                "SELECT DISTINCT user_id, substr(created_at, 1, 10) AS day "
                f"FROM activity_events WHERE user_id IN ({marks})",
                chunk,
            ).fetchall()
            for r in rows:
                days[r["user_id"]].append(date.fromisoformat(r["day"]))
    return {uid: compute_streak(d)["current"] for uid, d in days.items()}


def list_users_with_activity(
    *,
    search: Optional[str] = None,
    role: Optional[str] = None,
    status: Optional[str] = None,
) -> List[Dict[str, Any]]:
    sql = """
        SELECT u.id, u.email, u.full_name, u.role, u.status, u.created_at,
            COALESCE(SUM(CASE WHEN e.event_type = 'user_login' THEN 1 ELSE 0 END), 0) AS total_logins,
            COALESCE(SUM(CASE WHEN e.event_type = 'achievement_unlocked' THEN 1 ELSE 0 END), 0) AS achievements,
            COALESCE(SUM(e.points), 0) AS points,
            MAX(e.created_at) AS last_active
        FROM users u
        LEFT JOIN activity_events e ON e.user_id = u.id
    """
    where: List[str] = []
    params: List[Any] = []
    if search:
        where.append("(LOWER(u.email) LIKE ? OR LOWER(u.full_name) LIKE ?)")
        needle = f"%{search.strip().lower()}%"
        params.extend([needle, needle])
    if role:
        where.append("u.role = ?")
        params.append(role)
    if status:
        where.append("u.status = ?")
        params.append(status)
    if where:
        sql += " WHERE " + " AND ".join(where)
    sql += " GROUP BY u.id ORDER BY u.created_at DESC"

    with db_conn(settings.db_path) as conn:
        rows = [dict(r) for r in conn.execute(sql, params).fetchall()]
    streaks = current_streaks([r["id"] for r in rows])
    for r in rows:
        r["total_logins"] = int(r["total_logins"])
        r["achievements"] = int(r["achievements"])
        r["points"] = int(r["points"])
        r["streak"] = streaks.get(r["id"], 0)
    return rows
