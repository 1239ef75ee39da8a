# -*- coding: utf-8 -*-
"""Auth: DB storage helpers."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn
from ..config import settings

ROLES = ("user", "moderator", "admin")
STATUSES = ("active", "inactive", "banned")

logger = logging.getLogger(__name__)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def get_user_by_email(email: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.db_path) as conn:
        row = conn.execute("SELECT * FROM users WHERE email = ?", (email.lower().strip(),)).fetchone()
        return dict(row) if row else None


def get_user_by_id(user_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.db_path) as conn:
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        return dict(row) if row else None


def create_user(*, email: str, password_hash: str, full_name: str) -> Dict[str, Any]:
    user_id = str(uuid4())
    now = _utc_now()
    email_norm = email.lower().strip()
    # Addresses listed in VITAPULSE_ADMIN_EMAILS are provisioned as admins.
    role = "admin" if email_norm in settings.admin_emails else "user"
    try:
        with db_conn(settings.db_path) as conn:
            conn.execute(
                "INSERT INTO users (id, email, full_name, password_hash, role, status, created_at) "
                "VALUES (?, ?, ?, ?, ?, 'active', ?)",
                (user_id, email_norm, full_name, password_hash, role, now),
            )
    except sqlite3.IntegrityError as exc:
        # Lost a race with a concurrent registration of the same address.
        logger.info("duplicate registration for %s: %s", email_norm, exc)
        raise HTTPException(status_code=409, detail="Email already registered") from exc
    return {
        "id": user_id,
        "email": email_norm,
        "full_name": full_name,
        "password_hash": password_hash,
        "role": role,
        "status": "active",
        "created_at": now,
    }


def update_user(user_id: str, *, role: Optional[str] = None, status: Optional[str] = None) -> Optional[Dict[str, Any]]:
    if role is not None and role not in ROLES:
        raise ValueError(f"role must be one of: {', '.join(ROLES)}")
    if status is not None and status not in STATUSES:
        raise ValueError(f"status must be one of: {', '.join(STATUSES)}")
    with db_conn(settings.db_path) as conn:
        if role is not None:
            conn.execute("UPDATE users SET role = ? WHERE id = ?", (role, user_id))
        if status is not None:
            conn.execute("UPDATE users SET status = ? WHERE id = ?", (status, user_id))
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        return dict(row) if row else None
