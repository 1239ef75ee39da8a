# -*- coding: utf-8 -*-
"""Symptom report storage (SQLite)."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from ..app_db import db_conn
from ..config import settings


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _row_to_report(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "report_id": row["id"],
        "symptoms": json.loads(row["symptoms_json"]),
        "analysis": json.loads(row["analysis_json"]),
        "urgency": row["urgency"],
        "reported_at": row["reported_at"],
    }


def save_report(*, user_id: str, symptoms: List[str], analysis: Dict[str, Any]) -> Dict[str, Any]:
    row = {
        "id": str(uuid4()),
        "user_id": user_id,
        "symptoms_json": json.dumps(symptoms, ensure_ascii=False),
        "analysis_json": json.dumps(analysis, ensure_ascii=False),
        "urgency": str(analysis.get("urgency_level") or "low"),
        "reported_at": _utc_now(),
    }
    with db_conn(settings.db_path) as conn:
        conn.execute(
            "INSERT INTO symptom_reports (id, user_id, symptoms_json, analysis_json, urgency, reported_at) "
            "VALUES (:id, :user_id, :symptoms_json, :analysis_json, :urgency, :reported_at)",
            row,
        )
    return _row_to_report(row)


def list_reports(user_id: str, *, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    sql = "SELECT * FROM symptom_reports WHERE user_id = ? ORDER BY reported_at DESC"
    params: List[Any] = [user_id]
    if limit is not None:
        sql += " LIMIT ?"
        params.append(int(limit))
    with db_conn(settings.db_path) as conn:
        rows = conn.execute(sql, params).fetchall()
    return [_row_to_report(dict(r)) for r in rows]
