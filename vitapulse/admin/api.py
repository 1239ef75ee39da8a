# -*- coding: utf-8 -*-
"""Admin dashboard endpoints. Every route requires the admin role."""

from __future__ import annotations

import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.models import UserPublic
from ..auth.security import require_admin
from ..auth.storage import ROLES, STATUSES, get_user_by_id, update_user
from ..gamification.storage import list_recent_events, record_event
from .models import AdminUserUpdateRequest
from .storage import list_users_with_activity, system_stats

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])

_STARTED_AT = time.monotonic()


@router.get("/stats", summary="System statistics")
def stats(admin: dict = Depends(require_admin)):
    return {**system_stats(), "uptime_seconds": int(time.monotonic() - _STARTED_AT)}


@router.get("/users", summary="Users with activity summary")
def users(
    search: Optional[str] = Query(None, max_length=100),
    role: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    admin: dict = Depends(require_admin),
):
    if role and role not in ROLES:
        raise HTTPException(status_code=400, detail=f"role must be one of: {', '.join(ROLES)}")
    if status and status not in STATUSES:
        raise HTTPException(status_code=400, detail=f"status must be one of: {', '.join(STATUSES)}")
    rows = list_users_with_activity(search=search, role=role, status=status)
    return {"count": len(rows), "users": rows}


@router.patch("/users/{user_id}", response_model=UserPublic, summary="Change a user's role or status")
def patch_user(user_id: str, request: AdminUserUpdateRequest, admin: dict = Depends(require_admin)):
    target = get_user_by_id(user_id)
    if not target:
        raise HTTPException(status_code=404, detail="User not found")
    if user_id == admin["id"]:
        if request.role is not None and request.role != "admin":
            raise HTTPException(status_code=400, detail="Admins cannot remove their own admin role")
        if request.status is not None and request.status != "active":
            raise HTTPException(status_code=400, detail="Admins cannot deactivate their own account")

    updated = update_user(user_id, role=request.role, status=request.status)
    changes = ", ".join(f"{k}={v}" for k, v in request.model_dump().items() if v is not None) or "no changes"
    logger.info("admin %s updated user %s: %s", admin["email"], target["email"], changes)
    record_event(
        admin["id"],
        "admin_action",
        subject=user_id,
        description=f"{admin['email']} updated {target['email']}: {changes}",
        severity="warning" if request.status == "banned" else "info",
    )
    return updated


@router.get("/activity", summary="Recent activity across all users")
def activity(
    limit: int = Query(50, ge=1, le=500),
    admin: dict = Depends(require_admin),
):
    events = list_recent_events(limit=limit)
    return {"count": len(events), "events": events}
