# -*- coding: utf-8 -*-
"""Admin: Pydantic models."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel


class AdminUserUpdateRequest(BaseModel):
    role: Optional[Literal["user", "moderator", "admin"]] = None
    status: Optional[Literal["active", "inactive", "banned"]] = None
