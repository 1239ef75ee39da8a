# -*- coding: utf-8 -*-
"""Community: Pydantic models."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

CATEGORIES = (
    "General Discussion",
    "Nutrition",
    "Fitness",
    "Mental Health",
    "Weight Loss",
    "Success Stories",
    "Medical Questions",
    "Education",
    "Challenges",
)

CHALLENGE_TYPES = ("daily", "weekly", "monthly", "special")


def _clean_tags(tags: Optional[List[str]]) -> Optional[List[str]]:
    if tags is None:
        return None
    out: List[str] = []
    for t in tags:
        tag = (t or "").strip().lower()[:30].rstrip()
        if tag and tag not in out:
            out.append(tag)
    return out


def _check_category(value: Optional[str]) -> Optional[str]:
    if value is not None and value not in CATEGORIES:
        raise ValueError(f"category must be one of: {', '.join(CATEGORIES)}")
    return value


class PostCreateRequest(BaseModel):
    title: str = Field(..., min_length=3, max_length=200)
    content: str = Field(..., min_length=1, max_length=20000)
    category: str = "General Discussion"
    tags: List[str] = Field(default_factory=list, max_length=10)

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v):
        return _clean_tags(v)

    @field_validator("category")
    @classmethod
    def check_category(cls, v):
        return _check_category(v)


class PostUpdateRequest(BaseModel):
    title: Optional[str] = Field(None, min_length=3, max_length=200)
    content: Optional[str] = Field(None, min_length=1, max_length=20000)
    category: Optional[str] = None
    tags: Optional[List[str]] = Field(None, max_length=10)

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v):
        return _clean_tags(v)

    @field_validator("category")
    @classmethod
    def check_category(cls, v):
        return _check_category(v)


class ModerationRequest(BaseModel):
    is_pinned: Optional[bool] = None
    is_locked: Optional[bool] = None


class CommentCreateRequest(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000)
    parent_id: Optional[str] = None


class ReactionRequest(BaseModel):
    reaction: Literal["like", "dislike"]


class ChallengeCreateRequest(BaseModel):
    title: str = Field(..., min_length=3, max_length=200)
    description: str = Field(..., min_length=1, max_length=2000)
    challenge_type: Literal["daily", "weekly", "monthly", "special"] = "weekly"
    points: int = Field(100, ge=0, le=10000)
    end_date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")
    requirements: List[str] = Field(default_factory=list)
    rewards: List[str] = Field(default_factory=list)
