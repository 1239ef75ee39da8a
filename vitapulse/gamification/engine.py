# -*- coding: utf-8 -*-
"""Gamification: points, levels, streaks and achievements.

Everything is derived from the ``activity_events`` ledger. The pure helpers
(``compute_level``, ``compute_streak``) take plain values so they can be tested
without a database; ``award`` and ``build_progress`` read and write the ledger.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional

from ..calculators.registry import CALCULATORS
from .storage import list_user_events, record_achievement, record_event

logger = logging.getLogger(__name__)

POINTS_PER_LEVEL = 100

# Points for ledger events other than calculations (those come from the registry).
MEAL_LOGGED_POINTS = 5
FORUM_POST_POINTS = 5
FORUM_COMMENT_POINTS = 2
CHALLENGE_JOINED_POINTS = 5
PROGRESS_LOGGED_POINTS = 5


@dataclass(frozen=True)
class Achievement:
    id: str
    name: str
    description: str
    points: int
    target: int
    metric: str


ACHIEVEMENTS: List[Achievement] = [
    Achievement("first-calc", "First Calculation", "Complete your first health calculation", 10, 1, "calculations"),
    Achievement("calc-master", "Calculation Master", "Complete 10 calculations", 50, 10, "calculations"),
    Achievement("daily-user", "Daily User", "Stay active for 7 consecutive days", 100, 7, "longest_streak"),
    Achievement(
        "health-expert",
        "Health Expert",
        "Use every health calculator at least once",
        200,
        len(CALCULATORS),
        "distinct_calculators",
    ),
    Achievement("streak-master", "Streak Master", "Maintain a 30-day streak", 500, 30, "longest_streak"),
    Achievement("first-meal", "First Meal Logged", "Log your first food entry", 25, 1, "meals_logged"),
    Achievement("community-voice", "Community Voice", "Publish 5 forum posts", 50, 5, "forum_posts"),
]


def compute_level(points: int) -> Dict[str, int]:
    points = max(int(points), 0)
    level = points // POINTS_PER_LEVEL + 1
    into_level = points % POINTS_PER_LEVEL
    return {
        "level": level,
        "points_into_level": into_level,
        "points_to_next_level": POINTS_PER_LEVEL - into_level,
        "next_level_at": level * POINTS_PER_LEVEL,
    }


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


def compute_streak(days: Iterable[date], today: Optional[date] = None) -> Dict[str, Any]:
    """Current and longest run of consecutive active days.

    The current streak survives until the end of the day after the last active day.
    """
    today = today or _utc_today()
    unique = sorted(set(days))
    if not unique:
        return {"current": 0, "longest": 0, "last_active": None}

    longest = 1
    run = 1
    for prev, cur in zip(unique, unique[1:]):
        if cur - prev == timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)

    last = unique[-1]
    current = 0
    if last >= today - timedelta(days=1):
        current = 1
        idx = len(unique) - 1
        while idx > 0 and unique[idx] - unique[idx - 1] == timedelta(days=1):
            current += 1
            idx -= 1

    return {"current": current, "longest": longest, "last_active": last.isoformat()}


def _event_day(event: Dict[str, Any]) -> Optional[date]:
    raw = str(event.get("created_at") or "")[:10]
    try:
        return date.fromisoformat(raw)
    except ValueError:
        return None


def _metrics(events: List[Dict[str, Any]], today: Optional[date] = None) -> Dict[str, Any]:
    calcs = [e for e in events if e["event_type"] == "calculation_used"]
    days = [d for d in (_event_day(e) for e in events) if d is not None]
    streak = compute_streak(days, today=today)
    return {
        "points": sum(int(e.get("points") or 0) for e in events),
        "calculations": len(calcs),
        "distinct_calculators": len({e.get("subject") for e in calcs if e.get("subject")}),
        "meals_logged": sum(1 for e in events if e["event_type"] == "meal_logged"),
        "forum_posts": sum(1 for e in events if e["event_type"] == "forum_post_created"),
        "current_streak": streak["current"],
        "longest_streak": streak["longest"],
        "last_active": streak["last_active"],
        "unlocked": {e.get("subject") for e in events if e["event_type"] == "achievement_unlocked"},
    }


def evaluate_achievements(user_id: str) -> List[Achievement]:
    """Record every newly satisfied achievement and return the ones unlocked now."""
    metrics = _metrics(list_user_events(user_id))
    unlocked: List[Achievement] = []
    for ach in ACHIEVEMENTS:
        if ach.id in metrics["unlocked"] or metrics[ach.metric] < ach.target:
            continue
        if record_achievement(user_id, ach.id, points=ach.points, description=f"Achievement: {ach.name}"):
            logger.info("user %s unlocked achievement %s (+%s)", user_id, ach.id, ach.points)
            unlocked.append(ach)
    return unlocked


def award(
    user_id: str,
    event_type: str,
    *,
    subject: Optional[str] = None,
    points: int = 0,
    description: Optional[str] = None,
) -> Dict[str, Any]:
    """Record an activity event for the user and settle any achievements it completes."""
    event = record_event(user_id, event_type, subject=subject, points=points, description=description)
    unlocked = evaluate_achievements(user_id)
    return {
        "points_awarded": int(points),
        "achievements_unlocked": [a.id for a in unlocked],
        "event_id": event["id"],
    }


def build_progress(user_id: str, *, today: Optional[date] = None) -> Dict[str, Any]:
    events = list_user_events(user_id)
    metrics = _metrics(events, today=today)
    achievements = []
    for ach in ACHIEVEMENTS:
        value = int(metrics[ach.metric])
        achievements.append(
            {
                "id": ach.id,
                "name": ach.name,
                "description": ach.description,
                "points": ach.points,
                "unlocked": ach.id in metrics["unlocked"],
                "progress": min(value, ach.target),
                "max_progress": ach.target,
            }
        )
    return {
        "total_points": metrics["points"],
        **compute_level(metrics["points"]),
        "streak": {
            "current": metrics["current_streak"],
            "longest": metrics["longest_streak"],
            "last_active": metrics["last_active"],
        },
        "counts": {
            "calculations": metrics["calculations"],
            "distinct_calculators": metrics["distinct_calculators"],
            "meals_logged": metrics["meals_logged"],
            "forum_posts": metrics["forum_posts"],
        },
        "achievements": achievements,
    }
