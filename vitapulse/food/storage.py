# -*- coding: utf-8 -*-
"""Food: JSON file storage, one file per log entry."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional
from uuid import uuid4

from pydantic import ValidationError

from ..config import settings
from .models import FoodDaySummary, FoodEntry, MealType, Nutrition

logger = logging.getLogger(__name__)


def _data_root_for(user_id: str) -> Path:
    return settings.data_root / "users" / user_id / "food"


def _ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def to_utc_iso(value: datetime) -> str:
    """Naive datetimes are taken as UTC; aware ones are converted."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _date_prefix(iso8601: str) -> str:
    # ISO8601 strings start with YYYY-MM-DD.
    return (iso8601 or "")[:10]


def create_entry_record(
    *,
    user_id: str,
    consumed_at: Optional[datetime],
    meal_type: MealType,
    name: str,
    per_serving: Nutrition,
    quantity: float,
    food_id: Optional[str] = None,
    brand: Optional[str] = None,
    serving_size: Optional[str] = None,
    notes: Optional[str] = None,
) -> FoodEntry:
    now = _utc_now()
    return FoodEntry(
        entry_id=str(uuid4()),
        user_id=user_id,
        created_at=now,
        consumed_at=to_utc_iso(consumed_at) if consumed_at else now,
        meal_type=meal_type,
        food_id=food_id,
        name=name,
        brand=brand,
        serving_size=serving_size,
        quantity=quantity,
        nutrition=per_serving.scaled(quantity),
        notes=notes,
    )


def save_entry(entry: FoodEntry, data_root: Path | None = None) -> str:
    root = data_root or _data_root_for(entry.user_id)
    _ensure_dir(root)
    fp = root / f"{entry.entry_id}.json"
    fp.write_text(entry.model_dump_json(indent=2), encoding="utf-8")
    return entry.entry_id


def _iter_entries(root: Path) -> List[FoodEntry]:
    if not root.exists():
        return []
    entries: List[FoodEntry] = []
    for fp in root.glob("*.json"):
        try:
            raw = json.loads(fp.read_text(encoding="utf-8"))
            entries.append(FoodEntry.model_validate(raw))
        except (OSError, ValueError, ValidationError) as exc:
            logger.warning("skipping unreadable food entry %s: %s", fp, exc)
    entries.sort(key=lambda e: e.consumed_at)
    return entries


def get_entries(
    user_id: str,
    *,
    start: Optional[str] = None,
    end: Optional[str] = None,
    data_root: Path | None = None,
) -> List[FoodEntry]:
    root = data_root or _data_root_for(user_id)
    entries = _iter_entries(root)
    if not start and not end:
        return entries
    start_date = start or "0000-01-01"
    end_date = end or "9999-12-31"
    return [e for e in entries if start_date <= _date_prefix(e.consumed_at) <= end_date]


def delete_entry(user_id: str, entry_id: str, data_root: Path | None = None) -> bool:
    root = data_root or _data_root_for(user_id)
    fp = root / f"{entry_id}.json"
    # Entry ids are uuid4 strings; anything else cannot name a file of ours.
    if fp.parent != root or not fp.exists():
        return False
    fp.unlink()
    return True


def sum_nutrition(entries: List[FoodEntry]) -> Nutrition:
    total = Nutrition()
    for e in entries:
        total = total + e.nutrition
    return total.rounded()


def _meal_breakdown(entries: List[FoodEntry]) -> Dict[str, Nutrition]:
    out: Dict[str, Nutrition] = {}
    for meal in MealType:
        subset = [e for e in entries if e.meal_type == meal]
        if subset:
            out[meal.value] = sum_nutrition(subset)
    return out


def get_summary(
    user_id: str,
    *,
    start: str,
    end: str,
    data_root: Path | None = None,
) -> Dict[str, object]:
    entries = get_entries(user_id, start=start, end=end, data_root=data_root)

    per_day: Dict[str, List[FoodEntry]] = {}
    for entry in entries:
        per_day.setdefault(_date_prefix(entry.consumed_at), []).append(entry)

    days: List[FoodDaySummary] = []
    totals = Nutrition()
    for day in sorted(per_day):
        day_entries = per_day[day]
        day_totals = sum_nutrition(day_entries)
        totals = totals + day_totals
        days.append(
            FoodDaySummary(
                date=day,
                totals=day_totals,
                meals=_meal_breakdown(day_entries),
                entry_count=len(day_entries),
            )
        )

    return {
        "start": start,
        "end": end,
        # Range totals are the sum of the (rounded) day totals.
        "totals": totals.rounded(),
        "meals": _meal_breakdown(entries),
        "days": days,
    }
