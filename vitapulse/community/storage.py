# -*- coding: utf-8 -*-
"""Community storage helpers (SQLite): posts, comments, reactions, challenges."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn
from ..config import settings

SORTS = ("latest", "popular", "views")

_POST_SELECT = """
    SELECT p.*, u.full_name AS author_name, u.role AS author_role,
        (SELECT COUNT(*) FROM forum_reactions r
            WHERE r.target_type = 'post' AND r.target_id = p.id AND r.reaction = 'like') AS likes,
        (SELECT COUNT(*) FROM forum_reactions r
            WHERE r.target_type = 'post' AND r.target_id = p.id AND r.reaction = 'dislike') AS dislikes,
        (SELECT COUNT(*) FROM forum_comments c WHERE c.post_id = p.id) AS comment_count
    FROM forum_posts p
    LEFT JOIN users u ON u.id = p.author_id
"""

_ORDER_BY = {
    "latest": "p.is_pinned DESC, p.last_activity DESC",
    "popular": "likes DESC, p.created_at DESC",
    "views": "p.views DESC, p.created_at DESC",
}


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _row_to_post(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": row["id"],
        "title": row["title"],
        "content": row["content"],
        "category": row["category"],
        "tags": json.loads(row["tags_json"] or "[]"),
        "author": {"id": row["author_id"], "name": row.get("author_name"), "role": row.get("author_role")},
        "likes": int(row.get("likes") or 0),
        "dislikes": int(row.get("dislikes") or 0),
        "comments": int(row.get("comment_count") or 0),
        "views": int(row["views"]),
        "is_pinned": bool(row["is_pinned"]),
        "is_locked": bool(row["is_locked"]),
        "created_at": row["created_at"],
        "updated_at": row["updated_at"],
        "last_activity": row["last_activity"],
    }


def _fetch_post(conn, post_id: str) -> Optional[Dict[str, Any]]:
    row = conn.execute(_POST_SELECT + " WHERE p.id = ?", (post_id,)).fetchone()
    return _row_to_post(dict(row)) if row else None


# Posts


def create_post(*, author_id: str, title: str, content: str, category: str, tags: List[str]) -> Dict[str, Any]:
    post_id = str(uuid4())
    now = _utc_now()
    with db_conn(settings.db_path) as conn:
        conn.execute(
            """
            INSERT INTO forum_posts (
                id, author_id, title, content, category, tags_json, views,
                is_pinned, is_locked, created_at, updated_at, last_activity
            ) VALUES (?, ?, ?, ?, ?, ?, 0, 0, 0, ?, ?, ?)
            """,
            (post_id, author_id, title, content, category, json.dumps(tags, ensure_ascii=False), now, now, now),
        )
        return _fetch_post(conn, post_id)


def get_post(post_id: str, *, count_view: bool = False) -> Optional[Dict[str, Any]]:
    with db_conn(settings.db_path) as conn:
        if count_view:
            conn.execute("UPDATE forum_posts SET views = views + 1 WHERE id = ?", (post_id,))
        return _fetch_post(conn, post_id)


def require_post(post_id: str, *, count_view: bool = False) -> Dict[str, Any]:
    post = get_post(post_id, count_view=count_view)
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return post


def list_posts(
    *,
    category: Optional[str] = None,
    tag: Optional[str] = None,
    search: Optional[str] = None,
    sort: str = "latest",
    limit: int = 20,
    offset: int = 0,
) -> Dict[str, Any]:
    if sort not in SORTS:
        raise ValueError(f"sort must be one of: {', '.join(SORTS)}")
    where: List[str] = []
    params: List[Any] = []
    if category:
        where.append("p.category = ?")
        params.append(category)
    if search:
        where.append("(LOWER(p.title) LIKE ? OR LOWER(p.content) LIKE ?)")
        needle = f"%{search.strip().lower()}%"
        params.extend([needle, needle])
    sql = _POST_SELECT
    if where:
        sql += " WHERE " + " AND ".join(where)
    sql += " ORDER BY " + _ORDER_BY[sort]

    with db_conn(settings.db_path) as conn:
        rows = conn.execute(sql, params).fetchall()
    posts = [_row_to_post(dict(r)) for r in rows]
    if tag:
        wanted = tag.strip().lower()
        posts = [p for p in posts if wanted in p["tags"]]
    return {"total": len(posts), "posts": posts[offset : offset + limit]}


def update_post(post_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    columns = {k: v for k, v in fields.items() if v is not None}
    if "tags" in columns:
        columns["tags_json"] = json.dumps(columns.pop("tags"), ensure_ascii=False)
    for flag in ("is_pinned", "is_locked"):
        if flag in columns:
            columns[flag] = int(bool(columns[flag]))
    with db_conn(settings.db_path) as conn:
        if columns:
            if "title" in columns or "content" in columns:
                columns["updated_at"] = _utc_now()
            assignments = ", ".join(f"{k} = ?" for k in columns)
            conn.execute(f"UPDATE forum_posts SET {assignments} WHERE id = ?", [*columns.values(), post_id])
        post = _fetch_post(conn, post_id)
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return post


def delete_post(post_id: str) -> bool:
    with db_conn(settings.db_path) as conn:
        comment_ids = [r["id"] for r in conn.execute("SELECT id FROM forum_comments WHERE post_id = ?", (post_id,))]
        conn.executemany(
            "DELETE FROM forum_reactions WHERE target_type = 'comment' AND target_id = ?",
            [(cid,) for cid in comment_ids],
        )
        conn.execute("DELETE FROM forum_reactions WHERE target_type = 'post' AND target_id = ?", (post_id,))
        cur = conn.execute("DELETE FROM forum_posts WHERE id = ?", (post_id,))
        return cur.rowcount > 0


# Comments


def _row_to_comment(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": row["id"],
        "post_id": row["post_id"],
        "parent_id": row["parent_id"],
        "author": {"id": row["author_id"], "name": row.get("author_name")},
        "content": row["content"],
        "is_solution": bool(row["is_solution"]),
        "likes": int(row.get("likes") or 0),
        "dislikes": int(row.get("dislikes") or 0),
        "created_at": row["created_at"],
    }


_COMMENT_SELECT = """
    SELECT c.*, u.full_name AS author_name,
        (SELECT COUNT(*) FROM forum_reactions r
            WHERE r.target_type = 'comment' AND r.target_id = c.id AND r.reaction = 'like') AS likes,
        (SELECT COUNT(*) FROM forum_reactions r
            WHERE r.target_type = 'comment' AND r.target_id = c.id AND r.reaction = 'dislike') AS dislikes
    FROM forum_comments c
    LEFT JOIN users u ON u.id = c.author_id
"""


def get_comment(comment_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.db_path) as conn:
        row = conn.execute(_COMMENT_SELECT + " WHERE c.id = ?", (comment_id,)).fetchone()
    return _row_to_comment(dict(row)) if row else None


def add_comment(*, post_id: str, author_id: str, content: str, parent_id: Optional[str] = None) -> Dict[str, Any]:
    post = require_post(post_id)
    if post["is_locked"]:
        raise HTTPException(status_code=403, detail="Post is locked")
    if parent_id:
        parent = get_comment(parent_id)
        if not parent or parent["post_id"] != post_id:
            raise HTTPException(status_code=404, detail="Parent comment not found")

    comment_id = str(uuid4())
    now = _utc_now()
    with db_conn(settings.db_path) as conn:
        conn.execute(
            "INSERT INTO forum_comments (id, post_id, author_id, parent_id, content, is_solution, created_at) "
            "VALUES (?, ?, ?, ?, ?, 0, ?)",
            (comment_id, post_id, author_id, parent_id, content, now),
        )
        conn.execute("UPDATE forum_posts SET last_activity = ? WHERE id = ?", (now, post_id))
        row = conn.execute(_COMMENT_SELECT + " WHERE c.id = ?", (comment_id,)).fetchone()
    return _row_to_comment(dict(row))


def list_comment_tree(post_id: str) -> List[Dict[str, Any]]:
    with db_conn(settings.db_path) as conn:
        rows = conn.execute(_COMMENT_SELECT + " WHERE c.post_id = ? ORDER BY c.created_at ASC", (post_id,)).fetchall()
    nodes = {}
    for r in rows:
        comment = _row_to_comment(dict(r))
        comment["replies"] = []
        nodes[comment["id"]] = comment
    roots: List[Dict[str, Any]] = []
    for comment in nodes.values():
        parent = nodes.get(comment["parent_id"]) if comment["parent_id"] else None
        (parent["replies"] if parent else roots).append(comment)
    return roots


def mark_solution(comment_id: str) -> Dict[str, Any]:
    """Flag a comment as the accepted answer; any previous solution on the post is cleared."""
    comment = get_comment(comment_id)
    if not comment:
        raise HTTPException(status_code=404, detail="Comment not found")
    with db_conn(settings.db_path) as conn:
        conn.execute("UPDATE forum_comments SET is_solution = 0 WHERE post_id = ?", (comment["post_id"],))
        conn.execute("UPDATE forum_comments SET is_solution = 1 WHERE id = ?", (comment_id,))
    comment["is_solution"] = True
    return comment


# Reactions


def toggle_reaction(*, user_id: str, target_type: str, target_id: str, reaction: str) -> Dict[str, Any]:
    """Same reaction again removes it; the opposite one replaces it."""
    with db_conn(settings.db_path) as conn:
        row = conn.execute(
            "SELECT reaction FROM forum_reactions WHERE user_id = ? AND target_type = ? AND target_id = ?",
            (user_id, target_type, target_id),
        ).fetchone()
        if row and row["reaction"] == reaction:
            conn.execute(
                "DELETE FROM forum_reactions WHERE user_id = ? AND target_type = ? AND target_id = ?",
                (user_id, target_type, target_id),
            )
            action, current = "removed", None
        elif row:
            conn.execute(
                "UPDATE forum_reactions SET reaction = ?, created_at = ? "
                "WHERE user_id = ? AND target_type = ? AND target_id = ?",
                (reaction, _utc_now(), user_id, target_type, target_id),
            )
            action, current = "switched", reaction
        else:
            conn.execute(
                "INSERT INTO forum_reactions (user_id, target_type, target_id, reaction, created_at) "
                "VALUES (?, ?, ?, ?, ?)",
                (user_id, target_type, target_id, reaction, _utc_now()),
            )
            action, current = "added", reaction
        counts = {
            r["reaction"]: int(r["n"])
            for r in conn.execute(
                "SELECT reaction, COUNT(*) AS n FROM forum_reactions "
                "WHERE target_type = ? AND target_id = ? GROUP BY reaction",
                (target_type, target_id),
            )
        }
    return {
        "target_type": target_type,
        "target_id": target_id,
        "action": action,
        "reaction": current,
        "likes": counts.get("like", 0),
        "dislikes": counts.get("dislike", 0),
    }


def user_reputation(user_id: str) -> Dict[str, Any]:
    with db_conn(settings.db_path) as conn:
        likes = conn.execute(
            """
            SELECT COUNT(*) AS n FROM forum_reactions r
            JOIN forum_posts p ON r.target_type = 'post' AND r.target_id = p.id
            WHERE p.author_id = ? AND r.reaction = 'like'
            """,
            (user_id,),
        ).fetchone()["n"]
        posts = conn.execute("SELECT COUNT(*) AS n FROM forum_posts WHERE author_id = ?", (user_id,)).fetchone()["n"]
        solutions = conn.execute(
            "SELECT COUNT(*) AS n FROM forum_comments WHERE author_id = ? AND is_solution = 1", (user_id,)
        ).fetchone()["n"]
    return {"user_id": user_id, "reputation": int(likes), "posts": int(posts), "solutions": int(solutions)}


# Challenges


def _row_to_challenge(row: Dict[str, Any], today: str) -> Dict[str, Any]:
    return {
        "id": row["id"],
        "title": row["title"],
        "description": row["description"],
        "challenge_type": row["challenge_type"],
        "points": int(row["points"]),
        "end_date": row["end_date"],
        "requirements": json.loads(row["requirements_json"] or "[]"),
        "rewards": json.loads(row["rewards_json"] or "[]"),
        "participants": int(row.get("participants") or 0),
        "is_active": row["end_date"] >= today,
        "joined": bool(row.get("joined")),
        "created_at": row["created_at"],
    }


def create_challenge(*, created_by: str, **fields: Any) -> Dict[str, Any]:
    challenge_id = str(uuid4())
    now = _utc_now()
    with db_conn(settings.db_path) as conn:
        conn.execute(
            """
            INSERT INTO challenges (
                id, title, description, challenge_type, points, end_date,
                requirements_json, rewards_json, created_by, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                challenge_id,
                fields["title"],
                fields["description"],
                fields["challenge_type"],
                int(fields["points"]),
                fields["end_date"],
                json.dumps(fields.get("requirements") or [], ensure_ascii=False),
                json.dumps(fields.get("rewards") or [], ensure_ascii=False),
                created_by,
                now,
            ),
        )
    return get_challenge(challenge_id)


def get_challenge(challenge_id: str, *, user_id: Optional[str] = None) -> Optional[Dict[str, Any]]:
    with db_conn(settings.db_path) as conn:
        row = conn.execute(
            """
            SELECT ch.*,
                (SELECT COUNT(*) FROM challenge_participants cp WHERE cp.challenge_id = ch.id) AS participants,
                (SELECT COUNT(*) FROM challenge_participants cp
                    WHERE cp.challenge_id = ch.id AND cp.user_id = ?) AS joined
            FROM challenges ch WHERE ch.id = ?
            """,
            (user_id, challenge_id),
        ).fetchone()
    return _row_to_challenge(dict(row), _utc_now()[:10]) if row else None


def list_challenges(*, user_id: Optional[str] = None, active_only: bool = True) -> List[Dict[str, Any]]:
    today = _utc_now()[:10]
    sql = """
        SELECT ch.*,
            (SELECT COUNT(*) FROM challenge_participants cp WHERE cp.challenge_id = ch.id) AS participants,
            (SELECT COUNT(*) FROM challenge_participants cp
                WHERE cp.challenge_id = ch.id AND cp.user_id = ?) AS joined
        FROM challenges ch
    """
    params: List[Any] = [user_id]
    if active_only:
        sql += " WHERE ch.end_date >= ?"
        params.append(today)
    sql += " ORDER BY ch.end_date ASC"
    with db_conn(settings.db_path) as conn:
        rows = conn.execute(sql, params).fetchall()
    return [_row_to_challenge(dict(r), today) for r in rows]


def join_challenge(challenge_id: str, user_id: str) -> Dict[str, Any]:
    challenge = get_challenge(challenge_id, user_id=user_id)
    if not challenge:
        raise HTTPException(status_code=404, detail="Challenge not found")
    if not challenge["is_active"]:
        raise HTTPException(status_code=400, detail="Challenge has ended")
    with db_conn(settings.db_path) as conn:
        cur = conn.execute(
            "INSERT OR IGNORE INTO challenge_participants (challenge_id, user_id, joined_at) VALUES (?, ?, ?)",
            (challenge_id, user_id, _utc_now()),
        )
        if cur.rowcount == 0:
            raise HTTPException(status_code=409, detail="Already joined")
    return get_challenge(challenge_id, user_id=user_id)
