# -*- coding: utf-8 -*-
"""Community endpoints (forum + challenges)."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import get_current_user, get_optional_user, is_moderator
from ..gamification.engine import CHALLENGE_JOINED_POINTS, FORUM_COMMENT_POINTS, FORUM_POST_POINTS, award
from .models import (
    CATEGORIES,
    CHALLENGE_TYPES,
    ChallengeCreateRequest,
    CommentCreateRequest,
    ModerationRequest,
    PostCreateRequest,
    PostUpdateRequest,
    ReactionRequest,
)
from .storage import (
    SORTS,
    add_comment,
    create_challenge,
    create_post,
    delete_post,
    get_comment,
    join_challenge,
    list_challenges,
    list_comment_tree,
    list_posts,
    mark_solution,
    require_post,
    toggle_reaction,
    update_post,
    user_reputation,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/community", tags=["Community"])


def _require_moderator(user: dict = Depends(get_current_user)) -> dict:
    if not is_moderator(user):
        raise HTTPException(status_code=403, detail="Moderator access required")
    return user


@router.get("/categories", summary="Forum categories and challenge types")
def categories():
    return {"categories": list(CATEGORIES), "challenge_types": list(CHALLENGE_TYPES), "sorts": list(SORTS)}


@router.get("/posts", summary="List forum posts")
def get_posts(
    category: Optional[str] = Query(None),
    tag: Optional[str] = Query(None, max_length=30),
    search: Optional[str] = Query(None, max_length=100),
    sort: str = Query("latest"),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    try:
        return list_posts(category=category, tag=tag, search=search, sort=sort, limit=limit, offset=offset)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/posts", summary="Create a forum post")
def new_post(request: PostCreateRequest, user: dict = Depends(get_current_user)):
    post = create_post(
        author_id=user["id"],
        title=request.title.strip(),
        content=request.content,
        category=request.category,
        tags=request.tags,
    )
    reward = award(
        user["id"], "forum_post_created", subject=post["id"], points=FORUM_POST_POINTS, description=post["title"]
    )
    return {"post": post, "reward": reward}


@router.get("/posts/{post_id}", summary="Get a post with its comment thread")
def get_post_detail(post_id: str):
    post = require_post(post_id, count_view=True)
    return {"post": post, "comments": list_comment_tree(post_id)}


@router.patch("/posts/{post_id}", summary="Edit your own post")
def edit_post(post_id: str, request: PostUpdateRequest, user: dict = Depends(get_current_user)):
    post = require_post(post_id)
    if post["author"]["id"] != user["id"]:
        raise HTTPException(status_code=403, detail="Only the author can edit this post")
    return update_post(post_id, request.model_dump())


@router.delete("/posts/{post_id}", summary="Delete a post (author or moderator)")
def remove_post(post_id: str, user: dict = Depends(get_current_user)):
    post = require_post(post_id)
    if post["author"]["id"] != user["id"] and not is_moderator(user):
        raise HTTPException(status_code=403, detail="Not allowed to delete this post")
    delete_post(post_id)
    if post["author"]["id"] != user["id"]:
        logger.info("moderator %s deleted post %s", user["id"], post_id)
    return {"status": "ok", "post_id": post_id}


@router.post("/posts/{post_id}/moderate", summary="Pin or lock a post")
def moderate_post(post_id: str, request: ModerationRequest, user: dict = Depends(_require_moderator)):
    require_post(post_id)
    post = update_post(post_id, request.model_dump())
    logger.info("moderator %s set pinned=%s locked=%s on post %s", user["id"], post["is_pinned"], post["is_locked"], post_id)
    return post


@router.post("/posts/{post_id}/comments", summary="Comment on a post")
def new_comment(post_id: str, request: CommentCreateRequest, user: dict = Depends(get_current_user)):
    comment = add_comment(post_id=post_id, author_id=user["id"], content=request.content, parent_id=request.parent_id)
    reward = award(user["id"], "forum_comment_created", subject=comment["id"], points=FORUM_COMMENT_POINTS)
    return {"comment": comment, "reward": reward}


@router.post("/comments/{comment_id}/solution", summary="Mark a comment as the solution")
def accept_solution(comment_id: str, user: dict = Depends(get_current_user)):
    comment = get_comment(comment_id)
    if not comment:
        raise HTTPException(status_code=404, detail="Comment not found")
    post = require_post(comment["post_id"])
    if post["author"]["id"] != user["id"]:
        raise HTTPException(status_code=403, detail="Only the post author can mark a solution")
    return mark_solution(comment_id)


@router.post("/posts/{post_id}/reactions", summary="Like or dislike a post")
def react_to_post(post_id: str, request: ReactionRequest, user: dict = Depends(get_current_user)):
    require_post(post_id)
    return toggle_reaction(user_id=user["id"], target_type="post", target_id=post_id, reaction=request.reaction)


@router.post("/comments/{comment_id}/reactions", summary="Like or dislike a comment")
def react_to_comment(comment_id: str, request: ReactionRequest, user: dict = Depends(get_current_user)):
    if not get_comment(comment_id):
        raise HTTPException(status_code=404, detail="Comment not found")
    return toggle_reaction(user_id=user["id"], target_type="comment", target_id=comment_id, reaction=request.reaction)


@router.get("/users/{user_id}/reputation", summary="Author reputation")
def reputation(user_id: str):
    return user_reputation(user_id)


@router.get("/challenges", summary="List challenges")
def get_challenges(
    include_expired: bool = Query(False),
    user: Optional[dict] = Depends(get_optional_user),
):
    items = list_challenges(user_id=user["id"] if user else None, active_only=not include_expired)
    return {"count": len(items), "challenges": items}


@router.post("/challenges", summary="Create a challenge")
def new_challenge(request: ChallengeCreateRequest, user: dict = Depends(_require_moderator)):
    challenge = create_challenge(created_by=user["id"], **request.model_dump())
    logger.info("user %s created challenge %s", user["id"], challenge["id"])
    return challenge


@router.post("/challenges/{challenge_id}/join", summary="Join a challenge")
def join(challenge_id: str, user: dict = Depends(get_current_user)):
    challenge = join_challenge(challenge_id, user["id"])
    reward = award(
        user["id"], "challenge_joined", subject=challenge_id, points=CHALLENGE_JOINED_POINTS, description=challenge["title"]
    )
    return {"challenge": challenge, "reward": reward}
