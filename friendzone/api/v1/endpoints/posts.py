"""Feed, post, like and comment endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from friendzone.api.deps import get_caller_db, get_current_active_user
from friendzone.core.exceptions import NotFoundException
from friendzone.crud import crud_comment, crud_like, crud_post
from friendzone.models.comment import Comment
from friendzone.models.post import Post
from friendzone.models.user import User
from friendzone.schemas.post import (
    CommentCreate,
    CommentListResponse,
    CommentResponse,
    LikeResponse,
    PostCreate,
    PostListResponse,
    PostResponse,
    PostUpdate,
)
from friendzone.schemas.profile import ProfileResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/posts",
    tags=["Posts"],
)


def _enrich_post_response(
    db: Session,
    post: Post,
    current_user_id: str,
) -> PostResponse:
    """Attach author profile, counts and the caller's like status."""
    liker_ids = crud_like.liker_ids(db, post_id=post.id)
    return PostResponse(
        id=post.id,
        user_id=post.user_id,
        content=post.content,
        image_url=post.image_url,
        author=ProfileResponse.model_validate(post.author) if post.author else None,
        like_count=len(liker_ids),
        comment_count=crud_comment.get_total_count(db, post_id=post.id),
        is_liked=current_user_id in liker_ids,
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


def _comment_response(comment: Comment) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        post_id=comment.post_id,
        user_id=comment.user_id,
        content=comment.content,
        author=ProfileResponse.model_validate(comment.author) if comment.author else None,
        created_at=comment.created_at,
    )


def _like_response(db: Session, post_id: str, user_id: str) -> LikeResponse:
    liker_ids = crud_like.liker_ids(db, post_id=post_id)
    return LikeResponse(
        post_id=post_id,
        is_liked=user_id in liker_ids,
        like_count=len(liker_ids),
    )


def _get_post_or_404(db: Session, post_id: str) -> Post:
    post = crud_post.get(db, post_id)
    if not post:
        raise NotFoundException("Post not found")
    return post


@router.get(
    "",
    response_model=PostListResponse,
    status_code=status.HTTP_200_OK,
    summary="Feed",
    description="""
    All posts, most recent first. Pass `author_id` to list one profile's posts.
    """,
)
def list_posts(
    skip: int = Query(0, ge=0, description="Number of posts to skip"),
    limit: int = Query(50, ge=1, le=100, description="Maximum number of posts to return"),
    author_id: Optional[str] = Query(None, description="Only posts by this profile"),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_caller_db),
) -> PostListResponse:
    if author_id:
        posts = crud_post.get_by_author(db, user_id=author_id, skip=skip, limit=limit)
        total = crud_post.count(db, filters={"user_id": author_id})
    else:
        posts = crud_post.feed(db, skip=skip, limit=limit)
        total = crud_post.count(db)

    return PostListResponse(
        posts=[_enrich_post_response(db, post, current_user.id) for post in posts],
        total=total,
        has_more=(skip + len(posts) < total),
    )


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create new post",
)
def create_post(
    post_in: PostCreate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_caller_db),
) -> PostResponse:
    post = crud_post.create(
        db,
        obj_in={
            "user_id": current_user.id,
            "content": post_in.content,
            "image_url": post_in.image_url,
        },
    )
    logger.info(f"Post created: id={post.id}, user_id={current_user.id}")
    return _enrich_post_response(db, post, current_user.id)


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    status_code=status.HTTP_200_OK,
    summary="Get post",
)
def get_post(
    post_id: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_caller_db),
) -> PostResponse:
    post = _get_post_or_404(db, post_id)
    return _enrich_post_response(db, post, current_user.id)


@router.put(
    "/{post_id}",
    response_model=PostResponse,
    status_code=status.HTTP_200_OK,
    summary="Update post",
    description="""
    Update a post. The store only lets the author do this.
    """,
)
def update_post(
    post_id: str,
    post_update: PostUpdate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_caller_db),
) -> PostResponse:
    post = _get_post_or_404(db, post_id)
    updated_post = crud_post.update(db, db_obj=post, obj_in=post_update)
    return _enrich_post_response(db, updated_post, current_user.id)


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete post",
    description="""
    Delete a post with its comments and likes. The store only lets the author do this.
    """,
)
def delete_post(
    post_id: str,
    db: Session = Depends(get_caller_db),
) -> dict:
    deleted_post = crud_post.delete(db, id=post_id)
    if not deleted_post:
        raise NotFoundException("Post not found")
    logger.info(f"Post deleted: id={post_id}")
    return {"message": "Post deleted."}


@router.post(
    "/{post_id}/like",
    response_model=LikeResponse,
    status_code=status.HTTP_200_OK,
    summary="Like post",
)
def like_post(
    post_id: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_caller_db),
) -> LikeResponse:
    """Like a post. Liking twice fails on the (post, user) unique constraint."""
    _get_post_or_404(db, post_id)
    crud_like.create(db, obj_in={"post_id": post_id, "user_id": current_user.id})
    return _like_response(db, post_id, current_user.id)


@router.delete(
    "/{post_id}/like",
    response_model=LikeResponse,
    status_code=status.HTTP_200_OK,
    summary="Unlike post",
)
def unlike_post(
    post_id: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_caller_db),
) -> LikeResponse:
    _get_post_or_404(db, post_id)
    crud_like.delete_where(db, filters={"post_id": post_id, "user_id": current_user.id})
    return _like_response(db, post_id, current_user.id)


@router.post(
    "/{post_id}/like/toggle",
    response_model=LikeResponse,
    status_code=status.HTTP_200_OK,
    summary="Toggle like on post",
    description="""
    Like or unlike a post. If already liked, it will unlike. If not liked, it will like.
    """,
)
def toggle_like_post(
    post_id: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_caller_db),
) -> LikeResponse:
    _get_post_or_404(db, post_id)
    existing_like = crud_like.get_like(db, post_id=post_id, user_id=current_user.id)
    if existing_like:
        crud_like.delete(db, id=existing_like.id)
    else:
        crud_like.create(db, obj_in={"post_id": post_id, "user_id": current_user.id})
    return _like_response(db, post_id, current_user.id)


@router.get(
    "/{post_id}/comments",
    response_model=CommentListResponse,
    status_code=status.HTTP_200_OK,
    summary="Get post comments",
    description="""
    Comments of a post, oldest first.
    """,
)
def get_post_comments(
    post_id: str,
    skip: int = Query(0, ge=0, description="Number of comments to skip"),
    limit: int = Query(100, ge=1, le=500, description="Maximum number of comments to return"),
    db: Session = Depends(get_caller_db),
) -> CommentListResponse:
    _get_post_or_404(db, post_id)
    comments = crud_comment.get_by_post(db, post_id=post_id, skip=skip, limit=limit)
    return CommentListResponse(
        comments=[_comment_response(c) for c in comments],
        total=crud_comment.get_total_count(db, post_id=post_id),
    )


@router.post(
    "/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on post",
)
def create_comment(
    post_id: str,
    comment_in: CommentCreate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_caller_db),
) -> CommentResponse:
    _get_post_or_404(db, post_id)
    comment = crud_comment.create(
        db,
        obj_in={
            "post_id": post_id,
            "user_id": current_user.id,
            "content": comment_in.content,
        },
    )
    return _comment_response(comment)


@router.delete(
    "/{post_id}/comments/{comment_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete comment",
    description="""
    Delete a comment. The store only lets the comment author do this.
    """,
)
def delete_comment(
    post_id: str,
    comment_id: str,
    db: Session = Depends(get_caller_db),
) -> dict:
    comment = crud_comment.get(db, comment_id)
    if not comment or comment.post_id != post_id:
        raise NotFoundException("Comment not found")
    crud_comment.delete(db, id=comment_id)
    return {"message": "Comment deleted."}
