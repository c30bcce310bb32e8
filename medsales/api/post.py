from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from medsales.core.database import get_db
from medsales.core.exceptions import ForbiddenError, NotFoundError
from medsales.core.logger import logger
from medsales.core.middleware import can_edit, get_optional_user, user_is_editor
from medsales.models.post import Post, PostStatus
from medsales.models.user import User
from medsales.schemas import (
    ApiResponse,
    MessageResponse,
    PageRequest,
    PaginatedResponse,
    page_request,
)
from medsales.schemas.post import PostCreate, PostResponse, PostUpdate

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("")
async def get_all_posts(
    page: PageRequest = Depends(page_request),
    q: Optional[str] = None,
    status: Optional[PostStatus] = None,
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(get_optional_user),
) -> ApiResponse[PaginatedResponse[PostResponse]]:
    """List posts; anonymous callers only ever see published ones"""
    if status not in (None, PostStatus.published) and not can_edit(user):
        raise ForbiddenError("Only editors can list draft posts")

    where = Post.build_filter({"status": status}, search=q)
    posts, total = Post.paginate(db, page, where=where)
    items = [PostResponse.model_validate(post) for post in posts]
    return ApiResponse(data=PaginatedResponse.build(items, total, page))


@router.get("/{post_key}")
async def get_post(
    post_key: str,
    db: Session = Depends(get_db),
) -> ApiResponse[PostResponse]:
    """Get a published post by numeric ID or slug"""
    post = Post.lookup(db, post_key, status=PostStatus.published)
    if not post:
        raise NotFoundError("Post not found")
    return ApiResponse(data=PostResponse.model_validate(post))


@router.post("", status_code=201)
async def create_post(
    post: PostCreate,
    db: Session = Depends(get_db),
    _: User = Depends(user_is_editor),
) -> ApiResponse[PostResponse]:
    """Create a new post"""
    new_post = Post(**post.model_dump())
    new_post.assign_slug(db, post.title)
    new_post.save(db)
    logger.info(f"Created post {new_post.id} ({new_post.slug})")
    return ApiResponse(data=PostResponse.model_validate(new_post))


@router.put("/{post_id}")
async def update_post(
    post_id: int,
    post: PostUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(user_is_editor),
) -> ApiResponse[PostResponse]:
    """Update a post; a new title re-derives the slug"""
    existing_post = Post.get(db, id=post_id)
    if not existing_post:
        raise NotFoundError("Post not found")

    update_data = post.model_dump(exclude_unset=True, exclude_none=True)
    title = update_data.get("title")
    if title is not None and title != existing_post.title:
        existing_post.assign_slug(db, title)
    for key, value in update_data.items():
        setattr(existing_post, key, value)
    existing_post.save(db)
    logger.info(f"Updated post {existing_post.id}")
    return ApiResponse(data=PostResponse.model_validate(existing_post))


@router.delete("/{post_id}")
async def delete_post(
    post_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(user_is_editor),
) -> ApiResponse[MessageResponse]:
    """Delete a post"""
    post = Post.get(db, id=post_id)
    if not post:
        raise NotFoundError("Post not found")

    post.delete(db)
    logger.info(f"Deleted post {post_id}")
    return ApiResponse(data=MessageResponse(message="Post deleted successfully"))
