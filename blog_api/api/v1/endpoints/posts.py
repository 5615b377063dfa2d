import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from blog_api.config.database import get_db
from blog_api.core.auth import get_current_user
from blog_api.core.permissions import EDITOR_ROLES, can_manage_post, require_roles
from blog_api.models.category import BlogCategory
from blog_api.models.post import Post
from blog_api.models.user import User
from blog_api.schemas.post import PostCreate, PostUpdate, PostsByAuthorRequest

logger = logging.getLogger(__name__)

router = APIRouter()


def _validate_category(db: Session, category):
    if category and not BlogCategory.get_by_name(db, category):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid blog category selected",
        )


def _get_post_or_404(db: Session, post_id: str) -> Post:
    post = db.query(Post).filter(Post.id == post_id).first()
    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Post not found"
        )
    return post


@router.post("", status_code=status.HTTP_201_CREATED)
def create_post(
    post_data: PostCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_roles(
            *EDITOR_ROLES,
            detail="Unauthorized: Only admins and superadmins can create posts",
        )
    ),
):
    _validate_category(db, post_data.category)

    if db.query(Post).filter(Post.id == post_data.id).first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Post with this id already exists",
        )

    post = Post(
        id=post_data.id,
        title=post_data.title,
        sub_heading=post_data.sub_heading or "",
        content=post_data.content,
        author=post_data.author,
        date=post_data.date,
        category=post_data.category,
    )
    db.add(post)
    db.commit()

    logger.info("Post created: id=%s title=%r author=%s", post.id, post.title, post.author)
    return {"message": "Post created successfully", "id": post.id}


@router.get("")
def get_posts(db: Session = Depends(get_db)):
    posts = Post.get_all_ordered(db)
    logger.debug("Fetched %d posts", len(posts))
    return [post.to_dict() for post in posts]


@router.post("/by-author")
def get_posts_by_author(
    request_data: PostsByAuthorRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Editors may list anyone's posts; other users only their own."""
    if current_user.role not in EDITOR_ROLES and current_user.email != request_data.author:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Unauthorized: You can only view your own blogs or are not an admin.",
        )

    posts = Post.get_by_author(db, request_data.author)
    logger.info("Fetched %d posts by author: %s", len(posts), request_data.author)
    return [post.to_dict() for post in posts]


@router.get("/{post_id}")
def get_post(post_id: str, db: Session = Depends(get_db)):
    return _get_post_or_404(db, post_id).to_dict()


@router.put("/{post_id}")
def update_post(
    post_id: str,
    post_data: PostUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_roles(
            *EDITOR_ROLES,
            detail="Unauthorized: Only admins and superadmins can edit posts",
        )
    ),
):
    post = _get_post_or_404(db, post_id)

    if not can_manage_post(db, current_user, post):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Unauthorized: You don't have access to edit this blog",
        )

    if post_data.category != post.category:
        _validate_category(db, post_data.category)

    post.title = post_data.title
    post.sub_heading = post_data.sub_heading or ""
    post.content = post_data.content
    post.author = post_data.author
    post.date = post_data.date
    post.category = post_data.category
    db.commit()

    logger.info("Post %s updated by %s (%s)", post_id, current_user.email, current_user.role)
    return {"message": "Post updated successfully"}


@router.delete("/{post_id}")
def delete_post(
    post_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_roles(
            *EDITOR_ROLES,
            detail="Unauthorized: Only admins and superadmins can delete posts",
        )
    ),
):
    post = _get_post_or_404(db, post_id)

    if not can_manage_post(db, current_user, post):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Unauthorized: You don't have access to delete this blog",
        )

    # Access grants for the post are removed by the delete cascade
    db.delete(post)
    db.commit()

    logger.info("Post %s deleted by %s (%s)", post_id, current_user.email, current_user.role)
    return {"message": "Post deleted successfully"}
