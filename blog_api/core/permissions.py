import logging
from typing import List, Optional

from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from blog_api.core.auth import get_current_user
from blog_api.models.blog_access import BlogAccess
from blog_api.models.post import Post
from blog_api.models.user import User, UserRole

logger = logging.getLogger(__name__)

VALID_ROLES = [role.value for role in UserRole]
EDITOR_ROLES = [UserRole.ADMIN.value, UserRole.SUPERADMIN.value]


def validate_role(role: str) -> bool:
    return role in VALID_ROLES


def require_roles(*role_names: str, detail: Optional[str] = None):
    """
    FastAPI dependency that only lets users holding one of ``role_names`` through.

    Usage:
        @router.post("/blog-categories")
        def create_category(
            current_user: User = Depends(require_roles("superadmin")),
        ):
            pass
    """

    def check_role(current_user: User = Depends(get_current_user)):
        if current_user.role not in role_names:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=detail
                or f"One of these roles required: {', '.join(role_names)}",
            )
        return current_user

    return check_role


def require_superadmin(detail: Optional[str] = None):
    return require_roles(UserRole.SUPERADMIN.value, detail=detail)


def require_self_or_superadmin(current_user: User, uid: str, detail: str):
    if not current_user.is_superadmin and current_user.uid != uid:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


# Helper functions
def check_blog_access(db: Session, user_uid: str, post_id: str) -> bool:
    """
    Check whether a user may manage a specific post.

    Holders of the global ``can_manage_all_blogs`` flag may manage every post;
    everyone else needs an explicit grant in ``blog_access``.
    """
    user = User.get_by_uid(db, user_uid)
    if not user:
        return False

    if user.can_manage_all_blogs:
        return True

    return BlogAccess.get_for(db, user_uid, post_id) is not None


def can_manage_post(db: Session, user: User, post: Post) -> bool:
    """
    Superadmins manage every post. Admins manage posts they were granted
    (globally or specifically) and posts they authored.
    """
    if user.is_superadmin:
        return True

    if not user.is_admin:
        return False

    if check_blog_access(db, user.uid, post.id):
        return True

    return post.author == user.email


def get_accessible_posts(db: Session, user: User) -> List[Post]:
    if user.can_manage_all_blogs:
        return Post.get_all_ordered(db)

    return (
        db.query(Post)
        .join(BlogAccess, BlogAccess.post_id == Post.id)
        .filter(BlogAccess.user_uid == user.uid)
        .order_by(Post.date.desc())
        .all()
    )
