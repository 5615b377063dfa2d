import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, aliased

from blog_api.config.database import get_db
from blog_api.core.auth import get_current_user
from blog_api.core.permissions import (
    EDITOR_ROLES,
    check_blog_access,
    get_accessible_posts,
    require_roles,
    require_self_or_superadmin,
    require_superadmin,
)
from blog_api.models.blog_access import BlogAccess
from blog_api.models.post import Post
from blog_api.models.user import User
from blog_api.schemas.blog_access import BlogAccessRequest, BlogAccessCheck

logger = logging.getLogger(__name__)

router = APIRouter()


def _grant(db: Session, user_uid: str, post_id: str, granted_by: str) -> BlogAccess:
    """Create the grant unless it already exists; re-granting is a no-op."""
    access = BlogAccess.get_for(db, user_uid, post_id)
    if access:
        return access

    access = BlogAccess(user_uid=user_uid, post_id=post_id, granted_by=granted_by)
    db.add(access)
    db.commit()
    db.refresh(access)
    return access


def _revoke(db: Session, user_uid: str, post_id: str) -> bool:
    access = BlogAccess.get_for(db, user_uid, post_id)
    if not access:
        return False

    db.delete(access)
    db.commit()
    return True


def _require_user_and_post(db: Session, user_uid: str, post_id: str) -> User:
    user = User.get_by_uid(db, user_uid)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="User not found"
        )

    if not db.query(Post).filter(Post.id == post_id).first():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Post not found"
        )

    return user


@router.post("/grant", status_code=status.HTTP_201_CREATED)
def grant_blog_access(
    access_data: BlogAccessRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_superadmin(
            detail="Unauthorized: Only superadmins can grant blog access"
        )
    ),
):
    """Grant an admin access to one post."""
    user = _require_user_and_post(db, access_data.user_uid, access_data.post_id)
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Access can only be granted to admin users",
        )

    _grant(db, access_data.user_uid, access_data.post_id, current_user.uid)

    logger.info(
        "Blog access granted: user %s -> post %s",
        access_data.user_uid,
        access_data.post_id,
    )
    return {"message": "Blog access granted successfully"}


@router.post("/grant-specific", status_code=status.HTTP_201_CREATED)
def grant_specific_blog_access(
    access_data: BlogAccessRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_superadmin(
            detail="Unauthorized: Only superadmins can grant blog-specific access"
        )
    ),
):
    _require_user_and_post(db, access_data.user_uid, access_data.post_id)
    _grant(db, access_data.user_uid, access_data.post_id, current_user.uid)

    logger.info(
        "Specific blog access granted: user %s -> post %s",
        access_data.user_uid,
        access_data.post_id,
    )
    return {"message": "Specific blog access granted successfully"}


@router.delete("/revoke")
def revoke_blog_access(
    access_data: BlogAccessRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_superadmin(
            detail="Unauthorized: Only superadmins can revoke blog access"
        )
    ),
):
    if not _revoke(db, access_data.user_uid, access_data.post_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Access record not found"
        )

    logger.info(
        "Blog access revoked: user %s -> post %s",
        access_data.user_uid,
        access_data.post_id,
    )
    return {"message": "Blog access revoked successfully"}


@router.delete("/revoke-specific")
def revoke_specific_blog_access(
    access_data: BlogAccessRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_superadmin(
            detail="Unauthorized: Only superadmins can revoke blog-specific access"
        )
    ),
):
    if not _revoke(db, access_data.user_uid, access_data.post_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Specific access record not found",
        )

    logger.info(
        "Specific blog access revoked: user %s -> post %s",
        access_data.user_uid,
        access_data.post_id,
    )
    return {"message": "Specific blog access revoked successfully"}


@router.get("")
def get_all_blog_access(
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_superadmin(
            detail="Unauthorized: Only superadmins can view all access records"
        )
    ),
):
    """Every grant, joined with grantee email, post title and granter email."""
    grantee = aliased(User)
    granter = aliased(User)

    rows = (
        db.query(BlogAccess, grantee.email, Post.title, granter.email)
        .join(grantee, BlogAccess.user_uid == grantee.uid)
        .join(Post, BlogAccess.post_id == Post.id)
        .outerjoin(granter, BlogAccess.granted_by == granter.uid)
        .order_by(BlogAccess.created_at.desc(), BlogAccess.id.desc())
        .all()
    )

    records = []
    for access, user_email, post_title, granted_by_email in rows:
        record = access.to_dict()
        record.update(
            {
                "userEmail": user_email,
                "postTitle": post_title,
                "grantedByEmail": granted_by_email,
            }
        )
        records.append(record)

    logger.info("Fetched %d blog access records", len(records))
    return records


@router.get("/post/{post_id}")
def get_post_blog_access(
    post_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_superadmin(
            detail="Unauthorized: Only superadmins can view blog-specific access"
        )
    ),
):
    users = (
        db.query(User)
        .join(BlogAccess, BlogAccess.user_uid == User.uid)
        .filter(BlogAccess.post_id == post_id)
        .order_by(User.email.asc())
        .all()
    )
    return [
        {
            "userUid": user.uid,
            "userEmail": user.email,
            "userDisplayName": user.display_name,
        }
        for user in users
    ]


@router.get("/admin/{uid}")
def get_admin_accessible_posts(
    uid: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    require_self_or_superadmin(
        current_user,
        uid,
        "Unauthorized: Cannot view other admin's blog access",
    )

    user = User.get_by_uid(db, uid)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="User not found"
        )

    posts = get_accessible_posts(db, user)
    logger.info("Fetched %d accessible posts for admin %s", len(posts), uid)
    return [post.to_dict() for post in posts]


@router.get("/admin/{admin_uid}/{post_id}", response_model=BlogAccessCheck)
def check_admin_blog_access(
    admin_uid: str,
    post_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_roles(
            *EDITOR_ROLES,
            detail="Unauthorized: Only admins and superadmins can check blog access",
        )
    ),
):
    if current_user.is_admin and current_user.uid != admin_uid:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Unauthorized: Admins can only check their own blog access",
        )

    has_access = check_blog_access(db, admin_uid, post_id)
    logger.debug(
        "Blog access check for admin %s on post %s: %s", admin_uid, post_id, has_access
    )
    return BlogAccessCheck(hasAccess=has_access)
