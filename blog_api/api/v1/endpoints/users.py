import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from blog_api.config.database import get_db
from blog_api.core.auth import get_current_user, get_password_hash
from blog_api.core.permissions import (
    EDITOR_ROLES,
    require_roles,
    require_superadmin,
    require_self_or_superadmin,
    validate_role,
)
from blog_api.models.blog_access import BlogAccess
from blog_api.models.user import User, UserRole
from blog_api.schemas.user import (
    RoleUpdate,
    StatusUpdate,
    ManageAllBlogsUpdate,
    DisplayNameUpdate,
    EmailUpdate,
    PasswordUpdate,
    PhotoURLUpdate,
    MessageResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_user_or_404(db: Session, uid: str) -> User:
    user = User.get_by_uid(db, uid)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="User not found"
        )
    return user


@router.get("")
def get_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_roles(
            *EDITOR_ROLES,
            detail="Unauthorized: Only admins and superadmins can list all users",
        )
    ),
):
    users = db.query(User).order_by(User.created_at.desc()).all()
    logger.info("Fetched %d users", len(users))
    return [user.to_dict() for user in users]


@router.get("/admins")
def get_admins(
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_superadmin(detail="Unauthorized: Only superadmins can list admins")
    ),
):
    """Active admin accounts, e.g. to pick a grantee for blog access."""
    admins = (
        db.query(User)
        .filter(User.role == UserRole.ADMIN.value, User.is_disabled.is_(False))
        .order_by(User.email.asc())
        .all()
    )
    return [
        {
            "uid": admin.uid,
            "email": admin.email,
            "displayName": admin.display_name,
            "photoURL": admin.photo_url,
        }
        for admin in admins
    ]


@router.get("/{uid}")
def get_user(
    uid: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    require_self_or_superadmin(
        current_user,
        uid,
        "Unauthorized: Only superadmins can view any user, "
        "and users can view their own details.",
    )
    return _get_user_or_404(db, uid).to_dict()


@router.put("/{uid}/role", response_model=MessageResponse)
def update_user_role(
    uid: str,
    role_data: RoleUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_superadmin(
            detail="Unauthorized: Only superadmins can change user roles"
        )
    ),
):
    if not validate_role(role_data.role):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Valid role is required (user, admin, superadmin)",
        )

    user = _get_user_or_404(db, uid)
    user.role = role_data.role
    db.commit()

    logger.info("User role updated: %s -> %s", uid, role_data.role)
    return MessageResponse(message="User role updated successfully")


@router.put("/{uid}/status", response_model=MessageResponse)
def update_user_status(
    uid: str,
    status_data: StatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_superadmin(
            detail="Unauthorized: Only superadmins can change user status"
        )
    ),
):
    user = _get_user_or_404(db, uid)
    user.is_disabled = status_data.is_disabled
    db.commit()

    state = "disabled" if status_data.is_disabled else "enabled"
    logger.info("User %s: %s", state, uid)
    return MessageResponse(message=f"User {state} successfully")


@router.put("/{uid}/manage-all-blogs", response_model=MessageResponse)
def update_manage_all_blogs(
    uid: str,
    access_data: ManageAllBlogsUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_superadmin(
            detail="Unauthorized: Only superadmins can change blog management access"
        )
    ),
):
    user = _get_user_or_404(db, uid)
    user.can_manage_all_blogs = access_data.can_manage_all_blogs
    db.commit()

    state = "granted" if access_data.can_manage_all_blogs else "revoked"
    logger.info("User %s blog management access %s", uid, state)
    return MessageResponse(message=f"User blog management access {state} successfully")


@router.put("/{uid}/name", response_model=MessageResponse)
def update_display_name(
    uid: str,
    name_data: DisplayNameUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    require_self_or_superadmin(
        current_user,
        uid,
        "Unauthorized: Only superadmins or the user themselves can update name",
    )
    user = _get_user_or_404(db, uid)
    user.display_name = name_data.display_name
    db.commit()

    logger.info("User display name updated: %s", uid)
    return MessageResponse(message="Display name updated successfully")


@router.put("/{uid}/email", response_model=MessageResponse)
def update_email(
    uid: str,
    email_data: EmailUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    require_self_or_superadmin(
        current_user,
        uid,
        "Unauthorized: Only superadmins or the user themselves can update email",
    )
    user = _get_user_or_404(db, uid)

    existing_user = User.get_by_email(db, email_data.email)
    if existing_user and existing_user.uid != uid:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User with this email already exists",
        )

    user.email = email_data.email
    db.commit()

    logger.info("User email updated: %s", uid)
    return MessageResponse(message="Email updated successfully")


@router.put("/{uid}/password", response_model=MessageResponse)
def update_password(
    uid: str,
    password_data: PasswordUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    require_self_or_superadmin(
        current_user,
        uid,
        "Unauthorized: Only superadmins or the user themselves can update password",
    )
    user = _get_user_or_404(db, uid)
    user.password = get_password_hash(password_data.password)
    db.commit()

    logger.info("User password updated: %s", uid)
    return MessageResponse(message="Password updated successfully")


@router.put("/{uid}/photoURL", response_model=MessageResponse)
def update_photo_url(
    uid: str,
    photo_data: PhotoURLUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    require_self_or_superadmin(
        current_user,
        uid,
        "Unauthorized: Only superadmins or the user themselves can update "
        "profile picture",
    )
    user = _get_user_or_404(db, uid)
    user.photo_url = photo_data.photo_url
    db.commit()

    logger.info("User photoURL updated: %s", uid)
    return MessageResponse(message="Profile picture updated successfully")


@router.delete("/{uid}", response_model=MessageResponse)
def delete_user(
    uid: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_superadmin(detail="Unauthorized: Only superadmins can delete users")
    ),
):
    if uid == current_user.uid:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Superadmins cannot delete their own account",
        )

    user = _get_user_or_404(db, uid)

    # Grants this user issued stay, but no longer point at a missing account
    db.query(BlogAccess).filter(BlogAccess.granted_by == uid).update(
        {"granted_by": None}, synchronize_session=False
    )
    # Grants held by the user are removed by the delete cascade
    db.delete(user)
    db.commit()

    logger.info("User deleted: %s", uid)
    return MessageResponse(message="User deleted successfully")
