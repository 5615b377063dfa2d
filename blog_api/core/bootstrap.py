import logging

from sqlalchemy.orm import Session

from blog_api.config.settings import (
    DEFAULT_SUPERADMIN_EMAIL,
    DEFAULT_SUPERADMIN_PASSWORD,
)
from blog_api.core.auth import get_password_hash
from blog_api.models.user import User, UserRole

logger = logging.getLogger(__name__)


def seed_default_superadmin(db: Session):
    """
    Make sure at least one superadmin exists so a fresh install can be
    administered. Returns the created user, or None if one already existed.
    """
    existing = (
        db.query(User).filter(User.role == UserRole.SUPERADMIN.value).first()
    )
    if existing:
        return None

    user = User.get_by_email(db, DEFAULT_SUPERADMIN_EMAIL)
    if user:
        # Email taken by a lower-privileged account: promote it
        user.role = UserRole.SUPERADMIN.value
    else:
        user = User(
            email=DEFAULT_SUPERADMIN_EMAIL,
            password=get_password_hash(DEFAULT_SUPERADMIN_PASSWORD),
            role=UserRole.SUPERADMIN.value,
        )
        db.add(user)

    db.commit()
    db.refresh(user)

    logger.warning(
        "Default superadmin created: %s (change its password)", user.email
    )
    return user
