import enum
import uuid
from datetime import datetime

from sqlalchemy import Column, String, DateTime, Boolean, func
from sqlalchemy.orm import relationship

from blog_api.config.database import Base


class UserRole(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"


def generate_uid() -> str:
    return uuid.uuid4().hex


class User(Base):
    __tablename__ = "users"

    uid = Column(String(64), primary_key=True, default=generate_uid)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    display_name = Column(String(255), nullable=False, default="")
    photo_url = Column(String(1024), nullable=False, default="")
    role = Column(String(20), nullable=False, default=UserRole.USER.value)
    is_disabled = Column(Boolean, nullable=False, default=False)
    can_manage_all_blogs = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    # Grants held by this user; removed together with the user
    blog_access = relationship(
        "BlogAccess",
        foreign_keys="BlogAccess.user_uid",
        back_populates="user",
        cascade="all, delete",
    )

    def __repr__(self):
        return f"<User(uid='{self.uid}', email='{self.email}', role='{self.role}')>"

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    @property
    def is_superadmin(self) -> bool:
        return self.role == UserRole.SUPERADMIN.value

    def to_dict(self):
        return {
            "uid": self.uid,
            "email": self.email,
            "displayName": self.display_name,
            "photoURL": self.photo_url,
            "role": self.role,
            "isDisabled": self.is_disabled,
            "canManageAllBlogs": self.can_manage_all_blogs,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def get_by_uid(cls, db_session, uid: str):
        return db_session.query(cls).filter(cls.uid == uid).first()

    @classmethod
    def get_by_email(cls, db_session, email: str):
        return (
            db_session.query(cls)
            .filter(func.lower(cls.email) == func.lower(email))
            .first()
        )
