from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from blog_api.config.database import Base


class BlogAccess(Base):
    """Grant letting an admin manage one specific post."""

    __tablename__ = "blog_access"
    __table_args__ = (
        UniqueConstraint("user_uid", "post_id", name="uq_blog_access_user_post"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_uid = Column(String(64), ForeignKey("users.uid"), nullable=False, index=True)
    post_id = Column(String(128), ForeignKey("posts.id"), nullable=False, index=True)
    granted_by = Column(String(64), ForeignKey("users.uid"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", foreign_keys=[user_uid], back_populates="blog_access")
    granter = relationship("User", foreign_keys=[granted_by])
    post = relationship("Post", back_populates="access_grants")

    def __repr__(self):
        return f"<BlogAccess(user_uid='{self.user_uid}', post_id='{self.post_id}')>"

    def to_dict(self):
        return {
            "id": self.id,
            "userUid": self.user_uid,
            "postId": self.post_id,
            "grantedBy": self.granted_by,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def get_for(cls, db_session, user_uid: str, post_id: str):
        return (
            db_session.query(cls)
            .filter(cls.user_uid == user_uid, cls.post_id == post_id)
            .first()
        )
