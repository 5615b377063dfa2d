from datetime import datetime

from sqlalchemy import Column, String, DateTime, Text
from sqlalchemy.orm import relationship

from blog_api.config.database import Base


class Post(Base):
    __tablename__ = "posts"

    id = Column(String(128), primary_key=True)
    title = Column(String(255), nullable=False)
    sub_heading = Column(String(512), nullable=False, default="")
    content = Column(Text, nullable=False)
    # Email of the authoring account
    author = Column(String(255), nullable=False, index=True)
    # Publication date as sent by the editor; ISO strings sort chronologically
    date = Column(String(64), nullable=False)
    category = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    access_grants = relationship(
        "BlogAccess", back_populates="post", cascade="all, delete"
    )

    def __repr__(self):
        return f"<Post(id='{self.id}', title='{self.title}')>"

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "subHeading": self.sub_heading,
            "content": self.content,
            "author": self.author,
            "date": self.date,
            "category": self.category,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def get_all_ordered(cls, db_session):
        return db_session.query(cls).order_by(cls.date.desc()).all()

    @classmethod
    def get_by_author(cls, db_session, author: str):
        return (
            db_session.query(cls)
            .filter(cls.author == author)
            .order_by(cls.date.desc())
            .all()
        )
