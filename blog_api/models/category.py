from sqlalchemy import Column, Integer, String

from blog_api.config.database import Base


class BlogCategory(Base):
    __tablename__ = "blog_categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)

    def __repr__(self):
        return f"<BlogCategory(id={self.id}, name='{self.name}')>"

    def to_dict(self):
        return {"id": self.id, "name": self.name}

    @classmethod
    def get_by_name(cls, db_session, name: str):
        return db_session.query(cls).filter(cls.name == name).first()
