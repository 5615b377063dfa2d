from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from blog_api.config.database import get_db
from blog_api.models.post import Post
from blog_api.models.user import User, UserRole

router = APIRouter()


@router.get("")
def get_blog_stats(db: Session = Depends(get_db)):
    """
    Dashboard counters: total posts, total admins, posts per category and
    posts per admin author.
    """
    total_blogs = db.query(Post).count()
    total_admins = db.query(User).filter(User.role == UserRole.ADMIN.value).count()

    categories = (
        db.query(Post.category, func.count(Post.id))
        .group_by(Post.category)
        .order_by(Post.category)
        .all()
    )

    admin_emails = select(User.email).where(User.role == UserRole.ADMIN.value)
    admins = (
        db.query(Post.author, func.count(Post.id))
        .filter(Post.author.in_(admin_emails))
        .group_by(Post.author)
        .order_by(Post.author)
        .all()
    )

    return {
        "totalBlogs": total_blogs,
        "totalAdmins": total_admins,
        "categories": [
            {"category": category, "count": count} for category, count in categories
        ],
        "admins": [{"author": author, "count": count} for author, count in admins],
    }
