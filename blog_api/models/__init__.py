from blog_api.config.database import Base

# Import all models to ensure they're registered with SQLAlchemy
from .user import User, UserRole
from .category import BlogCategory
from .post import Post
from .blog_access import BlogAccess
