from fastapi import APIRouter

from blog_api.api.v1.endpoints import (
    auth,
    users,
    posts,
    categories,
    blog_access,
    stats,
)

api_router = APIRouter()

# auth goes first so /users/me is not captured by /users/{uid}
api_router.include_router(auth.router, prefix="/users", tags=["Authentication"])

api_router.include_router(users.router, prefix="/users", tags=["Users"])

api_router.include_router(posts.router, prefix="/posts", tags=["Posts"])

api_router.include_router(
    categories.router, prefix="/blog-categories", tags=["Blog Categories"]
)

api_router.include_router(
    blog_access.router, prefix="/blog-access", tags=["Blog Access"]
)

api_router.include_router(stats.router, prefix="/blog-stats", tags=["Blog Stats"])
