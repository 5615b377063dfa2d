import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blog_api.api.v1.router import api_router
from blog_api.config import settings
from blog_api.config.database import SessionLocal, init_db
from blog_api.core.bootstrap import seed_default_superadmin

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    if settings.SEED_DEFAULT_SUPERADMIN:
        db = SessionLocal()
        try:
            seed_default_superadmin(db)
        finally:
            db.close()
    logger.info("Blog API %s started", settings.VERSION)
    yield
    logger.info("Blog API shutting down")


app = FastAPI(title="Blog API", version=settings.VERSION, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s -> %d (%.1f ms)",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


@app.get("/")
def root():
    return {
        "message": "Blog Backend API is running!",
        "version": settings.VERSION,
        "endpoints": {
            "posts": f"{settings.API_V1_PREFIX}/posts",
            "users": f"{settings.API_V1_PREFIX}/users",
            "auth": f"{settings.API_V1_PREFIX}/users/login, "
            f"{settings.API_V1_PREFIX}/users/signup",
            "blogAccess": f"{settings.API_V1_PREFIX}/blog-access",
            "blogCategories": f"{settings.API_V1_PREFIX}/blog-categories",
            "blogStats": f"{settings.API_V1_PREFIX}/blog-stats",
        },
    }


app.include_router(api_router, prefix=settings.API_V1_PREFIX)
