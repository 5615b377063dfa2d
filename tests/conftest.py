"""
Test configuration and fixtures
"""

import os
import tempfile

import pytest
from fastapi.testclient import TestClient

# Set testing environment before importing app
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(
    tempfile.gettempdir(), "blog_api_test.db"
)
os.environ["SEED_DEFAULT_SUPERADMIN"] = "false"
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from blog_api.config.database import Base, SessionLocal, engine, get_db
from blog_api.core.auth import get_password_hash, create_user_token
from blog_api.models.blog_access import BlogAccess
from blog_api.models.category import BlogCategory
from blog_api.models.post import Post
from blog_api.models.user import User
from blog_api.main import app


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test"""
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()

    try:
        yield db
    finally:
        db.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """Create test client with test database"""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    # Clean up
    app.dependency_overrides.clear()


# Helper functions for tests
def create_test_user(db_session, email, password="password123", role="user", **extra):
    user = User(
        email=email,
        password=get_password_hash(password),
        role=role,
        **extra,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def auth_headers(user):
    return {"Authorization": f"Bearer {create_user_token(user)}"}


def create_test_post(db_session, post_id, author, title="Test Post", **extra):
    fields = {
        "sub_heading": "A subheading",
        "content": "<p>Some content</p>",
        "date": "2025-01-01",
    }
    fields.update(extra)
    post = Post(id=post_id, title=title, author=author, **fields)
    db_session.add(post)
    db_session.commit()
    db_session.refresh(post)
    return post


def grant_access(db_session, user, post, granted_by=None):
    access = BlogAccess(
        user_uid=user.uid,
        post_id=post.id,
        granted_by=granted_by.uid if granted_by else None,
    )
    db_session.add(access)
    db_session.commit()
    db_session.refresh(access)
    return access


@pytest.fixture
def superadmin(db_session):
    return create_test_user(
        db_session, "root@example.com", password="rootpass123", role="superadmin"
    )


@pytest.fixture
def admin(db_session):
    return create_test_user(
        db_session,
        "admin@example.com",
        password="adminpass123",
        role="admin",
        display_name="Admin One",
    )


@pytest.fixture
def other_admin(db_session):
    return create_test_user(
        db_session,
        "editor@example.com",
        password="editorpass123",
        role="admin",
        display_name="Editor Two",
    )


@pytest.fixture
def regular_user(db_session):
    return create_test_user(db_session, "reader@example.com", password="readerpass123")


@pytest.fixture
def superadmin_headers(superadmin):
    return auth_headers(superadmin)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def user_headers(regular_user):
    return auth_headers(regular_user)


@pytest.fixture
def sample_categories(db_session):
    categories = []
    for name in ["Technology", "Economy", "Health"]:
        category = BlogCategory(name=name)
        db_session.add(category)
        categories.append(category)

    db_session.commit()
    for category in categories:
        db_session.refresh(category)

    return categories


@pytest.fixture
def admin_post(db_session, admin):
    """A post authored by ``admin``."""
    return create_test_post(db_session, "post-admin", admin.email, title="Admin Post")


@pytest.fixture
def other_post(db_session, other_admin):
    """A post authored by ``other_admin``."""
    return create_test_post(
        db_session,
        "post-other",
        other_admin.email,
        title="Other Post",
        date="2025-02-01",
    )


# Test data constants
TEST_POST_DATA = {
    "id": "post-new",
    "title": "New Post",
    "subHeading": "Fresh off the press",
    "content": "<p>Hello world</p>",
    "author": "admin@example.com",
    "date": "2025-03-15",
}
