"""
Tests for post endpoints and their access control
"""

from fastapi import status

from blog_api.models.blog_access import BlogAccess
from blog_api.models.post import Post
from conftest import TEST_POST_DATA, create_test_post, grant_access


def _update_payload(**overrides):
    payload = {
        "title": "Edited",
        "subHeading": "Edited sub",
        "content": "<p>Edited</p>",
        "author": "admin@example.com",
        "date": "2025-04-01",
    }
    payload.update(overrides)
    return payload


class TestCreatePost:
    def test_admin_creates_post(self, client, db_session, admin_headers):
        response = client.post(
            "/api/v1/posts", json=TEST_POST_DATA, headers=admin_headers
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json() == {
            "message": "Post created successfully",
            "id": "post-new",
        }
        post = db_session.query(Post).filter(Post.id == "post-new").first()
        assert post.sub_heading == "Fresh off the press"
        assert post.category is None

    def test_create_with_valid_category(
        self, client, db_session, admin_headers, sample_categories
    ):
        payload = dict(TEST_POST_DATA, category="Economy")

        response = client.post("/api/v1/posts", json=payload, headers=admin_headers)

        assert response.status_code == status.HTTP_201_CREATED
        post = db_session.query(Post).filter(Post.id == "post-new").first()
        assert post.category == "Economy"

    def test_create_with_unknown_category(self, client, admin_headers):
        payload = dict(TEST_POST_DATA, category="Gossip")

        response = client.post("/api/v1/posts", json=payload, headers=admin_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Invalid blog category selected"

    def test_create_without_subheading_defaults_to_empty(
        self, client, db_session, admin_headers
    ):
        payload = {k: v for k, v in TEST_POST_DATA.items() if k != "subHeading"}

        response = client.post("/api/v1/posts", json=payload, headers=admin_headers)

        assert response.status_code == status.HTTP_201_CREATED
        post = db_session.query(Post).filter(Post.id == "post-new").first()
        assert post.sub_heading == ""

    def test_create_missing_fields(self, client, admin_headers):
        response = client.post(
            "/api/v1/posts",
            json={"id": "x", "title": "Only a title"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_create_duplicate_id(self, client, admin_headers, admin_post):
        payload = dict(TEST_POST_DATA, id=admin_post.id)

        response = client.post("/api/v1/posts", json=payload, headers=admin_headers)

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_user_cannot_create_post(self, client, user_headers):
        response = client.post(
            "/api/v1/posts", json=TEST_POST_DATA, headers=user_headers
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_anonymous_cannot_create_post(self, client):
        response = client.post("/api/v1/posts", json=TEST_POST_DATA)

        assert response.status_code in [
            status.HTTP_401_UNAUTHORIZED,
            status.HTTP_403_FORBIDDEN,
        ]


class TestReadPosts:
    def test_list_posts_newest_first(self, client, admin_post, other_post):
        response = client.get("/api/v1/posts")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert [post["id"] for post in data] == ["post-other", "post-admin"]
        assert data[1]["subHeading"] == "A subheading"

    def test_get_post(self, client, admin_post):
        response = client.get(f"/api/v1/posts/{admin_post.id}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["title"] == "Admin Post"
        assert data["author"] == "admin@example.com"

    def test_get_post_not_found(self, client):
        response = client.get("/api/v1/posts/nope")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_posts_by_author_admin(self, client, admin_headers, admin_post, other_post):
        response = client.post(
            "/api/v1/posts/by-author",
            json={"author": "editor@example.com"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert [post["id"] for post in response.json()] == ["post-other"]

    def test_posts_by_author_user_self(
        self, client, db_session, regular_user, user_headers
    ):
        create_test_post(db_session, "mine", regular_user.email)

        response = client.post(
            "/api/v1/posts/by-author",
            json={"author": regular_user.email},
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert len(response.json()) == 1

    def test_posts_by_author_user_other_forbidden(
        self, client, user_headers, admin_post
    ):
        response = client.post(
            "/api/v1/posts/by-author",
            json={"author": "admin@example.com"},
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_posts_by_author_requires_author(self, client, admin_headers):
        response = client.post(
            "/api/v1/posts/by-author", json={"author": ""}, headers=admin_headers
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestUpdatePost:
    def test_author_admin_can_update(self, client, db_session, admin_headers, admin_post):
        response = client.put(
            f"/api/v1/posts/{admin_post.id}",
            json=_update_payload(),
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        db_session.refresh(admin_post)
        assert admin_post.title == "Edited"
        assert admin_post.date == "2025-04-01"

    def test_admin_without_access_forbidden(self, client, admin_headers, other_post):
        response = client.put(
            f"/api/v1/posts/{other_post.id}",
            json=_update_payload(author="editor@example.com"),
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_admin_cannot_claim_authorship_in_payload(
        self, client, admin_headers, other_post
    ):
        # Sending your own email as author does not grant access to someone else's post
        response = client.put(
            f"/api/v1/posts/{other_post.id}",
            json=_update_payload(author="admin@example.com"),
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_admin_with_specific_grant(
        self, client, db_session, admin, admin_headers, other_post
    ):
        grant_access(db_session, admin, other_post)

        response = client.put(
            f"/api/v1/posts/{other_post.id}",
            json=_update_payload(author="editor@example.com"),
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK

    def test_admin_with_global_access(
        self, client, db_session, admin, admin_headers, other_post
    ):
        admin.can_manage_all_blogs = True
        db_session.commit()

        response = client.put(
            f"/api/v1/posts/{other_post.id}",
            json=_update_payload(author="editor@example.com"),
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK

    def test_superadmin_can_update_any(
        self, client, db_session, superadmin_headers, other_post, sample_categories
    ):
        response = client.put(
            f"/api/v1/posts/{other_post.id}",
            json=_update_payload(author="editor@example.com", category="Health"),
            headers=superadmin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        db_session.refresh(other_post)
        assert other_post.category == "Health"

    def test_update_unknown_category(self, client, admin_headers, admin_post):
        response = client.put(
            f"/api/v1/posts/{admin_post.id}",
            json=_update_payload(category="Gossip"),
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_keeps_category_that_was_deleted(
        self,
        client,
        db_session,
        admin,
        admin_headers,
        superadmin_headers,
        sample_categories,
    ):
        post = create_test_post(
            db_session, "post-tech", admin.email, category="Technology"
        )
        technology = sample_categories[0]
        response = client.delete(
            f"/api/v1/blog-categories/{technology.id}", headers=superadmin_headers
        )
        assert response.status_code == status.HTTP_200_OK

        response = client.put(
            f"/api/v1/posts/{post.id}",
            json=_update_payload(title="Still tech", category="Technology"),
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        db_session.refresh(post)
        assert post.title == "Still tech"
        assert post.category == "Technology"

    def test_update_to_deleted_category_rejected(
        self, client, db_session, admin_headers, admin_post, sample_categories
    ):
        db_session.delete(sample_categories[0])
        db_session.commit()

        response = client.put(
            f"/api/v1/posts/{admin_post.id}",
            json=_update_payload(category="Technology"),
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_missing_post(self, client, superadmin_headers):
        response = client.put(
            "/api/v1/posts/ghost", json=_update_payload(), headers=superadmin_headers
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update_missing_fields(self, client, admin_headers, admin_post):
        response = client.put(
            f"/api/v1/posts/{admin_post.id}",
            json={"title": "Only title"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_user_cannot_update(self, client, user_headers, admin_post):
        response = client.put(
            f"/api/v1/posts/{admin_post.id}",
            json=_update_payload(),
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestDeletePost:
    def test_author_admin_deletes_post_and_grants(
        self, client, db_session, admin_headers, admin_post, other_admin
    ):
        grant_access(db_session, other_admin, admin_post)

        response = client.delete(
            f"/api/v1/posts/{admin_post.id}", headers=admin_headers
        )

        assert response.status_code == status.HTTP_200_OK
        db_session.expire_all()
        assert db_session.query(Post).filter(Post.id == "post-admin").first() is None
        assert (
            db_session.query(BlogAccess)
            .filter(BlogAccess.post_id == "post-admin")
            .count()
            == 0
        )

    def test_admin_without_access_cannot_delete(
        self, client, admin_headers, other_post
    ):
        response = client.delete(
            f"/api/v1/posts/{other_post.id}", headers=admin_headers
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_superadmin_deletes_any(self, client, superadmin_headers, other_post):
        response = client.delete(
            f"/api/v1/posts/{other_post.id}", headers=superadmin_headers
        )

        assert response.status_code == status.HTTP_200_OK

    def test_delete_missing_post(self, client, superadmin_headers):
        response = client.delete("/api/v1/posts/ghost", headers=superadmin_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND
