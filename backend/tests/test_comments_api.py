"""
Tests for the movie comment endpoints.
"""
from datetime import datetime, timedelta, timezone

from jose import jwt
from sqlalchemy.exc import SQLAlchemyError

from movieapi.core.config import get_settings
from movieapi.repositories.comment_repository import CommentRepository


def post_comment(client, headers, text="Great movie", movie_id=550):
    return client.post(f"/api/movies/{movie_id}/comments", json={"text": text}, headers=headers)


def test_get_comments_empty(client):
    response = client.get("/api/movies/550/comments")
    assert response.status_code == 200
    assert response.json() == []


def test_post_comment(client, auth_headers, registered_user):
    response = post_comment(client, auth_headers)

    assert response.status_code == 201
    body = response.json()
    assert body["movieId"] == 550
    assert body["text"] == "Great movie"
    assert body["userId"] == registered_user.id
    assert body["username"] == registered_user.username
    assert "timestamp" in body and "id" in body


def test_get_comments_newest_first(client, auth_headers):
    post_comment(client, auth_headers, "first")
    post_comment(client, auth_headers, "second")
    post_comment(client, auth_headers, "elsewhere", movie_id=551)

    response = client.get("/api/movies/550/comments")

    assert [c["text"] for c in response.json()] == ["second", "first"]


def test_post_comment_without_token(client):
    response = post_comment(client, {})
    assert response.status_code == 401


def test_post_comment_with_invalid_token(client):
    response = post_comment(client, {"Authorization": "Bearer garbage"})
    assert response.status_code == 401


def test_post_comment_token_without_subject(client):
    settings = get_settings()
    token = jwt.encode(
        {
            "name": "nobody",
            "iss": settings.JWT_ISSUER,
            "aud": settings.JWT_AUDIENCE,
            "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
        },
        settings.JWT_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )
    response = post_comment(client, {"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["detail"] == "User ID claim not found."



def test_post_comment_token_from_other_issuer(client, registered_user):
    settings = get_settings()
    token = jwt.encode(
        {
            "sub": registered_user.id,
            "iss": "someone-else",
            "aud": settings.JWT_AUDIENCE,
            "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
        },
        settings.JWT_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )
    response = post_comment(client, {"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Could not validate credentials"

def test_post_comment_blank_text(client, auth_headers):
    response = post_comment(client, auth_headers, "   ")
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid comment text."


def test_post_comment_too_long(client, auth_headers):
    response = post_comment(client, auth_headers, "x" * 1001)
    assert response.status_code == 400


def test_post_comment_missing_text(client, auth_headers):
    response = client.post("/api/movies/550/comments", json={}, headers=auth_headers)
    assert response.status_code == 400


def test_post_comment_for_deleted_user(client, make_user, bearer_for, db_session):
    ghost = make_user("ghost")
    headers = bearer_for(ghost)
    db_session.delete(ghost)
    db_session.commit()

    response = post_comment(client, headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "User not found."


def test_post_comment_store_failure(client, auth_headers, monkeypatch):
    def fail(self, comment):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(CommentRepository, "add", fail)
    response = post_comment(client, auth_headers)

    assert response.status_code == 500
    assert response.json()["detail"] == "An error occurred while creating the comment."
    assert "connection lost" not in response.text


def test_update_comment(client, auth_headers):
    comment_id = post_comment(client, auth_headers).json()["id"]

    response = client.put(f"/api/movies/550/comments/{comment_id}", json={"text": "Changed my mind"},
                          headers=auth_headers)
    assert response.status_code == 204

    [comment] = client.get("/api/movies/550/comments").json()
    assert comment["text"] == "Changed my mind"


def test_update_comment_by_other_user(client, auth_headers, make_user, bearer_for):
    comment_id = post_comment(client, auth_headers).json()["id"]
    other = bearer_for(make_user("mallory"))

    response = client.put(f"/api/movies/550/comments/{comment_id}", json={"text": "hijack"}, headers=other)
    assert response.status_code == 403

    [comment] = client.get("/api/movies/550/comments").json()
    assert comment["text"] == "Great movie"


def test_update_missing_comment(client, auth_headers):
    response = client.put("/api/movies/550/comments/999", json={"text": "hello"}, headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Comment with ID 999 not found."


def test_update_comment_invalid_text(client, auth_headers):
    comment_id = post_comment(client, auth_headers).json()["id"]
    response = client.put(f"/api/movies/550/comments/{comment_id}", json={"text": ""}, headers=auth_headers)
    assert response.status_code == 400


def test_update_comment_without_token(client, auth_headers):
    comment_id = post_comment(client, auth_headers).json()["id"]
    response = client.put(f"/api/movies/550/comments/{comment_id}", json={"text": "hello"})
    assert response.status_code == 401


def test_delete_comment(client, auth_headers):
    comment_id = post_comment(client, auth_headers).json()["id"]

    response = client.delete(f"/api/movies/550/comments/{comment_id}", headers=auth_headers)
    assert response.status_code == 204
    assert client.get("/api/movies/550/comments").json() == []


def test_delete_comment_by_other_user(client, auth_headers, make_user, bearer_for):
    comment_id = post_comment(client, auth_headers).json()["id"]
    other = bearer_for(make_user("mallory"))

    response = client.delete(f"/api/movies/550/comments/{comment_id}", headers=other)
    assert response.status_code == 403
    assert len(client.get("/api/movies/550/comments").json()) == 1


def test_delete_missing_comment(client, auth_headers):
    response = client.delete("/api/movies/550/comments/999", headers=auth_headers)
    assert response.status_code == 404


def test_delete_comment_without_token(client):
    assert client.delete("/api/movies/550/comments/1").status_code == 401
