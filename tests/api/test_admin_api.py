"""
Тесты административных маршрутов.
"""

from datetime import datetime, timedelta

from newsgrid.domain.value_objects.article_status import ArticleStatus
from tests.conftest import ADMIN_HEADERS, USER_HEADERS, make_article


def test_admin_requires_auth(client):
    assert client.get("/api/v1/admin/articles").status_code == 401


def test_admin_forbidden_for_regular_user(client, user):
    response = client.get("/api/v1/admin/articles", headers=USER_HEADERS)

    assert response.status_code == 403
    assert response.json()["detail"] == "Forbidden: Admins only."


def test_review_queue(client, admin_user, articles):
    now = datetime.utcnow()
    newer = make_article(status=ArticleStatus.PENDING_REVIEW, created_at=now)
    older = make_article(status=ArticleStatus.PENDING_REVIEW, created_at=now - timedelta(hours=3))
    for article in (newer, older, make_article()):
        articles.items[article.id] = article

    response = client.get("/api/v1/admin/articles", headers=ADMIN_HEADERS)

    assert response.status_code == 200
    assert [a["id"] for a in response.json()] == [str(older.id), str(newer.id)]


def test_review_queue_by_status(client, admin_user, articles):
    published = make_article()
    articles.items[published.id] = published

    response = client.get("/api/v1/admin/articles", params={"status": "Published"}, headers=ADMIN_HEADERS)

    assert [a["id"] for a in response.json()] == [str(published.id)]


def test_override_status(client, admin_user, articles):
    article = make_article(status=ArticleStatus.PENDING_REVIEW)
    articles.items[article.id] = article

    response = client.put(
        f"/api/v1/admin/articles/{article.id}/status",
        json={"status": "Rejected"},
        headers=ADMIN_HEADERS,
    )

    assert response.status_code == 200
    assert response.json()["status"] == "Rejected"


def test_override_invalid_status(client, admin_user, articles):
    article = make_article()
    articles.items[article.id] = article

    response = client.put(
        f"/api/v1/admin/articles/{article.id}/status",
        json={"status": "draft"},
        headers=ADMIN_HEADERS,
    )

    assert response.status_code == 400


def test_override_forbidden_for_regular_user(client, user, articles):
    article = make_article()
    articles.items[article.id] = article

    response = client.put(
        f"/api/v1/admin/articles/{article.id}/status",
        json={"status": "Rejected"},
        headers=USER_HEADERS,
    )

    assert response.status_code == 403
    assert articles.items[article.id].status == ArticleStatus.PUBLISHED
