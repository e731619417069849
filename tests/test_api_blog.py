"""
API tests for the blog view endpoints.
"""

VIEWS_URL = "/api/v1/blog/views"


class TestRecordView:
    """Tests for GET /blog/views/{slug} (every call counted)."""

    def test_first_view(self, client, clock):
        response = client.get(f"{VIEWS_URL}/hello-world")

        assert response.status_code == 200
        data = response.json()
        assert data["slug"] == "hello-world"
        assert data["count"] == 1
        assert data["lastViewed"].startswith("2026-10-19T12:00:00")
        assert data["uniqueVisitors"] == 0

    def test_ten_views(self, client):
        for _ in range(10):
            response = client.get(f"{VIEWS_URL}/a")
        assert response.json()["count"] == 10


class TestRecordUniqueView:
    """Tests for POST /blog/views/{slug} (deduplicated by visitor)."""

    def test_duplicate_visitor_not_counted(self, client):
        client.post(f"{VIEWS_URL}/p", json={"visitorId": "v1"})
        response = client.post(f"{VIEWS_URL}/p", json={"visitorId": "v1"})

        assert response.status_code == 200
        assert response.json()["count"] == 1

    def test_new_visitor_counted(self, client):
        client.post(f"{VIEWS_URL}/p", json={"visitorId": "v1"})
        response = client.post(f"{VIEWS_URL}/p", json={"visitorId": "v2"})

        data = response.json()
        assert data["count"] == 2
        assert data["uniqueVisitors"] == 2
        assert "visitors" not in data

    def test_visitor_recounted_after_window(self, client, clock):
        client.post(f"{VIEWS_URL}/p", json={"visitorId": "v1"})
        clock.advance(hours=25)

        response = client.post(f"{VIEWS_URL}/p", json={"visitorId": "v1"})
        assert response.json()["count"] == 2

    def test_missing_visitor_id(self, client):
        response = client.post(f"{VIEWS_URL}/p", json={})

        assert response.status_code == 400
        assert response.json()["messages"] == ["Visitor ID is required."]

    def test_empty_visitor_id(self, client):
        response = client.post(f"{VIEWS_URL}/p", json={"visitorId": ""})

        assert response.status_code == 400
        assert response.json()["messages"] == ["Visitor ID must be a non-empty string."]

    def test_visitor_id_at_max_length(self, client):
        response = client.post(f"{VIEWS_URL}/p", json={"visitorId": "v" * 128})

        assert response.status_code == 200
        assert response.json()["count"] == 1

    def test_visitor_id_over_max_length(self, client):
        response = client.post(f"{VIEWS_URL}/p", json={"visitorId": "v" * 129})

        assert response.status_code == 400
        assert response.json()["messages"] == ["Visitor ID must be 128 characters or less."]
        assert client.get(f"{VIEWS_URL}/p/stats").status_code == 404


class TestViewStats:
    """Tests for GET /blog/views/{slug}/stats (read-only)."""

    def test_unknown_slug_is_404(self, client):
        response = client.get(f"{VIEWS_URL}/never-seen/stats")

        assert response.status_code == 404
        data = response.json()
        assert data["error"] == "Not Found"
        assert "never-seen" in data["message"]

    def test_stats_do_not_count(self, client):
        client.get(f"{VIEWS_URL}/a")

        for _ in range(3):
            response = client.get(f"{VIEWS_URL}/a/stats")

        assert response.status_code == 200
        assert response.json()["count"] == 1
