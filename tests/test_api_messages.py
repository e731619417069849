"""
API tests for the messages endpoints.

Tests that responses keep the documented envelopes: list/item/delete
shapes, camelCase fields, and the 400/404 error formats.
"""

import pytest

MESSAGES_URL = "/api/v1/messages/"


def create(client, body: str) -> dict:
    response = client.post(MESSAGES_URL, json={"message": body})
    assert response.status_code == 200
    return response.json()["item"]


class TestListMessages:
    """Tests for GET /messages/."""

    def test_empty_list(self, client):
        response = client.get(MESSAGES_URL)

        assert response.status_code == 200
        assert response.json() == {"cacheDate": "19_10_2026", "totalCount": 0, "items": []}

    def test_lists_in_creation_order(self, client):
        create(client, "first")
        create(client, "second")

        data = client.get(MESSAGES_URL).json()

        assert data["totalCount"] == 2
        assert [item["body"] for item in data["items"]] == ["first", "second"]
        assert [item["id"] for item in data["items"]] == [1, 2]

    def test_cache_date_follows_clock(self, client, clock):
        create(client, "yesterday")
        clock.advance(days=1)

        data = client.get(MESSAGES_URL).json()

        assert data["cacheDate"] == "20_10_2026"
        assert data["items"] == []


class TestCreateMessage:
    """Tests for POST /messages/."""

    def test_returns_item_with_camel_case_fields(self, client):
        item = create(client, "hello")

        assert item["id"] == 1
        assert item["body"] == "hello"
        assert item["createdAt"].startswith("2026-10-19T12:00:00")
        assert item["updatedAt"] == item["createdAt"]

    def test_accepts_max_length(self, client):
        item = create(client, "x" * 280)
        assert len(item["body"]) == 280

    @pytest.mark.parametrize(
        "payload, expected",
        [
            ({"message": ""}, "Message must be at least 1 character long."),
            ({"message": "x" * 281}, "Message must be 280 characters or less."),
            ({"message": 42}, "Message must be a string."),
            ({}, "Message is required."),
        ],
    )
    def test_validation_errors(self, client, payload, expected):
        response = client.post(MESSAGES_URL, json=payload)

        assert response.status_code == 400
        data = response.json()
        assert data["statusCode"] == 400
        assert data["error"] == "Bad Request"
        assert data["messages"] == [expected]

    def test_invalid_request_does_not_create(self, client):
        client.post(MESSAGES_URL, json={"message": ""})
        assert client.get(MESSAGES_URL).json()["totalCount"] == 0


class TestUpdateMessage:
    """Tests for PUT /messages/{id}."""

    def test_updates_body(self, client, clock):
        create(client, "before")
        clock.advance(minutes=1)

        response = client.put(f"{MESSAGES_URL}1", json={"message": "after"})

        assert response.status_code == 200
        item = response.json()["item"]
        assert item["body"] == "after"
        assert item["updatedAt"] != item["createdAt"]

    def test_unknown_id_returns_404(self, client):
        create(client, "only")

        response = client.put(f"{MESSAGES_URL}7", json={"message": "nope"})

        assert response.status_code == 404
        assert response.json() == {
            "statusCode": 404,
            "error": "Not Found",
            "message": "Message with ID 7 not found.",
        }
        assert client.get(MESSAGES_URL).json()["items"][0]["body"] == "only"

    def test_non_integer_id_is_bad_request(self, client):
        response = client.put(f"{MESSAGES_URL}abc", json={"message": "x"})
        assert response.status_code == 400

    def test_body_is_validated(self, client):
        create(client, "only")
        response = client.put(f"{MESSAGES_URL}1", json={"message": ""})
        assert response.status_code == 400


class TestDeleteMessage:
    """Tests for DELETE /messages/{id} and DELETE /messages/."""

    def test_delete_returns_remaining(self, client):
        for body in ["a", "b", "c"]:
            create(client, body)

        response = client.delete(f"{MESSAGES_URL}2")

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Message with ID 2 deleted successfully."
        assert data["totalCount"] == 2
        assert [item["id"] for item in data["items"]] == [1, 3]

    def test_delete_twice_returns_404(self, client):
        create(client, "a")
        client.delete(f"{MESSAGES_URL}1")

        response = client.delete(f"{MESSAGES_URL}1")

        assert response.status_code == 404
        assert response.json()["message"] == "Message with ID 1 not found."

    def test_create_after_delete_gets_new_id(self, client):
        for body in ["a", "b", "c"]:
            create(client, body)
        client.delete(f"{MESSAGES_URL}2")

        assert create(client, "d")["id"] == 4

    def test_delete_all(self, client):
        create(client, "a")
        create(client, "b")

        response = client.delete(MESSAGES_URL)

        assert response.status_code == 200
        assert response.json() == {"message": "All messages deleted successfully."}
        assert client.get(MESSAGES_URL).json()["totalCount"] == 0
        assert create(client, "fresh")["id"] == 1
