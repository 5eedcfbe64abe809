"""Tests for the JSON link API."""

import pytest

from shorturls.core.validators import is_valid_code
from shorturls.services.exceptions import LinkLookupError
from shorturls.services.links import LinkService


async def create_link(client, full="https://example.com", code=None):
    payload = {"full": full}
    if code is not None:
        payload["code"] = code
    response = await client.post("/api/links", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.api
@pytest.mark.asyncio
class TestCreateLinkAPI:

    async def test_create_with_generated_code(self, client):
        response = await client.post("/api/links", json={"full": "https://example.com"})

        assert response.status_code == 201
        data = response.json()
        assert data["full"] == "https://example.com"
        assert 6 <= len(data["short"]) <= 8
        assert is_valid_code(data["short"])
        assert data["clicks"] == 0
        assert data["lastClicked"] is None
        assert isinstance(data["id"], int)

    async def test_create_with_custom_code(self, client):
        response = await client.post("/api/links", json={"full": "https://example.com", "code": "custom1"})

        assert response.status_code == 201
        assert response.json()["short"] == "custom1"

    @pytest.mark.parametrize("payload", [{}, {"full": ""}, {"full": None}, {"code": "abc123"}])
    async def test_missing_full_url(self, client, payload):
        response = await client.post("/api/links", json=payload)

        assert response.status_code == 400
        assert response.json() == {"error": "missing_full_url"}

    async def test_missing_body(self, client):
        response = await client.post("/api/links")

        assert response.status_code == 400
        assert response.json() == {"error": "missing_full_url"}

    @pytest.mark.parametrize("full", ["not-a-url", "ftp://example.com", "https://"])
    async def test_invalid_full_url(self, client, full):
        response = await client.post("/api/links", json={"full": full})

        assert response.status_code == 400
        assert response.json() == {"error": "invalid_full_url"}

    @pytest.mark.parametrize("code", ["abc", "toolongcode", "has-dash", "   "])
    async def test_invalid_short_code(self, client, code):
        response = await client.post("/api/links", json={"full": "https://example.com", "code": code})

        assert response.status_code == 400
        assert response.json() == {"error": "invalid_short_code"}

    async def test_padded_url_is_stored_trimmed(self, client):
        response = await client.post("/api/links", json={"full": "  https://example.com  ", "code": "pad1234"})

        assert response.status_code == 201
        assert response.json()["full"] == "https://example.com"

        redirect = await client.get("/pad1234")
        assert redirect.headers["location"] == "https://example.com"

    @pytest.mark.parametrize("full", [123, 1.5, True, ["https://example.com"], {"url": "https://example.com"}])
    async def test_non_string_full_url(self, client, full):
        response = await client.post("/api/links", json={"full": full})

        assert response.status_code == 400
        assert response.json() == {"error": "invalid_full_url"}

    @pytest.mark.parametrize("code", [1234567, ["abc123"], {"code": "abc123"}])
    async def test_non_string_code(self, client, code):
        response = await client.post("/api/links", json={"full": "https://example.com", "code": code})

        assert response.status_code == 400
        assert response.json() == {"error": "invalid_short_code"}
        assert (await client.get("/api/links")).json() == []

    async def test_code_already_exists(self, client):
        await create_link(client, full="https://example.com/a", code="taken99")

        response = await client.post("/api/links", json={"full": "https://example.com/b", "code": "taken99"})

        assert response.status_code == 409
        assert response.content == b""

        listing = await client.get("/api/links")
        assert len(listing.json()) == 1
        assert listing.json()[0]["full"] == "https://example.com/a"

    async def test_malformed_json(self, client):
        response = await client.post(
            "/api/links",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_request"


@pytest.mark.api
@pytest.mark.asyncio
class TestReadDeleteAPI:

    async def test_list_links(self, client):
        assert (await client.get("/api/links")).json() == []

        first = await create_link(client, full="https://example.com/1")
        second = await create_link(client, full="https://example.com/2")

        response = await client.get("/api/links")

        assert response.status_code == 200
        assert [link["short"] for link in response.json()] == [first["short"], second["short"]]

    async def test_get_link_stats(self, client):
        created = await create_link(client, code="stats01")

        response = await client.get("/api/links/stats01")

        assert response.status_code == 200
        assert response.json() == {
            "id": created["id"],
            "short": "stats01",
            "full": "https://example.com",
            "clicks": 0,
            "lastClicked": None,
        }

    async def test_get_link_stats_not_found(self, client):
        response = await client.get("/api/links/nothere")

        assert response.status_code == 404
        assert response.json() == {"error": "not_found"}

    async def test_delete_link(self, client):
        await create_link(client, code="delete1")

        response = await client.delete("/api/links/delete1")

        assert response.status_code == 204
        assert response.content == b""
        assert (await client.get("/api/links/delete1")).status_code == 404

    async def test_delete_link_not_found(self, client):
        await create_link(client, code="keeper1")

        response = await client.delete("/api/links/nothere")

        assert response.status_code == 404
        assert response.json() == {"error": "not_found"}
        assert len((await client.get("/api/links")).json()) == 1

    async def test_store_failure(self, client, monkeypatch):
        async def failing(self, db):
            raise LinkLookupError("store down")

        monkeypatch.setattr(LinkService, "list_links", failing)

        response = await client.get("/api/links")

        assert response.status_code == 500
        assert response.json() == {"error": "internal_error"}

    async def test_unhandled_error(self, unraising_client, monkeypatch):
        async def failing(self, db, code):
            raise RuntimeError("unexpected")

        monkeypatch.setattr(LinkService, "get_link_by_code", failing)

        response = await unraising_client.get("/api/links/abc123")

        assert response.status_code == 500
        assert response.json() == {"error": "internal_error"}
