"""Recipe endpoint tests (memory backend, fake Redis list cache)."""

import json

import pytest
from httpx import AsyncClient

from tests.conftest import FakeRedis

PASTA = {
    "name": "Spaghetti Carbonara",
    "tags": ["Italian", "pasta"],
    "ingredients": ["spaghetti", "eggs", "guanciale"],
    "instructions": ["Boil pasta", "Mix eggs", "Combine"],
}
CURRY = {
    "name": "Chicken Curry",
    "tags": ["indian"],
    "ingredients": ["chicken", "curry paste"],
    "instructions": ["Cook"],
}
MALFORMED = b"{not json"
JSON_HEADERS = {"Content-Type": "application/json"}


async def _create(client: AsyncClient, headers: dict[str, str], body: dict) -> str:
    response = await client.post("/recipes", json=body, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()["recipeID"]


async def test_list_empty(client: AsyncClient) -> None:
    response = await client.get("/recipes")
    assert response.status_code == 200
    assert response.json() == []


async def test_create_requires_auth(client: AsyncClient) -> None:
    response = await client.post("/recipes", json=PASTA)
    assert response.status_code == 401
    assert "error" in response.json()


async def test_create_with_invalid_token_returns_401(client: AsyncClient) -> None:
    response = await client.post(
        "/recipes", json=PASTA, headers={"Authorization": "garbage"}
    )
    assert response.status_code == 401


async def test_create_returns_message_and_id(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    response = await client.post("/recipes", json=PASTA, headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["recipeID"]
    assert data["message"] == f"New recipe added with id {data['recipeID']}"


async def test_create_then_list_includes_recipe_once(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    recipe_id = await _create(client, auth_headers, PASTA)
    recipes = (await client.get("/recipes")).json()
    assert [r["id"] for r in recipes].count(recipe_id) == 1
    stored = next(r for r in recipes if r["id"] == recipe_id)
    assert stored["name"] == PASTA["name"]
    assert stored["tags"] == PASTA["tags"]
    assert stored["ingredients"] == PASTA["ingredients"]
    assert stored["instructions"] == PASTA["instructions"]
    assert stored["publishedAt"]


async def test_create_without_lists_stores_empty_arrays(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    recipe_id = await _create(client, auth_headers, {"name": "Water", "tags": None})
    recipe = (await client.get(f"/recipes/{recipe_id}")).json()
    assert recipe["tags"] == []
    assert recipe["ingredients"] == []
    assert recipe["instructions"] == []


async def test_create_ignores_client_id_and_published_at(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    body = {**PASTA, "id": "client-chosen", "publishedAt": "2000-01-01T00:00:00Z"}
    recipe_id = await _create(client, auth_headers, body)
    assert recipe_id != "client-chosen"
    recipe = (await client.get(f"/recipes/{recipe_id}")).json()
    assert not recipe["publishedAt"].startswith("2000")


async def test_malformed_body_without_auth_returns_401(client: AsyncClient) -> None:
    response = await client.post("/recipes", content=MALFORMED, headers=JSON_HEADERS)
    assert response.status_code == 401
    response = await client.put("/recipes/any", content=MALFORMED, headers=JSON_HEADERS)
    assert response.status_code == 401


async def test_malformed_body_with_auth_returns_400(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    response = await client.post(
        "/recipes", content=MALFORMED, headers={**JSON_HEADERS, **auth_headers}
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid JSON body"}


async def test_invalid_field_message_names_the_field(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    response = await client.post("/recipes", json={"tags": []}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json() == {"error": "name: Field required"}


@pytest.mark.parametrize(
    "body",
    [{}, {"name": ""}, {"name": "   "}, {"name": "x", "tags": "not-a-list"}],
)
async def test_create_invalid_body_returns_400(
    client: AsyncClient, auth_headers: dict[str, str], body: dict
) -> None:
    response = await client.post("/recipes", json=body, headers=auth_headers)
    assert response.status_code == 400
    assert "error" in response.json()


async def test_list_is_cached_without_expiry(
    client: AsyncClient, auth_headers: dict[str, str], fake_redis: FakeRedis
) -> None:
    await _create(client, auth_headers, PASTA)
    assert "recipes" not in fake_redis.store
    await client.get("/recipes")
    assert "recipes" in fake_redis.store
    assert fake_redis.ttls["recipes"] is None


async def test_list_served_from_cache_snapshot(
    client: AsyncClient, auth_headers: dict[str, str], fake_redis: FakeRedis
) -> None:
    """While the snapshot exists it is returned as-is."""
    await _create(client, auth_headers, PASTA)
    first = (await client.get("/recipes")).json()
    snapshot = json.loads(fake_redis.store["recipes"])
    snapshot["recipes"] = []
    fake_redis.store["recipes"] = json.dumps(snapshot)
    assert (await client.get("/recipes")).json() == []
    assert len(first) == 1


async def test_create_invalidates_cached_list(
    client: AsyncClient, auth_headers: dict[str, str], fake_redis: FakeRedis
) -> None:
    await _create(client, auth_headers, PASTA)
    await client.get("/recipes")
    assert "recipes" in fake_redis.store
    await _create(client, auth_headers, CURRY)
    assert "recipes" not in fake_redis.store
    assert len((await client.get("/recipes")).json()) == 2


async def test_undecodable_cache_entry_falls_back_to_store(
    client: AsyncClient, auth_headers: dict[str, str], fake_redis: FakeRedis
) -> None:
    await _create(client, auth_headers, PASTA)
    fake_redis.store["recipes"] = "{broken"
    recipes = (await client.get("/recipes")).json()
    assert len(recipes) == 1


async def test_get_by_id(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    recipe_id = await _create(client, auth_headers, PASTA)
    response = await client.get(f"/recipes/{recipe_id}")
    assert response.status_code == 200
    assert response.json()["id"] == recipe_id


async def test_get_unknown_returns_404(client: AsyncClient) -> None:
    response = await client.get("/recipes/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"error": "Recipe not found"}


async def test_update_unknown_returns_404(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    response = await client.put("/recipes/does-not-exist", json=CURRY, headers=auth_headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Recipe not found"}


async def test_update_changes_only_mutable_fields(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    recipe_id = await _create(client, auth_headers, PASTA)
    before = (await client.get(f"/recipes/{recipe_id}")).json()
    response = await client.put(f"/recipes/{recipe_id}", json=CURRY, headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Recipe has been updated"}
    after = (await client.get(f"/recipes/{recipe_id}")).json()
    assert after["id"] == before["id"]
    assert after["publishedAt"] == before["publishedAt"]
    assert after["name"] == CURRY["name"]
    assert after["tags"] == CURRY["tags"]
    assert after["ingredients"] == CURRY["ingredients"]
    assert after["instructions"] == CURRY["instructions"]


async def test_update_requires_auth(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    recipe_id = await _create(client, auth_headers, PASTA)
    response = await client.put(f"/recipes/{recipe_id}", json=CURRY)
    assert response.status_code == 401
    assert (await client.get(f"/recipes/{recipe_id}")).json()["name"] == PASTA["name"]


async def test_update_invalidates_cached_list(
    client: AsyncClient, auth_headers: dict[str, str], fake_redis: FakeRedis
) -> None:
    recipe_id = await _create(client, auth_headers, PASTA)
    await client.get("/recipes")
    await client.put(f"/recipes/{recipe_id}", json=CURRY, headers=auth_headers)
    assert "recipes" not in fake_redis.store
    assert (await client.get("/recipes")).json()[0]["name"] == CURRY["name"]


async def test_delete_then_delete_again(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    recipe_id = await _create(client, auth_headers, PASTA)
    first = await client.delete(f"/recipes/{recipe_id}", headers=auth_headers)
    assert first.status_code == 200
    assert first.json() == {"message": "Recipe has been deleted"}
    second = await client.delete(f"/recipes/{recipe_id}", headers=auth_headers)
    assert second.status_code == 404


async def test_delete_requires_auth(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    recipe_id = await _create(client, auth_headers, PASTA)
    response = await client.delete(f"/recipes/{recipe_id}")
    assert response.status_code == 401
    assert (await client.get(f"/recipes/{recipe_id}")).status_code == 200


async def test_delete_invalidates_cached_list(
    client: AsyncClient, auth_headers: dict[str, str], fake_redis: FakeRedis
) -> None:
    recipe_id = await _create(client, auth_headers, PASTA)
    await client.get("/recipes")
    await client.delete(f"/recipes/{recipe_id}", headers=auth_headers)
    assert "recipes" not in fake_redis.store
    assert (await client.get("/recipes")).json() == []


async def test_search_by_tag_is_case_insensitive(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    pasta_id = await _create(client, auth_headers, PASTA)
    await _create(client, auth_headers, CURRY)
    response = await client.get("/recipes/search", params={"tag": "italian"})
    assert response.status_code == 200
    assert [r["id"] for r in response.json()] == [pasta_id]
    upper = await client.get("/recipes/search", params={"tag": "ITALIAN"})
    assert [r["id"] for r in upper.json()] == [pasta_id]


async def test_search_matches_whole_tag_only(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    await _create(client, auth_headers, PASTA)
    response = await client.get("/recipes/search", params={"tag": "ital"})
    assert response.json() == []


async def test_search_no_match_returns_empty_list(client: AsyncClient) -> None:
    response = await client.get("/recipes/search", params={"tag": "french"})
    assert response.status_code == 200
    assert response.json() == []


async def test_search_without_tag_returns_empty_list(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    await _create(client, auth_headers, PASTA)
    response = await client.get("/recipes/search")
    assert response.status_code == 200
    assert response.json() == []


async def test_list_works_when_cache_unavailable(
    client: AsyncClient, auth_headers: dict[str, str], app
) -> None:
    """With no cache the store is read every time and writes still succeed."""
    app.state.cache = None
    recipe_id = await _create(client, auth_headers, PASTA)
    assert [r["id"] for r in (await client.get("/recipes")).json()] == [recipe_id]
