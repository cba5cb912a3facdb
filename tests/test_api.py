"""HTTP surface: envelopes, camelCase aliases and error mapping."""

import pytest


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["database"] == "ok"


@pytest.mark.asyncio
async def test_health_reports_unreachable_database(tmp_path):
    from httpx import ASGITransport, AsyncClient
    from sqlalchemy.ext.asyncio import create_async_engine

    from app.main import create_app

    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/missing/dir/catalog.db")
    app = create_app(engine=engine)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        body = (await ac.get("/health")).json()
    await engine.dispose()
    assert (body["status"], body["database"]) == ("degraded", "unavailable")


@pytest.mark.asyncio
async def test_product_listing_envelope(client, shoes_catalog):
    response = await client.get(
        "/api/v1/products", params={"per_page": "10", "categories": "Shoes", "page": "2"}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["pageCount"] == 2
    assert len(body["data"]) == 5
    assert {"storeId", "createdAt", "stripeAccountId", "category"} <= set(body["data"][0])


@pytest.mark.asyncio
async def test_product_listing_never_fails_on_bad_params(client, shoes_catalog):
    response = await client.get("/api/v1/products", params={"per_page": "0", "page": "x"})
    assert response.status_code == 200
    assert response.json() == {"data": [], "pageCount": 0}


@pytest.mark.asyncio
async def test_repeated_token_keys_are_merged(client, multi_store_catalog):
    response = await client.get(
        "/api/v1/products?store_ids=A&store_ids=B&per_page=50"
    )
    assert {p["storeId"] for p in response.json()["data"]} == {"A", "B"}


@pytest.mark.asyncio
async def test_store_endpoints(client, shoes_catalog):
    listing = (await client.get("/api/v1/stores", params={"sort": "name.asc"})).json()
    assert [s["id"] for s in listing["data"]] == ["A", "B"]
    assert listing["data"][0]["productCount"] == 15

    detail = await client.get("/api/v1/stores/A")
    assert detail.json()["data"]["stripeAccountId"] == "acct_A"

    missing = await client.get("/api/v1/stores/nope")
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "NOT_FOUND"

    table = (await client.get("/api/v1/stores/A/products", params={"sort": "price.desc"})).json()
    assert table["pageCount"] == 2
    assert table["data"][0]["name"] == "A-Shoes item 014"


@pytest.mark.asyncio
async def test_category_endpoints(client, shoes_catalog, categories):
    listed = (await client.get("/api/v1/categories")).json()["data"]
    assert [c["name"] for c in listed] == ["Shoes", "Clothing", "Accessories"]

    shoes_id = categories["Shoes"]["id"]
    subs = (await client.get(f"/api/v1/categories/{shoes_id}/subcategories")).json()["data"]
    assert {s["name"] for s in subs} == {"Sneakers", "Boots", "Sandals"}
    assert all(s["categoryId"] == shoes_id for s in subs)

    count = await client.get(f"/api/v1/categories/{shoes_id}/product-count")
    assert count.json() == {"count": 15}

    assert (await client.get("/api/v1/categories/nope/subcategories")).status_code == 404
    assert len((await client.get("/api/v1/subcategories")).json()["data"]) == 9


@pytest.mark.asyncio
async def test_search_and_featured(client, shoes_catalog):
    search = (await client.get("/api/v1/products/search", params={"query": "item 014"})).json()
    assert search["data"][0]["products"] == [{"id": "A-Shoes-014", "name": "A-Shoes item 014"}]

    featured = (await client.get("/api/v1/products/featured")).json()["data"]
    assert len(featured) == 8


# ------------------------------------------------------------------
# Product management
# ------------------------------------------------------------------

def _new_product(categories, **overrides):
    body = {
        "name": "Trail Runner",
        "description": "Grippy",
        "categoryId": categories["Shoes"]["id"],
        "subcategoryId": categories["Shoes"]["subs"]["Sneakers"],
        "price": "89.90",
        "inventory": 12,
        "images": [{"id": "img1", "name": "runner.png", "url": "https://cdn.example/runner.png"}],
        "tags": ["running"],
    }
    body.update(overrides)
    return body


@pytest.mark.asyncio
async def test_product_lifecycle(client, add_store, categories):
    await add_store("M", "acct_M")

    created = await client.post("/api/v1/stores/M/products", json=_new_product(categories))
    assert created.status_code == 201
    product = created.json()["data"]
    assert product["storeId"] == "M"
    assert product["images"][0]["url"] == "https://cdn.example/runner.png"

    product_id = product["id"]
    updated = await client.put(
        f"/api/v1/stores/M/products/{product_id}", json={"inventory": 3, "name": "Trail Runner 2"}
    )
    assert updated.status_code == 200
    assert updated.json()["data"]["inventory"] == 3
    assert updated.json()["data"]["name"] == "Trail Runner 2"

    rated = await client.patch(f"/api/v1/products/{product_id}/rating", json={"rating": 4})
    assert rated.json()["data"]["rating"] == 4

    listing = (await client.get("/api/v1/stores/M/products")).json()
    assert [row["id"] for row in listing["data"]] == [product_id]

    deleted = await client.delete(f"/api/v1/stores/M/products/{product_id}")
    assert deleted.status_code == 204
    assert (await client.get(f"/api/v1/products/{product_id}")).status_code == 404


@pytest.mark.asyncio
async def test_duplicate_product_name_conflicts(client, add_store, categories):
    await add_store("M")
    assert (await client.post("/api/v1/stores/M/products", json=_new_product(categories))).status_code == 201

    again = await client.post("/api/v1/stores/M/products", json=_new_product(categories))
    assert again.status_code == 409
    assert again.json()["error"]["message"] == "Product name already taken."


@pytest.mark.asyncio
async def test_product_writes_are_store_scoped(client, add_store, categories):
    await add_store("M")
    await add_store("X")
    product_id = (
        await client.post("/api/v1/stores/M/products", json=_new_product(categories))
    ).json()["data"]["id"]

    assert (await client.put(f"/api/v1/stores/X/products/{product_id}", json={"inventory": 1})).status_code == 404
    assert (await client.delete(f"/api/v1/stores/X/products/{product_id}")).status_code == 404
    assert (await client.post("/api/v1/stores/ghost/products", json=_new_product(categories, name="Other"))).status_code == 404


@pytest.mark.asyncio
async def test_subcategory_must_match_category(client, add_store, categories):
    await add_store("M")
    response = await client.post(
        "/api/v1/stores/M/products",
        json=_new_product(categories, subcategoryId=categories["Clothing"]["subs"]["Hoodies"]),
    )
    assert response.status_code == 422
    assert response.json()["error"]["field"] == "subcategory_id"


@pytest.mark.asyncio
async def test_product_moves_to_another_category(client, add_store, categories):
    await add_store("M")
    product_id = (
        await client.post(
            "/api/v1/stores/M/products",
            json=_new_product(categories, subcategoryId=categories["Shoes"]["subs"]["Boots"]),
        )
    ).json()["data"]["id"]

    moved = await client.put(
        f"/api/v1/stores/M/products/{product_id}",
        json={"categoryId": categories["Clothing"]["id"], "subcategoryId": None, "description": None},
    )
    assert moved.status_code == 200
    data = moved.json()["data"]
    assert data["categoryId"] == categories["Clothing"]["id"]
    assert data["subcategoryId"] is None
    assert data["description"] is None
    assert data["name"] == "Trail Runner"

    kept = await client.put(f"/api/v1/stores/M/products/{product_id}", json={"name": None, "inventory": 5})
    assert kept.status_code == 200
    assert kept.json()["data"]["name"] == "Trail Runner"
    assert kept.json()["data"]["inventory"] == 5
