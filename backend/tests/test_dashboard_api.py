async def test_dashboard_requires_token(client):
    for path in ("/dashboard/home", "/dashboard/products", "/dashboard/analytics"):
        resp = await client.get(path)
        assert resp.status_code == 401


async def test_home(client, auth_headers):
    resp = await client.get("/dashboard/home", headers=auth_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["user_email"] == "owner@example.com"
    assert body["counters"]["products"] == 24
    assert body["counters"]["categories"] == 5
    assert len(body["recent_orders"]) == 4


async def test_products_table(client, auth_headers):
    resp = await client.get(
        "/dashboard/products",
        params={"category": "smartphones", "sort": "price-high"},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    body = resp.json()
    prices = [row["product"]["price"] for row in body["rows"]]
    assert prices == sorted(prices, reverse=True)
    assert body["total_items"] == 4
    assert body["categories"][0] == "beauty"
    assert (body["showing_from"], body["showing_to"]) == (1, 4)


async def test_products_table_second_page(client, auth_headers):
    resp = await client.get("/dashboard/products", params={"page": 2}, headers=auth_headers)
    body = resp.json()
    assert body["total_pages"] == 2
    assert len(body["rows"]) == 9
    assert (body["showing_from"], body["showing_to"]) == (16, 24)


async def test_products_table_rejects_unknown_sort(client, auth_headers):
    resp = await client.get("/dashboard/products", params={"sort": "random"}, headers=auth_headers)
    assert resp.status_code == 400
    resp = await client.get("/dashboard/products", params={"page": 0}, headers=auth_headers)
    assert resp.status_code == 400


async def test_analytics(client, auth_headers):
    resp = await client.get("/dashboard/analytics", headers=auth_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["overview"]["total_products"] == 24
    ratings = {row["name"]: row["value"] for row in body["rating_distribution"]}
    assert sum(ratings.values()) == 24
    assert ratings["4.5-5.0"] >= 1
    assert len(body["performance"]) == 5
