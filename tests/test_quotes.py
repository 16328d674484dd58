"""
Quote generation, analysis and history API tests.
"""

import pytest


HEADER = {
    "client_name": "Acme Ltd",
    "project_name": "Data Centre Move",
    "account_manager": "Jane",
    "project_duration": "6 months",
}


@pytest.mark.asyncio
async def test_generate_quote(test_client, user_headers, seeded_rate_card):
    response = await test_client.post(
        "/api/v1/quotes/generate",
        json={"selections": [["A", 2, 3]]},
        headers=user_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 600.0
    assert data["items"][0]["id"] == "A"
    assert data["items"][0]["total"] == 600.0


@pytest.mark.asyncio
async def test_generate_quote_accepts_object_selections(test_client, user_headers, seeded_rate_card):
    response = await test_client.post(
        "/api/v1/quotes/generate",
        json={"selections": [{"item_id": "B", "quantity": 1, "duration": 4}]},
        headers=user_headers,
    )

    assert response.json()["total"] == 200.0


@pytest.mark.asyncio
async def test_generate_quote_skips_unknown_ids(test_client, user_headers, seeded_rate_card):
    response = await test_client.post(
        "/api/v1/quotes/generate",
        json={"selections": [["nope", 1, 1], ["B", 1, 1]]},
        headers=user_headers,
    )

    data = response.json()
    assert [item["id"] for item in data["items"]] == ["B"]
    assert data["total"] == 50.0


@pytest.mark.asyncio
async def test_generate_quote_empty(test_client, user_headers):
    response = await test_client.post("/api/v1/quotes/generate", json={"selections": []}, headers=user_headers)

    assert response.json() == {"items": [], "total": 0.0}


@pytest.mark.asyncio
async def test_negative_quantity_is_rejected(test_client, user_headers, seeded_rate_card):
    response = await test_client.post(
        "/api/v1/quotes/generate",
        json={"selections": [["A", -1, 1]]},
        headers=user_headers,
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_generate_analysis(test_client, user_headers, seeded_rate_card):
    response = await test_client.post(
        "/api/v1/quotes/analysis",
        json={"selections": [["A", 2, 3], ["B", 1, 1]]},
        headers=user_headers,
    )

    data = response.json()
    assert data["items"][0]["margin"] == 20.0
    assert data["items"][0]["margin_percentage"] == 20.0
    assert data["items"][1]["margin"] == -10.0
    assert data["total_margin"] == 10.0
    assert data["total_profit"] == 650.0


@pytest.mark.asyncio
async def test_generate_full_quote_records_history(test_client, user_headers, seeded_rate_card):
    response = await test_client.post(
        "/api/v1/quotes/generate-full",
        json={"header": HEADER, "selections": [["A", 1, 2]]},
        headers=user_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["header"] == HEADER
    assert data["total"] == 200.0
    history_id = data["history_id"]
    assert history_id.startswith("quote-")

    history = await test_client.get("/api/v1/quote-history", headers=user_headers)
    assert history.json()["total"] == 1

    entry = await test_client.get(f"/api/v1/quote-history/{history_id}", headers=user_headers)
    assert entry.status_code == 200
    entry_data = entry.json()
    assert entry_data["header"] == HEADER
    assert entry_data["items"] == data["items"]
    assert entry_data["total"] == 200.0


@pytest.mark.asyncio
async def test_history_is_a_snapshot(test_client, user_headers, seeded_rate_card):
    response = await test_client.post(
        "/api/v1/quotes/generate-full",
        json={"header": HEADER, "selections": [["A", 1, 1]]},
        headers=user_headers,
    )
    history_id = response.json()["history_id"]

    await test_client.patch(
        "/api/v1/rate-card/items/A/standard-cost",
        json={"standard_cost": 999.0},
        headers=user_headers,
    )
    await test_client.delete("/api/v1/rate-card/items/A", headers=user_headers)

    entry = await test_client.get(f"/api/v1/quote-history/{history_id}", headers=user_headers)
    assert entry.json()["items"][0]["standard_cost"] == 100.0
    assert entry.json()["total"] == 100.0


@pytest.mark.asyncio
async def test_plain_generate_does_not_record_history(test_client, user_headers, seeded_rate_card):
    await test_client.post("/api/v1/quotes/generate", json={"selections": [["A", 1, 1]]}, headers=user_headers)
    await test_client.post("/api/v1/quotes/analysis", json={"selections": [["A", 1, 1]]}, headers=user_headers)

    history = await test_client.get("/api/v1/quote-history", headers=user_headers)
    assert history.json() == {"items": [], "total": 0}


@pytest.mark.asyncio
async def test_unknown_history_item_is_404(test_client, user_headers):
    response = await test_client.get("/api/v1/quote-history/quote-0", headers=user_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_history_analysis_report(test_client, user_headers, seeded_rate_card):
    response = await test_client.post(
        "/api/v1/quotes/generate-full",
        json={"header": HEADER, "selections": [["A", 2, 3], ["B", 1, 2]]},
        headers=user_headers,
    )
    history_id = response.json()["history_id"]

    report = await test_client.get(f"/api/v1/quote-history/{history_id}/analysis", headers=user_headers)

    assert report.status_code == 200
    data = report.json()
    assert data["total_revenue"] == 700.0
    assert data["total_cost"] == 600.0
    assert data["total_profit"] == 100.0
    assert data["items"][0]["total_item_margin"] == 120.0


@pytest.mark.asyncio
async def test_analysis_single_item_example(test_client, user_headers, seeded_rate_card):
    response = await test_client.post(
        "/api/v1/quotes/analysis",
        json={"selections": [["A", 2, 3]]},
        headers=user_headers,
    )

    data = response.json()
    assert data["items"][0]["total"] == 600.0
    assert data["items"][0]["margin"] == 20.0
    assert data["items"][0]["margin_percentage"] == 20.0
    assert data["total_margin"] == 20.0
    assert data["total_profit"] == 600.0


@pytest.mark.asyncio
async def test_repeated_history_reads_are_identical(test_client, user_headers, seeded_rate_card):
    response = await test_client.post(
        "/api/v1/quotes/generate-full",
        json={"header": HEADER, "selections": [["B", 3, 1]]},
        headers=user_headers,
    )
    history_id = response.json()["history_id"]

    first = await test_client.get(f"/api/v1/quote-history/{history_id}", headers=user_headers)
    second = await test_client.get(f"/api/v1/quote-history/{history_id}", headers=user_headers)

    assert first.json() == second.json()
