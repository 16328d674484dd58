"""
Rate card and account manager upload tests.
"""

import io

import pytest
from openpyxl import Workbook


RATE_CARD_CSV = (
    "Item Ref No,Category,Sub Category,Description,Ops Brisk Cost,Standard Cost\n"
    "NET-001,Network,Firewall,Managed firewall,80,100\n"
    "NET-002,Network,Switch,,10.5,12\n"
)


def _xlsx(rows):
    wb = Workbook()
    ws = wb.active
    for row in rows:
        ws.append(row)
    output = io.BytesIO()
    wb.save(output)
    return output.getvalue()


def _upload(name, content, content_type="text/csv"):
    return {"file": (name, content, content_type)}


@pytest.mark.asyncio
async def test_import_rate_card_csv_replaces_rate_card(test_client, user_headers, seeded_rate_card):
    response = await test_client.post(
        "/api/v1/rate-card/import",
        files=_upload("rates.csv", RATE_CARD_CSV.encode()),
        headers=user_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["imported"] == 2
    assert data["skipped"] == 0
    assert data["items"][0]["item_ref_no"] == "NET-001"
    assert data["items"][1]["ops_cost"] == 10.5
    assert data["items"][0]["id"].startswith("item-")

    listing = await test_client.get("/api/v1/rate-card", headers=user_headers)
    assert sorted(item["item_ref_no"] for item in listing.json()["items"]) == ["NET-001", "NET-002"]


@pytest.mark.asyncio
async def test_import_rate_card_xlsx_with_compact_headers(test_client, user_headers):
    content = _xlsx([
        ["itemRefNo", "category", "subcategory", "detailedDescription", "opsBriskCost", "standardCost"],
        ["SRV-1", "Servers", "Rack", "1U server", 500, 750.0],
        [None, None, None, None, None, None],
        ["SRV-2", "Servers", "Blade", None, 300, 450],
    ])

    response = await test_client.post(
        "/api/v1/rate-card/import",
        files=_upload("rates.xlsx", content, "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"),
        headers=user_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["imported"] == 2
    assert data["items"][0]["standard_cost"] == 750.0
    assert data["items"][1]["detailed_description"] == ""


@pytest.mark.asyncio
async def test_import_rate_card_skips_incomplete_and_invalid_rows(test_client, user_headers):
    csv_text = (
        "itemRefNo,category,subcategory,detailedDescription,opsBriskCost,standardCost\n"
        "OK-1,A,B,C,1,2\n"
        ",A,B,C,1,2\n"
        "BAD-1,A,B,C,abc,2\n"
    )

    response = await test_client.post(
        "/api/v1/rate-card/import",
        files=_upload("rates.csv", csv_text.encode()),
        headers=user_headers,
    )

    data = response.json()
    assert data["imported"] == 1
    assert data["skipped"] == 2
    assert len(data["warnings"]) == 1
    assert "abc" in data["warnings"][0]


@pytest.mark.asyncio
async def test_import_rate_card_skips_non_finite_costs(test_client, user_headers):
    csv_text = (
        "itemRefNo,category,subcategory,detailedDescription,opsBriskCost,standardCost\n"
        "OK-1,A,B,C,1,2\n"
        "INF-1,A,B,C,inf,2\n"
        "OK-2,A,B,C,3,nan\n"
        "OK-3,A,B,C,3,4\n"
    )

    response = await test_client.post(
        "/api/v1/rate-card/import",
        files=_upload("rates.csv", csv_text.encode()),
        headers=user_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["imported"] == 2
    assert data["skipped"] == 2
    assert 'opsBriskCost="inf"' in data["warnings"][0]
    assert [item["item_ref_no"] for item in data["items"]] == ["OK-1", "OK-3"]
    # ids follow the data row the item came from
    assert data["items"][0]["id"].endswith("-1")
    assert data["items"][1]["id"].endswith("-4")


@pytest.mark.asyncio
async def test_import_rate_card_missing_columns_writes_nothing(test_client, user_headers, seeded_rate_card):
    response = await test_client.post(
        "/api/v1/rate-card/import",
        files=_upload("rates.csv", b"itemRefNo,category\nX,Y\n"),
        headers=user_headers,
    )

    assert response.status_code == 400
    assert "must contain columns" in response.json()["error"]["message"]

    listing = await test_client.get("/api/v1/rate-card", headers=user_headers)
    assert listing.json()["total"] == 2


@pytest.mark.asyncio
async def test_import_rate_card_header_only_is_rejected(test_client, user_headers):
    response = await test_client.post(
        "/api/v1/rate-card/import",
        files=_upload("rates.csv", b"itemRefNo,category,subcategory,detailedDescription,opsBriskCost,standardCost\n"),
        headers=user_headers,
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_import_rate_card_without_valid_rows_is_rejected(test_client, user_headers):
    csv_text = (
        "itemRefNo,category,subcategory,detailedDescription,opsBriskCost,standardCost\n"
        "X,A,B,C,n/a,n/a\n"
    )

    response = await test_client.post(
        "/api/v1/rate-card/import",
        files=_upload("rates.csv", csv_text.encode()),
        headers=user_headers,
    )

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "No valid items found in the file"


@pytest.mark.asyncio
async def test_import_rate_card_rejects_other_extensions(test_client, user_headers):
    response = await test_client.post(
        "/api/v1/rate-card/import",
        files=_upload("rates.txt", RATE_CARD_CSV.encode(), "text/plain"),
        headers=user_headers,
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_import_corrupt_workbook(test_client, user_headers):
    response = await test_client.post(
        "/api/v1/rate-card/import",
        files=_upload("rates.xlsx", b"definitely not a zip"),
        headers=user_headers,
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_import_account_managers_csv(test_client, user_headers):
    csv_text = "Name,Email\nAlice,alice@example.com\n,nobody@example.com\nBrian,\n"

    response = await test_client.post(
        "/api/v1/account-managers/import",
        files=_upload("managers.csv", csv_text.encode()),
        headers=user_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["imported"] == 2
    assert [m["name"] for m in data["items"]] == ["Alice", "Brian"]
    assert data["items"][1]["email"] is None
    assert data["items"][0]["id"].startswith("am_")


@pytest.mark.asyncio
async def test_import_account_manager_ids_follow_source_rows(test_client, user_headers):
    csv_text = "Name,Email\nAlice,alice@example.com\n,nobody@example.com\nBrian,\n"

    response = await test_client.post(
        "/api/v1/account-managers/import",
        files=_upload("managers.csv", csv_text.encode()),
        headers=user_headers,
    )

    ids = [m["id"] for m in response.json()["items"]]
    assert ids[0].endswith("_1")
    assert ids[1].endswith("_3")


@pytest.mark.asyncio
async def test_import_account_managers_requires_name_column(test_client, user_headers):
    response = await test_client.post(
        "/api/v1/account-managers/import",
        files=_upload("managers.csv", b"Email\na@example.com\n"),
        headers=user_headers,
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_import_account_managers_legacy_xls_is_rejected(test_client, user_headers):
    response = await test_client.post(
        "/api/v1/account-managers/import",
        files=_upload("managers.xls", b"\xd0\xcf\x11\xe0", "application/vnd.ms-excel"),
        headers=user_headers,
    )

    assert response.status_code == 400
    assert ".xlsx" in response.json()["error"]["message"]
