"""
Integration Tests for /plots (multipart forms)
"""
import pytest
from httpx import AsyncClient

from plotdesk.core.constants import Messages
from plotdesk.schemas import Plot


def _files(image):
    return {"imageUrl": (image.filename, image.content, image.content_type)}


async def _create(client, headers, fields, image) -> str:
    response = await client.post("/api/v1/plots", data=fields, files=_files(image), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["plotId"]


@pytest.mark.asyncio
async def test_create_and_read_plot(client: AsyncClient, owner_headers, plot_fields, png_image):
    plot_id = await _create(client, owner_headers, plot_fields, png_image)

    response = await client.get(f"/api/v1/plots/{plot_id}")

    assert response.status_code == 200
    data = response.json()
    assert data["plotNumber"] == "A-101"
    assert data["plotFacing"] == "North"
    assert data["pricePerSqft"] == 1000
    assert data["priceNegotiable"] is True
    assert data["imageUrl"].startswith("data:image/png;base64,")


@pytest.mark.asyncio
async def test_public_listing_and_search(client: AsyncClient, owner_headers, plot_fields, png_image):
    await _create(client, owner_headers, plot_fields, png_image)
    await _create(client, owner_headers, dict(plot_fields, plotNumber="B-202", plotFacing="East"), png_image)

    everything = await client.get("/api/v1/plots")
    east = await client.get("/api/v1/plots", params={"facing": "East"})
    searched = await client.get("/api/v1/plots", params={"q": "a-1", "facing": "All"})

    assert [p["plotNumber"] for p in everything.json()] == ["B-202", "A-101"]
    assert [p["plotNumber"] for p in east.json()] == ["B-202"]
    assert [p["plotNumber"] for p in searched.json()] == ["A-101"]


@pytest.mark.asyncio
async def test_duplicate_plot(client: AsyncClient, owner_headers, plot_fields, png_image, store):
    await _create(client, owner_headers, plot_fields, png_image)

    response = await client.post(
        "/api/v1/plots",
        data=dict(plot_fields, plotNumber="a-101"),
        files=_files(png_image),
        headers=owner_headers
    )

    assert response.status_code == 409
    assert response.json()["message"] == Messages.PLOT_EXISTS
    assert len(await store.list(Plot)) == 1


@pytest.mark.asyncio
async def test_missing_image(client: AsyncClient, owner_headers, plot_fields):
    response = await client.post("/api/v1/plots", data=plot_fields, headers=owner_headers)

    assert response.status_code == 422
    assert response.json()["errors"] == {"imageUrl": [Messages.IMAGE_REQUIRED]}


@pytest.mark.asyncio
async def test_json_body_is_rejected(client: AsyncClient, owner_headers, plot_fields):
    response = await client.post("/api/v1/plots", json=plot_fields, headers=owner_headers)
    assert response.status_code == 415


@pytest.mark.asyncio
async def test_only_owner_manages_plots(client: AsyncClient, user_headers, plot_fields, png_image):
    anonymous = await client.post("/api/v1/plots", data=plot_fields, files=_files(png_image))
    as_user = await client.post("/api/v1/plots", data=plot_fields, files=_files(png_image), headers=user_headers)

    assert anonymous.status_code == 401
    assert as_user.status_code == 403


@pytest.mark.asyncio
async def test_update_without_new_image(client: AsyncClient, owner_headers, plot_fields, png_image, store):
    plot_id = await _create(client, owner_headers, plot_fields, png_image)
    before = await store.get(Plot, plot_id)

    response = await client.put(
        f"/api/v1/plots/{plot_id}",
        data=dict(plot_fields, status="Under Negotiation"),
        headers=owner_headers
    )

    assert response.status_code == 200
    assert response.json()["message"] == Messages.PLOT_UPDATED
    after = await store.get(Plot, plot_id)
    assert after.status.value == "Under Negotiation"
    assert after.image_url == before.image_url

    # The detail view was invalidated
    detail = await client.get(f"/api/v1/plots/{plot_id}")
    assert detail.json()["status"] == "Under Negotiation"


@pytest.mark.asyncio
async def test_update_with_bad_image_changes_nothing(client: AsyncClient, owner_headers, plot_fields, png_image, store):
    plot_id = await _create(client, owner_headers, plot_fields, png_image)
    before = await store.get(Plot, plot_id)

    response = await client.put(
        f"/api/v1/plots/{plot_id}",
        data=dict(plot_fields, areaName="Changed"),
        files={"imageUrl": ("notes.txt", b"plain text", "text/plain")},
        headers=owner_headers
    )

    assert response.status_code == 422
    assert await store.get(Plot, plot_id) == before


@pytest.mark.asyncio
async def test_delete_plot(client: AsyncClient, owner_headers, plot_fields, png_image):
    plot_id = await _create(client, owner_headers, plot_fields, png_image)

    deleted = await client.delete(f"/api/v1/plots/{plot_id}", headers=owner_headers)
    missing = await client.get(f"/api/v1/plots/{plot_id}")

    assert deleted.status_code == 200
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "PLOT_NOT_FOUND"
