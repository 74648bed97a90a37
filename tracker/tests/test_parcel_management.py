"""
Integration tests for the Parcel API.

Tests registration, lookup, lifecycle changes and error responses over HTTP.
"""

import pytest


async def register(client, client_id: int = 1000, address: str = "test") -> dict:
    response = await client.post("/v1/parcels", json={"client": client_id, "address": address})
    assert response.status_code == 201
    return response.json()


# TEST 1: Register Parcel
@pytest.mark.asyncio
async def test_register_parcel(client):
    """A new parcel is registered with a number and creation time."""
    data = await register(client)
    
    assert data["number"] > 0
    assert data["client"] == 1000
    assert data["address"] == "test"
    assert data["status"] == "registered"
    assert data["created_at"].endswith("Z")


# TEST 2: Get Parcel
@pytest.mark.asyncio
async def test_get_parcel(client):
    created = await register(client)
    
    response = await client.get(f"/v1/parcels/{created['number']}")
    
    assert response.status_code == 200
    assert response.json() == created


# TEST 3: Missing Parcel
@pytest.mark.asyncio
async def test_get_missing_parcel_returns_404(client):
    response = await client.get("/v1/parcels/9999")
    
    assert response.status_code == 404
    body = response.json()
    assert body["error_code"] == "ERR_NOT_FOUND_001"
    assert body["details"] == {"resource": "Parcel", "id": 9999}


# TEST 4: Client Parcels
@pytest.mark.asyncio
async def test_list_client_parcels(client):
    first = await register(client, client_id=7)
    second = await register(client, client_id=7)
    await register(client, client_id=8)
    
    response = await client.get("/v1/clients/7/parcels")
    
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert {p["number"] for p in data["parcels"]} == {first["number"], second["number"]}


@pytest.mark.asyncio
async def test_list_client_without_parcels(client):
    response = await client.get("/v1/clients/12345/parcels")
    
    assert response.status_code == 200
    assert response.json() == {"parcels": [], "total": 0}


# TEST 5: Change Address
@pytest.mark.asyncio
async def test_change_address(client):
    created = await register(client)
    
    response = await client.patch(
        f"/v1/parcels/{created['number']}/address",
        json={"address": "new test address"}
    )
    
    assert response.status_code == 200
    assert response.json()["address"] == "new test address"
    
    stored = (await client.get(f"/v1/parcels/{created['number']}")).json()
    assert stored["address"] == "new test address"
    assert stored["created_at"] == created["created_at"]


# TEST 6: Status Lifecycle
@pytest.mark.asyncio
async def test_next_status_lifecycle(client):
    created = await register(client)
    url = f"/v1/parcels/{created['number']}/next-status"
    
    assert (await client.post(url)).json()["status"] == "sent"
    assert (await client.post(url)).json()["status"] == "delivered"
    assert (await client.post(url)).json()["status"] == "delivered"


# TEST 7: Sent Parcels Are Locked
@pytest.mark.asyncio
async def test_cannot_change_address_of_sent_parcel(client):
    created = await register(client)
    await client.post(f"/v1/parcels/{created['number']}/next-status")
    
    response = await client.patch(
        f"/v1/parcels/{created['number']}/address",
        json={"address": "too late"}
    )
    
    assert response.status_code == 409
    assert response.json()["error_code"] == "ERR_STATE_001"


@pytest.mark.asyncio
async def test_cannot_delete_sent_parcel(client):
    created = await register(client)
    await client.post(f"/v1/parcels/{created['number']}/next-status")
    
    response = await client.delete(f"/v1/parcels/{created['number']}")
    
    assert response.status_code == 409
    assert (await client.get(f"/v1/parcels/{created['number']}")).status_code == 200


# TEST 8: Delete
@pytest.mark.asyncio
async def test_delete_parcel(client):
    created = await register(client)
    
    response = await client.delete(f"/v1/parcels/{created['number']}")
    assert response.status_code == 204
    
    response = await client.get(f"/v1/parcels/{created['number']}")
    assert response.status_code == 404


# TEST 9: Validation
@pytest.mark.asyncio
async def test_register_requires_address(client):
    response = await client.post("/v1/parcels", json={"client": 1})
    
    assert response.status_code == 422
    assert response.json()["error_code"] == "ERR_VALIDATION"


# TEST 10: Observability
@pytest.mark.asyncio
async def test_correlation_id_is_echoed(client):
    response = await client.get("/health", headers={"X-Correlation-ID": "abc-123"})
    
    assert response.status_code == 200
    assert response.headers["X-Correlation-ID"] == "abc-123"
    assert "X-Process-Time" in response.headers


# TEST 11: Out-of-range identifiers
@pytest.mark.asyncio
@pytest.mark.parametrize("method, url", [
    ("GET", "/v1/parcels/18446744073709551616"),
    ("GET", "/v1/parcels/0"),
    ("DELETE", "/v1/parcels/18446744073709551616"),
    ("POST", "/v1/parcels/18446744073709551616/next-status"),
    ("GET", "/v1/clients/18446744073709551616/parcels"),
])
async def test_out_of_range_path_values_are_rejected(client, method, url):
    response = await client.request(method, url)
    
    assert response.status_code == 422
    assert response.json()["error_code"] == "ERR_VALIDATION"


@pytest.mark.asyncio
async def test_out_of_range_address_change_is_rejected(client):
    response = await client.patch(
        "/v1/parcels/18446744073709551616/address",
        json={"address": "x"}
    )
    
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_register_with_out_of_range_client_is_rejected(client):
    response = await client.post("/v1/parcels", json={"client": 2**64, "address": "x"})
    
    assert response.status_code == 422
