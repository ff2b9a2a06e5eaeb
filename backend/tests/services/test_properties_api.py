"""Property Routes — HTTP surface for registration, details, ownership, status, category, versions.

Invariants:
    - Mutations need X-Caller; missing header → 400 VALIDATION_ERROR
    - Domain errors map to 403/404/400/409 with the domain error code
    - Reads of absent records return 200 with null
"""

HEADERS_OWNER = {"X-Caller": "wallet_1"}
HEADERS_COLLAB = {"X-Caller": "wallet_2"}
HEADERS_USER = {"X-Caller": "wallet_3"}

BASE = "/api/v1/properties"


async def _register(client) -> int:
    res = await client.post(
        BASE,
        json={
            "address": "123 Main St", "value": 1_000_000,
            "rental_income": 5_000, "description": "Co-working space in downtown",
        },
        headers=HEADERS_OWNER,
    )
    assert res.status_code == 201
    return res.json()["property_id"]


# ─── Registration & details ──────────────────────────────────────

async def test_register_returns_201_and_id(client):
    assert await _register(client) == 1
    res = await client.get(f"{BASE}/1")
    body = res.json()
    assert body["owner"] == "wallet_1"
    assert body["value"] == 1_000_000
    assert body["active"] is True
    assert body["lifecycle"] == "active"


async def test_register_invalid_params_returns_domain_error(client):
    res = await client.post(
        BASE,
        json={"address": "x", "value": 0, "rental_income": 0, "description": "a" * 501},
        headers=HEADERS_OWNER,
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_PARAMS"
    assert res.json()["error"]["numeric_code"] == 3
    assert (await client.get(f"{BASE}/next-id")).json() == {"next_property_id": 1}


async def test_register_without_caller_header_is_rejected(client):
    res = await client.post(BASE, json={"address": "x", "value": 1})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_missing_property_reads_as_null(client):
    res = await client.get(f"{BASE}/42")
    assert res.status_code == 200
    assert res.json() is None


async def test_height_and_next_id(client):
    await _register(client)
    assert (await client.get(f"{BASE}/height")).json() == {"height": 1}
    assert (await client.get(f"{BASE}/next-id")).json() == {"next_property_id": 2}


# ─── Update / transfer / deactivate ──────────────────────────────

async def test_patch_merges_fields(client):
    await _register(client)
    res = await client.patch(
        f"{BASE}/1", json={"address": "456 New St", "value": 2_000_000},
        headers=HEADERS_OWNER,
    )
    assert res.json() == {"ok": True}
    body = (await client.get(f"{BASE}/1")).json()
    assert body["address"] == "456 New St"
    assert body["value"] == 2_000_000
    assert body["rental_income"] == 5_000


async def test_patch_with_null_field_is_rejected_without_advancing(client):
    await _register(client)
    res = await client.patch(
        f"{BASE}/1", json={"address": None}, headers=HEADERS_OWNER,
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
    assert (await client.get(f"{BASE}/height")).json() == {"height": 1}
    assert (await client.get(f"{BASE}/1")).json()["address"] == "123 Main St"


async def test_patch_with_falsy_value_is_applied(client):
    await _register(client)
    res = await client.patch(
        f"{BASE}/1", json={"rental_income": 0, "description": ""},
        headers=HEADERS_OWNER,
    )
    assert res.status_code == 200
    body = (await client.get(f"{BASE}/1")).json()
    assert body["rental_income"] == 0
    assert body["description"] == ""
    assert body["address"] == "123 Main St"


async def test_patch_by_non_owner_is_forbidden(client):
    await _register(client)
    res = await client.patch(f"{BASE}/1", json={"address": "x"}, headers=HEADERS_USER)
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "UNAUTHORIZED"


async def test_patch_missing_property_is_404(client):
    res = await client.patch(f"{BASE}/9", json={"address": "x"}, headers=HEADERS_OWNER)
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "NOT_FOUND"


async def test_transfer_then_verify_ownership(client):
    await _register(client)
    res = await client.post(
        f"{BASE}/1/transfer", json={"new_owner": "wallet_3"}, headers=HEADERS_OWNER,
    )
    assert res.status_code == 200
    assert (await client.get(f"{BASE}/1/owner/wallet_3")).json() == {"is_owner": True}
    assert (await client.get(f"{BASE}/1/owner/wallet_1")).json() == {"is_owner": False}


async def test_deactivate(client):
    await _register(client)
    res = await client.post(f"{BASE}/1/deactivate", headers=HEADERS_OWNER)
    assert res.status_code == 200
    body = (await client.get(f"{BASE}/1")).json()
    assert body["active"] is False
    assert body["lifecycle"] == "deactivated"


# ─── Status / category / versions ────────────────────────────────

async def test_status_flow_with_collaborator(client):
    await _register(client)
    assert (await client.get(f"{BASE}/1/status")).json()["status"] == "pending"

    res = await client.put(
        f"{BASE}/1/status", json={"status": "occupied", "visibility": True},
        headers=HEADERS_COLLAB,
    )
    assert res.status_code == 403

    await client.put(
        f"{BASE}/1/collaborators/wallet_2",
        json={"role": "manager", "permissions": ["update-status"]},
        headers=HEADERS_OWNER,
    )
    res = await client.put(
        f"{BASE}/1/status", json={"status": "occupied", "visibility": False},
        headers=HEADERS_COLLAB,
    )
    assert res.status_code == 200
    status = (await client.get(f"{BASE}/1/status")).json()
    assert status["status"] == "occupied"
    assert status["visibility"] is False


async def test_category(client):
    await _register(client)
    assert (await client.get(f"{BASE}/1/category")).json() is None
    res = await client.put(
        f"{BASE}/1/category", json={"category": "co-working", "tags": ["urban", "tech"]},
        headers=HEADERS_OWNER,
    )
    assert res.status_code == 200
    assert (await client.get(f"{BASE}/1/category")).json() == {
        "category": "co-working", "tags": ["urban", "tech"],
    }


async def test_register_new_version(client):
    await _register(client)
    res = await client.put(
        f"{BASE}/1/versions/1",
        json={"new_value": 1_500_000, "notes": "Renovations completed"},
        headers=HEADERS_OWNER,
    )
    assert res.status_code == 200
    version = (await client.get(f"{BASE}/1/versions/1")).json()
    assert version["updated_value"] == 1_500_000
    assert version["notes"] == "Renovations completed"
    assert (await client.get(f"{BASE}/1")).json()["value"] == 1_500_000
    assert (await client.get(f"{BASE}/1/versions/2")).json() is None


async def test_health_probes(client):
    assert (await client.get("/api/v1/health/")).status_code == 200
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"
