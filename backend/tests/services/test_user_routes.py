"""User Routes — end-to-end HTTP tests for /users.

Invariants:
    - Five users are seeded before each test (seeded_users fixture)
    - Malformed ids are 400, well-formed unknown ids are 404, for every verb
    - Missing, null, or empty name/email on POST/PUT is 400
    - Success bodies are {"data": ...} with the id serialized as "_id"
"""

from uuid import uuid4

import pytest

from user_service.core.domain_types import EMAIL_MAX_LENGTH, NAME_MAX_LENGTH

ENDPOINT = "/users"

VALID_EMAIL = "new.user@example.com"
VALID_NAME = "New User"

INVALID_BODIES = [
    pytest.param({"name": None, "email": VALID_EMAIL}, id="null-name"),
    pytest.param({"email": VALID_EMAIL}, id="undefined-name"),
    pytest.param({"name": "", "email": VALID_EMAIL}, id="empty-name"),
    pytest.param({"name": VALID_NAME, "email": None}, id="null-email"),
    pytest.param({"name": VALID_NAME}, id="undefined-email"),
    pytest.param({"name": VALID_NAME, "email": ""}, id="empty-email"),
    pytest.param(
        {"name": VALID_NAME, "email": "Sed ut perspiciatis unde omnis."},
        id="invalid-email",
    ),
    pytest.param({"name": 42, "email": VALID_EMAIL}, id="non-string-name"),
]


# ─── GET /users ──────────────────────────────────────────────────

async def test_list_returns_all_users(client, seeded_users):
    res = await client.get(ENDPOINT)
    assert res.status_code == 200
    assert len(res.json()["data"]) == len(seeded_users)


async def test_list_preserves_insertion_order(client, seeded_users):
    res = await client.get(ENDPOINT)
    ids = [u["_id"] for u in res.json()["data"]]
    assert ids == [str(u.id) for u in seeded_users]


async def test_list_empty_collection(client):
    res = await client.get(ENDPOINT)
    assert res.status_code == 200
    assert res.json() == {"data": []}


async def test_list_filters_by_email(client, seeded_users):
    target = seeded_users[2]
    res = await client.get(ENDPOINT, params={"email": target.email})
    assert res.status_code == 200
    data = res.json()["data"]
    assert len(data) == 1
    assert data[0]["_id"] == str(target.id)


async def test_list_filters_by_name_and_email(client, seeded_users):
    target = seeded_users[0]
    res = await client.get(
        ENDPOINT, params={"name": target.name, "email": target.email},
    )
    assert [u["_id"] for u in res.json()["data"]] == [str(target.id)]

    mismatch = await client.get(
        ENDPOINT, params={"name": target.name, "email": seeded_users[1].email},
    )
    assert mismatch.json() == {"data": []}


async def test_list_trailing_slash_redirects_to_collection(client, seeded_users):
    res = await client.get(f"{ENDPOINT}/")
    assert res.status_code == 307
    assert res.headers["location"].endswith(ENDPOINT)


# ─── POST /users ─────────────────────────────────────────────────

async def test_create_returns_201(client, seeded_users):
    res = await client.post(ENDPOINT, json={"name": "Alice", "email": "alice@example.com"})
    assert res.status_code == 201
    data = res.json()["data"]
    assert data["_id"]
    assert data["name"] == "Alice"
    assert data["email"] == "alice@example.com"


async def test_create_then_get_round_trips_fields(client):
    created = await client.post(ENDPOINT, json={"name": VALID_NAME, "email": VALID_EMAIL})
    user_id = created.json()["data"]["_id"]

    res = await client.get(f"{ENDPOINT}/{user_id}")
    assert res.status_code == 200
    assert res.json()["data"] == {"_id": user_id, "name": VALID_NAME, "email": VALID_EMAIL}


async def test_create_adds_to_listing(client, seeded_users):
    await client.post(ENDPOINT, json={"name": VALID_NAME, "email": VALID_EMAIL})
    res = await client.get(ENDPOINT)
    data = res.json()["data"]
    assert len(data) == len(seeded_users) + 1
    assert data[-1]["name"] == VALID_NAME


@pytest.mark.parametrize("body", INVALID_BODIES)
async def test_create_rejects_invalid_body(client, seeded_users, body):
    res = await client.post(ENDPOINT, json=body)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"

    listing = await client.get(ENDPOINT)
    assert len(listing.json()["data"]) == len(seeded_users)


async def test_create_without_body_reports_both_fields(client):
    res = await client.post(ENDPOINT)
    assert res.status_code == 400
    details = res.json()["error"]["details"]
    assert details == [
        {"field": "name", "reason": "missing"},
        {"field": "email", "reason": "missing"},
    ]


# ─── GET /users/{id} ─────────────────────────────────────────────

async def test_get_by_id_returns_200(client, seeded_users):
    user = seeded_users[3]
    res = await client.get(f"{ENDPOINT}/{user.id}")
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["_id"] == str(user.id)
    assert data["name"] == user.name
    assert data["email"] == user.email


async def test_get_by_id_invalid_returns_400(client, seeded_users):
    res = await client.get(f"{ENDPOINT}/invalid}}")
    assert res.status_code == 400
    assert res.json()["error"]["details"] == [{"field": "id", "reason": "malformed"}]


async def test_get_by_id_unknown_returns_404(client, seeded_users):
    res = await client.get(f"{ENDPOINT}/{uuid4()}")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


# ─── PUT /users/{id} ─────────────────────────────────────────────

async def test_put_returns_200(client, seeded_users):
    user = seeded_users[1]
    res = await client.put(
        f"{ENDPOINT}/{user.id}", json={"name": VALID_NAME, "email": VALID_EMAIL},
    )
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["_id"] == str(user.id)
    assert data["name"] == VALID_NAME
    assert data["email"] == VALID_EMAIL


async def test_put_persists_replacement(client, seeded_users):
    user = seeded_users[0]
    await client.put(f"{ENDPOINT}/{user.id}", json={"name": VALID_NAME, "email": VALID_EMAIL})
    res = await client.get(f"{ENDPOINT}/{user.id}")
    assert res.json()["data"]["name"] == VALID_NAME
    assert res.json()["data"]["email"] == VALID_EMAIL


async def test_put_invalid_id_returns_400(client, seeded_users):
    res = await client.put(f"{ENDPOINT}/invalid}}")
    assert res.status_code == 400


async def test_put_unknown_id_returns_404(client, seeded_users):
    res = await client.put(f"{ENDPOINT}/{uuid4()}")
    assert res.status_code == 404


async def test_put_unknown_id_with_body_returns_404(client, seeded_users):
    res = await client.put(
        f"{ENDPOINT}/{uuid4()}", json={"name": VALID_NAME, "email": VALID_EMAIL},
    )
    assert res.status_code == 404


async def test_put_known_id_without_body_returns_400(client, seeded_users):
    res = await client.put(f"{ENDPOINT}/{seeded_users[0].id}")
    assert res.status_code == 400


@pytest.mark.parametrize("body", INVALID_BODIES)
async def test_put_rejects_invalid_body(client, seeded_users, body):
    user = seeded_users[4]
    res = await client.put(f"{ENDPOINT}/{user.id}", json=body)
    assert res.status_code == 400

    unchanged = await client.get(f"{ENDPOINT}/{user.id}")
    assert unchanged.json()["data"]["name"] == user.name


# ─── DELETE /users/{id} ──────────────────────────────────────────

async def test_delete_returns_200_with_snapshot(client, seeded_users):
    user = seeded_users[2]
    res = await client.delete(f"{ENDPOINT}/{user.id}")
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["_id"] == str(user.id)
    assert data["name"] == user.name
    assert data["email"] == user.email


async def test_delete_then_get_returns_404(client, seeded_users):
    user = seeded_users[2]
    await client.delete(f"{ENDPOINT}/{user.id}")
    res = await client.get(f"{ENDPOINT}/{user.id}")
    assert res.status_code == 404

    listing = await client.get(ENDPOINT)
    assert len(listing.json()["data"]) == len(seeded_users) - 1


async def test_delete_invalid_id_returns_400(client, seeded_users):
    res = await client.delete(f"{ENDPOINT}/invalid}}")
    assert res.status_code == 400


async def test_delete_unknown_id_returns_404(client, seeded_users):
    res = await client.delete(f"{ENDPOINT}/{uuid4()}")
    assert res.status_code == 404


# ─── Storage unavailable ─────────────────────────────────────────

async def test_disconnected_storage_returns_503(client, db_manager):
    await db_manager.disconnect()
    res = await client.get(ENDPOINT)
    assert res.status_code == 503
    assert res.json()["error"]["code"] == "DATABASE_ERROR"


# ─── Length limits ───────────────────────────────────────────────

def _email_of_length(length: int) -> str:
    domain = "@example.com"
    return "a" * (length - len(domain)) + domain


OVERLONG_BODIES = [
    pytest.param(
        {"name": "x" * (NAME_MAX_LENGTH + 1), "email": VALID_EMAIL}, id="long-name",
    ),
    pytest.param(
        {"name": VALID_NAME, "email": _email_of_length(EMAIL_MAX_LENGTH + 1)},
        id="long-email",
    ),
]


async def test_create_accepts_fields_at_max_length(client):
    body = {
        "name": "x" * NAME_MAX_LENGTH,
        "email": _email_of_length(EMAIL_MAX_LENGTH),
    }
    res = await client.post(ENDPOINT, json=body)
    assert res.status_code == 201
    assert res.json()["data"]["name"] == body["name"]
    assert res.json()["data"]["email"] == body["email"]


@pytest.mark.parametrize("body", OVERLONG_BODIES)
async def test_create_rejects_overlong_fields(client, seeded_users, body):
    res = await client.post(ENDPOINT, json=body)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"

    listing = await client.get(ENDPOINT)
    assert len(listing.json()["data"]) == len(seeded_users)


@pytest.mark.parametrize("body", OVERLONG_BODIES)
async def test_put_rejects_overlong_fields(client, seeded_users, body):
    user = seeded_users[0]
    res = await client.put(f"{ENDPOINT}/{user.id}", json=body)
    assert res.status_code == 400

    unchanged = await client.get(f"{ENDPOINT}/{user.id}")
    assert unchanged.json()["data"]["name"] == user.name


async def test_create_echoes_internationalized_email(client):
    body = {"name": "Zoë", "email": "zoë@exämple.com"}
    res = await client.post(ENDPOINT, json=body)
    assert res.status_code == 201
    assert res.json()["data"]["email"] == body["email"]
