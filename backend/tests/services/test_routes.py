"""HTTP Adapter — route tests over the full FastAPI app with a test database.

Tests cover:
    - Error kinds map to status codes: 400 validation, 403 permission,
      404 not found, 409 conflict
    - Error envelope shape ({"error": {"code", "category", ...}})
    - Caller identity from X-User-Id / X-User-Role; missing header → 400
    - Category writes are admin-only: 403 for other roles
    - PATCH forwards only supplied keys: {"parent_id": null} moves to root
    - Comment payloads accept "content" or "body"
    - Like toggle round trip and stats
    - Health checks
"""

ALICE = {"X-User-Id": "1"}
BOB = {"X-User-Id": "2"}
ADMIN = {"X-User-Id": "3", "X-User-Role": "admin"}
USER_7 = {"X-User-Id": "7"}


# ─── Health ──────────────────────────────────────────────────────

async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_uses_database(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


# ─── Categories ──────────────────────────────────────────────────

async def _create_category(client, name, parent_id=None):
    res = await client.post(
        "/api/v1/categories", json={"name": name, "parent_id": parent_id}, headers=ADMIN,
    )
    assert res.status_code == 201
    return res.json()


async def test_category_writes_require_admin(client):
    res = await client.post("/api/v1/categories", json={"name": "Movies"}, headers=ALICE)
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "PERMISSION_DENIED"

    movies = await _create_category(client, "Movies")
    patched = await client.patch(
        f"/api/v1/categories/{movies['id']}", json={"name": "Films"}, headers=BOB,
    )
    assert patched.status_code == 403
    deleted = await client.delete(f"/api/v1/categories/{movies['id']}", headers=BOB)
    assert deleted.status_code == 403

    anonymous = await client.delete(f"/api/v1/categories/{movies['id']}")
    assert anonymous.status_code == 400
    still_there = await client.get(f"/api/v1/categories/{movies['id']}")
    assert still_there.json()["name"] == "Movies"


async def test_admin_role_header_is_case_insensitive(client):
    res = await client.post(
        "/api/v1/categories", json={"name": "Music"},
        headers={"X-User-Id": "3", "X-User-Role": "Admin"},
    )
    assert res.status_code == 201


async def test_category_cycle_rejected_with_400(client):
    movies = await _create_category(client, "Movies")
    action = await _create_category(client, "Action", movies["id"])

    res = await client.patch(
        f"/api/v1/categories/{movies['id']}", json={"parent_id": action["id"]},
        headers=ADMIN,
    )

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
    assert res.json()["error"]["category"] == "validation"


async def test_category_patch_null_parent_moves_to_root(client):
    movies = await _create_category(client, "Movies")
    action = await _create_category(client, "Action", movies["id"])

    renamed = await client.patch(
        f"/api/v1/categories/{action['id']}", json={"description": "Fast"},
        headers=ADMIN,
    )
    assert renamed.json()["parent_id"] == movies["id"]

    moved = await client.patch(
        f"/api/v1/categories/{action['id']}", json={"parent_id": None},
        headers=ADMIN,
    )
    assert moved.status_code == 200
    assert moved.json()["parent_id"] is None
    assert moved.json()["description"] == "Fast"


async def test_duplicate_category_name_is_409(client):
    await client.post("/api/v1/categories", json={"name": "Movies"}, headers=ADMIN)
    res = await client.post("/api/v1/categories", json={"name": "Movies"}, headers=ADMIN)
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "RESOURCE_CONFLICT"


async def test_missing_category_is_404(client):
    res = await client.get("/api/v1/categories/999")
    assert res.status_code == 404
    assert res.json()["error"]["context"]["resource_type"] == "Category"


async def test_circular_check_and_audit(client):
    movies = await _create_category(client, "Movies")
    action = await _create_category(client, "Action", movies["id"])

    res = await client.get(
        f"/api/v1/categories/{movies['id']}/circular-check",
        params={"parent_id": action["id"]},
    )
    assert res.json()["circular"] is True

    audit = await client.get("/api/v1/categories/audit")
    assert audit.json() == {"corrupted_ids": []}


async def test_delete_category(client):
    movies = await _create_category(client, "Movies")
    res = await client.delete(f"/api/v1/categories/{movies['id']}", headers=ADMIN)
    assert res.status_code == 204
    assert (await client.get(f"/api/v1/categories/{movies['id']}")).status_code == 404


# ─── Comments ────────────────────────────────────────────────────

async def test_comment_requires_caller_header(client):
    res = await client.post(
        "/api/v1/comments", json={"content_id": 42, "body": "Hi"},
    )
    assert res.status_code == 400


async def test_comment_accepts_content_field(client):
    res = await client.post(
        "/api/v1/comments",
        json={"content_id": 42, "content": "From content", "body": "From body"},
        headers=ALICE,
    )
    assert res.status_code == 201
    assert res.json()["body"] == "From content"
    assert res.json()["user_id"] == 1


async def test_comment_too_long_is_400(client):
    res = await client.post(
        "/api/v1/comments", json={"content_id": 42, "body": "x" * 1001}, headers=ALICE,
    )
    assert res.status_code == 400
    assert res.json()["error"]["category"] == "validation"


async def test_non_author_edit_is_403(client):
    comment = (await client.post(
        "/api/v1/comments", json={"content_id": 42, "body": "Mine"}, headers=ALICE,
    )).json()

    res = await client.patch(
        f"/api/v1/comments/{comment['id']}", json={"body": ""}, headers=BOB,
    )
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "PERMISSION_DENIED"

    admin = await client.patch(
        f"/api/v1/comments/{comment['id']}", json={"content": "Moderated"}, headers=ADMIN,
    )
    assert admin.status_code == 200
    assert admin.json()["body"] == "Moderated"


async def test_comment_thread_listing_and_cascade(client):
    root = (await client.post(
        "/api/v1/comments", json={"content_id": 42, "body": "Root"}, headers=ALICE,
    )).json()
    await client.post(
        "/api/v1/comments",
        json={"content_id": 42, "body": "Reply", "parent_id": root["id"]},
        headers=BOB,
    )

    listing = (await client.get("/api/v1/comments/content/42")).json()
    assert listing["total"] == 1
    assert listing["comment_count"] == 2
    assert listing["items"][0]["reply_count"] == 1
    assert listing["items"][0]["replies"][0]["body"] == "Reply"

    res = await client.delete(f"/api/v1/comments/{root['id']}", headers=ALICE)
    assert res.status_code == 204
    after = (await client.get("/api/v1/comments/content/42")).json()
    assert after["comment_count"] == 0


# ─── Ratings ─────────────────────────────────────────────────────

async def test_toggle_like_round_trip(client):
    first = await client.post("/api/v1/ratings/content/42/toggle", headers=USER_7)
    assert first.status_code == 200
    assert first.json()["outcome"] == "created"
    assert first.json()["has_liked"] is True
    stats = (await client.get("/api/v1/ratings/content/42/stats")).json()
    assert stats == {"content_id": 42, "like_count": 1, "count": 1}

    second = await client.post("/api/v1/ratings/content/42/toggle", headers=USER_7)
    assert second.json()["outcome"] == "removed"
    assert second.json()["rating"] is None
    stats = (await client.get("/api/v1/ratings/content/42/stats")).json()
    assert stats["like_count"] == 0


async def test_toggle_like_unknown_content_is_404(client):
    res = await client.post("/api/v1/ratings/content/999/toggle", headers=USER_7)
    assert res.status_code == 404


async def test_delete_rating_permissions(client):
    liked = (await client.post("/api/v1/ratings/content/42/toggle", headers=USER_7)).json()
    rating_id = liked["rating"]["id"]

    denied = await client.delete(f"/api/v1/ratings/{rating_id}", headers=BOB)
    assert denied.status_code == 403

    res = await client.delete(f"/api/v1/ratings/{rating_id}", headers=ADMIN)
    assert res.status_code == 204


async def test_top_rated_and_batch_stats(client):
    await client.post("/api/v1/ratings/content/42/toggle", headers=USER_7)
    await client.post("/api/v1/ratings/content/42/toggle", headers=BOB)
    await client.post("/api/v1/ratings/content/41/toggle", headers=USER_7)

    top = await client.get("/api/v1/ratings/top", params={"limit": 5})
    assert top.json() == {"content_ids": [42, 41]}

    batch = await client.post("/api/v1/ratings/stats", json={"content_ids": [41, 42, 7]})
    assert batch.json()["7"]["like_count"] == 0
    assert batch.json()["42"]["like_count"] == 2


async def test_rating_status_for_caller(client):
    await client.post("/api/v1/ratings/content/42/toggle", headers=USER_7)
    mine = (await client.get("/api/v1/ratings/content/42/status", headers=USER_7)).json()
    theirs = (await client.get("/api/v1/ratings/content/42/status", headers=BOB)).json()
    assert mine["has_liked"] is True
    assert theirs["has_liked"] is False
