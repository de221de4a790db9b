"""HTTP tests for the Hestia API with storage, cache and database swapped out."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from hestia.api.dependencies.database import get_db, get_session_factory
from hestia.api.dependencies.services import get_query_cache, get_storage
from hestia.api.main import create_application
from hestia.shared.utils.constants import CRAFT_CATEGORIES

from tests.conftest import COMPLETE_DRAFT, image_bytes


# ═══════════════════════════════════════════
#  FIXTURES
# ═══════════════════════════════════════════


@pytest.fixture
def client(session_factory, storage, query_cache):
    app = create_application()

    async def test_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_db] = test_db
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_query_cache] = lambda: query_cache
    return TestClient(app)


@pytest.fixture
def headers(user_id):
    return {"X-User-Id": str(user_id)}


def upload(client, headers, name="pot.png", data=None, content_type="image/png", **form):
    files = {"file": (name, data if data is not None else image_bytes(), content_type)}
    return client.post("/artisan/draft/gallery", headers=headers, files=files, data=form)


# ═══════════════════════════════════════════
#  HEALTH
# ═══════════════════════════════════════════


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["service"] == "hestia"


def test_live_and_ready(client):
    assert client.get("/live").json() == {"status": "alive"}

    ready = client.get("/ready")
    assert ready.status_code == 200
    assert ready.json() == {"status": "ready", "database": True, "cache": True}


def test_openapi_documents_error_body(client):
    schema = client.get("/openapi.json").json()
    assert "ErrorResponse" in schema["components"]["schemas"]
    assert "409" in schema["paths"]["/artisan/gallery/{asset_id}"]["patch"]["responses"]


# ═══════════════════════════════════════════
#  IDENTITY
# ═══════════════════════════════════════════


def test_missing_user_header(client):
    response = client.get("/artisan/draft")
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTHENTICATION_ERROR"


def test_malformed_user_header(client):
    response = client.get("/artisan/draft", headers={"X-User-Id": "not-a-uuid"})
    assert response.status_code == 401


# ═══════════════════════════════════════════
#  DRAFT
# ═══════════════════════════════════════════


def test_options(client):
    body = client.get("/artisan/options").json()
    assert body["categories"] == list(CRAFT_CATEGORIES)
    assert "Tiong Bahru" in body["locations"]
    assert "Joo Chiat" in body["locations"]
    assert body["max_featured_images"] == 3


def test_get_draft_before_onboarding(client, headers):
    response = client.get("/artisan/draft", headers=headers)
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


def test_create_draft_is_idempotent(client, headers):
    first = client.post("/artisan/draft", headers=headers)
    second = client.post("/artisan/draft", headers=headers)

    assert first.status_code == 201
    assert first.json()["id"] == second.json()["id"]


def test_patch_is_partial(client, headers):
    client.patch("/artisan/draft", headers=headers, json={"bio": "Hand-built planters", "category": "Other"})
    response = client.patch("/artisan/draft", headers=headers, json={"location": "Bedok"})

    assert response.status_code == 200
    body = response.json()
    assert body["bio"] == "Hand-built planters"
    assert body["category"] == "Other"
    assert body["location"] == "Bedok"
    assert body["status"] == "draft"

    cleared = client.patch("/artisan/draft", headers=headers, json={"bio": None}).json()
    assert cleared["bio"] is None
    assert cleared["category"] == "Other"


def test_empty_patch_does_not_create_draft(client, headers):
    assert client.patch("/artisan/draft", headers=headers, json={}).status_code == 404
    assert client.get("/artisan/draft", headers=headers).status_code == 404

    created = client.post("/artisan/draft", headers=headers).json()
    response = client.patch("/artisan/draft", headers=headers, json={})

    assert response.status_code == 200
    assert response.json()["id"] == created["id"]


def test_patch_rejects_bad_payload(client, headers):
    response = client.patch("/artisan/draft", headers=headers, json={"contact_channel": "pigeon"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


# ═══════════════════════════════════════════
#  GALLERY
# ═══════════════════════════════════════════


def test_upload_creates_draft_and_asset(client, headers, storage):
    response = upload(client, headers)

    assert response.status_code == 201
    asset = response.json()
    assert asset["title"] == "pot.png"
    assert asset["position"] == 0
    assert asset["is_featured"] is False
    assert storage.objects[asset["storage_path"]][1] == "image/webp"

    draft = client.get("/artisan/draft", headers=headers).json()
    assert draft["id"] == asset["artisan_id"]


def test_upload_with_explicit_crop(client, headers):
    response = upload(client, headers, x="10", y="10", width="200", height="200")
    assert response.status_code == 201


def test_upload_with_partial_crop(client, headers):
    response = upload(client, headers, x="10", y="10")
    assert response.status_code == 400


def test_upload_crop_outside_image(client, headers):
    response = upload(client, headers, x="300", y="0", width="200", height="200")
    assert response.status_code == 400


def test_upload_rejects_non_image(client, headers):
    response = upload(client, headers, name="notes.txt", data=b"hello", content_type="text/plain")
    assert response.status_code == 400


def test_upload_rejects_undecodable_image(client, headers):
    response = upload(client, headers, data=b"not a png")
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "DECODE_FAILED"
    assert client.get("/artisan/draft", headers=headers).status_code == 404


def test_upload_storage_outage(client, headers, storage):
    storage.fail_upload = True
    response = upload(client, headers)
    assert response.status_code == 502
    assert response.json()["error"]["code"] == "UPLOAD_FAILED"


def test_feature_cap_and_delete(client, headers):
    ids = [upload(client, headers, name=f"{i}.png").json()["id"] for i in range(4)]

    for asset_id in ids[:3]:
        response = client.patch(f"/artisan/gallery/{asset_id}", headers=headers, json={"is_featured": True})
        assert response.json()["is_featured"] is True

    capped = client.patch(f"/artisan/gallery/{ids[3]}", headers=headers, json={"is_featured": True})
    assert capped.status_code == 409
    assert capped.json()["error"]["code"] == "FEATURED_LIMIT_EXCEEDED"

    deleted = client.delete(f"/artisan/gallery/{ids[0]}", headers=headers)
    assert deleted.status_code == 200

    gallery = client.get("/artisan/draft/gallery", headers=headers).json()
    assert [a["id"] for a in gallery] == ids[1:]


def test_cannot_touch_another_users_image(client, headers):
    asset_id = upload(client, headers).json()["id"]
    stranger = {"X-User-Id": str(uuid4())}

    assert client.delete(f"/artisan/gallery/{asset_id}", headers=stranger).status_code == 404
    assert client.patch(
        f"/artisan/gallery/{asset_id}", headers=stranger, json={"is_featured": True}
    ).status_code == 404


def test_gallery_of_new_user_is_empty(client, headers):
    assert client.get("/artisan/draft/gallery", headers=headers).json() == []


# ═══════════════════════════════════════════
#  PUBLISH
# ═══════════════════════════════════════════


def test_publish_incomplete(client, headers):
    response = client.post("/artisan/draft/publish", headers=headers)

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_FAILED"
    assert "Display name is required" in error["details"]["errors"]


def test_publish_and_unpublish(client, headers, user_id, query_cache):
    client.patch("/artisan/draft", headers=headers, json=COMPLETE_DRAFT.model_dump(exclude_unset=True))
    for i in range(3):
        upload(client, headers, name=f"{i}.png")

    published = client.post("/artisan/draft/publish", headers=headers)
    assert published.status_code == 200
    assert published.json()["success"] is True
    assert client.get("/artisan/draft", headers=headers).json()["status"] == "published"
    assert query_cache.invalidated[0][0] == user_id

    unpublished = client.post("/artisan/draft/unpublish", headers=headers).json()
    assert unpublished == {"message": "Profile unpublished", "success": True}

    again = client.post("/artisan/draft/unpublish", headers=headers).json()
    assert again["success"] is False


def test_publish_with_pending_form(client, headers):
    form = COMPLETE_DRAFT.model_dump(exclude_unset=True)
    client.patch("/artisan/draft", headers=headers, json={**form, "location": None})
    for i in range(3):
        upload(client, headers, name=f"{i}.png")

    published = client.post("/artisan/draft/publish", headers=headers, json={"location": "Katong"})

    assert published.status_code == 200
    assert client.get("/artisan/draft", headers=headers).json()["location"] == "Katong"
