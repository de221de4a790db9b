"""Tests for the draft profile store (SQLite + in-memory object storage)."""

import asyncio
from uuid import uuid4

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from hestia.shared.core.exceptions import (
    CreationFailedError,
    DraftNotFoundError,
    FeaturedLimitExceededError,
    GalleryImageNotFoundError,
    UploadFailedError,
)
from hestia.shared.models import Artisan, ArtisanStatus, ContactChannel, Profile, ProfileRole
from hestia.shared.repositories.artisan_repository import ArtisanRepository
from hestia.shared.repositories.gallery_image_repository import GalleryImageRepository
from hestia.shared.schemas.artisan import DraftUpdate
from hestia.shared.services.draft_profile_service import DraftProfileService, draft_columns


async def count_artisans(session_factory, user_id) -> int:
    async with session_factory() as session:
        stmt = select(func.count()).select_from(Artisan).where(Artisan.user_id == user_id)
        return (await session.execute(stmt)).scalar_one()


# ═══════════════════════════════════════════
#  CREATION
# ═══════════════════════════════════════════


async def test_ensure_draft_creates_once(drafts, session_factory, user_id):
    first = await drafts.ensure_draft(user_id)
    second = await drafts.ensure_draft(user_id)

    assert first == second
    assert await count_artisans(session_factory, user_id) == 1

    async with session_factory() as session:
        profile = await session.get(Profile, user_id)
        assert profile.role == ProfileRole.COMMUNITY_MEMBER


async def test_concurrent_ensure_draft_yields_one_row(drafts, session_factory, user_id):
    ids = await asyncio.gather(*(drafts.ensure_draft(user_id) for _ in range(3)))

    assert len(set(ids)) == 1
    assert await count_artisans(session_factory, user_id) == 1


async def test_unique_violation_resolves_to_existing_draft(drafts, monkeypatch, user_id):
    existing = await drafts.ensure_draft(user_id)

    original = ArtisanRepository.get_by_user_id
    calls = {"n": 0}

    async def stale_first_read(self, uid):
        calls["n"] += 1
        if calls["n"] == 1:
            return None
        return await original(self, uid)

    monkeypatch.setattr(ArtisanRepository, "get_by_user_id", stale_first_read)

    assert await drafts.ensure_draft(user_id) == existing
    assert calls["n"] == 2


async def test_unresolvable_conflict_fails(drafts, monkeypatch, user_id):
    await drafts.ensure_draft(user_id)

    async def never_found(self, uid):
        return None

    monkeypatch.setattr(ArtisanRepository, "get_by_user_id", never_found)

    with pytest.raises(CreationFailedError):
        await drafts.ensure_draft(user_id)


async def test_store_unreachable_fails_creation(drafts, monkeypatch, user_id):
    async def unreachable(self, uid):
        raise OperationalError("SELECT", {}, Exception("connection refused"))

    monkeypatch.setattr(ArtisanRepository, "get_by_user_id", unreachable)

    with pytest.raises(CreationFailedError):
        await drafts.ensure_draft(user_id)


# ═══════════════════════════════════════════
#  READ / UPDATE
# ═══════════════════════════════════════════


async def test_load_draft_before_creation(drafts, user_id):
    assert await drafts.load_draft(user_id) is None


async def test_update_writes_only_present_fields(drafts, user_id):
    draft_id = await drafts.ensure_draft(user_id)

    await drafts.update_draft(draft_id, DraftUpdate(display_name="Mei Lin", category="Woodworking", bio="Spoons"))
    updated = await drafts.update_draft(draft_id, DraftUpdate(location="Bedok"))

    assert updated.display_name == "Mei Lin"
    assert updated.category == "Woodworking"
    assert updated.bio == "Spoons"
    assert updated.location == "Bedok"
    assert updated.status == ArtisanStatus.DRAFT

    loaded = await drafts.load_draft(user_id)
    timestamps = {"created_at", "updated_at"}
    assert loaded.model_dump(exclude=timestamps) == updated.model_dump(exclude=timestamps)


async def test_explicit_null_clears_field(drafts, user_id):
    draft_id = await drafts.ensure_draft(user_id)
    await drafts.update_draft(draft_id, DraftUpdate(bio="Spoons", display_name="Mei Lin"))

    cleared = await drafts.update_draft(draft_id, DraftUpdate(bio=None, display_name=None))

    assert cleared.bio is None
    assert cleared.display_name is None


async def test_empty_contact_values_are_stored_as_null(drafts, user_id):
    draft_id = await drafts.ensure_draft(user_id)
    await drafts.update_draft(draft_id, DraftUpdate(instagram="@clay", phone="+65 8123 4567"))

    updated = await drafts.update_draft(draft_id, DraftUpdate(instagram=""))

    assert updated.instagram is None
    assert updated.phone == "+65 8123 4567"


async def test_null_resets_non_nullable_columns(drafts, user_id):
    draft_id = await drafts.ensure_draft(user_id)
    await drafts.update_draft(
        draft_id,
        DraftUpdate(contact_channel=ContactChannel.EMAIL, accepting_orders=True, tags=["tea"]),
    )

    reset = await drafts.update_draft(
        draft_id,
        DraftUpdate(contact_channel=None, accepting_orders=None, tags=None),
    )

    assert reset.contact_channel == ContactChannel.INSTAGRAM
    assert reset.accepting_orders is False
    assert reset.tags == []


def test_draft_columns_maps_category_and_skips_display_name():
    columns = draft_columns(DraftUpdate(display_name="Mei", category="Other", telegram=""))
    assert columns == {"craft_type": "Other", "telegram": None}


async def test_update_missing_draft(drafts):
    with pytest.raises(DraftNotFoundError):
        await drafts.update_draft(uuid4(), DraftUpdate(bio="x"))


# ═══════════════════════════════════════════
#  GALLERY
# ═══════════════════════════════════════════


async def test_attach_assigns_positions_and_titles(drafts, storage, user_id):
    draft_id = await drafts.ensure_draft(user_id)

    first = await drafts.attach_asset(draft_id, b"one", filename="teapot.jpg")
    second = await drafts.attach_asset(draft_id, b"two")

    assert (first.position, first.title) == (0, "teapot.jpg")
    assert (second.position, second.title) == (1, "Gallery Image 2")
    assert first.storage_path.startswith(f"{draft_id}/")
    assert first.storage_path.endswith(".webp")
    assert first.image_url == f"https://cdn.test/{first.storage_path}"
    assert storage.objects[first.storage_path] == (b"one", "image/webp")
    assert [a.id for a in await drafts.list_assets(draft_id)] == [first.id, second.id]


async def test_attach_rejects_oversized_image(session_factory, storage, user_id):
    drafts = DraftProfileService(session_factory, storage, max_upload_bytes=1024 * 1024)
    draft_id = await drafts.ensure_draft(user_id)

    with pytest.raises(UploadFailedError) as exc_info:
        await drafts.attach_asset(draft_id, b"x" * (1024 * 1024 + 1), filename="huge.png")

    assert "Image must be less than 1MB" in exc_info.value.message
    assert storage.objects == {}


async def test_attach_rejects_non_image(drafts, user_id):
    draft_id = await drafts.ensure_draft(user_id)

    with pytest.raises(UploadFailedError) as exc_info:
        await drafts.attach_asset(draft_id, b"%PDF", filename="menu.pdf", content_type="application/pdf")

    assert exc_info.value.details["reason"] == "Only image files are allowed"


async def test_attach_storage_failure_leaves_no_row(drafts, storage, user_id):
    draft_id = await drafts.ensure_draft(user_id)
    storage.fail_upload = True

    with pytest.raises(UploadFailedError) as exc_info:
        await drafts.attach_asset(draft_id, b"img", filename="bowl.png")

    assert exc_info.value.filename == "bowl.png"
    assert await drafts.count_assets(draft_id) == 0


async def test_attach_insert_failure_removes_object(drafts, storage, monkeypatch, user_id):
    draft_id = await drafts.ensure_draft(user_id)

    async def failing_create(self, **kwargs):
        raise SQLAlchemyError("insert failed")

    monkeypatch.setattr(GalleryImageRepository, "create", failing_create)

    with pytest.raises(UploadFailedError) as exc_info:
        await drafts.attach_asset(draft_id, b"img", filename="bowl.png")

    assert exc_info.value.details["reason"] == "Failed to save image"
    assert storage.objects == {}


async def test_attach_to_missing_draft(drafts):
    with pytest.raises(DraftNotFoundError):
        await drafts.attach_asset(uuid4(), b"img")


async def test_featured_cap(session_factory, storage, user_id):
    drafts = DraftProfileService(session_factory, storage, max_featured=2)
    draft_id = await drafts.ensure_draft(user_id)
    assets = [await drafts.attach_asset(draft_id, b"img") for _ in range(3)]

    assert (await drafts.set_featured(assets[0].id, True)).is_featured
    assert (await drafts.set_featured(assets[1].id, True)).is_featured

    with pytest.raises(FeaturedLimitExceededError) as exc_info:
        await drafts.set_featured(assets[2].id, True)
    assert exc_info.value.message == "You can feature up to 2 images"

    # already featured: no-op, not a cap violation
    assert (await drafts.set_featured(assets[0].id, True)).is_featured

    assert not (await drafts.set_featured(assets[0].id, False)).is_featured
    assert (await drafts.set_featured(assets[2].id, True)).is_featured

    featured = [a for a in await drafts.list_assets(draft_id) if a.is_featured]
    assert {a.id for a in featured} == {assets[1].id, assets[2].id}


async def test_featured_cap_of_zero_disables_featuring(session_factory, storage, user_id):
    drafts = DraftProfileService(session_factory, storage, max_featured=0)
    draft_id = await drafts.ensure_draft(user_id)
    asset = await drafts.attach_asset(draft_id, b"img")

    with pytest.raises(FeaturedLimitExceededError):
        await drafts.set_featured(asset.id, True)


async def test_set_featured_checks_ownership(drafts, user_id):
    draft_id = await drafts.ensure_draft(user_id)
    other_draft = await drafts.ensure_draft(uuid4())
    asset = await drafts.attach_asset(draft_id, b"img")

    with pytest.raises(GalleryImageNotFoundError):
        await drafts.set_featured(asset.id, True, draft_id=other_draft)


async def test_remove_asset_keeps_other_positions(drafts, storage, user_id):
    draft_id = await drafts.ensure_draft(user_id)
    assets = [await drafts.attach_asset(draft_id, b"img") for _ in range(3)]

    await drafts.remove_asset(assets[1].id, draft_id=draft_id)

    remaining = await drafts.list_assets(draft_id)
    assert [a.position for a in remaining] == [0, 2]
    assert assets[1].storage_path not in storage.objects

    # positions follow the count, so the next upload reuses 2
    latest = await drafts.attach_asset(draft_id, b"img")
    assert latest.position == 2


async def test_remove_asset_survives_storage_failure(drafts, storage, user_id):
    draft_id = await drafts.ensure_draft(user_id)
    asset = await drafts.attach_asset(draft_id, b"img")
    storage.fail_delete = True

    await drafts.remove_asset(asset.id)

    assert await drafts.count_assets(draft_id) == 0


async def test_remove_unknown_asset(drafts):
    with pytest.raises(GalleryImageNotFoundError):
        await drafts.remove_asset(uuid4())
