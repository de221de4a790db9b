"""Tests for the publish validator and publisher."""

from datetime import datetime, timezone
from uuid import uuid4

from hestia.shared.models import ArtisanStatus, Profile, ProfileRole
from hestia.shared.schemas.artisan import DraftProfile, DraftUpdate
from hestia.shared.services.publish_service import (
    PROFILE_QUERY,
    USER_ROLE_QUERY,
    validate_for_publish,
)

from tests.conftest import COMPLETE_DRAFT

ALL_ERRORS = [
    "Display name is required",
    "Craft category is required",
    "Bio must be between 100 and 500 characters",
    "Location is required",
    "At least one contact method is required",
    "At least 3 gallery images are required",
]


def make_draft(**fields) -> DraftProfile:
    now = datetime.now(timezone.utc)
    return DraftProfile(
        id=uuid4(),
        user_id=uuid4(),
        status=ArtisanStatus.DRAFT,
        created_at=now,
        updated_at=now,
        **fields,
    )


def complete_fields(**overrides) -> dict:
    fields = {
        "display_name": "Mei Lin Tan",
        "category": "Pottery & Ceramics",
        "bio": "b" * 150,
        "location": "Tiong Bahru",
        "telegram": "@meilin",
    }
    fields.update(overrides)
    return fields


# ═══════════════════════════════════════════
#  VALIDATOR
# ═══════════════════════════════════════════


def test_empty_draft_reports_every_error_in_order():
    assert validate_for_publish(make_draft(), 0, bio_min=100, bio_max=500, min_gallery=3) == ALL_ERRORS


def test_complete_draft_has_no_errors():
    assert validate_for_publish(make_draft(**complete_fields()), 3, bio_min=100, bio_max=500, min_gallery=3) == []


def test_whitespace_only_fields_count_as_missing():
    draft = make_draft(**complete_fields(display_name="   ", location="\t", telegram="  "))
    errors = validate_for_publish(draft, 3, bio_min=100, bio_max=500, min_gallery=3)
    assert errors == [ALL_ERRORS[0], ALL_ERRORS[3], ALL_ERRORS[4]]


def test_bio_length_is_measured_after_trimming():
    padded = make_draft(**complete_fields(bio="   " + "b" * 100 + "   "))
    short = make_draft(**complete_fields(bio="  " + "b" * 99 + "  "))
    long = make_draft(**complete_fields(bio="b" * 501))

    assert validate_for_publish(padded, 3, bio_min=100, bio_max=500, min_gallery=3) == []
    assert validate_for_publish(short, 3, bio_min=100, bio_max=500, min_gallery=3) == [ALL_ERRORS[2]]
    assert validate_for_publish(long, 3, bio_min=100, bio_max=500, min_gallery=3) == [ALL_ERRORS[2]]


def test_any_single_contact_field_is_enough():
    draft = make_draft(**complete_fields(telegram=None, external_shop_url="https://shop.example"))
    assert validate_for_publish(draft, 3, bio_min=100, bio_max=500, min_gallery=3) == []


# ═══════════════════════════════════════════
#  PUBLISH / UNPUBLISH
# ═══════════════════════════════════════════


async def test_publish_incomplete_draft_changes_nothing(publisher, drafts, query_cache, user_id):
    result = await publisher.publish(user_id)

    assert not result.success
    assert result.errors == ALL_ERRORS
    draft = await drafts.load_draft(user_id)
    assert draft.status == ArtisanStatus.DRAFT
    assert draft.published_at is None
    assert query_cache.invalidated == []


async def test_publish_complete_draft(publisher, drafts, session_factory, query_cache, make_complete_draft, user_id):
    draft_id = await make_complete_draft(user_id)

    result = await publisher.publish(user_id)

    assert result.success
    assert result.artisan_id == draft_id
    assert result.errors == []

    draft = await drafts.load_draft(user_id)
    assert draft.status == ArtisanStatus.PUBLISHED
    assert draft.published_at is not None

    async with session_factory() as session:
        profile = await session.get(Profile, user_id)
        assert profile.role == ProfileRole.ARTISAN

    assert query_cache.invalidated == [(user_id, (USER_ROLE_QUERY, PROFILE_QUERY))]


async def test_publish_writes_pending_form_first(publisher, drafts, make_complete_draft, user_id):
    draft_id = await make_complete_draft(user_id)
    await drafts.update_draft(draft_id, DraftUpdate(location=None))

    result = await publisher.publish(user_id, pending=DraftUpdate(location="Katong"))

    assert result.success
    assert (await drafts.load_draft(user_id)).location == "Katong"


async def test_publish_counts_gallery_images(publisher, make_complete_draft, user_id):
    await make_complete_draft(user_id, images=2)

    result = await publisher.publish(user_id)

    assert result.errors == ["At least 3 gallery images are required"]


async def test_publish_keeps_admin_role(publisher, session_factory, make_complete_draft, user_id):
    await make_complete_draft(user_id)
    async with session_factory() as session:
        profile = await session.get(Profile, user_id)
        profile.role = ProfileRole.ADMIN
        await session.commit()

    assert (await publisher.publish(user_id)).success

    async with session_factory() as session:
        assert (await session.get(Profile, user_id)).role == ProfileRole.ADMIN


async def test_unpublish(publisher, drafts, query_cache, make_complete_draft, user_id):
    await make_complete_draft(user_id)
    assert not await publisher.unpublish(user_id)

    await publisher.publish(user_id)
    assert await publisher.unpublish(user_id)

    assert (await drafts.load_draft(user_id)).status == ArtisanStatus.UNPUBLISHED
    assert len(query_cache.invalidated) == 2
    assert not await publisher.unpublish(user_id)


async def test_unpublish_without_draft(publisher):
    assert not await publisher.unpublish(uuid4())


async def test_gate_blocks_until_bio_and_third_image(publisher, drafts, user_id):
    draft_id = await drafts.ensure_draft(user_id)
    await drafts.update_draft(draft_id, DraftUpdate(**{**COMPLETE_DRAFT.present_fields(), "bio": None}))
    for index in range(2):
        await drafts.attach_asset(draft_id, b"img", filename=f"{index}.webp")

    rejected = await publisher.publish(user_id)

    assert rejected.errors == [ALL_ERRORS[2], ALL_ERRORS[5]]
    draft = await drafts.load_draft(user_id)
    assert draft.status == ArtisanStatus.DRAFT
    assert draft.published_at is None

    await drafts.update_draft(draft_id, DraftUpdate(bio=COMPLETE_DRAFT.bio))
    await drafts.attach_asset(draft_id, b"img", filename="2.webp")

    accepted = await publisher.publish(user_id)

    assert accepted.success
    draft = await drafts.load_draft(user_id)
    assert draft.status == ArtisanStatus.PUBLISHED
    assert draft.published_at is not None


def test_explicit_zero_limits_are_respected():
    draft = make_draft(**complete_fields(bio="short"))
    assert validate_for_publish(draft, 0, bio_min=0, bio_max=500, min_gallery=0) == []
