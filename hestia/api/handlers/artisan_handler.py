"""
Artisan Draft Handler

Endpoints behind the "Become an Artisan" flow for the calling user.

ARCHITECTURE:
=============
    Handler → Service → Repository → Model

Routes:
=======
    GET    /artisan/options          wizard choices and limits
    GET    /artisan/draft            current draft (404 if never started)
    POST   /artisan/draft            create the draft if missing (idempotent)
    PATCH  /artisan/draft            partial update; creates the draft lazily
    POST   /artisan/draft/publish    validation gate + publish
    POST   /artisan/draft/unpublish  hide a published profile
"""

from typing import Optional

from fastapi import APIRouter, Depends, status

from hestia.api.dependencies import CurrentUserId, get_draft_service, get_publish_service
from hestia.config.settings import settings
from hestia.shared.core.exceptions import DraftNotFoundError, ValidationFailedError
from hestia.shared.schemas.artisan import (
    DraftCreatedResponse,
    DraftProfile,
    DraftUpdate,
    OnboardingOptions,
    PublishResult,
)
from hestia.shared.schemas.common import MessageResponse
from hestia.shared.services.draft_profile_service import DraftProfileService
from hestia.shared.services.publish_service import PublishService
from hestia.shared.utils.constants import CRAFT_CATEGORIES, LOCATIONS


router = APIRouter()


@router.get("/options", response_model=OnboardingOptions)
async def get_options():
    """Categories, locations and limits the wizard renders."""
    return OnboardingOptions(
        categories=list(CRAFT_CATEGORIES),
        locations=list(LOCATIONS),
        max_featured_images=settings.MAX_FEATURED_IMAGES,
        min_gallery_images=settings.MIN_GALLERY_IMAGES,
        bio_min_length=settings.BIO_MIN_LENGTH,
        bio_max_length=settings.BIO_MAX_LENGTH,
    )


@router.get("/draft", response_model=DraftProfile)
async def get_draft(
    user_id: CurrentUserId,
    drafts: DraftProfileService = Depends(get_draft_service),
):
    """
    Current user's artisan profile, in whatever state it is.

    Reading never creates a draft.
    """
    draft = await drafts.load_draft(user_id)
    if draft is None:
        raise DraftNotFoundError()
    return draft


@router.post(
    "/draft",
    response_model=DraftCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_draft(
    user_id: CurrentUserId,
    drafts: DraftProfileService = Depends(get_draft_service),
):
    """Return the user's draft id, creating the draft if none exists."""
    draft_id = await drafts.ensure_draft(user_id)
    return DraftCreatedResponse(id=draft_id)


@router.patch("/draft", response_model=DraftProfile)
async def update_draft(
    changes: DraftUpdate,
    user_id: CurrentUserId,
    drafts: DraftProfileService = Depends(get_draft_service),
):
    """
    Write the fields present in the body.

    Omitted keys are untouched; explicit nulls clear the field. An empty
    body never creates a draft.
    """
    if not changes.model_fields_set:
        draft = await drafts.load_draft(user_id)
        if draft is None:
            raise DraftNotFoundError()
        return draft

    draft_id = await drafts.ensure_draft(user_id)
    return await drafts.update_draft(draft_id, changes)


@router.post("/draft/publish", response_model=PublishResult)
async def publish_draft(
    user_id: CurrentUserId,
    pending: Optional[DraftUpdate] = None,
    publisher: PublishService = Depends(get_publish_service),
):
    """
    Validate the draft and make it public.

    A body, when sent, is written to the draft before validation so the
    form the user is looking at is what gets checked.

    A draft that fails validation returns 422 with every failed check.
    """
    result = await publisher.publish(user_id, pending=pending)
    if not result.success:
        raise ValidationFailedError(result.errors)
    return result


@router.post("/draft/unpublish", response_model=MessageResponse)
async def unpublish_draft(
    user_id: CurrentUserId,
    publisher: PublishService = Depends(get_publish_service),
):
    changed = await publisher.unpublish(user_id)
    if not changed:
        return MessageResponse(message="Profile is not published", success=False)
    return MessageResponse(message="Profile unpublished")
