"""
Gallery Handler

Upload, list, feature and delete the calling user's gallery images.

Routes:
=======
    GET    /artisan/draft/gallery        gallery ordered by position
    POST   /artisan/draft/gallery        multipart upload (+ optional crop)
    PATCH  /artisan/gallery/{asset_id}   feature / unfeature
    DELETE /artisan/gallery/{asset_id}   remove image and stored object

Upload Flow:
============
    file ─► normalize (worker thread) ─► ensure_draft ─► attach_asset
                │
                └── crop form fields: all of x, y, width, height, or none
                    (none = centered crop at ``zoom``)

Images are normalized before the draft is created, so an undecodable file
never leaves an empty draft behind.
"""

import asyncio
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from hestia.api.dependencies import CurrentUserId, get_draft_service, get_normalizer
from hestia.shared.core.exceptions import (
    DraftNotFoundError,
    GalleryImageNotFoundError,
    ValidationError,
)
from hestia.shared.media.normalizer import CropArea, ImageNormalizer
from hestia.shared.schemas.common import MessageResponse
from hestia.shared.schemas.gallery import FeatureRequest, GalleryAsset
from hestia.shared.services.draft_profile_service import DraftProfileService


router = APIRouter()


def _crop_from_form(
    x: Optional[int],
    y: Optional[int],
    width: Optional[int],
    height: Optional[int],
) -> Optional[CropArea]:
    values = (x, y, width, height)
    if all(v is None for v in values):
        return None
    if any(v is None for v in values):
        raise ValidationError(
            "Crop requires x, y, width and height together",
            details={"x": x, "y": y, "width": width, "height": height},
        )
    return CropArea(x=x, y=y, width=width, height=height)


async def _owned_draft_id(user_id: UUID, drafts: DraftProfileService) -> UUID:
    draft = await drafts.load_draft(user_id)
    if draft is None:
        raise DraftNotFoundError()
    return draft.id


@router.get("/draft/gallery", response_model=list[GalleryAsset])
async def list_gallery(
    user_id: CurrentUserId,
    drafts: DraftProfileService = Depends(get_draft_service),
):
    draft = await drafts.load_draft(user_id)
    if draft is None:
        return []
    return await drafts.list_assets(draft.id)


@router.post(
    "/draft/gallery",
    response_model=GalleryAsset,
    status_code=status.HTTP_201_CREATED,
)
async def upload_gallery_image(
    user_id: CurrentUserId,
    file: UploadFile = File(...),
    x: Optional[int] = Form(None),
    y: Optional[int] = Form(None),
    width: Optional[int] = Form(None),
    height: Optional[int] = Form(None),
    zoom: float = Form(1.0),
    drafts: DraftProfileService = Depends(get_draft_service),
    normalizer: ImageNormalizer = Depends(get_normalizer),
):
    """
    Crop, re-encode and append one image to the user's gallery.

    The draft is created on the first upload if it does not exist yet.
    """
    if file.content_type and not file.content_type.lower().startswith("image/"):
        raise ValidationError("Only image files are allowed", details={"filename": file.filename})

    crop = _crop_from_form(x, y, width, height)
    source = await file.read()
    if len(source) > drafts.max_upload_bytes:
        limit_mb = drafts.max_upload_bytes // (1024 * 1024)
        raise ValidationError(f"Image must be less than {limit_mb}MB", details={"filename": file.filename})

    image = await asyncio.to_thread(normalizer.normalize, source, crop, zoom)

    draft_id = await drafts.ensure_draft(user_id)
    return await drafts.attach_asset(
        draft_id,
        image.data,
        filename=file.filename,
        content_type=image.content_type,
        extension=image.extension,
    )


@router.patch("/gallery/{asset_id}", response_model=GalleryAsset)
async def set_featured(
    asset_id: UUID,
    request: FeatureRequest,
    user_id: CurrentUserId,
    drafts: DraftProfileService = Depends(get_draft_service),
):
    """
    Feature or unfeature an image.

    Featuring beyond the cap returns 409 FEATURED_LIMIT_EXCEEDED.
    """
    try:
        draft_id = await _owned_draft_id(user_id, drafts)
    except DraftNotFoundError as e:
        raise GalleryImageNotFoundError(str(asset_id)) from e
    return await drafts.set_featured(asset_id, request.is_featured, draft_id=draft_id)


@router.delete("/gallery/{asset_id}", response_model=MessageResponse)
async def delete_gallery_image(
    asset_id: UUID,
    user_id: CurrentUserId,
    drafts: DraftProfileService = Depends(get_draft_service),
):
    try:
        draft_id = await _owned_draft_id(user_id, drafts)
    except DraftNotFoundError as e:
        raise GalleryImageNotFoundError(str(asset_id)) from e
    await drafts.remove_asset(asset_id, draft_id=draft_id)
    return MessageResponse(message="Image deleted")
