"""
Onboarding Wizard Controller

Five-step linear flow that turns a community member into a published
artisan.

Steps:
======
    1 BASICS ─► 2 SHOWCASE ─► 3 CONTACT ─► 4 AVAILABILITY ─► 5 REVIEW
                                                               │
    save_and_exit() from any step                   publish() ◄┘

Collaborators:
==============
    OnboardingWizard
        ├── DraftForm             form state
        ├── AutosaveCoordinator   debounced writes of the form
        ├── MediaIngestionQueue   crop → encode → upload, one file at a time
        ├── DraftProfileService   draft + gallery persistence
        ├── PublishService        validation gate
        └── NotificationService   user-facing messages

Lazy Creation:
==============
No draft row exists until something needs one: the first confirmed image,
an explicit save, or publish. _ensure_draft_id() is serialized by a lock so
concurrent triggers create (and flush the form into) one draft.

Failures:
=========
Structural failures (draft creation, publish) are reported through the
notifier and abort only the action that hit them.
"""

import asyncio
from enum import IntEnum
from typing import Any, Iterable, Optional
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError

from hestia.onboarding.autosave import AutosaveCoordinator
from hestia.onboarding.form import DraftForm
from hestia.shared.adapters.notifications import NotificationService
from hestia.shared.core.exceptions import (
    CreationFailedError,
    FeaturedLimitExceededError,
    GalleryImageNotFoundError,
    HestiaException,
    ImageProcessingError,
    InvalidCropError,
)
from hestia.shared.core.logging import get_logger
from hestia.shared.media.ingestion import MediaIngestionQueue, RawFile
from hestia.shared.media.normalizer import CropArea, ImageNormalizer, NormalizedImage
from hestia.shared.schemas.artisan import PublishResult
from hestia.shared.schemas.gallery import GalleryAsset
from hestia.shared.services.draft_profile_service import DraftProfileService
from hestia.shared.services.publish_service import PublishService

logger = get_logger(__name__)


class WizardStep(IntEnum):
    """Wizard steps in display order."""

    BASICS = 1
    SHOWCASE = 2
    CONTACT = 3
    AVAILABILITY = 4
    REVIEW = 5


TOTAL_STEPS = len(WizardStep)


class OnboardingWizard:
    """
    Controller behind the "Become an Artisan" flow.

    Example:
        wizard = OnboardingWizard(user_id, drafts, publisher, notifier)
        await wizard.mount()
        wizard.update_field("display_name", "Mei Lin")
        wizard.next()
        ...
        result = await wizard.publish()
    """

    def __init__(
        self,
        user_id: UUID,
        drafts: DraftProfileService,
        publisher: PublishService,
        notifier: NotificationService,
        normalizer: Optional[ImageNormalizer] = None,
        quiet_period: Optional[float] = None,
    ):
        self.user_id = user_id
        self.step = WizardStep.BASICS
        self.form = DraftForm()
        self.draft_id: Optional[UUID] = None
        self.gallery: list[GalleryAsset] = []

        self._drafts = drafts
        self._publisher = publisher
        self._notifier = notifier
        self._log = logger.bind(user_id=str(user_id))

        self._mounted = False
        self._draft_lock = asyncio.Lock()
        self._publish_task: Optional[asyncio.Task] = None

        self.autosave = AutosaveCoordinator(drafts, snapshot=lambda: self.form.to_update(), quiet_period=quiet_period)
        self.ingestion = MediaIngestionQueue(
            normalizer or ImageNormalizer(),
            commit=self._commit_image,
            notifier=notifier,
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # NAVIGATION
    # ═══════════════════════════════════════════════════════════════════════════

    @property
    def progress(self) -> float:
        """Fraction of the flow reached, 0.2 on the first step and 1.0 on review."""
        return self.step / TOTAL_STEPS

    def next(self) -> WizardStep:
        if self.step < WizardStep.REVIEW:
            self.step = WizardStep(self.step + 1)
        return self.step

    def back(self) -> WizardStep:
        if self.step > WizardStep.BASICS:
            self.step = WizardStep(self.step - 1)
        return self.step

    # ═══════════════════════════════════════════════════════════════════════════
    # LIFECYCLE
    # ═══════════════════════════════════════════════════════════════════════════

    async def mount(self) -> None:
        """
        Load the existing draft into the form, once.

        Does not create a draft. Autosave is armed only after this completes.
        """
        if self._mounted:
            return
        self._mounted = True

        try:
            draft = await self._drafts.load_draft(self.user_id)
            if draft:
                self.form = DraftForm.from_profile(draft)
                self.gallery = await self._drafts.list_assets(draft.id)
                self.draft_id = draft.id
                self.autosave.set_draft_id(draft.id)
        except SQLAlchemyError as e:
            self._mounted = False
            self._log.error("wizard_load_failed", error=str(e))
            self._notifier.error("Failed to load your profile")
            return

        self.autosave.mark_loaded()
        self._log.info("wizard_mounted", draft_id=str(self.draft_id) if self.draft_id else None)

    def unmount(self) -> None:
        """Leave the wizard: pending autosave and remaining crops are dropped."""
        self.autosave.cancel()
        self.ingestion.dismiss()
        self._log.info("wizard_unmounted")

    # ═══════════════════════════════════════════════════════════════════════════
    # FORM
    # ═══════════════════════════════════════════════════════════════════════════

    def update_field(self, name: str, value: Any) -> None:
        self.form.set_field(name, value)
        self.autosave.notify_change()

    async def save_and_exit(self) -> bool:
        """
        Persist the form if the user entered anything meaningful.

        Returns:
            True if the form was saved
        """
        self.autosave.cancel()
        if not self.form.has_meaningful_data():
            return False

        try:
            draft_id = await self._ensure_draft_id(flush_form=False)
            await self._drafts.update_draft(draft_id, self.form.to_update())
        except (HestiaException, PydanticValidationError, SQLAlchemyError) as e:
            self._log.error("wizard_save_failed", error=str(e))
            self._notifier.error("Failed to save progress")
            return False

        self._notifier.success("Progress saved")
        return True

    async def publish(self) -> PublishResult:
        """
        Publish the draft. Concurrent calls share one in-flight request.
        """
        if self._publish_task is not None and not self._publish_task.done():
            return await self._publish_task

        self.autosave.cancel()
        self._publish_task = asyncio.get_running_loop().create_task(self._publish())
        return await self._publish_task

    async def _publish(self) -> PublishResult:
        await self.autosave.wait_idle()
        try:
            await self._ensure_draft_id(flush_form=False)
        except CreationFailedError as e:
            self._notifier.error("Failed to create artisan profile")
            return PublishResult(success=False, errors=[e.message])

        try:
            result = await self._publisher.publish(self.user_id, pending=self.form.to_update())
        except (HestiaException, PydanticValidationError, SQLAlchemyError) as e:
            self._log.error("wizard_publish_failed", error=str(e))
            self._notifier.error("Failed to publish profile")
            return PublishResult(success=False, errors=["Failed to publish profile"])

        if result.success:
            self._notifier.success("Your artisan profile is now live!")
        else:
            self._notifier.error("Please complete all required fields", ", ".join(result.errors))
        return result

    async def _ensure_draft_id(self, flush_form: bool = True) -> UUID:
        """
        Draft id, creating the draft on first use.

        A freshly created draft receives the current form when ``flush_form``
        is set, and arms autosave.

        Raises:
            CreationFailedError: The draft could not be created
        """
        async with self._draft_lock:
            if self.draft_id is not None:
                return self.draft_id

            draft_id = await self._drafts.ensure_draft(self.user_id)
            if flush_form:
                await self._drafts.update_draft(draft_id, self.form.to_update())

            self.draft_id = draft_id
            self.autosave.set_draft_id(draft_id)
            self._log.info("wizard_draft_created", draft_id=str(draft_id))
            return draft_id

    # ═══════════════════════════════════════════════════════════════════════════
    # GALLERY
    # ═══════════════════════════════════════════════════════════════════════════

    @property
    def current_file(self) -> Optional[RawFile]:
        """File whose crop dialog is open."""
        return self.ingestion.current

    def select_files(self, files: Iterable[RawFile]) -> int:
        return self.ingestion.submit(files)

    async def confirm_crop(self, crop: Optional[CropArea], zoom: float = 1.0) -> Optional[GalleryAsset]:
        """
        Crop, encode and upload the current file.

        Returns:
            The new gallery asset, or None if this file did not make it
        """
        try:
            return await self.ingestion.confirm(crop, zoom)
        except (ImageProcessingError, InvalidCropError) as e:
            self._notifier.error("Failed to process image", e.message)
            return None
        except CreationFailedError:
            self._notifier.error("Failed to create artisan profile")
            return None

    def cancel_crop(self) -> int:
        return self.ingestion.dismiss()

    async def _commit_image(self, image: NormalizedImage, raw: RawFile) -> GalleryAsset:
        draft_id = await self._ensure_draft_id()
        asset = await self._drafts.attach_asset(
            draft_id,
            image.data,
            filename=raw.filename,
            content_type=image.content_type,
            extension=image.extension,
        )
        self.gallery.append(asset)
        return asset

    async def delete_image(self, asset_id: UUID) -> bool:
        if self.draft_id is None:
            return False
        try:
            await self._drafts.remove_asset(asset_id, draft_id=self.draft_id)
        except GalleryImageNotFoundError:
            self._notifier.error("Failed to delete image")
            return False

        self.gallery = [asset for asset in self.gallery if asset.id != asset_id]
        self._notifier.success("Image deleted")
        return True

    async def toggle_featured(self, asset_id: UUID) -> Optional[GalleryAsset]:
        """
        Flip the featured flag of one gallery image.

        Returns:
            The updated asset, or None if nothing changed
        """
        asset = next((a for a in self.gallery if a.id == asset_id), None)
        if asset is None or self.draft_id is None:
            return None

        try:
            updated = await self._drafts.set_featured(asset_id, not asset.is_featured, draft_id=self.draft_id)
        except FeaturedLimitExceededError as e:
            self._notifier.warning(e.message)
            return None

        self.gallery = [updated if a.id == asset_id else a for a in self.gallery]
        return updated
