"""
Media Ingestion Queue

Drives the image normalizer over a batch of user-selected files, one file at
a time, committing each result before the next crop is presented.

State Machine:
==============
    IDLE ──submit(files)──► CROPPING(0)
                               │ confirm(crop, zoom)
                               │   normalize → commit → advance
                               ▼
                            CROPPING(1) ... CROPPING(n-1)
                               │ last confirm, or dismiss()
                               ▼
                             IDLE   (single summary notification)

Failure Handling:
=================
- Normalizer error (decode, crop, encode): raised to the caller, the queue
  stays on the same file so the user can retry or dismiss.
- UploadFailedError: reported with the filename, the batch moves on.
- CreationFailedError: the whole job is discarded and the error propagates.

Ordering:
=========
confirm() calls are serialized with an asyncio.Lock, so file i is always
committed before file i+1 can be processed.
"""

import asyncio
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Iterable, Optional

from hestia.shared.adapters.notifications import NotificationService
from hestia.shared.core.exceptions import (
    CreationFailedError,
    UploadFailedError,
    ValidationError,
)
from hestia.shared.core.logging import get_logger
from hestia.shared.media.normalizer import CropArea, ImageNormalizer, NormalizedImage

logger = get_logger(__name__)


@dataclass(frozen=True)
class RawFile:
    """A file exactly as the user selected it."""

    filename: Optional[str]
    content_type: str
    data: bytes

    @property
    def is_image(self) -> bool:
        return self.content_type.lower().startswith("image/")


class IngestionState(str, Enum):
    """Whether a batch is being cropped."""

    IDLE = "idle"
    CROPPING = "cropping"


@dataclass
class IngestionJob:
    """
    One batch of files being cropped.

    Attributes:
        pending: Files not yet handled; pending[0] is the file in flight
        index: Position of the file in flight within the batch
        produced: Files normalized and committed successfully
    """

    pending: deque[RawFile] = field(default_factory=deque)
    index: int = 0
    produced: int = 0

    @property
    def current(self) -> Optional[RawFile]:
        return self.pending[0] if self.pending else None

    @property
    def total(self) -> int:
        return self.index + len(self.pending)


# Persists one normalized image; returns whatever the store returns (the asset)
CommitFn = Callable[[NormalizedImage, RawFile], Awaitable[Any]]


class MediaIngestionQueue:
    """
    Sequential crop → encode → upload pipeline over a batch of files.

    Example:
        queue = MediaIngestionQueue(normalizer, commit=wizard.commit_image, notifier=outbox)
        queue.submit(files)
        while queue.current:
            await queue.confirm(crop, zoom)
    """

    def __init__(
        self,
        normalizer: ImageNormalizer,
        commit: CommitFn,
        notifier: NotificationService,
    ):
        self._normalizer = normalizer
        self._commit = commit
        self._notifier = notifier
        self._job: Optional[IngestionJob] = None
        self._lock = asyncio.Lock()

    @property
    def state(self) -> IngestionState:
        return IngestionState.CROPPING if self._job else IngestionState.IDLE

    @property
    def job(self) -> Optional[IngestionJob]:
        return self._job

    @property
    def current(self) -> Optional[RawFile]:
        """The file whose crop dialog is open, if any."""
        return self._job.current if self._job else None

    def submit(self, files: Iterable[RawFile]) -> int:
        """
        Add files to the batch. Non-image files are dropped silently.

        Files submitted while a batch is in progress are appended to it.

        Returns:
            Number of files accepted
        """
        accepted = [f for f in files if f.is_image]
        if not accepted:
            return 0

        if self._job is None:
            self._job = IngestionJob()
        self._job.pending.extend(accepted)

        logger.info("ingestion_submitted", accepted=len(accepted), queued=len(self._job.pending))
        return len(accepted)

    async def confirm(self, crop: Optional[CropArea], zoom: float = 1.0) -> Any:
        """
        Normalize and commit the current file, then present the next one.

        Returns:
            The commit result, or None if this file's upload failed

        Raises:
            ValidationError: No file is waiting to be cropped
            ImageProcessingError / InvalidCropError: Queue does not advance
            CreationFailedError: Job discarded
        """
        async with self._lock:
            job = self._job
            if job is None or job.current is None:
                raise ValidationError("No image is waiting to be cropped")
            raw = job.current

            normalized = await asyncio.to_thread(self._normalizer.normalize, raw.data, crop, zoom)

            result = None
            try:
                result = await self._commit(normalized, raw)
            except UploadFailedError as e:
                logger.warning("ingestion_upload_failed", filename=e.filename, index=job.index)
                self._notifier.error(f"Failed to upload {raw.filename or 'image'}", e.message)
            except CreationFailedError:
                logger.error("ingestion_job_discarded", index=job.index, remaining=len(job.pending))
                if self._job is job:
                    self._job = None
                raise
            else:
                job.produced += 1

            # dismissed (or replaced by a new batch) while this file was in flight
            if self._job is not job or not job.pending:
                return result

            self._advance(job)
            return result

    def dismiss(self) -> int:
        """
        Cancel the crop dialog, dropping every remaining file.

        Returns:
            Number of files dropped
        """
        job = self._job
        if job is None:
            return 0

        dropped = len(job.pending)
        job.pending.clear()
        logger.info("ingestion_dismissed", dropped=dropped, produced=job.produced)

        self._job = None
        if job.produced:
            self._notify_summary(job)
        return dropped

    def _advance(self, job: IngestionJob) -> None:
        job.pending.popleft()
        job.index += 1
        if not job.pending:
            logger.info("ingestion_finished", produced=job.produced, total=job.total)
            self._job = None
            self._notify_summary(job)

    def _notify_summary(self, job: IngestionJob) -> None:
        if job.produced:
            self._notifier.success(f"{job.produced} image(s) processed")
        else:
            self._notifier.warning("No images were processed")
