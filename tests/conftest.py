"""Shared fixtures for the Hestia test suite.

The relational store is a throwaway SQLite file per test. Object storage
and the query cache are in-memory doubles that record what they were asked
to do.
"""

import io
from uuid import UUID, uuid4

import pytest
from PIL import Image
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from hestia.shared.adapters.notifications import NotificationOutbox
from hestia.shared.adapters.redis_adapter import QueryCache
from hestia.shared.adapters.storage_adapter import StorageAdapter
from hestia.shared.core.exceptions import StorageError
from hestia.shared.db.session import create_session_factory
from hestia.shared.models import Base
from hestia.shared.schemas.artisan import DraftUpdate
from hestia.shared.services.draft_profile_service import DraftProfileService
from hestia.shared.services.publish_service import PublishService


# ═══════════════════════════════════════════
#  DOUBLES
# ═══════════════════════════════════════════


class FakeStorage(StorageAdapter):
    """In-memory object storage. Set fail_upload / fail_delete to simulate outages."""

    def __init__(self):
        super().__init__(bucket="gallery-test", public_base_url="https://cdn.test")
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.fail_upload = False
        self.fail_delete = False

    async def upload(self, key: str, data: bytes, content_type: str) -> str:
        if self.fail_upload:
            raise StorageError("upload", key, "bucket unavailable")
        self.objects[key] = (data, content_type)
        return self.public_url(key)

    async def delete(self, key: str) -> None:
        if self.fail_delete:
            raise StorageError("delete", key, "bucket unavailable")
        self.objects.pop(key, None)


class FakeQueryCache(QueryCache):
    """Records every invalidation."""

    def __init__(self):
        self.invalidated: list[tuple[UUID, tuple[str, ...]]] = []

    async def invalidate(self, user_id: UUID, *keys: str) -> None:
        self.invalidated.append((user_id, keys))


def image_bytes(width=400, height=300, fmt="PNG", mode="RGB", color=(180, 90, 40), exif=None) -> bytes:
    """Encode a solid-colour test image."""
    if mode == "RGBA" and len(color) == 3:
        color = color + (128,)
    image = Image.new(mode, (width, height), color)
    buffer = io.BytesIO()
    if exif is not None:
        image.save(buffer, format=fmt, exif=exif)
    else:
        image.save(buffer, format=fmt)
    return buffer.getvalue()


COMPLETE_DRAFT = DraftUpdate(
    display_name="Mei Lin Tan",
    category="Pottery & Ceramics",
    bio="Wheel-thrown stoneware made in a small shophouse studio. " * 3,
    location="Tiong Bahru",
    instagram="@meilin.clay",
)


# ═══════════════════════════════════════════
#  FIXTURES
# ═══════════════════════════════════════════


@pytest.fixture
def session_factory(tmp_path):
    """Session factory over a fresh SQLite schema.

    NullPool opens a new connection per session, so the factory works from
    any event loop (pytest-asyncio or the TestClient portal).
    """
    path = tmp_path / "hestia.db"

    sync_engine = create_engine(f"sqlite:///{path}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()

    engine = create_async_engine(f"sqlite+aiosqlite:///{path}", poolclass=NullPool)
    return create_session_factory(engine)


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def query_cache():
    return FakeQueryCache()


@pytest.fixture
def outbox():
    return NotificationOutbox()


@pytest.fixture
def drafts(session_factory, storage):
    return DraftProfileService(session_factory, storage)


@pytest.fixture
def publisher(session_factory, drafts, query_cache):
    return PublishService(session_factory, drafts, query_cache)


@pytest.fixture
def user_id():
    return uuid4()


@pytest.fixture
def png_bytes():
    return image_bytes()


@pytest.fixture
def make_complete_draft(drafts):
    """Create a draft that passes every publish check."""

    async def _make(user_id: UUID, images: int = 3) -> UUID:
        draft_id = await drafts.ensure_draft(user_id)
        await drafts.update_draft(draft_id, COMPLETE_DRAFT)
        for index in range(images):
            await drafts.attach_asset(draft_id, b"encoded-image", filename=f"piece-{index}.webp")
        return draft_id

    return _make
