"""
Shared Module

Contains code shared between the API and the onboarding wizard:
- Models: SQLAlchemy ORM models
- Repositories: Data access layer
- Services: Draft store and publisher
- Media: Image normalization and ingestion queue
- Schemas: Pydantic request/response models
- Core: Logging, exceptions
- Adapters: Object storage, query cache, notifications

Package Structure:
==================
    shared/
    ├── core/           ← Logging, exceptions
    ├── db/             ← Database session management
    ├── models/         ← SQLAlchemy models
    ├── repositories/   ← Data access layer
    ├── services/       ← Business logic
    ├── media/          ← Pillow normalizer, ingestion queue
    ├── schemas/        ← Pydantic schemas
    ├── adapters/       ← External services
    ├── migrations/     ← Alembic environment and revisions
    └── utils/          ← Form option lists

Usage:
======
    from hestia.shared.models import Artisan, GalleryImage
    from hestia.shared.services import DraftProfileService, PublishService
    from hestia.shared.schemas import DraftUpdate, GalleryAsset
    from hestia.shared.core import logger, HestiaException
"""
