"""
Hestia Backend

Artisan onboarding for a local makers directory: draft profiles, gallery
image ingestion and publishing.

Package Structure:
==================
    hestia/
    ├── api/          ← FastAPI application
    ├── onboarding/   ← "Become an Artisan" wizard controller
    ├── shared/       ← Shared code (models, services, media, etc.)
    └── config/       ← Configuration

Running the Application:
========================
    # API Server
    uvicorn hestia.api.main:app --reload

    # Database migrations
    alembic upgrade head
"""
