"""
Business Logic Services

Services encapsulate business logic and coordinate between repositories,
external services, and domain rules.

Service Pattern:
================
    Handler / Wizard → Service → Repository → Database
                          ↘ Object storage, query cache

Services should:
- Contain business logic and validation
- Coordinate multiple repositories if needed
- Own their transactions (one session per operation)
- NOT handle HTTP concerns (that's for handlers)

Available Services:
===================
- DraftProfileService: Draft creation, partial updates, gallery management
- PublishService: Publish validation gate and visibility transitions

Usage:
======
    from hestia.shared.services import DraftProfileService, PublishService

    drafts = DraftProfileService(AsyncSessionLocal, storage=StorageAdapter())
    draft_id = await drafts.ensure_draft(user_id)
"""

from hestia.shared.services.draft_profile_service import DraftProfileService
from hestia.shared.services.publish_service import PublishService, validate_for_publish

__all__ = [
    "DraftProfileService",
    "PublishService",
    "validate_for_publish",
]
