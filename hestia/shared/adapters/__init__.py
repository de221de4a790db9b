"""
Adapters Package

External service integrations.

Contents:
=========
- storage_adapter: S3 object storage for gallery images (boto3)
- redis_adapter: Per-user query cache (redis.asyncio)
- notifications: User-facing success / error / warning messages

Note: Database access is handled by shared/db/session.py using async SQLAlchemy.

Usage:
======
    from hestia.shared.adapters.storage_adapter import StorageAdapter
    from hestia.shared.adapters.redis_adapter import RedisQueryCache
    from hestia.shared.adapters.notifications import NotificationOutbox
"""
