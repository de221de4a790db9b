"""
Database Module

This module provides database connectivity and session management for Hestia.

Architecture Overview:
======================
┌─────────────────────────────────────────────────────────────────────────────┐
│                        DATABASE LAYER                                       │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                             │
│   Service (DraftProfileService, PublishService)                             │
│       │                                                                     │
│       │  One AsyncSession per operation (AsyncSessionLocal())               │
│       ▼                                                                     │
│   Repository (ProfileRepository, ArtisanRepository,                         │
│               GalleryImageRepository)                                       │
│       │                                                                     │
│       │  SQL Queries                                                        │
│       ▼                                                                     │
│   PostgreSQL Database                                                       │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘

Components:
===========
- session.py: Database engine, session factory, and lifecycle functions
"""

from hestia.shared.db.session import (
    get_db,
    init_db,
    close_db,
    create_session_factory,
    AsyncSessionLocal,
    engine,
)

__all__ = [
    "get_db",
    "init_db",
    "close_db",
    "create_session_factory",
    "AsyncSessionLocal",
    "engine",
]
