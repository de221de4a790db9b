"""
Media Module

Gallery image normalization and the sequential ingestion queue.

Components:
===========
- normalizer.py: Crop + re-encode of one image (Pillow)
- ingestion.py: One-file-at-a-time batch pipeline feeding the draft store
"""

from hestia.shared.media.normalizer import CropArea, ImageNormalizer, NormalizedImage
from hestia.shared.media.ingestion import (
    IngestionJob,
    IngestionState,
    MediaIngestionQueue,
    RawFile,
)

__all__ = [
    "CropArea",
    "ImageNormalizer",
    "NormalizedImage",
    "IngestionJob",
    "IngestionState",
    "MediaIngestionQueue",
    "RawFile",
]
