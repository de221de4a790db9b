"""
Image Normalizer

Crops one image to a pixel rectangle at the gallery aspect ratio and
re-encodes it to a compact lossy format at bounded dimensions.

Pipeline:
=========
    source bytes
        │  decode (Pillow) + apply EXIF orientation
        ▼
    crop        explicit CropArea, or a centered rectangle derived from zoom
        │
        ▼
    downscale   longest side ≤ IMAGE_MAX_DIMENSION (never upscales)
        │
        ▼
    encode      IMAGE_FORMAT at IMAGE_QUALITY, no metadata
        ▼
    NormalizedImage(data, content_type, width, height)

The normalizer is pure: it never touches storage or the database. Pillow is
CPU bound, so async callers run ``normalize`` through ``asyncio.to_thread``.

Zoom:
=====
zoom 1.0 selects the largest centered rectangle of the target aspect ratio
that fits the image. zoom z shrinks that rectangle by a factor of z, so
higher zoom shows a smaller part of the picture. Zoom is clamped to
[CROP_MIN_ZOOM, CROP_MAX_ZOOM].
"""

import io
from dataclasses import dataclass
from typing import Optional

from PIL import Image, ImageOps, UnidentifiedImageError

from hestia.config.settings import settings
from hestia.shared.core.exceptions import (
    DecodeFailedError,
    InvalidCropError,
    RenderUnavailableError,
)
from hestia.shared.core.logging import get_logger

logger = get_logger(__name__)

# File extensions that differ from the lowercased Pillow format name
_EXTENSIONS = {"JPEG": "jpg"}

# Formats without an alpha channel
_OPAQUE_FORMATS = {"JPEG"}


@dataclass(frozen=True)
class CropArea:
    """Pixel rectangle inside the (EXIF-oriented) source image."""

    x: int
    y: int
    width: int
    height: int

    @property
    def box(self) -> tuple[int, int, int, int]:
        """(left, upper, right, lower) as Pillow expects."""
        return self.x, self.y, self.x + self.width, self.y + self.height


@dataclass(frozen=True)
class NormalizedImage:
    """Encoded output of the normalizer."""

    data: bytes
    content_type: str
    extension: str
    width: int
    height: int


class ImageNormalizer:
    """
    Stateless crop + re-encode of a single image.

    Example:
        normalizer = ImageNormalizer()
        result = normalizer.normalize(raw_bytes, CropArea(0, 0, 800, 800), zoom=1.0)
        # result.content_type == "image/webp", max(result.width, result.height) <= 1600
    """

    def __init__(
        self,
        aspect_ratio: Optional[float] = None,
        min_zoom: Optional[float] = None,
        max_zoom: Optional[float] = None,
        max_dimension: Optional[int] = None,
        quality: Optional[int] = None,
        image_format: Optional[str] = None,
    ):
        self.aspect_ratio = settings.GALLERY_ASPECT_RATIO if aspect_ratio is None else aspect_ratio
        self.min_zoom = settings.CROP_MIN_ZOOM if min_zoom is None else min_zoom
        self.max_zoom = settings.CROP_MAX_ZOOM if max_zoom is None else max_zoom
        self.max_dimension = settings.IMAGE_MAX_DIMENSION if max_dimension is None else max_dimension
        self.quality = settings.IMAGE_QUALITY if quality is None else quality
        self.image_format = (settings.IMAGE_FORMAT if image_format is None else image_format).upper()

    # ═══════════════════════════════════════════════════════════════════════════
    # GEOMETRY
    # ═══════════════════════════════════════════════════════════════════════════

    def clamp_zoom(self, zoom: float) -> float:
        return max(self.min_zoom, min(self.max_zoom, zoom))

    def center_crop(self, width: int, height: int, zoom: float = 1.0) -> CropArea:
        """
        Centered rectangle of the target aspect ratio for a ``width`` x ``height`` image.

        Args:
            width: Source width in pixels
            height: Source height in pixels
            zoom: Zoom factor (clamped)
        """
        zoom = self.clamp_zoom(zoom)

        if width / height > self.aspect_ratio:
            base_width, base_height = height * self.aspect_ratio, float(height)
        else:
            base_width, base_height = float(width), width / self.aspect_ratio

        crop_width = max(1, min(width, round(base_width / zoom)))
        crop_height = max(1, min(height, round(base_height / zoom)))

        return CropArea(
            x=(width - crop_width) // 2,
            y=(height - crop_height) // 2,
            width=crop_width,
            height=crop_height,
        )

    @staticmethod
    def validate_crop(crop: CropArea, width: int, height: int) -> None:
        """
        Raises:
            InvalidCropError: If the rectangle is empty or leaves the image
        """
        if crop.width <= 0 or crop.height <= 0:
            raise InvalidCropError(
                "Crop area must have a positive size",
                details={"width": crop.width, "height": crop.height},
            )
        if crop.x < 0 or crop.y < 0 or crop.x + crop.width > width or crop.y + crop.height > height:
            raise InvalidCropError(
                "Crop area is outside the image",
                details={
                    "crop": [crop.x, crop.y, crop.width, crop.height],
                    "image": [width, height],
                },
            )

    # ═══════════════════════════════════════════════════════════════════════════
    # NORMALIZE
    # ═══════════════════════════════════════════════════════════════════════════

    def normalize(
        self,
        source: bytes,
        crop: Optional[CropArea] = None,
        zoom: float = 1.0,
    ) -> NormalizedImage:
        """
        Crop and re-encode one image.

        Args:
            source: Raw bytes of the uploaded file
            crop: Pixel rectangle to keep; None for a centered crop at ``zoom``
            zoom: Zoom factor, used when ``crop`` is None

        Returns:
            NormalizedImage with the encoded bytes

        Raises:
            DecodeFailedError: Source is not a decodable image
            InvalidCropError: Explicit crop is empty or out of bounds
            RenderUnavailableError: Encoder missing or encoding failed
        """
        Image.init()
        if self.image_format not in Image.SAVE:
            raise RenderUnavailableError(f"No encoder available for {self.image_format}")

        image = self._decode(source)
        width, height = image.size

        if crop is None:
            crop = self.center_crop(width, height, zoom)
        else:
            self.validate_crop(crop, width, height)

        cropped = image.crop(crop.box)
        cropped.thumbnail((self.max_dimension, self.max_dimension), Image.Resampling.LANCZOS)
        cropped = self._convert_mode(cropped)

        output = io.BytesIO()
        try:
            cropped.save(output, format=self.image_format, quality=self.quality)
        except (OSError, ValueError, KeyError) as e:
            logger.error("image_encode_failed", image_format=self.image_format, error=str(e))
            raise RenderUnavailableError(f"Failed to encode {self.image_format}: {e}") from e

        data = output.getvalue()
        logger.debug(
            "image_normalized",
            source_size=[width, height],
            output_size=list(cropped.size),
            bytes=len(data),
        )
        return NormalizedImage(
            data=data,
            content_type=Image.MIME.get(self.image_format, "application/octet-stream"),
            extension=_EXTENSIONS.get(self.image_format, self.image_format.lower()),
            width=cropped.width,
            height=cropped.height,
        )

    @staticmethod
    def _decode(source: bytes) -> Image.Image:
        try:
            with Image.open(io.BytesIO(source)) as raw:
                raw.load()
                image = ImageOps.exif_transpose(raw)
        except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as e:
            raise DecodeFailedError(f"Image could not be decoded: {e}") from e

        if image.width <= 0 or image.height <= 0:
            raise DecodeFailedError("Image has no pixels")
        return image

    def _convert_mode(self, image: Image.Image) -> Image.Image:
        has_alpha = "A" in image.getbands() or "transparency" in image.info
        if has_alpha and self.image_format not in _OPAQUE_FORMATS:
            return image if image.mode == "RGBA" else image.convert("RGBA")
        return image if image.mode == "RGB" else image.convert("RGB")
