"""Tests for the Pillow-backed image normalizer."""

import io

import pytest
from PIL import Image

from hestia.shared.core.exceptions import (
    DecodeFailedError,
    InvalidCropError,
    RenderUnavailableError,
)
from hestia.shared.media.normalizer import CropArea, ImageNormalizer

from tests.conftest import image_bytes


@pytest.fixture
def normalizer():
    return ImageNormalizer(aspect_ratio=1.0, min_zoom=1.0, max_zoom=3.0, max_dimension=1600, quality=80)


# ═══════════════════════════════════════════
#  GEOMETRY
# ═══════════════════════════════════════════


def test_center_crop_landscape_keeps_full_height(normalizer):
    assert normalizer.center_crop(400, 300) == CropArea(x=50, y=0, width=300, height=300)


def test_center_crop_portrait_keeps_full_width(normalizer):
    assert normalizer.center_crop(300, 500) == CropArea(x=0, y=100, width=300, height=300)


def test_center_crop_zoom_shrinks_rectangle(normalizer):
    assert normalizer.center_crop(400, 300, zoom=2.0) == CropArea(x=125, y=75, width=150, height=150)


def test_zoom_is_clamped(normalizer):
    assert normalizer.clamp_zoom(0.2) == 1.0
    assert normalizer.clamp_zoom(10) == 3.0
    assert normalizer.center_crop(300, 300, zoom=10) == CropArea(x=100, y=100, width=100, height=100)


def test_center_crop_wide_aspect_ratio():
    wide = ImageNormalizer(aspect_ratio=2.0)
    crop = wide.center_crop(400, 400)
    assert (crop.width, crop.height) == (400, 200)
    assert crop.y == 100


# ═══════════════════════════════════════════
#  NORMALIZE
# ═══════════════════════════════════════════


def test_normalize_encodes_webp(normalizer):
    result = normalizer.normalize(image_bytes(400, 300), CropArea(0, 0, 200, 200))

    assert result.content_type == "image/webp"
    assert result.extension == "webp"
    assert (result.width, result.height) == (200, 200)
    with Image.open(io.BytesIO(result.data)) as decoded:
        assert decoded.format == "WEBP"
        assert decoded.size == (200, 200)


def test_normalize_without_crop_uses_center_crop(normalizer):
    result = normalizer.normalize(image_bytes(400, 300), crop=None, zoom=1.0)
    assert (result.width, result.height) == (300, 300)


def test_normalize_downscales_to_max_dimension():
    small = ImageNormalizer(max_dimension=100)
    result = small.normalize(image_bytes(800, 400), CropArea(0, 0, 800, 400))
    assert (result.width, result.height) == (100, 50)


def test_normalize_to_jpeg_flattens_alpha():
    jpeg = ImageNormalizer(image_format="jpeg")
    result = jpeg.normalize(image_bytes(120, 120, mode="RGBA"), None)

    assert result.content_type == "image/jpeg"
    assert result.extension == "jpg"
    with Image.open(io.BytesIO(result.data)) as decoded:
        assert decoded.mode == "RGB"


def test_normalize_webp_keeps_alpha(normalizer):
    result = normalizer.normalize(image_bytes(120, 120, mode="RGBA"), None)
    with Image.open(io.BytesIO(result.data)) as decoded:
        assert decoded.mode == "RGBA"


def test_normalize_applies_exif_orientation(normalizer):
    exif = Image.Exif()
    exif[0x0112] = 6  # rotated 90 degrees clockwise
    source = image_bytes(400, 200, fmt="JPEG", exif=exif)

    # 400x200 stored, 200x400 once oriented
    result = normalizer.normalize(source, CropArea(0, 0, 200, 400))
    assert (result.width, result.height) == (200, 400)


# ═══════════════════════════════════════════
#  ERRORS
# ═══════════════════════════════════════════


def test_undecodable_source(normalizer):
    with pytest.raises(DecodeFailedError):
        normalizer.normalize(b"definitely not an image")


def test_crop_outside_image(normalizer):
    with pytest.raises(InvalidCropError) as exc_info:
        normalizer.normalize(image_bytes(100, 100), CropArea(50, 50, 100, 100))
    assert exc_info.value.details["image"] == [100, 100]


def test_empty_crop(normalizer):
    with pytest.raises(InvalidCropError):
        normalizer.normalize(image_bytes(100, 100), CropArea(0, 0, 0, 10))


def test_negative_crop_origin(normalizer):
    with pytest.raises(InvalidCropError):
        normalizer.normalize(image_bytes(100, 100), CropArea(-1, 0, 10, 10))


def test_unknown_output_format():
    with pytest.raises(RenderUnavailableError):
        ImageNormalizer(image_format="NOPE").normalize(image_bytes(10, 10))
