"""Decode, resize and re-encode the original image."""
from __future__ import annotations

import io
import logging

from PIL import Image

from .config import MAX_IMAGE_PIXELS
from .errors import TransformationError

logger = logging.getLogger(__name__)

INPUT_FORMATS = ('PNG',)
OUTPUT_FORMAT = 'PNG'
OUTPUT_CONTENT_TYPE = 'image/png'

# Modes that resize and save as PNG without conversion
_PASSTHROUGH_MODES = ('RGB', 'RGBA', 'L', 'LA')


def make_thumbnail(data: bytes, edge_length: int, *, max_pixels: int = MAX_IMAGE_PIXELS) -> bytes:
    """Return PNG bytes of ``data`` resized to an ``edge_length`` square.

    The aspect ratio is not preserved. Images larger than ``max_pixels`` are
    rejected from their header, before any pixel data is decoded.
    """
    if isinstance(edge_length, bool) or not isinstance(edge_length, int) or edge_length <= 0:
        raise TransformationError(f'Edge length must be a positive integer, got {edge_length!r}')

    try:
        with Image.open(io.BytesIO(data), formats=INPUT_FORMATS) as image:
            width, height = image.size
            if width * height > max_pixels:
                raise TransformationError(
                    f'Image is {width}x{height}, over the {max_pixels} pixel limit'
                )

            if image.mode.startswith('I'):
                # 16-bit grayscale, scaled down to 8 bits
                image = image.convert('I').point(lambda value: value * (1 / 256)).convert('L')
            elif image.mode not in _PASSTHROUGH_MODES:
                image = image.convert('RGBA')

            thumbnail = image.resize((edge_length, edge_length), Image.Resampling.LANCZOS)

        buffer = io.BytesIO()
        thumbnail.save(buffer, format=OUTPUT_FORMAT, optimize=True)
    except Image.DecompressionBombError as exc:
        raise TransformationError(f'Image rejected as decompression bomb: {exc}') from exc
    except (OSError, SyntaxError, EOFError, ValueError) as exc:
        # Pillow reports some corrupt PNG chunks as SyntaxError
        raise TransformationError(f'Could not create thumbnail: {exc}') from exc

    logger.info('Thumbnail created: %dx%d from %dx%d', edge_length, edge_length, width, height)
    return buffer.getvalue()
