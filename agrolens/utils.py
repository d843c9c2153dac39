"""
Shared utilities: inference transforms and image loading.
"""

import io
import os
from pathlib import Path

from PIL import Image, UnidentifiedImageError
from torchvision import transforms

from agrolens.config import IMAGENET_MEAN, IMAGENET_STD, INPUT_SIZE
from agrolens.errors import ImageUnavailable


# ── Image Transforms ──────────────────────────────────────────────────────────

def get_val_transforms(image_size: int = INPUT_SIZE) -> transforms.Compose:
    """Deterministic pipeline for inference images."""
    return transforms.Compose([
        transforms.Resize((image_size, image_size)),
        transforms.ToTensor(),
        transforms.Normalize(mean=IMAGENET_MEAN, std=IMAGENET_STD),
    ])


# ── Image Loading ─────────────────────────────────────────────────────────────

def load_image(source) -> Image.Image:
    """
    Open an image from a file path or a raw byte buffer.

    The image is fully decoded and converted to RGB so later stages never
    touch the underlying file. Any failure is reported as ImageUnavailable.
    """
    if isinstance(source, Image.Image):
        return source.convert("RGB")

    if isinstance(source, (bytes, bytearray, memoryview)):
        if not source:
            raise ImageUnavailable("Image buffer is empty")
        fp = io.BytesIO(bytes(source))
        name = "<buffer>"
    elif isinstance(source, (str, os.PathLike)):
        path = Path(source)
        if not path.is_file():
            raise ImageUnavailable(f"Image not found: {path}")
        fp = path
        name = str(path)
    else:
        raise ImageUnavailable(f"Unsupported image source: {type(source).__name__}")

    try:
        with Image.open(fp) as img:
            img.load()
            return img.convert("RGB")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise ImageUnavailable(f"Cannot read image {name}: {e}") from e
