"""
Image utilities for the inspection checklist.
Handles decoding uploaded photos, thumbnailing and font loading.
"""

import io
from typing import Optional

from PIL import Image, ImageFont, UnidentifiedImageError

from utils.config import config
from utils.logger import setup_logger

logger = setup_logger(__name__, level=config.log_level, component="IMAGE_UTILS")


def decode_image(content: bytes, filename: str = "<memory>") -> Image.Image:
    """
    Decode encoded image bytes.

    Args:
        content: Encoded image bytes (JPEG, PNG, ...)
        filename: Name used in messages

    Returns:
        PIL Image object, fully loaded

    Raises:
        ValueError: If the bytes are not a readable image
    """
    if not content:
        raise ValueError(f"Image is empty: {filename}")

    try:
        img = Image.open(io.BytesIO(content))
        img.load()  # Force load to catch corrupt images
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError) as e:
        raise ValueError(f"Failed to decode image {filename}: {e}")

    logger.debug(f"Decoded image: {filename}, size: {img.size}, mode: {img.mode}")
    return img


def to_rgb(img: Image.Image) -> Image.Image:
    """Flatten transparency onto white and convert to RGB."""
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, "white")
        background.paste(rgba, mask=rgba.split()[-1])
        return background
    if img.mode != "RGB":
        return img.convert("RGB")
    return img


def fit_within(img: Image.Image, max_width: int, max_height: int) -> Image.Image:
    """
    Scale an image down to fit a box, preserving aspect ratio.
    Never scales up.
    """
    width, height = img.size
    if width <= max_width and height <= max_height:
        return img

    ratio = min(max_width / width, max_height / height)
    new_size = (max(1, int(width * ratio)), max(1, int(height * ratio)))
    resized = img.resize(new_size, Image.Resampling.LANCZOS)
    logger.debug(f"Resized image from {img.size} to {resized.size}")
    return resized


def load_font(size: int, font_path: Optional[str] = None) -> ImageFont.FreeTypeFont:
    """
    Load a TrueType font at a pixel size.

    Falls back to Pillow's bundled default font when no path is configured.
    """
    font_path = font_path or config.render_font_path
    if font_path:
        try:
            return ImageFont.truetype(font_path, size)
        except OSError as e:
            logger.warning(f"Could not load font {font_path}: {e}; using default font")
    return ImageFont.load_default(size=size)
