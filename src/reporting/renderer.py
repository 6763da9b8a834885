"""
Document rasterizer.

Paints a composed checklist onto a single white image of fixed width. A
measuring pass runs the same layout without drawing so the canvas can be
allocated at its exact height.
"""

import math
from typing import Dict, List, Optional

from PIL import Image, ImageDraw
from PIL.ImageColor import getrgb

from src.errors import RenderFailure
from src.schemas.document import Document
from utils.image_utils import decode_image, fit_within, load_font, to_rgb
from utils.logger import setup_logger
from utils.config import config

logger = setup_logger(__name__, level=config.log_level, component="RENDERER")


# ============================================================================
# COLORS
# ============================================================================

BRAND_PRIMARY = getrgb("#2563eb")  # Blue
TEXT_DARK = getrgb("#111827")
TEXT_MUTED = getrgb("#666666")
RULE_GRAY = getrgb("#e5e7eb")


class RenderedDocument:
    """Raster of a document plus its pixel size."""

    def __init__(self, image: Image.Image):
        self.image = image

    @property
    def width(self) -> int:
        return self.image.size[0]

    @property
    def height(self) -> int:
        return self.image.size[1]


class DocumentRenderer:
    """Renders a ``Document`` into a ``RenderedDocument``."""

    # Layout in unscaled pixels
    PADDING = 20
    TITLE_SIZE = 28
    HEADING_SIZE = 20
    BODY_SIZE = 14
    FOOTER_SIZE = 12
    LINE_SPACING = 1.4
    SECTION_GAP = 18
    PHOTO_BOX = 200
    PHOTO_GAP = 10
    FOOTER_GAP = 30

    def __init__(
        self,
        width_px: Optional[int] = None,
        scale: Optional[int] = None,
        font_path: Optional[str] = None,
    ):
        self.logger = logger
        self.font_path = font_path or config.render_font_path
        if not self.font_path:
            self.logger.warning("No RENDER_FONT_PATH configured; answer markers will print as boxes")
        self.scale = scale or config.render_scale
        self.width = (width_px or config.render_width_px) * self.scale
        self.fonts = {
            "title": load_font(self._px(self.TITLE_SIZE), self.font_path),
            "heading": load_font(self._px(self.HEADING_SIZE), self.font_path),
            "body": load_font(self._px(self.BODY_SIZE), self.font_path),
            "footer": load_font(self._px(self.FOOTER_SIZE), self.font_path),
        }
        self._measure = ImageDraw.Draw(Image.new("RGB", (1, 1)))

    def _px(self, value: float) -> int:
        return int(round(value * self.scale))

    @property
    def content_width(self) -> int:
        return self.width - 2 * self._px(self.PADDING)

    def render(self, document: Document) -> RenderedDocument:
        """
        Rasterize a document.

        Raises:
            RenderFailure: If a photo cannot be decoded or drawing fails
        """
        self.logger.info(f"Rendering document with {len(document.sections)} sections")

        try:
            thumbnails = self._prepare_photos(document)
        except (OSError, ValueError, MemoryError) as e:
            raise RenderFailure(f"Failed to prepare photos: {e}", cause=e)

        try:
            height = self._layout(document, thumbnails, draw=None, canvas=None)
            canvas = Image.new("RGB", (self.width, height), "white")
            self._layout(document, thumbnails, draw=ImageDraw.Draw(canvas), canvas=canvas)
        except (OSError, ValueError, MemoryError) as e:
            raise RenderFailure(f"Failed to rasterize document: {e}", cause=e)

        self.logger.info(f"Rendered raster: {self.width}x{height}px")
        return RenderedDocument(canvas)

    def _prepare_photos(self, document: Document) -> Dict[int, List[Image.Image]]:
        """Decode and thumbnail gallery photos, keyed by section position."""
        thumbnails: Dict[int, List[Image.Image]] = {}
        box = self._px(self.PHOTO_BOX)

        for index, section in enumerate(document.sections):
            if section.kind != "gallery":
                continue
            images = []
            for photo in section.photos:
                try:
                    img = decode_image(photo.content, photo.filename)
                except ValueError as e:
                    self.logger.error(f"Unrenderable photo {photo.filename}: {e}")
                    raise RenderFailure(str(e), cause=e)
                images.append(fit_within(to_rgb(img), box, box))
            thumbnails[index] = images

        return thumbnails

    # ------------------------------------------------------------------
    # Layout. With ``draw`` set to None nothing is painted and only the
    # final height is computed.
    # ------------------------------------------------------------------

    def _layout(self, document, thumbnails, draw, canvas) -> int:
        left = self._px(self.PADDING)
        y = self._px(self.PADDING)

        for index, section in enumerate(document.sections):
            if section.kind == "header":
                y = self._text(draw, section.title, left, y, "title", BRAND_PRIMARY, center=True)
                y += self._px(self.SECTION_GAP)
            elif section.kind == "key_value":
                y = self._heading(draw, section.title, left, y)
                for key, value in section.items:
                    y = self._text(draw, f"{key}: {value}", left, y, "body", TEXT_DARK)
            elif section.kind == "conditional_block":
                y = self._text(draw, f"{section.title}:", left, y, "body", TEXT_DARK)
                for paragraph in section.text.splitlines() or [""]:
                    y = self._text(draw, paragraph, left, y, "body", TEXT_DARK)
            elif section.kind == "gallery":
                y = self._heading(draw, section.title, left, y)
                if section.is_empty:
                    y = self._text(draw, section.placeholder, left, y, "body", TEXT_DARK)
                else:
                    y = self._gallery(canvas, thumbnails.get(index, []), left, y)
            elif section.kind == "list":
                y = self._heading(draw, section.title, left, y)
                for item in section.items:
                    y = self._text(draw, f"{section.bullet}{item}", left, y, "body", TEXT_DARK)
            elif section.kind == "footer":
                y += self._px(self.FOOTER_GAP)
                y = self._text(draw, section.text, left, y, "footer", TEXT_MUTED, center=True)

        return int(math.ceil(y + self._px(self.PADDING)))

    def _heading(self, draw, title: str, left: int, y: int) -> int:
        y += self._px(self.SECTION_GAP)
        y = self._text(draw, title, left, y, "heading", BRAND_PRIMARY)
        if draw is not None:
            draw.line(
                [(left, y), (left + self.content_width, y)],
                fill=RULE_GRAY,
                width=max(1, self._px(1)),
            )
        return y + self._px(6)

    def _text(self, draw, text: str, left: int, y: int, font_key: str, color, center: bool = False) -> int:
        font = self.fonts[font_key]
        line_height = int(font.size * self.LINE_SPACING)

        for line in self._wrap(text, font):
            if draw is not None:
                x = left
                if center:
                    x = left + max(0, (self.content_width - int(self._measure.textlength(line, font=font))) // 2)
                draw.text((x, y), line, font=font, fill=color)
            y += line_height

        return y

    def _wrap(self, text: str, font) -> List[str]:
        """Greedy word wrap to the content width."""
        words = text.split(" ")
        lines: List[str] = []
        current = ""

        for word in words:
            candidate = f"{current} {word}" if current else word
            if current and self._measure.textlength(candidate, font=font) > self.content_width:
                lines.append(current)
                current = word
            else:
                current = candidate

        lines.append(current)
        return lines

    def _gallery(self, canvas, images: List[Image.Image], left: int, y: int) -> int:
        gap = self._px(self.PHOTO_GAP)
        x = left
        row_height = 0

        for img in images:
            if x > left and x + img.width > left + self.content_width:
                y += row_height + gap
                x = left
                row_height = 0
            if canvas is not None:
                canvas.paste(img, (x, y))
            x += img.width + gap
            row_height = max(row_height, img.height)

        return y + row_height + gap
