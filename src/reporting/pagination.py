"""
Sliding-window pagination.

The whole document is one tall raster. Every page draws that same raster,
shifted up by one usable span per page, so the page's printable window
shows the next slice. Offsets are measured from the top edge of the page,
in the same unit as the page geometry.
"""

import math
from typing import Iterator, List

from pydantic import BaseModel, ConfigDict, Field, model_validator

from utils.logger import setup_logger
from utils.config import config

logger = setup_logger(__name__, level=config.log_level, component="PAGINATION")


class PageGeometry(BaseModel):
    """Output page size and margins."""
    model_config = ConfigDict(frozen=True)

    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    top_margin: float = Field(0.0, ge=0)
    bottom_margin: float = Field(0.0, ge=0)
    left_margin: float = Field(0.0, ge=0)
    right_margin: float = Field(0.0, ge=0)

    @model_validator(mode="after")
    def validate_printable_area(self):
        if self.usable_height <= 0:
            raise ValueError(
                f"Margins {self.top_margin}+{self.bottom_margin} leave no usable height on a page {self.height} tall"
            )
        if self.content_width <= 0:
            raise ValueError(
                f"Margins {self.left_margin}+{self.right_margin} leave no usable width on a page {self.width} wide"
            )
        return self

    @classmethod
    def uniform(cls, width: float, height: float, margin: float) -> "PageGeometry":
        """Same margin on every edge."""
        return cls(
            width=width,
            height=height,
            top_margin=margin,
            bottom_margin=margin,
            left_margin=margin,
            right_margin=margin,
        )

    @property
    def usable_height(self) -> float:
        return self.height - (self.top_margin + self.bottom_margin)

    @property
    def content_width(self) -> float:
        return self.width - (self.left_margin + self.right_margin)


def scale_to_page_width(pixel_width: int, pixel_height: int, content_width: float) -> float:
    """Height of a raster once scaled proportionally to the page content width."""
    if pixel_width <= 0:
        raise ValueError(f"Raster width must be positive, got {pixel_width}")
    return pixel_height * content_width / pixel_width


def iter_page_offsets(
    total_content_height: float,
    page_width: float,
    page_height: float,
    top_margin: float,
    bottom_margin: float,
) -> Iterator[float]:
    """
    Lazily yield the vertical offset of the raster on each page.

    The first page places the raster at ``top_margin``; each following page
    moves it up by exactly one usable span. Stops once the remaining height
    is covered, so content that fits exactly never produces a blank page,
    and empty content still yields one page.
    """
    if page_width <= 0:
        raise ValueError(f"Page width must be positive, got {page_width}")

    usable_span = page_height - (top_margin + bottom_margin)
    if usable_span <= 0:
        raise ValueError(
            f"Margins {top_margin}+{bottom_margin} leave no usable height on a page {page_height} tall"
        )

    page_index = 0
    while True:
        yield top_margin - page_index * usable_span
        # Covered height is recomputed for each page, never accumulated
        if (page_index + 1) * usable_span >= total_content_height:
            return
        page_index += 1


def paginate(
    total_content_height: float,
    page_width: float,
    page_height: float,
    top_margin: float,
    bottom_margin: float,
) -> List[float]:
    """
    Compute raster offsets for every page.

    Args:
        total_content_height: Raster height already scaled to page units
        page_width: Page width in page units
        page_height: Page height in page units
        top_margin: Top margin in page units
        bottom_margin: Bottom margin in page units

    Returns:
        One offset per page, first equal to ``top_margin``, each next one
        smaller by the usable span
    """
    offsets = list(iter_page_offsets(
        total_content_height, page_width, page_height, top_margin, bottom_margin
    ))
    logger.debug(
        f"Paginated content height {total_content_height:.2f} into {len(offsets)} page(s)"
    )
    return offsets


def paginate_geometry(total_content_height: float, geometry: PageGeometry) -> List[float]:
    """``paginate`` driven by a ``PageGeometry``."""
    return paginate(
        total_content_height,
        geometry.width,
        geometry.height,
        geometry.top_margin,
        geometry.bottom_margin,
    )


def expected_page_count(total_content_height: float, usable_span: float) -> int:
    """Closed form of the page count: 1, or ceil(H / span) for taller content."""
    if total_content_height <= usable_span:
        return 1
    pages = math.ceil(total_content_height / usable_span)
    if (pages - 1) * usable_span >= total_content_height:
        pages -= 1
    return pages
