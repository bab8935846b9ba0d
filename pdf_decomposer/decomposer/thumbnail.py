"""First page thumbnails with aspect-preserving fit."""

import base64
import io
from dataclasses import dataclass

from PIL import Image

from pdf_decomposer.decomposer.models import Screenshot
from pdf_decomposer.logging.logger import Log
from pdf_decomposer.pdf.base import BasePdfDocument

PNG_MIME_TYPE = "image/png"
OPAQUE_WHITE = (255, 255, 255, 255)


@dataclass(frozen=True)
class ThumbnailLayout:
    """Uniform scale and offset that place a page inside the thumbnail."""

    scale: float
    offset_x: float
    offset_y: float


def compute_layout(
    page_width: float,
    page_height: float,
    target_width: int,
    target_height: int,
) -> ThumbnailLayout:
    """Fit the page by width when it is at least as wide as tall, otherwise by height.

    The page is centered along the other axis. Square pages fit by width, so a
    square page in a box wider than tall overflows vertically and is cropped
    (100x100 into 200x100 gives offset_y=-50).
    """
    if page_width >= page_height:
        scale = target_width / page_width
        return ThumbnailLayout(scale, 0.0, (target_height - page_height * scale) / 2)
    scale = target_height / page_height
    return ThumbnailLayout(scale, (target_width - page_width * scale) / 2, 0.0)


class ThumbnailRenderer:
    """Rasterizes the first page into a fixed-size PNG."""

    def render(self, document: BasePdfDocument, width: int, height: int) -> Screenshot | None:
        if document.page_count == 0:
            Log.warning("Document has no pages, skipping thumbnail", component="pdf")
            return None
        canvas = Image.new("RGBA", (width, height), OPAQUE_WHITE)
        page = document.page(0)
        page_width, page_height = page.size
        if page_width > 0 and page_height > 0:
            layout = compute_layout(page_width, page_height, width, height)
            offset = (round(layout.offset_x), round(layout.offset_y))
            canvas.paste(page.render(layout.scale), offset)
        else:
            Log.warning(f"First page has no area ({page_width}x{page_height})", component="pdf")
        return Screenshot(
            mime_type=PNG_MIME_TYPE,
            data=base64.b64encode(self._encode_png(canvas)).decode("ascii"),
            encoding="base64",
        )

    def _encode_png(self, image: Image.Image) -> bytes:
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()
