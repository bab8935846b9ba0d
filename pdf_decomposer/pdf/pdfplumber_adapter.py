from pathlib import Path

import pdfplumber
from pdfplumber.page import Page
from pdfminer.pdfdocument import PDFPasswordIncorrect
from PIL import Image

from pdf_decomposer.logging.logger import Log
from pdf_decomposer.pdf.base import BasePdfDocument, BasePdfEngine, BasePdfPage
from pdf_decomposer.pdf.dates import parse_pdf_date
from pdf_decomposer.pdf.exceptions import PdfExtractionError, PdfPasswordError

_METADATA_KEYS = {
    "title": "Title",
    "author": "Author",
    "subject": "Subject",
    "keywords": "Keywords",
    "creator": "Creator",
    "producer": "Producer",
    "creation_date": "CreationDate",
}

# PDF user space is 72 units per inch.
_POINTS_PER_INCH = 72


class PdfPlumberPage(BasePdfPage):
    def __init__(self, document: "PdfPlumberDocument", index: int) -> None:
        self._document = document
        self._index = index

    @property
    def size(self) -> tuple[float, float]:
        native = self._native()
        try:
            return float(native.width), float(native.height)
        except Exception as exc:
            raise self._failure("read the size of", exc) from exc

    def extract_text(self) -> str:
        native = self._native()
        try:
            return native.extract_text() or ""
        except Exception as exc:
            raise self._failure("extract text from", exc) from exc

    def render(self, scale: float) -> Image.Image:
        native = self._native()
        try:
            page_image = native.to_image(resolution=_POINTS_PER_INCH * scale)
            return page_image.original.convert("RGB")
        except Exception as exc:
            raise self._failure("render", exc) from exc

    def _native(self) -> Page:
        return self._document.native_page(self._index)

    def _failure(self, action: str, exc: Exception) -> PdfExtractionError:
        return PdfExtractionError(f"pdfplumber could not {action} page {self._index + 1}: {exc}")


class PdfPlumberDocument(BasePdfDocument):
    def __init__(self, native: pdfplumber.PDF) -> None:
        self._native: pdfplumber.PDF | None = native

    @property
    def page_count(self) -> int:
        return len(self._pages())

    def page(self, index: int) -> PdfPlumberPage:
        if not 0 <= index < self.page_count:
            raise IndexError(f"page index {index} out of range")
        return PdfPlumberPage(self, index)

    def native_page(self, index: int) -> Page:
        return self._pages()[index]

    def attribute(self, name: str) -> str | int | None:
        value = self._require_open().metadata.get(_METADATA_KEYS[name])
        if value is None or value == "":
            return None
        if isinstance(value, bytes):
            value = value.decode("utf-8", errors="replace")
        if name == "creation_date":
            return parse_pdf_date(str(value))
        return str(value)

    def close(self) -> None:
        """Release the document and its file handle. Never raises."""
        native, self._native = self._native, None
        if native is None:
            return
        try:
            native.close()
        except Exception as exc:
            # PDF.close() walks the page list first, so a broken page tree fails here.
            Log.warning(f"[pdf] pdfplumber could not close cleanly: {exc}", component="pdf")
            native.stream.close()

    def _pages(self) -> list[Page]:
        native = self._require_open()
        try:
            return native.pages
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber could not read the page tree: {exc}") from exc

    def _require_open(self) -> pdfplumber.PDF:
        if self._native is None:
            raise ValueError("document is closed")
        return self._native


class PdfPlumberEngine(BasePdfEngine):
    """Opens PDF documents with pdfplumber (pdfminer.six text, pypdfium2 raster)."""

    def open(self, path: Path, password: str | None = None) -> PdfPlumberDocument:
        try:
            native = pdfplumber.open(path, password=password or "")
        except Exception as exc:
            if _is_password_failure(exc):
                reason = "wrong password" if password else "password required"
                raise PdfPasswordError(f"{path.name}: {reason}") from exc
            raise PdfExtractionError(f"pdfplumber could not open {path.name}: {exc}") from exc
        return PdfPlumberDocument(native)


def _is_password_failure(exc: BaseException) -> bool:
    """pdfplumber wraps pdfminer errors, so look through args and chained causes."""
    candidates: list[object] = [exc, exc.__cause__, exc.__context__, *exc.args]
    return any(isinstance(candidate, PDFPasswordIncorrect) for candidate in candidates)
