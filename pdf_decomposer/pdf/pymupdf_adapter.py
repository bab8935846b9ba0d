from pathlib import Path

import pymupdf
from PIL import Image

from pdf_decomposer.logging.logger import Log
from pdf_decomposer.pdf.base import BasePdfDocument, BasePdfEngine, BasePdfPage
from pdf_decomposer.pdf.dates import parse_pdf_date
from pdf_decomposer.pdf.exceptions import PdfExtractionError, PdfPasswordError

_METADATA_KEYS = {
    "title": "title",
    "author": "author",
    "subject": "subject",
    "keywords": "keywords",
    "creator": "creator",
    "producer": "producer",
    "creation_date": "creationDate",
}


class PyMuPdfPage(BasePdfPage):
    def __init__(self, document: "PyMuPdfDocument", index: int) -> None:
        self._document = document
        self._index = index

    @property
    def size(self) -> tuple[float, float]:
        native = self._native()
        try:
            rect = native.rect
        except Exception as exc:
            raise self._failure("read the size of", exc) from exc
        return rect.width, rect.height

    def extract_text(self) -> str:
        native = self._native()
        try:
            return native.get_text()  # type: ignore[no-any-return]
        except Exception as exc:
            raise self._failure("extract text from", exc) from exc

    def render(self, scale: float) -> Image.Image:
        native = self._native()
        try:
            pixmap = native.get_pixmap(matrix=pymupdf.Matrix(scale, scale), alpha=False)
            return Image.frombytes("RGB", (pixmap.width, pixmap.height), pixmap.samples)
        except Exception as exc:
            raise self._failure("render", exc) from exc

    def _native(self) -> pymupdf.Page:
        return self._document.native_page(self._index)

    def _failure(self, action: str, exc: Exception) -> PdfExtractionError:
        return PdfExtractionError(f"pymupdf could not {action} page {self._index + 1}: {exc}")


class PyMuPdfDocument(BasePdfDocument):
    def __init__(self, native: pymupdf.Document) -> None:
        self._native: pymupdf.Document | None = native

    @property
    def page_count(self) -> int:
        return self._require_open().page_count  # type: ignore[no-any-return]

    def page(self, index: int) -> PyMuPdfPage:
        if not 0 <= index < self.page_count:
            raise IndexError(f"page index {index} out of range")
        return PyMuPdfPage(self, index)

    def native_page(self, index: int) -> pymupdf.Page:
        native = self._require_open()
        try:
            return native.load_page(index)
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf could not load page {index + 1}: {exc}") from exc

    def attribute(self, name: str) -> str | int | None:
        native = self._require_open()
        try:
            metadata = native.metadata or {}
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf could not read document information: {exc}") from exc
        value = metadata.get(_METADATA_KEYS[name])
        if not value:
            return None
        if name == "creation_date":
            return parse_pdf_date(value)
        return str(value)

    def close(self) -> None:
        native, self._native = self._native, None
        if native is not None:
            native.close()

    def _require_open(self) -> pymupdf.Document:
        if self._native is None:
            raise ValueError("document is closed")
        return self._native


class PyMuPdfEngine(BasePdfEngine):
    """Opens PDF documents with PyMuPDF (MuPDF)."""

    def open(self, path: Path, password: str | None = None) -> PyMuPdfDocument:
        pymupdf.TOOLS.reset_mupdf_warnings()
        show_errors = pymupdf.TOOLS.mupdf_display_errors()
        pymupdf.TOOLS.mupdf_display_errors(False)
        try:
            native = pymupdf.open(str(path), filetype="pdf")  # type: ignore[no-untyped-call]
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf could not open {path.name}: {exc}") from exc
        finally:
            pymupdf.TOOLS.mupdf_display_errors(show_errors)
            self._report_warnings(path)

        if native.needs_pass and not (password and native.authenticate(password)):
            native.close()
            reason = "wrong password" if password else "password required"
            raise PdfPasswordError(f"{path.name}: {reason}")
        try:
            # MuPDF repairs broken files; a repaired file may still lack a readable page tree.
            Log.debug(f"[pdf] {path.name} has {native.page_count} pages", component="pdf")
        except Exception as exc:
            native.close()
            raise PdfExtractionError(f"pymupdf could not read {path.name}: {exc}") from exc
        return PyMuPdfDocument(native)

    def _report_warnings(self, path: Path) -> None:
        warnings = pymupdf.TOOLS.mupdf_warnings(reset=True)
        if warnings:
            Log.warning(f"[pdf] MuPDF warnings for {path.name}: {warnings}", component="pdf")
