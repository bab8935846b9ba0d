from unittest.mock import MagicMock, PropertyMock, patch

import pytest

from pdf_decomposer.pdf.exceptions import PdfExtractionError
from pdf_decomposer.pdf.pdfplumber_adapter import PdfPlumberDocument
from pdf_decomposer.pdf.pymupdf_adapter import PyMuPdfDocument


def _plumber_native(pages: object = None) -> MagicMock:
    native = MagicMock()
    native.pages = pages if pages is not None else [MagicMock()]
    return native


class TestPdfPlumberClose:
    def test_close_failure_is_logged_and_stream_released(self) -> None:
        native = _plumber_native()
        native.close.side_effect = TypeError("'NoneType' object is not iterable")
        document = PdfPlumberDocument(native)

        with patch("pdf_decomposer.pdf.pdfplumber_adapter.Log") as log:
            document.close()

        native.stream.close.assert_called_once_with()
        log.warning.assert_called_once()
        assert "not iterable" in log.warning.call_args.args[0]

    def test_document_is_closed_even_when_close_fails(self) -> None:
        native = _plumber_native()
        native.close.side_effect = TypeError("boom")
        document = PdfPlumberDocument(native)
        document.close()

        with pytest.raises(ValueError, match="closed"):
            document.page_count
        document.close()
        native.close.assert_called_once_with()

    def test_clean_close_leaves_stream_to_pdfplumber(self) -> None:
        native = _plumber_native()
        PdfPlumberDocument(native).close()

        native.close.assert_called_once_with()
        native.stream.close.assert_not_called()


class TestPdfPlumberPageFailures:
    def test_unreadable_page_tree(self) -> None:
        native = MagicMock()
        type(native).pages = PropertyMock(side_effect=TypeError("not iterable"))
        document = PdfPlumberDocument(native)

        with pytest.raises(PdfExtractionError, match="page tree"):
            document.page_count

    def test_text_failure(self) -> None:
        page = MagicMock()
        page.extract_text.side_effect = KeyError("Font")
        document = PdfPlumberDocument(_plumber_native([page]))

        with pytest.raises(PdfExtractionError, match="page 1"):
            document.page(0).extract_text()

    def test_render_failure(self) -> None:
        page = MagicMock()
        page.to_image.side_effect = RuntimeError("Failed to load page.")
        document = PdfPlumberDocument(_plumber_native([page]))

        with pytest.raises(PdfExtractionError, match="Failed to load page"):
            document.page(0).render(1.0)

    def test_size_failure(self) -> None:
        page = MagicMock()
        page.width = None
        document = PdfPlumberDocument(_plumber_native([page]))

        with pytest.raises(PdfExtractionError):
            document.page(0).size


class TestPyMuPdfPageFailures:
    def _document(self) -> tuple[PyMuPdfDocument, MagicMock]:
        native = MagicMock()
        native.page_count = 1
        return PyMuPdfDocument(native), native

    def test_load_failure(self) -> None:
        document, native = self._document()
        native.load_page.side_effect = RuntimeError("code=7: malformed page tree")

        with pytest.raises(PdfExtractionError, match="malformed page tree"):
            document.page(0).extract_text()

    def test_text_failure(self) -> None:
        document, native = self._document()
        native.load_page.return_value.get_text.side_effect = RuntimeError("bad content stream")

        with pytest.raises(PdfExtractionError, match="page 1"):
            document.page(0).extract_text()

    def test_render_failure(self) -> None:
        document, native = self._document()
        native.load_page.return_value.get_pixmap.side_effect = RuntimeError("bad image")

        with pytest.raises(PdfExtractionError, match="bad image"):
            document.page(0).render(1.0)

    def test_metadata_failure(self) -> None:
        document, native = self._document()
        type(native).metadata = PropertyMock(side_effect=RuntimeError("bad info dict"))

        with pytest.raises(PdfExtractionError, match="document information"):
            document.attribute("title")

    def test_closed_document_is_not_an_extraction_error(self) -> None:
        document, _native = self._document()
        page = document.page(0)
        document.close()

        with pytest.raises(ValueError, match="closed"):
            page.extract_text()
