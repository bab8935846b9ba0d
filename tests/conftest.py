import io
from collections.abc import Callable

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from pdf_decomposer.pdf.base import BasePdfEngine
from pdf_decomposer.pdf.pdfplumber_adapter import PdfPlumberEngine
from pdf_decomposer.pdf.pymupdf_adapter import PyMuPdfEngine

PDF_PASSWORD = "secret"


def _build_pdf(
    draw: Callable[[canvas.Canvas], None],
    pagesize: tuple[float, float] = letter,
    **kwargs: object,
) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=pagesize, **kwargs)
    draw(c)
    c.save()
    return buf.getvalue()


def _pages(*texts: str) -> Callable[[canvas.Canvas], None]:
    def draw(c: canvas.Canvas) -> None:
        for text in texts:
            if text:
                c.drawString(72, 720, text)
            c.showPage()

    return draw


@pytest.fixture(params=["pymupdf", "pdfplumber"])
def pdf_engine(request: pytest.FixtureRequest) -> BasePdfEngine:
    """Every engine adapter, so engine-backed tests run against both."""
    engines: dict[str, type[BasePdfEngine]] = {
        "pymupdf": PyMuPdfEngine,
        "pdfplumber": PdfPlumberEngine,
    }
    return engines[request.param]()


@pytest.fixture()
def one_page_pdf_bytes() -> bytes:
    """Generate a single-page PDF with the text 'Page1'."""
    return _build_pdf(_pages("Page1"))


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with 'Page1' and 'Page2'."""
    return _build_pdf(_pages("Page1", "Page2"))


@pytest.fixture()
def blank_middle_page_pdf_bytes() -> bytes:
    """Generate a three-page PDF whose middle page has no text."""
    return _build_pdf(_pages("Page1", "", "Page3"))


@pytest.fixture()
def attributes_pdf_bytes() -> bytes:
    """Generate a PDF with document information entries set."""

    def draw(c: canvas.Canvas) -> None:
        c.setTitle("Title")
        c.setAuthor("Author")
        c.setSubject("Subject")
        c.setKeywords("Keyword1, Keyword2")
        c.setCreator("Writer")
        c.drawString(72, 720, "Attributes")
        c.showPage()

    return _build_pdf(draw)


@pytest.fixture()
def encrypted_pdf_bytes() -> bytes:
    """Generate a PDF protected by the user password PDF_PASSWORD."""
    return _build_pdf(_pages("Secret page"), encrypt=PDF_PASSWORD)


def _filled_page(width: float, height: float) -> Callable[[canvas.Canvas], None]:
    def draw(c: canvas.Canvas) -> None:
        c.setFillColorRGB(0, 0, 0)
        c.rect(0, 0, width, height, stroke=0, fill=1)
        c.showPage()

    return draw


@pytest.fixture()
def landscape_pdf_bytes() -> bytes:
    """Generate a 400x200 pt page painted solid black."""
    return _build_pdf(_filled_page(400, 200), pagesize=(400, 200))


@pytest.fixture()
def portrait_pdf_bytes() -> bytes:
    """Generate a 200x400 pt page painted solid black."""
    return _build_pdf(_filled_page(200, 400), pagesize=(200, 400))


@pytest.fixture()
def pdf_password() -> str:
    """User password of encrypted_pdf_bytes."""
    return PDF_PASSWORD


@pytest.fixture()
def broken_page_tree_pdf_bytes() -> bytes:
    """Generate a PDF that opens but whose page tree has no /Kids entry.

    The key is renamed in place so every xref offset stays valid.
    """
    pdf = _build_pdf(_pages("Page1"))
    assert b"/Kids" in pdf
    return pdf.replace(b"/Kids", b"/Kidz")


def _minimal_pdf(*objects: bytes) -> bytes:
    """Assemble numbered objects into a PDF with an exact xref table; object 1 is the root."""
    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n%s\nendobj\n" % (number, body)
    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    out += b"startxref\n%d\n%%%%EOF\n" % xref_offset
    return bytes(out)


@pytest.fixture()
def zero_page_pdf_bytes() -> bytes:
    """Generate a well-formed PDF whose page tree is empty."""
    return _minimal_pdf(
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [] /Count 0 >>",
    )
