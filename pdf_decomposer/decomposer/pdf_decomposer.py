from collections.abc import Iterator

from pdf_decomposer.config.settings import Settings
from pdf_decomposer.decomposer.base import BaseDecomposer
from pdf_decomposer.decomposer.detector import is_pdf
from pdf_decomposer.decomposer.exceptions import InvalidDataError
from pdf_decomposer.decomposer.loader import DocumentLoader
from pdf_decomposer.decomposer.metadata_extractor import MetadataExtractor
from pdf_decomposer.decomposer.models import InputData, TextData
from pdf_decomposer.decomposer.password import FixedPassword, PasswordPolicy
from pdf_decomposer.decomposer.text_extractor import TextExtractor
from pdf_decomposer.decomposer.thumbnail import ThumbnailRenderer
from pdf_decomposer.logging.logger import Log
from pdf_decomposer.pdf.exceptions import PdfExtractionError
from pdf_decomposer.pdf.factory import PdfEngineFactory


class PdfDecomposer(BaseDecomposer):
    """Extracts text, document information and a thumbnail from PDF input.

    Pipeline: load -> extract text -> extract attributes -> thumbnail (on request).
    Failures while loading, reading pages or rendering propagate as
    EncryptedError or InvalidDataError; nothing is yielded in that case.
    """

    def __init__(
        self,
        loader: DocumentLoader,
        text_extractor: TextExtractor,
        metadata_extractor: MetadataExtractor,
        thumbnail_renderer: ThumbnailRenderer,
        password: PasswordPolicy = None,
    ) -> None:
        self._loader = loader
        self._text_extractor = text_extractor
        self._metadata_extractor = metadata_extractor
        self._thumbnail_renderer = thumbnail_renderer
        self._password = password

    def target(self, data: InputData) -> bool:
        return is_pdf(data)

    def decompose(self, data: InputData) -> Iterator[TextData]:
        Log.info(f"Decomposing PDF {data.uri}")
        with self._loader.load(data, self._password) as document:
            try:
                body = self._text_extractor.extract(document)
                attributes = self._metadata_extractor.extract(document)
                screenshot = None
                if data.need_screenshot:
                    width, height = data.expected_screenshot_size
                    screenshot = self._thumbnail_renderer.render(document, width, height)
                page_count = document.page_count
            except PdfExtractionError as exc:
                raise InvalidDataError(data, str(exc)) from exc
        Log.info(f"Extracted {len(body)} chars from {page_count} pages of {data.uri}")
        yield TextData(
            uri=data.uri,
            body=body,
            attributes=attributes,
            screenshot=screenshot,
        )


def build_pdf_decomposer(
    settings: Settings,
    password: PasswordPolicy = None,
) -> PdfDecomposer:
    """Build a PdfDecomposer with the configured engine.

    An explicit password policy takes precedence over settings.pdf_password.
    """
    if password is None and settings.pdf_password is not None:
        password = FixedPassword(settings.pdf_password)
    loader = DocumentLoader(
        engine=PdfEngineFactory.create(settings),
        tmp_dir=settings.tmp_dir,
    )
    return PdfDecomposer(
        loader=loader,
        text_extractor=TextExtractor(),
        metadata_extractor=MetadataExtractor(),
        thumbnail_renderer=ThumbnailRenderer(),
        password=password,
    )
