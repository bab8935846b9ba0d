from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import Path
from types import TracebackType

from PIL import Image

# Document information entries every engine must expose through attribute().
ATTRIBUTE_NAMES: tuple[str, ...] = (
    "title",
    "author",
    "subject",
    "keywords",
    "creator",
    "producer",
    "creation_date",
)


class BasePdfPage(ABC):
    """A page borrowed from an open document.

    Pages hold an index into their document rather than a native page
    reference, so they stop working once the document is closed.
    """

    @property
    @abstractmethod
    def size(self) -> tuple[float, float]:
        """Page (width, height) in PDF points."""

    @abstractmethod
    def extract_text(self) -> str:
        """Return the raw text of the page, or an empty string."""

    @abstractmethod
    def render(self, scale: float) -> Image.Image:
        """Rasterize the page at the given scale onto an opaque white image."""


class BasePdfDocument(ABC):
    """An open PDF document owned by whoever called BasePdfEngine.open()."""

    @property
    @abstractmethod
    def page_count(self) -> int:
        """Number of pages in the document."""

    @abstractmethod
    def page(self, index: int) -> BasePdfPage:
        """Return the page at a zero-based index."""

    @abstractmethod
    def attribute(self, name: str) -> str | int | None:
        """Look up a document information entry.

        Args:
            name: One of ATTRIBUTE_NAMES.

        Returns:
            The entry as a string, ``creation_date`` as Unix epoch seconds,
            or None when the document does not define it.
        """

    @abstractmethod
    def close(self) -> None:
        """Release the native document."""

    def pages(self) -> Iterator[BasePdfPage]:
        for index in range(self.page_count):
            yield self.page(index)

    def __enter__(self) -> "BasePdfDocument":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class BasePdfEngine(ABC):
    """Contract for all PDF engine adapters."""

    @abstractmethod
    def open(self, path: Path, password: str | None = None) -> BasePdfDocument:
        """Open the PDF stored at path.

        Args:
            path: Location of the PDF on disk.
            password: User or owner password for encrypted documents.

        Returns:
            An open document; the caller must close it.

        Raises:
            PdfPasswordError: if the document is encrypted and the password
                is missing or wrong.
            PdfExtractionError: if the engine cannot open the document.
        """
