from abc import ABC, abstractmethod
from collections.abc import Iterator

from pdf_decomposer.decomposer.models import InputData, TextData


class BaseDecomposer(ABC):
    """Contract for all format decomposers."""

    @abstractmethod
    def target(self, data: InputData) -> bool:
        """Return True if this decomposer handles data's format."""

    @abstractmethod
    def decompose(self, data: InputData) -> Iterator[TextData]:
        """Extract text records from data.

        Args:
            data: The document to decompose.

        Yields:
            TextData records, in order.

        Raises:
            DecomposerError: if the document cannot be read.
        """
