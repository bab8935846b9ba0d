from pdf_decomposer.decomposer.models import InputData


class DecomposerError(Exception):
    """Base exception for all decomposer-related errors."""

    def __init__(self, data: InputData, message: str) -> None:
        super().__init__(message)
        self.data = data


class EncryptedError(DecomposerError):
    """Raised when a document needs a password that was not supplied or is wrong."""

    def __init__(self, data: InputData) -> None:
        super().__init__(data, f"Encrypted PDF: {data.uri}")


class InvalidDataError(DecomposerError):
    """Raised when a document cannot be parsed for any other reason."""

    def __init__(self, data: InputData, detail: str) -> None:
        super().__init__(data, f"Invalid PDF: {data.uri}: {detail}")
        self.detail = detail
