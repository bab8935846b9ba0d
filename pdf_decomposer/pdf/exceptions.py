class PdfExtractionError(Exception):
    """Raised when a PDF engine cannot open or read a document."""


class PdfPasswordError(PdfExtractionError):
    """Raised when a document is encrypted and the password is missing or wrong."""
