from pdf_decomposer.decomposer.models import InputData

PDF_MIME_TYPE = "application/pdf"
PDF_SIGNATURE = b"%PDF-1"


def is_pdf(data: InputData) -> bool:
    """Decide whether data is a PDF without reading more than its header.

    An explicit mime type wins; otherwise only inputs without an extension
    or with a ``pdf`` extension are sniffed for the PDF signature.
    """
    if data.mime_type == PDF_MIME_TYPE:
        return True
    if not data.extension or data.extension == "pdf":
        return data.peek(len(PDF_SIGNATURE)) == PDF_SIGNATURE
    return False
