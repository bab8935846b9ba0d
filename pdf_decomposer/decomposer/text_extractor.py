from pdf_decomposer.pdf.base import BasePdfDocument


class TextExtractor:
    """Concatenates page texts in document order."""

    def extract(self, document: BasePdfDocument) -> str:
        """Join non-empty page texts, each terminated by exactly one newline.

        Empty pages contribute nothing, not even a separator.
        """
        chunks: list[str] = []
        for page in document.pages():
            text = page.extract_text()
            if not text:
                continue
            chunks.append(text if text.endswith("\n") else f"{text}\n")
        return "".join(chunks)
