from datetime import datetime, timezone

from pdf_decomposer.pdf.base import ATTRIBUTE_NAMES, BasePdfDocument

_RENAMED_KEYS = {"creation_date": "created-time"}


def format_timestamp(epoch: int) -> str:
    """Render Unix epoch seconds as an ISO-8601 UTC timestamp."""
    return datetime.fromtimestamp(epoch, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class MetadataExtractor:
    """Reads document information entries into canonical attribute keys."""

    def extract(self, document: BasePdfDocument) -> dict[str, str]:
        attributes: dict[str, str] = {}
        for name in ATTRIBUTE_NAMES:
            value = document.attribute(name)
            if value is None:
                continue
            if isinstance(value, int):
                value = format_timestamp(value)
            attributes[self._key(name)] = value
        return attributes

    def _key(self, name: str) -> str:
        return _RENAMED_KEYS.get(name, name.replace("_", "-"))
