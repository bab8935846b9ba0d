from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

DEFAULT_SCREENSHOT_SIZE = (200, 200)


@dataclass(frozen=True)
class InputData:
    """Read-only view of a source document handed over by the host pipeline."""

    uri: str
    body: bytes | None = None
    path: Path | None = None
    mime_type: str | None = None
    extension: str | None = None
    need_screenshot: bool = False
    expected_screenshot_size: tuple[int, int] = DEFAULT_SCREENSHOT_SIZE

    @classmethod
    def from_path(cls, path: Path | str, **kwargs: Any) -> "InputData":
        """Describe a file on disk; uri and extension come from the file name."""
        path = Path(path)
        kwargs.setdefault("uri", path.resolve().as_uri())
        kwargs.setdefault("extension", path.suffix[1:].lower() or None)
        return cls(path=path, **kwargs)

    @classmethod
    def from_bytes(cls, body: bytes, uri: str, **kwargs: Any) -> "InputData":
        """Describe in-memory content."""
        return cls(uri=uri, body=body, **kwargs)

    def peek(self, size: int) -> bytes:
        """Return up to size leading bytes without loading the whole document."""
        if self.body is not None:
            return self.body[:size]
        if self.path is not None and self.path.is_file():
            with self.path.open("rb") as f:
                return f.read(size)
        return b""


@dataclass(frozen=True)
class Screenshot:
    """Encoded image of a document, e.g. a first page thumbnail."""

    mime_type: str
    data: str
    encoding: str = "base64"


@dataclass(frozen=True)
class TextData:
    """Plain text record produced by a decomposer."""

    uri: str
    body: str
    attributes: Mapping[str, str] = field(default_factory=dict)
    screenshot: Screenshot | None = None
    mime_type: str = "text/plain"

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def __getitem__(self, name: str) -> str | None:
        return self.attributes.get(name)
