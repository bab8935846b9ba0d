import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from pdf_decomposer.decomposer.diagnostics import DiagnosticCapture
from pdf_decomposer.decomposer.exceptions import EncryptedError, InvalidDataError
from pdf_decomposer.decomposer.models import InputData
from pdf_decomposer.decomposer.password import PasswordPolicy, resolve_password
from pdf_decomposer.logging.logger import Log
from pdf_decomposer.pdf.base import BasePdfDocument, BasePdfEngine
from pdf_decomposer.pdf.exceptions import PdfExtractionError, PdfPasswordError


class DocumentLoader:
    """Opens input data with a PDF engine and owns the document for one decomposition."""

    def __init__(
        self,
        engine: BasePdfEngine,
        diagnostics: DiagnosticCapture | None = None,
        tmp_dir: str | None = None,
    ) -> None:
        self._engine = engine
        self._diagnostics = diagnostics if diagnostics is not None else DiagnosticCapture()
        self._tmp_dir = tmp_dir

    @contextmanager
    def load(
        self,
        data: InputData,
        password: PasswordPolicy = None,
    ) -> Iterator[BasePdfDocument]:
        """Open data and yield the document; close it and drop temp files on exit.

        Raises:
            EncryptedError: if the password is missing or wrong.
            InvalidDataError: if the engine cannot open the document.
        """
        resolved = resolve_password(password, data)
        with self._materialize(data) as path:
            document = self._open(data, path, resolved)
            try:
                yield document
            finally:
                document.close()

    def _open(self, data: InputData, path: Path, password: str | None) -> BasePdfDocument:
        try:
            return self._diagnostics.run(lambda: self._engine.open(path, password))
        except PdfPasswordError as exc:
            raise EncryptedError(data) from exc
        except PdfExtractionError as exc:
            raise InvalidDataError(data, str(exc)) from exc

    @contextmanager
    def _materialize(self, data: InputData) -> Iterator[Path]:
        """Yield a path on disk holding the document."""
        if data.path is not None and data.path.is_file():
            yield data.path
            return
        if data.body is None:
            raise InvalidDataError(data, "neither a readable path nor a body is available")

        fd, name = tempfile.mkstemp(prefix="pdf-decomposer-", suffix=".pdf", dir=self._tmp_dir)
        path = Path(name)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data.body)
            Log.debug(f"Materialized {len(data.body)} bytes of {data.uri} to {path}")
            yield path
        finally:
            path.unlink(missing_ok=True)
