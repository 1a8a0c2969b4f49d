"""
Source file text extraction.

PDFs are parsed with LangChain's PyPDFLoader (pypdf); plain-text formats are
decoded as UTF-8. A suffix router picks the extractor for each upload.

Dependencies: langchain_community.document_loaders, pypdf
System role: First stage of the ingestion pipeline
"""

import asyncio
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from langchain_community.document_loaders import PyPDFLoader

from studycast.core.exceptions import ExtractionError

logger = logging.getLogger(__name__)


class TextExtractor(ABC):
    """Source file bytes to plain text."""

    @abstractmethod
    async def extract(self, filename: str, content: bytes) -> str:
        """
        Extract plain text.

        Args:
            filename: Original filename (used for format detection and errors)
            content: Raw file bytes

        Returns:
            str: Extracted text, never empty

        Raises:
            ExtractionError: When the file is malformed or contains no text
        """


class PdfTextExtractor(TextExtractor):
    """Parse PDF documents page by page."""

    def __init__(self, page_separator: str = "\n\n") -> None:
        """
        Initialize PDF extractor.

        Args:
            page_separator: Text placed between consecutive pages
        """
        self._page_separator = page_separator

    def _extract_sync(self, filename: str, content: bytes) -> str:
        # PyPDFLoader reads from a path, so stage the upload in a temp file
        fd, temp_path = tempfile.mkstemp(suffix=".pdf")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(content)
            pages = PyPDFLoader(temp_path).load()
        finally:
            Path(temp_path).unlink(missing_ok=True)

        return self._page_separator.join(
            page.page_content.strip() for page in pages if page.page_content.strip()
        )

    async def extract(self, filename: str, content: bytes) -> str:
        if not content.startswith(b"%PDF"):
            raise ExtractionError("File is not a PDF document", filename)

        try:
            text = await asyncio.to_thread(self._extract_sync, filename, content)
        except Exception as e:
            raise ExtractionError(f"Failed to parse PDF: {e}", filename) from e

        if not text:
            raise ExtractionError("PDF document contains no extractable text", filename)
        logger.info(f"{__name__}:extract - Extracted {len(text)} chars from {filename}")
        return text


class PlainTextExtractor(TextExtractor):
    """Decode UTF-8 text files (plain text, markdown)."""

    async def extract(self, filename: str, content: bytes) -> str:
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ExtractionError(f"File is not valid UTF-8 text: {e}", filename) from e

        text = text.strip()
        if not text:
            raise ExtractionError("Text file is empty", filename)
        return text


class SuffixRoutingExtractor(TextExtractor):
    """Dispatch to an extractor by filename suffix."""

    def __init__(self, extractors: dict[str, TextExtractor]) -> None:
        """
        Initialize router.

        Args:
            extractors: Mapping of lowercase suffix (".pdf") to extractor
        """
        self._extractors = {suffix.lower(): extractor for suffix, extractor in extractors.items()}

    @property
    def supported_suffixes(self) -> list[str]:
        return sorted(self._extractors)

    async def extract(self, filename: str, content: bytes) -> str:
        suffix = Path(filename).suffix.lower()
        extractor = self._extractors.get(suffix)
        if extractor is None:
            raise ExtractionError(
                f"Unsupported file format: {suffix or '(none)'}. "
                f"Supported: {', '.join(self.supported_suffixes)}",
                filename,
            )
        return await extractor.extract(filename, content)


def create_text_extractor() -> SuffixRoutingExtractor:
    """Default extractor handling PDF, plain text and markdown uploads."""
    plain_text = PlainTextExtractor()
    return SuffixRoutingExtractor({
        ".pdf": PdfTextExtractor(),
        ".txt": plain_text,
        ".md": plain_text,
    })
