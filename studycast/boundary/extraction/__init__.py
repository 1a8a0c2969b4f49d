"""Text extraction boundary."""

from studycast.boundary.extraction.text_extractor import (
    PdfTextExtractor,
    PlainTextExtractor,
    SuffixRoutingExtractor,
    TextExtractor,
    create_text_extractor,
)

__all__ = [
    "PdfTextExtractor",
    "PlainTextExtractor",
    "SuffixRoutingExtractor",
    "TextExtractor",
    "create_text_extractor",
]
