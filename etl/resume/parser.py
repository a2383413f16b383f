"""
Resume Text Extraction - Convert uploaded document bytes into plain text.

Only PDF is accepted for uploads. Extraction failures are deterministic for
a given byte sequence, so callers never retry them.
"""
import io
import logging
from abc import ABC, abstractmethod

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from core.exceptions import ExtractionError

logger = logging.getLogger(__name__)


class TextExtractor(ABC):
    """Converts a binary document into plain text for LLM extraction."""

    #: Media type this extractor accepts
    media_type: str = ""

    @abstractmethod
    def extract(self, content: bytes) -> str:
        """Return the document's text.

        Raises:
            ExtractionError: If the bytes are not parseable as ``media_type``
        """
        pass


class PdfTextExtractor(TextExtractor):
    """Extracts text from every page of a PDF using pypdf."""

    media_type = "application/pdf"

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def extract(self, content: bytes) -> str:
        """Extract text from all pages.

        Pages that fail individually are skipped with a warning. A document
        that yields no text at all (e.g. scanned images) is an error, since
        nothing downstream could identify the candidate.

        Args:
            content: Raw PDF bytes

        Returns:
            Page texts joined by blank lines

        Raises:
            ExtractionError: Corrupted, encrypted, empty, or text-less PDF
        """
        if not content:
            raise ExtractionError("Empty document")

        try:
            reader = PdfReader(io.BytesIO(content))

            if reader.is_encrypted:
                # Many PDFs are "encrypted" with an empty user password
                if not reader.decrypt(""):
                    raise ExtractionError("PDF is encrypted and cannot be opened")

            if len(reader.pages) == 0:
                raise ExtractionError("PDF file has no pages")

            pages_text = []
            for i, page in enumerate(reader.pages):
                try:
                    page_text = page.extract_text()
                    if page_text and page_text.strip():
                        pages_text.append(page_text.strip())
                except PyPdfError as e:
                    self.logger.warning(f"Failed to extract text from page {i + 1}: {e}")

            text = '\n\n'.join(pages_text)
            page_count = len(reader.pages)

        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionError(f"Failed to parse PDF: {e}") from e

        if not text.strip():
            raise ExtractionError(
                "No text extracted from PDF. "
                "The PDF may be scanned images or have text extraction disabled."
            )

        self.logger.debug(f"Parsed PDF ({page_count} pages, {len(text)} chars extracted)")
        return text
