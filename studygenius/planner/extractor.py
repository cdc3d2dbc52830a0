"""
Best-effort text extraction from stored course materials.

The extractor never raises for fetch, timeout or parsing failures. Instead it
returns a degraded ExtractedDocument whose text is a bracketed diagnostic,
so the material can still be listed to the user and passed to the model as
"no usable content".
"""

import asyncio
import io
import logging
from email.message import Message
from pathlib import PurePosixPath
from typing import Callable, Dict, Optional

import docx
from bs4 import BeautifulSoup
from pypdf import PdfReader

from studygenius.planner.schemas import CourseMaterial, ExtractedDocument, ExtractionStatus
from studygenius.storage.blob_store import BaseBlobStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_CHARS = 10000

PDF_TYPES = {"application/pdf"}
DOCX_TYPES = {"application/vnd.openxmlformats-officedocument.wordprocessingml.document"}
HTML_TYPES = {"text/html", "application/xhtml+xml"}
TEXT_TYPES = {
    "application/json",
    "application/xml",
    "application/x-markdown",
    "text/markdown",
    "text/csv",
}

EXTENSION_KINDS = {
    ".pdf": "pdf",
    ".docx": "docx",
    ".html": "html",
    ".htm": "html",
    ".txt": "text",
    ".md": "text",
    ".markdown": "text",
    ".csv": "text",
    ".json": "text",
}


def pdf_to_text(data: bytes) -> str:
    reader = PdfReader(io.BytesIO(data))
    text_parts = []
    for page in reader.pages:
        page_text = page.extract_text()
        if page_text:
            text_parts.append(page_text)
    return "\n".join(text_parts)


def docx_to_text(data: bytes) -> str:
    document = docx.Document(io.BytesIO(data))
    full_text = [para.text for para in document.paragraphs]

    # Tables go after the body text; schedules in syllabi usually live here
    for table in document.tables:
        for row in table.rows:
            row_text = [cell.text.strip() for cell in row.cells]
            row_text = [t for t in row_text if t]
            if row_text:
                full_text.append("   ".join(row_text))

    return "\n".join(full_text)


def html_to_text(data: bytes) -> str:
    soup = BeautifulSoup(data, "html.parser")
    for element in soup(["script", "style", "nav", "footer", "header", "aside"]):
        element.decompose()
    text = soup.get_text(separator="\n", strip=True)
    lines = [line.strip() for line in text.split("\n") if line.strip()]
    return "\n".join(lines)


def charset_from_content_type(content_type: Optional[str]) -> Optional[str]:
    """The ``charset`` parameter of a MIME type, lowercased, or None."""
    if not content_type:
        return None
    message = Message()
    message["content-type"] = content_type
    return message.get_content_charset()


def bytes_to_text(data: bytes, charset: Optional[str] = None) -> str:
    """Decode with the declared charset, then UTF-8, then latin-1."""
    if charset:
        try:
            return data.decode(charset)
        except (LookupError, UnicodeDecodeError):
            logger.warning(f"Declared charset '{charset}' did not decode, trying UTF-8")
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("latin-1", errors="ignore")


CONVERTERS: Dict[str, Callable[[bytes], str]] = {
    "pdf": pdf_to_text,
    "docx": docx_to_text,
    "html": html_to_text,
    "text": bytes_to_text,
}


def resolve_kind(content_type: Optional[str], filename: str) -> Optional[str]:
    """
    Pick a converter for a document.

    The declared content type wins; the file extension is only consulted when
    the type is missing or generic (``application/octet-stream``).

    Returns:
        Converter key, or None for unsupported formats
    """
    mime = (content_type or "").split(";")[0].strip().lower()

    if mime in PDF_TYPES:
        return "pdf"
    if mime in DOCX_TYPES:
        return "docx"
    if mime in HTML_TYPES:
        return "html"
    if mime.startswith("text/") or mime in TEXT_TYPES:
        return "text"
    if mime and mime != "application/octet-stream":
        return None

    return EXTENSION_KINDS.get(PurePosixPath(filename).suffix.lower())


def truncate_text(text: str, max_chars: int = DEFAULT_MAX_CHARS) -> str:
    """Hard-truncate to the per-document prompt limit. No summarization."""
    return text[:max_chars]


class TextExtractor:
    """Fetches stored documents and returns their text, capped to a fixed size."""

    def __init__(self, blob_store: BaseBlobStore, config=None):
        """
        Initialize the extractor.

        Args:
            blob_store: Read-only document store
            config: Configuration object (MAX_EXTRACTED_CHARS, FETCH_TIMEOUT_SECONDS)
        """
        self.blob_store = blob_store
        self.max_chars = getattr(config, 'MAX_EXTRACTED_CHARS', DEFAULT_MAX_CHARS)
        self.timeout = getattr(config, 'FETCH_TIMEOUT_SECONDS', 30)

    async def extract_material(self, material: CourseMaterial) -> ExtractedDocument:
        return await self.extract(material.source_ref, material.content_type, source_name=material.name)

    async def extract(
        self,
        source_ref: str,
        content_type: Optional[str],
        source_name: Optional[str] = None
    ) -> ExtractedDocument:
        """
        Fetch a document and extract its text.

        Args:
            source_ref: Blob store reference
            content_type: Declared MIME type of the upload
            source_name: Display name (defaults to the last path segment of source_ref)

        Returns:
            ExtractedDocument; degraded with a diagnostic text on any failure
        """
        name = source_name or source_ref.rstrip("/").rsplit("/", 1)[-1]
        content_type = content_type or ""

        kind = resolve_kind(content_type, name)
        if kind is None:
            return self._degraded(name, content_type, f"unsupported file type '{content_type}'")

        try:
            data = await asyncio.wait_for(
                asyncio.to_thread(self.blob_store.fetch, source_ref),
                timeout=self.timeout
            )
        except asyncio.TimeoutError:
            return self._degraded(name, content_type, f"download timed out after {self.timeout}s")
        except Exception as e:
            return self._degraded(name, content_type, f"download failed: {e}")

        try:
            if kind == "text":
                text = bytes_to_text(data, charset_from_content_type(content_type))
            else:
                text = CONVERTERS[kind](data)
        except Exception as e:
            return self._degraded(name, content_type, f"could not read {kind} content: {e}")

        text = text.strip()
        if not text:
            return self._degraded(name, content_type, "no extractable text")

        logger.info(f"Extracted {len(text)} characters from {name}")
        return ExtractedDocument(
            source_name=name,
            text=truncate_text(text, self.max_chars),
            content_type=content_type,
            status=ExtractionStatus.OK
        )

    def _degraded(self, name: str, content_type: str, reason: str) -> ExtractedDocument:
        logger.warning(f"Text extraction failed for {name}: {reason}")
        return ExtractedDocument(
            source_name=name,
            text=truncate_text(f"[Unable to extract text from {name}: {reason}]", self.max_chars),
            content_type=content_type,
            status=ExtractionStatus.DEGRADED,
            reason=reason
        )
