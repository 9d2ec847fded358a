# app/services/text_extraction_service.py
import logging
import os
from enum import Enum
from typing import Dict, List, Optional

from app.core.config import Settings, settings as default_settings
from app.core.exceptions import UnsupportedFileTypeException
from app.rag.chunker import Chunker
from app.schemas.extraction import ExtractionResult
from app.utils.file_processors.base import FileProcessor
from app.utils.file_processors.excel_processor import ExcelProcessor
from app.utils.file_processors.pdf_processor import PDFProcessor
from app.utils.file_processors.pptx_processor import PPTXProcessor
from app.utils.file_processors.word_processor import WordProcessor
from app.utils.text_utils import clean_text, count_words

logger = logging.getLogger(__name__)


class FileFormat(str, Enum):
    """Document formats the extraction service knows how to read"""
    PDF = "pdf"
    WORD = "word"
    EXCEL = "excel"
    POWERPOINT = "powerpoint"


EXTENSION_FORMATS: Dict[str, FileFormat] = {
    ".pdf": FileFormat.PDF,
    ".doc": FileFormat.WORD,
    ".docx": FileFormat.WORD,
    ".xls": FileFormat.EXCEL,
    ".xlsx": FileFormat.EXCEL,
    ".ppt": FileFormat.POWERPOINT,
    ".pptx": FileFormat.POWERPOINT,
}

SUPPORTED_EXTENSIONS = tuple(EXTENSION_FORMATS)


def detect_file_format(filename: str) -> FileFormat:
    """
    Detect the document format from the filename's extension (case-insensitive).

    Raises:
        UnsupportedFileTypeException: if the extension has no extractor
    """
    extension = os.path.splitext(filename)[1].lower()
    file_format = EXTENSION_FORMATS.get(extension)
    if file_format is None:
        raise UnsupportedFileTypeException(f"Unsupported file type: {extension or filename}")
    return file_format


class TextExtractionService:
    """
    Converts uploaded document buffers into plain text.

    The service selects a processor by file extension and returns the
    processor's result unchanged. Word and Excel failures propagate as
    DocumentProcessingException; PDF and PowerPoint extraction degrade to
    placeholder content flagged in ``metadata.note``.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        processors: Optional[Dict[FileFormat, FileProcessor]] = None,
        chunker: Optional[Chunker] = None
    ):
        self.settings = settings or default_settings
        self.processors = processors or {
            FileFormat.PDF: PDFProcessor(extraction_enabled=self.settings.PDF_EXTRACTION_ENABLED),
            FileFormat.WORD: WordProcessor(),
            FileFormat.EXCEL: ExcelProcessor(),
            FileFormat.POWERPOINT: PPTXProcessor(slide_order=self.settings.PPTX_SLIDE_ORDER),
        }
        self.chunker = chunker or Chunker(chunk_size=self.settings.CHUNK_SIZE)

    async def extract_text(self, file_content: bytes, filename: str) -> ExtractionResult:
        """
        Extract text content from a file based on its extension.

        Args:
            file_content: Complete binary content of the file
            filename: Original filename including its extension

        Returns:
            Extracted text and metadata
        """
        processor = self._processor_for(filename)
        result = await processor.process(file_content, filename)
        self._log_result(result)
        return result

    def extract_text_sync(self, file_content: bytes, filename: str) -> ExtractionResult:
        """Blocking variant of extract_text for callers outside an event loop"""
        processor = self._processor_for(filename)
        result = processor.extract(file_content, filename)
        self._log_result(result)
        return result

    def clean_text(self, text: str) -> str:
        """Normalize whitespace and line endings of extracted text"""
        return clean_text(text)

    def clean_result(self, result: ExtractionResult) -> ExtractionResult:
        """Return a copy of result with cleaned content and a matching word count"""
        content = clean_text(result.content)
        metadata = result.metadata.model_copy(update={"word_count": count_words(content)})
        return ExtractionResult(content=content, metadata=metadata)

    def chunk_text(self, text: str, max_chunk_size: Optional[int] = None) -> List[str]:
        """Split text into sentence-bounded chunks"""
        return self.chunker.chunk_text(text, max_chunk_size)

    def _processor_for(self, filename: str) -> FileProcessor:
        file_format = detect_file_format(filename)
        return self.processors[file_format]

    def _log_result(self, result: ExtractionResult) -> None:
        metadata = result.metadata
        if result.is_degraded:
            logger.warning(f"Returned placeholder content for {metadata.filename}: {metadata.note}")
        else:
            logger.info(
                f"Extracted {metadata.word_count} words from {metadata.filename} "
                f"({metadata.file_type})"
            )
