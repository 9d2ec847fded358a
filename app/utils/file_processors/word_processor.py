# app/utils/file_processors/word_processor.py
import logging
import io
import asyncio

import docx2txt

from app.core.exceptions import DocumentProcessingException
from app.schemas.extraction import ExtractionResult
from app.utils.file_processors.base import file_extension

logger = logging.getLogger(__name__)

class WordProcessor:
    """
    Processes Word documents to extract their raw text.

    Extraction is delegated to docx2txt; any failure of the library is
    surfaced to the caller as a DocumentProcessingException.
    """

    async def process(self, file_content: bytes, filename: str) -> ExtractionResult:
        """
        Process a Word file to extract text and metadata.

        Args:
            file_content: Binary content of the Word document
            filename: Original filename, used for the reported file type

        Returns:
            Extraction result with the document text
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.extract, file_content, filename)

    def extract(self, file_content: bytes, filename: str) -> ExtractionResult:
        try:
            text = docx2txt.process(io.BytesIO(file_content))
        except Exception as e:
            logger.error(f"Error extracting text from Word document {filename}: {str(e)}")
            raise DocumentProcessingException(f"Failed to extract text from Word document: {str(e)}")

        return ExtractionResult.build(
            content=text or "",
            file_type=file_extension(filename),
            filename=filename
        )
