# app/utils/file_processors/pdf_processor.py
import logging
import io
import asyncio

from pypdf import PdfReader

from app.schemas.extraction import ExtractionResult, PDF_DISABLED_NOTE, PDF_FAILED_NOTE
from app.utils.file_processors.base import size_in_kilobytes

logger = logging.getLogger(__name__)

class PDFProcessor:
    """
    Processes PDF documents.

    Text extraction is disabled by default: the processor returns a
    deterministic placeholder describing the file. When enabled, pypdf is
    used to read the text page by page. PDF extraction never raises; a
    failed read degrades to the placeholder.
    """

    def __init__(self, extraction_enabled: bool = False):
        self.extraction_enabled = extraction_enabled

    async def process(self, file_content: bytes, filename: str) -> ExtractionResult:
        """
        Process a PDF file to extract text and metadata.

        Args:
            file_content: Binary content of the PDF file
            filename: Original filename

        Returns:
            Extraction result (placeholder content when extraction is disabled)
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.extract, file_content, filename)

    def extract(self, file_content: bytes, filename: str) -> ExtractionResult:
        if not self.extraction_enabled:
            return self._placeholder(file_content, filename, PDF_DISABLED_NOTE)

        try:
            return self._extract_pdf_content(file_content, filename)
        except Exception as e:
            logger.warning(f"PDF extraction failed for {filename}, returning placeholder: {str(e)}")
            return self._placeholder(file_content, filename, PDF_FAILED_NOTE)

    def _extract_pdf_content(self, file_content: bytes, filename: str) -> ExtractionResult:
        """
        Extract text from every page with pypdf, adding page markers
        so downstream chunking can keep track of page boundaries.
        """
        reader = PdfReader(io.BytesIO(file_content))

        full_text = ""
        for i, page in enumerate(reader.pages):
            page_text = page.extract_text() or ""
            full_text += f"\n--- Page {i+1} ---\n{page_text}\n"

        return ExtractionResult.build(
            content=full_text.strip(),
            file_type="pdf",
            filename=filename,
            pages=len(reader.pages)
        )

    def _placeholder(self, file_content: bytes, filename: str, note: str) -> ExtractionResult:
        if note == PDF_DISABLED_NOTE:
            reason = "Automatic text extraction for PDF files is currently disabled."
        else:
            reason = "Automatic text extraction failed for this PDF file."
        content = (
            f"PDF file: {filename}\n"
            f"Size: {size_in_kilobytes(file_content)} KB\n"
            f"{reason}"
        )
        return ExtractionResult.build(
            content=content,
            file_type="pdf",
            filename=filename,
            pages=0,
            note=note
        )
