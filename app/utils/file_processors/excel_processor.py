# app/utils/file_processors/excel_processor.py
import logging
import io
import asyncio

import pandas as pd

from app.core.exceptions import DocumentProcessingException
from app.schemas.extraction import ExtractionResult
from app.utils.file_processors.base import file_extension

logger = logging.getLogger(__name__)

class ExcelProcessor:
    """
    Processes Excel workbooks to extract text.

    Every sheet is rendered as CSV, in workbook order, below a
    ``--- <sheet name> ---`` header line.
    """

    async def process(self, file_content: bytes, filename: str) -> ExtractionResult:
        """
        Process an Excel file to extract text and metadata.

        Args:
            file_content: Binary content of the workbook
            filename: Original filename, used for the reported file type

        Returns:
            Extraction result with the text of all sheets
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.extract, file_content, filename)

    def extract(self, file_content: bytes, filename: str) -> ExtractionResult:
        try:
            content = ""
            with pd.ExcelFile(io.BytesIO(file_content)) as workbook:
                for sheet_name in workbook.sheet_names:
                    sheet_csv = self._sheet_to_csv(workbook, sheet_name)
                    content += f"\n--- {sheet_name} ---\n{sheet_csv}\n"
        except Exception as e:
            logger.error(f"Error extracting text from Excel file {filename}: {str(e)}")
            raise DocumentProcessingException(f"Failed to extract text from Excel file: {str(e)}")

        return ExtractionResult.build(
            content=content.strip(),
            file_type=file_extension(filename),
            filename=filename
        )

    def _sheet_to_csv(self, workbook: pd.ExcelFile, sheet_name: str) -> str:
        """Render one sheet as CSV rows, without header or index"""
        # Read every cell as text so numbers are not widened to floats by empty cells
        df = pd.read_excel(
            workbook,
            sheet_name=sheet_name,
            header=None,
            dtype=str,
            keep_default_na=False
        )
        if df.empty:
            return ""
        return df.to_csv(index=False, header=False, lineterminator="\n").rstrip("\n")
