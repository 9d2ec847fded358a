# app/utils/file_processors/pptx_processor.py
import logging
import io
import asyncio
import html
import re
import zipfile
import zlib
from typing import List, Optional, Tuple

from app.schemas.extraction import ExtractionResult, PPTX_FALLBACK_NOTE, PPTX_SUCCESS_NOTE
from app.utils.file_processors.base import file_extension

logger = logging.getLogger(__name__)

SLIDE_ENTRY_PATTERN = re.compile(r"^ppt/slides/slide(\d+)\.xml$")
TEXT_RUN_PATTERN = re.compile(r"<a:t(?:\s[^>]*)?>([^<]*)</a:t>")

SLIDE_ORDER_NUMERIC = "numeric"
SLIDE_ORDER_ARCHIVE = "archive"

# Errors a single zip member can raise while being opened, inflated or decoded
ENTRY_READ_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    OSError,
    EOFError,
    RuntimeError,
    NotImplementedError,
    UnicodeDecodeError,
)

class PPTXProcessor:
    """
    Processes PowerPoint presentations to extract slide text.

    A .pptx file is a zip archive of XML parts. Rather than building a full
    object model, the processor scans every ``ppt/slides/slideN.xml`` entry
    and collects the visible ``<a:t>`` text runs of each slide.

    Extraction is best effort and never raises: when the archive cannot be
    read a placeholder result is returned, so a stored upload stays usable
    even without its text. Legacy binary .ppt files always get the
    placeholder.
    """

    def __init__(self, slide_order: str = SLIDE_ORDER_NUMERIC):
        if slide_order not in (SLIDE_ORDER_NUMERIC, SLIDE_ORDER_ARCHIVE):
            raise ValueError(f"Unknown slide order: {slide_order}")
        self.slide_order = slide_order

    async def process(self, file_content: bytes, filename: str) -> ExtractionResult:
        """
        Process a PowerPoint file to extract text and metadata.

        Args:
            file_content: Binary content of the PowerPoint file
            filename: Original filename

        Returns:
            Extraction result with one block of text per slide
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.extract, file_content, filename)

    def extract(self, file_content: bytes, filename: str) -> ExtractionResult:
        file_type = file_extension(filename)
        if file_type != "pptx":
            logger.info(f"Legacy PowerPoint format for {filename}, returning placeholder")
            return self._fallback(filename, file_type)

        try:
            archive = zipfile.ZipFile(io.BytesIO(file_content))
        except (zipfile.BadZipFile, OSError, ValueError) as e:
            logger.warning(f"Could not open {filename} as a zip archive: {str(e)}")
            return self._fallback(filename, file_type)

        with archive:
            slides, visited = self._read_slides(archive, filename)

        if not slides:
            return self._fallback(filename, file_type)

        full_text = ""
        for slide_number, slide_text in slides:
            full_text += f"\n--- Slide {slide_number} ---\n{slide_text}\n"

        return ExtractionResult.build(
            content=full_text,
            file_type=file_type,
            filename=filename,
            slides=visited,
            note=PPTX_SUCCESS_NOTE
        )

    def _slide_entries(self, archive: zipfile.ZipFile) -> List[Tuple[int, zipfile.ZipInfo]]:
        """Collect slide entries as (slide index, entry) pairs in the configured order"""
        entries = []
        for info in archive.infolist():
            match = SLIDE_ENTRY_PATTERN.match(info.filename)
            if match:
                entries.append((int(match.group(1)), info))

        if self.slide_order == SLIDE_ORDER_NUMERIC:
            entries.sort(key=lambda entry: entry[0])
        return entries

    def _read_slides(self, archive: zipfile.ZipFile, filename: str) -> Tuple[List[Tuple[int, str]], int]:
        """
        Read slide entries one at a time.

        Returns (position, text) pairs for the slides that could be read, where
        position is the 1-based place of the entry in the scan, together with
        the number of entries visited. An unreadable first entry ends the scan
        with nothing read, so the caller falls back. Once a slide has been read,
        later unreadable entries are skipped and the scan carries on.
        """
        entries = self._slide_entries(archive)
        if not entries:
            logger.warning(f"No slide entries found in {filename}")
            return [], 0

        slides = []
        for position, (_, info) in enumerate(entries, start=1):
            slide_text = self._read_slide_text(archive, info)
            if slide_text is None:
                if not slides:
                    return [], position
                logger.warning(f"Skipping unreadable slide {info.filename} in {filename}")
                continue
            slides.append((position, slide_text))

        return slides, len(entries)

    def _read_slide_text(self, archive: zipfile.ZipFile, info: zipfile.ZipInfo) -> Optional[str]:
        try:
            with archive.open(info) as entry:
                xml = entry.read().decode("utf-8")
        except ENTRY_READ_ERRORS as e:
            logger.warning(f"Failed to read slide entry {info.filename}: {str(e)}")
            return None

        runs = [html.unescape(run) for run in TEXT_RUN_PATTERN.findall(xml)]
        return " ".join(runs)

    def _fallback(self, filename: str, file_type: str) -> ExtractionResult:
        content = (
            f"PowerPoint file: {filename}\n"
            f"Basic text extraction was attempted but is not available for this file."
        )
        return ExtractionResult.build(
            content=content,
            file_type=file_type,
            filename=filename,
            slides=0,
            note=PPTX_FALLBACK_NOTE
        )
