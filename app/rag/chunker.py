import logging
import re
from typing import List, Optional

from app.core.config import settings
from app.core.exceptions import ValidationException

logger = logging.getLogger(__name__)

SENTENCE_BOUNDARY_PATTERN = re.compile(r"[.!?]\s+")
SENTENCE_TERMINATOR = ". "


class Chunker:
    """
    Splits document text into bounded-size chunks for AI ingestion.

    Text is split into sentences and sentences are packed greedily into
    chunks of at most ``chunk_size`` characters. A sentence is never split,
    so a single sentence longer than the limit becomes its own oversized
    chunk.
    """

    def __init__(self, chunk_size: Optional[int] = None):
        """Initialize the chunker with configuration settings"""
        self.chunk_size = settings.CHUNK_SIZE if chunk_size is None else chunk_size

    def chunk_text(self, text: str, max_chunk_size: Optional[int] = None) -> List[str]:
        """
        Chunk text on sentence boundaries.

        Args:
            text: The text to chunk
            max_chunk_size: Maximum characters per chunk (defaults to the configured size)

        Returns:
            Ordered list of chunks
        """
        max_chunk_size = self.chunk_size if max_chunk_size is None else max_chunk_size
        if max_chunk_size < 1:
            raise ValidationException("max_chunk_size must be a positive integer")

        chunks = []
        current_chunk = ""

        for sentence in self.split_sentences(text):
            # The restored terminator counts toward the chunk; its trailing space is trimmed
            if current_chunk and len(current_chunk) + len(sentence) + 1 > max_chunk_size:
                chunks.append(current_chunk.strip())
                current_chunk = ""
            current_chunk += sentence + SENTENCE_TERMINATOR

        if current_chunk.strip():
            chunks.append(current_chunk.strip())

        logger.debug(f"Chunked {len(text)} characters into {len(chunks)} chunk(s)")
        return chunks

    def split_sentences(self, text: str) -> List[str]:
        """Split text on sentence punctuation followed by whitespace, dropping blank pieces"""
        return [
            sentence for sentence in SENTENCE_BOUNDARY_PATTERN.split(text)
            if sentence.strip()
        ]
