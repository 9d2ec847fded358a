# app/utils/file_processors/base.py
import math
import os
from typing import Protocol

from app.schemas.extraction import ExtractionResult


class FileProcessor(Protocol):
    """Interface shared by every format-specific text extractor"""

    async def process(self, file_content: bytes, filename: str) -> ExtractionResult:
        ...

    def extract(self, file_content: bytes, filename: str) -> ExtractionResult:
        ...


def file_extension(filename: str) -> str:
    """Lowercase extension of filename without the leading dot ("" if none)"""
    return os.path.splitext(filename)[1].lower().lstrip(".")


def size_in_kilobytes(file_content: bytes) -> int:
    """Buffer size in kilobytes, rounded half up"""
    return math.floor(len(file_content) / 1024 + 0.5)
