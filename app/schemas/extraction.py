# app/schemas/extraction.py
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from app.utils.text_utils import count_words

# Notes attached to results whose content is placeholder text rather than
# text recovered from the document
PDF_DISABLED_NOTE = "PDF text extraction is disabled"
PDF_FAILED_NOTE = "PDF text extraction failed; placeholder content returned"
PPTX_FALLBACK_NOTE = "File uploaded successfully; automatic text extraction is unavailable for this presentation"
PPTX_SUCCESS_NOTE = "Text extracted from PowerPoint slides"

DEGRADED_NOTES = {PDF_DISABLED_NOTE, PDF_FAILED_NOTE, PPTX_FALLBACK_NOTE}


class ExtractionMetadata(BaseModel):
    """Descriptive metadata reported alongside extracted text"""
    word_count: int
    file_type: str  # lowercase extension without the dot
    filename: str
    pages: Optional[int] = None
    slides: Optional[int] = None
    note: Optional[str] = None


class ExtractionResult(BaseModel):
    """Plain text recovered from an uploaded document"""
    content: str
    metadata: ExtractionMetadata

    @classmethod
    def build(
        cls,
        content: str,
        file_type: str,
        filename: str,
        **extra
    ) -> "ExtractionResult":
        """Create a result whose word count is derived from the content"""
        return cls(
            content=content,
            metadata=ExtractionMetadata(
                word_count=count_words(content),
                file_type=file_type,
                filename=filename,
                **extra
            )
        )

    @property
    def is_degraded(self) -> bool:
        """True when the content is a placeholder instead of document text"""
        return self.metadata.note in DEGRADED_NOTES


class CleanRequest(BaseModel):
    """Schema for a text cleaning request"""
    text: str


class CleanResponse(BaseModel):
    """Schema for a text cleaning response"""
    content: str


class ChunkRequest(BaseModel):
    """Schema for a text chunking request"""
    text: str
    max_chunk_size: Optional[int] = Field(default=None, alias="maxChunkSize")
    clean: bool = False

    model_config = {"populate_by_name": True}

    @field_validator("max_chunk_size")
    @classmethod
    def validate_max_chunk_size(cls, value):
        if value is not None and value < 1:
            raise ValueError("maxChunkSize must be a positive integer")
        return value


class ChunkResponse(BaseModel):
    """Schema for a text chunking response"""
    chunks: List[str]
    count: int
