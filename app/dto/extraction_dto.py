# app/dto/extraction_dto.py
from typing import Optional
from pydantic import BaseModel
from app.schemas.extraction import ExtractionResult

class FrontendExtractionMetadataDTO(BaseModel):
    """DTO for extraction metadata in frontend format"""
    wordCount: int
    fileType: str
    filename: str
    pages: Optional[int] = None
    slides: Optional[int] = None
    note: Optional[str] = None

class FrontendExtractionResultDTO(BaseModel):
    """DTO for mapping backend extraction result to frontend format"""
    content: str
    metadata: FrontendExtractionMetadataDTO

    @classmethod
    def from_backend(cls, result: ExtractionResult) -> 'FrontendExtractionResultDTO':
        """Convert backend ExtractionResult to frontend format"""
        metadata = result.metadata
        return cls(
            content=result.content,
            metadata=FrontendExtractionMetadataDTO(
                wordCount=metadata.word_count,
                fileType=metadata.file_type,
                filename=metadata.filename,
                pages=metadata.pages,
                slides=metadata.slides,
                note=metadata.note
            )
        )
