# app/dto/training_file_dto.py
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field
from app.schemas.training_file import TrainingFile

class FrontendTrainingFileDTO(BaseModel):
    """DTO for mapping a backend training file to frontend format (raw bytes are never exposed)"""
    id: str
    filename: str
    originalName: str
    fileType: str
    fileSize: int
    status: str
    uploadedBy: Optional[str] = None
    extractedContent: Optional[str] = None
    chunkCount: Optional[int] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    createdAt: str
    updatedAt: str

    @classmethod
    def from_backend(cls, training_file: TrainingFile) -> 'FrontendTrainingFileDTO':
        """Convert backend TrainingFile to frontend format"""
        return cls(
            id=training_file.id,
            filename=training_file.filename,
            originalName=training_file.original_name,
            fileType=training_file.file_type,
            fileSize=training_file.file_size,
            status=training_file.status,
            uploadedBy=training_file.uploaded_by,
            extractedContent=training_file.extracted_content,
            chunkCount=training_file.chunk_count,
            metadata=training_file.metadata,
            createdAt=training_file.created_at,
            updatedAt=training_file.updated_at
        )
