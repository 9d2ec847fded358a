# app/schemas/training_file.py
from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, Optional

TRAINING_FILE_STATUSES = ("processing", "completed", "failed")


class TrainingFile(BaseModel):
    """A document uploaded to feed the AI assistant"""
    id: str
    filename: str  # stored name: <epoch ms>-<original name>
    original_name: str
    file_type: str
    file_size: int
    status: str = "processing"  # processing, completed, failed
    uploaded_by: Optional[str] = None
    extracted_content: Optional[str] = None
    chunk_count: Optional[int] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: str
    updated_at: str

    @field_validator("status")
    @classmethod
    def validate_status(cls, value):
        if value not in TRAINING_FILE_STATUSES:
            raise ValueError(f"status must be one of {', '.join(TRAINING_FILE_STATUSES)}")
        return value


class TrainingFileUploadResponse(BaseModel):
    """Schema for a training file upload response"""
    message: str
    fileId: str


class MessageResponse(BaseModel):
    """Generic message response"""
    message: str
