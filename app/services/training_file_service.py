# app/services/training_file_service.py
import os
import time
import uuid
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from app.core.config import Settings, settings as default_settings
from app.core.exceptions import BaseAPIException, NotFoundException, ValidationException
from app.schemas.training_file import TrainingFile
from app.services.text_extraction_service import TextExtractionService, detect_file_format
from app.services.training_file_repository import TrainingFileRepository
from app.utils.logger import get_logger

logger = logging.getLogger(__name__)


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class TrainingFileService:
    """Service for uploading training files and extracting their text"""

    def __init__(
        self,
        extraction_service: Optional[TextExtractionService] = None,
        repository: Optional[TrainingFileRepository] = None,
        settings: Optional[Settings] = None
    ):
        """Initialize service with required dependencies"""
        self.settings = settings or default_settings
        self.extraction_service = extraction_service or TextExtractionService(settings=self.settings)
        self.repository = repository or TrainingFileRepository()

    def create_training_file(
        self,
        file_content: bytes,
        original_name: str,
        description: Optional[str] = None,
        uploaded_by: Optional[str] = None
    ) -> TrainingFile:
        """
        Validate an upload and register it with status "processing".

        Text extraction is not started here; call process_training_file
        (usually as a background task) with the returned id.
        """
        if not original_name:
            raise ValidationException("A filename is required")
        if not file_content:
            raise ValidationException("Uploaded file is empty")
        if len(file_content) > self.settings.max_upload_size_bytes:
            raise ValidationException(
                f"File exceeds the maximum upload size of {self.settings.MAX_UPLOAD_SIZE_MB} MB"
            )

        # Reject unsupported formats before a record exists
        detect_file_format(original_name)

        current_time = utc_now()
        training_file = TrainingFile(
            id=f"training-{uuid.uuid4().hex}",
            filename=f"{int(time.time() * 1000)}-{original_name}",
            original_name=original_name,
            file_type=os.path.splitext(original_name)[1].lower().lstrip("."),
            file_size=len(file_content),
            status="processing",
            uploaded_by=uploaded_by,
            metadata={
                "description": description,
                "uploaded_at": current_time,
            },
            created_at=current_time,
            updated_at=current_time
        )

        self.repository.add(training_file, file_content)
        logger.info(f"Registered training file {training_file.id} ({original_name}, {len(file_content)} bytes)")
        return training_file

    async def process_training_file(self, file_id: str, timestamp_key: str = "processed_at") -> Optional[TrainingFile]:
        """
        Extract, clean and chunk the text of a registered training file.

        Extraction failures mark the record as failed instead of raising,
        since this normally runs after the upload response was sent.
        Placeholder results still complete; their note stays in the metadata.
        Returns None when the record is deleted before processing finishes.
        """
        training_file = self.repository.get_or_raise(file_id)
        file_content = self.repository.get_content(file_id)
        log = get_logger(__name__, training_file_id=file_id, filename=training_file.original_name)

        try:
            extracted = await self.extraction_service.extract_text(file_content, training_file.original_name)
            result = self.extraction_service.clean_result(extracted)
            cleaned_content = result.content
            chunks = self.extraction_service.chunk_text(cleaned_content)
        except BaseAPIException as e:
            log.error(f"Error processing training file {training_file.original_name}: {e.detail}")
            return self._mark_failed(training_file, e.detail, log)

        metadata: Dict[str, Any] = {
            **training_file.metadata,
            "extraction": result.metadata.model_dump(exclude_none=True),
            timestamp_key: utc_now(),
        }
        metadata.pop("error", None)
        metadata.pop("failed_at", None)

        try:
            updated = self.repository.update(
                file_id,
                extracted_content=cleaned_content,
                chunk_count=len(chunks),
                status="completed",
                metadata=metadata,
                updated_at=utc_now()
            )
        except NotFoundException:
            log.warning(f"Training file {file_id} was deleted while it was being processed")
            return None

        log.info(
            f"Successfully processed training file {training_file.original_name} "
            f"into {len(chunks)} chunk(s)"
        )
        return updated

    async def reprocess_training_file(self, file_id: str) -> Optional[TrainingFile]:
        """Re-run extraction for a stored training file"""
        self.mark_processing(file_id)
        return await self.process_training_file(file_id, timestamp_key="reprocessed_at")

    def mark_processing(self, file_id: str) -> TrainingFile:
        self.repository.get_or_raise(file_id)
        return self.repository.update(file_id, status="processing", updated_at=utc_now())

    def list_training_files(self) -> List[TrainingFile]:
        return self.repository.list()

    def get_training_file(self, file_id: str) -> TrainingFile:
        return self.repository.get_or_raise(file_id)

    def delete_training_file(self, file_id: str) -> None:
        self.repository.delete(file_id)
        logger.info(f"Deleted training file {file_id}")

    def _mark_failed(self, training_file: TrainingFile, error_message: str, log) -> Optional[TrainingFile]:
        current_time = utc_now()
        try:
            return self.repository.update(
                training_file.id,
                status="failed",
                metadata={
                    **training_file.metadata,
                    "error": error_message,
                    "failed_at": current_time,
                },
                updated_at=current_time
            )
        except NotFoundException:
            log.warning(f"Training file {training_file.id} was deleted before its failure could be recorded")
            return None
