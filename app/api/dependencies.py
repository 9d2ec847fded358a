# app/api/dependencies.py
from functools import lru_cache

from fastapi import UploadFile

from app.core.config import Settings, get_settings
from app.core.exceptions import ValidationException
from app.services.text_extraction_service import TextExtractionService
from app.services.training_file_service import TrainingFileService


@lru_cache()
def get_extraction_service() -> TextExtractionService:
    """Shared extraction service built from the application settings"""
    return TextExtractionService(settings=get_settings())


@lru_cache()
def get_training_file_service() -> TrainingFileService:
    """Shared training file service; its repository lives for the whole process"""
    return TrainingFileService(
        extraction_service=get_extraction_service(),
        settings=get_settings()
    )


async def read_upload(file: UploadFile, settings: Settings) -> bytes:
    """
    Read an uploaded file, enforcing MAX_UPLOAD_SIZE_MB.

    The multipart parser reports the spooled size up front, so oversized
    uploads are rejected before their bytes are loaded into memory. The
    length is checked again after reading for clients that omit it.
    """
    if file.size is not None and file.size > settings.max_upload_size_bytes:
        raise _upload_too_large(settings)

    file_content = await file.read()
    if len(file_content) > settings.max_upload_size_bytes:
        raise _upload_too_large(settings)
    return file_content


def _upload_too_large(settings: Settings) -> ValidationException:
    return ValidationException(
        f"File exceeds the maximum upload size of {settings.MAX_UPLOAD_SIZE_MB} MB"
    )
