from typing import List, Optional
from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, UploadFile, status

from app.api.dependencies import get_training_file_service, read_upload
from app.dto.training_file_dto import FrontendTrainingFileDTO
from app.schemas.training_file import MessageResponse, TrainingFileUploadResponse
from app.services.training_file_service import TrainingFileService

router = APIRouter(prefix="/training-files", tags=["training-files"])


@router.post("/upload", response_model=TrainingFileUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_training_file(
    background_tasks: BackgroundTasks,
    file: UploadFile = File(...),
    description: Optional[str] = Form(None),
    uploaded_by: Optional[str] = Form(None),
    training_file_service: TrainingFileService = Depends(get_training_file_service)
):
    """
    Upload a training file; its text is extracted in the background.

    Args:
        file: PDF, Word, Excel or PowerPoint document
        description: Optional description stored with the file
        uploaded_by: Optional id of the uploading user

    Returns:
        Id of the new training file
    """
    file_content = await read_upload(file, training_file_service.settings)
    training_file = training_file_service.create_training_file(
        file_content=file_content,
        original_name=file.filename or "",
        description=description,
        uploaded_by=uploaded_by
    )

    background_tasks.add_task(training_file_service.process_training_file, training_file.id)

    return TrainingFileUploadResponse(
        message="File uploaded successfully and is being processed",
        fileId=training_file.id
    )


@router.get("", response_model=List[FrontendTrainingFileDTO])
async def list_training_files(
    training_file_service: TrainingFileService = Depends(get_training_file_service)
):
    """List all training files in upload order"""
    return [
        FrontendTrainingFileDTO.from_backend(training_file)
        for training_file in training_file_service.list_training_files()
    ]


@router.get("/{file_id}", response_model=FrontendTrainingFileDTO)
async def get_training_file(
    file_id: str,
    training_file_service: TrainingFileService = Depends(get_training_file_service)
):
    """Get a single training file with its extracted content and status"""
    return FrontendTrainingFileDTO.from_backend(training_file_service.get_training_file(file_id))


@router.delete("/{file_id}", response_model=MessageResponse)
async def delete_training_file(
    file_id: str,
    training_file_service: TrainingFileService = Depends(get_training_file_service)
):
    """Delete a training file"""
    training_file_service.delete_training_file(file_id)
    return MessageResponse(message="Training file deleted")


@router.post("/{file_id}/reprocess", response_model=MessageResponse)
async def reprocess_training_file(
    file_id: str,
    background_tasks: BackgroundTasks,
    training_file_service: TrainingFileService = Depends(get_training_file_service)
):
    """Re-run text extraction for a stored training file"""
    training_file_service.mark_processing(file_id)
    background_tasks.add_task(
        training_file_service.process_training_file,
        file_id,
        timestamp_key="reprocessed_at"
    )
    return MessageResponse(message="File reprocessing started")
