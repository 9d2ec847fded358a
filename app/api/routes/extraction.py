from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from app.api.dependencies import get_extraction_service, read_upload
from app.dto.extraction_dto import FrontendExtractionResultDTO
from app.schemas.extraction import ChunkRequest, ChunkResponse, CleanRequest, CleanResponse
from app.services.text_extraction_service import TextExtractionService

router = APIRouter(prefix="/extraction", tags=["extraction"])


@router.post(
    "/extract",
    response_model=FrontendExtractionResultDTO,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK
)
async def extract_document_text(
    file: UploadFile = File(...),
    clean: bool = Form(False),
    extraction_service: TextExtractionService = Depends(get_extraction_service)
):
    """
    Extract plain text and metadata from an uploaded document.

    Args:
        file: PDF, Word, Excel or PowerPoint document
        clean: Normalize whitespace in the returned content

    Returns:
        Extracted content with word count, file type and format-specific metadata
    """
    file_content = await read_upload(file, extraction_service.settings)

    result = await extraction_service.extract_text(file_content, file.filename or "")
    if clean:
        result = extraction_service.clean_result(result)

    return FrontendExtractionResultDTO.from_backend(result)


@router.post("/clean", response_model=CleanResponse)
async def clean_document_text(
    request: CleanRequest,
    extraction_service: TextExtractionService = Depends(get_extraction_service)
):
    """Normalize line endings and whitespace of extracted text"""
    return CleanResponse(content=extraction_service.clean_text(request.text))


@router.post("/chunk", response_model=ChunkResponse)
async def chunk_document_text(
    request: ChunkRequest,
    extraction_service: TextExtractionService = Depends(get_extraction_service)
):
    """
    Split text into sentence-bounded chunks for AI ingestion.

    The text is cleaned first when ``clean`` is set.
    """
    text = extraction_service.clean_text(request.text) if request.clean else request.text
    chunks = extraction_service.chunk_text(text, request.max_chunk_size)
    return ChunkResponse(chunks=chunks, count=len(chunks))
