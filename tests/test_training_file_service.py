import logging

import pytest

from app.core.config import Settings
from app.core.exceptions import NotFoundException, UnsupportedFileTypeException, ValidationException
from app.schemas.extraction import PPTX_FALLBACK_NOTE
from app.services.training_file_service import TrainingFileService


def test_create_registers_processing_record(training_file_service, sample_docx):
    training_file = training_file_service.create_training_file(
        sample_docx, "Week 1 Notes.DOCX", description="Intro notes", uploaded_by="admin-1"
    )

    assert training_file.id.startswith("training-")
    assert training_file.status == "processing"
    assert training_file.file_type == "docx"
    assert training_file.file_size == len(sample_docx)
    assert training_file.filename.endswith("-Week 1 Notes.DOCX")
    assert training_file.metadata["description"] == "Intro notes"
    assert "uploaded_at" in training_file.metadata
    assert training_file_service.list_training_files() == [training_file]


def test_create_rejects_empty_upload(training_file_service):
    with pytest.raises(ValidationException):
        training_file_service.create_training_file(b"", "empty.docx")


def test_create_rejects_unsupported_type(training_file_service):
    with pytest.raises(UnsupportedFileTypeException):
        training_file_service.create_training_file(b"data", "script.exe")

    assert training_file_service.list_training_files() == []


def test_create_rejects_oversized_upload():
    service = TrainingFileService(settings=Settings(_env_file=None, ENV="test", MAX_UPLOAD_SIZE_MB=1))

    with pytest.raises(ValidationException, match="maximum upload size"):
        service.create_training_file(b"x" * (1024 * 1024 + 1), "big.pdf")


@pytest.mark.asyncio
async def test_process_completes_with_cleaned_content(training_file_service, two_slide_pptx):
    training_file = training_file_service.create_training_file(two_slide_pptx, "deck.pptx")

    processed = await training_file_service.process_training_file(training_file.id)

    assert processed.status == "completed"
    assert processed.extracted_content.startswith("--- Slide 1 ---")
    assert "\n\n\n" not in processed.extracted_content
    assert processed.chunk_count == 1
    assert processed.metadata["extraction"]["slides"] == 2
    assert "processed_at" in processed.metadata
    assert training_file_service.get_training_file(training_file.id) == processed


@pytest.mark.asyncio
async def test_degraded_extraction_still_completes(training_file_service):
    training_file = training_file_service.create_training_file(b"not a zip", "deck.pptx")

    processed = await training_file_service.process_training_file(training_file.id)

    assert processed.status == "completed"
    assert processed.metadata["extraction"]["note"] == PPTX_FALLBACK_NOTE
    assert "deck.pptx" in processed.extracted_content


@pytest.mark.asyncio
async def test_hard_failure_marks_record_failed(training_file_service):
    training_file = training_file_service.create_training_file(b"corrupt", "notes.docx")

    processed = await training_file_service.process_training_file(training_file.id)

    assert processed.status == "failed"
    assert processed.metadata["error"].startswith("Failed to extract text from Word document")
    assert "failed_at" in processed.metadata
    assert processed.extracted_content is None


@pytest.mark.asyncio
async def test_reprocess_stamps_reprocessed_at(training_file_service, sample_docx):
    training_file = training_file_service.create_training_file(sample_docx, "notes.docx")
    await training_file_service.process_training_file(training_file.id)

    reprocessed = await training_file_service.reprocess_training_file(training_file.id)

    assert reprocessed.status == "completed"
    assert "reprocessed_at" in reprocessed.metadata
    assert "Hello from Word" in reprocessed.extracted_content


def test_delete_and_missing_records(training_file_service, sample_docx):
    training_file = training_file_service.create_training_file(sample_docx, "notes.docx")

    training_file_service.delete_training_file(training_file.id)

    with pytest.raises(NotFoundException):
        training_file_service.get_training_file(training_file.id)
    with pytest.raises(NotFoundException):
        training_file_service.delete_training_file(training_file.id)
    with pytest.raises(NotFoundException):
        training_file_service.mark_processing("training-missing")


@pytest.mark.asyncio
async def test_record_deleted_during_processing(training_file_service, sample_docx, monkeypatch, caplog):
    training_file = training_file_service.create_training_file(sample_docx, "notes.docx")
    extract_text = training_file_service.extraction_service.extract_text

    async def extract_then_delete(file_content, filename):
        result = await extract_text(file_content, filename)
        training_file_service.delete_training_file(training_file.id)
        return result

    monkeypatch.setattr(training_file_service.extraction_service, "extract_text", extract_then_delete)

    with caplog.at_level(logging.WARNING, logger="app.services.training_file_service"):
        processed = await training_file_service.process_training_file(training_file.id)

    assert processed is None
    assert training_file_service.list_training_files() == []
    assert "deleted while it was being processed" in caplog.text


@pytest.mark.asyncio
async def test_record_deleted_before_failure_is_recorded(training_file_service, monkeypatch):
    training_file = training_file_service.create_training_file(b"corrupt", "notes.docx")
    extract_text = training_file_service.extraction_service.extract_text

    async def delete_then_extract(file_content, filename):
        training_file_service.delete_training_file(training_file.id)
        return await extract_text(file_content, filename)

    monkeypatch.setattr(training_file_service.extraction_service, "extract_text", delete_then_extract)

    assert await training_file_service.process_training_file(training_file.id) is None
