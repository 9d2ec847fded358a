"""
Shared pytest fixtures: isolated settings, services, sample documents and
a FastAPI test client wired to the isolated services.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.api.dependencies import get_extraction_service, get_training_file_service
from app.core.config import Settings
from app.services.text_extraction_service import TextExtractionService
from app.services.training_file_service import TrainingFileService

from office_documents import build_docx, build_pptx, build_xlsx, slide_xml


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from any .env file"""
    return Settings(_env_file=None, ENV="test")


@pytest.fixture
def extraction_service(test_settings: Settings) -> TextExtractionService:
    return TextExtractionService(settings=test_settings)


@pytest.fixture
def training_file_service(
    extraction_service: TextExtractionService,
    test_settings: Settings
) -> TrainingFileService:
    return TrainingFileService(extraction_service=extraction_service, settings=test_settings)


@pytest.fixture
def two_slide_pptx() -> bytes:
    return build_pptx([(1, slide_xml("Welcome to the course")), (2, slide_xml("Second slide text"))])


@pytest.fixture
def sample_docx() -> bytes:
    return build_docx("Hello from Word", "Second paragraph")


@pytest.fixture
def sample_xlsx() -> bytes:
    return build_xlsx({
        "Students": [["Name", "Score"], ["Alice", 90], ["Bob", 85]],
        "Courses": [["Code", "Title"], ["DS101", "Data Science"]],
    })


@pytest.fixture
def client(extraction_service: TextExtractionService, training_file_service: TrainingFileService):
    """FastAPI test client using the isolated services"""
    from app.main import app

    app.dependency_overrides[get_extraction_service] = lambda: extraction_service
    app.dependency_overrides[get_training_file_service] = lambda: training_file_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
