"""HTTP surface tests using FastAPI's TestClient."""

from app.api.dependencies import get_extraction_service
from app.core.config import Settings
from app.services.text_extraction_service import TextExtractionService

from office_documents import build_pptx

API = "/api/v1"


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_root_lists_supported_extensions(client):
    response = client.get("/")

    assert response.status_code == 200
    assert ".pptx" in response.json()["supported_extensions"]


def test_extract_pptx(client, two_slide_pptx):
    response = client.post(
        f"{API}/extraction/extract",
        files={"file": ("lecture.pptx", two_slide_pptx, "application/octet-stream")},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["metadata"]["slides"] == 2
    assert body["metadata"]["fileType"] == "pptx"
    assert body["metadata"]["filename"] == "lecture.pptx"
    assert "pages" not in body["metadata"]
    assert "--- Slide 2 ---\nSecond slide text" in body["content"]
    assert "X-Request-ID" in response.headers


def test_extract_pdf_placeholder(client):
    response = client.post(
        f"{API}/extraction/extract",
        files={"file": ("syllabus.pdf", b"%PDF-1.4 content", "application/pdf")},
    )

    assert response.status_code == 200
    metadata = response.json()["metadata"]
    assert metadata["pages"] == 0
    assert "disabled" in metadata["note"]


def test_extract_with_clean(client, two_slide_pptx):
    response = client.post(
        f"{API}/extraction/extract",
        files={"file": ("lecture.pptx", two_slide_pptx, "application/octet-stream")},
        data={"clean": "true"},
    )

    body = response.json()
    assert body["content"].startswith("--- Slide 1 ---")
    assert body["metadata"]["wordCount"] == len(body["content"].split())


def test_extract_unsupported_type(client):
    response = client.post(
        f"{API}/extraction/extract",
        files={"file": ("notes.xyz", b"anything", "application/octet-stream")},
    )

    assert response.status_code == 415
    body = response.json()
    assert body["code"] == "unsupported_file_type"
    assert body["detail"] == "Unsupported file type: .xyz"
    assert "request_id" in body


def test_extract_corrupt_word_document(client):
    response = client.post(
        f"{API}/extraction/extract",
        files={"file": ("broken.docx", b"corrupt", "application/octet-stream")},
    )

    assert response.status_code == 500
    assert response.json()["code"] == "document_processing_error"


def test_clean_endpoint(client):
    response = client.post(f"{API}/extraction/clean", json={"text": "a\r\n\r\n\r\nb    c  "})

    assert response.status_code == 200
    assert response.json() == {"content": "a\n\nb c"}


def test_chunk_endpoint(client):
    response = client.post(
        f"{API}/extraction/chunk",
        json={"text": "One two three. Four five six. Seven", "maxChunkSize": 16},
    )

    assert response.status_code == 200
    assert response.json() == {
        "chunks": ["One two three.", "Four five six.", "Seven."],
        "count": 3,
    }


def test_chunk_endpoint_rejects_invalid_size(client):
    response = client.post(f"{API}/extraction/chunk", json={"text": "Hi.", "maxChunkSize": 0})

    assert response.status_code == 422


def test_chunk_endpoint_empty_text(client):
    response = client.post(f"{API}/extraction/chunk", json={"text": ""})

    assert response.json() == {"chunks": [], "count": 0}


def test_training_file_lifecycle(client, sample_docx):
    upload = client.post(
        f"{API}/training-files/upload",
        files={"file": ("notes.docx", sample_docx, "application/octet-stream")},
        data={"description": "Week 1"},
    )

    assert upload.status_code == 201
    file_id = upload.json()["fileId"]

    # Background tasks have run once the TestClient call returns
    detail = client.get(f"{API}/training-files/{file_id}")
    assert detail.status_code == 200
    body = detail.json()
    assert body["status"] == "completed"
    assert body["originalName"] == "notes.docx"
    assert "Hello from Word" in body["extractedContent"]
    assert body["metadata"]["description"] == "Week 1"

    listing = client.get(f"{API}/training-files")
    assert [item["id"] for item in listing.json()] == [file_id]

    reprocess = client.post(f"{API}/training-files/{file_id}/reprocess")
    assert reprocess.status_code == 200
    assert "reprocessed_at" in client.get(f"{API}/training-files/{file_id}").json()["metadata"]

    deleted = client.delete(f"{API}/training-files/{file_id}")
    assert deleted.json() == {"message": "Training file deleted"}
    assert client.get(f"{API}/training-files/{file_id}").status_code == 404


def test_training_file_upload_failure_recorded(client):
    upload = client.post(
        f"{API}/training-files/upload",
        files={"file": ("bad.xlsx", b"not a workbook", "application/octet-stream")},
    )
    file_id = upload.json()["fileId"]

    body = client.get(f"{API}/training-files/{file_id}").json()
    assert body["status"] == "failed"
    assert body["metadata"]["error"].startswith("Failed to extract text from Excel file")


def test_training_file_upload_rejects_unsupported(client):
    response = client.post(
        f"{API}/training-files/upload",
        files={"file": ("virus.exe", b"MZ", "application/octet-stream")},
    )

    assert response.status_code == 415
    assert client.get(f"{API}/training-files").json() == []


def test_training_file_missing(client):
    response = client.post(f"{API}/training-files/training-missing/reprocess")

    assert response.status_code == 404
    assert response.json()["code"] == "not_found"


def test_extract_pptx_without_slides(client):
    response = client.post(
        f"{API}/extraction/extract",
        files={"file": ("empty.pptx", build_pptx([]), "application/octet-stream")},
    )

    assert response.status_code == 200
    assert "empty.pptx" in response.json()["content"]


def test_extract_rejects_oversized_upload(client):
    limited = TextExtractionService(settings=Settings(_env_file=None, ENV="test", MAX_UPLOAD_SIZE_MB=1))
    client.app.dependency_overrides[get_extraction_service] = lambda: limited

    response = client.post(
        f"{API}/extraction/extract",
        files={"file": ("big.pdf", b"x" * (1024 * 1024 + 1), "application/pdf")},
    )

    assert response.status_code == 422
    assert response.json()["code"] == "validation_error"
