"""
API endpoint tests for Lexora.
"""
import io

import pytest
from fastapi import status

from core.lexicon import CHAT_RESPONSES, DEFAULT_CHAT_RESPONSE


def upload(client, file_tuple) -> str:
    """Upload a file and return its document id."""
    response = client.post("/upload", files={"file": file_tuple})
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()["documentId"]


class TestHealthEndpoint:
    """Tests for health check endpoint."""

    def test_health_check_returns_ok(self, test_client):
        """Test that health check returns healthy status."""
        response = test_client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data

    def test_root(self, test_client):
        response = test_client.get("/")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["name"] == "Lexora API"


class TestUploadEndpoint:
    """Tests for document upload endpoint."""

    def test_upload_text_file(self, test_client, text_file):
        """Test uploading a valid text file."""
        response = test_client.post("/upload", files={"file": text_file})

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["documentId"].startswith("doc-")
        assert data["filename"] == "lease.txt"
        assert data["status"] == "file_selected"
        assert data["fileSizeBytes"] > 0

    @pytest.mark.parametrize("filename,content_type", [
        ("contract.pdf", "application/pdf"),
        (
            "contract.docx",
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
        ),
    ])
    def test_upload_accepted_binary_types(self, test_client, filename, content_type):
        """PDF and DOCX uploads are accepted."""
        files = {"file": (filename, io.BytesIO(b"%PDF-1.4 agreement"), content_type)}

        response = test_client.post("/upload", files=files)

        assert response.status_code == status.HTTP_201_CREATED

    @pytest.mark.parametrize("content_type", [
        "text/plain; charset=utf-8",
        "TEXT/PLAIN",
        "application/pdf; name=contract.pdf",
    ])
    def test_upload_content_type_parameters_ignored(self, test_client, lease_text, content_type):
        """Parameters and case in the content type do not affect validation."""
        files = {"file": ("lease.txt", io.BytesIO(lease_text.encode("utf-8")), content_type)}

        response = test_client.post("/upload", files=files)

        assert response.status_code == status.HTTP_201_CREATED

    def test_upload_unsupported_type(self, test_client):
        """Test that other MIME types are rejected."""
        files = {"file": ("photo.png", io.BytesIO(b"\x89PNG"), "image/png")}

        response = test_client.post("/upload", files=files)

        assert response.status_code == status.HTTP_415_UNSUPPORTED_MEDIA_TYPE
        data = response.json()
        assert data["error"] == "UnsupportedFormat"
        assert data["details"]["received_type"] == "image/png"

    def test_upload_missing_file(self, test_client):
        """Test that a request without a file is rejected."""
        response = test_client.post("/upload")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "InvalidInput"

    def test_upload_too_large(self, test_client):
        """Test that files over 10MB are rejected."""
        content = b"a" * (10 * 1024 * 1024 + 1)
        files = {"file": ("big.txt", io.BytesIO(content), "text/plain")}

        response = test_client.post("/upload", files=files)

        assert response.status_code == status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
        assert response.json()["error"] == "TooLarge"

    def test_upload_exactly_at_limit(self, test_client):
        content = b"a" * (10 * 1024 * 1024)
        files = {"file": ("big.txt", io.BytesIO(content), "text/plain")}

        response = test_client.post("/upload", files=files)

        assert response.status_code == status.HTTP_201_CREATED

    def test_get_upload_status(self, test_client, text_file):
        document_id = upload(test_client, text_file)

        response = test_client.get(f"/upload/{document_id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "file_selected"

    def test_reset_and_replace(self, test_client, text_file, plain_file):
        """A reset session accepts a new file."""
        document_id = upload(test_client, text_file)

        reset = test_client.delete(f"/upload/{document_id}")
        assert reset.status_code == status.HTTP_200_OK
        assert reset.json()["status"] == "idle"
        assert reset.json()["filename"] is None

        replaced = test_client.put(f"/upload/{document_id}", files={"file": plain_file})
        assert replaced.status_code == status.HTTP_200_OK
        assert replaced.json()["filename"] == "notes.txt"
        assert replaced.json()["status"] == "file_selected"

    def test_replace_requires_idle(self, test_client, text_file, plain_file):
        document_id = upload(test_client, text_file)

        response = test_client.put(f"/upload/{document_id}", files={"file": plain_file})

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["error"] == "InvalidTransition"

    def test_replace_checks_phase_before_reading_file(self, test_client, text_file):
        """A non-idle session refuses the upload before the file is validated."""
        document_id = upload(test_client, text_file)
        files = {"file": ("photo.png", io.BytesIO(b"\x89PNG"), "image/png")}

        response = test_client.put(f"/upload/{document_id}", files=files)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["details"]["current_status"] == "file_selected"

    def test_discard_session(self, test_client, text_file):
        """Discarding removes the session and its chat history."""
        document_id = upload(test_client, text_file)
        test_client.post("/chat", json={"message": "rent?", "documentId": document_id})

        response = test_client.delete(f"/upload/{document_id}/session")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert test_client.get(f"/upload/{document_id}").status_code == status.HTTP_404_NOT_FOUND
        assert test_client.get(f"/chat/{document_id}/history").json()["exchanges"] == []

    def test_discard_unknown_session(self, test_client):
        response = test_client.delete("/upload/doc-missing/session")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_upload_and_discard_does_not_accumulate(self, test_client, lease_text):
        """Sessions discarded after use leave nothing behind."""
        from core import get_document_store

        for _ in range(5):
            files = {"file": ("lease.txt", io.BytesIO(lease_text.encode("utf-8")), "text/plain")}
            document_id = test_client.post("/upload", files=files).json()["documentId"]
            test_client.delete(f"/upload/{document_id}/session")

        assert len(get_document_store()) == 0


class TestAnalyzeEndpoint:
    """Tests for document analysis endpoints."""

    def test_analyze_legal_document(self, test_client, text_file):
        """A legal upload completes with the clause breakdown."""
        document_id = upload(test_client, text_file)

        response = test_client.post(f"/analyze/{document_id}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["success"] is True
        assert data["status"] == "complete"
        assert data["documentName"] == "lease.txt"

        analysis = data["analysis"]
        assert analysis["isLegalDocument"] is True
        assert analysis["documentType"] == "Rental Agreement"
        assert 10 <= analysis["confidence"] <= 95
        assert len(analysis["clauses"]) == 6
        assert analysis["riskSummary"] == {
            "high": 1, "medium": 2, "low": 3, "totalClauses": 6
        }
        assert analysis["summary"]["riskLevel"] == "Medium"

    def test_analyze_non_legal_document(self, test_client, plain_file):
        """A non-legal upload is rejected with an empty breakdown."""
        document_id = upload(test_client, plain_file)

        response = test_client.post(f"/analyze/{document_id}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "rejected"
        assert data["analysis"]["isLegalDocument"] is False
        assert data["analysis"]["clauses"] == []
        assert data["analysis"]["riskSummary"]["totalClauses"] == 0
        assert data["analysis"]["confidence"] == 10

    def test_reanalyze_returns_stored_result(self, test_client, text_file):
        document_id = upload(test_client, text_file)
        first = test_client.post(f"/analyze/{document_id}").json()

        second = test_client.post(f"/analyze/{document_id}").json()

        assert second["analysis"] == first["analysis"]
        assert second["processedAt"] == first["processedAt"]

    def test_analyze_idle_session_conflicts(self, test_client, text_file):
        document_id = upload(test_client, text_file)
        test_client.delete(f"/upload/{document_id}")

        response = test_client.post(f"/analyze/{document_id}")

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_analyze_nonexistent_document(self, test_client):
        """Test analyzing a document that doesn't exist."""
        response = test_client.post("/analyze/doc-nonexistent123")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        data = response.json()
        assert data["error"] == "DocumentNotFound"
        assert data["details"] == {"document_id": "doc-nonexistent123"}

    def test_one_shot_analyze(self, test_client, text_file):
        """POST /analyze classifies a file without storing it."""
        response = test_client.post("/analyze", files={"file": text_file})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["success"] is True
        assert data["documentName"] == "lease.txt"
        assert data["analysis"]["isLegalDocument"] is True
        assert "processedAt" in data

    def test_one_shot_analyze_requires_file(self, test_client):
        response = test_client.post("/analyze")

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_one_shot_analyze_rejects_type(self, test_client):
        files = {"file": ("photo.png", io.BytesIO(b"\x89PNG"), "image/png")}

        response = test_client.post("/analyze", files=files)

        assert response.status_code == status.HTTP_415_UNSUPPORTED_MEDIA_TYPE

    def test_get_analysis(self, test_client, text_file):
        document_id = upload(test_client, text_file)
        test_client.post(f"/analyze/{document_id}")

        response = test_client.get(f"/analyze/{document_id}")

        assert response.status_code == status.HTTP_200_OK
        assert len(response.json()["analysis"]["clauses"]) == 6

    def test_get_analysis_before_analyze(self, test_client, text_file):
        document_id = upload(test_client, text_file)

        response = test_client.get(f"/analyze/{document_id}")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "AnalysisNotComplete"

    def test_demo_document_preview(self, test_client):
        """The demo id serves the four-clause preview."""
        response = test_client.get("/analyze/demo-document")

        assert response.status_code == status.HTTP_200_OK
        analysis = response.json()["analysis"]
        assert analysis["documentType"] == "Rental Agreement"
        assert analysis["confidence"] == 95
        assert len(analysis["clauses"]) == 4
        assert analysis["riskSummary"] == {
            "high": 1, "medium": 1, "low": 2, "totalClauses": 4
        }

    def test_analyze_demo_document(self, test_client):
        """POST on the demo id returns the same preview as GET."""
        posted = test_client.post("/analyze/demo-document")
        fetched = test_client.get("/analyze/demo-document")

        assert posted.status_code == status.HTTP_200_OK
        assert posted.json()["status"] == "complete"
        assert posted.json()["analysis"] == fetched.json()["analysis"]

    def test_analysis_status(self, test_client, text_file):
        document_id = upload(test_client, text_file)
        test_client.post(f"/analyze/{document_id}")

        response = test_client.get(f"/analyze/{document_id}/status")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "complete"
        assert data["analysisStartedAt"] is not None
        assert data["analysisCompletedAt"] is not None

    def test_get_clause(self, test_client, text_file):
        document_id = upload(test_client, text_file)
        test_client.post(f"/analyze/{document_id}")

        response = test_client.get(f"/analyze/{document_id}/clauses/6")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["title"] == "Liability Limitation"
        assert data["riskLevel"] == "High"
        assert len(data["suggestions"]) == 3

    def test_get_missing_clause(self, test_client):
        response = test_client.get("/analyze/demo-document/clauses/99")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"] == "ClauseNotFound"


class TestChatEndpoint:
    """Tests for the chat endpoint."""

    def test_chat_rent_question(self, test_client):
        response = test_client.post(
            "/chat",
            json={"message": "What is the rent amount?", "documentId": "demo-document"}
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["success"] is True
        assert data["response"] == CHAT_RESPONSES["what is the rent"]
        assert "timestamp" in data

    def test_chat_default_answer(self, test_client):
        response = test_client.post("/chat", json={"message": "asdf"})

        assert response.json()["response"] == DEFAULT_CHAT_RESPONSE

    @pytest.mark.parametrize("body", [{}, {"message": ""}, {"message": "   "}])
    def test_chat_requires_message(self, test_client, body):
        response = test_client.post("/chat", json=body)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "InvalidInput"

    def test_chat_history(self, test_client, text_file, plain_file):
        doc_a = upload(test_client, text_file)
        doc_b = upload(test_client, plain_file)
        test_client.post("/chat", json={"message": "security deposit?", "documentId": doc_a})
        test_client.post("/chat", json={"message": "asdf", "documentId": doc_a})
        test_client.post("/chat", json={"message": "liability?", "documentId": doc_b})

        response = test_client.get(f"/chat/{doc_a}/history")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["documentId"] == doc_a
        assert [e["message"] for e in data["exchanges"]] == ["security deposit?", "asdf"]
        assert data["exchanges"][0]["response"] == CHAT_RESPONSES["security deposit"]

    def test_chat_history_kept_for_demo_document(self, test_client):
        test_client.post("/chat", json={"message": "rent?", "documentId": "demo-document"})

        response = test_client.get("/chat/demo-document/history")

        assert len(response.json()["exchanges"]) == 1

    def test_chat_unknown_document_not_recorded(self, test_client):
        """Unknown ids are answered but leave no history behind."""
        from core import get_chat_history

        for i in range(50):
            response = test_client.post(
                "/chat", json={"message": "rent?", "documentId": f"doc-made-up-{i}"}
            )
            assert response.status_code == status.HTTP_200_OK

        assert len(get_chat_history()) == 0

    def test_chat_history_empty(self, test_client):
        response = test_client.get("/chat/doc-none/history")

        assert response.json()["exchanges"] == []

    def test_suggestions(self, test_client):
        response = test_client.get("/chat/suggestions")

        assert response.status_code == status.HTTP_200_OK
        questions = response.json()["questions"]
        assert len(questions) == 6
        assert questions[0] == "What is the rent amount?"

    @pytest.mark.parametrize("question,expected", [
        ("What is the rent amount?", CHAT_RESPONSES["what is the rent"]),
        ("Can I have pets?", CHAT_RESPONSES["can i have pets"]),
        ("How much notice do I need to give?", CHAT_RESPONSES["how much notice"]),
        ("What about the security deposit?", CHAT_RESPONSES["security deposit"]),
        # "landlord entry" is not a substring of this question
        ("When can the landlord enter?", DEFAULT_CHAT_RESPONSE),
        ("What are my maintenance responsibilities?", CHAT_RESPONSES["maintenance"]),
    ])
    def test_suggested_question_answers(self, test_client, question, expected):
        """Each suggested question gets a fixed answer."""
        from core.lexicon import SUGGESTED_QUESTIONS

        assert question in SUGGESTED_QUESTIONS
        response = test_client.post("/chat", json={"message": question})

        assert response.json()["response"] == expected


class TestCORSHeaders:
    """Tests for CORS configuration."""

    def test_cors_headers_present(self, test_client):
        """Test that CORS headers are present."""
        response = test_client.options(
            "/health",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "GET"
            }
        )

        assert response.status_code in [status.HTTP_200_OK, status.HTTP_204_NO_CONTENT]
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


class TestErrorHandling:
    """Tests for error handling."""

    def test_404_for_unknown_route(self, test_client):
        """Test that unknown routes return 404."""
        response = test_client.get("/unknown/route/here")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_method_not_allowed(self, test_client):
        """Test that wrong HTTP methods are rejected."""
        response = test_client.delete("/health")

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
