"""
Pytest configuration and fixtures for Lexora tests.
"""
import sys
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture(autouse=True)
def clean_stores():
    """Reset in-memory sessions and chat history around each test."""
    from core import get_chat_history, get_document_store

    get_document_store().clear()
    get_chat_history().clear()
    yield
    get_document_store().clear()
    get_chat_history().clear()


@pytest.fixture
def test_client() -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI app."""
    from main import app

    with TestClient(app) as client:
        yield client


@pytest.fixture
def engine():
    """A classification engine with the standard clause set."""
    from core import ClassificationEngine

    return ClassificationEngine()


@pytest.fixture
def lease_text() -> str:
    """Plain text of a short residential lease."""
    return (
        "RESIDENTIAL LEASE AGREEMENT\n\n"
        "This Rental Agreement is made between the Landlord and the Tenant. "
        "WHEREAS the Landlord owns the premises, the parties hereby agree as follows. "
        "Tenant shall pay rent of $2,500.00 on the first day of each month. "
        "Either party may give notice of termination 60 days before expiration. "
        "Landlord shall not be liable for damages except for gross negligence. "
        "Any breach of this agreement may be resolved in court."
    )


@pytest.fixture
def plain_text() -> str:
    """Text with no legal vocabulary at all."""
    return "The quick brown fox jumps over the lazy dog. Bring snacks for the team hike."


@pytest.fixture
def text_file(lease_text):
    """Multipart tuple for a legal plain-text upload."""
    import io

    return ("lease.txt", io.BytesIO(lease_text.encode("utf-8")), "text/plain")


@pytest.fixture
def plain_file(plain_text):
    """Multipart tuple for a non-legal plain-text upload."""
    import io

    return ("notes.txt", io.BytesIO(plain_text.encode("utf-8")), "text/plain")
