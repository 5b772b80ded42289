"""
Lexora Upload API
=================
Handles document upload, validation, and text decoding.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, File, Response, UploadFile, status

from core.chat import get_chat_history
from core.config import get_settings
from core.exceptions import (
    FileTooLargeError,
    InvalidInputError,
    InvalidTransitionError,
    UnsupportedFormatError,
)
from core.session import DocumentSession, SessionPhase, get_document_store
from schemas import ErrorResponse, SessionStatusEnum, UploadResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/upload", tags=["Upload"])
settings = get_settings()


def validate_file(file: UploadFile | None) -> None:
    """
    Validate uploaded file metadata.

    Checks:
    - A file with a filename was sent
    - File type is PDF, DOCX or plain text

    Raises:
        InvalidInputError: If no file or filename was provided
        UnsupportedFormatError: If the content type is not accepted
    """
    if file is None or not file.filename:
        raise InvalidInputError("No file provided")

    # Content type may carry parameters, e.g. "text/plain; charset=utf-8"
    content_type = (file.content_type or "").split(";")[0].strip().lower()
    if content_type not in settings.accepted_content_types:
        raise UnsupportedFormatError(
            "Invalid file type. Please upload PDF, Word, or text files only.",
            {
                "received_type": file.content_type,
                "accepted_types": settings.accepted_content_types
            }
        )


async def read_file(file: UploadFile) -> bytes:
    """
    Read an upload in chunks, enforcing the size limit.

    Raises:
        FileTooLargeError: If the upload exceeds the configured limit
    """
    chunks = []
    file_size = 0
    while chunk := await file.read(settings.upload_chunk_size):
        file_size += len(chunk)
        if file_size > settings.max_file_size_bytes:
            raise FileTooLargeError(
                f"File too large. Maximum size is {settings.max_file_size_mb}MB.",
                {
                    "max_size_mb": settings.max_file_size_mb,
                    "received_bytes": file_size
                }
            )
        chunks.append(chunk)
    return b"".join(chunks)


def decode_text(content: bytes) -> str:
    """Decode upload bytes as UTF-8 text; binary formats are not parsed."""
    return content.decode("utf-8", errors="replace")


async def read_upload_text(file: UploadFile | None) -> tuple[str, int]:
    """Validate and read an upload, returning (text, size_in_bytes)."""
    validate_file(file)
    content = await read_file(file)
    return decode_text(content), len(content)


def session_to_response(session: DocumentSession, message: str) -> UploadResponse:
    """Convert a session to the upload response schema."""
    return UploadResponse(
        document_id=session.document_id,
        filename=session.filename,
        file_size_bytes=session.file_size_bytes,
        upload_timestamp=session.upload_timestamp,
        status=SessionStatusEnum(session.phase.value),
        message=message
    )


@router.post(
    "",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        413: {"model": ErrorResponse, "description": "File too large"},
        415: {"model": ErrorResponse, "description": "Unsupported file type"},
        400: {"model": ErrorResponse, "description": "Invalid request"}
    },
    summary="Upload a legal document",
    description="""
    Upload a document for analysis.

    The document will be validated and its text kept in memory. Once uploaded,
    use the returned `documentId` to run analysis via `/analyze/{documentId}`.

    **Accepted file types:** PDF, Word (.docx), plain text
    **Maximum file size:** 10MB
    """
)
async def upload_document(
    file: Annotated[UploadFile | None, File(description="Document to upload")] = None
) -> UploadResponse:
    """Upload a document and open a session for it."""
    logger.info(f"Received upload request: {file.filename if file else None}")

    text, file_size = await read_upload_text(file)

    store = get_document_store()
    session = store.put(
        store.create().select_file(
            filename=file.filename,
            content_type=file.content_type,
            text=text,
            file_size_bytes=file_size,
        )
    )

    logger.info(f"Document uploaded: {session.document_id} ({file_size} bytes)")

    return session_to_response(session, "Document uploaded successfully. Ready for analysis.")


@router.put(
    "/{document_id}",
    response_model=UploadResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Document not found"},
        409: {"model": ErrorResponse, "description": "Session already holds a file"},
        413: {"model": ErrorResponse, "description": "File too large"},
        415: {"model": ErrorResponse, "description": "Unsupported file type"}
    },
    summary="Select a new file for an idle session",
    description="Attach a file to a session previously reset with `DELETE /upload/{documentId}`."
)
async def replace_document(
    document_id: str,
    file: Annotated[UploadFile | None, File(description="Document to upload")] = None
) -> UploadResponse:
    """Attach a new file to an idle session."""
    store = get_document_store()
    session = store.get(document_id)
    if not session.can_transition(SessionPhase.FILE_SELECTED):
        raise InvalidTransitionError(
            document_id, session.phase.value, SessionPhase.FILE_SELECTED.value
        )

    text, file_size = await read_upload_text(file)
    session = store.put(
        session.select_file(
            filename=file.filename,
            content_type=file.content_type,
            text=text,
            file_size_bytes=file_size,
        )
    )

    logger.info(f"Document replaced: {document_id} ({file_size} bytes)")

    return session_to_response(session, "Document uploaded successfully. Ready for analysis.")


@router.get(
    "/{document_id}",
    response_model=UploadResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Document not found"}
    },
    summary="Get upload status",
    description="Check the status of an uploaded document."
)
async def get_upload_status(document_id: str) -> UploadResponse:
    """Get the status of an uploaded document."""
    session = get_document_store().get(document_id)
    return session_to_response(
        session, f"Document is {session.phase.value.replace('_', ' ')}."
    )


@router.delete(
    "/{document_id}",
    response_model=UploadResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Document not found"},
        409: {"model": ErrorResponse, "description": "Analysis in progress"}
    },
    summary="Remove an uploaded file",
    description="Discard the uploaded file and any result, returning the session to idle."
)
async def reset_upload(document_id: str) -> UploadResponse:
    """Return a session to idle."""
    store = get_document_store()
    session = store.put(store.get(document_id).reset())
    logger.info(f"Document reset: {document_id}")
    return session_to_response(session, "Upload removed.")


@router.delete(
    "/{document_id}/session",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        404: {"model": ErrorResponse, "description": "Document not found"},
        409: {"model": ErrorResponse, "description": "Analysis in progress"}
    },
    summary="Discard a session",
    description="Forget the document entirely, including its result and chat history."
)
async def discard_session(document_id: str) -> Response:
    """Remove a session and its chat history."""
    get_document_store().remove(document_id)
    get_chat_history().discard(document_id)
    logger.info(f"Session discarded: {document_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
