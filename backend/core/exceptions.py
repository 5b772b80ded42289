"""
Lexora Exceptions
=================
Errors raised by the upload, analysis and chat layers.

Each error carries the HTTP status and the ``error`` name rendered in the
``ErrorResponse`` body. The classification engine itself raises none of
these.
"""

from typing import Any


class LexoraError(Exception):
    """Base class for all Lexora errors."""

    status_code = 500
    error = "LexoraError"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.error,
            "message": self.message,
            "details": self.details,
        }


class InvalidInputError(LexoraError):
    """Missing file, filename or chat message."""

    status_code = 400
    error = "InvalidInput"


class UnsupportedFormatError(LexoraError):
    """Upload MIME type is not accepted."""

    status_code = 415
    error = "UnsupportedFormat"


class FileTooLargeError(LexoraError):
    """Upload exceeds the configured size limit."""

    status_code = 413
    error = "TooLarge"


class DocumentNotFoundError(LexoraError):
    status_code = 404
    error = "DocumentNotFound"

    def __init__(self, document_id: str):
        super().__init__(
            f"Document with ID '{document_id}' not found.",
            {"document_id": document_id},
        )


class ClauseNotFoundError(LexoraError):
    status_code = 404
    error = "ClauseNotFound"

    def __init__(self, document_id: str, clause_id: str):
        super().__init__(
            f"Clause with ID '{clause_id}' not found in document.",
            {"document_id": document_id, "clause_id": clause_id},
        )


class InvalidTransitionError(LexoraError):
    """A document session cannot move to the requested phase."""

    status_code = 409
    error = "InvalidTransition"

    def __init__(self, document_id: str, current: str, target: str):
        super().__init__(
            f"Document '{document_id}' cannot move from '{current}' to '{target}'.",
            {"document_id": document_id, "current_status": current, "requested_status": target},
        )


class AnalysisNotCompleteError(LexoraError):
    """No analysis has been stored for the document yet."""

    status_code = 400
    error = "AnalysisNotComplete"
