"""
Lexora API Schemas
==================
Pydantic models for API request/response validation.
All API contracts are defined here for type safety and documentation.

Fields are declared in snake_case and serialized with camelCase aliases,
matching the JSON contract the web client consumes.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase JSON."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# === Enums ===

class RiskLevelEnum(str, Enum):
    """Risk level categories."""
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class SessionStatusEnum(str, Enum):
    """Workflow phase of an uploaded document."""
    IDLE = "idle"
    FILE_SELECTED = "file_selected"
    CHECKING_LEGALITY = "checking_legality"
    LEGAL_CONFIRMED = "legal_confirmed"
    ANALYZING = "analyzing"
    COMPLETE = "complete"
    REJECTED = "rejected"


# === Analysis Schemas ===

class ClauseSchema(CamelModel):
    """Schema for an interpreted clause."""
    id: str = Field(..., description="Clause identifier")
    title: str = Field(..., description="Clause title")
    category: str = Field(..., description="Free-form clause category")
    original_text: str = Field(..., description="Original clause text")
    plain_english: str = Field(..., description="Plain-English rewrite")
    risk_level: RiskLevelEnum = Field(..., description="Clause risk level")
    risk_reason: str = Field(..., description="Why the clause carries this risk")
    suggestions: list[str] = Field(default_factory=list, description="Negotiation suggestions")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "3",
                "title": "Automatic Renewal",
                "category": "Termination",
                "originalText": "This lease shall automatically renew...",
                "plainEnglish": "Your lease will automatically continue...",
                "riskLevel": "Medium",
                "riskReason": "Automatic renewal can trap tenants who forget to give notice in time.",
                "suggestions": ["Set a calendar reminder 90 days before lease expiration"]
            }
        }
    )


class SummarySchema(CamelModel):
    """Headline summary of an analysis."""
    title: str
    overview: str
    key_points: list[str]
    risk_level: RiskLevelEnum


class RiskSummarySchema(CamelModel):
    """Clause counts by risk level."""
    high: int = Field(..., ge=0)
    medium: int = Field(..., ge=0)
    low: int = Field(..., ge=0)
    total_clauses: int = Field(..., ge=0)


class DocumentAnalysisSchema(CamelModel):
    """Complete document analysis."""
    is_legal_document: bool
    document_type: str | None = None
    confidence: float = Field(..., ge=0, le=100)
    summary: SummarySchema
    clauses: list[ClauseSchema]
    risk_summary: RiskSummarySchema


# === Upload Schemas ===

class UploadResponse(CamelModel):
    """Response for document upload."""
    document_id: str = Field(..., description="Unique identifier for the uploaded document")
    filename: str | None = Field(None, description="Original filename")
    file_size_bytes: int = Field(0, description="File size in bytes")
    upload_timestamp: datetime | None = Field(None, description="Timestamp of upload")
    status: SessionStatusEnum = Field(..., description="Current workflow phase")
    message: str = Field(..., description="Status message")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "documentId": "doc-abc123def456",
                "filename": "lease.txt",
                "fileSizeBytes": 10240,
                "uploadTimestamp": "2024-01-15T10:30:00Z",
                "status": "file_selected",
                "message": "Document uploaded successfully. Ready for analysis."
            }
        }
    )


# === Analyze Schemas ===

class AnalyzeResponse(CamelModel):
    """Response for document analysis."""
    success: bool = True
    analysis: DocumentAnalysisSchema
    document_name: str | None = None
    processed_at: datetime
    document_id: str | None = None
    status: SessionStatusEnum | None = None


class DocumentStatusResponse(CamelModel):
    """Response for document status check."""
    document_id: str
    filename: str | None = None
    status: SessionStatusEnum
    upload_timestamp: datetime | None = None
    analysis_started_at: datetime | None = None
    analysis_completed_at: datetime | None = None


# === Chat Schemas ===

class ChatRequest(CamelModel):
    """A question about a document."""
    message: str | None = Field(default=None, description="User question")
    document_id: str | None = Field(default=None, description="Opaque document identifier")


class ChatResponse(CamelModel):
    """Answer to a chat question."""
    success: bool = True
    response: str
    timestamp: datetime


class ChatExchangeSchema(CamelModel):
    """A recorded question and answer."""
    message: str
    response: str
    timestamp: datetime
    document_id: str | None = None


class ChatHistoryResponse(CamelModel):
    """Chat exchanges recorded for a document."""
    document_id: str
    exchanges: list[ChatExchangeSchema]


class ChatSuggestionsResponse(CamelModel):
    """Suggested starter questions."""
    questions: list[str]


# === Error Schemas ===

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: dict[str, Any] | None = Field(None, description="Additional error details")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "UnsupportedFormat",
                "message": "Invalid file type. Please upload PDF, Word, or text files only.",
                "details": {"received_type": "image/png"}
            }
        }
    )


# === Health Check ===

class HealthCheckResponse(BaseModel):
    """API health check response."""
    status: str = Field(..., description="API status")
    version: str = Field(..., description="API version")
    timestamp: datetime = Field(..., description="Current server timestamp")
    services: dict[str, str] = Field(..., description="Status of dependent services")
