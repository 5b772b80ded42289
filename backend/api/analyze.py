"""
Lexora Analyze API
==================
Runs documents through the classification workflow.
Drives the session state machine: legality check, then analysis.
"""

import logging
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, File, UploadFile

from api.upload import read_upload_text
from core import (
    DEMO_DOCUMENT_ID,
    AnalysisNotCompleteError,
    ClassificationEngine,
    ClauseNotFoundError,
    DocumentAnalysis,
    DocumentSession,
    DocumentStore,
    get_clause,
    get_document_store,
    preview_analysis,
)
from schemas import (
    AnalyzeResponse,
    ClauseSchema,
    DocumentAnalysisSchema,
    DocumentStatusResponse,
    ErrorResponse,
    SessionStatusEnum,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/analyze", tags=["Analyze"])


def convert_analysis_to_schema(analysis: DocumentAnalysis) -> DocumentAnalysisSchema:
    """Convert internal analysis to API schema."""
    return DocumentAnalysisSchema.model_validate(analysis.to_dict())


def run_analysis_pipeline(
    store: DocumentStore,
    session: DocumentSession,
    engine: ClassificationEngine | None = None
) -> DocumentSession:
    """
    Run a session through the classification workflow.

    Pipeline steps:
    1. Legality check (file_selected -> checking_legality -> legal_confirmed | rejected)
    2. Classification (legal_confirmed -> analyzing -> complete)

    Rejected documents still receive the non-legal analysis so the client
    can explain why nothing was found. Every intermediate session is
    written to the store.

    Returns:
        The finished session
    """
    engine = engine or ClassificationEngine()
    document_id = session.document_id
    logger.info(f"Starting analysis pipeline for {document_id}")

    # Step 1: Legality check
    session = store.put(session.start_legality_check())
    is_legal = engine.detect_legal_document(session.text)
    session = store.put(session.resolve_legality(is_legal))
    logger.info(f"[{document_id}] Legality check: {session.phase.value}")

    # Step 2: Classification
    if is_legal:
        session = store.put(session.start_analysis())
    analysis = engine.classify(session.text)
    session = store.put(session.finish(analysis))

    logger.info(
        f"[{document_id}] Analysis finished: {analysis.risk_summary.total_clauses} clauses, "
        f"confidence {analysis.confidence:.1f}"
    )
    return session


def preview_response() -> AnalyzeResponse:
    """Response for the demo id; it never touches the store."""
    return AnalyzeResponse(
        success=True,
        analysis=convert_analysis_to_schema(preview_analysis()),
        processed_at=datetime.utcnow(),
        document_id=DEMO_DOCUMENT_ID,
        status=SessionStatusEnum.COMPLETE
    )


def session_analysis(document_id: str) -> DocumentAnalysis:
    """Get the stored analysis for a document, or the preview for the demo id."""
    if document_id == DEMO_DOCUMENT_ID:
        return preview_analysis()

    session = get_document_store().get(document_id)
    if session.analysis is None:
        raise AnalysisNotCompleteError(
            f"Document analysis is not complete. Status: {session.phase.value}",
            {"current_status": session.phase.value}
        )
    return session.analysis


@router.post(
    "",
    response_model=AnalyzeResponse,
    responses={
        400: {"model": ErrorResponse, "description": "No file provided"},
        413: {"model": ErrorResponse, "description": "File too large"},
        415: {"model": ErrorResponse, "description": "Unsupported file type"}
    },
    summary="Analyze a file in one step",
    description="""
    Upload and analyze a document in a single request. Nothing is stored.

    The response carries the full analysis: legal flag, document type,
    confidence, summary, clause breakdown and risk summary.
    """
)
async def analyze_file(
    file: Annotated[UploadFile | None, File(description="Document to analyze")] = None
) -> AnalyzeResponse:
    """Analyze an uploaded file without opening a session."""
    text, file_size = await read_upload_text(file)
    logger.info(f"One-shot analysis: {file.filename} ({file_size} bytes)")

    analysis = ClassificationEngine().classify(text)

    return AnalyzeResponse(
        success=True,
        analysis=convert_analysis_to_schema(analysis),
        document_name=file.filename,
        processed_at=datetime.utcnow()
    )


@router.post(
    "/{document_id}",
    response_model=AnalyzeResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Document not found"},
        409: {"model": ErrorResponse, "description": "Analysis already in progress"}
    },
    summary="Analyze an uploaded document",
    description=f"""
    Run the classification workflow for an uploaded document.

    1. **Legality check**: keyword and phrase detection
    2. **Analysis**: type, confidence, clause breakdown and risk summary

    Documents that were already analyzed return the stored result. The
    reserved id `{DEMO_DOCUMENT_ID}` returns the fixed preview analysis.
    """
)
async def analyze_document(document_id: str) -> AnalyzeResponse:
    """Analyze an uploaded document and return the result."""
    if document_id == DEMO_DOCUMENT_ID:
        return preview_response()

    store = get_document_store()
    session = store.get(document_id)

    if not session.is_finished:
        # Idle and busy sessions are rejected by the state machine with a 409
        session = run_analysis_pipeline(store, session)
    else:
        logger.info(f"[{document_id}] Returning stored analysis")

    return AnalyzeResponse(
        success=True,
        analysis=convert_analysis_to_schema(session.analysis),
        document_name=session.filename,
        processed_at=session.analysis_completed_at,
        document_id=document_id,
        status=SessionStatusEnum(session.phase.value)
    )


@router.get(
    "/{document_id}",
    response_model=AnalyzeResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Document not found"},
        400: {"model": ErrorResponse, "description": "Analysis not complete"}
    },
    summary="Get analysis",
    description=f"""
    Retrieve the stored analysis for a document.

    The reserved id `{DEMO_DOCUMENT_ID}` returns a fixed preview analysis.
    """
)
async def get_analysis(document_id: str) -> AnalyzeResponse:
    """Get the stored analysis."""
    if document_id == DEMO_DOCUMENT_ID:
        return preview_response()

    analysis = session_analysis(document_id)
    session = get_document_store().get(document_id)
    return AnalyzeResponse(
        success=True,
        analysis=convert_analysis_to_schema(analysis),
        document_name=session.filename,
        processed_at=session.analysis_completed_at,
        document_id=document_id,
        status=SessionStatusEnum(session.phase.value)
    )


@router.get(
    "/{document_id}/status",
    response_model=DocumentStatusResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Document not found"}
    },
    summary="Get analysis status",
    description="Check the current workflow phase of a document."
)
async def get_analysis_status(document_id: str) -> DocumentStatusResponse:
    """Get the current status of document analysis."""
    session = get_document_store().get(document_id)

    return DocumentStatusResponse(
        document_id=session.document_id,
        filename=session.filename,
        status=SessionStatusEnum(session.phase.value),
        upload_timestamp=session.upload_timestamp,
        analysis_started_at=session.analysis_started_at,
        analysis_completed_at=session.analysis_completed_at
    )


@router.get(
    "/{document_id}/clauses/{clause_id}",
    response_model=ClauseSchema,
    responses={
        404: {"model": ErrorResponse, "description": "Document or clause not found"},
        400: {"model": ErrorResponse, "description": "Analysis not complete"}
    },
    summary="Get clause details",
    description="Get a single clause from a document's analysis."
)
async def get_clause_details(document_id: str, clause_id: str) -> ClauseSchema:
    """Get one clause of an analysis."""
    analysis = session_analysis(document_id)

    clause = get_clause(analysis.clauses, clause_id)
    if clause is None:
        raise ClauseNotFoundError(document_id, clause_id)

    return ClauseSchema.model_validate(clause.to_dict())
