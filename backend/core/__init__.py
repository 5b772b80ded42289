"""
Lexora Core Module
==================
Core business logic for legal document analysis.

Modules:
- lexicon: Fixed keyword, phrase, type rule and chat tables
- clauses: Clause records and canned clause sets
- classifier: Legal detection, type classification and confidence scoring
- chat: Keyword-matched chat responder and history
- session: Per-document workflow state machine and store
- exceptions: Error taxonomy
- config: Application configuration
"""

from core.chat import ChatExchange, ChatHistory, ChatResponder, get_chat_history
from core.classifier import (
    AnalysisSummary,
    ClassificationEngine,
    DocumentAnalysis,
    RiskSummary,
    preview_analysis,
    summarize_risk,
)
from core.clauses import PREVIEW_CLAUSES, STANDARD_CLAUSES, Clause, RiskLevel, get_clause
from core.config import DEMO_DOCUMENT_ID, get_settings
from core.exceptions import (
    AnalysisNotCompleteError,
    ClauseNotFoundError,
    DocumentNotFoundError,
    FileTooLargeError,
    InvalidInputError,
    InvalidTransitionError,
    LexoraError,
    UnsupportedFormatError,
)
from core.session import DocumentSession, DocumentStore, SessionPhase, get_document_store

__all__ = [
    # Classification
    "ClassificationEngine",
    "DocumentAnalysis",
    "AnalysisSummary",
    "RiskSummary",
    "summarize_risk",
    "preview_analysis",
    # Clauses
    "Clause",
    "RiskLevel",
    "STANDARD_CLAUSES",
    "PREVIEW_CLAUSES",
    "get_clause",
    # Chat
    "ChatResponder",
    "ChatExchange",
    "ChatHistory",
    "get_chat_history",
    # Sessions
    "DocumentSession",
    "DocumentStore",
    "SessionPhase",
    "get_document_store",
    # Errors
    "LexoraError",
    "AnalysisNotCompleteError",
    "InvalidInputError",
    "UnsupportedFormatError",
    "FileTooLargeError",
    "DocumentNotFoundError",
    "ClauseNotFoundError",
    "InvalidTransitionError",
    # Config
    "get_settings",
    "DEMO_DOCUMENT_ID",
]
