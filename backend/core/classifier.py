"""
Lexora Classification Engine Module
===================================
Decides whether a document is legal, labels its type, scores confidence
and attaches the clause breakdown with its risk summary.

Key Features:
- Keyword and phrase based legal detection
- Ordered, first-match-wins document type rules
- Bounded linear confidence score (10-95)
- Deterministic output for identical input
"""

import logging
from dataclasses import dataclass
from typing import Any

from core.clauses import PREVIEW_CLAUSES, STANDARD_CLAUSES, Clause, RiskLevel
from core.lexicon import (
    CONFIDENCE_INDICATORS,
    DEFAULT_DOCUMENT_TYPE,
    DOCUMENT_TYPE_RULES,
    LEGAL_KEYWORDS,
    LEGAL_PHRASES,
)

logger = logging.getLogger(__name__)

MIN_KEYWORD_MATCHES = 3
MIN_PHRASE_MATCHES = 1
MIN_CONFIDENCE = 10.0
MAX_CONFIDENCE = 95.0


@dataclass(frozen=True)
class RiskSummary:
    """Clause counts by risk level."""
    high: int = 0
    medium: int = 0
    low: int = 0
    total_clauses: int = 0

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary."""
        return {
            "high": self.high,
            "medium": self.medium,
            "low": self.low,
            "totalClauses": self.total_clauses,
        }


@dataclass(frozen=True)
class AnalysisSummary:
    """Headline block shown above the clause breakdown."""
    title: str
    overview: str
    key_points: tuple[str, ...]
    risk_level: RiskLevel

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "title": self.title,
            "overview": self.overview,
            "keyPoints": list(self.key_points),
            "riskLevel": self.risk_level.value,
        }


@dataclass(frozen=True)
class DocumentAnalysis:
    """Complete analysis result for one document."""
    is_legal_document: bool
    document_type: str | None
    confidence: float
    summary: AnalysisSummary
    clauses: tuple[Clause, ...]
    risk_summary: RiskSummary

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "isLegalDocument": self.is_legal_document,
            "documentType": self.document_type,
            "confidence": self.confidence,
            "summary": self.summary.to_dict(),
            "clauses": [c.to_dict() for c in self.clauses],
            "riskSummary": self.risk_summary.to_dict(),
        }


LEGAL_OVERVIEW = (
    "This is a standard residential rental agreement with some tenant-favorable terms "
    "but includes several clauses that require attention. The document establishes a "
    "12-month lease with monthly rent of $2,500, includes pet restrictions, and has "
    "specific termination conditions."
)

LEGAL_KEY_POINTS = (
    "12-month lease term with automatic renewal clause",
    "Monthly rent of $2,500 due on the 1st of each month",
    "Security deposit of $2,500 required",
    "Pet policy allows cats and dogs with additional deposit",
    "Landlord responsible for major repairs and maintenance",
)

NON_LEGAL_OVERVIEW = (
    "This document does not appear to be a legal document. It may be a general business "
    "document, personal correspondence, or other non-legal content. No legal analysis "
    "has been performed."
)

NON_LEGAL_KEY_POINTS = (
    "Document does not contain legal clauses or terms",
    "No contractual obligations identified",
    "Consider uploading a legal document for proper analysis",
)


def count_matches(text_lower: str, terms: tuple[str, ...]) -> int:
    """Count distinct terms present in already lower-cased text."""
    return sum(1 for term in terms if term in text_lower)


def summarize_risk(clauses: tuple[Clause, ...]) -> RiskSummary:
    """Count clauses per risk level."""
    high = sum(1 for c in clauses if c.risk_level == RiskLevel.HIGH)
    medium = sum(1 for c in clauses if c.risk_level == RiskLevel.MEDIUM)
    low = sum(1 for c in clauses if c.risk_level == RiskLevel.LOW)
    return RiskSummary(high=high, medium=medium, low=low, total_clauses=len(clauses))


class ClassificationEngine:
    """
    Heuristic legal document classifier.

    Pipeline:
    1. Legal detection (>= 3 keywords or >= 1 phrase)
    2. Document type (first matching rule, else "Legal Document")
    3. Confidence (indicator hits / indicators * 100, clamped to 10-95)
    4. Clause breakdown (canned template set for legal documents)
    5. Risk summary (counts by level)

    The engine holds no mutable state and never raises for string input.
    """

    def __init__(self, clause_templates: tuple[Clause, ...] = STANDARD_CLAUSES):
        self.clause_templates = clause_templates

    def detect_legal_document(self, text: str) -> bool:
        text_lower = text.lower()
        keyword_matches = count_matches(text_lower, LEGAL_KEYWORDS)
        phrase_matches = count_matches(text_lower, LEGAL_PHRASES)
        logger.debug(
            f"Legal detection: {keyword_matches} keywords, {phrase_matches} phrases"
        )
        return (
            keyword_matches >= MIN_KEYWORD_MATCHES
            or phrase_matches >= MIN_PHRASE_MATCHES
        )

    def classify_document_type(self, text: str) -> str:
        text_lower = text.lower()
        for rule in DOCUMENT_TYPE_RULES:
            if rule.matches(text_lower):
                return rule.label
        return DEFAULT_DOCUMENT_TYPE

    def calculate_confidence(self, text: str) -> float:
        matches = count_matches(text.lower(), CONFIDENCE_INDICATORS)
        score = matches / len(CONFIDENCE_INDICATORS) * 100
        return min(MAX_CONFIDENCE, max(MIN_CONFIDENCE, score))

    def classify(self, text: str) -> DocumentAnalysis:
        """
        Analyze plain document text.

        Args:
            text: Already-extracted document text

        Returns:
            DocumentAnalysis; non-legal documents get no clauses and a
            zeroed risk summary.
        """
        is_legal = self.detect_legal_document(text)
        document_type = self.classify_document_type(text)
        confidence = self.calculate_confidence(text)

        if is_legal:
            clauses = self.clause_templates
            summary = AnalysisSummary(
                title=f"{document_type} Analysis",
                overview=LEGAL_OVERVIEW,
                key_points=LEGAL_KEY_POINTS,
                risk_level=RiskLevel.MEDIUM,
            )
        else:
            clauses = ()
            summary = AnalysisSummary(
                title="Document Analysis",
                overview=NON_LEGAL_OVERVIEW,
                key_points=NON_LEGAL_KEY_POINTS,
                risk_level=RiskLevel.LOW,
            )

        logger.info(
            f"Classified document: legal={is_legal}, type={document_type}, "
            f"confidence={confidence:.1f}, clauses={len(clauses)}"
        )

        return DocumentAnalysis(
            is_legal_document=is_legal,
            document_type=document_type,
            confidence=confidence,
            summary=summary,
            clauses=clauses,
            risk_summary=summarize_risk(clauses),
        )


def preview_analysis() -> DocumentAnalysis:
    """The fixed analysis shown for the demo document."""
    return DocumentAnalysis(
        is_legal_document=True,
        document_type="Rental Agreement",
        confidence=MAX_CONFIDENCE,
        summary=AnalysisSummary(
            title="Rental Agreement Analysis",
            overview=LEGAL_OVERVIEW,
            key_points=LEGAL_KEY_POINTS,
            risk_level=RiskLevel.MEDIUM,
        ),
        clauses=PREVIEW_CLAUSES,
        risk_summary=summarize_risk(PREVIEW_CLAUSES),
    )
