"""
Lexora Session Module
=====================
Per-document workflow state.

A document moves through a fixed set of phases:

    idle -> file_selected -> checking_legality -> legal_confirmed -> analyzing -> complete
                                               +-> rejected

Sessions are immutable; every transition returns a new value. The store
keeps the latest value per document id in memory.
"""

import logging
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any

from core.classifier import DocumentAnalysis
from core.config import get_settings
from core.exceptions import DocumentNotFoundError, InvalidTransitionError

logger = logging.getLogger(__name__)


class SessionPhase(str, Enum):
    """Workflow phase of a document."""
    IDLE = "idle"
    FILE_SELECTED = "file_selected"
    CHECKING_LEGALITY = "checking_legality"
    LEGAL_CONFIRMED = "legal_confirmed"
    ANALYZING = "analyzing"
    COMPLETE = "complete"
    REJECTED = "rejected"


ALLOWED_TRANSITIONS: dict[SessionPhase, frozenset[SessionPhase]] = {
    SessionPhase.IDLE: frozenset({SessionPhase.FILE_SELECTED}),
    SessionPhase.FILE_SELECTED: frozenset({SessionPhase.CHECKING_LEGALITY, SessionPhase.IDLE}),
    SessionPhase.CHECKING_LEGALITY: frozenset({SessionPhase.LEGAL_CONFIRMED, SessionPhase.REJECTED}),
    SessionPhase.LEGAL_CONFIRMED: frozenset({SessionPhase.ANALYZING}),
    SessionPhase.ANALYZING: frozenset({SessionPhase.COMPLETE}),
    SessionPhase.COMPLETE: frozenset({SessionPhase.IDLE}),
    SessionPhase.REJECTED: frozenset({SessionPhase.IDLE}),
}

FINISHED_PHASES = frozenset({SessionPhase.COMPLETE, SessionPhase.REJECTED})
BUSY_PHASES = frozenset({
    SessionPhase.CHECKING_LEGALITY,
    SessionPhase.LEGAL_CONFIRMED,
    SessionPhase.ANALYZING,
})


def generate_document_id() -> str:
    """Generate a unique document ID."""
    unique_id = uuid.uuid4().hex[:12]
    return f"doc-{unique_id}"


@dataclass(frozen=True)
class DocumentSession:
    """Snapshot of one document's workflow."""
    document_id: str
    phase: SessionPhase = SessionPhase.IDLE
    filename: str | None = None
    content_type: str | None = None
    file_size_bytes: int = 0
    text: str = ""
    upload_timestamp: datetime | None = None
    analysis_started_at: datetime | None = None
    analysis_completed_at: datetime | None = None
    analysis: DocumentAnalysis | None = None

    @property
    def is_finished(self) -> bool:
        return self.phase in FINISHED_PHASES

    @property
    def is_busy(self) -> bool:
        return self.phase in BUSY_PHASES

    def can_transition(self, target: SessionPhase) -> bool:
        return target in ALLOWED_TRANSITIONS[self.phase]

    def transition(self, target: SessionPhase, **changes: Any) -> "DocumentSession":
        """
        Move to ``target`` and apply field changes.

        Raises:
            InvalidTransitionError: If ``target`` is not reachable from the
                current phase.
        """
        if not self.can_transition(target):
            raise InvalidTransitionError(self.document_id, self.phase.value, target.value)
        logger.debug(f"[{self.document_id}] {self.phase.value} -> {target.value}")
        return replace(self, phase=target, **changes)

    def select_file(
        self,
        filename: str,
        content_type: str,
        text: str,
        file_size_bytes: int
    ) -> "DocumentSession":
        return self.transition(
            SessionPhase.FILE_SELECTED,
            filename=filename,
            content_type=content_type,
            text=text,
            file_size_bytes=file_size_bytes,
            upload_timestamp=datetime.utcnow(),
        )

    def start_legality_check(self) -> "DocumentSession":
        return self.transition(
            SessionPhase.CHECKING_LEGALITY,
            analysis_started_at=datetime.utcnow(),
        )

    def resolve_legality(self, is_legal: bool) -> "DocumentSession":
        target = SessionPhase.LEGAL_CONFIRMED if is_legal else SessionPhase.REJECTED
        return self.transition(target)

    def start_analysis(self) -> "DocumentSession":
        return self.transition(SessionPhase.ANALYZING)

    def finish(self, analysis: DocumentAnalysis) -> "DocumentSession":
        """
        Attach the result; legal documents complete, others stay rejected.

        The decoded text is dropped once the result is attached.
        """
        if self.phase == SessionPhase.REJECTED:
            return replace(
                self,
                text="",
                analysis=analysis,
                analysis_completed_at=datetime.utcnow(),
            )
        return self.transition(
            SessionPhase.COMPLETE,
            text="",
            analysis=analysis,
            analysis_completed_at=datetime.utcnow(),
        )

    def reset(self) -> "DocumentSession":
        """Drop the file and any result, back to idle."""
        return self.transition(
            SessionPhase.IDLE,
            filename=None,
            content_type=None,
            text="",
            file_size_bytes=0,
            upload_timestamp=None,
            analysis_started_at=None,
            analysis_completed_at=None,
            analysis=None,
        )


class DocumentStore:
    """
    In-memory session store.

    Holds the latest session per document id. When full, creating a session
    evicts the oldest sessions that are not mid-analysis.
    """

    def __init__(self, max_sessions: int | None = None):
        self.max_sessions = max_sessions
        self._sessions: dict[str, DocumentSession] = {}

    def __contains__(self, document_id: str) -> bool:
        return document_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self) -> DocumentSession:
        self._evict()
        session = DocumentSession(document_id=generate_document_id())
        self._sessions[session.document_id] = session
        return session

    def get(self, document_id: str) -> DocumentSession:
        try:
            return self._sessions[document_id]
        except KeyError:
            raise DocumentNotFoundError(document_id) from None

    def put(self, session: DocumentSession) -> DocumentSession:
        self._sessions[session.document_id] = session
        return session

    def remove(self, document_id: str) -> DocumentSession:
        """
        Drop a session from the store.

        Raises:
            DocumentNotFoundError: If the id is unknown
            InvalidTransitionError: If the session is mid-analysis
        """
        session = self.get(document_id)
        if session.is_busy:
            raise InvalidTransitionError(document_id, session.phase.value, "discarded")
        return self._sessions.pop(document_id)

    def clear(self) -> None:
        self._sessions.clear()

    def _evict(self) -> None:
        if self.max_sessions is None:
            return
        # Dicts keep insertion order, so the first idle-or-finished entries are the oldest
        stale = [
            document_id for document_id, session in self._sessions.items()
            if not session.is_busy
        ]
        overflow = len(self._sessions) - self.max_sessions + 1
        for document_id in stale[:max(overflow, 0)]:
            del self._sessions[document_id]
            logger.info(f"Evicted session {document_id}")


_document_store = DocumentStore(max_sessions=get_settings().max_sessions)


def get_document_store() -> DocumentStore:
    """Get the document store (for use by other modules)."""
    return _document_store
