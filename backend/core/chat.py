"""
Lexora Chat Module
==================
Keyword-matched question answering about the analyzed document.

Answers come from a fixed trigger dictionary; the first trigger found in
the lower-cased question wins. History is kept in memory per document id
for the lifetime of the process only.
"""

import logging
from collections import deque
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from core.config import get_settings
from core.lexicon import CHAT_RESPONSES, DEFAULT_CHAT_RESPONSE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChatExchange:
    """One question and its answer."""
    question: str
    answer: str
    timestamp: datetime
    document_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "message": self.question,
            "response": self.answer,
            "timestamp": self.timestamp.isoformat(),
            "documentId": self.document_id,
        }


class ChatResponder:
    """Stateless responder over an ordered trigger -> answer mapping."""

    def __init__(
        self,
        responses: Mapping[str, str] = CHAT_RESPONSES,
        default_response: str = DEFAULT_CHAT_RESPONSE
    ):
        self.responses = responses
        self.default_response = default_response

    def answer(self, question: str) -> str:
        question_lower = question.lower()
        for trigger, response in self.responses.items():
            if trigger in question_lower:
                logger.debug(f"Chat trigger matched: {trigger!r}")
                return response
        return self.default_response

    def exchange(self, question: str, document_id: str | None = None) -> ChatExchange:
        """Answer a question and stamp it with the current time."""
        return ChatExchange(
            question=question,
            answer=self.answer(question),
            timestamp=datetime.utcnow(),
            document_id=document_id,
        )


class ChatHistory:
    """
    In-memory exchange log keyed by document id.

    Each document keeps its latest ``max_exchanges`` exchanges; past
    ``max_documents`` the document that started chatting first is dropped.
    """

    def __init__(self, max_documents: int | None = None, max_exchanges: int | None = None):
        self.max_documents = max_documents
        self.max_exchanges = max_exchanges
        self._exchanges: dict[str, deque[ChatExchange]] = {}

    def __contains__(self, document_id: str) -> bool:
        return document_id in self._exchanges

    def __len__(self) -> int:
        return len(self._exchanges)

    def record(self, exchange: ChatExchange) -> None:
        if exchange.document_id is None:
            return
        if exchange.document_id not in self._exchanges:
            if self.max_documents is not None and len(self._exchanges) >= self.max_documents:
                oldest = next(iter(self._exchanges))
                del self._exchanges[oldest]
                logger.info(f"Evicted chat history for {oldest}")
            self._exchanges[exchange.document_id] = deque(maxlen=self.max_exchanges)
        self._exchanges[exchange.document_id].append(exchange)

    def for_document(self, document_id: str) -> list[ChatExchange]:
        return list(self._exchanges.get(document_id, ()))

    def discard(self, document_id: str) -> None:
        self._exchanges.pop(document_id, None)

    def clear(self) -> None:
        self._exchanges.clear()


_chat_history = ChatHistory(
    max_documents=get_settings().max_chat_documents,
    max_exchanges=get_settings().max_chat_exchanges,
)


def get_chat_history() -> ChatHistory:
    """Get the process-wide chat history."""
    return _chat_history
