"""
Lexora Chat API
===============
Answers questions about an analyzed document.
"""

import logging

from fastapi import APIRouter

from core import (
    DEMO_DOCUMENT_ID,
    ChatResponder,
    InvalidInputError,
    get_chat_history,
    get_document_store,
)
from core.lexicon import SUGGESTED_QUESTIONS
from schemas import (
    ChatExchangeSchema,
    ChatHistoryResponse,
    ChatRequest,
    ChatResponse,
    ChatSuggestionsResponse,
    ErrorResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/chat", tags=["Chat"])

responder = ChatResponder()


def is_known_document(document_id: str | None) -> bool:
    """Whether chat history may be kept for this id."""
    return document_id == DEMO_DOCUMENT_ID or document_id in get_document_store()


@router.post(
    "",
    response_model=ChatResponse,
    responses={
        400: {"model": ErrorResponse, "description": "No message provided"}
    },
    summary="Ask a question",
    description=f"""
    Ask a question about a document.

    The `documentId` is not interpreted when answering. When it names an
    uploaded document or `{DEMO_DOCUMENT_ID}`, the exchange is kept in the
    history returned by `/chat/{{documentId}}/history`; other ids are answered
    but not recorded.
    """
)
async def chat(request: ChatRequest) -> ChatResponse:
    """Answer a question."""
    if not request.message or not request.message.strip():
        raise InvalidInputError("No message provided")

    exchange = responder.exchange(request.message, request.document_id)
    if is_known_document(request.document_id):
        get_chat_history().record(exchange)

    logger.info(f"Answered chat message for document {request.document_id}")

    return ChatResponse(
        success=True,
        response=exchange.answer,
        timestamp=exchange.timestamp
    )


@router.get(
    "/suggestions",
    response_model=ChatSuggestionsResponse,
    summary="Get suggested questions",
    description="Starter questions to offer before the first message."
)
async def get_suggestions() -> ChatSuggestionsResponse:
    """List the suggested starter questions."""
    return ChatSuggestionsResponse(questions=list(SUGGESTED_QUESTIONS))


@router.get(
    "/{document_id}/history",
    response_model=ChatHistoryResponse,
    summary="Get chat history",
    description="The latest questions and answers recorded for a document."
)
async def get_history(document_id: str) -> ChatHistoryResponse:
    """Get the chat history for a document."""
    exchanges = get_chat_history().for_document(document_id)

    return ChatHistoryResponse(
        document_id=document_id,
        exchanges=[ChatExchangeSchema.model_validate(e.to_dict()) for e in exchanges]
    )
