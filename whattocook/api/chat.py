"""Cooking assistant chat endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from whattocook.api.dependencies import get_chat_service, get_current_user
from whattocook.database import get_db
from whattocook.models.user import User
from whattocook.schemas.chat import ChatHistoryResponse, ChatHistorySave, ChatRequest, ChatResponse
from whattocook.services.chat_service import ChatHistoryService, ChatService
from whattocook.services.llm import LLMError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
async def chat(
    data: ChatRequest,
    chat_service: Annotated[ChatService, Depends(get_chat_service)],
):
    """Send the conversation so far and get the assistant's next message."""
    if not data.messages:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Messages are required")

    try:
        message = await chat_service.reply(
            [m.model_dump() for m in data.messages], language=data.language
        )
    except LLMError as e:
        logger.error(f"Chat failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="The cooking assistant is unavailable right now",
        ) from e

    return ChatResponse(message=message)


@router.get("/history", response_model=ChatHistoryResponse)
def get_history(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Load the user's saved transcript (empty if none)."""
    session = ChatHistoryService(db).get(current_user.id)
    if session is None:
        return ChatHistoryResponse(messages=[])
    return session


@router.post("/history", response_model=ChatHistoryResponse)
def save_history(
    data: ChatHistorySave,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Replace the saved transcript, or append new messages when ``delta`` is set."""
    return ChatHistoryService(db).save(current_user.id, data.messages, delta=data.delta)
