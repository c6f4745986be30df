"""
Chat API endpoints.
"""
from fastapi import APIRouter, Depends, Query

from app.api.deps import get_store
from app.core.middleware import get_request_id
from app.core.exceptions import AppException, DependencyFailureException
from app.core.logging import logger
from app.schemas.chat import (
    CreateChatRequest,
    CreateChatResponse,
    SendMessageRequest,
    MarkReadRequest,
    SuccessResponse,
    ChatOutput,
    ChatMessageOutput,
    ChatListResponse,
    ChatMessageListResponse,
)
from app.services.chat import chat_service
from app.services.store import EntityStore


router = APIRouter(prefix="/api/chats", tags=["chat"])


def _dependency_failure(action: str, request_id: str, error: Exception) -> DependencyFailureException:
    logger.error(
        f"Failed to {action}: {str(error)}",
        extra={"request_id": request_id},
        exc_info=True,
    )
    return DependencyFailureException(f"Failed to {action}")


@router.post("/create", response_model=CreateChatResponse)
async def create_chat(
    request: CreateChatRequest,
    store: EntityStore = Depends(get_store),
):
    """
    Open a chat between a user and a business.
    Returns the existing chat if the pair already has one.
    """
    request_id = get_request_id()

    logger.info(
        "Processing chat creation",
        extra={"request_id": request_id, "entity_id": request.entity_id, "user_id": request.user_id},
    )

    try:
        chat, _ = await chat_service.create_chat(store, request)
    except AppException:
        raise
    except Exception as e:
        raise _dependency_failure("create chat", request_id, e)

    return CreateChatResponse(request_id=request_id, success=True, chat_id=chat.id)


@router.post("/send-message", response_model=SuccessResponse)
async def send_message(
    request: SendMessageRequest,
    store: EntityStore = Depends(get_store),
):
    """
    Append a message to a chat and bump its unread counter.
    A chat that no longer exists only receives the message.
    """
    request_id = get_request_id()

    logger.info(
        "Processing message",
        extra={"request_id": request_id, "chat_id": request.chat_id, "sender_id": request.sender_id},
    )

    try:
        await chat_service.send_message(store, request)
        await store.commit()
    except AppException:
        raise
    except Exception as e:
        raise _dependency_failure("send message", request_id, e)

    return SuccessResponse(request_id=request_id, success=True)


@router.post("/mark-read", response_model=SuccessResponse)
async def mark_read(
    request: MarkReadRequest,
    store: EntityStore = Depends(get_store),
):
    """
    Reset a chat's unread counter.

    Raises:
        404: Chat not found
    """
    request_id = get_request_id()

    try:
        await chat_service.mark_read(store, request.chat_id)
        await store.commit()
    except AppException:
        raise
    except Exception as e:
        raise _dependency_failure("mark chat as read", request_id, e)

    logger.info("Chat marked as read", extra={"request_id": request_id, "chat_id": request.chat_id})

    return SuccessResponse(request_id=request_id, success=True)


@router.get("", response_model=ChatListResponse)
async def list_chats(
    user_id: str = Query(..., alias="userId"),
    store: EntityStore = Depends(get_store),
):
    """A user's conversations, most recently active first."""
    request_id = get_request_id()

    try:
        chats = await chat_service.list_chats(store, user_id)
    except AppException:
        raise
    except Exception as e:
        raise _dependency_failure("list chats", request_id, e)

    return ChatListResponse(
        request_id=request_id,
        chats=[ChatOutput.model_validate(chat) for chat in chats],
    )


@router.get("/{chat_id}/messages", response_model=ChatMessageListResponse)
async def list_messages(
    chat_id: str,
    store: EntityStore = Depends(get_store),
):
    """
    Messages of a chat, oldest first.

    Raises:
        404: Chat not found
    """
    request_id = get_request_id()

    try:
        messages = await chat_service.list_messages(store, chat_id)
    except AppException:
        raise
    except Exception as e:
        raise _dependency_failure("list messages", request_id, e)

    return ChatMessageListResponse(
        request_id=request_id,
        messages=[ChatMessageOutput.model_validate(message) for message in messages],
    )
