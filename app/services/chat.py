"""
Chat messaging between users and businesses.
"""
from typing import List, Tuple

from sqlalchemy.exc import IntegrityError

from app.core.exceptions import NotFoundException
from app.core.logging import logger
from app.db.database import utcnow
from app.models import Chat, ChatMessage
from app.schemas.chat import CreateChatRequest, SendMessageRequest
from app.services.store import EntityStore


class ChatService:
    async def create_chat(self, store: EntityStore, request: CreateChatRequest) -> Tuple[Chat, bool]:
        """
        Return the chat for (entity, user), creating it if needed. Commits.

        Returns:
            (chat, created)
        """
        existing = await store.find_chat(request.entity_id, request.user_id)
        if existing is not None:
            logger.info(
                "Chat already exists",
                extra={"chat_id": existing.id, "entity_id": request.entity_id},
            )
            return existing, False

        chat = Chat(
            entity_id=request.entity_id,
            entity_name=request.entity_name,
            user_id=request.user_id,
            user_name=request.user_name,
            unread_count=0,
            created_at=utcnow(),
        )
        try:
            await store.add_chat(chat)
            await store.commit()
        except IntegrityError:
            # Lost a race with a concurrent create for the same pair
            await store.rollback()
            existing = await store.find_chat(request.entity_id, request.user_id)
            if existing is None:
                raise
            return existing, False

        logger.info(
            "Chat created",
            extra={"chat_id": chat.id, "entity_id": chat.entity_id, "user_id": chat.user_id},
        )
        return chat, True

    async def send_message(self, store: EntityStore, request: SendMessageRequest) -> bool:
        """
        Append a message and update the chat preview. Does not commit.

        The message is always stored. Returns False when the chat is gone, in
        which case no chat fields are touched.
        """
        sent_at = utcnow()
        await store.add_message(
            ChatMessage(
                chat_id=request.chat_id,
                sender_id=request.sender_id,
                sender_name=request.sender_name,
                sender_avatar=request.sender_avatar,
                message=request.message,
                timestamp=sent_at,
                read=False,
            )
        )

        updated = await store.record_chat_message(request.chat_id, request.message, sent_at)
        if not updated:
            logger.warning("Message sent to missing chat", extra={"chat_id": request.chat_id})
        else:
            logger.info(
                "Message sent",
                extra={"chat_id": request.chat_id, "sender_id": request.sender_id},
            )
        return updated

    async def mark_read(self, store: EntityStore, chat_id: str) -> None:
        """Reset the unread counter. Does not commit."""
        if not await store.reset_unread(chat_id):
            raise NotFoundException(f"Chat not found: {chat_id}", details={"chatId": chat_id})

    async def list_chats(self, store: EntityStore, user_id: str) -> List[Chat]:
        return await store.list_chats(user_id)

    async def list_messages(self, store: EntityStore, chat_id: str) -> List[ChatMessage]:
        if await store.get_chat(chat_id) is None:
            raise NotFoundException(f"Chat not found: {chat_id}", details={"chatId": chat_id})
        return await store.list_messages(chat_id)


# Global service instance
chat_service = ChatService()
