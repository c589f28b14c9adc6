#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
API routes for chat history.
"""
from fastapi import APIRouter

from api.routes import ERROR_RESPONSES, error_response
from models.schemas import (
    Chat, ChatListResponse, ChatResponse, CreateChatRequest, DeleteResponse,
    Message, MessageListResponse
)
from services.chat_store import ChatStore
from utils.errors import ChatNotFoundError
from utils.logger import get_logger
from config.settings import Settings

logger = get_logger(__name__)


class ChatRoutes:
    """Chat list, creation, deletion and message history."""

    def __init__(self, settings: Settings, store: ChatStore):
        self.settings = settings
        self.store = store
        self.router = APIRouter(prefix="/api/chats", responses=ERROR_RESPONSES)
        self._setup_routes()

    def _setup_routes(self):
        self.router.get("", response_model=ChatListResponse)(self.list_chats)
        self.router.post("", response_model=ChatResponse)(self.create_chat)
        self.router.get("/{chat_id}/messages", response_model=MessageListResponse)(self.list_messages)
        self.router.delete("/{chat_id}", response_model=DeleteResponse)(self.delete_chat)

    def list_chats(self):
        try:
            chats = self.store.list_chats()
        except Exception as e:
            logger.exception("List chats error")
            return error_response(500, str(e))
        return ChatListResponse(chats=[Chat(**chat) for chat in chats])

    def create_chat(self, request: CreateChatRequest):
        try:
            chat = self.store.create_chat(request.title)
        except Exception as e:
            logger.exception("Create chat error")
            return error_response(500, str(e))
        return ChatResponse(chat=Chat(**chat))

    def list_messages(self, chat_id: str):
        """Messages of one chat, oldest first."""
        try:
            messages = self.store.list_messages(chat_id)
        except ChatNotFoundError as e:
            return error_response(404, str(e))
        except Exception as e:
            logger.exception("List messages error")
            return error_response(500, str(e))
        return MessageListResponse(messages=[Message(**message) for message in messages])

    def delete_chat(self, chat_id: str):
        """Delete a chat and its messages. Unknown ids succeed as well."""
        if not chat_id.strip():
            return error_response(400, "Chat ID is required")
        try:
            self.store.delete_chat(chat_id)
        except Exception as e:
            logger.exception("Delete chat error")
            return error_response(500, str(e))
        return DeleteResponse(message="Chat deleted.")


def create_chat_router(settings: Settings, store: ChatStore) -> APIRouter:
    """Create and return the chat history router."""
    return ChatRoutes(settings, store).router
