#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Exceptions raised by the review chat services.
"""


class ReviewChatError(Exception):
    """Base exception for the review chat backend."""
    pass


class ConfigurationError(ReviewChatError):
    """A required credential or setting is missing."""
    pass


class AnalysisParseError(ReviewChatError):
    """The LLM returned something that is not a JSON object."""

    def __init__(self, message: str, raw: str = ""):
        super().__init__(message)
        self.raw = raw


class StorageError(ReviewChatError):
    """The relational store rejected a write."""
    pass


class ChatNotFoundError(ReviewChatError):
    """No chat exists with the requested id."""

    def __init__(self, chat_id: str):
        super().__init__(f"Chat not found: {chat_id}")
        self.chat_id = chat_id
