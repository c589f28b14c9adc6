#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Pydantic models for API request/response schemas.
"""
from typing import List, Optional, Dict, Any, Literal, Union
from pydantic import BaseModel, Field, field_validator, ConfigDict
from pydantic.alias_generators import to_camel


DEFAULT_CHAT_TITLE = "새 대화"
MAX_CHAT_TITLE_LENGTH = 100


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SearchRequest(CamelModel):
    """Request model for a review search inside an optional chat."""

    query: Optional[str] = Field(None, description="The question about a product")
    chat_id: Optional[str] = Field(None, description="Chat to record the exchange in")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "query": "노이즈 캔슬링 이어폰 착용감 어때요?",
                "chatId": "5f0c7a2e-2b1e-4c53-9a57-0f7d8f0c1b2a",
            }
        },
    )


class ReviewComment(CamelModel):
    """A representative review quoted in the analysis card."""

    author: str = Field(..., description="Review author")
    comment: str = Field(..., description="Summary of the review")


class AnalysisData(CamelModel):
    """Structured analysis card produced from the retrieved reviews."""

    product_name: str = Field(..., description="Display name of the analysed product")
    total_reviews: int = Field(..., ge=0, description="Number of reviews the analysis is based on")
    average_rating: Union[float, str] = Field(..., description="Average rating estimated from the reviews")
    summary: str = Field(..., description="Overall summary")
    pros: List[str] = Field(default_factory=list, description="Main strengths")
    cons: List[str] = Field(default_factory=list, description="Main weaknesses")
    user_reviews_comparison: List[ReviewComment] = Field(
        default_factory=list, description="Representative user reviews"
    )


class AIResponse(CamelModel):
    """Assistant reply returned to the chat UI."""

    content: str = Field(..., description="Assistant message text")
    analysis_data: Optional[AnalysisData] = Field(None, description="Analysis card")


class SearchResponse(CamelModel):
    """Response model for a review search."""

    success: bool = True
    results: List[str] = Field(default_factory=list, description="Retrieved review chunks")
    ai_response: AIResponse = Field(..., description="Assistant reply")
    message_id: Optional[str] = Field(None, description="Id of the stored assistant message")


class CreateChatRequest(BaseModel):
    """Request model for creating a chat."""

    title: Optional[str] = Field(
        None, validate_default=True, description="Chat title, usually the first question"
    )

    @field_validator("title")
    @classmethod
    def normalize_title(cls, v):
        """Strip the title, default it when empty and cap its length."""
        v = (v or "").strip()
        if not v:
            return DEFAULT_CHAT_TITLE
        return v[:MAX_CHAT_TITLE_LENGTH]


class Chat(BaseModel):
    """A stored chat."""

    id: str
    title: str
    created_at: str
    updated_at: str


class Message(BaseModel):
    """A stored chat message, in the database's row format."""

    id: str
    chat_id: str
    role: Literal["user", "assistant"]
    content: str
    type: Literal["text", "analysis"] = "text"
    analysis_data: Optional[Dict[str, Any]] = None
    created_at: str


class ChatResponse(BaseModel):
    success: bool = True
    chat: Chat


class ChatListResponse(BaseModel):
    success: bool = True
    chats: List[Chat]


class MessageListResponse(BaseModel):
    success: bool = True
    messages: List[Message]


class IndexResponse(BaseModel):
    """Result of an indexing run."""

    success: bool = True
    message: str
    chunks: int = Field(..., ge=0, description="Chunks written to the vector store")
    reviews: int = Field(..., ge=0, description="Review rows synced to the database")


class DeleteResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """Error envelope shared by every endpoint."""

    success: bool = False
    error: str


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(..., description="Service status")
    collection: Optional[str] = Field(None, description="Vector collection name")
    vectors: Optional[int] = Field(None, description="Number of vectors in collection")
    chats: Optional[int] = Field(None, description="Number of stored chats")
    retrieval_k: Optional[int] = Field(None, description="Default retrieval count")
    embedding_model: Optional[str] = Field(None, description="Embedding model name")
    llm_model: Optional[str] = Field(None, description="LLM model name")
    error: Optional[str] = Field(None, description="Error message if status is error")
