#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
FastAPI review chat backend (LangChain + Chroma + OpenAI + SQLite)
- Retrieves product-review chunks from a local Chroma collection
- Asks an OpenAI chat model for a JSON analysis card of those reviews
- Stores chats and messages in SQLite so the chat history can be reloaded
- Swagger UI available at /docs (default FastAPI)

ENV (.env) keys (examples):
    # OpenAI
    OPENAI_API_KEY=sk-...
    LLM_MODEL=gpt-5-nano
    EMBEDDING_MODEL=text-embedding-3-small

    # Stores
    CHROMA_PERSIST_DIR=.chroma/reviews
    COLLECTION_NAME=reviews
    DATABASE_PATH=data/reviews.db
    REVIEWS_CSV=samples/review.csv

    # Retrieval
    RETRIEVAL_K=3

Run:
    pip install -e .
    uvicorn app:app --reload --port 8080
"""
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from api.chat_routes import create_chat_router
from api.routes import create_router, error_response
from config.settings import Settings, get_settings
from services.chat_store import ChatStore
from utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies with the shared error envelope."""
    details = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    )
    logger.warning("Invalid request to %s: %s", request.url.path, details)
    return error_response(400, details or "Invalid request")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    # Load settings
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    # Tables are created on first use
    store = ChatStore(settings)

    # Create FastAPI app
    app = FastAPI(
        title="Review Insight Chat API (LangChain + Chroma + OpenAI)",
        description="RAG chat over product reviews with structured analysis cards",
        version="1.0.0"
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Include routes
    app.include_router(create_router(settings, store))
    app.include_router(create_chat_router(settings, store))

    logger.info("Application ready (collection=%s, model=%s)", settings.collection, settings.llm_model)
    return app


# Create the app instance
app = create_app()

# Run: uvicorn app:app --reload --port 8080
