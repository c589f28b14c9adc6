#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
API routes for review search, indexing and health.
"""
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from models.schemas import (
    AIResponse, ErrorResponse, HealthResponse, IndexResponse, SearchRequest, SearchResponse
)
from services.chat_store import ChatStore
from services.indexer import ReviewIndexer
from services.llm import LLMService
from services.review_analyzer import ReviewAnalyzer
from services.vector_store import VectorStoreService
from utils.errors import ChatNotFoundError, ConfigurationError
from utils.logger import get_logger
from config.settings import Settings

logger = get_logger(__name__)

ANALYSIS_DONE_MESSAGE = "요청하신 상품의 리뷰 분석이 완료되었습니다. 자세한 결과는 아래를 확인해주세요."
MISSING_API_KEY_MESSAGE = "OpenAI API 키가 설정되지 않았습니다. .env 파일에 OPENAI_API_KEY를 추가해주세요."

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def error_response(status_code: int, message: str) -> JSONResponse:
    """JSON error envelope shared by every endpoint."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


class RAGRoutes:
    """Review search, indexing and health routes."""

    def __init__(self, settings: Settings, store: ChatStore):
        self.settings = settings
        self.store = store
        self.vector_service = VectorStoreService(settings)
        self.llm_service = LLMService(settings)
        self.analyzer = ReviewAnalyzer(settings, self.vector_service, self.llm_service)
        self.indexer = ReviewIndexer(settings, self.vector_service, store)
        self.router = APIRouter()
        self._setup_routes()

    def _setup_routes(self):
        """Setup API routes."""
        self.router.get("/health", response_model=HealthResponse)(self.health_check)
        self.router.post(
            "/api/search", response_model=SearchResponse, responses=ERROR_RESPONSES
        )(self.search)
        self.router.post(
            "/api/index-data", response_model=IndexResponse, responses=ERROR_RESPONSES
        )(self.index_data)

    def health_check(self) -> HealthResponse:
        """Health check endpoint."""
        try:
            self.vector_service.get_vectorstore()
            vector_count = self.vector_service.get_collection_count()
            chat_count = self.store.count_chats()

            return HealthResponse(
                status="ok",
                collection=self.settings.collection,
                vectors=vector_count,
                chats=chat_count,
                retrieval_k=self.settings.retrieval_k,
                embedding_model=self.settings.embedding_model,
                llm_model=self.settings.llm_model,
            )

        except Exception as e:
            logger.exception("Health check failed")
            return HealthResponse(
                status="error",
                error=str(e)
            )

    def search(self, request: SearchRequest):
        """Analyze the reviews relevant to a question and record the exchange."""
        query = request.query
        if not query or not query.strip():
            return error_response(400, "Query is required")

        chat_id = request.chat_id
        try:
            if chat_id:
                if self.store.get_chat(chat_id) is None:
                    raise ChatNotFoundError(chat_id)
                self.store.add_message(chat_id, "user", query, "text")

            analysis, documents = self.analyzer.analyze(query)

            message_id = None
            if chat_id:
                message_id = self.store.add_message(
                    chat_id,
                    "assistant",
                    ANALYSIS_DONE_MESSAGE,
                    "analysis",
                    analysis.model_dump(by_alias=True),
                )
                self.store.touch_chat(chat_id)

            return SearchResponse(
                results=[doc.page_content for doc in documents],
                ai_response=AIResponse(content=ANALYSIS_DONE_MESSAGE, analysis_data=analysis),
                message_id=message_id,
            )

        except ChatNotFoundError as e:
            return error_response(404, str(e))
        except ConfigurationError:
            logger.error("Search API error: OPENAI_API_KEY is missing")
            return error_response(500, MISSING_API_KEY_MESSAGE)
        except Exception as e:
            logger.exception("Search API error")
            return error_response(500, str(e))

    def index_data(self):
        """Index the review CSV into the vector store and the reviews table."""
        try:
            result = self.indexer.run()
        except Exception as e:
            logger.exception("Indexing error")
            return error_response(500, str(e))

        return IndexResponse(
            message=(
                f"{result.chunks}개의 데이터 조각이 벡터 저장소에 저장되고 "
                f"{result.reviews}개의 리뷰가 데이터베이스에 동기화되었습니다."
            ),
            chunks=result.chunks,
            reviews=result.reviews,
        )


def create_router(settings: Settings, store: ChatStore) -> APIRouter:
    """Create and return the search/indexing router."""
    rag_routes = RAGRoutes(settings, store)
    return rag_routes.router
