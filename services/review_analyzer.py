#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Review analysis: retrieve review chunks, ask the LLM for a JSON summary,
and map it onto the analysis card.
"""
import math
from typing import Any, Dict, List, Tuple
from langchain_core.documents import Document

from config.settings import Settings
from models.schemas import AnalysisData, ReviewComment
from services.llm import LLMService
from services.vector_store import VectorStoreService
from utils.logger import get_logger
from utils.text_processing import format_docs

logger = get_logger(__name__)

DEFAULT_PRODUCT_NAME = "검색된 상품"
DEFAULT_AVERAGE_RATING = 4.5
DEFAULT_SUMMARY = "분석 결과를 요약합니다."


class ReviewAnalyzer:
    """Runs the retrieval and analysis chain for one question."""

    def __init__(self, settings: Settings, vector_service: VectorStoreService, llm_service: LLMService):
        self.settings = settings
        self.vector_service = vector_service
        self.llm_service = llm_service

    def analyze(self, query: str) -> Tuple[AnalysisData, List[Document]]:
        """
        Analyze the reviews relevant to ``query``.

        Returns:
            Tuple of (analysis card, retrieved documents)
        """
        # Fail on a missing API key before paying for retrieval.
        self.llm_service.get_llm()

        documents = self.vector_service.similarity_search(query, self.settings.retrieval_k)
        context = format_docs(documents)

        parsed = self.llm_service.generate_analysis(query, context)
        analysis = self.build_analysis(parsed, len(documents))
        logger.info("Built analysis for '%s' from %d chunks", analysis.product_name, len(documents))
        return analysis, documents

    def build_analysis(self, parsed: Dict[str, Any], total_reviews: int) -> AnalysisData:
        """Map the model's JSON onto AnalysisData, filling empty fields with defaults."""
        return AnalysisData(
            product_name=_as_text(parsed.get("productName")) or DEFAULT_PRODUCT_NAME,
            total_reviews=total_reviews,
            average_rating=_as_rating(parsed.get("averageRating")),
            summary=_as_text(parsed.get("summary")) or DEFAULT_SUMMARY,
            pros=_as_text_list(parsed.get("pros")),
            cons=_as_text_list(parsed.get("cons")),
            user_reviews_comparison=_as_comments(parsed.get("userReviewsComparison")),
        )


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _as_rating(value: Any):
    # bool is an int subclass; treat it as garbage
    if isinstance(value, bool) or not value:
        return DEFAULT_AVERAGE_RATING
    if isinstance(value, (int, float)):
        rating = float(value)
    else:
        text = str(value).strip()
        try:
            rating = float(text)
        except ValueError:
            return text or DEFAULT_AVERAGE_RATING
    # NaN and infinity are not valid JSON on the wire
    if not math.isfinite(rating):
        return DEFAULT_AVERAGE_RATING
    return rating


def _as_text_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [_as_text(item) for item in value if _as_text(item)]


def _as_comments(value: Any) -> List[ReviewComment]:
    if not isinstance(value, list):
        return []

    comments = []
    for item in value:
        if not isinstance(item, dict):
            continue
        comment = _as_text(item.get("comment"))
        if not comment:
            continue
        comments.append(ReviewComment(author=_as_text(item.get("author")) or "익명", comment=comment))
    return comments
