#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Review indexing: CSV rows -> chunks -> Chroma, plus a copy of every row in
the reviews table.
"""
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from langchain_community.document_loaders.csv_loader import CSVLoader
from langchain_core.documents import Document
from langchain_text_splitters import RecursiveCharacterTextSplitter

from config.settings import Settings
from services.chat_store import ChatStore
from services.vector_store import VectorStoreService
from utils.logger import get_logger
from utils.text_processing import parse_key_value_lines, parse_leading_int, to_iso_utc

logger = get_logger(__name__)

DEFAULT_REVIEW_TITLE = "알 수 없는 상품"
DEFAULT_REVIEW_AUTHOR = "익명"


@dataclass
class IndexResult:
    chunks: int
    reviews: int


def parse_review_document(content: str) -> Dict[str, Any]:
    """
    Turn one CSV-loader row (``key: value`` lines) into a reviews table row.

    Args:
        content: page_content of a CSVLoader document

    Returns:
        Dict with every reviews column filled in
    """
    data = parse_key_value_lines(content)
    helpful_votes = parse_leading_int(data.get("helpful_votes"))

    return {
        "id": data.get("id") or str(uuid.uuid4()),
        "title": data.get("title") or DEFAULT_REVIEW_TITLE,
        "content": data.get("content") or content,
        "rating": parse_leading_int(data.get("rating")),
        "author": data.get("author") or DEFAULT_REVIEW_AUTHOR,
        "date": to_iso_utc(data.get("date")),
        "helpful_votes": helpful_votes if helpful_votes is not None else 0,
        "verified_purchase": data.get("verified_purchase") == "true",
    }


class ReviewIndexer:
    """Loads the review CSV into the vector store and the reviews table."""

    def __init__(self, settings: Settings, vector_service: VectorStoreService, store: ChatStore):
        self.settings = settings
        self.vector_service = vector_service
        self.store = store

    def load_documents(self) -> List[Document]:
        csv_path = self.settings.reviews_csv
        if not csv_path.exists():
            raise FileNotFoundError(f"Review CSV not found: {csv_path}")
        loader = CSVLoader(file_path=str(csv_path), encoding="utf-8")
        return loader.load()

    def split_documents(self, documents: List[Document]) -> List[Document]:
        splitter = RecursiveCharacterTextSplitter(
            chunk_size=self.settings.chunk_size,
            chunk_overlap=self.settings.chunk_overlap,
        )
        return splitter.split_documents(documents)

    def run(self, documents: Optional[List[Document]] = None) -> IndexResult:
        """
        Index every review row.

        Returns:
            IndexResult with the number of chunks embedded and rows synced
        """
        docs = documents if documents is not None else self.load_documents()
        logger.info("Loaded %d review rows", len(docs))

        split_docs = self.split_documents(docs)
        chunks = self.vector_service.add_documents_in_batches(
            split_docs, self.settings.index_batch_size
        )
        logger.info("Successfully indexed %d chunks to '%s'", chunks, self.settings.collection)

        rows = [parse_review_document(doc.page_content) for doc in docs]
        reviews = self.store.upsert_reviews(rows)
        logger.info("Successfully synced %d review rows to the database", reviews)

        return IndexResult(chunks=chunks, reviews=reviews)
