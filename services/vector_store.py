#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Vector store service for managing review embeddings and retrieval.
"""
from typing import List, Optional
from langchain_openai import OpenAIEmbeddings
from langchain_community.vectorstores import Chroma
from langchain_core.documents import Document
from langchain_core.vectorstores import VectorStoreRetriever

from config.settings import Settings
from utils.logger import get_logger

logger = get_logger(__name__)


class VectorStoreService:
    """Service for managing vector store operations."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._embeddings: Optional[OpenAIEmbeddings] = None
        self._vectorstore: Optional[Chroma] = None

    def _get_embeddings(self) -> OpenAIEmbeddings:
        """Get or create OpenAI embeddings instance."""
        if self._embeddings is None:
            if self.settings.embedding_dim:
                self._embeddings = OpenAIEmbeddings(
                    model=self.settings.embedding_model,
                    dimensions=self.settings.embedding_dim
                )
            else:
                self._embeddings = OpenAIEmbeddings(
                    model=self.settings.embedding_model
                )
        return self._embeddings

    def get_vectorstore(self) -> Chroma:
        """Get or create Chroma vector store instance."""
        if self._vectorstore is None:
            embeddings = self._get_embeddings()
            self._vectorstore = Chroma(
                collection_name=self.settings.collection,
                embedding_function=embeddings,
                persist_directory=str(self.settings.chroma_dir),
            )
            logger.info("Opened Chroma collection '%s' at %s",
                        self.settings.collection, self.settings.chroma_dir)
        return self._vectorstore

    def get_retriever(self, k: Optional[int] = None) -> VectorStoreRetriever:
        """Top-k similarity retriever over the review collection."""
        vectorstore = self.get_vectorstore()
        return vectorstore.as_retriever(
            search_kwargs={"k": k or self.settings.retrieval_k}
        )

    def similarity_search(self, query: str, k: Optional[int] = None) -> List[Document]:
        """
        Retrieve the review chunks most similar to the query.

        Args:
            query: Search query
            k: Number of results to return (defaults to the configured retrieval_k)

        Returns:
            Retrieved documents, most similar first
        """
        retriever = self.get_retriever(k)
        documents = retriever.invoke(query)
        logger.info("Retrieved %d review chunks", len(documents))
        return documents

    def add_documents_in_batches(self, documents: List[Document], batch_size: int) -> int:
        """
        Add documents to the collection in consecutive batches.

        Args:
            documents: Chunks to embed and store
            batch_size: Maximum number of chunks per upsert call

        Returns:
            Number of documents written
        """
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")

        vectorstore = self.get_vectorstore()
        for start in range(0, len(documents), batch_size):
            batch = documents[start:start + batch_size]
            vectorstore.add_documents(batch)
            logger.info("Indexed batch %d (%d chunks)", start // batch_size + 1, len(batch))
        return len(documents)

    def get_collection_count(self) -> Optional[int]:
        """Get the number of vectors in the collection."""
        try:
            vectorstore = self.get_vectorstore()
            return vectorstore._collection.count()  # type: ignore[attr-defined]
        except Exception:
            logger.warning("Could not count vectors in '%s'", self.settings.collection, exc_info=True)
            return None
