#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Shared fixtures.
"""
import pytest

from config.settings import Settings
from services.chat_store import ChatStore


REVIEW_CSV = (
    "id,title,content,rating,author,date,helpful_votes,verified_purchase\n"
    "r-1,Earbuds X,Great noise cancelling: very quiet,5,Alice,2024-03-02,12,true\n"
    "r-2,Earbuds X,Battery lasts all day,4.5,Bob,2024-03-15,3,false\n"
    "r-3,,Case is too big,,,not-a-date,,\n"
)


@pytest.fixture
def mock_settings(tmp_path):
    """Settings pointing every store at the test's temporary directory."""
    return Settings(
        chroma_dir=tmp_path / "chroma",
        collection="test_collection",
        embedding_model="text-embedding-3-small",
        embedding_dim=1536,
        llm_model="gpt-4o-mini",
        retrieval_k=3,
        database_path=tmp_path / "test.db",
        reviews_csv=tmp_path / "review.csv",
        chunk_size=500,
        chunk_overlap=50,
        index_batch_size=2,
        system_prompt="Test system prompt\n<context>\n{context}\n</context>",
    )


@pytest.fixture
def store(mock_settings):
    """Initialized ChatStore on a temporary database."""
    chat_store = ChatStore(mock_settings)
    chat_store.init_db()
    return chat_store


@pytest.fixture
def review_csv(mock_settings):
    """Small review CSV written to the configured path."""
    mock_settings.reviews_csv.write_text(REVIEW_CSV, encoding="utf-8")
    return mock_settings.reviews_csv
