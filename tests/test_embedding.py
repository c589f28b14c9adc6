#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Tests for the review indexing command.
"""
import os
import pytest
from unittest.mock import patch

from embed.embedding import main
from services.chat_store import ChatStore
from services.indexer import IndexResult


@pytest.fixture
def patched_settings(mock_settings):
    with patch('embed.embedding.get_settings', return_value=mock_settings):
        yield mock_settings


@patch.dict(os.environ, {}, clear=True)
def test_main_requires_api_key(patched_settings):
    with patch('embed.embedding.ReviewIndexer') as mock_indexer:
        assert main([]) == 1
        mock_indexer.assert_not_called()


@patch.dict(os.environ, {"OPENAI_API_KEY": "test-key"})
@patch('embed.embedding.VectorStoreService')
def test_main_missing_csv(mock_vector, patched_settings, tmp_path):
    assert main(["--csv", str(tmp_path / "missing.csv")]) == 1
    mock_vector.return_value.add_documents_in_batches.assert_not_called()


@patch.dict(os.environ, {"OPENAI_API_KEY": "test-key"})
@patch('embed.embedding.VectorStoreService')
@patch('embed.embedding.ReviewIndexer')
def test_main_csv_override(mock_indexer, mock_vector, patched_settings, tmp_path):
    csv_path = tmp_path / "other.csv"
    mock_indexer.return_value.run.return_value = IndexResult(chunks=4, reviews=2)

    assert main(["--csv", str(csv_path)]) == 0

    settings = mock_indexer.call_args[0][0]
    assert settings.reviews_csv == csv_path.resolve()
    assert settings.collection == patched_settings.collection
    mock_vector.assert_called_once_with(settings)
    mock_indexer.return_value.run.assert_called_once_with()


@patch.dict(os.environ, {"OPENAI_API_KEY": "test-key"})
@patch('embed.embedding.VectorStoreService')
def test_main_syncs_reviews(mock_vector, patched_settings, review_csv):
    mock_vector.return_value.add_documents_in_batches.return_value = 3

    assert main([]) == 0

    mock_vector.return_value.add_documents_in_batches.assert_called_once()
    assert ChatStore(patched_settings).count_reviews() == 3
