#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Review INGEST script: reads config from .env, embeds the review CSV into the
local Chroma collection and syncs the rows into the SQLite reviews table.

ENV (.env) keys (examples):
    OPENAI_API_KEY=sk-...
    EMBEDDING_MODEL=text-embedding-3-small
    REVIEWS_CSV=samples/review.csv
    CHROMA_PERSIST_DIR=.chroma/reviews
    COLLECTION_NAME=reviews
    DATABASE_PATH=data/reviews.db

Usage:
    python -m embed.embedding [--csv samples/review.csv]
"""
import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

from config.settings import get_settings
from services.chat_store import ChatStore
from services.indexer import ReviewIndexer
from services.vector_store import VectorStoreService
from utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Index the review CSV into Chroma and SQLite")
    parser.add_argument("--csv", type=Path, default=None, help="Review CSV (overrides REVIEWS_CSV)")
    args = parser.parse_args(argv)

    settings = get_settings()
    if args.csv is not None:
        settings = settings.model_copy(update={"reviews_csv": args.csv.resolve()})
    configure_logging(settings.log_level)

    if not os.getenv("OPENAI_API_KEY"):
        logger.error("OPENAI_API_KEY is not set (load via .env or export)")
        return 1

    store = ChatStore(settings)
    store.init_db()
    indexer = ReviewIndexer(settings, VectorStoreService(settings), store)

    try:
        result = indexer.run()
    except FileNotFoundError as e:
        logger.error("%s", e)
        return 1

    logger.info("[DONE] %d chunks into '%s', %d reviews into %s",
                result.chunks, settings.collection, result.reviews, settings.database_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
