#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Configuration settings for the review chat application.
"""
import os
from pathlib import Path
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict
from dotenv import load_dotenv


# Literal braces are doubled so ChatPromptTemplate keeps them as text.
DEFAULT_SYSTEM_PROMPT = """당신은 쇼핑 리뷰 분석 전문가입니다. 제공된 리뷰 데이터를 바탕으로 사용자의 질문에 JSON 형식으로 정확히 답변하세요.
반드시 아래 JSON 구조(schema)만 출력해야 하며, 추가적인 마크다운 구문이나 인사말은 생략하세요.

[JSON 구조]
{{
  "productName": "사용자의 질문을 바탕으로 지어낸 세련된 상품명 (예: 이어폰 검색시 'Premium Wireless Earbuds Pro', 헤드셋 검색시 'Gaming Headset Elite')",
  "averageRating": 리뷰들을 분석해 계산한 평균 평점 (예: 4.5의 소수점 포함 숫자),
  "summary": "전체 리뷰 및 질문에 대한 꼼꼼한 종합 요약 (300자 내외)",
  "pros": ["주요 장점 1", "주요 장점 2", "주요 장점 3"],
  "cons": ["주요 단점 1", "주요 단점 2"],
  "userReviewsComparison": [
    {{ "author": "작성자 이름", "comment": "핵심 참고 리뷰 내용 요약" }},
    {{ "author": "작성자 이름", "comment": "핵심 참고 리뷰 내용 요약" }}
  ]
}}

<context>
{context}
</context>"""


class Settings(BaseModel):
    """Application settings with Pydantic validation."""

    # Vector store settings
    chroma_dir: Path = Field(description="Chroma persistence directory")
    collection: str = Field(description="Chroma collection name")

    # Embedding settings
    embedding_model: str = Field(description="OpenAI embedding model")
    embedding_dim: Optional[int] = Field(None, description="Embedding dimensions")

    # LLM settings
    llm_model: str = Field(description="OpenAI chat model")

    # Retrieval settings
    retrieval_k: int = Field(3, gt=0, description="Number of review chunks to retrieve")

    # Relational store
    database_path: Path = Field(description="SQLite database file for chats, messages and reviews")

    # Indexing settings
    reviews_csv: Path = Field(description="CSV file with the review rows to index")
    chunk_size: int = Field(500, gt=0, description="Characters per indexed chunk")
    chunk_overlap: int = Field(50, ge=0, description="Characters shared by neighbouring chunks")
    index_batch_size: int = Field(50, gt=0, description="Chunks per vector store upsert")

    # HTTP / logging
    cors_origins: List[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins")
    log_level: str = Field("INFO", description="Application log level")

    # System prompt settings
    system_prompt: str = Field(DEFAULT_SYSTEM_PROMPT, description="System prompt for the review analysis")

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @classmethod
    def from_env(cls, env_file: str = ".env") -> "Settings":
        """Load settings from environment variables."""
        # Load environment file
        env_path = Path(env_file)
        if env_path.exists():
            load_dotenv(env_path)
        elif Path(".env").exists():
            load_dotenv(".env")

        # Parse environment variables
        chroma_dir = Path(os.getenv("CHROMA_PERSIST_DIR", ".chroma/reviews")).resolve()
        collection = os.getenv("COLLECTION_NAME", "reviews")
        embedding_model = os.getenv("EMBEDDING_MODEL", "text-embedding-3-small")

        dim_val = os.getenv("EMBEDDING_DIM")
        embedding_dim = int(dim_val) if dim_val and dim_val.isdigit() else None

        llm_model = os.getenv("LLM_MODEL", "gpt-5-nano")
        retrieval_k = int(os.getenv("RETRIEVAL_K", "3"))

        database_path = Path(os.getenv("DATABASE_PATH", "data/reviews.db")).resolve()
        reviews_csv = Path(os.getenv("REVIEWS_CSV", "samples/review.csv")).resolve()
        chunk_size = int(os.getenv("CHUNK_SIZE", "500"))
        chunk_overlap = int(os.getenv("CHUNK_OVERLAP", "50"))
        index_batch_size = int(os.getenv("INDEX_BATCH_SIZE", "50"))

        cors_origins = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]
        log_level = os.getenv("LOG_LEVEL", "INFO").upper()

        system_prompt = os.getenv("SYSTEM_PROMPT", DEFAULT_SYSTEM_PROMPT)

        return cls(
            chroma_dir=chroma_dir,
            collection=collection,
            embedding_model=embedding_model,
            embedding_dim=embedding_dim,
            llm_model=llm_model,
            retrieval_k=retrieval_k,
            database_path=database_path,
            reviews_csv=reviews_csv,
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            index_batch_size=index_batch_size,
            cors_origins=cors_origins or ["*"],
            log_level=log_level,
            system_prompt=system_prompt,
        )


def get_settings() -> Settings:
    """Get application settings."""
    env_file = os.getenv("ENV_FILE", ".env")
    return Settings.from_env(env_file)
