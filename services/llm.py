#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
LLM service for the review analysis chain.
"""
import os
from typing import Any, Dict, Optional
from langchain_openai import ChatOpenAI
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.runnables import Runnable

from config.settings import Settings
from utils.errors import AnalysisParseError, ConfigurationError
from utils.logger import get_logger
from utils.text_processing import parse_json_output

logger = get_logger(__name__)


class LLMService:
    """Service for managing language model operations."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._llm: Optional[ChatOpenAI] = None

    def get_llm(self) -> ChatOpenAI:
        """Get or create a ChatOpenAI instance in JSON output mode."""
        if self._llm is None:
            if not os.getenv("OPENAI_API_KEY"):
                raise ConfigurationError(
                    "OPENAI_API_KEY is missing. RAG LLM requires an OpenAI API key."
                )

            self._llm = ChatOpenAI(
                model=self.settings.llm_model,
                model_kwargs={"response_format": {"type": "json_object"}},
            )
        return self._llm

    def create_prompt(self) -> ChatPromptTemplate:
        """System prompt with the review context, followed by the user question."""
        return ChatPromptTemplate.from_messages([
            ("system", self.settings.system_prompt),
            ("human", "{input}"),
        ])

    def build_chain(self) -> Runnable:
        """prompt | llm | string output, expecting {"context", "input"}."""
        return self.create_prompt() | self.get_llm() | StrOutputParser()

    def generate_analysis(self, question: str, context: str) -> Dict[str, Any]:
        """
        Ask the model for a review analysis and parse its JSON answer.

        Args:
            question: User's question
            context: Retrieved review chunks formatted as one block

        Returns:
            The decoded JSON object

        Raises:
            ConfigurationError: OPENAI_API_KEY is not set
            AnalysisParseError: the answer is not a JSON object
        """
        chain = self.build_chain()
        raw = chain.invoke({"context": context, "input": question})
        try:
            return parse_json_output(raw)
        except AnalysisParseError:
            logger.error("Failed to parse JSON from LLM: %s", raw)
            raise
