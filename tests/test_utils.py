#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Tests for utility functions.
"""
import logging
from datetime import datetime, timezone

import pytest
from langchain_core.documents import Document
from utils.errors import AnalysisParseError, ChatNotFoundError
from utils.logger import configure_logging, get_logger
from utils.text_processing import (
    CONTEXT_SEPARATOR, format_docs, parse_json_output, parse_key_value_lines,
    parse_leading_int, to_iso_utc
)


def test_format_docs():
    """Chunks are joined with the separator, in retrieval order."""
    docs = [Document(page_content="first"), Document(page_content="second")]

    result = format_docs(docs)

    assert result == "first" + CONTEXT_SEPARATOR + "second"
    assert format_docs([]) == ""


def test_parse_json_output():
    assert parse_json_output('{"productName": "X", "pros": []}') == {"productName": "X", "pros": []}


def test_parse_json_output_code_fence():
    raw = '```json\n{"summary": "ok"}\n```'
    assert parse_json_output(raw) == {"summary": "ok"}


@pytest.mark.parametrize("raw", ["not json", "[1, 2]", "", '"text"'])
def test_parse_json_output_invalid(raw):
    with pytest.raises(AnalysisParseError) as exc_info:
        parse_json_output(raw)

    assert str(exc_info.value) == "LLM Output parsing failed."
    assert exc_info.value.raw == raw


def test_parse_key_value_lines():
    """Test CSV-loader row parsing."""
    content = "id: r-1\ntitle: Earbuds\ncontent: Note: it is loud\nbroken line\nrating: 5"

    data = parse_key_value_lines(content)

    assert data == {
        "id": "r-1",
        "title": "Earbuds",
        "content": "Note: it is loud",
        "rating": "5",
    }


def test_parse_key_value_lines_empty_value():
    # "key: " has an empty value after the separator
    assert parse_key_value_lines("author: ") == {"author": ""}
    assert parse_key_value_lines("author:") == {}


def test_parse_leading_int():
    assert parse_leading_int("5") == 5
    assert parse_leading_int("4.5") == 4
    assert parse_leading_int(" 12 votes") == 12
    assert parse_leading_int("abc") is None
    assert parse_leading_int("") is None
    assert parse_leading_int(None) is None


def test_to_iso_utc():
    assert to_iso_utc("2024-03-02") == "2024-03-02T00:00:00+00:00"
    assert to_iso_utc("2024-03-02T09:00:00+09:00") == "2024-03-02T00:00:00+00:00"
    assert to_iso_utc("2024-03-02T00:00:00Z") == "2024-03-02T00:00:00+00:00"


def test_to_iso_utc_fallback():
    fallback = datetime(2020, 1, 1, tzinfo=timezone.utc)
    assert to_iso_utc("not-a-date", default=fallback) == "2020-01-01T00:00:00+00:00"
    assert to_iso_utc(None, default=fallback) == "2020-01-01T00:00:00+00:00"
    # Without a default the current time is used
    assert to_iso_utc(None).endswith("+00:00")


def test_chat_not_found_error_message():
    error = ChatNotFoundError("abc")
    assert error.chat_id == "abc"
    assert "abc" in str(error)


def test_get_logger_single_handler():
    logger = get_logger("tests.logger.single")
    same = get_logger("tests.logger.single")

    assert logger is same
    assert len(logger.handlers) == 1
    assert logger.propagate is False


def test_configure_logging_updates_existing_loggers():
    logger = get_logger("tests.logger.level")

    configure_logging("DEBUG")
    assert logger.level == logging.DEBUG

    configure_logging("not-a-level")
    assert logger.level == logging.INFO
