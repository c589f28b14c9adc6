#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Text processing utilities for the review chat application.
"""
import json
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from langchain_core.documents import Document

from utils.errors import AnalysisParseError

CONTEXT_SEPARATOR = "\n\n---\n\n"

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def format_docs(documents: List[Document]) -> str:
    """
    Join retrieved review chunks into a single context block for the LLM.

    Args:
        documents: Retrieved LangChain documents

    Returns:
        Chunk texts separated by a horizontal rule
    """
    return CONTEXT_SEPARATOR.join(doc.page_content for doc in documents)


def parse_json_output(raw: str) -> Dict[str, Any]:
    """
    Parse the model's JSON answer.

    A surrounding markdown code fence is tolerated; anything that does not
    decode to a JSON object raises AnalysisParseError.
    """
    text = (raw or "").strip()
    fenced = _FENCE_RE.match(text)
    if fenced:
        text = fenced.group(1)

    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        raise AnalysisParseError("LLM Output parsing failed.", raw=raw) from e

    if not isinstance(data, dict):
        raise AnalysisParseError("LLM Output parsing failed.", raw=raw)
    return data


def parse_key_value_lines(content: str) -> Dict[str, str]:
    """
    Parse ``key: value`` lines as produced by the CSV loader.

    Lines without the separator are ignored. Only the first ``": "`` splits,
    so values may contain further colons.
    """
    data: Dict[str, str] = {}
    for line in content.split("\n"):
        parts = line.split(": ")
        if len(parts) > 1:
            data[parts[0].strip()] = ": ".join(parts[1:]).strip()
    return data


def parse_leading_int(value: Optional[str]) -> Optional[int]:
    """Return the integer prefix of ``value`` ("4.5" -> 4), or None."""
    if not value:
        return None
    match = _LEADING_INT_RE.match(value)
    return int(match.group(1)) if match else None


def to_iso_utc(value: Optional[str], default: Optional[datetime] = None) -> str:
    """
    Normalize a date string to ISO-8601 in UTC.

    Naive values are treated as UTC. Missing or unparseable values fall back
    to ``default`` (now, when not given).
    """
    parsed = None
    if value:
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            parsed = None

    if parsed is None:
        parsed = default or datetime.now(timezone.utc)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc).isoformat()


def utc_now_iso() -> str:
    """Current time as an ISO-8601 UTC string."""
    return datetime.now(timezone.utc).isoformat()
