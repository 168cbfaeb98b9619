# core/token_counter.py
"""
Token estimation for context budgeting.

Counts are estimates used to keep a context bundle under budget. A tiktoken
encoder is used when one can be loaded; otherwise a CJK-aware word heuristic
is applied.
"""

from __future__ import annotations

import functools
import math
import re

import structlog
import tiktoken

from config import settings

logger = structlog.get_logger(__name__)

# CJK Unified Ideographs, Extension A and Compatibility Ideographs
_CJK_PATTERN = re.compile("[\u4e00-\u9fff\u3400-\u4dbf\uf900-\ufaff]")

CJK_TOKENS_PER_CHAR = 1.5
TOKENS_PER_WORD = 1.3


@functools.lru_cache(maxsize=settings.TOKENIZER_CACHE_SIZE)
def _get_tokenizer(model_name: str) -> tiktoken.Encoding | None:
    """
    Gets a tiktoken encoder for the given model name, with caching.
    Tries model-specific encoding, then a default, then returns None.
    """
    try:
        try:
            encoder = tiktoken.encoding_for_model(model_name)
        except KeyError:
            logger.debug(
                "No direct tiktoken encoding for model. Using default encoding.",
                model=model_name,
                encoding=settings.TIKTOKEN_DEFAULT_ENCODING,
            )
            encoder = tiktoken.get_encoding(settings.TIKTOKEN_DEFAULT_ENCODING)
        logger.debug(
            "Tokenizer found and cached.", model=model_name, encoding=encoder.name
        )
        return encoder
    except Exception as e:
        logger.warning(
            "Could not load a tiktoken encoder. Token counting falls back to the word heuristic.",
            model=model_name,
            error=str(e),
        )
        return None


def estimate_tokens_heuristic(text: str) -> int:
    """Estimate tokens as CJK characters x 1.5 plus other words x 1.3, rounded up."""
    if not text:
        return 0
    cjk_count = len(_CJK_PATTERN.findall(text))
    word_count = len(_CJK_PATTERN.sub(" ", text).split())
    return math.ceil(cjk_count * CJK_TOKENS_PER_CHAR + word_count * TOKENS_PER_WORD)


def count_tokens(text: str, model_name: str | None = None) -> int:
    """
    Counts the number of tokens in a string.
    Uses tiktoken with caching, and the heuristic when no encoder is available.
    """
    if not text:
        return 0
    if settings.TOKEN_COUNTER_MODE == "heuristic":
        return estimate_tokens_heuristic(text)

    encoder = _get_tokenizer(model_name or settings.TOKENIZER_MODEL)
    if encoder is None:
        return estimate_tokens_heuristic(text)
    return len(encoder.encode(text, allowed_special="all"))
