# config.py
"""Configuration settings for chapter context assembly.
Uses Pydantic BaseSettings for automatic environment variable loading.
"""

from __future__ import annotations

from typing import Literal

from dotenv import load_dotenv
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class ContextSettings(BaseSettings):
    """Full configuration for context assembly."""

    # Token Budget
    CONTEXT_TOTAL_BUDGET: int = 1_000_000
    CONTEXT_OUTPUT_RESERVE: int = 4_000
    CONTEXT_PROMPT_RESERVE: int = 2_000

    # Tier Priorities (higher = included first)
    L1_PRIORITY: int = 1000
    L2_PRIORITY: int = 800
    L3_PRIORITY: int = 600
    L4_PRIORITY: int = 400
    L5_PRIORITY: int = 200

    # Chapter Continuity
    PREV_CHAPTER_TAIL_LENGTH: int = 500

    # Token Counting
    TOKEN_COUNTER_MODE: Literal["tiktoken", "heuristic"] = "tiktoken"
    TOKENIZER_MODEL: str = "gpt-4o"
    TIKTOKEN_DEFAULT_ENCODING: str = "cl100k_base"
    TOKENIZER_CACHE_SIZE: int = 10

    # Logging & UI
    LOG_LEVEL_STR: str = Field("INFO", alias="AGENT_LOG_LEVEL")
    LOG_FORMAT: str = (
        "%(asctime)s - %(levelname)s - [%(name)s:%(funcName)s:%(lineno)d] - %(message)s"
    )
    LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"
    LOG_FILE: str | None = None
    LOG_DIR: str = "logs"
    ENABLE_RICH_LOGGING: bool = True

    @model_validator(mode="after")
    def check_budget_and_tiers(self) -> ContextSettings:
        reserves = self.CONTEXT_OUTPUT_RESERVE + self.CONTEXT_PROMPT_RESERVE
        if min(self.CONTEXT_OUTPUT_RESERVE, self.CONTEXT_PROMPT_RESERVE) < 0:
            raise ValueError("Context reserves must not be negative.")
        if self.CONTEXT_TOTAL_BUDGET - reserves <= 0:
            raise ValueError(
                "CONTEXT_TOTAL_BUDGET must exceed the output and prompt reserves."
            )
        weights = self.tier_priorities
        if any(high <= low for high, low in zip(weights, weights[1:])):
            raise ValueError(
                f"Tier priorities must be strictly descending from L1 to L5: {weights}"
            )
        if self.PREV_CHAPTER_TAIL_LENGTH <= 0:
            raise ValueError("PREV_CHAPTER_TAIL_LENGTH must be positive.")
        return self

    @property
    def context_budget(self) -> int:
        """Tokens available for context items."""
        return (
            self.CONTEXT_TOTAL_BUDGET
            - self.CONTEXT_OUTPUT_RESERVE
            - self.CONTEXT_PROMPT_RESERVE
        )

    @property
    def tier_priorities(self) -> tuple[int, int, int, int, int]:
        return (
            self.L1_PRIORITY,
            self.L2_PRIORITY,
            self.L3_PRIORITY,
            self.L4_PRIORITY,
            self.L5_PRIORITY,
        )

    model_config = SettingsConfigDict(
        env_prefix="", env_file=".env", populate_by_name=True, extra="ignore"
    )


settings = ContextSettings()
