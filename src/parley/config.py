"""Configuration management for Parley."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib import parse as urllib_parse

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from parley.errors import ConfigurationError

DEFAULT_PROMPTS = [
    "How to search and book rentals?",
    "What is the refund policy?",
    "How to contact a representative?",
]


@dataclass(frozen=True)
class RetrievalOptions:
    """Retrieval and ranking options sent with every question."""

    approach: str = "rrr"
    retrieval_mode: str = "hybrid"
    semantic_ranker: bool = True
    semantic_captions: bool = False
    top: int = 3
    suggest_followup_questions: bool = False

    def overrides(self) -> dict[str, Any]:
        return {
            "retrieval_mode": self.retrieval_mode,
            "semantic_ranker": self.semantic_ranker,
            "semantic_captions": self.semantic_captions,
            "top": self.top,
            "suggest_followup_questions": self.suggest_followup_questions,
        }


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="PARLEY_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Answer service
    api_chat_url: str = Field(default="http://localhost:3000/chat", description="Answer service endpoint")
    request_timeout_seconds: float | None = Field(default=None, description="Request timeout, none waits forever")

    # Retrieval options
    approach: str = Field(default="rrr")
    retrieval_mode: str = Field(default="hybrid")
    semantic_ranker: bool = Field(default=True)
    semantic_captions: bool = Field(default=False)
    top: int = Field(default=3, ge=1)
    suggest_followup_questions: bool = Field(default=False)

    # Labels
    is_default_prompts_enabled: bool = Field(default=True, description="Show default prompts before a chat starts")
    default_prompts: list[str] = Field(default_factory=lambda: list(DEFAULT_PROMPTS))
    default_prompts_heading: str = Field(default="Chat with our AI assistant")
    chat_input_label_text: str = Field(default="Ask a question")
    chat_input_placeholder: str = Field(default="Type your question, eg. 'How to search and book rentals?'")
    api_error_message: str = Field(default="Sorry, we are having some issues. Please try again later.")
    user_is_bot: str = Field(default="Support Assistant")
    copied_successfully_message: str = Field(default="Response copied!")
    copy_response_button_label_text: str = Field(default="Copy Response")
    reset_chat_button_title: str = Field(default="Reset Chat")
    display_default_prompts_button: str = Field(default="Not sure what to ask? Try our suggestions!")
    loading_indicator_text: str = Field(default="Please wait. We are searching for a response...")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")

    def retrieval_options(self) -> RetrievalOptions:
        return RetrievalOptions(
            approach=self.approach,
            retrieval_mode=self.retrieval_mode,
            semantic_ranker=self.semantic_ranker,
            semantic_captions=self.semantic_captions,
            top=self.top,
            suggest_followup_questions=self.suggest_followup_questions,
        )


def get_settings(**overrides: Any) -> Settings:
    """Get application settings.

    Args:
        overrides: Field values that take precedence over environment and .env

    Returns:
        Settings instance

    Raises:
        ConfigurationError: If the answer service URL is not an http(s) URL
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    settings = Settings(**values)
    if _normalize_url(settings.api_chat_url) is None:
        raise ConfigurationError(f"invalid answer service url: {settings.api_chat_url!r}")
    return settings


def _normalize_url(raw_url: str) -> str | None:
    normalized = raw_url.strip()
    if not normalized:
        return None
    parsed = urllib_parse.urlparse(normalized)
    if parsed.scheme in {"http", "https"} and parsed.netloc:
        return normalized
    return None
