"""
Language model configuration settings.

Chat model selection and the prompt budgets used for summaries,
quiz generation and document-grounded conversation.

Dependencies: pydantic, pydantic_settings
System role: Language model configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from studycast.configs.base import BaseSettings


class LanguageModelSettings(BaseSettings):
    """Chat model and prompt budget configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
    )

    model_id: str = Field(default="gemini-2.5-flash", description="Google GenAI chat model id")
    summary_temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    quiz_temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    chat_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    summary_max_tokens: int = Field(default=1000, description="Output cap for summaries")
    quiz_max_tokens: int = Field(default=1500, description="Output cap for quiz payloads")
    chat_max_tokens: int = Field(default=800, description="Output cap for chat replies")

    quiz_question_count: int = Field(default=5, ge=1, description="Questions per generated quiz")
    context_char_budget: int = Field(
        default=3000,
        ge=1,
        description="Characters of document text included in chat context",
    )
