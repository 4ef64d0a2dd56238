from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from ._config import ChatConfig, DEFAULT_MAX_ROUNDS

__all__ = ["ChatSettings"]


class ChatSettings(BaseSettings):
    """
    Client settings loaded from the environment (or a `.env` file).

    Variables use the `CHATTURN_` prefix. The API key also falls back to the
    standard `OPENAI_API_KEY`.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHATTURN_", env_file=".env", extra="ignore"
    )

    api_key: str = Field(
        validation_alias=AliasChoices("CHATTURN_API_KEY", "OPENAI_API_KEY")
    )
    model: str = "gpt-4o-mini"
    base_url: str | None = None
    timeout: float | None = None
    max_rounds: int = Field(default=DEFAULT_MAX_ROUNDS, ge=1)

    def chat_config(self) -> ChatConfig:
        return ChatConfig(
            model=self.model, timeout=self.timeout, max_rounds=self.max_rounds
        )
