from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    gemini_api_key: str = Field(default="", alias="GEMINI_API_KEY")
    gemini_model: str = Field(default="gemini-2.5-flash", alias="GEMINI_MODEL")
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        alias="GEMINI_BASE_URL",
    )
    llm_temperature: float = Field(default=0.2, alias="LLM_TEMPERATURE")
    # None keeps the model call unbounded; set to cap a single round trip.
    llm_timeout_seconds: float | None = Field(default=None, alias="LLM_TIMEOUT_SECONDS")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    client_url: str = Field(default="", alias="CLIENT_URL")
    client_url_other: str = Field(default="", alias="CLIENT_URL_OTHER")
    auth_user_header: str = Field(default="X-User-Id", alias="AUTH_USER_HEADER")

    def model_post_init(self, __context) -> None:  # type: ignore[override]
        self.gemini_api_key = self.gemini_api_key.strip()
        self.gemini_base_url = self.gemini_base_url.rstrip("/")
        self.log_level = self.log_level.strip().upper() or "INFO"

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in (self.client_url, self.client_url_other) if origin.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
