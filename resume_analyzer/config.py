from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List


class Settings(BaseSettings):
    app_name: str = "Resume Analyzer API"

    # AI oracle - an empty key means heuristic-only analysis
    openai_api_key: str = ""
    # Comma-separated, tried in order until one succeeds
    oracle_models: str = "gpt-4o-mini,gpt-4o,gpt-3.5-turbo"
    oracle_timeout_seconds: float = 30.0
    oracle_rate_limit_delay_seconds: float = 1.0

    # "lenient" or "strict"
    merge_strictness: str = "lenient"

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"
        case_sensitive = False

    def get_oracle_models(self) -> List[str]:
        """Parse oracle models from comma-separated string"""
        return [model.strip() for model in self.oracle_models.split(",") if model.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()
