"""Application configuration."""
from functools import lru_cache

from pydantic_settings import BaseSettings

from wizard_search.errors import ConfigurationError


class Settings(BaseSettings):
    """App settings from env."""

    # Google Programmable Search (Custom Search JSON API)
    google_api_key: str = ""
    google_cx: str = ""

    # Optional: use Tavily instead
    tavily_api_key: str = ""
    search_provider: str = "google"  # "google" | "tavily"

    openai_api_key: str = ""
    openai_base_url: str = ""
    model_agent_search: str = "gpt-4o-mini"

    request_timeout_seconds: float = 10.0
    llm_timeout_seconds: float = 30.0
    search_results_per_query: int = 3
    max_parallel_searches: int = 3
    analytics_history_size: int = 100

    app_log_level: str = "INFO"
    noisy_log_level: str = "WARNING"

    class Config:
        env_file = ".env"
        extra = "ignore"

    def missing_credentials(self) -> list[str]:
        missing = []
        provider = self.search_provider.lower().strip()
        if provider == "google":
            if not self.google_api_key:
                missing.append("GOOGLE_API_KEY")
            if not self.google_cx:
                missing.append("GOOGLE_CX")
        elif provider == "tavily":
            if not self.tavily_api_key:
                missing.append("TAVILY_API_KEY")
        if not self.openai_api_key:
            missing.append("OPENAI_API_KEY")
        return missing

    def validate_for_agent_search(self) -> None:
        """Raise ConfigurationError if the agent search cannot run with these settings."""
        provider = self.search_provider.lower().strip()
        if provider not in ("google", "tavily"):
            raise ConfigurationError(f"Unsupported SEARCH_PROVIDER: {self.search_provider}")
        missing = self.missing_credentials()
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}"
            )


@lru_cache
def get_settings() -> Settings:
    return Settings()
