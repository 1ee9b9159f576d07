"""Configuration settings for the Business Match ranking service."""

from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Paths
    base_dir: Path = Path(__file__).parent.parent
    data_dir: Path = base_dir / "data"
    db_path: Path = data_dir / "business_match.db"
    db_url: Optional[str] = None  # overrides db_path when set

    # API Keys
    anthropic_api_key: str = ""

    # Advisory scoring (LLM)
    scorer: Literal["advisory", "heuristic"] = "advisory"
    llm_model: str = "claude-sonnet-4-20250514"
    llm_max_tokens: int = 1000
    llm_temperature: float = 0.1
    advisory_timeout: float = 30.0  # seconds per request attempt
    advisory_max_retries: int = 2
    advisory_deadline: float = 90.0  # hard ceiling across all attempts

    # Ranking
    rank_delay: float = 0.1  # seconds between fresh scoring calls in a batch
    refresh_delay: float = 0.2  # seconds between re-ranked rows
    max_new_rankings: int = 20
    default_ranked_limit: int = 20

    # API
    enable_admin_routes: bool = False

    # Database URL
    @property
    def database_url(self) -> str:
        if self.db_url:
            return self.db_url
        return f"sqlite:///{self.db_path}"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
