"""Application settings loaded from the environment."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class ResumeBuilderSettings(BaseSettings):
    """Resume builder configuration settings."""
    
    data_dir: Path = Path(__file__).parent / "data"
    resume_file: str = "resume.json"
    sample_file: str = "sample.resume.json"
    sample_url: Optional[str] = None
    template: str = "minimal"
    fetch_timeout: float = 10.0
    log_level: str = "INFO"
    log_file: Optional[str] = None
    
    model_config = SettingsConfigDict(
        env_prefix="RESUME_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> ResumeBuilderSettings:
    """
    Get the cached settings instance.
    
    Returns:
        ResumeBuilderSettings: Settings read from environment and .env
    """
    return ResumeBuilderSettings()
