"""Configuration management for Little Journey."""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Monthly photo book curation
    max_photos_per_book: int = 20
    max_photos_per_day: int = 3  # Variety: not every page from the same day
    subscription_discount_percent: int = 20

    # Year in review / monthly recap curation
    max_highlights_per_year: int = 50
    max_highlights_per_month: int = 5
    monthly_recap_max_highlights: int = 15

    # Milestone suggestions
    min_suggestion_confidence: float = 0.5
    high_confidence_threshold: float = 0.75
    max_milestone_suggestions: int = 3

    # Image analysis
    use_mock_image_analysis: bool = True
    gemini_api_key: Optional[str] = None
    gemini_model_name: str = "gemini-2.0-flash"
    max_labels: int = 10
    min_label_confidence: float = 0.5
    mock_analysis_delay: float = 0.0  # seconds

    # Storage configuration (filesystem only)
    storage_path: str = "./data"

    # Development
    debug: bool = False
    log_level: str = "INFO"

    # Model configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra fields in .env file
    )

    def validate_api_keys(self) -> bool:
        """Check if the image analysis backend has what it needs."""
        if self.use_mock_image_analysis:
            return True
        return bool(self.gemini_api_key)


# Global settings instance
settings = Settings()
