"""Configuration management for the uilens framework."""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables
load_dotenv()


class Config(BaseSettings):
    """Configuration class for uilens.

    Every heuristic threshold used by the hierarchy analysis lives here so it
    can be tuned per platform through ``UILENS_*`` environment variables.
    """

    model_config = SettingsConfigDict(
        env_prefix="UILENS_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # Ignore unexpected env vars rather than raising errors
    )

    # Framework Configuration
    log_level: str = Field(default="INFO")
    log_to_file: bool = Field(default=False, description="Also write rotating log files")
    log_dir: str = Field(default="logs")

    # Textual hierarchy defaults (typical tap target)
    text_default_width: int = Field(default=100, ge=0)
    text_default_height: int = Field(default=40, ge=0)

    # Screen title fallback
    title_max_top: int = Field(default=200, description="Title text must start above this y")
    title_min_width: int = Field(default=200)

    # Dialog card heuristic, tuned against Android dialog conventions
    dialog_min_area_ratio: float = Field(default=0.3, ge=0, le=1)
    dialog_max_area_ratio: float = Field(default=0.85, ge=0, le=1)
    dialog_min_top: int = Field(default=100)
    dialog_min_left: int = Field(default=20)

    # Diffing
    screen_change_threshold: float = Field(
        default=0.6, ge=0, le=1, description="Fingerprint churn above which the screen is considered changed"
    )

    # Output economy
    max_tree_elements: int = Field(default=100, ge=0)
    max_static_texts: int = Field(default=20, ge=0)
    max_listed_buttons: int = Field(default=15, ge=0)
    max_listed_texts: int = Field(default=10, ge=0)
    max_diff_entries: int = Field(default=5, ge=0)
    max_suggestions: int = Field(default=4, ge=0)

    # Session cache
    session_history_size: int = Field(default=20, ge=0)

    # API Configuration
    api_host: str = Field(default="localhost")
    api_port: int = Field(default=8000)
    cors_origins: list[str] = Field(default=["http://localhost:3000"])

    def validate_config(self) -> bool:
        """Validate relations between fields; ranges are enforced on load."""
        if self.dialog_min_area_ratio >= self.dialog_max_area_ratio:
            raise ValueError("dialog_min_area_ratio must be lower than dialog_max_area_ratio")
        return True

    def get_log_path(self) -> str:
        """Get the full path to the log directory."""
        return os.path.join(os.getcwd(), self.log_dir)


# Global configuration instance
config = Config()
