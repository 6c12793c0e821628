"""Configuration for the git engine."""

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field


class EngineConfig(BaseModel):
    """Engine configuration with Pydantic validation."""

    # Git executable override (None = locate automatically)
    git_executable: Path | None = None

    # Storage paths
    data_dir: Path = Field(default=Path(".railroad"))
    log_dir: Path = Field(default=Path("logs"))
    log_filename: str = Field(default="railroad_vcs.log")

    # Refresh and paging
    auto_refresh_interval: float = Field(default=5.0, gt=0)
    log_page_size: int = Field(default=50, ge=1)
    diff_context_lines: int = Field(default=3, ge=0)

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Load configuration from environment variables and .env file."""
        load_dotenv(find_dotenv(usecwd=True))

        config_dict = {}

        if os.environ.get("GIT_EXECUTABLE"):
            config_dict["git_executable"] = Path(os.environ["GIT_EXECUTABLE"])

        # Storage paths
        if "VCS_DATA_DIR" in os.environ:
            config_dict["data_dir"] = Path(os.environ["VCS_DATA_DIR"])
        if "VCS_LOG_DIR" in os.environ:
            config_dict["log_dir"] = Path(os.environ["VCS_LOG_DIR"])
        if "VCS_LOG_FILENAME" in os.environ:
            config_dict["log_filename"] = os.environ["VCS_LOG_FILENAME"]

        # Numeric settings
        if "VCS_AUTO_REFRESH_INTERVAL" in os.environ:
            try:
                interval = float(os.environ["VCS_AUTO_REFRESH_INTERVAL"])
                if interval > 0:
                    config_dict["auto_refresh_interval"] = interval
            except ValueError:
                pass  # Keep default if invalid
        if "VCS_LOG_PAGE_SIZE" in os.environ:
            try:
                page_size = int(os.environ["VCS_LOG_PAGE_SIZE"])
                if page_size >= 1:
                    config_dict["log_page_size"] = page_size
            except ValueError:
                pass
        if "VCS_DIFF_CONTEXT_LINES" in os.environ:
            try:
                context_lines = int(os.environ["VCS_DIFF_CONTEXT_LINES"])
                if context_lines >= 0:
                    config_dict["diff_context_lines"] = context_lines
            except ValueError:
                pass

        return cls(**config_dict)
