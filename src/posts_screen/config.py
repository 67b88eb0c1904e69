"""
Configuration constants for the Posts Screen.

This module centralizes all configurable parameters so the screen,
the API client and the logging setup read from one place.
"""

from pathlib import Path
from dataclasses import dataclass, field
from typing import List


@dataclass
class APIConfig:
    """API configuration settings."""
    base_url: str = "https://jsonplaceholder.typicode.com"
    posts_endpoint: str = "/posts"
    timeout_seconds: float = 60.0  # Same default a platform URL session uses

    @property
    def posts_url(self) -> str:
        """Get the full URL of the posts endpoint."""
        return f"{self.base_url}{self.posts_endpoint}"


@dataclass
class ScreenConfig:
    """Screen and list rendering configuration."""
    title: str = "Posts"
    cell_reuse_identifier: str = "cell"
    indicator_style: str = "large"

    # Logical screen bounds, used to center the activity indicator
    width: int = 80
    height: int = 24

    # Spinner glyphs cycled while the indicator animates
    spinner_frames: List[str] = field(default_factory=lambda: [
        "|", "/", "-", "\\",
    ])

    # Seconds the UI loop waits for a task before redrawing the spinner
    poll_interval: float = 0.1


@dataclass
class LogConfig:
    """Logging configuration."""
    log_directory: Path = field(default_factory=lambda: Path("logs"))
    log_filename: str = "posts_screen.log"
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @property
    def log_file_path(self) -> Path:
        """Get full path to the log file."""
        return self.log_directory / self.log_filename


@dataclass
class Config:
    """Master configuration combining all sub-configurations."""
    api: APIConfig = field(default_factory=APIConfig)
    screen: ScreenConfig = field(default_factory=ScreenConfig)
    log: LogConfig = field(default_factory=LogConfig)


# Global configuration instance
config = Config()
