"""Configuration for Taskboard."""

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_API_URL = "http://localhost:1337/api"


@dataclass(frozen=True)
class Config:
    """Application configuration."""

    api_url: str = DEFAULT_API_URL
    cache_dir: Path = field(default_factory=lambda: Path.home() / ".cache" / "taskboard")
    port: int = 8765
    host: str = "127.0.0.1"
    page_size: int = 1000
    request_timeout: float = 30.0

    @property
    def db_path(self) -> Path:
        return self.cache_dir / "session.db"

    @property
    def base_url(self) -> str:
        return self.api_url.rstrip("/")
