"""Configuration management"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Secret Key
    SECRET_KEY: str = "change-this-to-a-random-secret-key"

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/aistudio.db"

    # JWT
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440  # 24 hours
    ALGORITHM: str = "HS256"

    # Settings cache
    SETTINGS_CACHE_TTL_SECONDS: float = 300.0  # 5 minutes

    # Directories
    BASE_DIR: Path = Path(__file__).parent.parent
    DATA_DIR: Path = BASE_DIR / "data"
    LOGS_DIR: Path = DATA_DIR / "logs"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 4000
    ALLOWED_ORIGINS: Optional[str] = None  # Comma-separated origins for main API

    # Chat widget
    CHAT_API_URL: str = "http://localhost:3001"
    CHAT_CHANNEL: str = "web"
    CHAT_TIMEOUT_SECONDS: float = 30.0
    CHAT_SESSION_FILE: Path = DATA_DIR / "chat_session.json"

    class Config:
        env_file = ".env"
        case_sensitive = True

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Ensure directories exist
        self.DATA_DIR.mkdir(exist_ok=True, parents=True)
        self.LOGS_DIR.mkdir(exist_ok=True, parents=True)


# Global settings instance
settings = Settings()
