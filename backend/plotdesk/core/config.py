from pydantic_settings import BaseSettings
from typing import List, Any
import json
from pathlib import Path


def parse_cors_origins(v: Any) -> List[str]:
    """Parse CORS origins from string or list"""
    if isinstance(v, list):
        return v
    if isinstance(v, str):
        # Try JSON parsing first
        if v.startswith('['):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        # Fall back to comma-separated
        return [origin.strip() for origin in v.split(',') if origin.strip()]
    return []


class Settings(BaseSettings):
    """Application settings - all configurable via environment variables"""

    # ==========================================
    # Application
    # ==========================================
    APP_NAME: str = "PlotDesk"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    API_VERSION: str = "v1"

    # Server Configuration
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8000

    # ==========================================
    # Storage
    # ==========================================
    STORAGE_BACKEND: str = "file"  # "file" or "database"
    DATA_DIR: str = "data"

    # Only used when STORAGE_BACKEND=database
    DATABASE_URL: str = "sqlite+aiosqlite:///./plotdesk.db"
    DB_ECHO: bool = False

    # ==========================================
    # Authentication
    # ==========================================
    JWT_SECRET_KEY: str = "CHANGE_ME"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7
    BCRYPT_ROUNDS: int = 10  # 4 for tests (fast), 12 for prod

    # Owner account, created on first start when no Owner exists
    OWNER_EMAIL: str = "owner@example.com"
    OWNER_PASSWORD: str = ""

    # Empty disables /auth/reset-password
    PASSWORD_RESET_SECURITY_ANSWER: str = ""

    # ==========================================
    # CORS (stored as comma-separated string, parsed to list)
    # ==========================================
    CORS_ORIGINS_STR: str = "http://localhost:3000,http://127.0.0.1:3000"

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return parse_cors_origins(self.CORS_ORIGINS_STR)

    # ==========================================
    # Rate Limiting
    # ==========================================
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 60
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    # ==========================================
    # Views & Uploads
    # ==========================================
    VIEW_CACHE_TTL_SECONDS: int = 300
    MAX_UPLOAD_SIZE: int = 10485760  # 10MB request body cap, images are checked separately

    # ==========================================
    # Logging
    # ==========================================
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/app.log"

    # ==========================================
    # Content generation (optional)
    # ==========================================
    AI_FEATURES_ENABLED: bool = False
    ANTHROPIC_API_KEY: str = ""
    ANTHROPIC_BASE_URL: str = ""  # Empty means use default Anthropic URL
    CLAUDE_MODEL: str = "claude-3-5-haiku-20241022"
    CLAUDE_MAX_TOKENS: int = 2048
    CLAUDE_REQUEST_TIMEOUT: int = 60

    @property
    def data_path(self) -> Path:
        return Path(self.DATA_DIR)

    @property
    def ai_available(self) -> bool:
        return self.AI_FEATURES_ENABLED and bool(self.ANTHROPIC_API_KEY)

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env that aren't defined in Settings


# Create settings instance
settings = Settings()
