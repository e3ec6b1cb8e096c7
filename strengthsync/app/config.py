"""
Application configuration settings
"""
import os
import logging
from pathlib import Path
from typing import List
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings"""

    # API Configuration
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "8000"))
    API_RELOAD: bool = os.getenv("API_RELOAD", "true").lower() == "true"
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Project Paths
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    DATA_DIR: Path = BASE_DIR / "data"

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR / 'data' / 'db' / 'strengthsync.db'}")

    # Upload limits
    MAX_FILE_SIZE_MB: int = int(os.getenv("MAX_FILE_SIZE_MB", "10"))

    # Import rules
    MIN_THEMES_PER_IMPORT: int = int(os.getenv("MIN_THEMES_PER_IMPORT", "5"))
    HEADER_SCAN_ROWS: int = int(os.getenv("HEADER_SCAN_ROWS", "20"))
    MIN_HEADER_THEME_COLUMNS: int = int(os.getenv("MIN_HEADER_THEME_COLUMNS", "20"))
    IMPORT_MAX_WORKERS: int = int(os.getenv("IMPORT_MAX_WORKERS", "1"))  # >1 runs rows in parallel
    INCLUDE_RAW_TEXT: bool = os.getenv("INCLUDE_RAW_TEXT", "false").lower() == "true"

    # CORS
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173")
    CORS_ALLOW_CREDENTIALS: bool = os.getenv("CORS_ALLOW_CREDENTIALS", "true").lower() == "true"

    # Rate limiting (slowapi syntax)
    RATE_LIMIT_DEFAULT: str = os.getenv("RATE_LIMIT_DEFAULT", "120/minute")
    RATE_LIMIT_UPLOAD: str = os.getenv("RATE_LIMIT_UPLOAD", "20/minute")

    # Supported file extensions
    SPREADSHEET_EXTENSIONS: set = {".xlsx", ".xlsm", ".csv"}
    DOCUMENT_EXTENSIONS: set = {".pdf", ".txt"}

    class Config:
        case_sensitive = True
        env_file = ".env"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Create directories if they don't exist
        self.DATA_DIR.mkdir(parents=True, exist_ok=True)

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def max_file_size_bytes(self) -> int:
        return self.MAX_FILE_SIZE_MB * 1024 * 1024

    def get_cors_origins(self) -> List[str]:
        """Parse the comma separated CORS_ORIGINS value"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


# Global settings instance
settings = Settings()
