"""Application configuration settings."""
import os
from typing import List

# Flask configuration
FLASK_ENV: str = os.getenv("FLASK_ENV", "development")
FLASK_DEBUG: bool = os.getenv("FLASK_DEBUG", "1") == "1"

# SECRET_KEY: In production, this MUST be set via environment variable
# Generate with: python3 -c "import secrets; print(secrets.token_hex(32))"
if FLASK_ENV == "production":
    SECRET_KEY: str = os.getenv("SECRET_KEY")
    if not SECRET_KEY:
        raise ValueError(
            "SECRET_KEY environment variable is required in production. "
            "Generate one with: python3 -c \"import secrets; print(secrets.token_hex(32))\""
        )
else:
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret-key-change-in-production")

# Server configuration
SERVER_HOST: str = os.getenv("SERVER_HOST", "0.0.0.0")
SERVER_PORT: int = int(os.getenv("SERVER_PORT", "8000"))

# CORS configuration
CORS_ORIGINS: List[str] = os.getenv("CORS_ORIGINS", "*").split(",")

# Authentication: the upstream auth proxy resolves the user and forwards
# an opaque owner identifier in this header
AUTH_USER_HEADER: str = os.getenv("AUTH_USER_HEADER", "X-User-ID")

# Logging configuration
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE_PATH: str = os.getenv("LOG_FILE_PATH", "logs/")
LOG_MAX_BYTES: int = int(os.getenv("LOG_MAX_BYTES", "10485760"))  # 10MB default
LOG_BACKUP_COUNT: int = int(os.getenv("LOG_BACKUP_COUNT", "5"))
ERROR_LOG_FILE: str = os.getenv("ERROR_LOG_FILE", "errors.log")
APP_LOG_FILE: str = os.getenv("APP_LOG_FILE", "app.log")

# Database configuration
DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///salesops.db")
DATABASE_POOL_SIZE: int = int(os.getenv("DATABASE_POOL_SIZE", "5"))
DATABASE_MAX_OVERFLOW: int = int(os.getenv("DATABASE_MAX_OVERFLOW", "10"))
DATABASE_ECHO: bool = os.getenv("DATABASE_ECHO", "0") == "1"

# Document numbering
QUOTE_NUMBER_PREFIX: str = "Q"
ORDER_NUMBER_PREFIX: str = "ORD"
NUMBER_SEQUENCE_WIDTH: int = 4
