"""
Application configuration settings.

Centralized configuration management using environment variables.
"""

import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Settings:
    """Application configuration settings."""

    # Extraction Configuration
    # Uploaded files are merged into the extracted form data next to text fields
    INCLUDE_UPLOADED_FILES: bool = (
        os.getenv("INCLUDE_UPLOADED_FILES", "true").lower() == "true"
    )
    # Key suffix stripped by the bracket array parser (e.g. "friends[]")
    ARRAY_KEY_SUFFIX: str = os.getenv("ARRAY_KEY_SUFFIX", "[]")

    # Application Configuration
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "5000"))

    # Request Limits
    MAX_CONTENT_LENGTH: int = int(os.getenv("MAX_CONTENT_LENGTH", str(16 * 1024 * 1024)))

    # Logging Configuration
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE: str = os.getenv("LOG_FILE", "request_to_form.log")


# Global settings instance
settings = Settings()
