import os
from enum import Enum
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings

load_dotenv()


class Environment(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TEST = "test"


class Settings(BaseSettings):
    """Runtime settings for the prescription record service."""

    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "Sanjeevan Prescription Records")
    VERSION: str = "1.0.0"
    ENVIRONMENT: Environment = Environment.DEVELOPMENT
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Exported document
    PRODUCT_PREFIX: str = os.getenv("PRODUCT_PREFIX", "Sanjeevan")
    DOCUMENT_EXTENSION: str = "pdf"
    PAGE_SIZE: str = os.getenv("PAGE_SIZE", "A4")
    # Unicode TrueType font for non-Latin free text; system fonts are tried otherwise
    PDF_FONT_PATH: Optional[str] = os.getenv("PDF_FONT_PATH")
    PDF_BOLD_FONT_PATH: Optional[str] = os.getenv("PDF_BOLD_FONT_PATH")

    # Optional JSON file of consultation records loaded at startup
    RECORDS_PATH: Optional[str] = os.getenv("RECORDS_PATH")

    SERVER_HOST: str = os.getenv("SERVER_HOST", "127.0.0.1")
    SERVER_PORT: int = int(os.getenv("SERVER_PORT", "8000"))

    CORS_ORIGINS: List[str] = [
        "http://127.0.0.1:3000",
        "http://localhost:3000",
    ]

    @field_validator("PAGE_SIZE")
    @classmethod
    def _known_page_size(cls, v: str) -> str:
        v = v.upper()
        if v not in ("A4", "LETTER"):
            raise ValueError(f"Unsupported PAGE_SIZE {v!r}, expected A4 or LETTER")
        return v

    class Config:
        case_sensitive = True


settings = Settings()
