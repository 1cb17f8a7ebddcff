# ecofinds/core/config.py
import os
from typing import List
from dotenv import load_dotenv

load_dotenv()


def _split_env(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [part.strip() for part in raw.split(",") if part.strip()]


class Settings:
    # --- API Info ---
    API_TITLE: str = "EcoFinds Marketplace API"
    API_DESCRIPTION: str = "Second-hand marketplace: listings, cart, orders and user profiles."
    API_VERSION: str = "1.0.0"

    # --- Server Configuration ---
    PORT: int = int(os.getenv("PORT", "8000"))
    HOST: str = os.getenv("HOST", "0.0.0.0")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # --- Database ---
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./ecofinds.db")

    # --- Sessions ---
    SESSION_SECRET_KEY: str = os.getenv("SESSION_SECRET_KEY", "dev-session-secret-change-me")
    SESSION_COOKIE_NAME: str = os.getenv("SESSION_COOKIE_NAME", "ecofinds_session")
    SESSION_MAX_AGE: int = int(os.getenv("SESSION_MAX_AGE", str(7 * 24 * 60 * 60)))  # 1 week

    # --- CORS ---
    CORS_ORIGINS: List[str] = _split_env(
        "CORS_ORIGINS",
        "http://localhost:5173,http://localhost:3000,http://127.0.0.1:5173",
    )

    # --- Rate limiting ---
    RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "1") == "1"
    REGISTER_RATE_LIMIT: str = os.getenv("REGISTER_RATE_LIMIT", "30/hour")
    LOGIN_RATE_LIMIT: str = os.getenv("LOGIN_RATE_LIMIT", "50/hour")

    # --- Catalogue ---
    DEFAULT_PAGE_SIZE: int = int(os.getenv("DEFAULT_PAGE_SIZE", "20"))
    MAX_PAGE_SIZE: int = int(os.getenv("MAX_PAGE_SIZE", "100"))
    DEFAULT_CATEGORIES: List[str] = _split_env(
        "DEFAULT_CATEGORIES", "Electronics,Clothing,Books,Home,Misc"
    )

    # --- Logging ---
    LOG_CONFIG_FILE: str = os.getenv(
        "LOG_CONFIG_FILE",
        os.path.join(os.path.dirname(os.path.dirname(__file__)), "logging.conf"),
    )

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


settings = Settings()
