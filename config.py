import os
from dataclasses import dataclass, field
from typing import List
from dotenv import load_dotenv

load_dotenv()


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass
class Settings:
    # API Ayarları
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("PORT", "5001"))

    # MongoDB Ayarları
    mongodb_uri: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    mongodb_server_selection_timeout_ms: int = int(os.getenv("MONGODB_SERVER_SELECTION_TIMEOUT_MS", "5000"))
    book_database: str = os.getenv("BOOK_DATABASE", "bookDatabase")
    library_database: str = os.getenv("LIBRARY_DATABASE", "libraryDatabase")
    creator_database: str = os.getenv("CREATOR_DATABASE", "creatorDatabase")

    # CORS Ayarları (virgülle ayrılmış liste)
    cors_allowed_origins: List[str] = field(default_factory=lambda: _split_origins(
        os.getenv("CORS_ALLOWED_ORIGINS", "https://ephemeral-biscotti-5b60bd.netlify.app")
    ))

    # Listeleme Ayarları
    default_list_limit: int = int(os.getenv("DEFAULT_LIST_LIMIT", "10"))

    # Uygulama Ayarları
    app_name: str = os.getenv("APP_NAME", "Library Catalog API")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
