import logging
from typing import Any, Optional

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from config import Settings, settings as default_settings
from errors import StartupConnectivityError

logger = logging.getLogger(__name__)

BOOKS_COLLECTION = "books"
LIBRARIES_COLLECTION = "libraries"
CREATORS_COLLECTION = "creators"


class CatalogStore:
    """Tek bir MongoClient ve üç mantıksal veritabanı tanıtıcısını bir arada tutar.

    Küresel bağlantı durumu yoktur: depo açıkça oluşturulur ve kayıt erişim
    katmanına ve uygulamaya parametre olarak verilir. Testler aynı kurucuyu
    bellek içi bir istemciyle kullanır.
    """

    def __init__(self, client: Any, settings: Optional[Settings] = None) -> None:
        settings = settings or default_settings
        self.client = client
        self.book_db = client[settings.book_database]
        self.library_db = client[settings.library_database]
        self.creator_db = client[settings.creator_database]

    @property
    def books(self):
        return self.book_db[BOOKS_COLLECTION]

    @property
    def libraries(self):
        return self.library_db[LIBRARIES_COLLECTION]

    @property
    def creators(self):
        return self.creator_db[CREATORS_COLLECTION]

    @classmethod
    def connect(cls, settings: Optional[Settings] = None) -> "CatalogStore":
        """MongoDB'ye bağlan ve sunucuya ping at.

        Yeniden deneme yok: herhangi bir sürücü hatası StartupConnectivityError
        olarak yükseltilir ve çağıran süreci sonlandırır.
        """
        settings = settings or default_settings
        try:
            client = MongoClient(
                settings.mongodb_uri,
                serverSelectionTimeoutMS=settings.mongodb_server_selection_timeout_ms,
            )
            client.admin.command("ping")
        except PyMongoError as e:
            logger.error(f"MongoDB bağlantısı başarısız: {e}")
            raise StartupConnectivityError(f"Failed to connect to MongoDB: {e}") from e
        logger.info("Connected to MongoDB")
        return cls(client, settings)

    @classmethod
    def from_client(cls, client: Any, settings: Optional[Settings] = None) -> "CatalogStore":
        """Var olan bir istemci (ör. test çifti) etrafında depo oluştur."""
        return cls(client, settings)

    def close(self) -> None:
        close = getattr(self.client, "close", None)
        if callable(close):
            close()
