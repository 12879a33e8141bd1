from typing import Iterable, List


class CatalogError(Exception):
    """Katalog işlemlerinin temel hatası. status_code HTTP katmanında kullanılır."""

    status_code: int = 500


class ValidationError(CatalogError):
    """Oluşturma/güncelleme isteğinde bir veya daha fazla zorunlu alan eksik ya da boş."""

    status_code = 400

    def __init__(self, fields: Iterable[str]) -> None:
        self.fields: List[str] = list(fields)
        super().__init__(f"Missing required fields: {', '.join(self.fields)}")


class InvalidIdError(CatalogError):
    status_code = 400

    def __init__(self, record_id: str, kind: str = "record") -> None:
        self.record_id = record_id
        super().__init__(f"Invalid {kind} ID")


class NotFoundError(CatalogError):
    status_code = 404

    def __init__(self, kind: str = "Record") -> None:
        super().__init__(f"{kind} not found")


class StoreError(CatalogError):
    """Belge deposundan gelen ham hata; mesaj olduğu gibi iletilir."""

    status_code = 500


class StartupConnectivityError(CatalogError):
    """Başlangıçta depoya bağlanılamadı. Ölümcül: süreç sonlanır."""
