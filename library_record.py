from __future__ import annotations

from typing import Any

from utils.normalize import as_counter, text_or_default

INVENTORY_COUNTERS = ("total_copies", "copies_available", "copies_checked_out", "copies_lost")


class Inventory:
    """Bir kütüphane kaydının dört stok sayacı.

    Sayaçlar arasında bir tutarlılık kuralı uygulanmaz; çağıranın verdiği
    değerlere güvenilir, eksik sayaçlar 0 olur.
    """

    def __init__(self, total_copies: int = 0, copies_available: int = 0,
                 copies_checked_out: int = 0, copies_lost: int = 0) -> None:
        self.total_copies = total_copies
        self.copies_available = copies_available
        self.copies_checked_out = copies_checked_out
        self.copies_lost = copies_lost

    def to_dict(self) -> dict:
        return {name: getattr(self, name) for name in INVENTORY_COUNTERS}

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "Inventory":
        return Inventory(**{name: as_counter(data.get(name)) for name in INVENTORY_COUNTERS})


class LibraryRecord:
    """Bir kütüphane envanter kaydı: başlık, materyal türü ve stok sayaçları."""

    DEFAULT_TITLE = "No Title Available"
    DEFAULT_MATERIAL_TYPE = "Unknown"

    def __init__(self, title: str, material_type: str, inventory: Inventory | None,
                 id: str | None = None) -> None:
        self.id = id
        self.title = title
        self.material_type = material_type
        self.inventory = inventory

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self.title} ({self.material_type})"

    def to_document(self) -> dict:
        return {
            "title": self.title,
            "material_type": self.material_type,
            "inventory": self.inventory.to_dict() if self.inventory is not None else None,
        }

    def to_dict(self) -> dict:
        return {"_id": self.id, **self.to_document()}

    @staticmethod
    def from_document(doc: dict[str, Any]) -> "LibraryRecord":
        # inventory yoksa ya da nesne değilse null döner; varsa her sayaç ayrı ayrı doldurulur
        inventory = doc.get("inventory")
        return LibraryRecord(
            id=str(doc["_id"]) if doc.get("_id") is not None else None,
            title=text_or_default(doc.get("title"), LibraryRecord.DEFAULT_TITLE),
            material_type=text_or_default(doc.get("material_type"), LibraryRecord.DEFAULT_MATERIAL_TYPE),
            inventory=Inventory.from_dict(inventory) if isinstance(inventory, dict) else None,
        )
