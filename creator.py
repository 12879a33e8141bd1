from __future__ import annotations

from typing import Any

from bson import ObjectId

from utils.normalize import text_or_default


def _work_ref(work: Any) -> Any:
    # Eserler başlık ya da kimlik olarak saklanabilir; kimlikler dizeye çevrilir
    return str(work) if isinstance(work, ObjectId) else work


def _works(value: Any) -> list:
    if not value:
        return []
    return list(value) if isinstance(value, (list, tuple)) else [value]


class Creator:
    """Salt okunur yaratıcı kaydı (yazar, illüstratör vb.)."""

    DEFAULT_NAME = "Unknown Name"

    def __init__(self, name: str, works: list | None = None) -> None:
        self.name = name
        self.works = list(works or [])

    def to_dict(self) -> dict:
        return {"name": self.name, "works": self.works}

    @staticmethod
    def from_document(doc: dict[str, Any]) -> "Creator":
        return Creator(
            name=text_or_default(doc.get("name"), Creator.DEFAULT_NAME),
            works=[_work_ref(w) for w in _works(doc.get("works"))],
        )
