from __future__ import annotations

from typing import Any

from utils.normalize import as_text_list, text_or_default


class Book:
    """Katalogdaki tek bir kitap kaydını temsil eder."""

    DEFAULT_TITLE = "Unknown Title"

    def __init__(self, title: str, isbn: list[str], authors: list[str], id: str | None = None) -> None:
        self.id = id
        self.title = title
        self.isbn = list(isbn)
        self.authors = list(authors)

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self.title} by {', '.join(self.authors)} (ISBN: {', '.join(self.isbn)})"

    def to_document(self) -> dict:
        """Depoya yazılacak belge; _id depo tarafından atanır."""
        return {"title": self.title, "isbn": self.isbn, "authors": self.authors}

    def to_dict(self) -> dict:
        return {"_id": self.id, "title": self.title, "isbn": self.isbn, "authors": self.authors}

    @staticmethod
    def from_document(doc: dict[str, Any]) -> "Book":
        # Eksik alanlar okuma sırasında varsayılanlarla doldurulur
        return Book(
            id=str(doc["_id"]) if doc.get("_id") is not None else None,
            title=text_or_default(doc.get("title"), Book.DEFAULT_TITLE),
            isbn=as_text_list(doc.get("isbn")),
            authors=as_text_list(doc.get("authors")),
        )
