import logging
import re
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo.errors import PyMongoError

from book import Book
from config import settings as default_settings
from creator import Creator
from database import CatalogStore
from errors import InvalidIdError, NotFoundError, StoreError
from library_record import Inventory, LibraryRecord
from utils.validators import ObjectIdValidator, RequiredFieldValidator

logger = logging.getLogger(__name__)


def substring_filter(field: str, query: Optional[str]) -> Dict[str, Any]:
    """Büyük/küçük harf duyarsız alt dize eşleşmesi için filtre oluştur.

    Sorgu kaçışlanır; kullanıcı girdisindeki regex karakterleri düz metin sayılır.
    """
    if not query:
        return {}
    return {field: {"$regex": re.escape(query), "$options": "i"}}


class _Records:
    """Tek bir koleksiyon üzerindeki kayıt erişim işlemlerinin ortak kısmı."""

    kind = "Record"

    def __init__(self, store: CatalogStore, list_limit: Optional[int] = None) -> None:
        self.store = store
        self.list_limit = list_limit if list_limit is not None else default_settings.default_list_limit

    @property
    def collection(self):
        raise NotImplementedError

    def _find(self, field: str, query: Optional[str]) -> List[dict]:
        # Sorgu varsa sınırsız, yoksa ilk list_limit kayıt (0 = sınırsız)
        limit = 0 if query else self.list_limit
        try:
            return list(self.collection.find(substring_filter(field, query)).limit(limit))
        except PyMongoError as e:
            logger.error(f"{self.kind} araması başarısız: {e}")
            raise StoreError(str(e)) from e


class _MutableRecords(_Records):
    """Ekleme, güncelleme ve silme destekleyen koleksiyonlar."""

    def _object_id(self, record_id: str) -> ObjectId:
        if not ObjectIdValidator.is_valid(record_id):
            raise InvalidIdError(record_id, self.kind.lower())
        return ObjectId(record_id)

    def _insert(self, document: dict) -> str:
        try:
            result = self.collection.insert_one(document)
        except PyMongoError as e:
            logger.error(f"{self.kind} eklenirken hata: {e}")
            raise StoreError(str(e)) from e
        return str(result.inserted_id)

    def _replace_fields(self, oid: ObjectId, fields: dict) -> None:
        try:
            result = self.collection.update_one({"_id": oid}, {"$set": fields})
        except PyMongoError as e:
            logger.error(f"{self.kind} güncellenirken hata: {e}")
            raise StoreError(str(e)) from e
        if result.matched_count == 0:
            raise NotFoundError(self.kind)

    def delete(self, record_id: str) -> str:
        """Kimliğe göre tek bir kaydı sil ve onay mesajı döndür."""
        oid = self._object_id(record_id)
        try:
            result = self.collection.delete_one({"_id": oid})
        except PyMongoError as e:
            logger.error(f"{self.kind} silinirken hata: {e}")
            raise StoreError(str(e)) from e
        if result.deleted_count != 1:
            raise NotFoundError(self.kind)
        logger.info(f"{self.kind} silindi: {record_id}")
        return f"{self.kind} deleted successfully"


class BookRecords(_MutableRecords):
    kind = "Book"

    @property
    def collection(self):
        return self.store.books

    def search(self, title: Optional[str] = None) -> List[Book]:
        return [Book.from_document(doc) for doc in self._find("title", title)]

    def create(self, title: Optional[str], isbn: Optional[List[str]], authors: Optional[List[str]]) -> Book:
        RequiredFieldValidator.require(
            text_fields={"title": title},
            list_fields={"isbn": isbn, "authors": authors},
        )
        book = Book(title=title, isbn=isbn, authors=authors)
        book.id = self._insert(book.to_document())
        logger.info(f"Kitap eklendi: {book.title} ({book.id})")
        return book

    def update(self, book_id: str, title: Optional[str], isbn: Optional[List[str]],
               authors: Optional[List[str]]) -> str:
        oid = self._object_id(book_id)
        RequiredFieldValidator.require(
            text_fields={"title": title},
            list_fields={"isbn": isbn, "authors": authors},
        )
        self._replace_fields(oid, Book(title=title, isbn=isbn, authors=authors).to_document())
        logger.info(f"Kitap güncellendi: {book_id}")
        return "Book updated successfully"


class LibraryRecords(_MutableRecords):
    kind = "Library"

    @property
    def collection(self):
        return self.store.libraries

    def search(self, name: Optional[str] = None) -> List[LibraryRecord]:
        # 'name' parametresi 'title' alanıyla eşleştirilir
        return [LibraryRecord.from_document(doc) for doc in self._find("title", name)]

    @staticmethod
    def _build(title: str, material_type: str, inventory: Dict[str, Any]) -> LibraryRecord:
        return LibraryRecord(title=title, material_type=material_type, inventory=Inventory.from_dict(inventory))

    def create(self, title: Optional[str], material_type: Optional[str],
               inventory: Optional[Dict[str, Any]]) -> LibraryRecord:
        RequiredFieldValidator.require(
            text_fields={"title": title, "material_type": material_type},
            object_fields={"inventory": inventory},
        )
        record = self._build(title, material_type, inventory)
        record.id = self._insert(record.to_document())
        logger.info(f"Kütüphane kaydı eklendi: {record.title} ({record.id})")
        return record

    def update(self, library_id: str, title: Optional[str], material_type: Optional[str],
               inventory: Optional[Dict[str, Any]]) -> str:
        oid = self._object_id(library_id)
        RequiredFieldValidator.require(
            text_fields={"title": title, "material_type": material_type},
            object_fields={"inventory": inventory},
        )
        # inventory birleştirilmez, tamamen değiştirilir
        self._replace_fields(oid, self._build(title, material_type, inventory).to_document())
        logger.info(f"Kütüphane kaydı güncellendi: {library_id}")
        return "Library updated successfully"


class CreatorRecords(_Records):
    kind = "Creator"

    @property
    def collection(self):
        return self.store.creators

    def search(self, name: Optional[str] = None) -> List[Creator]:
        return [Creator.from_document(doc) for doc in self._find("name", name)]
