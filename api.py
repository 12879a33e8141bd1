import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field, field_validator

from config import Settings, settings as default_settings
from database import CatalogStore
from errors import CatalogError, StartupConnectivityError
from records import BookRecords, CreatorRecords, LibraryRecords

logger = logging.getLogger(__name__)


# --- Models ---
class BookPayload(BaseModel):
    # Tüm alanlar isteğe bağlı: eksik alanlar 422 değil 400 ile raporlanır
    title: Optional[str] = None
    isbn: Optional[List[str]] = None
    authors: Optional[List[str]] = None

    @field_validator("isbn", "authors", mode="before")
    @classmethod
    def _wrap_single_value(cls, value: Any) -> Any:
        # Tek bir dize gönderilirse tek elemanlı listeye çevrilir; boş dize eksik sayılır
        if isinstance(value, str):
            return [value] if value else None
        return value


class BookModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(default=None, alias="_id")
    title: str
    isbn: List[str]
    authors: List[str]


class InventoryPayload(BaseModel):
    total_copies: Optional[int] = None
    copies_available: Optional[int] = None
    copies_checked_out: Optional[int] = None
    copies_lost: Optional[int] = None


class LibraryPayload(BaseModel):
    title: Optional[str] = None
    material_type: Optional[str] = None
    inventory: Optional[InventoryPayload] = None


class InventoryModel(BaseModel):
    total_copies: int = 0
    copies_available: int = 0
    copies_checked_out: int = 0
    copies_lost: int = 0


class LibraryModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(default=None, alias="_id")
    title: str
    material_type: str
    inventory: Optional[InventoryModel] = None


class CreatorModel(BaseModel):
    name: str
    works: List[Any] = []


class MessageModel(BaseModel):
    message: str


# --- Dependencies ---
def get_store(request: Request) -> CatalogStore:
    return request.app.state.store


def get_book_records(request: Request, store: CatalogStore = Depends(get_store)) -> BookRecords:
    return BookRecords(store, request.app.state.settings.default_list_limit)


def get_library_records(request: Request, store: CatalogStore = Depends(get_store)) -> LibraryRecords:
    return LibraryRecords(store, request.app.state.settings.default_list_limit)


def get_creator_records(request: Request, store: CatalogStore = Depends(get_store)) -> CreatorRecords:
    return CreatorRecords(store, request.app.state.settings.default_list_limit)


def _http_error(e: CatalogError) -> HTTPException:
    """Katalog hatasını HTTP yanıtına çevir. Depo hataları ham mesajla 500 döner."""
    if e.status_code >= 500:
        logger.error(f"Depo hatası: {e}")
    return HTTPException(status_code=e.status_code, detail=str(e))


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        # ilk eleman her zaman "body"/"query"/"path"
        loc = ".".join(str(p) for p in err.get("loc", ())[1:])
        parts.append(f"{loc}: {err.get('msg')}" if loc else err.get("msg", ""))
    return "Invalid request: " + "; ".join(parts)


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Bozuk JSON ve yanlış türdeki alanlar 422 yerine 400 ile reddedilir."""
    return JSONResponse(status_code=400, content={"detail": _format_validation_errors(exc)})


def _inventory_dict(payload: LibraryPayload) -> Optional[Dict[str, Any]]:
    if payload.inventory is None:
        return None
    return payload.inventory.model_dump()


# --- API Endpoints ---
router = APIRouter()


@router.get("/test", response_class=PlainTextResponse)
def test_connection():
    """Sunucunun ayakta olduğunu doğrulayan basit uç nokta."""
    return "Server and MongoDB are working fine"


@router.get("/books", response_model=List[BookModel])
def list_books(
    title: Optional[str] = Query(None, description="Case-insensitive title substring"),
    records: BookRecords = Depends(get_book_records),
):
    """Başlığa göre kitap ara; sorgu yoksa ilk 10 kayıt döner."""
    try:
        books = records.search(title)
    except CatalogError as e:
        raise _http_error(e)
    return [BookModel(**b.to_dict()) for b in books]


@router.post("/books", response_model=BookModel, status_code=201)
def create_book(payload: BookPayload, records: BookRecords = Depends(get_book_records)):
    try:
        book = records.create(payload.title, payload.isbn, payload.authors)
    except CatalogError as e:
        raise _http_error(e)
    return BookModel(**book.to_dict())


@router.put("/books/{book_id}", response_model=MessageModel)
def update_book(book_id: str, payload: BookPayload, records: BookRecords = Depends(get_book_records)):
    """Kitabın başlık, ISBN ve yazar alanlarını tamamen değiştir."""
    try:
        message = records.update(book_id, payload.title, payload.isbn, payload.authors)
    except CatalogError as e:
        raise _http_error(e)
    return MessageModel(message=message)


@router.delete("/books/{book_id}", response_model=MessageModel)
def delete_book(book_id: str, records: BookRecords = Depends(get_book_records)):
    try:
        message = records.delete(book_id)
    except CatalogError as e:
        raise _http_error(e)
    return MessageModel(message=message)


@router.get("/libraries", response_model=List[LibraryModel])
def list_libraries(
    name: Optional[str] = Query(None, description="Matched against the record title"),
    records: LibraryRecords = Depends(get_library_records),
):
    try:
        libraries = records.search(name)
    except CatalogError as e:
        raise _http_error(e)
    return [LibraryModel(**lib.to_dict()) for lib in libraries]


@router.post("/libraries", response_model=LibraryModel, status_code=201)
def create_library(payload: LibraryPayload, records: LibraryRecords = Depends(get_library_records)):
    """Yeni kütüphane kaydı ekle; eksik stok sayaçları 0 olarak kaydedilir."""
    try:
        record = records.create(payload.title, payload.material_type, _inventory_dict(payload))
    except CatalogError as e:
        raise _http_error(e)
    return LibraryModel(**record.to_dict())


@router.put("/libraries/{library_id}", response_model=MessageModel)
def update_library(library_id: str, payload: LibraryPayload,
                   records: LibraryRecords = Depends(get_library_records)):
    try:
        message = records.update(library_id, payload.title, payload.material_type, _inventory_dict(payload))
    except CatalogError as e:
        raise _http_error(e)
    return MessageModel(message=message)


@router.delete("/libraries/{library_id}", response_model=MessageModel)
def delete_library(library_id: str, records: LibraryRecords = Depends(get_library_records)):
    try:
        message = records.delete(library_id)
    except CatalogError as e:
        raise _http_error(e)
    return MessageModel(message=message)


@router.get("/creators", response_model=List[CreatorModel])
def list_creators(
    name: Optional[str] = Query(None, description="Case-insensitive name substring"),
    records: CreatorRecords = Depends(get_creator_records),
):
    try:
        creators = records.search(name)
    except CatalogError as e:
        raise _http_error(e)
    return [CreatorModel(**c.to_dict()) for c in creators]


def create_app(settings: Optional[Settings] = None, store: Optional[CatalogStore] = None) -> FastAPI:
    """FastAPI uygulamasını oluştur.

    store verilmezse bağlantı lifespan içinde başlangıçta kurulur; bağlantı
    kurulamazsa hata yeniden yükseltilir ve sunucu hiç istek kabul etmez.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_store = app.state.store is None
        if owns_store:
            try:
                app.state.store = CatalogStore.connect(settings)
            except StartupConnectivityError as e:
                logger.critical(f"Depo bağlantısı kurulamadı, sunucu başlatılmıyor: {e}")
                raise
        try:
            yield
        finally:
            if owns_store and app.state.store is not None:
                app.state.store.close()
                app.state.store = None

    app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store

    # --- CORS ---
    logger.debug(f"CORS izinli kaynaklar: {settings.cors_allowed_origins}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.include_router(router)
    return app


app = create_app()
