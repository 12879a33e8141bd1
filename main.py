import logging
from typing import Optional

import typer
import uvicorn
from rich.console import Console

from config import settings
from database import CatalogStore
from errors import CatalogError, StartupConnectivityError
from records import BookRecords, CreatorRecords, LibraryRecords
from utils.ui_helpers import set_output_mode, print_books, print_libraries, print_creators

console = Console()
logger = logging.getLogger(__name__)

app = typer.Typer(help="Kütüphane kataloğu CLI")


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _connect_or_exit() -> CatalogStore:
    """Depoya bağlan; başarısız olursa 1 çıkış koduyla hemen sonlan (yeniden deneme yok)."""
    try:
        return CatalogStore.connect(settings)
    except StartupConnectivityError as e:
        console.print(f"[bold red]Hata:[/] {e}")
        raise typer.Exit(code=1)


@app.callback()
def _global_options(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Çıktı formatı: plain | json | rich (varsayılan: plain)",
    )
):
    """CLI için genel seçenekler (ör. çıktı modu)."""
    if output:
        set_output_mode(output)


@app.command("serve")
def cli_serve(
    host: str = typer.Option(settings.api_host, "--host", help="Dinlenecek adres"),
    port: int = typer.Option(settings.api_port, "--port", help="Dinlenecek port"),
    reload: bool = typer.Option(False, "--reload", help="Kod değişikliklerinde otomatik yeniden yükle (geliştirme)"),
):
    """API sunucusunu başlat. Depo bağlantısı kurulamazsa sunucu hiç açılmaz."""
    configure_logging()
    store = _connect_or_exit()
    log_level = settings.log_level.lower()

    logger.info(f"Sunucu başlatılıyor: http://{host}:{port}")
    if reload:
        # uvicorn yeniden yükleme için içe aktarma dizesi ister; bağlantıyı api:app lifespan'i kendisi kurar
        store.close()
        uvicorn.run("api:app", host=host, port=port, reload=True, log_level=log_level)
        return

    from api import create_app

    try:
        uvicorn.run(create_app(settings, store), host=host, port=port, log_level=log_level)
    finally:
        store.close()


@app.command("ping")
def cli_ping():
    """MongoDB bağlantısını test et."""
    configure_logging("WARNING")
    store = _connect_or_exit()
    store.close()
    print("Connected to MongoDB")


def _run_search(records_cls, query: Optional[str], printer) -> None:
    configure_logging("WARNING")
    store = _connect_or_exit()
    try:
        printer(records_cls(store, settings.default_list_limit).search(query))
    except CatalogError as e:
        console.print(f"[bold red]Hata:[/] {e}")
        raise typer.Exit(code=1)
    finally:
        store.close()


@app.command("books")
def cli_books(title: Optional[str] = typer.Option(None, "--title", "-t", help="Başlıkta aranacak metin")):
    """Kitapları listele veya başlığa göre ara."""
    _run_search(BookRecords, title, print_books)


@app.command("libraries")
def cli_libraries(name: Optional[str] = typer.Option(None, "--name", "-n", help="Başlıkta aranacak metin")):
    """Kütüphane kayıtlarını listele veya başlığa göre ara."""
    _run_search(LibraryRecords, name, print_libraries)


@app.command("creators")
def cli_creators(name: Optional[str] = typer.Option(None, "--name", "-n", help="İsimde aranacak metin")):
    """Yaratıcıları listele veya isme göre ara."""
    _run_search(CreatorRecords, name, print_creators)


if __name__ == "__main__":
    app()
