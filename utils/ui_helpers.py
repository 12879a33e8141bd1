import os
import json
from typing import List, Any, Sequence, Tuple
from rich.console import Console
from rich.table import Table

# Environment variable to control CLI output mode
# İzin verilen değerler: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "CATALOG_CLI_OUTPUT"

_console = Console()

def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in {"plain", "json", "rich"}:
        os.environ[OUTPUT_MODE_ENV] = mode
    else:
        # Geçersiz değerleri yoksay; mevcut varsayılanı koru
        pass

def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, "plain").lower()

def _print_records(items: List[Any], empty_message: str, title: str,
                   columns: Sequence[Tuple[str, str]], plain_line) -> None:
    """Kayıtları mevcut çıktı moduna göre yazdır.
    - plain: kayıt başına tek satır
    - json: to_dict() çıktılarından oluşan JSON dizisi
    - rich: Rich tablosu
    """
    mode = get_output_mode()

    if not items:
        print(empty_message)
        return

    if mode == "json":
        print(json.dumps([item.to_dict() for item in items], ensure_ascii=False))
    elif mode == "rich":
        table = Table(title=title, show_lines=True, header_style="bold cyan")
        for header, _ in columns:
            table.add_column(header)
        for item in items:
            row = item.to_dict()
            table.add_row(*[_cell(row.get(key)) for _, key in columns])
        _console.print(table)
    else:
        for item in items:
            print(plain_line(item))

def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if isinstance(value, dict):
        return " / ".join(f"{k}={v}" for k, v in value.items())
    return str(value)

def print_books(books: List[Any]) -> None:
    _print_records(
        books, "No books found.", "📚 Books",
        [("ID", "_id"), ("Title", "title"), ("ISBN", "isbn"), ("Authors", "authors")],
        lambda b: f"{b.id} - {b.title} by {', '.join(b.authors)}",
    )

def print_libraries(libraries: List[Any]) -> None:
    def line(lib) -> str:
        if lib.inventory is None:
            return f"{lib.id} - {lib.title} [{lib.material_type}] (no inventory)"
        inv = lib.inventory
        return (f"{lib.id} - {lib.title} [{lib.material_type}] "
                f"total={inv.total_copies} available={inv.copies_available} "
                f"checked_out={inv.copies_checked_out} lost={inv.copies_lost}")

    _print_records(
        libraries, "No libraries found.", "🏛️ Libraries",
        [("ID", "_id"), ("Title", "title"), ("Material", "material_type"), ("Inventory", "inventory")],
        line,
    )

def print_creators(creators: List[Any]) -> None:
    _print_records(
        creators, "No creators found.", "✍️ Creators",
        [("Name", "name"), ("Works", "works")],
        lambda c: f"{c.name}: {', '.join(str(w) for w in c.works)}",
    )
