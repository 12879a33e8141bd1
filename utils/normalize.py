"""Depodan okunan eski/bozuk belgeler için okuma tarafı dönüştürücüleri."""
from typing import Any, List


def text_or_default(value: Any, default: str) -> str:
    if not value:
        return default
    return value if isinstance(value, str) else str(value)


def as_text_list(value: Any) -> List[str]:
    # Eski belgelerde tek bir dize olarak saklanmış alanlar olabilir
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)):
        return [str(value)]
    return [v if isinstance(v, str) else str(v) for v in value if v is not None]


def as_counter(value: Any) -> int:
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    return 0
