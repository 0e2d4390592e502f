"""
Codificação de query strings/form bodies no formato do ``http_build_query`` do PHP.

A API REST pública da PushEngage consome formulários no estilo PHP:
listas e mapeamentos aninhados viram ``chave[sub]=valor``.
"""

from typing import Any, Mapping
from urllib.parse import quote_plus


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def _flatten(prefix: str, value: Any, pairs: list[tuple[str, str]]) -> None:
    if value is None:
        return
    if isinstance(value, Mapping):
        for key, item in value.items():
            _flatten(f"{prefix}[{key}]", item, pairs)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _flatten(f"{prefix}[{index}]", item, pairs)
    else:
        pairs.append((prefix, _scalar(value)))


def build_query(params: Mapping[str, Any]) -> str:
    """Converte um mapeamento em query string (``a=1&b[0]=x``)."""
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        _flatten(str(key), value, pairs)
    return "&".join(f"{quote_plus(k)}={quote_plus(v)}" for k, v in pairs)


def join_url(base_url: str, path: str) -> str:
    """Junta base e path com exatamente uma barra entre eles."""
    return base_url.rstrip("/") + "/" + path.lstrip("/")
