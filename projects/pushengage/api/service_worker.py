"""
Bootstrap do service worker da PushEngage.

Endpoint público: recebe ``appId`` (SDK atual) ou ``domain`` (subdomínio
legado), valida contra uma whitelist de caracteres e devolve o JavaScript
que importa o script da PushEngage.
"""

import html
import re
from typing import Optional

from fastapi import APIRouter, Query
from fastapi.responses import Response

from projects.pushengage.config import pe_settings

router = APIRouter()

APP_ID_RE = re.compile(r"[a-zA-Z0-9\-_]+")
SUBDOMAIN_RE = re.compile(r"[a-zA-Z0-9\-]+")

SERVICE_WORKER_HEADERS = {
    "Service-Worker-Allowed": "/",
    "X-Robots-Tag": "none",
}

INVALID_REQUEST_SCRIPT = (
    "console.error('Invalid service worker request URL. "
    "Missing or invalid domain or app_id.')"
)


def render_service_worker(app_id: Optional[str], domain: Optional[str]) -> str:
    """Gera o script do service worker para os parâmetros recebidos."""
    if app_id and APP_ID_RE.fullmatch(app_id):
        return (
            f"var PUSHENGAGE_APP_ID = '{html.escape(app_id, quote=True)}';"
            f"importScripts('{pe_settings.pushengage_sw_sdk_url}');"
        )

    if domain and SUBDOMAIN_RE.fullmatch(domain):
        url = pe_settings.pushengage_sw_subdomain_url.format(
            subdomain=html.escape(domain, quote=True)
        )
        return f"importScripts('{url}');"

    return INVALID_REQUEST_SCRIPT


@router.get("/service-worker.js", include_in_schema=False)
async def service_worker(
    app_id: Optional[str] = Query(None, alias="appId"),
    domain: Optional[str] = Query(None),
):
    return Response(
        content=render_service_worker(app_id, domain),
        media_type="application/javascript",
        headers=SERVICE_WORKER_HEADERS,
    )
