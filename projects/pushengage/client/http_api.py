"""
Cliente HTTP para as APIs da PushEngage.

Dois dialetos:
  - API privada: JSON por padrão, header ``x-pe-api-key``, erros em ``error.message``
  - API REST pública: form-urlencoded por padrão, header ``api-key``, erros em
    ``success=false``; o corpo de sucesso é embrulhado em ``{"data": body}`` para
    ficar no mesmo formato da API privada

Timeout fixo por chamada, sem retry. Nenhuma exceção sai daqui: toda falha
vira um ApiResult.
"""

import json
import time
from typing import Any, Optional, Protocol

import httpx

from shared.infrastructure.logging import get_logger
from shared.observability.metrics import (
    pushengage_api_request_duration_seconds,
    pushengage_api_requests_total,
)
from projects.pushengage.client.result import (
    API_ERROR,
    HTTP_REQUEST_FAILED,
    INVALID_RESPONSE,
    NO_CREDENTIALS,
    ApiResult,
    api_error,
    api_success,
)
from projects.pushengage.config import PushEngageSettings, pe_settings
from projects.pushengage.repositories.options import SiteSettings
from projects.pushengage.utils.query import build_query, join_url

logger = get_logger(__name__)

PRIVATE_API = "private"
REST_API = "rest"

# Header da API key difere entre os dialetos
API_KEY_HEADERS = {
    PRIVATE_API: "x-pe-api-key",
    REST_API: "api-key",
}

DEFAULT_CONTENT_TYPES = {
    PRIVATE_API: "application/json",
    REST_API: "application/x-www-form-urlencoded",
}


def _error_message(value: Any) -> str:
    """Mensagem de erro da API sempre como texto."""
    if not value:
        return "Erro desconhecido da API."
    return value if isinstance(value, str) else str(value)


class CredentialStore(Protocol):
    async def get_site_settings(self) -> SiteSettings: ...


class PushEngageHttpClient:
    """Gateway assíncrono para as APIs privada e pública da PushEngage."""

    def __init__(
        self,
        options: CredentialStore,
        settings: PushEngageSettings = pe_settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.options = options
        self.settings = settings
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _base_url(self, api: str) -> str:
        if api == PRIVATE_API:
            return self.settings.pushengage_api_url
        return self.settings.pushengage_rest_api_url

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.pushengage_request_timeout),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    def _build_headers(self, api: str, api_key: str) -> dict[str, str]:
        return {
            API_KEY_HEADERS[api]: api_key,
            "x-pe-client": self.settings.pushengage_client_name,
            "x-pe-client-version": self.settings.pushengage_client_version,
            "x-pe-sdk-version": self.settings.pushengage_version,
            "User-Agent": self.settings.user_agent,
        }

    def _encode_body(self, api: str, body: Any) -> bytes | str:
        if api == PRIVATE_API:
            payload = {} if body is None else body
            return json.dumps(payload, ensure_ascii=False).encode("utf-8")
        return build_query(body or {})

    async def send_private_api_request(
        self,
        path: str,
        method: str = "GET",
        body: Any = None,
        content_type: Optional[str] = None,
    ) -> ApiResult:
        """Envia request para a API privada (JSON, ``x-pe-api-key``)."""
        return await self._send(PRIVATE_API, path, method, body, content_type)

    async def send_rest_api_request(
        self,
        path: str,
        method: str = "GET",
        body: Any = None,
        content_type: Optional[str] = None,
    ) -> ApiResult:
        """Envia request para a API REST pública (form-urlencoded, ``api-key``)."""
        return await self._send(REST_API, path, method, body, content_type)

    async def _send(
        self,
        api: str,
        path: str,
        method: str,
        body: Any,
        content_type: Optional[str],
    ) -> ApiResult:
        method = (method or "GET").upper()

        try:
            site = await self.options.get_site_settings()
        except Exception as e:
            logger.error("Falha ao carregar credenciais", api=api, error=str(e))
            return self._record(api, api_error(API_ERROR, str(e)))

        if not site.has_credentials:
            logger.warning("PushEngage request sem credenciais", api=api, path=path)
            return self._record(
                api,
                api_error(
                    NO_CREDENTIALS,
                    "Site não conectado. Conecte o site à PushEngage primeiro.",
                ),
            )

        url = join_url(self._base_url(api), path)
        headers = self._build_headers(api, site.api_key)
        start = time.monotonic()

        try:
            content = None
            # Corpo apenas para métodos diferentes de GET
            if method != "GET":
                if content_type:
                    headers["Content-Type"] = content_type
                    content = body
                else:
                    headers["Content-Type"] = DEFAULT_CONTENT_TYPES[api]
                    content = self._encode_body(api, body)

            logger.debug("PushEngage API request", api=api, method=method, path=path)

            client = await self._get_client()
            response = await client.request(method, url, headers=headers, content=content)

        except httpx.HTTPError as e:
            logger.warning(
                "PushEngage API falha de transporte",
                api=api,
                path=path,
                error_type=type(e).__name__,
                error=str(e),
            )
            return self._record(
                api,
                api_error(
                    HTTP_REQUEST_FAILED,
                    str(e) or type(e).__name__,
                    details={"error_type": type(e).__name__},
                    retryable=True,
                ),
            )
        except Exception as e:
            logger.error("PushEngage API erro inesperado", api=api, path=path, error=str(e))
            return self._record(api, api_error(API_ERROR, str(e)))
        finally:
            pushengage_api_request_duration_seconds.labels(api=api).observe(
                time.monotonic() - start
            )

        return self._record(api, self._parse_response(api, path, response))

    def _parse_response(self, api: str, path: str, response: httpx.Response) -> ApiResult:
        """Normaliza o corpo de resposta dos dois dialetos."""
        try:
            data = response.json()
        except ValueError:
            data = None

        if not data or not isinstance(data, dict):
            logger.warning(
                "PushEngage API resposta inválida",
                api=api,
                path=path,
                status=response.status_code,
            )
            return api_error(
                INVALID_RESPONSE,
                "Resposta inválida do servidor.",
                details={"status_code": response.status_code},
            )

        if api == PRIVATE_API:
            error = data.get("error")
            if error:
                message = _error_message(error.get("message") if isinstance(error, dict) else error)
                logger.warning("PushEngage API erro", api=api, path=path, message=message)
                return api_error(API_ERROR, message, details=data)
            return api_success(data)

        if data.get("success") is False:
            message = _error_message(data.get("message"))
            logger.warning("PushEngage API erro", api=api, path=path, message=message)
            return api_error(API_ERROR, message, details=data)

        # Mesmo formato de resposta da API privada
        return api_success({"data": data})

    def _record(self, api: str, result: ApiResult) -> ApiResult:
        outcome = "success" if result["ok"] else result["error"]["code"]
        pushengage_api_requests_total.labels(api=api, outcome=outcome).inc()
        return result
