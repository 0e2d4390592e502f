"""
Contrato de retorno padronizado do gateway e da facade PushEngage.

ApiResult: TypedDict com ok, data, meta, user, error.
api_success(): normaliza o corpo de resposta da API em sucesso.
api_error(): monta uma falha estruturada.

Nenhuma exceção atravessa a facade: todo resultado é um ApiResult.

Codigos de erro:
  - no-credentials: site não conectado (sem chamada de rede)
  - empty-params: parâmetros ausentes ou não-mapeamento
  - missing-params: campos obrigatórios ausentes (agregados)
  - invalid-request: parâmetros inválidos (agregados)
  - empty-notification-id: id da notificação ausente
  - invalid-response: corpo vazio ou não-JSON
  - api-error: erro de negócio reportado pela API ou exceção inesperada
  - http-request-failed: falha de transporte (conexão, timeout)
"""

from typing import Any, Optional, TypedDict

NO_CREDENTIALS = "no-credentials"
EMPTY_PARAMS = "empty-params"
MISSING_PARAMS = "missing-params"
INVALID_REQUEST = "invalid-request"
EMPTY_NOTIFICATION_ID = "empty-notification-id"
INVALID_RESPONSE = "invalid-response"
API_ERROR = "api-error"
HTTP_REQUEST_FAILED = "http-request-failed"

# Falhas detectadas antes de qualquer I/O
VALIDATION_ERROR_CODES = frozenset({
    NO_CREDENTIALS,
    EMPTY_PARAMS,
    MISSING_PARAMS,
    INVALID_REQUEST,
    EMPTY_NOTIFICATION_ID,
})

# Falhas vindas do upstream (resposta ou transporte)
UPSTREAM_ERROR_CODES = frozenset({
    INVALID_RESPONSE,
    API_ERROR,
    HTTP_REQUEST_FAILED,
})


class ApiError(TypedDict):
    code: str
    message: str
    details: Optional[Any]
    retryable: bool


class ApiResult(TypedDict):
    """Resultado de uma chamada ao gateway/facade."""
    ok: bool
    data: Optional[Any]
    meta: Optional[Any]
    user: Optional[Any]
    error: Optional[ApiError]


def api_success(body: dict) -> ApiResult:
    """Sucesso a partir do corpo `{status?, data, meta?, user?}`."""
    return {
        "ok": True,
        "data": body.get("data"),
        "meta": body.get("meta"),
        "user": body.get("user"),
        "error": None,
    }


def api_error(
    code: str,
    message: str,
    details: Optional[Any] = None,
    retryable: bool = False,
) -> ApiResult:
    """Helper para retorno de erro.

    Args:
        code: Codigo do erro (ver lista no topo do módulo).
        message: Mensagem exibível ao admin.
        details: Payload original ou detalhes de validação.
        retryable: Se a operação pode ser repetida sem mudar os parâmetros.
    """
    return {
        "ok": False,
        "data": None,
        "meta": None,
        "user": None,
        "error": {
            "code": code,
            "message": message,
            "details": details,
            "retryable": retryable,
        },
    }


def validation_error(code: str, messages: list[str]) -> ApiResult:
    """Falha de validação agregando todas as mensagens."""
    return api_error(code, " ".join(messages), details={"messages": list(messages)})

