"""Conversão de ApiResult em respostas HTTP."""

from fastapi.responses import JSONResponse

from shared.presentation.schemas.errors import ErrorDetail, ErrorResponse
from projects.pushengage.client.result import (
    NO_CREDENTIALS,
    UPSTREAM_ERROR_CODES,
    VALIDATION_ERROR_CODES,
    ApiResult,
)


def status_for_error(code: str) -> int:
    if code == NO_CREDENTIALS:
        return 409
    if code in VALIDATION_ERROR_CODES:
        return 400
    if code in UPSTREAM_ERROR_CODES:
        return 502
    return 500


def result_response(result: ApiResult, success_status: int = 200) -> JSONResponse:
    """Sucesso vira ``{success, data, meta, user}``; falha vira ErrorResponse."""
    if result["ok"]:
        return JSONResponse(
            status_code=success_status,
            content={
                "success": True,
                "data": result["data"],
                "meta": result["meta"],
                "user": result["user"],
            },
        )

    error = result["error"]
    body = ErrorResponse(
        error=ErrorDetail(
            code=error["code"],
            message=error["message"],
            details=error["details"],
        )
    )
    return JSONResponse(status_code=status_for_error(error["code"]), content=body.model_dump())
