"""Gateway HTTP e facade da PushEngage."""
from projects.pushengage.client.http_api import PushEngageHttpClient, PRIVATE_API, REST_API
from projects.pushengage.client.pushengage_api import PushEngageAPI
from projects.pushengage.client.result import ApiResult, api_error, api_success

__all__ = [
    "PushEngageHttpClient",
    "PushEngageAPI",
    "PRIVATE_API",
    "REST_API",
    "ApiResult",
    "api_error",
    "api_success",
]
