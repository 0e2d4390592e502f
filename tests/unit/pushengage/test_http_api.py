import json
from urllib.parse import parse_qs

import httpx
import pytest

from projects.pushengage.client.http_api import PushEngageHttpClient
from projects.pushengage.config import PushEngageSettings
from projects.pushengage.repositories.options import SiteSettings

from tests.unit.pushengage.conftest import FakeOptions, RecordingTransport


def _settings():
    return PushEngageSettings(
        pushengage_api_url="https://private.test/apiv1/",
        pushengage_rest_api_url="https://rest.test/apiv1",
        pushengage_version="4.0.10",
        pushengage_client_version="6.5",
        pushengage_site_url="https://blog.test",
    )


def _client(options, transport):
    return PushEngageHttpClient(options, settings=_settings(), transport=transport)


class _FailingOptions:
    async def get_site_settings(self):
        raise RuntimeError("banco indisponível")


@pytest.mark.asyncio
async def test_no_credentials_makes_no_network_call(disconnected_options):
    transport = RecordingTransport()
    client = _client(disconnected_options, transport)

    private = await client.send_private_api_request("sites/1/notifications")
    rest = await client.send_rest_api_request("segments/addSegmentWithHash", method="POST")

    assert private["ok"] is False
    assert private["error"]["code"] == "no-credentials"
    assert rest["error"]["code"] == "no-credentials"
    assert transport.requests == []


@pytest.mark.asyncio
async def test_only_site_id_is_not_enough():
    transport = RecordingTransport()
    client = _client(FakeOptions(SiteSettings(site_id="1", api_key="")), transport)

    result = await client.send_private_api_request("sites/1/segments")

    assert result["error"]["code"] == "no-credentials"
    assert transport.requests == []


@pytest.mark.asyncio
async def test_credential_load_failure_becomes_api_error():
    transport = RecordingTransport()
    client = _client(_FailingOptions(), transport)

    result = await client.send_private_api_request("sites/1/segments")

    assert result["ok"] is False
    assert result["error"]["code"] == "api-error"
    assert "banco indisponível" in result["error"]["message"]
    assert transport.requests == []


@pytest.mark.asyncio
async def test_private_api_sends_json_with_private_key_header(connected_options):
    transport = RecordingTransport(body={"status": 200, "data": {"id": 9}})
    client = _client(connected_options, transport)

    result = await client.send_private_api_request(
        "/sites/4242/notifications?action=sent",
        method="POST",
        body={"notification_title": "Olá"},
    )

    request = transport.requests[0]
    assert result == {"ok": True, "data": {"id": 9}, "meta": None, "user": None, "error": None}
    assert str(request.url) == "https://private.test/apiv1/sites/4242/notifications?action=sent"
    assert request.method == "POST"
    assert request.headers["x-pe-api-key"] == "secret-key"
    assert "api-key" not in request.headers
    assert request.headers["content-type"] == "application/json"
    assert request.headers["x-pe-client"] == "WordPress"
    assert request.headers["x-pe-client-version"] == "6.5"
    assert request.headers["x-pe-sdk-version"] == "4.0.10"
    assert request.headers["user-agent"] == "WordPress/6.5; Plugin/4.0.10; https://blog.test"
    assert json.loads(request.content) == {"notification_title": "Olá"}


@pytest.mark.asyncio
async def test_rest_api_sends_form_with_public_key_header(connected_options):
    transport = RecordingTransport(body={"success": True, "count": 2})
    client = _client(connected_options, transport)

    result = await client.send_rest_api_request(
        "segments/addSegmentWithHash",
        method="POST",
        body={"hashes": ["h1", "h2"], "segment_id": 5},
    )

    request = transport.requests[0]
    assert str(request.url) == "https://rest.test/apiv1/segments/addSegmentWithHash"
    assert request.headers["api-key"] == "secret-key"
    assert "x-pe-api-key" not in request.headers
    assert request.headers["content-type"] == "application/x-www-form-urlencoded"
    assert parse_qs(request.content.decode()) == {
        "hashes[0]": ["h1"],
        "hashes[1]": ["h2"],
        "segment_id": ["5"],
    }
    assert result["ok"] is True
    assert result["data"] == {"success": True, "count": 2}


@pytest.mark.asyncio
async def test_explicit_content_type_passes_body_through(connected_options):
    transport = RecordingTransport()
    client = _client(connected_options, transport)

    await client.send_private_api_request(
        "sites/4242/segments",
        method="POST",
        body="raw-payload",
        content_type="text/plain",
    )

    request = transport.requests[0]
    assert request.headers["content-type"] == "text/plain"
    assert request.content == b"raw-payload"


@pytest.mark.asyncio
async def test_get_request_carries_no_body(connected_options):
    transport = RecordingTransport()
    client = _client(connected_options, transport)

    await client.send_private_api_request("sites/4242/segments", body={"ignored": True})

    request = transport.requests[0]
    assert request.method == "GET"
    assert request.content == b""
    assert "content-type" not in request.headers


@pytest.mark.asyncio
@pytest.mark.parametrize("raw", [b"", b"<html>erro</html>", b"{}", b"[1, 2]"])
async def test_unusable_body_is_invalid_response(connected_options, raw):
    transport = RecordingTransport(raw=raw, status_code=500)
    client = _client(connected_options, transport)

    result = await client.send_private_api_request("sites/4242/segments")

    assert result["ok"] is False
    assert result["error"]["code"] == "invalid-response"
    assert result["error"]["details"] == {"status_code": 500}


@pytest.mark.asyncio
async def test_private_error_message_is_surfaced(connected_options):
    body = {"error": {"message": "Segmento não encontrado", "code": 404}}
    transport = RecordingTransport(body=body, status_code=404)
    client = _client(connected_options, transport)

    result = await client.send_private_api_request("sites/4242/segments/1")

    assert result["error"]["code"] == "api-error"
    assert result["error"]["message"] == "Segmento não encontrado"
    assert result["error"]["details"] == body
    assert result["error"]["retryable"] is False


@pytest.mark.asyncio
async def test_private_success_exposes_meta_and_user(connected_options):
    body = {"status": 200, "data": [{"id": 1}], "meta": {"total": 1}, "user": {"id": 3}}
    transport = RecordingTransport(body=body)
    client = _client(connected_options, transport)

    result = await client.send_private_api_request("sites/4242/notifications")

    assert result["data"] == [{"id": 1}]
    assert result["meta"] == {"total": 1}
    assert result["user"] == {"id": 3}


@pytest.mark.asyncio
async def test_rest_success_false_is_api_error(connected_options):
    transport = RecordingTransport(body={"success": False, "message": "Hash inválido"})
    client = _client(connected_options, transport)

    result = await client.send_rest_api_request("segments/addSegmentWithHash", method="POST")

    assert result["error"]["code"] == "api-error"
    assert result["error"]["message"] == "Hash inválido"


@pytest.mark.asyncio
async def test_rest_body_without_success_flag_is_success(connected_options):
    transport = RecordingTransport(body={"error": "ignorado pela API pública"})
    client = _client(connected_options, transport)

    result = await client.send_rest_api_request("segments", method="POST")

    assert result["ok"] is True
    assert result["data"] == {"error": "ignorado pela API pública"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exc,error_type",
    [
        (httpx.ConnectError("conexão recusada"), "ConnectError"),
        (httpx.ReadTimeout("timeout"), "ReadTimeout"),
    ],
)
async def test_transport_failure_is_retryable(connected_options, exc, error_type):
    transport = RecordingTransport(exc=exc)
    client = _client(connected_options, transport)

    result = await client.send_private_api_request("sites/4242/segments")

    assert result["ok"] is False
    assert result["error"]["code"] == "http-request-failed"
    assert result["error"]["retryable"] is True
    assert result["error"]["details"] == {"error_type": error_type}


@pytest.mark.asyncio
async def test_unexpected_exception_is_api_error(connected_options):
    transport = RecordingTransport(exc=RuntimeError("boom"))
    client = _client(connected_options, transport)

    result = await client.send_private_api_request("sites/4242/segments")

    assert result["error"]["code"] == "api-error"
    assert result["error"]["message"] == "boom"
    assert result["error"]["retryable"] is False


@pytest.mark.asyncio
async def test_close_releases_client(connected_options):
    client = _client(connected_options, RecordingTransport())
    await client.send_private_api_request("sites/4242/segments")

    await client.close()

    assert client._client.is_closed


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body,api",
    [
        ({"error": {"message": {"detail": "cota excedida"}}}, "private"),
        ({"error": "cota excedida"}, "private"),
        ({"success": False, "message": ["cota", "excedida"]}, "rest"),
        ({"success": False}, "rest"),
    ],
)
async def test_api_error_message_is_always_text(connected_options, body, api):
    transport = RecordingTransport(body=body)
    client = _client(connected_options, transport)

    if api == "private":
        result = await client.send_private_api_request("sites/4242/segments")
    else:
        result = await client.send_rest_api_request("segments", method="POST")

    assert result["error"]["code"] == "api-error"
    assert isinstance(result["error"]["message"], str)
    assert result["error"]["message"]
    assert result["error"]["details"] == body
