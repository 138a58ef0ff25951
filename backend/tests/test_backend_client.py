"""Tests for the workout backend HTTP client."""

import asyncio
import json

import httpx
import pytest

from lift_logger.backend.client import BackendClient
from lift_logger.errors import BackendRejected, BackendTimeout, BackendUnavailable

BASE_URL = "https://backend.test/exec"


def _client(handler, base_url: str = BASE_URL) -> BackendClient:
    return BackendClient(
        base_url=base_url,
        secret="s3cret",
        timeout=5.0,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_submit_sends_operation_secret_and_json_body() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True, "session_id": "abc"})

    backend = _client(handler)
    reply = await backend.submit("session_start", {"maybe_plan_text": "plan"})
    await backend.close()

    assert reply == {"ok": True, "session_id": "abc"}
    request = seen[0]
    assert request.method == "POST"
    assert request.url.params["fn"] == "session_start"
    assert request.url.params["secret"] == "s3cret"
    assert json.loads(request.content) == {"maybe_plan_text": "plan"}


@pytest.mark.asyncio
async def test_submit_defaults_to_empty_payload() -> None:
    bodies: list[bytes] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(request.content)
        return httpx.Response(200, json={"ok": True, "exercises": []})

    await _client(handler).submit("list_exercises")
    assert json.loads(bodies[0]) == {}


@pytest.mark.asyncio
async def test_reply_with_false_flag_is_rejected_with_message() -> None:
    backend = _client(lambda r: httpx.Response(200, json={"ok": False, "error": "bad plan"}))

    with pytest.raises(BackendRejected) as excinfo:
        await backend.submit("session_start", {})

    assert excinfo.value.message == "bad plan"


@pytest.mark.asyncio
async def test_reply_without_success_flag_is_rejected() -> None:
    backend = _client(lambda r: httpx.Response(200, json={"session_id": "abc"}))

    with pytest.raises(BackendRejected) as excinfo:
        await backend.submit("session_start", {})

    assert excinfo.value.message == "backend reported a failure"


@pytest.mark.asyncio
async def test_non_object_reply_is_unavailable() -> None:
    backend = _client(lambda r: httpx.Response(200, json=["not", "an", "object"]))

    with pytest.raises(BackendUnavailable):
        await backend.submit("list_exercises", {})


@pytest.mark.asyncio
async def test_invalid_json_is_unavailable() -> None:
    backend = _client(lambda r: httpx.Response(200, text="<html>login</html>"))

    with pytest.raises(BackendUnavailable):
        await backend.submit("list_exercises", {})


@pytest.mark.asyncio
async def test_http_error_status_is_unavailable_not_timeout() -> None:
    backend = _client(lambda r: httpx.Response(500, text="boom"))

    with pytest.raises(BackendUnavailable) as excinfo:
        await backend.submit("log_set", {})

    assert not isinstance(excinfo.value, BackendTimeout)


@pytest.mark.asyncio
async def test_network_error_is_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(BackendUnavailable) as excinfo:
        await _client(handler).submit("log_set", {})

    assert not isinstance(excinfo.value, BackendTimeout)


@pytest.mark.asyncio
async def test_caller_deadline_raises_timeout() -> None:
    async def slow(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(5)
        return httpx.Response(200, json={"ok": True})

    with pytest.raises(BackendTimeout):
        await _client(slow).submit("list_exercises", {}, timeout=0.05)


@pytest.mark.asyncio
async def test_httpx_timeout_raises_timeout() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    with pytest.raises(BackendTimeout):
        await _client(handler).submit("session_end", {})


@pytest.mark.asyncio
async def test_unconfigured_endpoint_never_sends() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"ok": True})

    backend = _client(handler, base_url="")

    assert backend.configured is False
    with pytest.raises(BackendUnavailable):
        await backend.submit("session_start", {})
    assert calls == []
