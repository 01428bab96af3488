# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import asyncio

import httpx
import pytest

from resttemplate.errors import ApplicationError, ErrorCategory, TransportError
from resttemplate.http.adapters import StubHttpClient
from resttemplate.http.models import FullResponse, HttpRequest, HttpResponse
from resttemplate.invoker import Invoker, decode_body, error_message

JSON_HEADERS = {"content-type": "application/json; charset=utf-8"}


def json_response(status: int, text: str) -> HttpResponse:
    return HttpResponse(ok=True, status_code=status, headers=dict(JSON_HEADERS), text=text)


def test_decode_body_json_and_text():
    assert decode_body(json_response(200, '{"a": 1}')) == {"a": 1}
    assert decode_body(json_response(200, "not json")) == "not json"
    assert decode_body(json_response(204, "")) == ""
    assert decode_body(HttpResponse(ok=True, status_code=200, headers={"content-type": "text/plain"}, text='{"a": 1}')) == '{"a": 1}'


def test_error_message_sources():
    assert error_message(400, {"error": {"message": "bad input"}}) == "bad input"
    assert error_message(400, {"message": "nope"}) == "nope"
    assert error_message(401, {"error": "unauthorized"}) == "unauthorized"
    assert error_message(500, " boom ") == "boom"
    assert error_message(400, {"detail": 1}) == '{"detail": 1}'
    assert error_message(404, "") == "Not Found"
    assert error_message(599, None) == "HTTP 599"


def test_classify_success_body_and_full_response():
    response = json_response(200, '{"ok": true}')
    assert Invoker(StubHttpClient()).classify(response).value == {"ok": True}

    full = Invoker(StubHttpClient(), full_response=True).classify(response).value
    assert isinstance(full, FullResponse)
    assert full.status_code == 200
    assert full.body == {"ok": True}
    assert full.headers["content-type"].startswith("application/json")


@pytest.mark.parametrize("status", [300, 302, 400, 404, 500])
def test_classify_status_at_or_above_300_is_application_error(status):
    result = Invoker(StubHttpClient()).classify(json_response(status, '{"message": "failed"}'))
    assert isinstance(result.error, ApplicationError)
    assert result.error.status_code == status
    assert result.error.message == "failed"
    assert result.value == {"message": "failed"}
    assert result.response.status_code == status


def test_classify_missing_status_is_transport_error():
    result = Invoker(StubHttpClient()).classify(HttpResponse(ok=False, error_message="timed out", error_type="ReadTimeout"))
    assert isinstance(result.error, TransportError)
    assert result.error.message == "timed out"
    assert result.error.category is ErrorCategory.TIMEOUT


def test_execute_passes_transport_exceptions_through_unchanged():
    failure = httpx.ConnectError("refused")

    class FailingClient:
        async def request(self, request):  # noqa: ARG002
            raise failure

    result = asyncio.run(Invoker(FailingClient()).execute(HttpRequest(url="http://api.test")))
    assert result.error is failure
    assert result.response is None


def test_dispatch_returns_task_resolving_to_body():
    client = StubHttpClient(default=json_response(201, '{"id": 7}'))

    async def scenario():
        task = Invoker(client).dispatch(HttpRequest(url="http://api.test"))
        assert isinstance(task, asyncio.Task)
        return await task

    assert asyncio.run(scenario()) == {"id": 7}
    assert len(client.requests) == 1


def test_dispatch_task_raises_application_error():
    client = StubHttpClient(default=json_response(400, '{"message": "bad"}'))

    async def scenario():
        return await Invoker(client).dispatch(HttpRequest(url="http://api.test"))

    with pytest.raises(ApplicationError) as excinfo:
        asyncio.run(scenario())
    assert excinfo.value.status_code == 400
    assert isinstance(excinfo.value.message, str)


def test_dispatch_callback_called_once_and_returns_none():
    client = StubHttpClient(default=json_response(200, '{"a": 1}'))
    calls = []

    async def scenario():
        done = asyncio.get_running_loop().create_future()

        def callback(error, value, response):
            calls.append((error, value, response))
            done.set_result(None)

        assert Invoker(client).dispatch(HttpRequest(url="http://api.test"), callback) is None
        await done
        await asyncio.sleep(0)

    asyncio.run(scenario())
    assert len(calls) == 1
    error, value, response = calls[0]
    assert error is None
    assert value == {"a": 1}
    assert response.status_code == 200


def test_dispatch_callback_receives_application_error_and_body():
    client = StubHttpClient(default=json_response(400, '{"detail": "x"}'))

    async def scenario():
        done = asyncio.get_running_loop().create_future()
        Invoker(client).dispatch(HttpRequest(url="http://api.test"), lambda *args: done.set_result(args))
        return await done

    error, value, response = asyncio.run(scenario())
    assert isinstance(error, ApplicationError)
    assert error.status_code == 400
    assert value == {"detail": "x"}
    assert response.status_code == 400


def test_dispatch_requires_running_loop():
    with pytest.raises(RuntimeError):
        Invoker(StubHttpClient()).dispatch(HttpRequest(url="http://api.test"))
