import httpx
import pytest

from backoffice.common.retries import is_transient_http_error, retry_async

REQUEST = httpx.Request("POST", "https://mail.example.com/emails")


def status_error(code: int) -> httpx.HTTPStatusError:
    response = httpx.Response(code, request=REQUEST)
    return httpx.HTTPStatusError(f"HTTP {code}", request=REQUEST, response=response)


@pytest.mark.parametrize("exc, transient", [
    (httpx.ConnectError("refused", request=REQUEST), True),
    (httpx.ReadTimeout("slow", request=REQUEST), True),
    (httpx.RemoteProtocolError("hung up", request=REQUEST), True),
    (status_error(429), True),
    (status_error(503), True),
    (status_error(404), False),
    (status_error(422), False),
    (ValueError("bad payload"), False),
])
def test_is_transient_http_error(exc, transient):
    assert is_transient_http_error(exc) is transient


@pytest.mark.asyncio
async def test_transient_errors_are_retried_until_success():
    calls = []

    @retry_async(attempts=3, base_delay=0, jitter=0)
    async def flaky():
        calls.append(1)
        if len(calls) < 3:
            raise httpx.ConnectError("refused", request=REQUEST)
        return "sent"

    assert await flaky() == "sent"
    assert len(calls) == 3


@pytest.mark.asyncio
async def test_transient_errors_give_up_after_last_attempt():
    calls = []

    @retry_async(attempts=2, base_delay=0, jitter=0)
    async def down():
        calls.append(1)
        raise status_error(502)

    with pytest.raises(httpx.HTTPStatusError):
        await down()
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_client_errors_are_not_retried():
    calls = []

    @retry_async(attempts=3, base_delay=0, jitter=0)
    async def rejected():
        calls.append(1)
        raise status_error(404)

    with pytest.raises(httpx.HTTPStatusError) as info:
        await rejected()
    assert info.value.response.status_code == 404
    assert len(calls) == 1
