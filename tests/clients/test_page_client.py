import httpx
import pytest

from pagestream.clients.http import PageClient
from pagestream.core.config import Settings
from pagestream.core.exceptions import DecodeFailure, TransportFailure

BASE_URL = "http://pages.test"


def make_client(handler) -> PageClient:
    return PageClient(
        httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    )


class TestGetJson:
    @pytest.mark.asyncio
    async def test_returns_json_object(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"items": [], "start": 0, "count": 0, "total": 0})

        async with make_client(handler) as client:
            data = await client.get_json("/api/v1/items", {"start": "0", "count": "10"})

        assert data["total"] == 0
        assert seen[0].url.path == "/api/v1/items"
        assert seen[0].url.params["start"] == "0"
        assert seen[0].url.params["count"] == "10"

    @pytest.mark.asyncio
    async def test_error_status_is_transport_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="Internal Server Error")

        async with make_client(handler) as client:
            with pytest.raises(TransportFailure) as exc_info:
                await client.get_json("/api/v1/items", {})

        assert exc_info.value.status_code == 500
        assert exc_info.value.additional_info["host"] == "pages.test"

    @pytest.mark.asyncio
    async def test_end_of_pages_is_transport_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"detail": "That's all folks"})

        async with make_client(handler) as client:
            with pytest.raises(TransportFailure) as exc_info:
                await client.get_json("/api/v1/pages", {"page_number": "10"})

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_connection_error_is_transport_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        async with make_client(handler) as client:
            with pytest.raises(TransportFailure) as exc_info:
                await client.get_json("/api/v1/items", {"start": "10", "count": "10"})

        assert exc_info.value.status_code is None
        assert "http://pages.test/api/v1/items?start=10&count=10" in exc_info.value.detail
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_timeout_is_transport_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("Timed out", request=request)

        async with make_client(handler) as client:
            with pytest.raises(TransportFailure, match="Timed out"):
                await client.get_json("/api/v1/items", {})

    @pytest.mark.asyncio
    async def test_invalid_json_is_decode_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>not json</html>")

        async with make_client(handler) as client:
            with pytest.raises(DecodeFailure) as exc_info:
                await client.get_json("/api/v1/items", {})

        assert exc_info.value.additional_info["payload"].startswith("<html>")

    @pytest.mark.asyncio
    async def test_non_object_body_is_decode_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=["Item number: 1"])

        async with make_client(handler) as client:
            with pytest.raises(DecodeFailure):
                await client.get_json("/api/v1/items", {})


class TestFromSettings:
    @pytest.mark.asyncio
    async def test_uses_configured_base_url_and_timeout(self):
        settings = Settings(
            ENVIRONMENT="testing", API_BASE_URL="http://remote.test", REQUEST_TIMEOUT=3.0
        )

        client = PageClient.from_settings(settings)

        assert client.http_client.base_url == httpx.URL("http://remote.test")
        assert client.http_client.timeout.read == 3.0
        await client.close()
        assert client.http_client.is_closed
