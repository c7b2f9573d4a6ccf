from typing import Any, Dict, Mapping

import httpx

from pagestream.constants import DEFAULT_HEADERS
from pagestream.core.config import Settings, settings as default_settings
from pagestream.core.exceptions import DecodeFailure, TransportFailure
from pagestream.core.logging import LogContext
from pagestream.utils.query import build_page_url

logger = LogContext(__name__)


class PageClient:
    """
    Thin transport for page requests.

    Wraps an injected `httpx.AsyncClient` and turns everything that can go
    wrong on the wire into `TransportFailure` or `DecodeFailure`.
    """

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self.http_client = http_client

    @classmethod
    def from_settings(
        cls,
        settings: Settings = default_settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "PageClient":
        """Build a client for the configured base URL, optionally over an injected transport"""
        return cls(
            httpx.AsyncClient(
                base_url=settings.API_BASE_URL,
                headers=DEFAULT_HEADERS,
                timeout=settings.REQUEST_TIMEOUT,
                transport=transport,
            )
        )

    async def get_json(self, endpoint: str, params: Mapping[str, str]) -> Dict[str, Any]:
        """
        Fetch a JSON object from the endpoint

        Raises:
            TransportFailure: If the request failed or returned a non-2xx status
            DecodeFailure: If the body is not a JSON object
        """
        url = build_page_url(str(self.http_client.base_url), endpoint, params)
        try:
            response = await self.http_client.get(endpoint, params=dict(params))
        except httpx.TimeoutException as e:
            raise TransportFailure(
                detail=f"Timed out fetching {url}: {str(e)}",
                host=self.http_client.base_url.host or None,
            ) from e
        except httpx.HTTPError as e:
            raise TransportFailure(
                detail=f"Error fetching {url}: {str(e)}",
                host=self.http_client.base_url.host or None,
            ) from e

        if not response.is_success:
            logger.warning(
                "Page request rejected",
                extra={
                    "url": url,
                    "status_code": response.status_code,
                },
            )
            raise TransportFailure(
                detail=f"Unexpected status {response.status_code} from {endpoint}",
                status_code=response.status_code,
                host=response.url.host or None,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise DecodeFailure(
                detail=f"Invalid JSON from {endpoint}: {str(e)}",
                payload=response.text[:200],
            ) from e

        if not isinstance(data, dict):
            raise DecodeFailure(
                detail=f"Expected a JSON object from {endpoint}", payload=data
            )
        return data

    async def close(self) -> None:
        await self.http_client.aclose()

    async def __aenter__(self) -> "PageClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
