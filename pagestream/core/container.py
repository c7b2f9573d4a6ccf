import httpx

from pagestream.api.server import create_app
from pagestream.clients.http import PageClient
from pagestream.core.config import Settings, settings as default_settings
from pagestream.pagination.controller import ErrorReporter, PaginationController
from pagestream.pagination.fetcher import (
    OffsetPageFetcher,
    PageFetcher,
    PageNumberPageFetcher,
)


def create_page_client(settings: Settings = default_settings) -> PageClient:
    """Client for the configured source, served in-process when mocking"""
    transport = None
    if settings.USE_MOCK_SERVER:
        transport = httpx.ASGITransport(
            app=create_app(
                total_items=settings.MOCK_TOTAL_ITEMS,
                min_latency=settings.MOCK_MIN_LATENCY,
                max_latency=settings.MOCK_MAX_LATENCY,
            )
        )
    return PageClient.from_settings(settings, transport=transport)


def create_fetcher(
    client: PageClient, settings: Settings = default_settings
) -> PageFetcher[str]:
    if settings.PAGINATION_MODE == "page":
        return PageNumberPageFetcher(client, settings.items_endpoint, settings.PAGE_SIZE)
    return OffsetPageFetcher(client, settings.items_endpoint)


def create_controller(
    client: PageClient,
    on_error: ErrorReporter | None = None,
    settings: Settings = default_settings,
) -> PaginationController[str]:
    """Must be called on the event loop that will own the session"""
    return PaginationController(
        create_fetcher(client, settings),
        page_size=settings.PAGE_SIZE,
        start_index=settings.START_INDEX,
        on_error=on_error,
    )
