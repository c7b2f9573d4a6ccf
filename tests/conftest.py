import os

os.environ.setdefault("ENVIRONMENT", "testing")

import httpx
import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch, MagicMock

from pagestream.api.server import create_app
from pagestream.clients.http import PageClient
from pagestream.constants import MOCK_BASE_URL
from tests.fakes import ScriptedFetcher, TOTAL_ITEMS


@pytest.fixture
def scripted_fetcher():
    return ScriptedFetcher()


@pytest.fixture
def mock_server_app():
    """Mock page server without simulated latency"""
    return create_app(total_items=TOTAL_ITEMS, min_latency=0.0, max_latency=0.0)


@pytest.fixture
def server_client(mock_server_app):
    with TestClient(mock_server_app) as test_client:
        yield test_client


@pytest.fixture
def page_client(mock_server_app):
    """PageClient talking to the mock server in-process"""
    return PageClient(
        httpx.AsyncClient(
            base_url=MOCK_BASE_URL,
            transport=httpx.ASGITransport(app=mock_server_app),
        )
    )


@pytest.fixture
def mock_logger():
    """Create a mock logger for testing logging"""
    with patch("logging.getLogger") as mock_get_logger:
        logger = MagicMock()
        mock_get_logger.return_value = logger
        yield logger
