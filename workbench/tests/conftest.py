"""
pytest configuration and shared fixtures
"""
import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock

from workbench.services.ticket_gateway import TicketGateway
from workbench.stores.ticket_cache import TicketCache
from workbench.stores.ticket_store import TicketStore
from workbench.tests.helpers import API_BASE, envelope
from workbench.utils.auth import StaticTokenProvider


@pytest.fixture
def mock_http():
    """Mock httpx.AsyncClient; set mock_http.request.return_value / side_effect"""
    client = MagicMock(spec=httpx.AsyncClient)
    client.request = AsyncMock(return_value=envelope({}))
    return client


@pytest.fixture
def token_provider():
    return StaticTokenProvider("test-token")


@pytest.fixture
def gateway(token_provider, mock_http):
    return TicketGateway(token_provider, base_url=API_BASE, client=mock_http)


@pytest.fixture
def cache():
    return TicketCache(page_size=20)


@pytest.fixture
def store(gateway, cache):
    return TicketStore(gateway, cache=cache)
