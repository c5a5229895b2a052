"""
Shared fixtures for the relay test-suite.
"""

import json
from typing import Any, Callable, Dict, List
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from dal.session_kv_dal import SessionKVDAL
from services.maps.geocoder import GeoResolver
from services.maps.route_service import RouteService
from services.realtime.intent_classifier import IntentClassifier
from services.realtime.location_extractor import ExtractedLocations, LocationExtractor
from services.realtime.reply_generator import ReplyGenerator
from services.realtime.session_store import SessionStore
from services.realtime.ws_session import SessionDispatcher
from utils.database_init import AsyncDatabaseInitializer


class FakeWebSocket:
    """Collects every payload the dispatcher sends."""

    def __init__(self) -> None:
        self.sent: List[Dict[str, Any]] = []

    async def send_text(self, text: str) -> None:
        self.sent.append(json.loads(text))

    def types(self) -> List[str]:
        return [payload["type"] for payload in self.sent]


def _mock_http_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def mock_http_client():
    """Factory for AsyncClients whose requests are answered by a handler function."""
    return _mock_http_client


# =============================================================================
# Storage Fixtures
# =============================================================================

@pytest.fixture
def db_initializer(tmp_path) -> AsyncDatabaseInitializer:
    return AsyncDatabaseInitializer(tmp_path / "db")


@pytest.fixture
def kv(db_initializer) -> SessionKVDAL:
    return SessionKVDAL(db_initializer)


@pytest.fixture
def store(kv) -> SessionStore:
    return SessionStore(kv)


# =============================================================================
# Collaborator Mocks
# =============================================================================

@pytest.fixture
def geo():
    mock = MagicMock(spec=GeoResolver)
    mock.resolve_one = AsyncMock(return_value=None)
    mock.resolve_many = AsyncMock(return_value=[])
    return mock


@pytest.fixture
def router():
    mock = MagicMock(spec=RouteService)
    mock.compute_route = AsyncMock()
    return mock


@pytest.fixture
def classifier():
    mock = MagicMock(spec=IntentClassifier)
    mock.classify = AsyncMock(return_value=False)
    return mock


@pytest.fixture
def extractor():
    mock = MagicMock(spec=LocationExtractor)
    mock.extract = AsyncMock(return_value=ExtractedLocations())
    return mock


@pytest.fixture
def replier():
    mock = MagicMock(spec=ReplyGenerator)
    mock.reply = AsyncMock(return_value="Hi there! Where would you like to go?")
    return mock


@pytest.fixture
def dispatcher(store, geo, router, classifier, extractor, replier) -> SessionDispatcher:
    return SessionDispatcher(store, geo, router, classifier, extractor, replier)


@pytest.fixture
def websocket() -> FakeWebSocket:
    return FakeWebSocket()


@pytest.fixture
def model():
    """A ModelClient stand-in whose `complete` output each test sets."""
    mock = MagicMock()
    mock.complete = AsyncMock(return_value="")
    return mock
