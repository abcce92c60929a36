"""Test configuration and fixtures for the sitelens test suite."""

import pytest
from fastapi.testclient import TestClient

from sitelens.api.app import create_app
from sitelens.config import AppSettings
from sitelens.scraper import ScrapingOrchestrator
from sitelens.storage import MemorySessionStorage

from .helpers import SAMPLE_HTML, SAMPLE_PAGE_URL, StaticFetcher


@pytest.fixture
def test_settings():
    """Settings isolated from the environment."""
    return AppSettings(_env_file=None, development=True)


@pytest.fixture
def storage():
    return MemorySessionStorage()


@pytest.fixture
def fetcher():
    return StaticFetcher(pages={SAMPLE_PAGE_URL: SAMPLE_HTML})


@pytest.fixture
def orchestrator(storage, fetcher):
    return ScrapingOrchestrator(storage, fetcher=fetcher)


@pytest.fixture
def test_client(test_settings, storage, orchestrator):
    """API client wired to an in-memory store and canned pages."""
    app = create_app(test_settings)
    app.state.storage = storage
    app.state.orchestrator = orchestrator

    with TestClient(app) as client:
        yield client
        # Let background scrapes finish on the client event loop
        client.portal.call(orchestrator.wait_for_idle)
