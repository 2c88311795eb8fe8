"""Shared fixtures for the dashboard tests."""

from datetime import date

import httpx
import pytest

from investor_dashboard.config import Settings
from investor_dashboard.data import FredFetcher

from tests.helpers import TODAY


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def settings() -> Settings:
    return Settings(fred_api_key="test-key", gemini_api_key="", random_seed=None)


@pytest.fixture
def make_fetcher(settings):
    """Build a FredFetcher whose HTTP traffic goes to ``handler``."""

    def build(handler) -> FredFetcher:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return FredFetcher(settings, client=client)

    return build
