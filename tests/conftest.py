"""
Global pytest configuration and fixtures.
"""

import logging
import os
from unittest.mock import patch

import httpx
import pytest

from wigle_nodes import registry
from wigle_nodes.runtime import Context

API_KEY = "QUlEMTIzOnNlY3JldA=="


@pytest.fixture(autouse=True)
def clean_env():
    """Keep tests hermetic: no host environment variables leak in."""
    with patch.dict(os.environ, {}, clear=True):
        yield


@pytest.fixture(autouse=True)
def mock_load_dotenv():
    """Prevent loading environment variables from local .env files."""
    with patch("wigle_hub.config.load_dotenv"):
        yield


@pytest.fixture
def registry_db(tmp_path, monkeypatch):
    """Point the node registry at a throwaway SQLite file."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'nodes.db'}")
    registry.reset_engine()
    yield
    registry.reset_engine()


@pytest.fixture
def make_ctx():
    """Build a runtime Context whose HTTP client answers through ``handler``."""

    def _make(handler, creds=None):
        async def resolver(provider, credential_id):
            return {"api_key": API_KEY} if creds is None else dict(creds)

        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return Context(http=http, logger=logging.getLogger("wigle_nodes.tests"), cred_resolver=resolver)

    return _make
