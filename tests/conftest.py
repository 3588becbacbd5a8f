"""Shared test fixtures for Ozon reports tests."""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from ozon_reports_server.ozon_client import OzonClient
from ozon_reports_server.reports import Reports


@pytest.fixture
def mock_response():
    """Factory for creating mock HTTP responses.

    Usage:
        resp = mock_response(200, {"key": "value"})
        resp = mock_response(502, text="Bad Gateway")
    """
    def _make(status_code=200, json_data=None, text=None, headers=None):
        response = MagicMock()
        response.status_code = status_code
        if json_data is not None:
            response.json.return_value = json_data
            response.text = text or str(json_data)
        else:
            response.json.side_effect = ValueError("No JSON")
            response.text = text or ""
        response.headers = headers or {}
        return response
    return _make


@pytest.fixture
def mock_client():
    """Create an OzonClient with mocked _request method."""
    with patch.dict("os.environ", {
        "OZON_CLIENT_ID": "test_client",
        "OZON_API_KEY": "test_key",
    }, clear=True):
        client = OzonClient.from_env()
        client._request = AsyncMock()
        return client


@pytest.fixture
def reports(mock_client):
    """Reports facade over a client whose request() is an AsyncMock."""
    mock_client.request = AsyncMock()
    return Reports(client=mock_client)


# All resource modules that build a Reports facade
_RESOURCE_MODULES = [
    "ozon_reports_server.resources.reports",
    "ozon_reports_server.resources.finance",
    "ozon_reports_server.resources.templates",
]


@pytest.fixture
def mock_reports_class():
    """Patch Reports in all resource modules, yield (mock_class, mock_instance).

    Usage:
        def test_something(mock_reports_class):
            mock_class, mock_instance = mock_reports_class
            mock_instance.get_list = AsyncMock(return_value=...)
            # call the tool function...
    """
    mock_instance = MagicMock()
    mock_class = MagicMock()
    mock_class.from_env.return_value = mock_instance

    patchers = [patch(f"{mod}.Reports", mock_class) for mod in _RESOURCE_MODULES]
    for p in patchers:
        p.start()
    yield mock_class, mock_instance
    for p in patchers:
        p.stop()
