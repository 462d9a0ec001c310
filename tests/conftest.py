"""Pytest configuration and fixtures for lightogram tests."""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from lightogram.bridge import Bridge


@pytest.fixture
def mock_link_button_error():
    """Authorization response while the link button has not been pressed."""
    return [{
        "error": {
            "type": 101,
            "address": "",
            "description": "link button not pressed"
        }
    }]


@pytest.fixture
def mock_authorization_success():
    """Authorization response once the link button was pressed."""
    return [{"success": {"username": "83b7780291a6ceffbe0bd049104df"}}]


@pytest.fixture
def mock_hue_response_success():
    """Mock successful Hue API response."""
    return [{"success": {"/lights/1/state/on": True}}]


@pytest.fixture
def mock_hue_response_error():
    """Mock error Hue API response."""
    return [{
        "error": {
            "type": 3,
            "address": "/lights/99",
            "description": "resource, /lights/99, not available"
        }
    }]


@pytest.fixture
def mock_discovery_response():
    """Mock N-UPnP discovery response."""
    return [
        {"id": "001788fffe100491", "internalipaddress": "192.168.2.23"},
        {"id": "001788fffe09a168", "internalipaddress": "10.0.0.1"},
    ]


@pytest.fixture
def mock_lights_response():
    """Mock response for listing all lights."""
    return {
        "1": {
            "name": "Living Room Light",
            "state": {"on": True, "bri": 200, "xy": [0.3227, 0.329], "reachable": True},
            "type": "Extended color light"
        },
        "2": {
            "name": "Kitchen Light",
            "state": {"on": False, "bri": 100, "reachable": True},
            "type": "Dimmable light"
        }
    }


@pytest.fixture
def mock_bridge_config():
    """Mock bridge configuration response."""
    return {
        "name": "Test Bridge",
        "swversion": "1.50.1963220030",
        "apiversion": "1.50.0",
        "mac": "00:17:88:01:02:03",
        "bridgeid": "001788FFFE09A168",
        "modelid": "BSB002"
    }


@pytest.fixture
def mock_httpx_response():
    """Mock httpx.Response object."""
    response = MagicMock()
    response.status_code = 200
    response.json.return_value = [{"success": {"/lights/1/state/on": True}}]
    return response


@pytest.fixture
def mock_perform_json():
    """Replace the transport so no request leaves the test."""
    with patch("lightogram.transport.perform_json", new_callable=AsyncMock) as mock:
        yield mock


@pytest.fixture
def mock_sleep():
    """Make authorization polling instantaneous."""
    with patch("lightogram.bridge.asyncio.sleep", new_callable=AsyncMock) as mock:
        yield mock


@pytest.fixture
def bridge():
    """A located and authorized bridge."""
    return Bridge(
        {"id": "001788fffe09a168", "internalipaddress": "10.0.0.1", "username": "user"},
        "lightogram",
        "tests",
    )


@pytest.fixture
def unauthorized_bridge():
    """A located bridge without a username."""
    return Bridge(
        {"id": "001788fffe09a168", "internalipaddress": "10.0.0.1"},
        "lightogram",
        "tests",
    )
