"""Unit tests for the JSON transport."""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch
import httpx

from lightogram import transport
from lightogram.transport import (
    AuthorizationError,
    BridgeNotFoundError,
    HueApiError,
    HueConnectionError,
    HueError,
    HueTimeoutError,
    perform_json,
)


class TestPerformJson:
    """Test perform_json and its helpers."""

    @patch('lightogram.transport.httpx.AsyncClient')
    async def test_get_success(self, mock_client_class, mock_httpx_response, mock_bridge_config):
        """Test a successful GET returns the parsed body."""
        mock_client = AsyncMock()
        mock_httpx_response.json.return_value = mock_bridge_config
        mock_client.request.return_value = mock_httpx_response

        mock_client_class.return_value.__aenter__.return_value = mock_client
        mock_client_class.return_value.__aexit__.return_value = None

        result = await perform_json("get", "http://10.0.0.1/api/user/config")

        assert result == mock_bridge_config
        mock_client.request.assert_called_once_with(
            "GET", "http://10.0.0.1/api/user/config", json=None
        )

    @patch('lightogram.transport.httpx.AsyncClient')
    async def test_put_sends_json_body(self, mock_client_class, mock_httpx_response, mock_hue_response_success):
        """Test the body is sent as JSON and the array envelope returned as-is."""
        mock_client = AsyncMock()
        mock_httpx_response.json.return_value = mock_hue_response_success
        mock_client.request.return_value = mock_httpx_response

        mock_client_class.return_value.__aenter__.return_value = mock_client
        mock_client_class.return_value.__aexit__.return_value = None

        body = {"on": True}
        result = await perform_json("PUT", "http://10.0.0.1/api/user/lights/1/state", body)

        assert result == mock_hue_response_success
        mock_client.request.assert_called_once_with(
            "PUT", "http://10.0.0.1/api/user/lights/1/state", json=body
        )

    @patch('lightogram.transport.httpx.AsyncClient')
    async def test_error_status_still_parsed(self, mock_client_class, mock_hue_response_error):
        """Test API errors are returned for the caller to interpret."""
        mock_client = AsyncMock()
        mock_response = MagicMock()
        mock_response.status_code = 404
        mock_response.json.return_value = mock_hue_response_error
        mock_client.request.return_value = mock_response

        mock_client_class.return_value.__aenter__.return_value = mock_client
        mock_client_class.return_value.__aexit__.return_value = None

        result = await perform_json("GET", "http://10.0.0.1/api/user/lights/99")

        assert result == mock_hue_response_error

    @patch('lightogram.transport.httpx.AsyncClient')
    async def test_invalid_json(self, mock_client_class):
        """Test an unparseable body is a connection error."""
        mock_client = AsyncMock()
        mock_response = MagicMock()
        mock_response.status_code = 502
        mock_response.json.side_effect = ValueError("Expecting value")
        mock_client.request.return_value = mock_response

        mock_client_class.return_value.__aenter__.return_value = mock_client
        mock_client_class.return_value.__aexit__.return_value = None

        with pytest.raises(HueConnectionError, match="HTTP 502"):
            await perform_json("GET", "http://10.0.0.1/api")

    @patch('lightogram.transport.httpx.AsyncClient')
    async def test_timeout_error_handling(self, mock_client_class):
        """Test timeout error handling."""
        mock_client = AsyncMock()
        mock_client.request.side_effect = httpx.TimeoutException("Timeout")

        mock_client_class.return_value.__aenter__.return_value = mock_client
        mock_client_class.return_value.__aexit__.return_value = None

        with pytest.raises(HueTimeoutError):
            await perform_json("GET", "http://10.0.0.1/api")

    @patch('lightogram.transport.httpx.AsyncClient')
    async def test_connection_error_handling(self, mock_client_class):
        """Test connection error handling, with no retry."""
        mock_client = AsyncMock()
        mock_client.request.side_effect = httpx.RequestError("Connection failed")

        mock_client_class.return_value.__aenter__.return_value = mock_client
        mock_client_class.return_value.__aexit__.return_value = None

        with pytest.raises(HueConnectionError):
            await perform_json("GET", "http://10.0.0.1/api")
        assert mock_client.request.call_count == 1

    async def test_helpers_delegate(self, mock_perform_json):
        """Test get/post/delete helpers pick the right method."""
        await transport.get_json("http://a/")
        await transport.post_json("http://a/api", {"devicetype": "x#y"})
        await transport.delete_json("http://a/api/u/config/whitelist/u")

        assert [c.args for c in mock_perform_json.call_args_list] == [
            ("GET", "http://a/"),
            ("POST", "http://a/api", {"devicetype": "x#y"}),
            ("DELETE", "http://a/api/u/config/whitelist/u"),
        ]


class TestErrors:
    """Test the exception hierarchy."""

    def test_api_error_payload(self, mock_hue_response_error):
        error = HueApiError(mock_hue_response_error[0])
        assert error.payload == mock_hue_response_error[0]
        assert error.error_type == 3
        assert "not available" in str(error)
        assert isinstance(error, HueError)

    def test_api_error_without_payload(self):
        error = HueApiError(None)
        assert error.payload is None
        assert error.error_type is None

    def test_authorization_error_is_api_error(self):
        error = AuthorizationError({"error": {"type": 7, "description": "invalid value"}})
        assert isinstance(error, HueApiError)
        assert error.error_type == 7

    def test_bridge_not_found(self):
        error = BridgeNotFoundError("abc")
        assert error.bridge_id == "abc"
        assert "abc" in str(error)
