"""Hue bridge: discovery, authorization, configuration and light enumeration."""

import asyncio
import logging
import warnings
from typing import Any, Dict, List, Mapping, Optional

from . import transport
from .config import config
from .light import Light
from .transport import (
    AuthorizationError,
    AuthorizationTimeoutError,
    BridgeNotFoundError,
    HueApiError,
    HueValidationError,
)

logger = logging.getLogger(__name__)

DISCOVERY_URL = "https://www.meethue.com/api/nupnp"

# "link button not pressed": expected while waiting for the user
LINK_BUTTON_ERROR = 101


class Bridge:
    """A physical Hue bridge.

    A bridge starts out with whatever the caller knows about it. Without an
    IP address it is located through discovery on first use; without a
    username it must be authorized before most endpoints will answer.

    Args:
        bridge_data: Mapping with ``id`` and optionally ``internalipaddress``
            and ``username`` (the shape returned by discovery, or by
            :meth:`serialize`).
        app_name: Name of this application, sent when authorizing.
        device_name: Name of the device this application runs on.
    """

    def __init__(
        self,
        bridge_data: Mapping[str, Any],
        app_name: Optional[str] = None,
        device_name: Optional[str] = None,
    ):
        self.id = bridge_data.get("id")
        self.ip_address: Optional[str] = bridge_data.get("internalipaddress") or None
        self.username: str = bridge_data.get("username") or ""
        self.app_name = app_name
        self.device_name = device_name

        self.config: Optional[Dict[str, Any]] = None
        self.lights: Optional[List[Light]] = None

    def __repr__(self) -> str:
        return f"<Bridge {self.id} at {self.ip_address or 'unknown address'}>"

    @staticmethod
    async def discover_bridges() -> List[Dict[str, Any]]:
        """Discover bridges on the local network using the N-UPnP service.

        Returns:
            The raw list of bridge descriptors (``id``, ``internalipaddress``).
            It's up to the caller to create Bridge objects from them.
        """
        bridges = await transport.get_json(DISCOVERY_URL)
        logger.debug(f"Discovery returned {bridges}")
        return bridges

    async def find_bridge(self) -> str:
        """Locate this bridge through discovery and remember its IP address."""
        discovered = await Bridge.discover_bridges()
        for bridge_data in discovered:
            if bridge_data.get("id") == self.id:
                self.ip_address = bridge_data.get("internalipaddress")
                logger.info(f"Located bridge {self.id} at {self.ip_address}")
                return self.ip_address

        raise BridgeNotFoundError(self.id)

    async def get_ip_address(self) -> str:
        if self.ip_address:
            return self.ip_address
        return await self.find_bridge()

    async def get_username(self) -> str:
        return self.username

    def _construct_endpoint_url(self, endpoint: str) -> str:
        path_components = ["api", self.username, endpoint]
        path = "/".join(c for c in path_components if c)

        return f"http://{self.ip_address}/{path}"

    async def do_api_call(
        self, action: str, endpoint: str = "", data: Optional[Any] = None
    ) -> Dict[str, Any]:
        """Perform an API call against this bridge.

        Args:
            action: An HTTP method.
            endpoint: The bridge-specific endpoint, e.g. ``lights/1/state``.
            data: The data to send in the request body.

        Raises:
            HueApiError: The bridge answered with an error element, or an
                empty envelope.
        """
        await self.get_ip_address()
        endpoint_url = self._construct_endpoint_url(endpoint)
        result = await transport.perform_json(action, endpoint_url, data)

        if isinstance(result, list):
            parsed_result = result[0] if result else None
        else:
            parsed_result = result

        if parsed_result is None or "error" in parsed_result:
            raise HueApiError(parsed_result)
        return parsed_result

    async def get_config(self, force_refresh: bool = False) -> Dict[str, Any]:
        """Get the bridge's configuration, cached after the first call."""
        if force_refresh or self.config is None:
            self.config = await self.do_api_call("GET", "config")
        return self.config

    async def get_name(self) -> str:
        bridge_config = await self.get_config()
        return bridge_config.get("name")

    async def get_lights(self) -> List[Light]:
        """Enumerate the bridge's lights. Fetched once, then served from cache."""
        if self.lights is None:
            lights = await self.do_api_call("GET", "lights")
            self.lights = [
                Light(self, light_id, light_data)
                for light_id, light_data in lights.items()
            ]
            logger.debug(f"Bridge {self.id} has {len(self.lights)} lights")
        return self.lights

    def light(self, light_id: Any) -> Optional[Light]:
        """Look up a light fetched by :meth:`get_lights`."""
        if self.lights is None:
            return None
        return next(
            (light for light in self.lights if str(light.light_id) == str(light_id)),
            None,
        )

    async def set_light_state(self, light_id: Any, state: Dict[str, Any]) -> Any:
        """Set the state of a light.

        Deprecated: use the light's own methods instead.
        """
        warnings.warn(
            "Bridge.set_light_state is deprecated, use Light.set_state",
            DeprecationWarning,
            stacklevel=2,
        )
        light = self.light(light_id)
        if light is None:
            logger.error(f"Cannot find light {light_id} on bridge {self.id}")
            raise HueValidationError(f"Light {light_id} not found")
        return await light.set_state(state)

    async def remove_authorization(self, username: str) -> Any:
        """Revoke a whitelisted username. Returns the raw bridge response."""
        await self.get_ip_address()
        return await transport.delete_json(
            self._construct_endpoint_url(f"config/whitelist/{username}")
        )

    async def authorize(self) -> Dict[str, Any]:
        """Ask the bridge once to authorize this application.

        Returns the first response element, including the benign
        "link button not pressed" error so callers can keep polling.

        Raises:
            HueValidationError: ``app_name`` or ``device_name`` is missing.
            AuthorizationError: The bridge refused for any other reason.
        """
        if not self.app_name or not self.device_name:
            raise HueValidationError("Invalid app or device name.")

        ip_address = await self.get_ip_address()
        body = {"devicetype": f"{self.app_name}#{self.device_name}"}
        data = await transport.post_json(f"http://{ip_address}/api", body)

        if isinstance(data, list):
            first_item = data[0] if data else None
        else:
            first_item = data
        if first_item is None:
            raise HueApiError(None)

        if "error" in first_item:
            if first_item["error"].get("type") != LINK_BUTTON_ERROR:
                raise AuthorizationError(first_item)
        elif "success" in first_item:
            self.username = first_item["success"]["username"]
            logger.info(f"Authorized {self.app_name} on bridge {self.id}")

        return first_item

    async def wait_for_authorization(self) -> str:
        """Poll :meth:`authorize` until the link button is pressed.

        Each attempt waits for the previous one to complete. Cancel the
        awaiting task to stop early.

        Returns:
            The username granted by the bridge (or the one already held).

        Raises:
            AuthorizationTimeoutError: No authorization within the attempt cap.
        """
        if self.username:
            return self.username

        attempts = config.authorization_attempts
        for attempt in range(1, attempts + 1):
            await asyncio.sleep(config.authorization_interval)
            result = await self.authorize()
            if "success" in result:
                return self.username
            logger.debug(f"Waiting for link button ({attempt}/{attempts})")

        raise AuthorizationTimeoutError(
            f"Bridge {self.id} was not authorized after {attempts} attempts"
        )

    def serialize(self) -> Dict[str, Any]:
        return {"id": self.id, "username": self.username}
