"""A single light served by a Hue bridge."""

import logging
import math
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple, Union

from .colors import HueColor
from .transport import HueValidationError

if TYPE_CHECKING:
    from .bridge import Bridge

logger = logging.getLogger(__name__)

FULL_COLOR_TYPES = {"extended color light", "color light"}


class Light:
    """One light on a bridge.

    Holds no connection of its own; every call is routed through the bridge
    that enumerated it. ``name`` is a display cache refreshed by
    :meth:`get_state`.
    """

    def __init__(self, bridge: "Bridge", light_id: str, light_data: Dict[str, Any]):
        self.bridge = bridge
        self.light_id = light_id

        self.type = light_data.get("type")
        self.name = light_data.get("name")

    def __repr__(self) -> str:
        return f"<Light {self.light_id} {self.name!r} ({self.type})>"

    async def do_api_call(
        self, action: str, endpoint: str = "", data: Optional[Dict[str, Any]] = None
    ) -> Any:
        """Perform an API call below ``lights/{light_id}``."""
        bridge_endpoint = f"lights/{self.light_id}"
        if endpoint:
            bridge_endpoint += f"/{endpoint}"

        return await self.bridge.do_api_call(action, bridge_endpoint, data)

    async def get_state(self) -> Dict[str, Any]:
        """Get the state of the light (on, bri, hue, sat, xy, ct, ...)."""
        light_data = await self.do_api_call("GET")
        # The name is editable on the bridge, so refresh it while we're here.
        self.name = light_data.get("name", self.name)
        return light_data["state"]

    async def set_state(
        self, state: Dict[str, Any], time: Optional[float] = None
    ) -> Any:
        """Set the state of the light.

        Args:
            state: Partial light state. Modified in place when ``time`` is given.
            time: Transition time in milliseconds.
        """
        body = state
        if time:
            body["transitionTime"] = int(math.floor(time / 100))
        return await self.do_api_call("PUT", "state", body)

    async def set_on(self, on: bool, time: Optional[float] = None) -> Any:
        return await self.set_state({"on": on}, time)

    async def set_color_rgb(
        self, red: int, green: int, blue: int, time: Optional[float] = None
    ) -> Any:
        """Set the color from 0-255 RGB values."""
        return await self.set_color(HueColor.from_rgb(red, green, blue), time)

    async def set_color_hex(self, hex_code: str, time: Optional[float] = None) -> Any:
        """Set the color from a CSS-style hex code."""
        return await self.set_color(HueColor.from_hex(hex_code), time)

    async def set_color(self, color: HueColor, time: Optional[float] = None) -> Any:
        x, y, brightness = color.to_cie()
        return await self.set_state({"xy": [x, y], "bri": brightness}, time)

    async def set_color_hsb(
        self, hue: int, saturation: int, brightness: int, time: Optional[float] = None
    ) -> Any:
        """Set the color from bridge-native HSB.

        Args:
            hue: Hue angle, 0 to 65535.
            saturation: Saturation, 0 to 254.
            brightness: Brightness, 1 to 254.
            time: Transition time in milliseconds.
        """
        return await self.set_state(
            {"hue": hue, "sat": saturation, "bri": brightness}, time
        )

    async def set_color_temperature(
        self, temperature: int, time: Optional[float] = None
    ) -> Any:
        """Set the color temperature in mired (153 to 500)."""
        return await self.set_state({"ct": temperature}, time)

    async def set_brightness(
        self, brightness: Union[int, float, str], time: Optional[float] = None
    ) -> Any:
        """Set the brightness (1 to 254). Numeric strings are accepted."""
        return await self.set_state({"bri": int(float(brightness))}, time)

    async def get_color_rgb(self) -> Tuple[int, int, int]:
        return (await self._current_color()).to_rgb()

    async def get_color_hex(self) -> str:
        return (await self._current_color()).to_hex()

    async def _current_color(self) -> HueColor:
        state = await self.get_state()
        if "xy" not in state or "bri" not in state:
            raise HueValidationError(f"Light {self.light_id} does not report an xy color")
        x, y = state["xy"]
        return HueColor.from_cie(x, y, state["bri"])

    def is_full_color(self) -> bool:
        """Whether the light accepts xy color (not just white or ct)."""
        return (self.type or "").lower() in FULL_COLOR_TYPES

    def to_dict(self) -> Dict[str, Any]:
        return {"lightId": self.light_id, "type": self.type, "name": self.name}
