"""lightogram - async client for the Philips Hue bridge REST API."""

from .bridge import Bridge
from .colors import HueColor
from .light import Light
from .transport import (
    AuthorizationError,
    AuthorizationTimeoutError,
    BridgeNotFoundError,
    HueApiError,
    HueConnectionError,
    HueError,
    HueTimeoutError,
    HueValidationError,
)

__version__ = "1.0.0"
__description__ = "Discover, authorize and control Philips Hue lights"

__all__ = [
    "Bridge",
    "Light",
    "HueColor",
    "HueError",
    "HueApiError",
    "HueConnectionError",
    "HueTimeoutError",
    "HueValidationError",
    "BridgeNotFoundError",
    "AuthorizationError",
    "AuthorizationTimeoutError",
]
