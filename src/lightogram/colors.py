"""Conversions between RGB/hex/HSB and the bridge's CIE xy + brightness."""

import colorsys
import re
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

# D65 white point, used for black where chromaticity is undefined
WHITE_POINT = (0.3227, 0.3290)

MAX_BRIGHTNESS = 254
MAX_HUE = 65535
MAX_SATURATION = 254

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def _expand(c: float) -> float:
    """sRGB gamma expansion."""
    return ((c + 0.055) / 1.055) ** 2.4 if c > 0.04045 else c / 12.92


def _compress(c: float) -> float:
    """Inverse of _expand."""
    return 12.92 * c if c <= 0.0031308 else 1.055 * c ** (1.0 / 2.4) - 0.055


def _check_channel(name: str, value: int) -> int:
    if not 0 <= value <= 255:
        raise ValueError(f"{name} must be between 0 and 255, got {value}")
    return int(value)


class HueColor(BaseModel):
    """A color as the bridge understands it: CIE xy plus brightness."""

    model_config = ConfigDict(frozen=True)

    x: float = Field(ge=0.0, le=1.0)
    y: float = Field(ge=0.0, le=1.0)
    brightness: int = Field(ge=0, le=MAX_BRIGHTNESS)

    @classmethod
    def from_cie(cls, x: float, y: float, brightness: int) -> "HueColor":
        return cls(x=x, y=y, brightness=brightness)

    @classmethod
    def from_rgb(cls, red: int, green: int, blue: int) -> "HueColor":
        """Convert 0-255 RGB using the wide gamut D65 matrix."""
        r = _expand(_check_channel("red", red) / 255.0)
        g = _expand(_check_channel("green", green) / 255.0)
        b = _expand(_check_channel("blue", blue) / 255.0)

        X = r * 0.664511 + g * 0.154324 + b * 0.162028
        Y = r * 0.283881 + g * 0.668433 + b * 0.047685
        Z = r * 0.000088 + g * 0.072310 + b * 0.986039

        total = X + Y + Z
        if total == 0:
            return cls(x=WHITE_POINT[0], y=WHITE_POINT[1], brightness=0)

        return cls(
            x=round(X / total, 4),
            y=round(Y / total, 4),
            brightness=min(MAX_BRIGHTNESS, round(Y * MAX_BRIGHTNESS)),
        )

    @classmethod
    def from_hex(cls, hex_code: str) -> "HueColor":
        """Convert a CSS-style hex code (``#ff8800``, ``ff8800`` or ``#f80``)."""
        match = _HEX_RE.match(hex_code.strip()) if isinstance(hex_code, str) else None
        if not match:
            raise ValueError(f"Invalid hex color: {hex_code!r}")
        digits = match.group(1)
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        return cls.from_rgb(
            int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)
        )

    @classmethod
    def from_hsb(cls, hue: int, saturation: int, brightness: int) -> "HueColor":
        """Convert bridge-native HSB (hue 0-65535, sat/bri 0-254)."""
        if not 0 <= hue <= MAX_HUE:
            raise ValueError(f"hue must be between 0 and {MAX_HUE}, got {hue}")
        if not 0 <= saturation <= MAX_SATURATION:
            raise ValueError(f"saturation must be between 0 and 254, got {saturation}")
        if not 0 <= brightness <= MAX_BRIGHTNESS:
            raise ValueError(f"brightness must be between 0 and 254, got {brightness}")

        r, g, b = colorsys.hsv_to_rgb(
            hue / MAX_HUE, saturation / MAX_SATURATION, brightness / MAX_BRIGHTNESS
        )
        return cls.from_rgb(round(r * 255), round(g * 255), round(b * 255))

    def to_cie(self) -> Tuple[float, float, int]:
        return (self.x, self.y, self.brightness)

    def to_rgb(self) -> Tuple[int, int, int]:
        if self.y == 0 or self.brightness == 0:
            return (0, 0, 0)

        Y = self.brightness / MAX_BRIGHTNESS
        X = (Y / self.y) * self.x
        Z = (Y / self.y) * (1.0 - self.x - self.y)

        r = X * 1.656492 - Y * 0.354851 - Z * 0.255038
        g = -X * 0.707196 + Y * 1.655397 + Z * 0.036152
        b = X * 0.051713 - Y * 0.121364 + Z * 1.011530

        channels = [_compress(max(0.0, c)) for c in (r, g, b)]
        peak = max(channels)
        if peak > 1.0:
            channels = [c / peak for c in channels]

        red, green, blue = (min(255, max(0, round(c * 255))) for c in channels)
        return (red, green, blue)

    def to_hex(self) -> str:
        return "#{:02x}{:02x}{:02x}".format(*self.to_rgb())

    def to_hsb(self) -> Tuple[int, int, int]:
        r, g, b = self.to_rgb()
        h, s, v = colorsys.rgb_to_hsv(r / 255.0, g / 255.0, b / 255.0)
        return (
            round(h * MAX_HUE),
            round(s * MAX_SATURATION),
            round(v * MAX_BRIGHTNESS),
        )
