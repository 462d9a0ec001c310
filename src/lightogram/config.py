"""Configuration management for the lightogram client."""

import ipaddress
import os
import socket
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv()


class ClientConfig(BaseModel):
    """Configuration for talking to a Hue bridge."""

    bridge_id: Optional[str] = Field(
        default=None, description="Vendor-assigned bridge ID"
    )
    bridge_ip: Optional[str] = Field(
        default=None, description="IP address of the Hue bridge, if known"
    )
    username: str = Field(default="", description="Whitelisted bridge username")
    app_name: str = Field(
        default="lightogram", description="Application name sent when authorizing"
    )
    device_name: str = Field(
        default_factory=socket.gethostname,
        description="Device name sent when authorizing",
    )
    log_level: str = Field(default="INFO", description="Logging level")
    timeout_connect: float = Field(
        default=5.0, ge=1.0, le=30.0, description="Connection timeout in seconds"
    )
    timeout_read: float = Field(
        default=10.0, ge=1.0, le=60.0, description="Read timeout in seconds"
    )
    authorization_interval: float = Field(
        default=1.0, gt=0.0, le=10.0, description="Seconds between authorization polls"
    )
    authorization_attempts: int = Field(
        default=60, ge=1, le=600, description="Authorization polls before giving up"
    )

    @field_validator("bridge_ip")
    @classmethod
    def validate_ip(cls, v):
        """Validate IP address format."""
        if not v:
            return None
        try:
            ipaddress.ip_address(v)
            return v
        except ValueError as e:
            raise ValueError(f"Invalid IP address: {v}") from e

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Create configuration from environment variables."""
        return cls(
            bridge_id=os.getenv("HUE_BRIDGE_ID") or None,
            bridge_ip=os.getenv("HUE_BRIDGE_IP") or None,
            username=os.getenv("HUE_USERNAME", ""),
            app_name=os.getenv("HUE_APP_NAME", "lightogram"),
            device_name=os.getenv("HUE_DEVICE_NAME") or socket.gethostname(),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            timeout_connect=float(os.getenv("HUE_TIMEOUT_CONNECT", "5.0")),
            timeout_read=float(os.getenv("HUE_TIMEOUT_READ", "10.0")),
            authorization_interval=float(os.getenv("HUE_AUTH_INTERVAL", "1.0")),
            authorization_attempts=int(os.getenv("HUE_AUTH_ATTEMPTS", "60")),
        )

    @property
    def bridge_data(self) -> Dict[str, Any]:
        """Bridge descriptor suitable for ``Bridge(...)``."""
        data: Dict[str, Any] = {"id": self.bridge_id, "username": self.username}
        if self.bridge_ip:
            data["internalipaddress"] = self.bridge_ip
        return data


# Global configuration instance
config = ClientConfig.from_env()
