"""Command line setup for lightogram.

Discovers Philips Hue bridges on the network, waits for the link button to
authorize this application, and writes a .env file with the bridge ID, IP and
username used by ``ClientConfig.from_env()``.
"""

import argparse
import asyncio
import logging
import sys
from typing import Any, Dict, List, Optional

from .bridge import Bridge
from .config import config
from .transport import HueError

logger = logging.getLogger(__name__)


def select_bridge(bridges: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Pick a bridge, prompting when discovery found more than one."""
    if len(bridges) == 1:
        return bridges[0]

    print("🔍 Multiple bridges found:")
    for i, bridge in enumerate(bridges):
        print(f"  {i + 1}. {bridge.get('internalipaddress')} (ID: {bridge.get('id')})")

    while True:
        try:
            choice = input(f"Select bridge (1-{len(bridges)}): ")
            idx = int(choice) - 1
            if 0 <= idx < len(bridges):
                return bridges[idx]
            print("❌ Invalid selection. Please try again.")
        except ValueError:
            print("❌ Invalid selection. Please try again.")
        except (EOFError, KeyboardInterrupt):
            print("\n❌ Setup cancelled.")
            return None


def render_env(bridge: Bridge) -> str:
    return f"""# lightogram configuration

# Philips Hue Bridge Settings
HUE_BRIDGE_ID={bridge.id}
HUE_BRIDGE_IP={bridge.ip_address}
HUE_USERNAME={bridge.username}

# Logging Configuration
LOG_LEVEL={config.log_level}
"""


async def discover_only() -> bool:
    """Just list the bridges discovery can see."""
    bridges = await Bridge.discover_bridges()
    if not bridges:
        print("❌ No Hue bridges found on the network.")
        return False

    print(f"✅ Found {len(bridges)} bridge(s):")
    for i, bridge in enumerate(bridges):
        print(f"  Bridge {i + 1}: {bridge.get('internalipaddress')} (ID: {bridge.get('id')})")
    return True


async def interactive_setup(env_path: str = ".env") -> bool:
    """Discover, authorize and save the bridge configuration."""
    print("🌈 lightogram setup")
    print("=" * 40)

    bridges = await Bridge.discover_bridges()
    if not bridges:
        print("❌ No Hue bridges found on the network.")
        print("   Please ensure your bridge is connected and try again.")
        return False

    bridge_data = select_bridge(bridges)
    if bridge_data is None:
        return False

    bridge = Bridge(bridge_data, config.app_name, config.device_name)
    print(f"📍 Using bridge at {bridge.ip_address} (ID: {bridge.id})")
    print(
        f"🔴 Please press the LINK BUTTON on your Hue bridge within "
        f"{config.authorization_attempts * config.authorization_interval:.0f} seconds!"
    )

    await bridge.wait_for_authorization()
    print(f"✅ Authorized as {bridge.username}")

    name = await bridge.get_name()
    print(f"🧪 Connected to '{name}'")

    with open(env_path, "w") as f:
        f.write(render_env(bridge))
    print(f"✅ Wrote bridge configuration to {env_path}")
    return True


def configured_bridge() -> Optional[Bridge]:
    if not config.bridge_id and not config.bridge_ip:
        print("❌ No bridge configured. Run lightogram without options first.")
        return None
    return Bridge(config.bridge_data, config.app_name, config.device_name)


async def list_lights() -> bool:
    bridge = configured_bridge()
    if bridge is None:
        return False

    lights = await bridge.get_lights()
    print(f"💡 {await bridge.get_name()}: {len(lights)} light(s)")
    for light in lights:
        state = await light.get_state()
        status = "on" if state.get("on") else "off"
        print(f"  {light.light_id:>3}  {status:<3}  {light.name} ({light.type})")
    return True


async def revoke(username: str) -> bool:
    bridge = configured_bridge()
    if bridge is None:
        return False

    result = await bridge.remove_authorization(username)
    print(f"🗑️  Bridge answered: {result}")
    return True


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Philips Hue bridge setup")
    parser.add_argument(
        "--discover-only",
        action="store_true",
        help="Only discover bridges, don't authenticate",
    )
    parser.add_argument(
        "--list-lights",
        action="store_true",
        help="List the lights of the configured bridge",
    )
    parser.add_argument(
        "--revoke",
        metavar="USERNAME",
        help="Remove USERNAME from the configured bridge's whitelist",
    )
    parser.add_argument(
        "--env-file", default=".env", help="Where to write the configuration"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.discover_only:
        command = discover_only()
    elif args.list_lights:
        command = list_lights()
    elif args.revoke:
        command = revoke(args.revoke)
    else:
        command = interactive_setup(args.env_file)

    try:
        success = asyncio.run(command)
    except KeyboardInterrupt:
        print("\n❌ Cancelled by user.")
        sys.exit(1)
    except HueError as e:
        logger.error(f"{type(e).__name__}: {e}")
        print(f"❌ {e}")
        sys.exit(1)

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
