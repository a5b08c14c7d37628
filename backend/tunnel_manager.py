"""
WireGuard tunnel management
Brings the interface up from a base64 config blob. Existing interfaces are
never reconfigured or torn down.
"""
import base64
import binascii
import logging
import os
import re
import shutil
import tempfile
import time
from pathlib import Path
from typing import Dict, Optional

from config_manager import (
    WIREGUARD_DIR, SETTLE_DELAY, PUBLIC_IP_URL, PUBLIC_IP_TIMEOUT,
    config_file_for
)
from exceptions import ConfigurationError, TunnelSetupError
from utils import run_command

logger = logging.getLogger("uvicorn")

DNS_DIRECTIVE = re.compile(r"^\s*dns\s*=", re.IGNORECASE)


def interface_exists(iface: str) -> bool:
    """Check the host interface table for the tunnel device"""
    success, _ = run_command(["ip", "link", "show", iface])
    return success


def install_wireguard():
    """Install wireguard-tools unless wg-quick is already available"""
    if shutil.which("wg-quick"):
        logger.info("WireGuard tools already installed")
        return

    logger.info("Installing WireGuard...")
    success, output = run_command(["apt-get", "update"], use_sudo=True)
    if not success:
        raise TunnelSetupError(f"apt-get update failed: {output}")

    success, output = run_command(["apt-get", "install", "-y", "wireguard"], use_sudo=True)
    if not success:
        raise TunnelSetupError(f"Failed to install WireGuard: {output}")


def decode_config(config: str) -> str:
    """
    Decode the base64 tunnel configuration

    Wrapped lines, missing padding and the URL-safe alphabet are accepted.
    """
    blob = "".join(config.split()).rstrip("=").replace("-", "+").replace("_", "/")
    blob += "=" * (-len(blob) % 4)
    try:
        return base64.b64decode(blob, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Tunnel configuration is not valid base64 text: {e}")


def strip_dns_directives(config_text: str) -> str:
    """Drop DNS = lines so wg-quick leaves the host resolver alone"""
    kept = [line for line in config_text.splitlines() if not DNS_DIRECTIVE.match(line)]
    removed = len(config_text.splitlines()) - len(kept)
    if removed:
        logger.info(f"Removed {removed} DNS directive(s) from tunnel configuration")
    return "\n".join(kept) + "\n"


def write_tunnel_config(config_text: str, iface: str) -> Path:
    """Write the configuration to /etc/wireguard/<iface>.conf, owner read/write only"""
    target = config_file_for(iface)
    tmp_dir = tempfile.mkdtemp(prefix="wg-")
    temp_file = Path(tmp_dir) / f"{iface}.conf"

    try:
        fd = os.open(temp_file, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w") as f:
            f.write(config_text)

        success, output = run_command(["mkdir", "-p", str(WIREGUARD_DIR)], use_sudo=True)
        if not success:
            raise TunnelSetupError(f"Failed to create {WIREGUARD_DIR}: {output}")

        success, output = run_command(["cp", str(temp_file), str(target)], use_sudo=True)
        if not success:
            raise TunnelSetupError(f"Failed to write config: {output}")

        success, output = run_command(["chmod", "600", str(target)], use_sudo=True)
        if not success:
            raise TunnelSetupError(f"Failed to restrict permissions on {target}: {output}")
    finally:
        shutil.rmtree(tmp_dir, ignore_errors=True)

    logger.info(f"Wrote tunnel configuration to {target}")
    return target


def start_tunnel(iface: str):
    """Bring the interface up and give it time to settle"""
    logger.info(f"Starting WireGuard interface '{iface}'...")
    success, output = run_command(["wg-quick", "up", iface], use_sudo=True)
    if not success:
        raise TunnelSetupError(f"Failed to start {iface}: {output}")

    logger.info(f"WireGuard interface '{iface}' is up.")
    time.sleep(SETTLE_DELAY)


def bring_up_tunnel(config: str, iface: str, strip_dns: bool = True):
    """First-time setup: install, configure and start the tunnel"""
    config_text = decode_config(config)
    if strip_dns:
        config_text = strip_dns_directives(config_text)

    install_wireguard()
    write_tunnel_config(config_text, iface)
    start_tunnel(iface)


def get_public_ip() -> Optional[str]:
    """Public address as seen by an external echo service"""
    success, output = run_command(
        ["curl", "-fsSL", "--max-time", str(PUBLIC_IP_TIMEOUT), PUBLIC_IP_URL],
        timeout=PUBLIC_IP_TIMEOUT + 5
    )
    if not success:
        logger.warning(f"Could not determine public IP: {output.strip()}")
        return None
    return output.strip() or None


def get_system_info(iface: str) -> Dict[str, str]:
    """Tunnel link state and the routes attached to it"""
    success, link = run_command(["ip", "addr", "show", iface])
    success2, routes = run_command(["ip", "route", "show", "dev", iface])
    success3, routes6 = run_command(["ip", "-6", "route", "show", "dev", iface])

    return {
        "interface": link if success else "N/A",
        "routes": routes if success2 else "N/A",
        "routes6": routes6 if success3 else "N/A"
    }
