"""
Configuration management for the split tunnel
"""
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Configuration paths
WIREGUARD_DIR = Path("/etc/wireguard")
DEFAULT_INTERFACE = "wg0"

SUPPORTED_PLATFORM = "linux"

# Seconds to let a fresh interface settle before routes are added
SETTLE_DELAY = 4

# Per-family DNS lookup budget (seconds)
DNS_TIMEOUT = 5.0

# Reachability probing
PROBE_SAMPLE_SIZE = 3
PROBE_TIMEOUT = 10.0

PUBLIC_IP_URL = "https://ifconfig.me"
PUBLIC_IP_TIMEOUT = 10


def config_file_for(iface: str) -> Path:
    """Location wg-quick reads the interface configuration from"""
    return WIREGUARD_DIR / f"{iface}.conf"


class ActionInputs(BaseSettings):
    """
    Invocation inputs.

    Read from INPUT_* environment variables, the way a workflow runner
    hands inputs to an action. Empty variables fall back to the defaults.
    """
    model_config = SettingsConfigDict(
        env_prefix="INPUT_",
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
    )

    iface: str = DEFAULT_INTERFACE
    config: Optional[str] = None
    domains: str = ""
    ips: str = ""
    strip_dns: bool = True
    report_public_ip: bool = True


def load_inputs() -> ActionInputs:
    """Load invocation inputs from the environment"""
    return ActionInputs()
