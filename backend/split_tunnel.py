"""
Split tunnel invocation

Each invocation decides between first-time setup and incremental routing by
looking at the host's interface table. Nothing is remembered between runs.

    UNINITIALIZED (no interface) -> bring up tunnel -> add routes
    ACTIVE (interface present)   -> add routes
"""
import logging
import sys
from typing import Optional

from config_manager import DEFAULT_INTERFACE, SUPPORTED_PLATFORM
from exceptions import MissingConfigurationError, UnsupportedPlatformError
from models import InvocationOutcome, TunnelMode
from prober import probe_reachability
from routing import apply_routes
from tunnel_manager import bring_up_tunnel, get_public_ip, interface_exists
from utils import split_list

logger = logging.getLogger("uvicorn")


def ensure_supported_platform():
    if not sys.platform.startswith(SUPPORTED_PLATFORM):
        raise UnsupportedPlatformError(f"Only {SUPPORTED_PLATFORM} hosts are supported, not {sys.platform}.")


def detect_mode(iface: str) -> TunnelMode:
    """Query the interface table; the result is never cached"""
    if interface_exists(iface):
        return TunnelMode.ACTIVE
    return TunnelMode.UNINITIALIZED


def run_invocation(
    iface: str = DEFAULT_INTERFACE,
    config: Optional[str] = None,
    domains: Optional[str] = None,
    ips: Optional[str] = None,
    strip_dns: bool = True,
    report_public_ip: bool = True,
) -> InvocationOutcome:
    """
    Run one split tunnel invocation

    Args:
        iface: Tunnel interface name
        config: Base64 WireGuard configuration, required only when the interface is absent
        domains: Comma-separated domains to route through the tunnel
        ips: Comma-separated address literals to route through the tunnel
        strip_dns: Remove DNS directives from the configuration before bring-up
        report_public_ip: Look up the public address seen through the tunnel

    Returns:
        InvocationOutcome describing what was routed

    Raises:
        SplitTunnelError: on unsupported platform, missing configuration or failed bring-up
    """
    ensure_supported_platform()

    domain_list = split_list(domains)
    ip_list = split_list(ips)

    mode = detect_mode(iface)
    outcome = InvocationOutcome(interface=iface, mode=mode)

    if mode is TunnelMode.UNINITIALIZED:
        if not config:
            raise MissingConfigurationError(
                f"Interface {iface} does not exist and no config was provided to create it."
            )
        bring_up_tunnel(config, iface, strip_dns=strip_dns)
    else:
        logger.info(f"Interface {iface} already exists, skipping setup.")
        if not domain_list and not ip_list:
            logger.warning(f"Interface {iface} is already up and no domains or IPs were provided; no routes added.")

    if domain_list or ip_list:
        batch = apply_routes(domain_list, ip_list, iface)
        probes = probe_reachability(batch.routed)
        outcome = outcome.model_copy(update={
            "routes_applied": len(batch.routed),
            "failed_domains": batch.failed_domains,
            "failed_addresses": batch.failed_addresses,
            "probes": probes,
        })
    elif mode is TunnelMode.UNINITIALIZED:
        logger.info("No domains or IPs provided, routing follows the tunnel configuration.")

    if report_public_ip:
        public_ip = get_public_ip()
        if public_ip:
            logger.info(f"Public IP via WG: {public_ip}")
            outcome = outcome.model_copy(update={"public_ip": public_ip})

    return outcome
