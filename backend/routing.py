"""
Host route management for the tunnel interface
Routes are only ever added; an existing identical route counts as applied.
"""
import ipaddress
import logging
from typing import List, Tuple

from models import AddressFamily, NetworkTarget, RouteBatch, RouteSpec
from resolver import resolve_domain
from utils import run_command

logger = logging.getLogger("uvicorn")

HOST_MASKS = {
    AddressFamily.IPV4: 32,
    AddressFamily.IPV6: 128,
}

# iproute2 reports a duplicate route as RTNETLINK EEXIST
ROUTE_EXISTS_MARKER = "File exists"


def build_route_spec(target: NetworkTarget, iface: str) -> RouteSpec:
    """Host-exact route for a single address via the tunnel device"""
    family = target.family
    return RouteSpec(
        prefix=f"{target.address}/{HOST_MASKS[family]}",
        device=iface,
        family=family,
    )


def add_route(target: NetworkTarget, iface: str) -> Tuple[bool, str]:
    """
    Install the host route for one address

    Returns:
        Tuple of (success: bool, message: str)
    """
    try:
        ipaddress.ip_address(target.address)
    except ValueError:
        return False, f"'{target.address}' is not a valid IP address"

    spec = build_route_spec(target, iface)
    success, output = run_command(spec.command(), use_sudo=True)
    if success:
        return True, spec.prefix

    if ROUTE_EXISTS_MARKER in output:
        logger.info(f"Route for {spec.prefix} via {iface} already present")
        return True, spec.prefix

    return False, output.strip()


def apply_routes_for_domains(domains: List[str], iface: str) -> RouteBatch:
    """Resolve each domain and route every address it resolves to"""
    routed: List[NetworkTarget] = []
    failed_domains: List[str] = []
    failed_addresses: List[str] = []

    for domain in domains:
        logger.info(f"Resolving {domain}...")
        targets = resolve_domain(domain)
        if not targets:
            logger.warning(f"No addresses resolved for {domain}, skipping")
            failed_domains.append(domain)
            continue

        for target in targets:
            logger.info(f"Adding route for {domain} ({target.address}) via {iface}")
            success, message = add_route(target, iface)
            if success:
                routed.append(target)
            else:
                logger.warning(f"Failed to add route for {target.address}: {message}")
                failed_addresses.append(target.address)

    return RouteBatch(routed=routed, failed_domains=failed_domains, failed_addresses=failed_addresses)


def apply_routes_for_addresses(ips: List[str], iface: str) -> RouteBatch:
    """Route literal addresses as given"""
    routed: List[NetworkTarget] = []
    failed_addresses: List[str] = []

    for ip in ips:
        target = NetworkTarget(address=ip)
        success, message = add_route(target, iface)
        if success:
            logger.info(f"Added route for {ip}")
            routed.append(target)
        else:
            logger.warning(f"Failed to add route for {ip}: {message}")
            failed_addresses.append(ip)

    return RouteBatch(routed=routed, failed_addresses=failed_addresses)


def apply_routes(domains: List[str], ips: List[str], iface: str) -> RouteBatch:
    """Route domain-derived addresses first, then literal addresses"""
    logger.info("Adding dynamic routes...")
    batch = apply_routes_for_domains(domains, iface).combine(apply_routes_for_addresses(ips, iface))

    logger.info(f"Added {len(batch.routed)} route(s).")
    if batch.failed_domains:
        logger.warning(f"{len(batch.failed_domains)} domain(s) did not resolve: {', '.join(batch.failed_domains)}")
    if batch.failed_addresses:
        logger.warning(f"{len(batch.failed_addresses)} route(s) failed: {', '.join(batch.failed_addresses)}")
    return batch
