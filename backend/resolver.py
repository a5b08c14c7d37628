"""
Domain resolution for split tunnel routes
Looks up A and AAAA records independently, each within DNS_TIMEOUT.
"""
import logging
from typing import List

import dns.exception
import dns.resolver

from config_manager import DNS_TIMEOUT
from models import AddressFamily, NetworkTarget
from utils import bounded_wait

logger = logging.getLogger("uvicorn")

RECORD_TYPES = (
    (AddressFamily.IPV4, "A"),
    (AddressFamily.IPV6, "AAAA"),
)

LABELS = {
    AddressFamily.IPV4: "IPv4",
    AddressFamily.IPV6: "IPv6",
}


def lookup(domain: str, family: AddressFamily, rdtype: str) -> List[str]:
    """
    Resolve one address family for a domain.

    A domain without records of this family yields an empty list silently.
    Timeouts and resolver errors are logged and also yield an empty list.
    """
    label = LABELS[family]
    try:
        finished, answer = bounded_wait(
            dns.resolver.resolve, DNS_TIMEOUT, domain, rdtype, lifetime=DNS_TIMEOUT
        )
    except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer):
        return []
    except (dns.exception.DNSException, OSError) as e:
        logger.warning(f"{label} resolution failed for {domain}: {e}")
        return []

    if not finished:
        logger.warning(f"{label} resolution for {domain} timed out after {DNS_TIMEOUT}s")
        return []

    return [rdata.address for rdata in answer]


def resolve_domain(domain: str) -> List[NetworkTarget]:
    """Resolve a domain to its IPv4 then IPv6 addresses, never raising"""
    targets: List[NetworkTarget] = []
    seen = set()

    for family, rdtype in RECORD_TYPES:
        for address in lookup(domain, family, rdtype):
            if address in seen:
                continue
            seen.add(address)
            targets.append(NetworkTarget(address=address, origin_domain=domain))

    logger.info(f"Resolved {domain} to {len(targets)} address(es)")
    return targets
