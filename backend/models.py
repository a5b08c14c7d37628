"""
Data models for the split tunnel
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class AddressFamily(str, Enum):
    IPV4 = "ipv4"
    IPV6 = "ipv6"


class TunnelMode(str, Enum):
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"


def address_family(address: str) -> AddressFamily:
    """Classify an address literal by its syntax"""
    return AddressFamily.IPV6 if ":" in address else AddressFamily.IPV4


class NetworkTarget(BaseModel):
    """An address to route through the tunnel, literal or resolved from a domain"""
    model_config = ConfigDict(frozen=True)

    address: str
    origin_domain: Optional[str] = None

    @property
    def family(self) -> AddressFamily:
        return address_family(self.address)


class RouteSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    prefix: str
    device: str
    family: AddressFamily

    def command(self) -> List[str]:
        """ip arguments that install this host route"""
        if self.family is AddressFamily.IPV6:
            return ["ip", "-6", "route", "add", self.prefix, "dev", self.device]
        return ["ip", "route", "add", self.prefix, "dev", self.device]


class RouteBatch(BaseModel):
    """Result of applying routes for one group of inputs"""
    model_config = ConfigDict(frozen=True)

    routed: List[NetworkTarget] = []
    failed_domains: List[str] = []
    failed_addresses: List[str] = []

    def combine(self, other: "RouteBatch") -> "RouteBatch":
        return RouteBatch(
            routed=self.routed + other.routed,
            failed_domains=self.failed_domains + other.failed_domains,
            failed_addresses=self.failed_addresses + other.failed_addresses,
        )


class ProbeResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: str
    reachable: bool
    detail: str = ""


class InvocationOutcome(BaseModel):
    interface: str
    mode: TunnelMode
    routes_applied: int = 0
    failed_domains: List[str] = []
    failed_addresses: List[str] = []
    probes: List[ProbeResult] = []
    public_ip: Optional[str] = None
