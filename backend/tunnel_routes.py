"""
Tunnel-related API routes
"""
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import Optional

import split_tunnel
from config_manager import DEFAULT_INTERFACE
from exceptions import ConfigurationError, MissingConfigurationError, SplitTunnelError

router = APIRouter()


class RouteRequest(BaseModel):
    iface: str = DEFAULT_INTERFACE
    config: Optional[str] = None
    domains: str = ""
    ips: str = ""
    strip_dns: bool = True
    report_public_ip: bool = False


@router.post("/routes")
def add_routes(request: RouteRequest):
    """
    Bring up the tunnel if needed and route the given domains and IPs through it
    """
    try:
        outcome = split_tunnel.run_invocation(**request.model_dump())
    except (MissingConfigurationError, ConfigurationError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SplitTunnelError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return outcome.model_dump()


@router.get("/status")
def tunnel_status(iface: str = DEFAULT_INTERFACE):
    """Whether the tunnel interface currently exists"""
    mode = split_tunnel.detect_mode(iface)
    return {"interface": iface, "mode": mode.value}
