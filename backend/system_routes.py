"""
System information API routes
"""
from fastapi import APIRouter

import tunnel_manager
from config_manager import DEFAULT_INTERFACE

router = APIRouter()


@router.get("/info")
async def system_info(iface: str = DEFAULT_INTERFACE):
    """Get tunnel interface and route information"""
    return tunnel_manager.get_system_info(iface)
