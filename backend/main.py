"""
Split Tunnel - Main API Server

A FastAPI-based backend that brings up a WireGuard tunnel and routes
selected domains and addresses through it.
"""
from fastapi import FastAPI

# Import route handlers
import tunnel_routes
import system_routes

# Create FastAPI app
app = FastAPI(
    title="WireGuard Split Tunnel",
    version="1.0.0",
    description="Route selected domains and addresses through a WireGuard interface"
)

# Include routers
app.include_router(tunnel_routes.router, prefix="/api/tunnel", tags=["Tunnel"])
app.include_router(system_routes.router, prefix="/api/system", tags=["System"])


@app.get("/")
async def root():
    """Root endpoint - API information"""
    return {
        "message": "WireGuard Split Tunnel API",
        "version": "1.0.0",
        "docs": "/docs",
        "redoc": "/redoc"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=51507)
