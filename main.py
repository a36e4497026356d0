import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
from mcp.server.fastmcp import FastMCP

from storefront.config import Settings, settings as default_settings
from storefront.mcp_handlers import register_mcp
from storefront.routes import register_api_routes
from storefront.store import Storefront


def create_app(settings: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None) -> FastAPI:
    settings = settings or default_settings

    # =====================================================
    # 1) FastAPI app and shop state
    # =====================================================
    storefront = Storefront(settings, transport=transport)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await storefront.load_catalog()
        yield

    app = FastAPI(title=f"{settings.shop_name} Storefront", lifespan=lifespan)
    app.state.storefront = storefront

    # =====================================================
    # 2) MCP Server
    # =====================================================
    mcp = FastMCP(
        name="storefront-mcp",
        sse_path="/sse",
        message_path="/messages/",
    )
    register_mcp(mcp, storefront)
    app.state.mcp = mcp

    @app.get("/mcp")
    async def mcp_info_handler():
        """MCP server info"""
        return {
            "name": "storefront-mcp",
            "version": "1.0.0",
            "protocols": ["sse"],
            "endpoints": {
                "sse": f"{settings.base_url}/mcp/sse",
                "messages": f"{settings.base_url}/mcp/messages/"
            }
        }

    # =====================================================
    # 3) API routes
    # =====================================================
    register_api_routes(app, storefront)

    # =====================================================
    # 4) Debug route
    # =====================================================
    @app.get("/__routes__")
    async def debug_routes():
        return [{"path": route.path, "methods": list(route.methods) if hasattr(route, 'methods') else None} for route in app.router.routes]

    app.mount("/mcp", mcp.sse_app())
    return app


logging.basicConfig(
    level=default_settings.log_level,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)

app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=int(os.getenv("PORT", 8000)))
