"""
National Parks MCP Server - 主应用入口
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from loguru import logger

from nps_mcp.api import health_router
from nps_mcp.api.mcp import router as mcp_router
from nps_mcp.core.config import settings
from nps_mcp.core.error_handlers import register_error_handlers
from nps_mcp.core.logging import configure_logging
from nps_mcp.services.mcp_tool_registry import build_registry


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)
    settings.warn_if_unconfigured()

    logger.info(f"National Parks MCP Server listening on port {settings.port}")
    logger.info(f"Health endpoint: http://localhost:{settings.port}/health")
    logger.info(f"MCP endpoint: http://localhost:{settings.port}/mcp")
    logger.info(f"{len(app.state.tool_registry)} tools registered")

    try:
        yield
    finally:
        logger.info("Shutting down server...")


def create_app() -> FastAPI:
    app = FastAPI(
        title="National Parks MCP Server",
        description="Stateless MCP server exposing National Park Service lookups as tools",
        version=settings.version,
        lifespan=lifespan,
    )
    # built once, read-only for the process lifetime
    app.state.tool_registry = build_registry()

    register_error_handlers(app)

    app.include_router(health_router.router, tags=["health"])
    app.include_router(mcp_router, tags=["mcp"])
    return app


app = create_app()


def run() -> None:
    uvicorn.run(
        "nps_mcp.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
