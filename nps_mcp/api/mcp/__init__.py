from nps_mcp.api.mcp.routes import router

__all__ = ["router"]
