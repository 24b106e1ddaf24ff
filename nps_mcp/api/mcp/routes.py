"""MCP endpoint (stateless streamable HTTP, JSON responses only)"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from nps_mcp.core.exceptions import ProtocolError
from nps_mcp.services.mcp_transport import McpExchange

router = APIRouter()


class McpHttpResponse(JSONResponse):
    """JSON-RPC reply that closes its exchange once the write has finished or failed."""

    def __init__(self, exchange: McpExchange, status_code: int, payload=None):
        self.exchange = exchange
        if payload is None:
            # 202 for notifications: no body, no content type
            self.media_type = None
        super().__init__(content=payload, status_code=status_code)

    def render(self, content) -> bytes:
        if content is None:
            return b""
        return super().render(content)

    async def __call__(self, scope, receive, send) -> None:
        try:
            await super().__call__(scope, receive, send)
        finally:
            self.exchange.close()


@router.post("/mcp")
async def handle_mcp_request(request: Request):
    # one exchange, one dispatcher; released after the reply is written
    exchange = McpExchange(request.app.state.tool_registry)
    exchange.open()
    try:
        body = await request.body()
        response = await exchange.handle(body)
    except BaseException:
        # error or disconnect before a reply exists
        exchange.close()
        raise

    return McpHttpResponse(exchange, response.status_code, response.payload)


@router.get("/mcp")
async def reject_mcp_stream():
    # no SSE stream without sessions
    raise ProtocolError.method_not_allowed()


@router.delete("/mcp")
async def reject_mcp_session_delete():
    raise ProtocolError.method_not_allowed()
