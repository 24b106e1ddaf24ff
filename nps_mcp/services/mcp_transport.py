"""
无状态MCP传输适配器
每个HTTP交换创建独立的分发器与传输上下文，交换结束时统一释放
"""

import asyncio
import json
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from loguru import logger
from pydantic import ValidationError

from nps_mcp.core.config import settings
from nps_mcp.core.exceptions import JSONRPC_VERSION, ProtocolError
from nps_mcp.schemas.mcp_schemas import CallToolParams, JsonRpcRequest
from nps_mcp.services.mcp_dispatcher import ToolCall, ToolDispatcher
from nps_mcp.services.mcp_tool_registry import ToolRegistry

LATEST_PROTOCOL_VERSION = "2025-06-18"
SUPPORTED_PROTOCOL_VERSIONS = ("2025-06-18", "2025-03-26", "2024-11-05")


@dataclass(frozen=True)
class ExchangeResponse:
    status_code: int
    payload: Optional[Dict[str, Any]] = None


@dataclass
class TransportContext:
    """Per-exchange transport state, released with the exchange."""

    started_at: float = field(default_factory=time.perf_counter)
    request_id: Any = None
    method: Optional[str] = None
    released: bool = False

    def release(self) -> float:
        self.released = True
        return (time.perf_counter() - self.started_at) * 1000


def _request_id_of(message: Any) -> Any:
    if isinstance(message, dict):
        candidate = message.get("id")
        if isinstance(candidate, (int, str)) and not isinstance(candidate, bool):
            return candidate
    return None


def decode_request(body: bytes) -> JsonRpcRequest:
    """Decode one JSON-RPC message or raise ``ProtocolError``."""
    try:
        message = json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ProtocolError.parse_error() from exc

    if isinstance(message, list):
        raise ProtocolError.invalid_request("Invalid Request: batch requests are not supported")
    if not isinstance(message, dict):
        raise ProtocolError.invalid_request("Invalid Request: expected a JSON object")

    try:
        return JsonRpcRequest.model_validate(message)
    except ValidationError as exc:
        raise ProtocolError.invalid_request(
            f"Invalid Request: {exc.error_count()} invalid field(s)",
            request_id=_request_id_of(message),
        ) from exc


def initialize_result(params: Any) -> Dict[str, Any]:
    requested = params.get("protocolVersion") if isinstance(params, dict) else None
    version = requested if requested in SUPPORTED_PROTOCOL_VERSIONS else LATEST_PROTOCOL_VERSION
    return {
        "protocolVersion": version,
        "capabilities": {"tools": {}},
        "serverInfo": {
            "name": settings.app_name,
            "version": settings.version,
        },
    }


class McpExchange:
    """Binds one ToolDispatcher to one inbound exchange.

    Use as ``async with McpExchange(registry) as exchange``; leaving the block
    runs the completion hook, whatever ended the exchange. The HTTP route calls
    ``open`` and ``close`` itself so the hook waits for the reply to be written.
    """

    def __init__(self, registry: ToolRegistry):
        self._registry = registry
        self.dispatcher: Optional[ToolDispatcher] = None
        self.context: Optional[TransportContext] = None
        self.response_sent = False
        self.closed = False
        self._close_callbacks: List[Callable[[], None]] = []

    async def __aenter__(self) -> "McpExchange":
        self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def open(self) -> None:
        if self.closed:
            raise RuntimeError("exchange already closed")
        if self.dispatcher is None:
            self.dispatcher = ToolDispatcher(self._registry)
            self.context = TransportContext()

    def on_close(self, callback: Callable[[], None]) -> None:
        self._close_callbacks.append(callback)

    def close(self) -> None:
        """Release the transport context and dispatcher. Safe to call repeatedly."""
        if self.closed:
            return
        self.closed = True

        elapsed_ms = self.context.release() if self.context else 0.0
        method = self.context.method if self.context else None
        self.context = None
        self.dispatcher = None
        logger.debug(f"MCP exchange closed method={method} elapsed={elapsed_ms:.1f}ms")

        for callback in self._close_callbacks:
            try:
                callback()
            except Exception:  # noqa: BLE001
                logger.exception("MCP exchange close callback failed")
        self._close_callbacks.clear()

    async def handle(self, body: bytes) -> ExchangeResponse:
        if self.closed:
            raise RuntimeError("exchange already closed")
        if self.response_sent:
            raise RuntimeError("exchange already responded")
        self.open()

        try:
            response = await self._respond(body)
        except ProtocolError as exc:
            response = ExchangeResponse(exc.http_status, exc.to_envelope())
        except Exception:  # noqa: BLE001
            logger.exception("Error handling MCP request")
            response = ExchangeResponse(500, ProtocolError.internal_error().to_envelope())

        self.response_sent = True
        return response

    async def _respond(self, body: bytes) -> ExchangeResponse:
        request = decode_request(body)
        self.context.request_id = request.id
        self.context.method = request.method

        if request.is_notification:
            logger.debug(f"MCP notification {request.method} accepted")
            return ExchangeResponse(202)

        result = await self._route(request)
        return ExchangeResponse(200, {
            "jsonrpc": JSONRPC_VERSION,
            "id": request.id,
            "result": result,
        })

    async def _route(self, request: JsonRpcRequest) -> Dict[str, Any]:
        if request.params is not None and not isinstance(request.params, dict):
            raise ProtocolError.invalid_params("Invalid params: expected an object", request.id)

        if request.method == "initialize":
            return initialize_result(request.params)
        if request.method == "ping":
            return {}
        if request.method == "tools/list":
            return self.dispatcher.list_tools_payload()
        if request.method == "tools/call":
            try:
                params = CallToolParams.model_validate(request.params or {})
            except ValidationError as exc:
                raise ProtocolError.invalid_params(
                    "Invalid params: tools/call requires a string 'name'", request.id
                ) from exc
            call = ToolCall(name=params.name, arguments=params.arguments)
            # shielded: a disconnect abandons the result but lets the handler finish
            result = await asyncio.shield(self.dispatcher.call_tool(call))
            return result.to_payload()

        raise ProtocolError.method_not_found(request.method, request.id)
