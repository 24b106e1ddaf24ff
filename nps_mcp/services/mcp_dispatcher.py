"""Tool dispatcher: validate a call, run its handler, build the envelope.

A ``ToolDispatcher`` serves exactly one ``tools/call`` and is discarded with
its exchange. ``call_tool`` never raises: every path ends in one
``ToolResult``, failures carried as error content with ``isError`` set.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from loguru import logger
from pydantic import ValidationError

from nps_mcp.core.exceptions import ToolErrorKind
from nps_mcp.schemas.mcp_schemas import MCPToolListResponse, MCPToolSchema, ToolResult
from nps_mcp.services.mcp_tool_registry import ToolDefinition, ToolRegistry
from nps_mcp.services.tool_outcomes import ToolFailure, ToolSuccess

GENERIC_SERVER_ERROR = "An unexpected error occurred"


class DispatchState(str, Enum):
    RECEIVED = "received"
    VALIDATING = "validating"
    VALIDATION_FAILED = "validation_failed"
    DISPATCHING = "dispatching"
    HANDLER_SUCCEEDED = "handler_succeeded"
    HANDLER_FAILED = "handler_failed"
    RESPONDED = "responded"


@dataclass(frozen=True)
class ToolCall:
    """One inbound call. ``arguments`` is ``None`` when the payload had none."""

    name: str
    arguments: Optional[Any] = None


def format_violations(exc: ValidationError) -> List[Dict[str, str]]:
    violations = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"]) or "(root)"
        violations.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"],
        })
    return violations


class ToolDispatcher:
    def __init__(self, registry: ToolRegistry):
        self.registry = registry
        self.state = DispatchState.RECEIVED
        self.history: List[DispatchState] = [DispatchState.RECEIVED]
        self._consumed = False

    def _transition(self, state: DispatchState) -> None:
        logger.debug(f"dispatch {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)

    def list_tools(self) -> List[ToolDefinition]:
        return self.registry.list()

    def list_tools_payload(self) -> Dict[str, Any]:
        response = MCPToolListResponse(
            tools=[MCPToolSchema(**tool.describe()) for tool in self.list_tools()]
        )
        return response.to_payload()

    async def call_tool(self, call: ToolCall) -> ToolResult:
        if self._consumed:
            raise RuntimeError("ToolDispatcher already served a call; create a new one per exchange")
        self._consumed = True

        self._transition(DispatchState.VALIDATING)
        outcome = self._validate(call)
        if isinstance(outcome, ToolFailure):
            self._transition(DispatchState.VALIDATION_FAILED)
            logger.warning(f"Tool call {call.name!r} rejected: {outcome.error}")
        else:
            tool, arguments = outcome
            self._transition(DispatchState.DISPATCHING)
            outcome = await self._invoke(tool, arguments)
            self._transition(
                DispatchState.HANDLER_SUCCEEDED
                if isinstance(outcome, ToolSuccess)
                else DispatchState.HANDLER_FAILED
            )

        result = outcome.to_result()
        self._transition(DispatchState.RESPONDED)
        return result

    def _validate(self, call: ToolCall):
        if call.arguments is None:
            return ToolFailure.of_kind(
                ToolErrorKind.MISSING_ARGUMENTS,
                message="No arguments provided",
            )

        tool = self.registry.lookup(call.name)
        if tool is None:
            return ToolFailure.of_kind(
                ToolErrorKind.UNKNOWN_TOOL,
                message=f"Unknown tool: {call.name}",
                extra={"tool": call.name},
            )

        try:
            arguments = tool.arguments_model.model_validate(call.arguments)
        except ValidationError as exc:
            return ToolFailure.of_kind(
                ToolErrorKind.INVALID_ARGUMENTS,
                details=format_violations(exc),
            )
        return tool, arguments

    async def _invoke(self, tool: ToolDefinition, arguments):
        try:
            outcome = await tool.handler(arguments)
        except Exception as exc:  # noqa: BLE001
            logger.exception(f"Tool {tool.name.value} raised")
            return ToolFailure.of_kind(
                ToolErrorKind.SERVER_ERROR,
                message=str(exc) or GENERIC_SERVER_ERROR,
            )

        if isinstance(outcome, (ToolSuccess, ToolFailure)):
            return outcome
        logger.error(f"Tool {tool.name.value} returned {type(outcome).__name__}, expected a tool outcome")
        return ToolFailure.of_kind(ToolErrorKind.SERVER_ERROR, message=GENERIC_SERVER_ERROR)
