"""Pydantic schemas for the MCP JSON-RPC envelope"""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Uniform response envelope for one ``tools/call``."""

    content: List[TextContent]
    isError: bool = False

    def to_payload(self) -> Dict[str, Any]:
        payload = self.model_dump()
        if not self.isError:
            payload.pop("isError")
        return payload


class MCPToolSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str
    input_schema: Dict[str, Any] = Field(alias="inputSchema")


class MCPToolListResponse(BaseModel):
    tools: List[MCPToolSchema]

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class JsonRpcRequest(BaseModel):
    """One decoded JSON-RPC message; ``id`` absent means notification."""

    model_config = ConfigDict(extra="ignore")

    jsonrpc: Literal["2.0"]
    method: str = Field(min_length=1)
    params: Any = None
    id: Optional[Union[StrictInt, StrictStr]] = None

    @property
    def is_notification(self) -> bool:
        return "id" not in self.model_fields_set


class CallToolParams(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    # left untyped: the dispatcher owns argument validation
    arguments: Any = None
