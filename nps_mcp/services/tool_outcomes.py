"""Result types returned by tool handlers."""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from nps_mcp.core.exceptions import ToolErrorKind
from nps_mcp.schemas.mcp_schemas import TextContent, ToolResult


def json_text(payload: Any) -> TextContent:
    return TextContent(text=json.dumps(payload, indent=2, ensure_ascii=False))


@dataclass(frozen=True)
class ToolSuccess:
    content: List[TextContent]

    @classmethod
    def of_json(cls, payload: Any) -> "ToolSuccess":
        return cls(content=[json_text(payload)])

    def to_result(self) -> ToolResult:
        return ToolResult(content=list(self.content))


@dataclass(frozen=True)
class ToolFailure:
    """Structured failure: ``error`` names the kind, ``message``/``details`` the specifics."""

    error: str
    message: Optional[str] = None
    details: Optional[Any] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def of_kind(cls, kind: ToolErrorKind, **kwargs) -> "ToolFailure":
        return cls(error=kind.value, **kwargs)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.error}
        if self.message is not None:
            payload["message"] = self.message
        if self.details is not None:
            payload["details"] = self.details
        payload.update(self.extra)
        return payload

    def to_result(self) -> ToolResult:
        return ToolResult(content=[json_text(self.to_payload())], isError=True)


HandlerOutcome = Union[ToolSuccess, ToolFailure]
