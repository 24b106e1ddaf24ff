"""Registry for MCP-compatible tools"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Mapping, Optional, Type

from nps_mcp.schemas.tool_schemas import (
    FindParksArgs,
    GetAlertsArgs,
    GetCampgroundsArgs,
    GetEventsArgs,
    GetParkDetailsArgs,
    GetVisitorCentersArgs,
    ToolArguments,
)
from nps_mcp.services import park_handlers
from nps_mcp.services.tool_outcomes import HandlerOutcome

ToolHandler = Callable[[ToolArguments], Awaitable[HandlerOutcome]]


class ToolName(str, Enum):
    FIND_PARKS = "findParks"
    GET_PARK_DETAILS = "getParkDetails"
    GET_ALERTS = "getAlerts"
    GET_VISITOR_CENTERS = "getVisitorCenters"
    GET_CAMPGROUNDS = "getCampgrounds"
    GET_EVENTS = "getEvents"

    @classmethod
    def parse(cls, name: Any) -> Optional["ToolName"]:
        try:
            return cls(name)
        except ValueError:
            return None


@dataclass(frozen=True)
class ToolDefinition:
    name: ToolName
    description: str
    arguments_model: Type[ToolArguments]
    handler: ToolHandler

    def input_schema(self) -> Dict[str, Any]:
        return self.arguments_model.model_json_schema(by_alias=True)

    def describe(self) -> Dict[str, Any]:
        return {
            "name": self.name.value,
            "description": self.description,
            "inputSchema": self.input_schema(),
        }


class ToolRegistry:
    """Read-only registry: built once, then only listed and looked up."""

    def __init__(self, definitions: Iterable[ToolDefinition]):
        tools: Dict[ToolName, ToolDefinition] = {}
        for definition in definitions:
            if definition.name in tools:
                raise ValueError(f"Duplicate MCP tool: {definition.name.value}")
            tools[definition.name] = definition
        self._tools: Mapping[ToolName, ToolDefinition] = MappingProxyType(tools)

    def list(self) -> List[ToolDefinition]:
        return list(self._tools.values())

    def lookup(self, name: Any) -> Optional[ToolDefinition]:
        tool_name = ToolName.parse(name)
        if tool_name is None:
            return None
        return self._tools.get(tool_name)

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: Any) -> bool:
        return self.lookup(name) is not None


PARK_TOOLS = (
    ToolDefinition(
        name=ToolName.FIND_PARKS,
        description="Search for national parks based on state, name, activities, or other criteria",
        arguments_model=FindParksArgs,
        handler=park_handlers.find_parks,
    ),
    ToolDefinition(
        name=ToolName.GET_PARK_DETAILS,
        description="Get detailed information about a specific national park",
        arguments_model=GetParkDetailsArgs,
        handler=park_handlers.get_park_details,
    ),
    ToolDefinition(
        name=ToolName.GET_ALERTS,
        description="Get current alerts for national parks including closures, hazards, and important information",
        arguments_model=GetAlertsArgs,
        handler=park_handlers.get_alerts,
    ),
    ToolDefinition(
        name=ToolName.GET_VISITOR_CENTERS,
        description="Get information about visitor centers and their operating hours",
        arguments_model=GetVisitorCentersArgs,
        handler=park_handlers.get_visitor_centers,
    ),
    ToolDefinition(
        name=ToolName.GET_CAMPGROUNDS,
        description="Get information about available campgrounds and their amenities",
        arguments_model=GetCampgroundsArgs,
        handler=park_handlers.get_campgrounds,
    ),
    ToolDefinition(
        name=ToolName.GET_EVENTS,
        description="Find upcoming events at parks",
        arguments_model=GetEventsArgs,
        handler=park_handlers.get_events,
    ),
)


def build_registry() -> ToolRegistry:
    return ToolRegistry(PARK_TOOLS)
