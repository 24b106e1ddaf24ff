"""
测试配置文件
"""

import dataclasses
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

# 添加项目根目录到路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from nps_mcp.services import park_handlers  # noqa: E402
from nps_mcp.services.mcp_tool_registry import PARK_TOOLS, ToolName, ToolRegistry  # noqa: E402


def make_registry(**handlers) -> ToolRegistry:
    """Park tool registry with selected handlers swapped, keyed by ToolName member name."""
    replacements = {ToolName[key]: handler for key, handler in handlers.items()}
    return ToolRegistry(
        dataclasses.replace(tool, handler=replacements[tool.name]) if tool.name in replacements else tool
        for tool in PARK_TOOLS
    )


# 测试用NPS数据
SAMPLE_PARK = {
    "fullName": "Yosemite National Park",
    "parkCode": "yose",
    "description": "Not just a great valley, but a shrine to human foresight.",
    "states": "CA",
    "url": "https://www.nps.gov/yose/index.htm",
    "designation": "National Park",
    "latitude": "37.84883288",
    "longitude": "-119.5571873",
    "activities": [{"id": "1", "name": "Hiking"}, {"id": "2", "name": "Camping"}],
    "topics": [{"id": "9", "name": "Waterfalls"}],
    "weatherInfo": "Variable",
    "entranceFees": [{"cost": "35.00", "title": "Private Vehicle", "description": "7 days"}],
    "operatingHours": [{"name": "All Park Hours", "description": "Open 24 hours", "standardHours": {"monday": "All Day"}}],
    "contacts": {
        "phoneNumbers": [{"phoneNumber": "2093720200", "type": "Voice"}],
        "emailAddresses": [{"emailAddress": "yose_web_manager@nps.gov"}],
    },
    "images": [{"url": "https://example.org/yose.jpg", "title": "Half Dome", "altText": "Half Dome", "credit": "NPS"}],
}

SAMPLE_DESERT_PARK = {
    "fullName": "Joshua Tree National Park",
    "parkCode": "jotr",
    "description": "Two distinct desert ecosystems.",
    "states": "CA",
    "url": "https://www.nps.gov/jotr/index.htm",
    "designation": "National Park",
    "activities": [{"id": "3", "name": "Rock Climbing"}],
}


class FakeNPSClient:
    """Stand-in for NPSClient recording every call."""

    def __init__(self, responses: Dict[str, Any], calls: List[tuple], error: Optional[Exception] = None):
        self.responses = responses
        self.calls = calls
        self.error = error

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False

    async def _get(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append((endpoint, params))
        if self.error is not None:
            raise self.error
        return self.responses.get(endpoint, {"total": "0", "data": []})

    async def get_parks(self, params):
        return await self._get("parks", params)

    async def get_alerts(self, params):
        return await self._get("alerts", params)

    async def get_visitor_centers(self, params):
        return await self._get("visitorcenters", params)

    async def get_campgrounds(self, params):
        return await self._get("campgrounds", params)

    async def get_events(self, params):
        return await self._get("events", params)


class FakeNPS:
    def __init__(self):
        self.responses: Dict[str, Any] = {}
        self.calls: List[tuple] = []
        self.error: Optional[Exception] = None

    def client(self) -> FakeNPSClient:
        return FakeNPSClient(self.responses, self.calls, self.error)


@pytest.fixture
def fake_nps(monkeypatch) -> FakeNPS:
    fake = FakeNPS()
    monkeypatch.setattr(park_handlers, "NPSClient", fake.client)
    return fake
