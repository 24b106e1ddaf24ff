"""
错误处理模块单元测试
"""

import json
from unittest.mock import Mock

import pytest
from fastapi import Request

from nps_mcp.core.error_handlers import ErrorHandler
from nps_mcp.core.exceptions import (
    ExternalServiceError,
    JsonRpcErrorCode,
    NPSApiError,
    ProtocolError,
)


class TestExceptions:
    """测试自定义异常类"""

    def test_protocol_error_envelope(self):
        exc = ProtocolError.method_not_found("resources/list", request_id=9)

        assert exc.http_status == 404
        assert exc.to_envelope() == {
            "jsonrpc": "2.0",
            "error": {"code": -32601, "message": "Method not found: resources/list"},
            "id": 9,
        }

    def test_method_not_allowed(self):
        exc = ProtocolError.method_not_allowed()

        assert exc.code == JsonRpcErrorCode.METHOD_NOT_ALLOWED
        assert exc.http_status == 405
        assert exc.to_envelope()["error"] == {"code": -32000, "message": "Method not allowed."}

    def test_external_service_error(self):
        exc = ExternalServiceError(service_name="NPS API", message="timeout", status_code=504)

        assert exc.message == "NPS API error: timeout"
        assert exc.http_status == 502
        assert exc.to_dict()["details"] == {"service_name": "NPS API", "external_status_code": 504}

    def test_nps_api_error(self):
        exc = NPSApiError("bad key", 403)

        assert isinstance(exc, ExternalServiceError)
        assert exc.status_code == 403


class TestErrorHandler:
    """测试错误处理器"""

    @pytest.mark.asyncio
    async def test_handle_protocol_exception(self):
        mock_request = Mock(spec=Request)
        mock_request.url.path = "/mcp"

        response = await ErrorHandler.handle_protocol_exception(mock_request, ProtocolError.parse_error())

        assert response.status_code == 400
        body = json.loads(response.body)
        assert body["error"]["code"] == -32700
        assert body["id"] is None

    @pytest.mark.asyncio
    async def test_handle_generic_exception(self):
        mock_request = Mock(spec=Request)
        mock_request.url.path = "/mcp"

        response = await ErrorHandler.handle_generic_exception(mock_request, Exception("Unexpected error"))

        assert response.status_code == 500
        body = json.loads(response.body)
        assert body == {
            "jsonrpc": "2.0",
            "error": {"code": -32603, "message": "Internal server error"},
            "id": None,
        }
        # 不应暴露详细错误信息
        assert "Unexpected error" not in response.body.decode()
