"""
统一异常处理系统
提供工具调用错误类型与JSON-RPC协议错误定义
"""

from enum import Enum
from typing import Any, Dict, Optional

JSONRPC_VERSION = "2.0"


class ToolErrorKind(str, Enum):
    """Error kinds recovered by the dispatcher into an error envelope."""

    MISSING_ARGUMENTS = "MissingArguments"
    UNKNOWN_TOOL = "UnknownTool"
    INVALID_ARGUMENTS = "InvalidArguments"
    SERVER_ERROR = "ServerError"


class JsonRpcErrorCode(int, Enum):
    """标准JSON-RPC错误码"""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603
    # 服务端自定义区间 (-32000 ~ -32099)
    METHOD_NOT_ALLOWED = -32000


class ApplicationError(Exception):
    """应用程序基础异常类"""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        http_status: int = 500
    ):
        self.message = message
        self.details = details or {}
        self.http_status = http_status
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        return {
            "message": self.message,
            "details": self.details,
        }


class ProtocolError(ApplicationError):
    """JSON-RPC协议层错误，不会进入工具分发流程"""

    def __init__(
        self,
        code: JsonRpcErrorCode,
        message: str,
        http_status: int = 400,
        request_id: Any = None
    ):
        super().__init__(message, {"code": int(code)}, http_status)
        self.code = code
        self.request_id = request_id

    def to_envelope(self) -> Dict[str, Any]:
        return build_error_envelope(self.code, self.message, self.request_id)

    @classmethod
    def parse_error(cls, message: str = "Parse error: Invalid JSON") -> "ProtocolError":
        return cls(JsonRpcErrorCode.PARSE_ERROR, message, 400)

    @classmethod
    def invalid_request(cls, message: str = "Invalid Request", request_id: Any = None) -> "ProtocolError":
        return cls(JsonRpcErrorCode.INVALID_REQUEST, message, 400, request_id)

    @classmethod
    def method_not_found(cls, method: str, request_id: Any = None) -> "ProtocolError":
        return cls(JsonRpcErrorCode.METHOD_NOT_FOUND, f"Method not found: {method}", 404, request_id)

    @classmethod
    def invalid_params(cls, message: str, request_id: Any = None) -> "ProtocolError":
        return cls(JsonRpcErrorCode.INVALID_PARAMS, message, 400, request_id)

    @classmethod
    def internal_error(cls) -> "ProtocolError":
        return cls(JsonRpcErrorCode.INTERNAL_ERROR, "Internal server error", 500)

    @classmethod
    def method_not_allowed(cls) -> "ProtocolError":
        return cls(JsonRpcErrorCode.METHOD_NOT_ALLOWED, "Method not allowed.", 405)


class ExternalServiceError(ApplicationError):
    """外部服务错误"""

    def __init__(self, service_name: str, message: str, status_code: Optional[int] = None):
        super().__init__(
            f"{service_name} error: {message}",
            {"service_name": service_name, "external_status_code": status_code},
            502
        )
        self.service_name = service_name
        self.status_code = status_code


class NPSApiError(ExternalServiceError):
    """National Park Service API调用失败"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__("NPS API", message, status_code)


def build_error_envelope(code: int, message: str, request_id: Any = None) -> Dict[str, Any]:
    """构造JSON-RPC错误响应体"""
    return {
        "jsonrpc": JSONRPC_VERSION,
        "error": {
            "code": int(code),
            "message": message,
        },
        "id": request_id,
    }
