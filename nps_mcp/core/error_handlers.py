"""
全局错误处理
将未处理异常统一转换为JSON-RPC错误响应
"""

import traceback
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse
from loguru import logger

from nps_mcp.core.exceptions import JsonRpcErrorCode, ProtocolError, build_error_envelope


class ErrorHandler:
    """错误处理器"""

    @staticmethod
    def create_error_response(
        status_code: int,
        code: int,
        message: str,
        request_id: Any = None,
        request: Request = None
    ) -> JSONResponse:
        """创建统一的JSON-RPC错误响应"""
        path = request.url.path if request else None
        logger.warning(f"JSON-RPC error {int(code)} ({status_code}) on {path}: {message}")

        return JSONResponse(
            status_code=status_code,
            content=build_error_envelope(code, message, request_id)
        )

    @staticmethod
    async def handle_protocol_exception(request: Request, exc: ProtocolError) -> JSONResponse:
        """处理协议层异常"""
        return ErrorHandler.create_error_response(
            status_code=exc.http_status,
            code=exc.code,
            message=exc.message,
            request_id=exc.request_id,
            request=request
        )

    @staticmethod
    async def handle_generic_exception(request: Request, exc: Exception) -> JSONResponse:
        """处理通用异常"""
        # 记录详细错误但不暴露给调用方
        logger.error(f"Unexpected error: {str(exc)}")
        logger.error(traceback.format_exc())

        return ErrorHandler.create_error_response(
            status_code=500,
            code=JsonRpcErrorCode.INTERNAL_ERROR,
            message="Internal server error",
            request=request
        )


def register_error_handlers(app):
    """注册所有错误处理器到FastAPI应用"""
    app.add_exception_handler(ProtocolError, ErrorHandler.handle_protocol_exception)
    app.add_exception_handler(Exception, ErrorHandler.handle_generic_exception)

    logger.debug("Error handlers registered")
