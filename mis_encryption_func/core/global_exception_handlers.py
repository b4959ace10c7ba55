# _*_ coding: utf-8 _*_
"""Global exception handlers for FastAPI application.

라우트에서 빠져나온 예외의 마지막 안전망. 응답 본문은 text/plain 이고,
검증 오류가 아닌 경우 500 + 예외 메시지를 그대로 돌려준다.
"""
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError as HTTPRequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..types.response.exceptions import (
    HandledException,
    UnHandledException,
)
from ..types.response.response_code import ResponseCode
from ..utils.logging_utils import log_error, log_warning

logger = logging.getLogger(__name__)


def create_error_response(message: str, http_status_code: int = 500) -> PlainTextResponse:
    """에러 응답 생성"""
    return PlainTextResponse(content=message, status_code=http_status_code)


async def handled_exception_handler(request: Request, exc: HandledException) -> PlainTextResponse:
    """HandledException 처리"""
    return create_error_response(exc.cause_message, exc.http_status_code)


async def unhandled_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
    """예상치 못한 예외 처리 - 원본 메시지를 그대로 반환"""
    managed_exc = UnHandledException(e=exc)
    return create_error_response(managed_exc.cause_message, managed_exc.http_status_code)


async def http_exception_handler_wrapper(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    """HTTP 예외 처리"""
    return create_error_response(str(exc.detail), exc.status_code)


async def validation_exception_handler(request: Request, exc: HTTPRequestValidationError) -> PlainTextResponse:
    """요청 검증 예외 처리"""
    resp_code = ResponseCode.MALFORMED_REQUEST
    return create_error_response(resp_code.message, resp_code.http_status_code)


def get_request_info(request: Request) -> str:
    """요청 정보 문자열 생성 (헤더는 함수 키가 포함되므로 남기지 않음)"""
    return "\n".join([
        "=" * 50,
        "Request",
        f"{{method: {request.method}}}",
        f"{{path: {request.url.path}}}",
        f"{{client: {request.client}}}",
        "=" * 50,
    ])


def set_global_exception_handlers(app: FastAPI) -> FastAPI:
    """글로벌 예외 핸들러 설정"""

    @app.exception_handler(HandledException)
    async def handeled_exception_handler(request, exc):
        log_msg = f"HandledException [{exc.code}]: {exc.message}\nRequest: {get_request_info(request)}"
        if exc.resp_code.is_client_error:
            log_warning(log_msg, exc)
        else:
            log_error(f"{log_msg}\nOriginal exception: {exc.logMessage}", exc)
        return await handled_exception_handler(request, exc)

    @app.exception_handler(HTTPException)
    async def custom_http_exception_handler(request, exc):
        log_msg = f"HTTPException [{exc.status_code}]: {exc.detail}\nRequest: {get_request_info(request)}"
        log_warning(log_msg)
        return await http_exception_handler_wrapper(request, exc)

    @app.exception_handler(StarletteHTTPException)
    async def starlette_http_exception_handler(request, exc):
        log_msg = f"StarletteHTTPException [{exc.status_code}]: {exc.detail}\nRequest: {get_request_info(request)}"
        log_warning(log_msg)
        return await http_exception_handler_wrapper(request, exc)

    @app.exception_handler(HTTPRequestValidationError)
    async def validation_exception_handler_wrapper(request, exc):
        log_msg = f"ValidationError: {exc.errors()}\nRequest: {get_request_info(request)}"
        log_warning(log_msg)
        return await validation_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def general_exception_handler(request, exc):
        log_msg = f"Unexpected exception [{exc.__class__.__name__}]: {str(exc)}\nRequest: {get_request_info(request)}"
        log_error(log_msg, exc)
        return await unhandled_exception_handler(request, exc)

    return app
