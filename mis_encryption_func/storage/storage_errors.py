# mis_encryption_func/storage/storage_errors.py
"""스토리지 예외를 ResponseCode 로 분류."""
import asyncio

import aiohttp
from azure.core.exceptions import (
    AzureError,
    ClientAuthenticationError,
    HttpResponseError,
    ResourceNotFoundError,
    ServiceRequestError,
    ServiceResponseError,
)

from ..types.response.response_code import ResponseCode

NOT_FOUND_OR_DENIED_STATUSES = (401, 403, 404)


def classify_storage_error(exc: Exception) -> ResponseCode:
    """Azure SDK / 네트워크 예외를 NotFoundOrAccess / Transient 로 구분"""
    if isinstance(exc, (ResourceNotFoundError, ClientAuthenticationError)):
        return ResponseCode.STORAGE_NOT_FOUND_OR_DENIED
    if isinstance(exc, HttpResponseError) and exc.status_code in NOT_FOUND_OR_DENIED_STATUSES:
        return ResponseCode.STORAGE_NOT_FOUND_OR_DENIED
    if isinstance(exc, (ServiceRequestError, ServiceResponseError, aiohttp.ClientError,
                        ConnectionError, asyncio.TimeoutError)):
        return ResponseCode.STORAGE_TRANSIENT_ERROR
    if isinstance(exc, AzureError):
        return ResponseCode.STORAGE_TRANSIENT_ERROR
    # 잘못된 연결 문자열 (ValueError) 등
    return ResponseCode.STORAGE_NOT_FOUND_OR_DENIED
