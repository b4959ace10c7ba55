# _*_ coding: utf-8 _*_
"""Blob 암호화 API 엔드포인트.

같은 경로(/EncryptBlobHttp)에 대해 두 가지 배포 형태가 있고, 앱에는
ENCRYPT_MODE 에 따라 둘 중 하나만 등록된다.
"""
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from ..services.encryption_service import EncryptionService
from ...core.dependencies import get_encryption_service
from ...types.response.encryption_response import build_response

logger = logging.getLogger(__name__)

ENCRYPT_ROUTE = "/EncryptBlobHttp"

pattern_router = APIRouter(tags=["encryption"])
single_router = APIRouter(tags=["encryption"])


@pattern_router.post(ENCRYPT_ROUTE, response_class=PlainTextResponse)
async def encrypt_blobs_by_pattern(
    request: Request,
    encryption_service: EncryptionService = Depends(get_encryption_service),
) -> PlainTextResponse:
    """
    SourceBlobPattern 에 일치하는 Blob 들을 공개키로 암호화합니다.

    Returns:
        PlainTextResponse: 200 처리 건수 / 400 필수 필드 누락 / 500 오류 메시지
    """
    logger.info("패턴 암호화 요청 수신")
    body = await request.body()
    outcome = await encryption_service.encrypt_by_pattern(body)
    return build_response(outcome)


@single_router.post(ENCRYPT_ROUTE, response_class=PlainTextResponse)
async def encrypt_single_blob(
    request: Request,
    encryption_service: EncryptionService = Depends(get_encryption_service),
) -> PlainTextResponse:
    """SourceBlobName 1개를 암호화해 DestBlobName 으로 저장합니다."""
    logger.info("단일 암호화 요청 수신")
    body = await request.body()
    outcome = await encryption_service.encrypt_single(body)
    return build_response(outcome)


def get_encryption_router(mode: str) -> APIRouter:
    if mode == "single":
        return single_router
    return pattern_router
