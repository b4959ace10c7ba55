# _*_ coding: utf-8 _*_
"""Dependency injection for FastAPI."""
import logging

from ..api.services.encryption_service import EncryptionService

ENCRYPTION_LOGGER_NAME = "mis_encryption_func.encryption"


def get_request_logger() -> logging.Logger:
    """요청 핸들러에 주입할 로거"""
    return logging.getLogger(ENCRYPTION_LOGGER_NAME)


def get_encryption_service() -> EncryptionService:
    """
    암호화 서비스 의존성 주입

    요청마다 새 서비스를 만든다. 저장소 연결은 요청 본문의 연결 문자열로
    서비스 내부에서 생성된다.
    """
    return EncryptionService(logger=get_request_logger())
