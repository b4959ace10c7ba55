# _*_ coding: utf-8 _*_
"""로깅 유틸리티 함수들."""
import logging
from mis_encryption_func.config.simple_settings import settings

logger = logging.getLogger(__name__)


def log_error(message: str, exception: Exception = None):
    """
    에러 로그를 기록하는 유틸리티 함수

    Args:
        message: 로그 메시지
        exception: 예외 객체 (선택사항)
    """
    if exception:
        logger.error(f"{message}: {exception}", exc_info=settings.log_include_exc_info)
    else:
        logger.error(message)


def log_warning(message: str, exception: Exception = None):
    """경고 로그를 기록하는 유틸리티 함수"""
    if exception:
        logger.warning(f"{message}: {exception}", exc_info=settings.log_include_exc_info)
    else:
        logger.warning(message)
