# -*- coding: utf-8 -*-
import glob
import logging
import logging.config
import os
from datetime import datetime, timedelta

from fastapi import FastAPI

from mis_encryption_func.config import settings
from mis_encryption_func.core.global_exception_handlers import set_global_exception_handlers


def cleanup_old_logs():
    """
    오래된 로그 파일을 삭제하는 함수

    ==========================================
    기능:
    - LOG_RETENTION_DAYS 설정에 따라 오래된 로그 파일 자동 삭제
    - TimedRotatingFileHandler로 생성된 로그 파일들을 날짜 기반으로 정리
    - 파일명 형식: app.log.2025-09-15 (날짜별 로테이션)

    Returns:
        int: 삭제한 파일 개수
    """
    # 파일 로깅이 비활성화된 경우 실행하지 않음
    if not settings.log_to_file:
        logger.debug("파일 로깅이 비활성화되어 로그 정리를 건너뜁니다")
        return 0

    log_dir = settings.log_dir
    log_file = settings.log_file
    retention_days = settings.log_retention_days

    logger.debug("로그 정리 시작 - 디렉토리: {}, 보관 기간: {}일".format(log_dir, retention_days))

    # 로그 파일 패턴 생성 (app.log.2025-09-15 형태)
    log_pattern = os.path.join(log_dir, "{log_file}.*".format(log_file=log_file))
    log_files = glob.glob(log_pattern)

    if not log_files:
        logger.debug("정리할 로그 파일이 없습니다")
        return 0

    cutoff_date = datetime.now() - timedelta(days=retention_days)
    logger.debug("삭제 기준 날짜: {}".format(cutoff_date.strftime('%Y-%m-%d')))

    deleted_count = 0
    skipped_count = 0

    for log_file_path in log_files:
        filename = os.path.basename(log_file_path)
        date_part = filename.split('.')[-1]
        try:
            file_date = datetime.strptime(date_part, '%Y-%m-%d')
        except ValueError:
            # 날짜 형식이 맞지 않는 파일은 건너뛰기
            skipped_count += 1
            logger.debug("날짜 형식이 맞지 않아 건너뛰기: {}".format(filename))
            continue

        if file_date >= cutoff_date:
            continue

        try:
            os.remove(log_file_path)
        except OSError as e:
            # 개별 파일 삭제 실패 시 경고 로그만 출력하고 계속 진행
            logger.warning("로그 파일 삭제 중 오류: {}, 오류: {}".format(log_file_path, e))
            continue
        deleted_count += 1
        logger.debug("오래된 로그 파일 삭제: {} (날짜: {})".format(log_file_path, date_part))

    if deleted_count > 0:
        logger.info("오래된 로그 파일 {}개 삭제 완료 (보관 기간: {}일)".format(deleted_count, retention_days))
    if skipped_count > 0:
        logger.debug("날짜 형식이 맞지 않아 건너뛴 파일: {}개".format(skipped_count))
    return deleted_count


def build_logging_config() -> dict:
    """환경변수 기반 dictConfig 생성"""
    app_log_level = getattr(logging, settings.app_log_level.upper(), logging.INFO)
    azure_log_level = getattr(logging, settings.azure_log_level.upper(), logging.WARNING)

    log_to_file = settings.log_to_file
    log_path = os.path.join(settings.log_dir, settings.log_file)

    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "level": app_log_level,
            "formatter": "colored",
            "stream": "ext://sys.stdout"
        }
    }

    if log_to_file:
        if settings.log_rotation == "size":
            # 크기 기반 로테이션 (RotatingFileHandler)
            handlers["file"] = {
                "class": "logging.handlers.RotatingFileHandler",
                "level": app_log_level,
                "formatter": "default",
                "filename": log_path,
                "maxBytes": 10485760,  # 10MB
                "backupCount": 5,
                "encoding": "utf-8"
            }
        else:
            # 시간 기반 로테이션 (TimedRotatingFileHandler)
            when_map = {
                "daily": "midnight",
                "weekly": "W0",
                "monthly": "M1"
            }
            handlers["file"] = {
                "class": "logging.handlers.TimedRotatingFileHandler",
                "level": app_log_level,
                "formatter": "default",
                "filename": log_path,
                "when": when_map.get(settings.log_rotation, "midnight"),
                "interval": 1,
                "backupCount": settings.log_retention_days,
                "encoding": "utf-8"
            }

    handler_names = ["console"] + (["file"] if log_to_file else [])

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "[%(asctime)s.%(msecs)03d] %(levelname)s [%(thread)d] - %(message)s",
            },
            "colored": {
                "()": "coloredlogs.ColoredFormatter",
                "format": "%(asctime)s.%(msecs)03d %(levelname)-5s %(process)5d --- [%(funcName)20s] %(name)-40s : %(message)s"
            }
        },
        "handlers": handlers,
        "loggers": {
            "": {  # root logger (앱 로그)
                "level": app_log_level,
                "handlers": handler_names
            },
            "azure": {  # azure SDK HTTP 로그
                "level": azure_log_level,
                "handlers": handler_names,
                "propagate": False
            }
        }
    }


def setup_logging():
    """환경변수 기반 동적 로깅 설정"""
    if settings.log_to_file:
        os.makedirs(settings.log_dir, exist_ok=True)

    logging.config.dictConfig(build_logging_config())

    logging.getLogger(__name__).info("로깅 설정 완료 - 앱 로그 레벨: {}, azure 로그 레벨: {}".format(
        settings.app_log_level.upper(), settings.azure_log_level.upper()))


# 동적 로깅 설정 적용
setup_logging()
logger = logging.getLogger(__name__)

# 애플리케이션 시작 시 오래된 로그 파일 정리
cleanup_old_logs()


def create_app(encrypt_mode: str = None) -> FastAPI:
    logger.info("Creating FastAPI application...")

    encrypt_mode = encrypt_mode or settings.encrypt_mode
    debug_mode = settings.app_debug

    app = FastAPI(
        title="MIS Encryption Function",
        description="Blob PGP 암호화 함수",
        version=settings.app_version,
        debug=debug_mode,
        root_path=settings.app_root_path
    )

    # Global exception handlers 등록
    app = set_global_exception_handlers(app)

    # 암호화 라우터 (pattern / single 중 하나만 등록)
    from mis_encryption_func.api.routers.encryption_router import get_encryption_router
    from mis_encryption_func.api.routers.welcome_router import router as welcome_router
    app.include_router(get_encryption_router(encrypt_mode))
    app.include_router(welcome_router)
    logger.info("암호화 라우터 등록 완료 - 모드: {}".format(encrypt_mode))

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "service": "mis-encryption-func"}

    return app


app = create_app()
