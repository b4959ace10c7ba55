# _*_ coding: utf-8 _*_
"""Simple Pydantic Settings implementation for the encryption function."""
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

ENCRYPT_MODES = ("pattern", "single")
PGP_CIPHERS = ("AES128", "AES192", "AES256", "Camellia128", "Camellia192", "Camellia256")
PGP_COMPRESSIONS = ("Uncompressed", "ZIP", "ZLIB", "BZ2")


class Settings(BaseSettings):
    """통합 설정 클래스 - Pydantic Settings 방식 (Blob 암호화 함수용)"""

    # Application Configuration
    app_version: str = Field(default="1.0.0", env="APP_VERSION")
    app_log_level: str = Field(default="info", env="APP_LOG_LEVEL")
    app_debug: bool = Field(default=False, env="APP_DEBUG")
    # FastAPI root_path 설정
    app_root_path: str = Field(default="", env="APP_ROOT_PATH")

    # Logging Configuration
    log_to_file: bool = Field(default=False, env="LOG_TO_FILE")
    log_dir: str = Field(default="./logs", env="LOG_DIR")
    log_file: str = Field(default="app.log", env="LOG_FILE")
    log_rotation: str = Field(default="daily", env="LOG_ROTATION")
    log_retention_days: int = Field(default=30, env="LOG_RETENTION_DAYS")
    log_include_exc_info: bool = Field(default=True, env="LOG_INCLUDE_EXC_INFO")
    # azure SDK의 HTTP 로그가 너무 많아서 별도 레벨로 관리
    azure_log_level: str = Field(default="warning", env="AZURE_LOG_LEVEL")

    # 암호화 함수 설정
    # pattern: SourceBlobPattern 기반 일괄 암호화, single: 단일 Blob 암호화
    encrypt_mode: str = Field(default="pattern", env="ENCRYPT_MODE")
    encrypted_suffix: str = Field(default=".pgp", env="ENCRYPTED_SUFFIX")
    pgp_cipher: str = Field(default="AES256", env="PGP_CIPHER")
    pgp_compression: str = Field(default="ZIP", env="PGP_COMPRESSION")

    @field_validator("encrypt_mode")
    @classmethod
    def _check_encrypt_mode(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in ENCRYPT_MODES:
            raise ValueError(f"ENCRYPT_MODE must be one of {ENCRYPT_MODES}, got '{value}'")
        return value

    @field_validator("encrypted_suffix")
    @classmethod
    def _check_encrypted_suffix(cls, value: str) -> str:
        # 빈 suffix 는 암호문이 원본 Blob 을 덮어쓰게 됨
        if not value.strip():
            raise ValueError("ENCRYPTED_SUFFIX must not be empty")
        return value

    @field_validator("pgp_cipher")
    @classmethod
    def _check_pgp_cipher(cls, value: str) -> str:
        if value not in PGP_CIPHERS:
            raise ValueError(f"PGP_CIPHER must be one of {PGP_CIPHERS}, got '{value}'")
        return value

    @field_validator("pgp_compression")
    @classmethod
    def _check_pgp_compression(cls, value: str) -> str:
        if value not in PGP_COMPRESSIONS:
            raise ValueError(f"PGP_COMPRESSION must be one of {PGP_COMPRESSIONS}, got '{value}'")
        return value

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


# 전역 설정 인스턴스
settings = Settings()
