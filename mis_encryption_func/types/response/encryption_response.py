# _*_ coding: utf-8 _*_
"""암호화 응답 모델."""
from dataclasses import dataclass, field
from typing import List

from fastapi.responses import PlainTextResponse

from .response_code import ResponseCode
from .stage_result import StageError

SINGLE_SUCCESS_MESSAGE = "File encrypted and uploaded successfully."


@dataclass
class EncryptionOutcome:
    """요청 1건의 최종 결과 (HTTP 상태 + 본문)"""
    status_code: int
    message: str
    encrypted_blobs: List[str] = field(default_factory=list)
    error: StageError = None

    @classmethod
    def batch_completed(cls, encrypted_blobs: List[str]) -> "EncryptionOutcome":
        return cls(
            status_code=ResponseCode.SUCCESS.http_status_code,
            message=f"{len(encrypted_blobs)} file(s) encrypted successfully.",
            encrypted_blobs=list(encrypted_blobs),
        )

    @classmethod
    def no_match(cls, pattern: str) -> "EncryptionOutcome":
        return cls(
            status_code=ResponseCode.SUCCESS.http_status_code,
            message=f"No files matched the pattern '{pattern}'.",
        )

    @classmethod
    def single_completed(cls, dest_blob_name: str) -> "EncryptionOutcome":
        return cls(
            status_code=ResponseCode.SUCCESS.http_status_code,
            message=SINGLE_SUCCESS_MESSAGE,
            encrypted_blobs=[dest_blob_name],
        )

    @classmethod
    def failed(cls, error: StageError, encrypted_blobs: List[str] = None) -> "EncryptionOutcome":
        # 이미 업로드된 결과는 롤백하지 않으므로 목록을 같이 남긴다
        return cls(
            status_code=error.http_status_code,
            message=error.message,
            encrypted_blobs=list(encrypted_blobs or []),
            error=error,
        )


def build_response(outcome: EncryptionOutcome) -> PlainTextResponse:
    """EncryptionOutcome 을 text/plain HTTP 응답으로 변환"""
    return PlainTextResponse(content=outcome.message, status_code=outcome.status_code)
