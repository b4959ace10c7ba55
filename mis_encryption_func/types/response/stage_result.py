# _*_ coding: utf-8 _*_
"""처리 단계별 결과 모델.

각 단계(decode, validate, fetch key, list, download, encrypt, upload)는
예외를 던지는 대신 StageResult 를 반환하고, 워크플로는 첫 번째 실패에서
멈춰 하나의 응답 매핑 단계로 넘긴다.
"""
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from .response_code import ResponseCode

T = TypeVar("T")

__all__ = [
    "StageError",
    "StageResult",
]


@dataclass
class StageError:
    """실패한 단계 정보"""
    stage: str
    resp_code: ResponseCode
    message: str
    exception: Optional[Exception] = None

    @property
    def http_status_code(self) -> int:
        return self.resp_code.http_status_code


@dataclass
class StageResult(Generic[T]):
    value: Optional[T] = None
    error: Optional[StageError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T = None) -> "StageResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: StageError) -> "StageResult[T]":
        return cls(error=error)
