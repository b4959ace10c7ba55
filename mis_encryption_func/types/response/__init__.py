# _*_ coding: utf-8 _*_
"""Response models for the encryption function."""

from .encryption_response import EncryptionOutcome, build_response
from .exceptions import HandledException, UnHandledException
from .response_code import ResponseCode
from .stage_result import StageError, StageResult

__all__ = [
    "EncryptionOutcome",
    "build_response",
    "HandledException",
    "UnHandledException",
    "ResponseCode",
    "StageError",
    "StageResult",
]
