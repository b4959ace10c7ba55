# _*_ coding: utf-8 _*_
"""암호화 요청 모델."""
from typing import Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..response.response_code import ResponseCode
from ..response.stage_result import StageError, StageResult

# 일괄(pattern) 모드 필수 필드
PATTERN_REQUIRED_FIELDS = (
    "SourceBlobPattern",
    "SourceConnectionString",
    "SourceContainer",
    "DestConnectionString",
    "DestContainer",
    "PublicKeyConnectionString",
    "PublicKeyContainer",
    "PublicKeyBlobName",
)

# 단일(single) 모드 필수 필드
SINGLE_REQUIRED_FIELDS = (
    "SourceConnectionString",
    "SourceContainer",
    "SourceBlobName",
    "DestConnectionString",
    "DestContainer",
    "DestBlobName",
    "PublicKeyConnectionString",
    "PublicKeyContainer",
    "PublicKeyBlobName",
)


class EncryptRequest(BaseModel):
    """암호화 요청 모델

    JSON 필드명은 PascalCase 이고, 파싱 단계에서는 모든 필드가 선택사항이다.
    필수 여부는 validate_required_fields 에서 모드별로 검사한다.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    source_connection_string: Optional[str] = Field(default=None, alias="SourceConnectionString", description="원본 스토리지 연결 문자열")
    source_container: Optional[str] = Field(default=None, alias="SourceContainer", description="원본 컨테이너")
    source_blob_pattern: Optional[str] = Field(default=None, alias="SourceBlobPattern", description="원본 Blob 이름 패턴 (*, ?)")
    source_blob_name: Optional[str] = Field(default=None, alias="SourceBlobName", description="원본 Blob 이름 (single 모드)")
    dest_connection_string: Optional[str] = Field(default=None, alias="DestConnectionString", description="대상 스토리지 연결 문자열")
    dest_container: Optional[str] = Field(default=None, alias="DestContainer", description="대상 컨테이너")
    dest_blob_name: Optional[str] = Field(default=None, alias="DestBlobName", description="대상 Blob 이름 (single 모드)")
    public_key_connection_string: Optional[str] = Field(default=None, alias="PublicKeyConnectionString", description="공개키 스토리지 연결 문자열")
    public_key_container: Optional[str] = Field(default=None, alias="PublicKeyContainer", description="공개키 컨테이너")
    public_key_blob_name: Optional[str] = Field(default=None, alias="PublicKeyBlobName", description="공개키 Blob 이름")

    def get_by_alias(self, alias: str) -> Optional[str]:
        for name, info in type(self).model_fields.items():
            if info.alias == alias:
                return getattr(self, name)
        raise KeyError(alias)


def decode_request(body: bytes) -> StageResult[EncryptRequest]:
    """요청 본문을 EncryptRequest 로 역직렬화

    JSON 이 아니거나, 객체가 아니거나, 문자열이 아닌 값이 들어온 경우
    MALFORMED_REQUEST (400) 로 실패한다.
    """
    try:
        request = EncryptRequest.model_validate_json(body or b"")
    except ValidationError as exc:
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        detail = first.get("msg", str(exc))
        if location:
            detail = f"{location}: {detail}"
        return StageResult.failure(StageError(
            stage="decode",
            resp_code=ResponseCode.MALFORMED_REQUEST,
            message=f"Invalid request body. {detail}",
            exception=exc,
        ))
    return StageResult.success(request)


def validate_required_fields(request: EncryptRequest, required_fields: Sequence[str]) -> StageResult[EncryptRequest]:
    """필수 필드가 비어 있으면 필드별 메시지로 REQUIRED_FIELD_MISSING (400)"""
    for alias in required_fields:
        value = request.get_by_alias(alias)
        if value is None or not value.strip():
            return StageResult.failure(StageError(
                stage="validate",
                resp_code=ResponseCode.REQUIRED_FIELD_MISSING,
                message=f"Please provide {alias} in the request body.",
            ))
    return StageResult.success(request)
