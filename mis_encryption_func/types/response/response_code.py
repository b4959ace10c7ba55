from enum import Enum, unique

__all__ = [
    "ResponseCode"
]


@unique
class ResponseCode(Enum):
    """응답 코드 정의 (Blob 암호화 함수용)

    각 항목은 (code, message, http_status_code) 튜플이다.
    검증 오류를 제외한 모든 오류는 500으로 응답한다.
    """

    SUCCESS = (1, "Success.", 200)
    UNDEFINED_ERROR = (-2, "An undefined error occurred.", 500)

    # VALIDATION_ERROR = (-1600 ~ -1699)
    REQUIRED_FIELD_MISSING = (-1602, "A required field is missing.", 400)
    MALFORMED_REQUEST = (-1603, "The request body is malformed.", 400)

    # 암호화 관련 에러 코드 (-2000 ~ -2099)
    CRYPTO_ERROR = (-2001, "Encryption failed.", 500)

    # 스토리지 관련 에러 코드 (-2100 ~ -2199)
    STORAGE_NOT_FOUND_OR_DENIED = (-2101, "Storage object is missing or access was denied.", 500)
    STORAGE_TRANSIENT_ERROR = (-2102, "Storage service request failed.", 500)

    def __init__(self, code: int, message: str, http_status_code: int):
        self.code = code
        self.message = message
        self.http_status_code = http_status_code

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.http_status_code < 500
