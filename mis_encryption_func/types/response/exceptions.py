from typing import Optional
import logging

from fastapi.exceptions import HTTPException

from .response_code import ResponseCode

logger = logging.getLogger(__name__)


__all__ = [
    "HandledException",
    "UnHandledException",
]


class HandledException(HTTPException):
    """Application-managed Exception, which is an exception wrapper.

    Collaborators (PGP encryptor, storage adapters) wrap the library
    exceptions they raise into this type so the workflow can tell which
    `ResponseCode` applies. The original exception is kept in `e` and its
    text is what the caller finally sees.

    Parameters
    ----------
    resp_code: ResponseCode
        An application-managed error case. it has its own `code`, `msg`
        and HTTP status code.

    e: Exception
        An system raised exception to wrap.

    msg: str (default: None)
        Extra detail appended to the `resp_code` message.
    """

    # errorCode
    code: int
    # errorMessage
    message: str
    # HTTP status code
    http_status_code: int

    def __init__(self, resp_code: ResponseCode, e: Exception = None, msg: str = None):
        super(HTTPException, self).__init__(status_code=resp_code.http_status_code, detail=resp_code.message)

        self.resp_code = resp_code
        self.code = resp_code.code
        self.message = resp_code.message
        self.http_status_code = resp_code.http_status_code
        self.e = e

        delimeter = ": "
        if msg is not None:
            self.message = delimeter.join([
                self.message,
                msg,
            ])

    @property
    def cause_message(self) -> str:
        """호출자에게 그대로 전달할 메시지 (원본 예외가 있으면 원본 메시지)"""
        if self.e is not None:
            return str(self.e)
        return self.message

    @property
    def logMessage(self) -> str:
        return "\n".join([
            "=" * 50,
            f"CODE: {self.code}",
            f"MSG: {self.message}",
            f"CAUSE: {self.e!r}",
        ])


class UnHandledException(HandledException):
    def __init__(self, e: Exception = None, msg: Optional[str] = None):
        super().__init__(ResponseCode.UNDEFINED_ERROR, e=e, msg=msg)
