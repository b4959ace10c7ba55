# mis_encryption_func/storage/storage_base.py
from abc import ABC, abstractmethod
from typing import List

from ..utils.logging_utils import log_warning


class StorageBase(ABC):
    """
    Abstract base class for object store implementations.

    One instance addresses one container and lives for one request.
    """

    @abstractmethod
    async def list_blob_names(self) -> List[str]:
        """Lists all blob names in the container, in the store's order."""
        pass

    @abstractmethod
    async def download_bytes(self, blob_name: str) -> bytes:
        """Downloads a blob fully into memory."""
        pass

    @abstractmethod
    async def upload_bytes(self, blob_name: str, data: bytes, overwrite: bool = True) -> str:
        """Uploads bytes as a blob, returns the blob name."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Releases the underlying client."""
        pass

    async def __aenter__(self) -> "StorageBase":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        # 업로드가 끝난 뒤의 연결 해제 실패는 요청 결과를 바꾸지 않는다
        try:
            await self.close()
        except Exception as close_exc:
            log_warning("스토리지 연결 해제 중 오류: {}".format(type(self).__name__), close_exc)
