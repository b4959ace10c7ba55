# mis_encryption_func/storage/azure_blob_storage.py
import logging
from typing import List

from azure.storage.blob.aio import BlobServiceClient

from .storage_base import StorageBase

logger = logging.getLogger(__name__)


class AzureBlobStorage(StorageBase):
    """Azure Blob Storage 컨테이너 1개에 대한 asyncio 어댑터.

    연결 문자열은 요청 본문으로 전달되므로 요청마다 새로 생성한다.
    """

    def __init__(self, connection_string: str, container_name: str):
        self.client = BlobServiceClient.from_connection_string(connection_string)
        self.container = self.client.get_container_client(container_name)
        self.container_name = container_name

    async def list_blob_names(self) -> List[str]:
        """Lists all blobs in the container (full listing, no prefix)."""
        names = [blob.name async for blob in self.container.list_blobs()]
        logger.debug("Blob 목록 조회 - 컨테이너: {}, 개수: {}".format(self.container_name, len(names)))
        return names

    async def download_bytes(self, blob_name: str) -> bytes:
        blob_client = self.container.get_blob_client(blob_name)
        downloader = await blob_client.download_blob()
        return await downloader.readall()

    async def upload_bytes(self, blob_name: str, data: bytes, overwrite: bool = True) -> str:
        blob_client = self.container.get_blob_client(blob_name)
        await blob_client.upload_blob(data, overwrite=overwrite)
        return blob_name

    async def close(self) -> None:
        await self.container.close()
        await self.client.close()
