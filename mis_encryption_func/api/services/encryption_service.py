# _*_ coding: utf-8 _*_
"""Blob 암호화 워크플로 서비스."""
import inspect
import logging
from contextlib import AsyncExitStack
from typing import Any, Callable, List, Optional

from ...config import settings
from ...storage.azure_blob_storage import AzureBlobStorage
from ...storage.storage_base import StorageBase
from ...storage.storage_errors import classify_storage_error
from ...types.request.encrypt_request import (
    PATTERN_REQUIRED_FIELDS,
    SINGLE_REQUIRED_FIELDS,
    EncryptRequest,
    decode_request,
    validate_required_fields,
)
from ...types.response.encryption_response import EncryptionOutcome
from ...types.response.exceptions import HandledException
from ...types.response.response_code import ResponseCode
from ...types.response.stage_result import StageError, StageResult
from .blob_pattern import filter_blob_names
from .pgp_service import PgpEncryptor

StorageOpener = Callable[[str, str], StorageBase]
ErrorClassifier = Callable[[Exception], ResponseCode]


def _classify_crypto_error(exc: Exception) -> ResponseCode:
    return ResponseCode.CRYPTO_ERROR


class EncryptionService:
    """
    요청 1건 단위의 암호화 워크플로.

    decode → validate → open storage → fetch key → (list) → download →
    encrypt → upload 순서로 처리한다. 각 단계는 StageResult 를 반환하고
    첫 번째 실패에서 EncryptionOutcome 으로 변환해 즉시 종료한다.
    재시도와 롤백은 하지 않는다.
    """

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        storage_opener: Optional[StorageOpener] = None,
        encryptor: Optional[PgpEncryptor] = None,
        encrypted_suffix: Optional[str] = None,
    ):
        self.logger = logger or logging.getLogger(__name__)
        self.storage_opener = storage_opener or AzureBlobStorage
        self.encryptor = encryptor or PgpEncryptor()
        self.encrypted_suffix = settings.encrypted_suffix if encrypted_suffix is None else encrypted_suffix

    async def encrypt_by_pattern(self, body: bytes) -> EncryptionOutcome:
        """
        SourceBlobPattern 에 맞는 모든 Blob 을 암호화합니다.

        결과 Blob 이름은 `<원본 이름><encrypted_suffix>` 이며 항상 덮어쓴다.
        중간에 실패하면 이미 업로드된 Blob 은 그대로 남는다.
        """
        request_result = self._decode_and_validate(body, PATTERN_REQUIRED_FIELDS)
        if not request_result.ok:
            return self._fail(request_result.error)
        request = request_result.value
        pattern = request.source_blob_pattern

        encrypted_blobs: List[str] = []
        async with AsyncExitStack() as stack:
            key_store = await self._open_storage(stack, request.public_key_connection_string, request.public_key_container)
            if not key_store.ok:
                return self._fail(key_store.error)
            source = await self._open_storage(stack, request.source_connection_string, request.source_container)
            if not source.ok:
                return self._fail(source.error)
            dest = await self._open_storage(stack, request.dest_connection_string, request.dest_container)
            if not dest.ok:
                return self._fail(dest.error)

            key_blob = await self._fetch_key(key_store.value, request.public_key_blob_name)
            if not key_blob.ok:
                return self._fail(key_blob.error)

            listed = await self._run_stage("list", source.value.list_blob_names)
            if not listed.ok:
                return self._fail(listed.error)
            matched = filter_blob_names(listed.value, pattern)
            self.logger.info("패턴 매칭 결과 - 패턴: {}, 전체: {}개, 일치: {}개".format(
                pattern, len(listed.value), len(matched)))

            if not matched:
                return EncryptionOutcome.no_match(pattern)

            public_key = await self._run_stage(
                "load_key", self.encryptor.load_public_key, key_blob.value, classify=_classify_crypto_error)
            if not public_key.ok:
                return self._fail(public_key.error)

            for blob_name in matched:
                uploaded = await self._encrypt_blob(
                    source.value, dest.value, blob_name, blob_name + self.encrypted_suffix, public_key.value)
                if not uploaded.ok:
                    return self._fail(uploaded.error, encrypted_blobs)
                encrypted_blobs.append(uploaded.value)

        self.logger.info("일괄 암호화 완료 - {}개 파일".format(len(encrypted_blobs)))
        return EncryptionOutcome.batch_completed(encrypted_blobs)

    async def encrypt_single(self, body: bytes) -> EncryptionOutcome:
        """SourceBlobName 1개를 암호화해 DestBlobName 으로 업로드합니다."""
        request_result = self._decode_and_validate(body, SINGLE_REQUIRED_FIELDS)
        if not request_result.ok:
            return self._fail(request_result.error)
        request = request_result.value

        async with AsyncExitStack() as stack:
            key_store = await self._open_storage(stack, request.public_key_connection_string, request.public_key_container)
            if not key_store.ok:
                return self._fail(key_store.error)
            source = await self._open_storage(stack, request.source_connection_string, request.source_container)
            if not source.ok:
                return self._fail(source.error)
            dest = await self._open_storage(stack, request.dest_connection_string, request.dest_container)
            if not dest.ok:
                return self._fail(dest.error)

            key_blob = await self._fetch_key(key_store.value, request.public_key_blob_name)
            if not key_blob.ok:
                return self._fail(key_blob.error)

            public_key = await self._run_stage(
                "load_key", self.encryptor.load_public_key, key_blob.value, classify=_classify_crypto_error)
            if not public_key.ok:
                return self._fail(public_key.error)

            uploaded = await self._encrypt_blob(
                source.value, dest.value, request.source_blob_name, request.dest_blob_name, public_key.value)
            if not uploaded.ok:
                return self._fail(uploaded.error)

        self.logger.info("단일 암호화 완료 - {} -> {}".format(request.source_blob_name, request.dest_blob_name))
        return EncryptionOutcome.single_completed(uploaded.value)

    def _decode_and_validate(self, body: bytes, required_fields) -> StageResult[EncryptRequest]:
        decoded = decode_request(body)
        if not decoded.ok:
            return decoded
        return validate_required_fields(decoded.value, required_fields)

    async def _open_storage(self, stack: AsyncExitStack, connection_string: str, container: str) -> StageResult[StorageBase]:
        opened = await self._run_stage("open_storage", self.storage_opener, connection_string, container)
        if opened.ok:
            await stack.enter_async_context(opened.value)
        return opened

    async def _fetch_key(self, key_store: StorageBase, key_blob_name: str) -> StageResult[bytes]:
        # 요청당 한 번만 다운로드하고 모든 Blob 암호화에 재사용
        fetched = await self._run_stage("fetch_key", key_store.download_bytes, key_blob_name)
        if fetched.ok:
            self.logger.debug("공개키 다운로드 완료 - {} ({} bytes)".format(key_blob_name, len(fetched.value)))
        return fetched

    async def _encrypt_blob(self, source: StorageBase, dest: StorageBase, source_name: str,
                            dest_name: str, public_key: Any) -> StageResult[str]:
        downloaded = await self._run_stage("download", source.download_bytes, source_name)
        if not downloaded.ok:
            return downloaded

        encrypted = await self._run_stage(
            "encrypt", self.encryptor.encrypt, downloaded.value, public_key, classify=_classify_crypto_error)
        if not encrypted.ok:
            return encrypted

        uploaded = await self._run_stage("upload", dest.upload_bytes, dest_name, encrypted.value, True)
        if uploaded.ok:
            self.logger.info("암호화 업로드 완료 - {} -> {} ({} bytes)".format(
                source_name, dest_name, len(encrypted.value)))
        return uploaded

    async def _run_stage(self, stage: str, func: Callable, *args,
                         classify: ErrorClassifier = classify_storage_error) -> StageResult:
        """협력 객체 호출 1회. 예외는 이 경계에서 StageError 로 바뀐다."""
        try:
            value = func(*args)
            if inspect.isawaitable(value):
                value = await value
        except HandledException as exc:
            return StageResult.failure(self._stage_error(stage, exc.resp_code, exc.cause_message, exc))
        except Exception as exc:
            return StageResult.failure(self._stage_error(stage, classify(exc), str(exc) or repr(exc), exc))
        return StageResult.success(value)

    def _stage_error(self, stage: str, resp_code: ResponseCode, message: str, exc: Exception) -> StageError:
        self.logger.error(
            "단계 실패 [{}] {} ({}): {}".format(stage, resp_code.name, resp_code.code, message),
            exc_info=(type(exc), exc, exc.__traceback__) if settings.log_include_exc_info else None,
        )
        return StageError(stage=stage, resp_code=resp_code, message=message, exception=exc)

    def _fail(self, error: StageError, encrypted_blobs: List[str] = None) -> EncryptionOutcome:
        if error.resp_code.is_client_error:
            self.logger.warning("요청 검증 실패 [{}]: {}".format(error.stage, error.message))
        elif encrypted_blobs:
            self.logger.warning("부분 실패 - 이미 업로드된 {}개 파일은 유지됩니다: {}".format(
                len(encrypted_blobs), encrypted_blobs))
        return EncryptionOutcome.failed(error, encrypted_blobs)
