# _*_ coding: utf-8 _*_
import logging

import pytest
from azure.core.exceptions import ClientAuthenticationError

from mis_encryption_func.api.services.encryption_service import EncryptionService
from mis_encryption_func.api.services.pgp_service import PgpEncryptor
from mis_encryption_func.types.response.response_code import ResponseCode


@pytest.fixture
def service(store):
    return EncryptionService(
        logger=logging.getLogger("tests.encryption"),
        storage_opener=store.opener,
        encryptor=PgpEncryptor(),
        encrypted_suffix=".pgp",
    )


async def test_missing_pattern_is_rejected_without_io(service, store, pattern_request):
    outcome = await service.encrypt_by_pattern(pattern_request(SourceBlobPattern=None))

    assert outcome.status_code == 400
    assert outcome.message == "Please provide SourceBlobPattern in the request body."
    assert store.calls == []
    assert store.opened == []


async def test_blank_required_field_is_rejected(service, store, pattern_request):
    outcome = await service.encrypt_by_pattern(pattern_request(DestContainer="   "))

    assert outcome.status_code == 400
    assert "DestContainer" in outcome.message
    assert store.calls == []


async def test_malformed_body_is_bad_request(service, store):
    outcome = await service.encrypt_by_pattern(b"{not json")

    assert outcome.status_code == 400
    assert outcome.error.resp_code is ResponseCode.MALFORMED_REQUEST
    assert store.calls == []


async def test_zero_matches_returns_ok(service, store, pattern_request):
    store.seed_source("BExtract.csv", b"nope")
    store.seed_source("Extract.txt", b"nope")

    outcome = await service.encrypt_by_pattern(pattern_request())

    assert outcome.status_code == 200
    assert outcome.message == "No files matched the pattern 'E*.csv'."
    assert store.uploads == []


async def test_matching_blobs_are_encrypted_with_suffix(service, store, pattern_request, decrypt_blob):
    sources = {
        "Extract.csv": b"id,value\n1,a\n",
        "extract_2.CSV": b"id,value\n2,b\n",
        "Other.csv": b"skip",
        "Echo.csv": bytes(range(256)),
    }
    for name, data in sources.items():
        store.seed_source(name, data)

    outcome = await service.encrypt_by_pattern(pattern_request())

    assert outcome.status_code == 200
    assert outcome.message == "3 file(s) encrypted successfully."
    assert outcome.encrypted_blobs == ["Extract.csv.pgp", "extract_2.CSV.pgp", "Echo.csv.pgp"]

    encrypted = store.container("encrypted")
    assert sorted(encrypted) == ["Echo.csv.pgp", "Extract.csv.pgp", "extract_2.CSV.pgp"]
    for name in ("Extract.csv", "extract_2.CSV", "Echo.csv"):
        armored = encrypted[name + ".pgp"]
        assert armored.startswith(b"-----BEGIN PGP MESSAGE-----")
        assert decrypt_blob(armored) == sources[name]

    # 원본은 변경되지 않음
    assert store.container("outbound")["Extract.csv"] == sources["Extract.csv"]


async def test_key_is_downloaded_once_per_request(service, store, pattern_request):
    for index in range(3):
        store.seed_source(f"Extract{index}.csv", b"data")

    await service.encrypt_by_pattern(pattern_request())

    key_downloads = [call for call in store.calls if call == ("download", "keys", "recipient.asc")]
    assert len(key_downloads) == 1


async def test_same_request_twice_overwrites_same_names(service, store, pattern_request):
    store.seed_source("Extract.csv", b"first")

    first = await service.encrypt_by_pattern(pattern_request())
    second = await service.encrypt_by_pattern(pattern_request())

    assert first.encrypted_blobs == second.encrypted_blobs == ["Extract.csv.pgp"]
    assert list(store.container("encrypted")) == ["Extract.csv.pgp"]
    assert store.upload_count == 2


async def test_key_download_failure_is_server_error_without_uploads(service, store, pattern_request):
    store.seed_source("Extract.csv", b"data")

    outcome = await service.encrypt_by_pattern(pattern_request(PublicKeyBlobName="missing.asc"))

    assert outcome.status_code == 500
    assert outcome.message == "The specified blob does not exist."
    assert outcome.error.resp_code is ResponseCode.STORAGE_NOT_FOUND_OR_DENIED
    assert outcome.error.stage == "fetch_key"
    assert store.uploads == []


async def test_access_denied_on_listing(service, store, pattern_request):
    store.fail("list", "outbound", exc=ClientAuthenticationError("Server failed to authenticate the request."))

    outcome = await service.encrypt_by_pattern(pattern_request())

    assert outcome.status_code == 500
    assert outcome.message == "Server failed to authenticate the request."
    assert outcome.error.resp_code is ResponseCode.STORAGE_NOT_FOUND_OR_DENIED


async def test_failure_mid_batch_keeps_earlier_uploads(service, store, pattern_request):
    store.seed_source("Extract1.csv", b"one")
    store.seed_source("Extract2.csv", b"two")
    store.seed_source("Extract3.csv", b"three")
    store.fail("upload", "encrypted", "Extract2.csv.pgp")

    outcome = await service.encrypt_by_pattern(pattern_request())

    assert outcome.status_code == 500
    assert outcome.message == "connection reset by peer"
    assert outcome.error.resp_code is ResponseCode.STORAGE_TRANSIENT_ERROR
    assert outcome.encrypted_blobs == ["Extract1.csv.pgp"]
    assert list(store.container("encrypted")) == ["Extract1.csv.pgp"]
    # 실패 이후 Blob 은 다운로드하지 않음
    assert ("download", "outbound", "Extract3.csv") not in store.calls


async def test_invalid_key_is_crypto_error(service, store, pattern_request):
    store.container("keys")["recipient.asc"] = b"this is not a key"
    store.seed_source("Extract.csv", b"data")

    outcome = await service.encrypt_by_pattern(pattern_request())

    assert outcome.status_code == 500
    assert outcome.error.resp_code is ResponseCode.CRYPTO_ERROR
    assert outcome.error.stage == "load_key"
    assert store.uploads == []


async def test_invalid_key_with_no_matches_is_not_an_error(service, store, pattern_request):
    store.container("keys")["recipient.asc"] = b"this is not a key"

    outcome = await service.encrypt_by_pattern(pattern_request())

    assert outcome.status_code == 200


async def test_storages_are_closed(service, store, pattern_request):
    store.seed_source("Extract.csv", b"data")

    await service.encrypt_by_pattern(pattern_request())

    assert len(store.opened) == 3
    assert all(storage.closed for storage in store.opened)


async def test_storages_are_closed_after_failure(service, store, pattern_request):
    outcome = await service.encrypt_by_pattern(pattern_request(PublicKeyBlobName="missing.asc"))

    assert outcome.status_code == 500
    assert all(storage.closed for storage in store.opened)


async def test_malformed_connection_string_is_server_error(pattern_request):
    service = EncryptionService(encryptor=PgpEncryptor())

    outcome = await service.encrypt_by_pattern(pattern_request(PublicKeyConnectionString="not-a-connection-string"))

    assert outcome.status_code == 500
    assert outcome.error.stage == "open_storage"
    assert outcome.error.resp_code is ResponseCode.STORAGE_NOT_FOUND_OR_DENIED


async def test_single_blob_is_encrypted_to_dest_name(service, store, single_request, decrypt_blob):
    store.seed_source("Extract.csv", b"single payload")

    outcome = await service.encrypt_single(single_request())

    assert outcome.status_code == 200
    assert outcome.message == "File encrypted and uploaded successfully."
    assert outcome.encrypted_blobs == ["Extract.csv.gpg"]
    assert decrypt_blob(store.container("encrypted")["Extract.csv.gpg"]) == b"single payload"


async def test_single_missing_source_blob(service, store, single_request):
    outcome = await service.encrypt_single(single_request())

    assert outcome.status_code == 500
    assert outcome.error.stage == "download"
    assert store.uploads == []


async def test_single_requires_dest_blob_name(service, store, single_request):
    outcome = await service.encrypt_single(single_request(DestBlobName=None))

    assert outcome.status_code == 400
    assert outcome.message == "Please provide DestBlobName in the request body."
    assert store.calls == []


async def test_close_failure_does_not_change_success(service, store, pattern_request, decrypt_blob):
    store.seed_source("Extract.csv", b"data")
    for container in ("keys", "outbound", "encrypted"):
        store.fail("close", container, exc=ConnectionError("close failed"))

    outcome = await service.encrypt_by_pattern(pattern_request())

    assert outcome.status_code == 200
    assert outcome.message == "1 file(s) encrypted successfully."
    assert store.uploads == [("upload", "encrypted", "Extract.csv.pgp")]
    assert decrypt_blob(store.container("encrypted")["Extract.csv.pgp"]) == b"data"
    assert all(storage.closed for storage in store.opened)


async def test_close_failure_after_stage_error_keeps_stage_error(service, store, pattern_request):
    store.fail("close", "keys", exc=ConnectionError("close failed"))

    outcome = await service.encrypt_by_pattern(pattern_request(PublicKeyBlobName="missing.asc"))

    assert outcome.status_code == 500
    assert outcome.message == "The specified blob does not exist."
