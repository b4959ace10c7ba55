# _*_ coding: utf-8 _*_
import json

import pgpy
import pytest
from azure.core.exceptions import ResourceNotFoundError
from pgpy.constants import (
    CompressionAlgorithm,
    HashAlgorithm,
    KeyFlags,
    PubKeyAlgorithm,
    SymmetricKeyAlgorithm,
)

from mis_encryption_func.storage.storage_base import StorageBase

SOURCE_CONN = "DefaultEndpointsProtocol=https;AccountName=source;AccountKey=c291cmNl;EndpointSuffix=core.windows.net"
DEST_CONN = "DefaultEndpointsProtocol=https;AccountName=dest;AccountKey=ZGVzdA==;EndpointSuffix=core.windows.net"
KEY_CONN = "DefaultEndpointsProtocol=https;AccountName=keys;AccountKey=a2V5cw==;EndpointSuffix=core.windows.net"


class InMemoryStorage(StorageBase):
    """InMemoryStore 의 컨테이너 1개를 가리키는 StorageBase 구현"""

    def __init__(self, store, connection_string, container_name):
        self.store = store
        self.key = (connection_string, container_name)
        self.closed = False

    @property
    def blobs(self):
        return self.store.containers.setdefault(self.key, {})

    def _check_failure(self, op, blob_name=None):
        exc = self.store.failures.get((op, self.key[1], blob_name))
        if exc is not None:
            raise exc

    async def list_blob_names(self):
        self.store.calls.append(("list", self.key[1], None))
        self._check_failure("list")
        return list(self.blobs)

    async def download_bytes(self, blob_name):
        self.store.calls.append(("download", self.key[1], blob_name))
        self._check_failure("download", blob_name)
        if blob_name not in self.blobs:
            raise ResourceNotFoundError("The specified blob does not exist.")
        return self.blobs[blob_name]

    async def upload_bytes(self, blob_name, data, overwrite=True):
        self.store.calls.append(("upload", self.key[1], blob_name))
        self._check_failure("upload", blob_name)
        self.blobs[blob_name] = bytes(data)
        self.store.upload_count += 1
        return blob_name

    async def close(self):
        self.closed = True
        self._check_failure("close")


class InMemoryStore:
    """(연결 문자열, 컨테이너) 단위로 Blob 을 보관하는 테스트용 저장소"""

    def __init__(self):
        self.containers = {}
        self.calls = []
        self.failures = {}
        self.opened = []
        self.upload_count = 0

    def put(self, connection_string, container_name, blob_name, data):
        self.containers.setdefault((connection_string, container_name), {})[blob_name] = data

    def seed_source(self, blob_name, data, container_name="outbound"):
        self.put(SOURCE_CONN, container_name, blob_name, data)

    def container(self, container_name):
        for (_, name), blobs in self.containers.items():
            if name == container_name:
                return blobs
        return {}

    def fail(self, op, container_name, blob_name=None, exc=None):
        self.failures[(op, container_name, blob_name)] = exc or ConnectionError("connection reset by peer")

    def opener(self, connection_string, container_name):
        storage = InMemoryStorage(self, connection_string, container_name)
        self.opened.append(storage)
        return storage

    @property
    def uploads(self):
        return [call for call in self.calls if call[0] == "upload"]


@pytest.fixture(scope="session")
def pgp_private_key():
    key = pgpy.PGPKey.new(PubKeyAlgorithm.RSAEncryptOrSign, 2048)
    uid = pgpy.PGPUID.new("Recipient", email="recipient@example.com")
    key.add_uid(
        uid,
        usage={KeyFlags.Sign, KeyFlags.EncryptCommunications, KeyFlags.EncryptStorage},
        hashes=[HashAlgorithm.SHA256],
        ciphers=[SymmetricKeyAlgorithm.AES256],
        compression=[CompressionAlgorithm.ZIP, CompressionAlgorithm.ZLIB, CompressionAlgorithm.Uncompressed],
    )
    return key


@pytest.fixture(scope="session")
def public_key_blob(pgp_private_key):
    return str(pgp_private_key.pubkey).encode("utf-8")


@pytest.fixture
def decrypt_blob(pgp_private_key):
    def _decrypt(armored: bytes) -> bytes:
        message = pgpy.PGPMessage.from_blob(armored)
        return bytes(pgp_private_key.decrypt(message).message)
    return _decrypt


@pytest.fixture
def store(public_key_blob):
    store = InMemoryStore()
    store.put(KEY_CONN, "keys", "recipient.asc", public_key_blob)
    return store


@pytest.fixture
def pattern_request():
    def _build(**overrides):
        body = {
            "SourceConnectionString": SOURCE_CONN,
            "SourceContainer": "outbound",
            "DestConnectionString": DEST_CONN,
            "DestContainer": "encrypted",
            "PublicKeyConnectionString": KEY_CONN,
            "PublicKeyContainer": "keys",
            "PublicKeyBlobName": "recipient.asc",
            "SourceBlobPattern": "E*.csv",
        }
        body.update(overrides)
        return json.dumps({k: v for k, v in body.items() if v is not None}).encode("utf-8")
    return _build


@pytest.fixture
def single_request():
    def _build(**overrides):
        body = {
            "SourceConnectionString": SOURCE_CONN,
            "SourceContainer": "outbound",
            "SourceBlobName": "Extract.csv",
            "DestConnectionString": DEST_CONN,
            "DestContainer": "encrypted",
            "DestBlobName": "Extract.csv.gpg",
            "PublicKeyConnectionString": KEY_CONN,
            "PublicKeyContainer": "keys",
            "PublicKeyBlobName": "recipient.asc",
        }
        body.update(overrides)
        return json.dumps({k: v for k, v in body.items() if v is not None}).encode("utf-8")
    return _build
