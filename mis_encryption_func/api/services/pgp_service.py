# _*_ coding: utf-8 _*_
"""OpenPGP 공개키 암호화 서비스 (PGPy)."""
import logging

import pgpy
from pgpy.constants import CompressionAlgorithm, SymmetricKeyAlgorithm

from ...config import settings
from ...config.simple_settings import PGP_CIPHERS, PGP_COMPRESSIONS
from ...types.response.exceptions import HandledException
from ...types.response.response_code import ResponseCode

logger = logging.getLogger(__name__)


class PgpEncryptor:
    """공개키로 데이터를 암호화하는 서비스.

    결과는 ASCII armor 형식이고, PGPy 는 항상 무결성 보호(SEIPD + MDC)
    패킷으로 암호화한다.
    """

    def __init__(self, cipher: str = None, compression: str = None):
        self.cipher = SymmetricKeyAlgorithm[cipher or settings.pgp_cipher]
        self.compression = CompressionAlgorithm[compression or settings.pgp_compression]

    def load_public_key(self, key_blob: bytes) -> pgpy.PGPKey:
        """
        공개키 Blob (armored 또는 binary) 을 파싱합니다.

        Raises:
            HandledException: 키 형식이 올바르지 않은 경우 (CRYPTO_ERROR)
        """
        try:
            key, _ = pgpy.PGPKey.from_blob(key_blob)
        except Exception as exc:
            logger.exception("공개키 파싱 중 오류가 발생했습니다.")
            raise HandledException(ResponseCode.CRYPTO_ERROR, e=exc)

        logger.debug("공개키 로드 완료 - fingerprint: {}".format(key.fingerprint))
        return key

    def resolve_algorithms(self, public_key: pgpy.PGPKey):
        """
        수신자 키의 선호 알고리즘에 맞춰 (cipher, compression) 을 결정합니다.

        설정값이 키 선호 목록에 없으면 목록 중 허용된 첫 번째 알고리즘으로 대체합니다.
        선호 목록이 없는 키는 설정값을 그대로 사용합니다.
        """
        uid = next(iter(public_key.userids), None)
        selfsig = uid.selfsig if uid is not None else None
        if selfsig is None:
            return self.cipher, self.compression

        cipher = self.cipher
        cipher_prefs = list(selfsig.cipherprefs or [])
        if cipher_prefs and cipher not in cipher_prefs:
            preferred = next((c for c in cipher_prefs if c.name in PGP_CIPHERS), None)
            if preferred is not None:
                logger.info("키 선호 cipher 로 대체: {} -> {}".format(cipher.name, preferred.name))
                cipher = preferred
            else:
                logger.warning("키 선호 cipher 중 허용된 알고리즘이 없어 설정값 사용: {}".format(cipher.name))

        compression = self.compression
        comp_prefs = list(selfsig.compprefs or [])
        # 비압축 메시지는 선호 목록과 무관
        if compression is not CompressionAlgorithm.Uncompressed and compression not in comp_prefs:
            preferred = next((c for c in comp_prefs if c.name in PGP_COMPRESSIONS), CompressionAlgorithm.Uncompressed)
            logger.info("키 선호 compression 으로 대체: {} -> {}".format(compression.name, preferred.name))
            compression = preferred

        return cipher, compression

    def encrypt(self, plaintext: bytes, public_key: pgpy.PGPKey) -> bytes:
        """
        데이터를 공개키로 암호화합니다.

        Args:
            plaintext: 암호화할 원본 데이터
            public_key: load_public_key 로 읽은 수신자 키

        Returns:
            bytes: ASCII armored PGP 메시지

        Raises:
            HandledException: 암호화 실패 시 (CRYPTO_ERROR)
        """
        try:
            cipher, compression = self.resolve_algorithms(public_key)
            # format="b": 원본 바이트를 그대로 보존 (텍스트 변환 없음)
            message = pgpy.PGPMessage.new(bytes(plaintext), format="b", compression=compression)
            encrypted = public_key.encrypt(message, cipher=cipher)
        except Exception as exc:
            logger.exception("암호화 처리 중 오류가 발생했습니다.")
            raise HandledException(ResponseCode.CRYPTO_ERROR, e=exc)

        return str(encrypted).encode("utf-8")
