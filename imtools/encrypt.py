"""MD5 digests and AES-CBC encryption with PKCS#7 padding."""

from __future__ import annotations

import hashlib

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

__all__ = ["EncryptionError", "md5", "aes_encrypt", "aes_decrypt"]

_BLOCK_SIZE = 16
_KEY_SIZES = (16, 24, 32)


class EncryptionError(ValueError):
    """Raised when data cannot be encrypted or decrypted."""


def md5(s: str, salt: str | None = None) -> str:
    """Hex MD5 digest of ``s``, followed by ``salt`` when given."""
    digest = hashlib.md5(s.encode("utf-8"))
    if salt is not None:
        digest.update(salt.encode("utf-8"))
    return digest.hexdigest()


def _cipher(key: bytes) -> Cipher:
    if len(key) not in _KEY_SIZES:
        raise EncryptionError(f"NewCipher failed: invalid key size {len(key)}")
    return Cipher(algorithms.AES(key), modes.CBC(key[:_BLOCK_SIZE]))


def _pkcs7_pad(data: bytes) -> bytes:
    padding = _BLOCK_SIZE - len(data) % _BLOCK_SIZE
    return data + bytes([padding]) * padding


def _pkcs7_unpad(data: bytes) -> bytes:
    if not data:
        raise EncryptionError("data is nil")
    padding = data[-1]
    if padding > len(data):
        raise EncryptionError("invalid padding")
    return data[: len(data) - padding]


def aes_encrypt(data: bytes, key: bytes) -> bytes:
    """Encrypt with AES-CBC, using the first block of the key as the IV."""
    key = bytes(key)
    encryptor = _cipher(key).encryptor()
    return encryptor.update(_pkcs7_pad(bytes(data))) + encryptor.finalize()


def aes_decrypt(data: bytes, key: bytes) -> bytes:
    """Decrypt data produced by :func:`aes_encrypt` and strip its padding."""
    key = bytes(key)
    data = bytes(data)
    cipher = _cipher(key)
    if len(data) % _BLOCK_SIZE:
        raise EncryptionError("input not full blocks")
    decryptor = cipher.decryptor()
    plain = decryptor.update(data) + decryptor.finalize()
    return _pkcs7_unpad(plain)