"""AES-256-CBC file encryption and SHA-256 checksums over binary streams."""

from __future__ import annotations

import hashlib
from collections.abc import Iterator
from dataclasses import dataclass
from typing import BinaryIO, ClassVar

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

_BUFFER_SIZE = 4096
_SALT = b"12345678"
_BLOCK_BITS = 128


class CryptoGuardError(Exception):
    """Raised when encryption, decryption or checksumming fails."""


@dataclass(frozen=True)
class AesCipherParams:
    """Key and initialisation vector for AES-256-CBC."""

    KEY_SIZE: ClassVar[int] = 32
    IV_SIZE: ClassVar[int] = 16

    key: bytes
    iv: bytes

    def __post_init__(self) -> None:
        if len(self.key) != self.KEY_SIZE or len(self.iv) != self.IV_SIZE:
            raise ValueError("key must be 32 bytes and iv 16 bytes")


def _as_bytes(value: str | bytes) -> bytes:
    return value.encode() if isinstance(value, str) else bytes(value)


def derive_cipher_params(password: str | bytes) -> AesCipherParams:
    """Derive key and IV from a password (single-round SHA-256 BytesToKey, fixed salt)."""
    encoded = _as_bytes(password)
    needed = AesCipherParams.KEY_SIZE + AesCipherParams.IV_SIZE
    material = b""
    block = b""
    while len(material) < needed:
        block = hashlib.sha256(block + encoded + _SALT).digest()
        material += block
    key_end = AesCipherParams.KEY_SIZE
    return AesCipherParams(key=material[:key_end], iv=material[key_end:needed])


def _usable(stream: object, probe: str) -> bool:
    try:
        if getattr(stream, "closed", False):
            return False
        check = getattr(stream, probe, None)
        return bool(check()) if check is not None else True
    except (OSError, ValueError):
        return False


def _chunks(source: BinaryIO) -> Iterator[bytes]:
    while True:
        try:
            chunk = source.read(_BUFFER_SIZE)
        except (OSError, ValueError) as exc:
            raise CryptoGuardError("Input stream error") from exc
        if not chunk:
            return
        yield chunk


def _write(target: BinaryIO, data: bytes) -> None:
    if not data:
        return
    try:
        target.write(data)
    except (OSError, ValueError) as exc:
        raise CryptoGuardError("Output stream error.") from exc


class CryptoGuardCtx:
    """Encrypts, decrypts and checksums binary streams."""

    def encrypt_file(self, source: BinaryIO, target: BinaryIO, password: str | bytes) -> None:
        """Encrypt everything read from source and write the ciphertext to target."""
        params = self._prepare(source, target, password)
        encryptor = Cipher(algorithms.AES(params.key), modes.CBC(params.iv)).encryptor()
        padder = padding.PKCS7(_BLOCK_BITS).padder()
        for chunk in _chunks(source):
            _write(target, encryptor.update(padder.update(chunk)))
        _write(target, encryptor.update(padder.finalize()) + encryptor.finalize())

    def decrypt_file(self, source: BinaryIO, target: BinaryIO, password: str | bytes) -> None:
        """Decrypt everything read from source and write the plaintext to target."""
        params = self._prepare(source, target, password)
        decryptor = Cipher(algorithms.AES(params.key), modes.CBC(params.iv)).decryptor()
        unpadder = padding.PKCS7(_BLOCK_BITS).unpadder()
        for chunk in _chunks(source):
            _write(target, unpadder.update(decryptor.update(chunk)))
        try:
            tail = unpadder.update(decryptor.finalize()) + unpadder.finalize()
        except ValueError as exc:
            raise CryptoGuardError(f"Cipher final error. Error: {exc}") from exc
        _write(target, tail)

    def calculate_checksum(self, source: BinaryIO) -> str:
        """Return the lowercase hex SHA-256 digest of the stream's remaining content."""
        if not _usable(source, "readable"):
            raise CryptoGuardError("Input stream error")
        digest = hashlib.sha256()
        for chunk in _chunks(source):
            digest.update(chunk)
        return digest.hexdigest()

    @staticmethod
    def _prepare(source: BinaryIO, target: BinaryIO, password: str | bytes) -> AesCipherParams:
        if source is target:
            raise CryptoGuardError("Output and input streams must be different.")
        if not _usable(source, "readable"):
            raise CryptoGuardError("Input stream error")
        if not _usable(target, "writable"):
            raise CryptoGuardError("Output stream error")
        return derive_cipher_params(password)