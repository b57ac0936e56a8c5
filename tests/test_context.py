import io

import pytest

from cryptoguard.context import (
    AesCipherParams,
    CryptoGuardCtx,
    CryptoGuardError,
    derive_cipher_params,
)

TEST_DATA = b"Test data for encryption."
TEST_DATA_SHA256 = "9aa2b2c0d1ed2fa5dea5b3af401e4a9046a02288dd1461865e4329912f1a758d"
PASSWORD = "password"
OTHER_PASSWORD = "secret"


def _encrypt(data, secret_word):
    output = io.BytesIO()
    CryptoGuardCtx().encrypt_file(io.BytesIO(data), output, secret_word)
    return output.getvalue()


def _decrypt(data, secret_word):
    output = io.BytesIO()
    CryptoGuardCtx().decrypt_file(io.BytesIO(data), output, secret_word)
    return output.getvalue()


def test_encrypted_data_is_not_empty():
    encrypted = _encrypt(TEST_DATA, PASSWORD)
    assert encrypted
    assert encrypted != TEST_DATA


def test_encrypted_length_is_padded_to_block():
    encrypted = _encrypt(TEST_DATA, PASSWORD)
    assert len(encrypted) == 32


def test_different_passwords_give_different_ciphertexts():
    assert _encrypt(TEST_DATA, PASSWORD) != _encrypt(TEST_DATA, OTHER_PASSWORD)


def test_encryption_is_deterministic():
    first = _encrypt(TEST_DATA, PASSWORD)
    second = _encrypt(TEST_DATA, PASSWORD)
    assert len(first) == 32
    assert first == second
    assert _decrypt(second, PASSWORD) == TEST_DATA


def test_encrypt_bad_output_stream_raises():
    output = io.BytesIO()
    output.close()
    with pytest.raises(CryptoGuardError, match="Output stream error"):
        CryptoGuardCtx().encrypt_file(io.BytesIO(), output, PASSWORD)


def test_encrypt_same_streams_raises():
    stream = io.BytesIO()
    with pytest.raises(CryptoGuardError, match="Output and input streams must be different"):
        CryptoGuardCtx().encrypt_file(stream, stream, PASSWORD)


def test_encrypt_bad_input_stream_raises():
    source = io.BytesIO(TEST_DATA)
    source.close()
    with pytest.raises(CryptoGuardError, match="Input stream error"):
        CryptoGuardCtx().encrypt_file(source, io.BytesIO(), PASSWORD)


def test_decrypt_bad_output_stream_raises():
    output = io.BytesIO()
    output.close()
    with pytest.raises(CryptoGuardError, match="Output stream error"):
        CryptoGuardCtx().decrypt_file(io.BytesIO(), output, PASSWORD)


def test_decrypted_data_matches_original():
    assert _decrypt(_encrypt(TEST_DATA, PASSWORD), PASSWORD) == TEST_DATA


def test_round_trip_of_large_data():
    data = bytes(range(256)) * 40 + b"tail"
    assert _decrypt(_encrypt(data, PASSWORD), PASSWORD) == data


def test_round_trip_of_empty_data():
    encrypted = _encrypt(b"", PASSWORD)
    assert len(encrypted) == 16
    assert _decrypt(encrypted, PASSWORD) == b""


def test_different_password_decryption_raises():
    encrypted = _encrypt(TEST_DATA, PASSWORD)
    with pytest.raises(CryptoGuardError, match="Cipher final error."):
        CryptoGuardCtx().decrypt_file(io.BytesIO(encrypted), io.BytesIO(), OTHER_PASSWORD)


def test_decrypt_same_streams_raises():
    stream = io.BytesIO()
    with pytest.raises(CryptoGuardError, match="Output and input streams must be different"):
        CryptoGuardCtx().decrypt_file(stream, stream, OTHER_PASSWORD)


def test_decryption_of_garbage_data_raises():
    with pytest.raises(CryptoGuardError, match="Cipher final error."):
        CryptoGuardCtx().decrypt_file(io.BytesIO(b"this is not encrypted"), io.BytesIO(), PASSWORD)


def test_checksum_is_correct():
    assert CryptoGuardCtx().calculate_checksum(io.BytesIO(TEST_DATA)) == TEST_DATA_SHA256


def test_checksum_of_data_and_decrypted_data_are_equal():
    ctx = CryptoGuardCtx()
    source = io.BytesIO(TEST_DATA)
    data_checksum = ctx.calculate_checksum(source)
    source.seek(0)

    encrypted = io.BytesIO()
    ctx.encrypt_file(source, encrypted, PASSWORD)
    decrypted = io.BytesIO()
    ctx.decrypt_file(io.BytesIO(encrypted.getvalue()), decrypted, PASSWORD)
    decrypted.seek(0)

    assert ctx.calculate_checksum(decrypted) == data_checksum


def test_checksum_of_closed_stream_raises():
    source = io.BytesIO(TEST_DATA)
    source.close()
    with pytest.raises(CryptoGuardError, match="Input stream error"):
        CryptoGuardCtx().calculate_checksum(source)


def test_derive_cipher_params_sizes_and_determinism():
    params = derive_cipher_params(PASSWORD)
    assert len(params.key) == AesCipherParams.KEY_SIZE
    assert len(params.iv) == AesCipherParams.IV_SIZE
    assert params == derive_cipher_params(PASSWORD.encode())


def test_derive_cipher_params_depends_on_password():
    first = derive_cipher_params(PASSWORD)
    second = derive_cipher_params(OTHER_PASSWORD)
    assert first.key != second.key
    assert first.iv != second.iv


def test_cipher_params_reject_wrong_sizes():
    with pytest.raises(ValueError):
        AesCipherParams(key=b"short", iv=b"\x00" * 16)