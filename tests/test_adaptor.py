import hashlib

import pytest

from adaptorsig.adaptor import (
    EncryptedSignature,
    decrypt_signature,
    encrypted_sign,
    encryption_key_for,
    recover_decryption_key,
    verify_encrypted_signature,
)
from adaptorsig.ecmult import G, N, Point
from adaptorsig.message import Message
from adaptorsig.schnorr import NonceKind, Schnorr


def _scalar(seed: int) -> int:
    return int.from_bytes(hashlib.sha256(b"scalar" + bytes([seed])).digest(), "big") % N or 1


MESSAGE = Message.plain("test", b"give 100 coins to Bob")


@pytest.mark.parametrize("kind", [NonceKind.DETERMINISTIC, NonceKind.SYNTHETIC])
@pytest.mark.parametrize("seed", range(4))
def test_end_to_end(kind, seed):
    schnorr = Schnorr(kind)
    keypair = schnorr.new_keypair(_scalar(seed))
    verification_key = keypair.verification_key()
    decryption_key = _scalar(100 + seed)
    encryption_key = encryption_key_for(schnorr, decryption_key)

    encrypted = encrypted_sign(schnorr, keypair, encryption_key, MESSAGE)
    assert verify_encrypted_signature(
        schnorr, verification_key, encryption_key, MESSAGE, encrypted
    )

    signature = decrypt_signature(schnorr, decryption_key, encrypted)
    assert schnorr.verify(verification_key, MESSAGE, signature)

    recovered = recover_decryption_key(schnorr, encryption_key, encrypted, signature)
    assert recovered == decryption_key


def test_encryption_key_for_is_scalar_multiple_of_generator():
    schnorr = Schnorr.verify_only()
    assert encryption_key_for(schnorr, 1) == G
    assert encryption_key_for(schnorr, 2) == G + G


def test_encryption_key_for_rejects_zero():
    with pytest.raises(ValueError):
        encryption_key_for(Schnorr.verify_only(), 0)


def test_deterministic_encrypted_sign_is_repeatable():
    schnorr = Schnorr(NonceKind.DETERMINISTIC)
    keypair = schnorr.new_keypair(_scalar(1))
    encryption_key = encryption_key_for(schnorr, _scalar(2))
    first = encrypted_sign(schnorr, keypair, encryption_key, MESSAGE)
    second = encrypted_sign(schnorr, keypair, encryption_key, MESSAGE)
    assert first == second


def test_nonce_depends_on_encryption_key():
    schnorr = Schnorr(NonceKind.DETERMINISTIC)
    keypair = schnorr.new_keypair(_scalar(1))
    first = encrypted_sign(schnorr, keypair, encryption_key_for(schnorr, _scalar(2)), MESSAGE)
    second = encrypted_sign(schnorr, keypair, encryption_key_for(schnorr, _scalar(3)), MESSAGE)
    assert first.R != second.R


def test_encrypted_signature_r_has_even_y():
    schnorr = Schnorr(NonceKind.DETERMINISTIC)
    for seed in range(6):
        keypair = schnorr.new_keypair(_scalar(seed))
        encrypted = encrypted_sign(
            schnorr, keypair, encryption_key_for(schnorr, _scalar(50 + seed)), MESSAGE
        )
        assert encrypted.R.has_even_y()


def test_verify_fails_for_other_message():
    schnorr = Schnorr(NonceKind.DETERMINISTIC)
    keypair = schnorr.new_keypair(_scalar(3))
    encryption_key = encryption_key_for(schnorr, _scalar(4))
    encrypted = encrypted_sign(schnorr, keypair, encryption_key, MESSAGE)
    other = Message.plain("test", b"give 100 coins to Mallory")
    assert not verify_encrypted_signature(
        schnorr, keypair.verification_key(), encryption_key, other, encrypted
    )


def test_verify_fails_for_other_encryption_key():
    schnorr = Schnorr(NonceKind.DETERMINISTIC)
    keypair = schnorr.new_keypair(_scalar(3))
    encryption_key = encryption_key_for(schnorr, _scalar(4))
    encrypted = encrypted_sign(schnorr, keypair, encryption_key, MESSAGE)
    wrong_key = encryption_key_for(schnorr, _scalar(5))
    assert not verify_encrypted_signature(
        schnorr, keypair.verification_key(), wrong_key, MESSAGE, encrypted
    )


def test_verify_fails_for_other_verification_key():
    schnorr = Schnorr(NonceKind.DETERMINISTIC)
    keypair = schnorr.new_keypair(_scalar(3))
    other = schnorr.new_keypair(_scalar(7))
    encryption_key = encryption_key_for(schnorr, _scalar(4))
    encrypted = encrypted_sign(schnorr, keypair, encryption_key, MESSAGE)
    assert not verify_encrypted_signature(
        schnorr, other.verification_key(), encryption_key, MESSAGE, encrypted
    )


def test_wrong_decryption_key_gives_invalid_signature():
    schnorr = Schnorr(NonceKind.DETERMINISTIC)
    keypair = schnorr.new_keypair(_scalar(8))
    encryption_key = encryption_key_for(schnorr, _scalar(9))
    encrypted = encrypted_sign(schnorr, keypair, encryption_key, MESSAGE)
    signature = decrypt_signature(schnorr, _scalar(10), encrypted)
    assert not schnorr.verify(keypair.verification_key(), MESSAGE, signature)
    assert recover_decryption_key(schnorr, encryption_key, encrypted, signature) is None


def test_recover_rejects_unrelated_signature():
    schnorr = Schnorr(NonceKind.DETERMINISTIC)
    keypair = schnorr.new_keypair(_scalar(11))
    encryption_key = encryption_key_for(schnorr, _scalar(12))
    encrypted = encrypted_sign(schnorr, keypair, encryption_key, MESSAGE)
    plain_signature = schnorr.sign(keypair, MESSAGE)
    assert plain_signature.R != encrypted.R.xonly_bytes()
    assert recover_decryption_key(schnorr, encryption_key, encrypted, plain_signature) is None


def test_decrypted_signature_has_encrypted_nonce():
    schnorr = Schnorr(NonceKind.DETERMINISTIC)
    keypair = schnorr.new_keypair(_scalar(13))
    encryption_key = encryption_key_for(schnorr, _scalar(14))
    encrypted = encrypted_sign(schnorr, keypair, encryption_key, MESSAGE)
    signature = decrypt_signature(schnorr, _scalar(14), encrypted)
    assert signature.R == encrypted.R.xonly_bytes()


def test_verify_only_instance_cannot_sign():
    schnorr = Schnorr.verify_only()
    keypair = schnorr.new_keypair(_scalar(15))
    with pytest.raises(ValueError):
        encrypted_sign(schnorr, keypair, encryption_key_for(schnorr, _scalar(16)), MESSAGE)


def test_verify_only_instance_can_verify():
    signer = Schnorr(NonceKind.DETERMINISTIC)
    keypair = signer.new_keypair(_scalar(17))
    encryption_key = encryption_key_for(signer, _scalar(18))
    encrypted = encrypted_sign(signer, keypair, encryption_key, MESSAGE)
    verifier = Schnorr.verify_only()
    assert verify_encrypted_signature(
        verifier, keypair.verification_key(), encryption_key, MESSAGE, encrypted
    )


def test_encrypted_signature_rejects_odd_y_nonce():
    odd = G if not G.has_even_y() else -G
    with pytest.raises(ValueError):
        EncryptedSignature(odd, 1, False)


def test_encrypted_signature_rejects_out_of_range_s_hat():
    even = G if G.has_even_y() else -G
    with pytest.raises(ValueError):
        EncryptedSignature(even, N, False)


def test_encrypted_signature_rejects_infinity():
    with pytest.raises(ValueError):
        EncryptedSignature(Point(), 1, True)


def test_encrypted_sign_rejects_infinite_encryption_key():
    schnorr = Schnorr(NonceKind.DETERMINISTIC)
    keypair = schnorr.new_keypair(_scalar(19))
    with pytest.raises(ValueError):
        encrypted_sign(schnorr, keypair, Point(), MESSAGE)