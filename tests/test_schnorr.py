import secrets

import pytest

from adaptorsig.ecmult import G, N, Point, mul_base
from adaptorsig.message import Message
from adaptorsig.schnorr import KeyPair, NonceKind, Schnorr
from adaptorsig.signature import Signature

KEY = 0x18451F9E08AF9530814243E202A4A977130E672079F5C14DCF15BD4DEE723072
HEADLINE = b"Chancellor on brink of second bailout for banks"


def _random_scalar():
    return secrets.randbelow(N - 1) + 1


@pytest.fixture
def schnorr():
    return Schnorr(NonceKind.DETERMINISTIC)


def test_verify_known_vector():
    schnorr = Schnorr.verify_only()
    public_key = Point.lift_x(
        bytes.fromhex("d69c3509bb99e412e68b0fe8544e72837dfa30746d8be2aa65975f29d22dc7b9")
    )
    signature = Signature.from_hex(
        "00000000000000000000003b78ce563f89a0ed9414f5aa28ad0d96d6795f9c63"
        "76afb1548af603b3eb45c9f8207dee1060cb71c04e80f593060b07d28308d7f4"
    )
    message = bytes.fromhex("4df3c3f68fcc83b27e9d42c90431a72499f17875c81a599b566c9889b9696703")
    assert schnorr.verify(public_key, Message.raw(message), signature) is True
    tampered = bytes([message[0] ^ 1]) + message[1:]
    assert schnorr.verify(public_key, Message.raw(tampered), signature) is False


def test_verify_only_cannot_sign():
    schnorr = Schnorr.verify_only()
    keypair = schnorr.new_keypair(KEY)
    with pytest.raises(ValueError):
        schnorr.sign(keypair, Message.raw(b"foo"))


@pytest.mark.parametrize("kind", list(NonceKind))
def test_anticipated_signature_matches_actual(kind):
    schnorr = Schnorr(kind)
    for _ in range(3):
        keypair = schnorr.new_keypair(_random_scalar())
        msg = Message.plain("test", HEADLINE)
        signature = schnorr.sign(keypair, msg)
        anticipated = schnorr.anticipate_signature(
            keypair.verification_key(), Point.lift_x(signature.R), msg
        )
        assert anticipated == mul_base(signature.s)


def test_sign_deterministic(schnorr):
    for _ in range(3):
        keypair_1 = schnorr.new_keypair(_random_scalar())
        keypair_2 = schnorr.new_keypair(_random_scalar())
        dawn = Message.plain("test", b"attack at dawn")
        noon = Message.plain("test", b"retreat at noon")
        sig_1 = schnorr.sign(keypair_1, dawn)
        sig_2 = schnorr.sign(keypair_1, dawn)
        sig_3 = schnorr.sign(keypair_1, noon)
        sig_4 = schnorr.sign(keypair_2, dawn)
        assert schnorr.verify(keypair_1.verification_key(), dawn, sig_1)
        assert sig_1 == sig_2
        assert sig_3.R != sig_1.R
        assert sig_1.R != sig_4.R


def test_deterministic_nonces_for_different_message_kinds(schnorr):
    keypair = schnorr.new_keypair(KEY)
    raw = schnorr.sign(keypair, Message.raw(b"foo"))
    one = schnorr.sign(keypair, Message.plain("one", b"foo"))
    two = schnorr.sign(keypair, Message.plain("two", b"foo"))
    assert raw.R != one.R
    assert one.R != two.R
    assert schnorr.verify(keypair.verification_key(), Message.raw(b"foo"), raw)
    assert not schnorr.verify(keypair.verification_key(), Message.plain("two", b"foo"), one)


def test_synthetic_nonces_differ_but_verify():
    schnorr = Schnorr(NonceKind.SYNTHETIC)
    keypair = schnorr.new_keypair(KEY)
    msg = Message.plain("test", b"foo")
    first = schnorr.sign(keypair, msg)
    second = schnorr.sign(keypair, msg)
    assert first.R != second.R
    assert schnorr.verify(keypair.verification_key(), msg, first)
    assert schnorr.verify(keypair.verification_key(), msg, second)


def test_new_keypair_has_even_y(schnorr):
    for _ in range(5):
        sk = _random_scalar()
        keypair = schnorr.new_keypair(sk)
        assert keypair.sk in (sk, N - sk)
        point = mul_base(keypair.sk)
        assert point.has_even_y()
        assert point.xonly_bytes() == keypair.pk
        assert keypair.verification_key() == point
        assert keypair.as_tuple() == (keypair.sk, keypair.pk)


def test_new_keypair_rejects_zero(schnorr):
    with pytest.raises(ValueError):
        schnorr.new_keypair(0)


def test_roll_own_signature_with_challenge(schnorr):
    message = Message.plain("my-app", b"we rolled our own schnorr!")
    keypair = schnorr.new_keypair(_random_scalar())
    r = _random_scalar()
    R_point = mul_base(r)
    if not R_point.has_even_y():
        r = N - r
    R = R_point.xonly_bytes()
    c = schnorr.challenge(R, keypair.pk, message)
    assert 0 <= c < N
    signature = Signature(R, (r + c * keypair.sk) % N)
    assert schnorr.verify(keypair.verification_key(), message, signature)


def test_verify_rejects_wrong_key_and_tampered_s(schnorr):
    keypair = schnorr.new_keypair(KEY)
    other = schnorr.new_keypair(_random_scalar())
    msg = Message.raw(b"foo")
    signature = schnorr.sign(keypair, msg)
    assert not schnorr.verify(other.verification_key(), msg, signature)
    tampered = Signature(signature.R, (signature.s + 1) % N)
    assert not schnorr.verify(keypair.verification_key(), msg, tampered)


def test_signature_bytes_round_trip(schnorr):
    keypair = schnorr.new_keypair(KEY)
    msg = Message.plain("test", b"foo")
    signature = schnorr.sign(keypair, msg)
    decoded = Signature.from_bytes(signature.to_bytes())
    assert decoded == signature
    assert schnorr.verify(keypair.verification_key(), msg, decoded)


def test_verify_requires_even_y_key(schnorr):
    keypair = schnorr.new_keypair(KEY)
    signature = schnorr.sign(keypair, Message.raw(b"foo"))
    with pytest.raises(ValueError):
        schnorr.verify(-keypair.verification_key(), Message.raw(b"foo"), signature)


def test_generator_and_keypair_type(schnorr):
    keypair = schnorr.new_keypair(1)
    assert schnorr.G == G
    assert keypair == KeyPair(1, G.xonly_bytes())