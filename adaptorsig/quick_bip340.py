"""A compact BIP-340 Schnorr signature scheme with random nonces."""

from __future__ import annotations

import argparse
import hashlib
import secrets
from dataclasses import dataclass

from .ecmult import N, Point, mul_base, scalar_from_bytes_mod_order


def _tagged_hasher(tag: bytes):
    tag_hash = hashlib.sha256(tag).digest()
    hasher = hashlib.sha256()
    hasher.update(tag_hash + tag_hash)
    return hasher


_BIP340_CHALLENGE = _tagged_hasher(b"BIP0340/challenge")


@dataclass(frozen=True)
class QuickSignature:
    """A signature: the nonce x-coordinate ``R`` and the response ``s``."""

    R: bytes
    s: int


def _challenge(R: bytes, X: bytes, message: bytes) -> int:
    hasher = _BIP340_CHALLENGE.copy()
    hasher.update(R)
    hasher.update(X)
    hasher.update(message)
    return scalar_from_bytes_mod_order(hasher.digest())


def _xonly_from_scalar_mul(k: int) -> tuple[int, bytes]:
    """Return ``k``, negated if needed so ``k*G`` has even y, and the x-coordinate."""
    point = mul_base(k)
    if not point.has_even_y():
        k = N - k
    return k, point.xonly_bytes()


def _random_scalar() -> int:
    return secrets.randbelow(N - 1) + 1


def keygen() -> tuple[int, bytes]:
    """A fresh secret key and its x-only public key."""
    return _xonly_from_scalar_mul(_random_scalar())


def sign(keypair: tuple[int, bytes], message: bytes) -> QuickSignature:
    """Sign ``message`` with a freshly drawn random nonce."""
    x, X = keypair
    r, R = _xonly_from_scalar_mul(_random_scalar())
    c = _challenge(R, X, message)
    return QuickSignature(R, (r + c * x) % N)


def verify(public_key: bytes, message: bytes, signature: QuickSignature) -> bool:
    """Check ``signature`` on ``message`` under the x-only ``public_key``."""
    try:
        X = Point.lift_x(public_key)
    except ValueError:
        return False
    if not 0 <= signature.s < N:
        return False
    c = _challenge(signature.R, public_key, message)
    implied = mul_base(signature.s) - c * X
    return (
        not implied.is_zero
        and implied.has_even_y()
        and implied.xonly_bytes() == bytes(signature.R)
    )


def main(argv: list[str] | None = None) -> int:
    """Generate a key, sign a message and verify the signature."""
    parser = argparse.ArgumentParser(description="Sign and verify a message.")
    parser.add_argument("message", nargs="?", default="attack at dawn")
    args = parser.parse_args(argv)
    message = args.message.encode()
    keypair = keygen()
    signature = sign(keypair, message)
    valid = verify(keypair[1], message, signature)
    print(f"public key: {keypair[1].hex()}")
    print(f"signature:  {signature.R.hex()}{signature.s.to_bytes(32, 'big').hex()}")
    print("valid" if valid else "invalid")
    return 0 if valid else 1