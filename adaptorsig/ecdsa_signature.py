"""ECDSA signatures over secp256k1 and their 64-byte compact encoding."""

from __future__ import annotations

from dataclasses import dataclass

from .ecmult import N, scalar_from_bytes


def _check_nonzero_scalar(value: int, what: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{what} must be an integer")
    if not 0 < value < N:
        raise ValueError(f"{what} must be a non-zero scalar")


@dataclass(frozen=True)
class Signature:
    """An ECDSA signature: the nonce's x-coordinate as a scalar ``R_x`` and ``s``."""

    R_x: int
    s: int

    def __post_init__(self) -> None:
        _check_nonzero_scalar(self.R_x, "R_x")
        _check_nonzero_scalar(self.s, "s")

    def to_bytes(self) -> bytes:
        """The 32-byte ``R_x`` followed by the 32-byte ``s``."""
        return self.R_x.to_bytes(32, "big") + self.s.to_bytes(32, "big")

    @classmethod
    def from_bytes(cls, data: bytes) -> Signature:
        """Decode 64 bytes; both halves must be non-zero scalars below the order."""
        data = bytes(data)
        if len(data) != 64:
            raise ValueError("an ECDSA signature is 64 bytes")
        return cls(scalar_from_bytes(data[:32]), scalar_from_bytes(data[32:]))

    @classmethod
    def from_hex(cls, text: str) -> Signature:
        """Decode a signature from 128 hex digits."""
        try:
            data = bytes.fromhex(text)
        except ValueError as exc:
            raise ValueError("invalid hex for a secp256k1 ECDSA signature") from exc
        return cls.from_bytes(data)

    def as_tuple(self) -> tuple[int, int]:
        """The pair ``(R_x, s)``."""
        return self.R_x, self.s

    def __str__(self) -> str:
        return self.to_bytes().hex()