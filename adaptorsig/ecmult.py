"""Arithmetic on the secp256k1 curve, with precomputed generator tables."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cache

P = 2**256 - 2**32 - 977
"""The field prime."""

N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
"""The order of the curve group."""

_GX = 0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798
_GY = 0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8

WINDOW_G = 8
"""Window size of the odd-multiples table of the generator."""


def _sqrt(value: int) -> int | None:
    """Return a square root of ``value`` modulo P, or None if there is none."""
    value %= P
    root = pow(value, (P + 1) // 4, P)
    return root if root * root % P == value else None


@dataclass(frozen=True)
class Point:
    """An affine point on secp256k1; ``Point()`` is the point at infinity."""

    x: int | None = None
    y: int | None = None

    def __post_init__(self) -> None:
        if (self.x is None) != (self.y is None):
            raise ValueError("a point needs both coordinates or neither")
        if self.x is None:
            return
        if not (0 <= self.x < P and 0 <= self.y < P):
            raise ValueError("coordinate out of range")
        if (self.y * self.y - self.x**3 - 7) % P:
            raise ValueError("point is not on the curve")

    @property
    def is_zero(self) -> bool:
        """Whether this is the point at infinity."""
        return self.x is None

    def __add__(self, other: Point) -> Point:
        if not isinstance(other, Point):
            return NotImplemented
        if self.is_zero:
            return other
        if other.is_zero:
            return self
        if self.x == other.x:
            if (self.y + other.y) % P == 0:
                return INFINITY
            slope = 3 * self.x * self.x * pow(2 * self.y, -1, P) % P
        else:
            slope = (other.y - self.y) * pow(other.x - self.x, -1, P) % P
        x3 = (slope * slope - self.x - other.x) % P
        y3 = (slope * (self.x - x3) - self.y) % P
        return Point(x3, y3)

    def __neg__(self) -> Point:
        if self.is_zero:
            return self
        return Point(self.x, (-self.y) % P)

    def __sub__(self, other: Point) -> Point:
        if not isinstance(other, Point):
            return NotImplemented
        return self + (-other)

    def __mul__(self, scalar: int) -> Point:
        if isinstance(scalar, bool) or not isinstance(scalar, int):
            return NotImplemented
        k = scalar % N
        if self == G:
            return mul_base(k)
        result = INFINITY
        for bit in bin(k)[2:]:
            result = result + result
            if bit == "1":
                result = result + self
        return result

    def __rmul__(self, scalar: int) -> Point:
        return self.__mul__(scalar)

    def has_even_y(self) -> bool:
        """Whether the y-coordinate is even."""
        if self.is_zero:
            raise ValueError("the point at infinity has no y-coordinate")
        return self.y % 2 == 0

    def to_bytes(self) -> bytes:
        """The 33-byte compressed encoding."""
        if self.is_zero:
            raise ValueError("the point at infinity has no encoding")
        return bytes([2 + (self.y & 1)]) + self.x.to_bytes(32, "big")

    @classmethod
    def from_bytes(cls, data: bytes) -> Point:
        """Decode a 33-byte compressed point."""
        data = bytes(data)
        if len(data) != 33 or data[0] not in (2, 3):
            raise ValueError("not a compressed point encoding")
        point = cls.lift_x(data[1:])
        if (point.y & 1) != (data[0] & 1):
            point = -point
        return point

    def xonly_bytes(self) -> bytes:
        """The 32-byte x-coordinate."""
        if self.is_zero:
            raise ValueError("the point at infinity has no x-coordinate")
        return self.x.to_bytes(32, "big")

    @classmethod
    def lift_x(cls, data: bytes) -> Point:
        """The point with even y whose x-coordinate is the 32 bytes given."""
        data = bytes(data)
        if len(data) != 32:
            raise ValueError("an x-coordinate is 32 bytes")
        x = int.from_bytes(data, "big")
        if x >= P:
            raise ValueError("x-coordinate is not a field element")
        y = _sqrt(x**3 + 7)
        if y is None:
            raise ValueError("no point has this x-coordinate")
        return cls(x, y if y % 2 == 0 else P - y)


INFINITY = Point()
G = Point(_GX, _GY)


@cache
def ecmult_gen_table() -> tuple[tuple[Point, ...], ...]:
    """64 rows of 16 points: row ``j`` holds ``i * 16**j * G`` for i in 0..15."""
    rows = []
    base = G
    for _ in range(64):
        row = [INFINITY]
        for _ in range(15):
            row.append(row[-1] + base)
        rows.append(tuple(row))
        base = row[-1] + base
    return tuple(rows)


@cache
def ecmult_table() -> tuple[Point, ...]:
    """The odd multiples ``G, 3G, 5G, ...`` of the generator."""
    double = G + G
    table = [G]
    for _ in range(2 ** (WINDOW_G - 2) - 1):
        table.append(table[-1] + double)
    return tuple(table)


def mul_base(scalar: int) -> Point:
    """Multiply the generator by ``scalar`` using the precomputed table."""
    k = scalar % N
    result = INFINITY
    for j, row in enumerate(ecmult_gen_table()):
        result = result + row[(k >> (4 * j)) & 0xF]
    return result


def scalar_from_bytes(data: bytes) -> int:
    """Decode 32 big-endian bytes as a scalar, rejecting values of N or more."""
    data = bytes(data)
    if len(data) != 32:
        raise ValueError("a scalar is 32 bytes")
    value = int.from_bytes(data, "big")
    if value >= N:
        raise ValueError("scalar overflows the curve order")
    return value


def scalar_from_bytes_mod_order(data: bytes) -> int:
    """Decode 32 big-endian bytes as a scalar reduced modulo N."""
    data = bytes(data)
    if len(data) != 32:
        raise ValueError("a scalar is 32 bytes")
    return int.from_bytes(data, "big") % N