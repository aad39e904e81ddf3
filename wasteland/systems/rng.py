"""Deterministic randomness for board generation, backed by xxhash.

A draw is addressed by (seed, domain, stream, index) and hashed, so it does
not depend on how many other draws happened before it. Board generation
opens one :class:`DrawStream` per generated board and reads from it in
order.

    value = xxh64(seed, domain, stream, index) / 2**64
"""

from __future__ import annotations

import struct

import xxhash

from wasteland.core.enums import Domain

_SCALE = float(1 << 64)


class DeterministicRNG:
    """Stateless, seeded source of draws."""

    __slots__ = ("_seed",)

    def __init__(self, seed: int) -> None:
        self._seed = seed

    @property
    def seed(self) -> int:
        return self._seed

    def draw(self, domain: Domain, stream: int, index: int) -> float:
        """The draw at one address, in [0.0, 1.0)."""
        payload = struct.pack("<qiqq", self._seed, domain.value, stream, index)
        return xxhash.xxh64_intdigest(payload) / _SCALE

    def stream(self, stream: int) -> DrawStream:
        return DrawStream(self, stream)


class DrawStream:
    """Sequential reader over one stream. Every call consumes one index."""

    __slots__ = ("_rng", "_stream", "_index")

    def __init__(self, rng: DeterministicRNG, stream: int) -> None:
        self._rng = rng
        self._stream = stream
        self._index = 0

    @property
    def draws(self) -> int:
        return self._index

    def random(self, domain: Domain) -> float:
        value = self._rng.draw(domain, self._stream, self._index)
        self._index += 1
        return value

    def below(self, domain: Domain, n: int) -> int:
        """Integer in [0, n)."""
        if n <= 0:
            raise ValueError("n must be positive")
        return min(int(self.random(domain) * n), n - 1)
