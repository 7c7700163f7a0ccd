"""Philox-based counter RNG providing deterministic, labelled substreams."""
from __future__ import annotations

import hashlib
import math
import struct
from dataclasses import dataclass
from typing import Sequence, Tuple

from ..core.errors import err
from .base import exp_rand

_MASK64 = (1 << 64) - 1
_PHILOX_MULT = 0xD2B74407B1CE6E93
_PHILOX_WEYL = 0x9E3779B97F4A7C15
_DOUBLE_SCALE = float.fromhex("0x1.0000000000000p-64")
_OPEN_INTERVAL_MAX = float.fromhex("0x1.fffffffffffffp-1")
_TAU = float.fromhex("0x1.921fb54442d18p+2")

DEFAULT_NAMESPACE = "poisson_engine"


@dataclass(frozen=True)
class PhiloxState:
    key: int
    counter_hi: int
    counter_lo: int


def _mulhi_lo(x: int, y: int) -> Tuple[int, int]:
    product = (x & _MASK64) * (y & _MASK64)
    lo = product & _MASK64
    hi = (product >> 64) & _MASK64
    return hi, lo


def _add_u128(hi: int, lo: int, increment: int) -> Tuple[int, int]:
    total = ((hi & _MASK64) << 64) | (lo & _MASK64)
    total = (total + increment) % (1 << 128)
    return (total >> 64) & _MASK64, total & _MASK64


def philox2x64_10(key: int, counter: Tuple[int, int]) -> Tuple[int, int]:
    key = key & _MASK64
    ctr_hi, ctr_lo = counter
    c0 = ctr_lo & _MASK64
    c1 = ctr_hi & _MASK64
    k = key
    for _ in range(10):
        hi, lo = _mulhi_lo(_PHILOX_MULT, c0)
        c0, c1 = (hi ^ k ^ c1) & _MASK64, lo
        k = (k + _PHILOX_WEYL) & _MASK64
    return c0, c1


SubstreamComponent = Tuple[str, object]


def comp_u64(value: int) -> SubstreamComponent:
    if not (0 <= value < 2 ** 64):
        raise err("E_SUBSTREAM_U64", f"u64 component {value} outside [0, 2^64)")
    return ("u64", value)


def comp_index(value: int) -> SubstreamComponent:
    if not (0 <= value < 2 ** 32):
        raise err("E_SUBSTREAM_INDEX", f"index component {value} outside [0, 2^32)")
    return ("index", value)


def comp_label(value: str) -> SubstreamComponent:
    if not value:
        raise err("E_SUBSTREAM_LABEL", "string component must be non-empty")
    return ("string", value)


def _encode_component(component: SubstreamComponent) -> bytes:
    kind, value = component
    if kind == "u64":
        return struct.pack("<Q", int(value))
    if kind == "index":
        return struct.pack("<I", int(value))
    if kind == "string":
        encoded = str(value).encode("utf-8")
        return struct.pack("<I", len(encoded)) + encoded
    raise err("E_SUBSTREAM_KIND", f"unsupported component kind '{kind}'")


def _encode_label(label: str) -> bytes:
    data = label.encode("utf-8")
    return struct.pack("<I", len(data)) + data


def _open_interval(u64_word: int) -> float:
    u = float(u64_word + 1) * _DOUBLE_SCALE
    if u == 1.0:
        return _OPEN_INTERVAL_MAX
    return u


class PhiloxSubstream:
    """Stateful substream implementing :class:`~poisson_engine.rng.RandomSource`."""

    def __init__(self, label: str, key: int, counter_hi: int, counter_lo: int) -> None:
        self.label = label
        self.key = key & _MASK64
        self.counter_hi = counter_hi & _MASK64
        self.counter_lo = counter_lo & _MASK64
        self._blocks_consumed = 0
        self._draws_consumed = 0

    def snapshot(self) -> PhiloxState:
        return PhiloxState(self.key, self.counter_hi, self.counter_lo)

    @property
    def blocks(self) -> int:
        return self._blocks_consumed

    @property
    def draws(self) -> int:
        return self._draws_consumed

    def _next_block(self) -> Tuple[int, int]:
        x0, x1 = philox2x64_10(self.key, (self.counter_hi, self.counter_lo))
        self.counter_hi, self.counter_lo = _add_u128(self.counter_hi, self.counter_lo, 1)
        self._blocks_consumed += 1
        return x0, x1

    def uniform(self) -> float:
        x0, _ = self._next_block()
        self._draws_consumed += 1
        return _open_interval(x0)

    def uniform_pair(self) -> Tuple[float, float]:
        x0, x1 = self._next_block()
        self._draws_consumed += 2
        return _open_interval(x0), _open_interval(x1)

    def normal(self) -> float:
        # Box-Muller on a single block; the sine half is discarded.
        u1, u2 = self.uniform_pair()
        r = math.sqrt(-2.0 * math.log(u1))
        return r * math.cos(_TAU * u2)

    def exponential(self) -> float:
        return exp_rand(self.uniform)


class PhiloxEngine:
    """Derives deterministic substreams from a seed and a namespace."""

    def __init__(self, *, seed: int, namespace: str = DEFAULT_NAMESPACE) -> None:
        if not (0 <= seed < 2 ** 64):
            raise err("E_SEED_RANGE", f"seed {seed} outside [0, 2^64)")
        if not namespace:
            raise err("E_SUBSTREAM_LABEL", "namespace must be non-empty")
        self.seed = seed
        self.namespace = namespace
        payload = _encode_label(f"{namespace}:master") + struct.pack("<Q", seed)
        self._master = hashlib.sha256(payload).digest()
        self._root_key = int.from_bytes(self._master[24:32], byteorder="little")
        self._root_counter_hi = int.from_bytes(self._master[16:24], byteorder="big")
        self._root_counter_lo = int.from_bytes(self._master[24:32], byteorder="big")

    @property
    def root_state(self) -> PhiloxState:
        return PhiloxState(self._root_key, self._root_counter_hi, self._root_counter_lo)

    def derive_substream(
        self, label: str, components: Sequence[SubstreamComponent] = ()
    ) -> PhiloxSubstream:
        if not label:
            raise err("E_SUBSTREAM_LABEL", "substream label must be non-empty")
        msg = _encode_label(self.namespace) + _encode_label(label)
        for component in components:
            msg += _encode_component(component)
        digest = hashlib.sha256(self._master + msg).digest()
        key = int.from_bytes(digest[24:32], byteorder="little")
        counter_hi = int.from_bytes(digest[16:24], byteorder="big")
        counter_lo = int.from_bytes(digest[24:32], byteorder="big")
        return PhiloxSubstream(label, key, counter_hi, counter_lo)


__all__ = [
    "DEFAULT_NAMESPACE",
    "PhiloxEngine",
    "PhiloxState",
    "PhiloxSubstream",
    "SubstreamComponent",
    "comp_index",
    "comp_label",
    "comp_u64",
    "philox2x64_10",
]
