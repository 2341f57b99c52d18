"""Randomness primitives for every wager.

- ``SecureRandomSource``: OS CSPRNG (``secrets``), the only source used to decide outcomes.
- ``seeded_unit``: reproducible SHA-256 hash of (seed, step) into [0, 1).
  Only shapes publishable odds curves (Chicken Cross), never decides an outcome.
"""

import hashlib
import secrets
from typing import Protocol

SEED_UPPER_BOUND = 2147483647  # 2^31 - 1

_UNIT_BITS = 52
_UNIT_HEX_CHARS = _UNIT_BITS // 4


class RandomSource(Protocol):
    def uniform(self) -> float:
        """[0, 1) 균등 분포"""
        ...

    def uniform_int(self, max_value: int) -> int:
        """[0, max_value) 균등 정수"""
        ...


class SecureRandomSource:
    def __init__(self):
        self._random = secrets.SystemRandom()

    def uniform(self) -> float:
        return self._random.random()

    def uniform_int(self, max_value: int) -> int:
        if max_value <= 0:
            raise ValueError(f"max_value must be positive, got {max_value}")
        return secrets.randbelow(max_value)


def seeded_unit(seed: int, step: int) -> float:
    digest = hashlib.sha256(f"{seed}:{step}".encode("utf-8")).hexdigest()
    return int(digest[:_UNIT_HEX_CHARS], 16) / float(2**_UNIT_BITS)


def generate_seed(source: RandomSource) -> int:
    """[1, 2^31 - 1) 범위 seed (0은 '없음'과 구분되지 않아 제외)"""
    return 1 + source.uniform_int(SEED_UPPER_BOUND - 1)
