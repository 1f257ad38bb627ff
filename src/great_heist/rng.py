from __future__ import annotations

import hashlib
import json
import logging
import random
from dataclasses import dataclass
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


def _to_stable_json(value: Any) -> str:
    """Stable JSON encoding for hashing.

    Ensures consistent ordering and representation across runs so that seed
    derivation is deterministic.
    """
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


@dataclass(frozen=True)
class RNGManager:
    """Hands out domain-specific RNGs for level generation.

    With a master seed, every ``(domain, identifiers...)`` combination maps to
    its own reproducible ``random.Random`` regardless of call order:

        rngm = RNGManager(1234)
        layout_rng = rngm.context_rng("floor", floor, attempt)

    Without a master seed every call returns a freshly seeded RNG, so two
    generations of the same floor differ.
    """

    master_seed: Union[int, str, bytes, None] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "_master_seed_bytes", self._canonicalize_seed(self.master_seed))
        if self.master_seed is None:
            logger.debug("RNGManager running unseeded; generation is non-reproducible")
        else:
            logger.debug("Using master seed: %r", self.master_seed)

    @property
    def seeded(self) -> bool:
        return self.master_seed is not None

    @staticmethod
    def _canonicalize_seed(seed: Optional[Union[int, str, bytes]]) -> bytes:
        if seed is None:
            return b""
        if isinstance(seed, bytes):
            return seed
        if isinstance(seed, int):
            length = (seed.bit_length() + 7) // 8 or 1
            return seed.to_bytes(length, "big", signed=False)
        if isinstance(seed, str):
            return seed.strip().encode("utf-8")
        raise TypeError("Unsupported seed type: %r" % (type(seed),))

    def derive_seed(self, domain: str, *identifiers: Any) -> int:
        """Derive a 64-bit integer seed from the master seed and identifiers."""
        payload = {
            "domain": domain,
            "ids": identifiers,
            "master": self._master_seed_bytes.hex(),  # type: ignore[attr-defined]
            "algo": "blake2b-64",
            "version": 1,
        }
        data = _to_stable_json(payload).encode("utf-8")
        h = hashlib.blake2b(data, digest_size=8)
        seed_int = int.from_bytes(h.digest(), "big", signed=False)
        logger.debug("Derived seed for domain=%s ids=%s -> %d", domain, identifiers, seed_int)
        return seed_int

    def context_rng(self, domain: str, *identifiers: Any) -> random.Random:
        if not self.seeded:
            return random.Random()
        return random.Random(self.derive_seed(domain, *identifiers))


__all__ = ["RNGManager"]
