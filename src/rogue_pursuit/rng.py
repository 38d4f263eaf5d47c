from __future__ import annotations

import hashlib
import logging
import random
import secrets
from dataclasses import dataclass, field
from typing import Optional, Union

logger = logging.getLogger(__name__)

DUNGEON_LAYOUT = "dungeon_layout"
ITEM_PLACEMENT = "item_placement"
DOMAINS = (DUNGEON_LAYOUT, ITEM_PLACEMENT)

Seed = Union[int, str, bytes]


def _seed_bytes(seed: Seed) -> bytes:
    if isinstance(seed, bytes):
        return seed
    if isinstance(seed, int):
        return seed.to_bytes((seed.bit_length() + 7) // 8 or 1, "big")
    if isinstance(seed, str):
        text = seed.strip()
        if text.startswith("0x"):
            try:
                return _seed_bytes(int(text, 16))
            except ValueError:
                pass
        return text.encode("utf-8")
    raise TypeError(f"Unsupported seed type: {type(seed)!r}")


@dataclass(frozen=True)
class RNGManager:
    """One master seed, one independent ``random.Random`` per generation step.

    Carving and box/spawn placement draw from separate streams, so the layout
    for a seed does not change when the number of boxes does:

        rngm = RNGManager(1234)
        layout_rng = rngm.context_rng(DUNGEON_LAYOUT)
        placement_rng = rngm.context_rng(ITEM_PLACEMENT)

    A ``None`` seed is replaced by random bytes, logged so the run can be replayed
    with ``--seed 0x<hex>``.
    """

    master_seed: Optional[Seed]
    _master: bytes = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.master_seed is None:
            master = secrets.token_bytes(16)
            logger.info("No seed given; using random seed 0x%s", master.hex())
        else:
            master = _seed_bytes(self.master_seed)
        object.__setattr__(self, "_master", master)

    def derive_seed(self, domain: str) -> int:
        if domain not in DOMAINS:
            raise ValueError(f"Unknown RNG domain {domain!r}; expected one of {DOMAINS}")
        digest = hashlib.blake2b(self._master, digest_size=8, person=domain.encode("ascii")).digest()
        return int.from_bytes(digest, "big")

    def context_rng(self, domain: str) -> random.Random:
        return random.Random(self.derive_seed(domain))

    def get_master_seed_hex(self) -> str:
        return self._master.hex()


def coerce_seed(raw: Optional[str]) -> Union[int, str, None]:
    """Interpret a CLI/env seed: digits become an int, anything else stays a string."""
    if raw is None:
        return None
    raw = raw.strip()
    if not raw:
        return None
    if raw.isdigit():
        return int(raw)
    return raw
