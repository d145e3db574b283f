"""Deterministic seed derivation for randomized algorithms."""

from __future__ import annotations

import hashlib
import random
from typing import Any, Optional


class SeedManager:
    """Derives independent, reproducible random streams from one master seed.

    Each component (for example a min-cut worker batch) asks for its own
    ``random.Random`` keyed by identifiers, so results do not depend on the
    order or the process in which trials run.

    Usage:
        seeds = SeedManager(42)
        rng = seeds.create_random_state("min_cut", "batch", 3)
    """

    def __init__(self, master_seed: Optional[int] = None) -> None:
        """Initialize the seed manager.

        Args:
            master_seed: Master seed. If None, derived seeds are None and
                random states are seeded from system entropy.
        """
        self.master_seed = master_seed

    def derive_seed(self, *components: Any) -> Optional[int]:
        """Derive a positive 31-bit seed from the master seed and ``components``.

        Returns:
            Derived seed, or None if no master seed is set.
        """
        if self.master_seed is None:
            return None

        seed_input = f"{self.master_seed}:" + ":".join(str(c) for c in components)
        digest = hashlib.sha256(seed_input.encode()).digest()
        return int.from_bytes(digest[:4], byteorder="big") & 0x7FFFFFFF

    def create_random_state(self, *components: Any) -> random.Random:
        """Return a new ``random.Random`` seeded from ``components``."""
        return random.Random(self.derive_seed(*components))
