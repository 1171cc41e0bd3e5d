"""Seeded, platform-independent tie-breaking keys for grid coordinates."""
from typing import Dict

from ..models.grid import GridCoordinate

MASK64 = 0xFFFFFFFFFFFFFFFF

ROW_MULTIPLIER = 0x9E3779B185EBCA87
COLUMN_MULTIPLIER = 0xC2B2AE3D27D4EB4F

SPLITMIX_INCREMENT = 0x9E3779B97F4A7C15
SPLITMIX_MIX_1 = 0xBF58476D1CE4E5B9
SPLITMIX_MIX_2 = 0x94D049BB133111EB


def splitmix64(x: int) -> int:
    """SplitMix64 finalizer with 64-bit wraparound."""
    z = (x + SPLITMIX_INCREMENT) & MASK64
    z = ((z ^ (z >> 30)) * SPLITMIX_MIX_1) & MASK64
    z = ((z ^ (z >> 27)) * SPLITMIX_MIX_2) & MASK64
    return z ^ (z >> 31)


class TieBreaker:
    """Total order over coordinates derived from a 64-bit seed.
    
    Keys depend only on the seed and the coordinate, never on hashing or
    iteration order, so two runs with the same seed resolve every tie the
    same way.
    """
    
    def __init__(self, seed: int):
        self.seed = seed & MASK64
        self._cache: Dict[GridCoordinate, int] = {}
    
    def key(self, coordinate: GridCoordinate) -> int:
        """Return the 64-bit key of ``coordinate``."""
        cached = self._cache.get(coordinate)
        if cached is not None:
            return cached
        
        # Negative axes are taken as two's-complement 64-bit values
        value = self.seed
        value ^= ((coordinate.row & MASK64) * ROW_MULTIPLIER) & MASK64
        value ^= ((coordinate.column & MASK64) * COLUMN_MULTIPLIER) & MASK64
        result = splitmix64(value)
        self._cache[coordinate] = result
        return result
    
    def pair_key(self, first: GridCoordinate, second: GridCoordinate) -> int:
        """XOR of two coordinate keys, used to order candidate edges."""
        return self.key(first) ^ self.key(second)
