"""
Transposition table with Zobrist hashing for position caching.
Stores previously searched positions to avoid redundant calculations.
"""

import random
from dataclasses import dataclass
from typing import Optional

from ..game.board import TOTAL_CELLS


@dataclass
class TTEntry:
    """Transposition table entry."""
    score: int
    depth: int


class TranspositionTable:
    """
    Hash table for caching search results.

    Keys are Zobrist fingerprints: the XOR of one random number per
    occupied (cell, colour), so the same position reached through
    different move orders maps to the same key. Side to move is not
    hashed; in Connect 4 it follows from the piece counts.
    """

    SEED = 42

    def __init__(self):
        self.table: dict[int, TTEntry] = {}

        # Deterministic keys for reproducibility
        rng = random.Random(self.SEED)
        self.zobrist_red = [rng.getrandbits(64) for _ in range(TOTAL_CELLS)]
        self.zobrist_yellow = [rng.getrandbits(64) for _ in range(TOTAL_CELLS)]

        # Statistics for debugging
        self.hits = 0
        self.misses = 0
        self.stores = 0

    def compute_hash(self, board) -> int:
        """
        Compute Zobrist hash for a board position.
        Only iterates over set bits.
        """
        h = 0

        red = board.red
        while red:
            bit = (red & -red).bit_length() - 1
            h ^= self.zobrist_red[bit]
            red &= red - 1

        yellow = board.yellow
        while yellow:
            bit = (yellow & -yellow).bit_length() - 1
            h ^= self.zobrist_yellow[bit]
            yellow &= yellow - 1

        return h

    def probe(self, zobrist_hash: int, depth: int) -> Optional[int]:
        """
        Look up a position.
        Returns the stored score only if it was searched at least as deep
        as depth; shallower entries are ignored.
        """
        entry = self.table.get(zobrist_hash)
        if entry is None or entry.depth < depth:
            self.misses += 1
            return None

        self.hits += 1
        return entry.score

    def store(self, zobrist_hash: int, score: int, depth: int):
        """Store a search result, overwriting any previous entry."""
        self.stores += 1
        self.table[zobrist_hash] = TTEntry(score=score, depth=depth)

    def clear(self):
        """Clear all entries and reset statistics."""
        self.table.clear()
        self.hits = 0
        self.misses = 0
        self.stores = 0

    def get_stats(self) -> dict:
        """Get table statistics for debugging."""
        total_probes = self.hits + self.misses
        hit_rate = self.hits / total_probes if total_probes > 0 else 0

        return {
            'hits': self.hits,
            'misses': self.misses,
            'hit_rate': f'{hit_rate:.1%}',
            'stores': self.stores,
            'filled': len(self.table),
        }

    def __len__(self) -> int:
        return len(self.table)

    def __repr__(self) -> str:
        stats = self.get_stats()
        return f"TranspositionTable(hit_rate={stats['hit_rate']}, filled={stats['filled']})"
