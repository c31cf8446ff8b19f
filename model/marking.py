# model/marking.py

"""
Immutable marking vector of a Petri net.

Maps place ids to token counts, leaving out places without tokens. Two
markings are equal exactly when all counts agree, which makes Marking the
deduplication key of the state space explorer.

Supports:
  •  Component-wise coverage (≥) for the enabling rule.
  •  Lookup with missing places treated as 0.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Mapping, Tuple


@dataclass(frozen=True, slots=True)
class Marking:
    tokens: Tuple[Tuple[str, int], ...]

    def __init__(self, tokens: Mapping[str, int]) -> None:
        # zero counts are dropped so that a missing place and 0 tokens compare equal
        items = ((pid, count) for pid, count in tokens.items() if count)
        object.__setattr__(self, "tokens", tuple(sorted(items)))

    def as_dict(self) -> Dict[str, int]:
        return dict(self.tokens)

    def get(self, place_id: str) -> int:
        for pid, count in self.tokens:
            if pid == place_id:
                return count
        return 0

    def __getitem__(self, place_id: str) -> int:
        return self.get(place_id)

    def covers(self, required: Mapping[str, int]) -> bool:
        """
        True if every place holds at least the required number of tokens.
        """
        counts = self.as_dict()
        return all(counts.get(pid, 0) >= need for pid, need in required.items())

    def __str__(self) -> str:
        items = ", ".join(f"{p}:{c}" for p, c in self.tokens)
        return f"[{items}]"

    __repr__ = __str__
