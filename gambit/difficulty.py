"""Difficulty ladder: tier -> search depth in plies."""

from enum import IntEnum


class DifficultyTier(IntEnum):
    RANDOM = 0
    SHALLOW = 1
    DEEP = 2

    @property
    def depth(self) -> int:
        return _DEPTHS[self]

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, value) -> "DifficultyTier":
        """Accept a tier, its name ("deep"), its index or a label word ("hard")."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls(value)
        key = str(value).strip().lower()
        for tier in cls:
            if key in (tier.name.lower(), str(int(tier)), _ALIASES[tier]):
                return tier
        raise ValueError(f"Unknown difficulty: {value!r}")

    @classmethod
    def from_depth(cls, depth: int) -> "DifficultyTier":
        for tier in cls:
            if tier.depth == depth:
                return tier
        raise ValueError(f"No difficulty tier searches to depth {depth}")


# 0 = random move, no search
_DEPTHS = {
    DifficultyTier.RANDOM: 0,
    DifficultyTier.SHALLOW: 2,
    DifficultyTier.DEEP: 3,
}

_LABELS = {
    DifficultyTier.RANDOM: "Easy (Random)",
    DifficultyTier.SHALLOW: "Medium (Normal)",
    DifficultyTier.DEEP: "Hard (Pro)",
}

_ALIASES = {
    DifficultyTier.RANDOM: "easy",
    DifficultyTier.SHALLOW: "medium",
    DifficultyTier.DEEP: "hard",
}

TIER_DEPTHS = frozenset(_DEPTHS.values())
