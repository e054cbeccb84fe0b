"""Achievement data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Achievement:
    """A player's achievement entry for one game."""
    api_name: str
    name: str
    description: str
    achieved: int  # 0 = locked
    unlock_time: int  # Unix epoch seconds, 0 while locked

    @property
    def unlocked(self) -> bool:
        return self.achieved > 0


@dataclass(frozen=True)
class GlobalAchievementRate:
    """Share of all players (0-100) who unlocked an achievement."""
    api_name: str
    percent: float
