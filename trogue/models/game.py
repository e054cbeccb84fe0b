"""Game-related data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Game:
    """An owned game as reported by the Steam API."""
    app_id: int
    name: str
    last_played: int = 0  # Unix epoch seconds
    playtime_forever: int = 0  # Minutes
    playtime_windows_forever: int = 0
    playtime_mac_forever: int = 0
    playtime_linux_forever: int = 0
    playtime_disconnected: int = 0
    img_icon_url: str = ""
